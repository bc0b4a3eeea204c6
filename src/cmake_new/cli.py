"""
cmake_new.cli - Command Line Interface
======================================

The ``cmake-new`` command, built with Typer.

    cmake-new <project> [options]

Every option can also come from the user config file (see config.py);
flags given on the command line always win. Boolean flags have a
``--no-`` form so a config file default can be switched off for one run.

Usage Examples
--------------
C++20 executable with Ninja (the defaults):
    $ cmake-new demo

C library with Makefiles, VS Code tasks and a git repository:
    $ cmake-new mylib -l C -t lib -g "Unix Makefiles" --vscode --git

Show help:
    $ cmake-new --help

Exit Codes
----------
0 on success, 1 on any usage error (missing or invalid project name,
unsupported language, unknown project type), an existing target
directory, or a filesystem failure.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from cmake_new import __version__
from cmake_new.config import CONFIG_ENV_VAR, build_config, resolve_options
from cmake_new.errors import PreexistingTargetError, UsageError
from cmake_new.generator import create_project


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="cmake-new",
    help="Scaffold a new CMake project.",
    rich_markup_mode="rich",
    add_completion=False,
)

console = Console()


# =============================================================================
# Helpers
# =============================================================================

def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold green]cmake-new[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]CMake project scaffolder[/]",
            border_style="green",
        ))
        raise typer.Exit()


def fail(ctx: typer.Context, message: str) -> typer.Exit:
    """Print an error and the usage line; return the Exit to raise."""
    rprint(f"[red]Error:[/] {escape(message)}")
    console.print(ctx.get_usage(), markup=False, highlight=False)
    return typer.Exit(1)


# =============================================================================
# Main Command
# =============================================================================

@app.command()
def main(
    ctx: typer.Context,
    project: Annotated[
        str | None,
        typer.Argument(
            help="Name of the project to create ([A-Za-z0-9_-]+)",
            show_default=False,
        ),
    ] = None,
    lang: Annotated[
        str | None,
        typer.Option(
            "--lang",
            "-l",
            help="Language: C, C99, C++, C++14, C++17, C++20 (default)",
        ),
    ] = None,
    generator: Annotated[
        str | None,
        typer.Option(
            "--generator",
            "-g",
            help="CMake generator, e.g. Ninja (default) or 'Unix Makefiles'",
        ),
    ] = None,
    project_type: Annotated[
        str | None,
        typer.Option(
            "--type",
            "-t",
            help="Project type: exe (default) or lib",
        ),
    ] = None,
    vscode: Annotated[
        bool | None,
        typer.Option(
            "--vscode/--no-vscode",
            help="Generate .vscode/tasks.json",
            show_default=False,
        ),
    ] = None,
    git: Annotated[
        bool | None,
        typer.Option(
            "--git/--no-git",
            help="Write .gitignore and initialize a git repository",
            show_default=False,
        ),
    ] = None,
    branch: Annotated[
        str | None,
        typer.Option(
            "--branch",
            "-b",
            help="Initial git branch (default: git's own default)",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory to create the project in (default: current directory)",
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            envvar=CONFIG_ENV_VAR,
            help="User config file (default: platform config location)",
        ),
    ] = None,
    no_config: Annotated[
        bool,
        typer.Option(
            "--no-config",
            help="Ignore the user config file",
        ),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    Create a new CMake project.

    Generates [cyan]src/main.c[/] or [cyan]src/main.cpp[/],
    [cyan]CMakeLists.txt[/], [cyan]CMakePresets.json[/] and
    [cyan]README.md[/], plus [cyan].vscode/tasks.json[/] with --vscode
    and a git repository with --git.

    [bold]Examples:[/]

        cmake-new demo

        cmake-new tool --lang C --vscode

        cmake-new mylib --lang C++17 --type lib --git --branch main
    """
    resolution = resolve_options(
        {
            "lang": lang,
            "generator": generator,
            "project_type": project_type,
            "vscode_tasks": vscode,
            "git": git,
            "git_branch": branch,
        },
        config_file,
        use_config_file=not no_config,
    )

    for warning in resolution.warnings:
        rprint(f"[yellow]Warning:[/] {escape(warning)}")

    try:
        config = build_config(project, resolution.options, output_dir)
    except UsageError as e:
        raise fail(ctx, str(e)) from None

    try:
        create_project(config)
    except (UsageError, PreexistingTargetError) as e:
        raise fail(ctx, str(e)) from None
    except OSError as e:
        rprint(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1) from None


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
