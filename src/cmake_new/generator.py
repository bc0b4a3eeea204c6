"""
cmake_new.generator - Project Generation Pipeline
=================================================

This module turns a ``ResolvedConfig`` into a project on disk.

Architecture
------------
The generator follows a pipeline pattern:

    1. Render every document (pure, see renderer.py)
    2. Create the directory structure (refuses an existing target)
    3. Write files
    4. Initialize git (optional, fire-and-forget)
    5. Print the summary

Rendering happens before anything is created, so a template problem never
leaves a half-made project behind. Writing, however, is not atomic: if the
disk fills up or a permission error occurs in step 2 or 3, the files
written so far stay where they are and the error propagates to the caller.
There is no rollback.

Usage Example
-------------
>>> from cmake_new.config import resolve_config
>>> config, _ = resolve_config("demo", {"lang": "C++17", "project_type": "lib"})
>>> result = create_project(config)
>>> result.project_path.name
'demo'

See Also
--------
- config.py: How the ResolvedConfig is built
- renderer.py: Document contents
- vcs.py: Repository initialization
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel

from cmake_new.errors import PreexistingTargetError
from cmake_new.models import ProjectType, ResolvedConfig
from cmake_new.renderer import render_all
from cmake_new.vcs import GitInitializer


if TYPE_CHECKING:
    from cmake_new.vcs import VcsInitializer


# =============================================================================
# Module-Level Configuration
# =============================================================================

console = Console()

CMAKE_DOCS_URL = (
    "https://cmake.org/cmake/help/book/mastering-cmake/chapter/"
    "Writing%20CMakeLists%20Files.html"
)


# =============================================================================
# Result Data Classes
# =============================================================================

@dataclass
class GenerationResult:
    """
    Result of a project generation run.

    Attributes
    ----------
    success : bool
        Whether every file was written.

    project_path : Path
        Path to the project directory.

    files_created : list[Path]
        All files that were written, in order.

    warnings : list[str]
        Non-fatal problems, e.g. git initialization failing.

    errors : list[str]
        The error that stopped generation, if any.

    vcs_initialized : bool
        Whether the VCS step reported success.
    """

    success: bool
    project_path: Path
    files_created: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    vcs_initialized: bool = False


# =============================================================================
# Directory Structure Creation
# =============================================================================

def create_directory_structure(config: ResolvedConfig) -> list[Path]:
    """
    Create the project directory structure.

        project/
        ├── src/
        └── .vscode/      (VS Code tasks only)

    Returns
    -------
    list[Path]
        Directories that were created.

    Raises
    ------
    PreexistingTargetError
        If the project directory already exists. Nothing is created.
    OSError
        If directory creation fails.
    """
    project_dir = config.project_dir
    if project_dir.exists():
        raise PreexistingTargetError(project_dir)

    created_dirs: list[Path] = []

    project_dir.mkdir(parents=True)
    created_dirs.append(project_dir)

    src_dir = project_dir / config.source_path.parent
    src_dir.mkdir()
    created_dirs.append(src_dir)

    if config.vscode_tasks:
        vscode_dir = project_dir / ".vscode"
        vscode_dir.mkdir()
        created_dirs.append(vscode_dir)

    return created_dirs


# =============================================================================
# File Writing
# =============================================================================

def write_files(project_dir: Path, files: dict[Path, str]) -> list[Path]:
    """
    Write rendered files below the project directory.

    Returns
    -------
    list[Path]
        Absolute paths of the written files.

    Raises
    ------
    OSError
        If a write fails. Files written before the failure are kept.
    """
    created_files: list[Path] = []

    for relative_path, content in files.items():
        full_path = project_dir / relative_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
        created_files.append(full_path)

    return created_files


# =============================================================================
# Summary
# =============================================================================

def summary_message(config: ResolvedConfig) -> str:
    """Plain-text summary printed after a successful run."""
    steps = [
        f"cd {config.name}",
        "cmake --preset debug",
        "cmake --build --preset debug",
    ]
    if config.project_type == ProjectType.EXE:
        steps.append(f"./build/debug/{config.name}")

    return (
        f"Project '{config.name}' created with language {config.language_label}, "
        f"generator {config.generator}, and type {config.project_type.value}.\n\n"
        "Configure, build, and run instructions:\n\n"
        + "\n".join(f"  {step}" for step in steps)
        + "\n\nSee more CMakeLists.txt commands and their definitions at\n"
        + CMAKE_DOCS_URL
    )


# =============================================================================
# Main Generation Function
# =============================================================================

def create_project(
    config: ResolvedConfig,
    *,
    vcs: VcsInitializer | None = None,
    verbose: bool = True,
) -> GenerationResult:
    """
    Create a new CMake project from the given configuration.

    Parameters
    ----------
    config : ResolvedConfig
        Validated configuration.

    vcs : VcsInitializer | None
        Repository initializer used when ``config.init_git`` is set;
        a ``GitInitializer`` when None.

    verbose : bool, default=True
        If True, display progress information to the console.

    Returns
    -------
    GenerationResult
        Result object with the created files and any warnings.

    Raises
    ------
    PreexistingTargetError
        If the project directory already exists.
    UnknownProjectTypeError
        If no starter template matches the configuration.
    OSError
        If writing fails; partial output is left on disk.
    """
    result = GenerationResult(success=False, project_path=config.project_dir)

    try:
        rendered_files = render_all(config)

        if verbose:
            console.print()
            console.print("[bold]Creating directory structure...[/]")

        created_dirs = create_directory_structure(config)

        if verbose:
            for d in created_dirs:
                console.print(f"  Created {d.relative_to(config.output_dir)}/")
            console.print()
            console.print("[bold]Writing files...[/]")

        written_files = write_files(config.project_dir, rendered_files)
        result.files_created.extend(written_files)

        if verbose:
            for f in written_files:
                console.print(f"  Created {f.relative_to(config.output_dir)}")

    except PreexistingTargetError as e:
        result.errors.append(str(e))
        raise

    except Exception as e:
        # No rollback: whatever was written stays on disk
        result.errors.append(str(e))
        if verbose and config.project_dir.exists():
            console.print("[dim]Partial project directory was left in place.[/]")
        raise

    if config.init_git:
        if verbose:
            console.print()
            console.print("[bold]Initializing git repository...[/]")

        initializer = vcs if vcs is not None else GitInitializer()
        vcs_result = initializer.init(config.project_dir, config.git_branch)
        result.vcs_initialized = vcs_result.success

        if vcs_result.success:
            if verbose:
                console.print(f"  [green]✓[/] {vcs_result.message}")
        else:
            result.warnings.append(f"Git initialization failed: {vcs_result.message}")
            if verbose:
                console.print(f"  [yellow]⚠[/] {vcs_result.message}")

    result.success = True

    if verbose:
        console.print()
        console.print(
            Panel(
                summary_message(config),
                title="[bold green]Success[/]",
                border_style="green",
            )
        )

    return result
