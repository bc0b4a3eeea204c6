"""
cmake_new.renderer - Template Rendering
=======================================

Turns a ``ResolvedConfig`` into the text of every generated document. The
renderer is pure: it returns a mapping of project-relative paths to file
contents and never touches the filesystem, so everything here can be
tested without a temporary directory.

Documents
---------
    src/main.<ext>          one of four starter templates
    CMakeLists.txt          CMakeLists.txt.j2
    CMakePresets.json       build_presets()
    .vscode/tasks.json      build_vscode_tasks()      (VS Code tasks only)
    README.md               README.md.j2
    .gitignore              gitignore.j2              (git only)

Usage Example
-------------
>>> from cmake_new.models import ResolvedConfig
>>> files = render_all(ResolvedConfig(name="demo"))
>>> sorted(str(p) for p in files)
['CMakeLists.txt', 'CMakePresets.json', 'README.md', 'src/main.cpp']
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any

from jinja2 import Environment, PackageLoader, select_autoescape

from cmake_new import __version__
from cmake_new.errors import UnknownProjectTypeError
from cmake_new.models import Language, ProjectType, ResolvedConfig


if TYPE_CHECKING:
    from collections.abc import Callable


# =============================================================================
# Module-Level Configuration
# =============================================================================

# Starter source template per (language, project type)
SOURCE_TEMPLATES: dict[tuple[Language, ProjectType], str] = {
    (Language.C, ProjectType.EXE): "main_c_exe.c.j2",
    (Language.C, ProjectType.LIB): "main_c_lib.c.j2",
    (Language.CXX, ProjectType.EXE): "main_cxx_exe.cpp.j2",
    (Language.CXX, ProjectType.LIB): "main_cxx_lib.cpp.j2",
}

# template_name -> (output_path, condition_func)
TEMPLATE_MAPPINGS: dict[str, tuple[str, Callable[[ResolvedConfig], bool] | None]] = {
    "CMakeLists.txt.j2": ("CMakeLists.txt", None),
    "README.md.j2": ("README.md", None),
    "gitignore.j2": (".gitignore", lambda c: c.init_git),
}

PRESETS_PATH = Path("CMakePresets.json")
VSCODE_TASKS_PATH = Path(".vscode") / "tasks.json"

CMAKE_MINIMUM_VERSION = (3, 15, 0)

# preset name -> CMAKE_BUILD_TYPE
BUILD_PRESETS: dict[str, str] = {
    "debug": "Debug",
    "release": "Release",
}


# =============================================================================
# Template Engine Setup
# =============================================================================

def create_jinja_env() -> Environment:
    """
    Create the Jinja2 environment for cmake-new's templates.

    Autoescaping is off because the output is C, CMake and Markdown.
    """
    return Environment(
        loader=PackageLoader("cmake_new", "templates"),
        autoescape=select_autoescape([]),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def render_template(
    env: Environment,
    template_name: str,
    config: ResolvedConfig,
) -> str:
    """
    Render a single template with the project configuration.

    Raises
    ------
    jinja2.TemplateNotFound
        If the template file doesn't exist.
    """
    template = env.get_template(template_name)
    return template.render(config=config, cmake_new_version=__version__)


# =============================================================================
# Individual Documents
# =============================================================================

def render_source(env: Environment, config: ResolvedConfig) -> str:
    """
    Render the starter source file.

    Raises
    ------
    UnknownProjectTypeError
        If no template exists for the language / project type pair.
    """
    template_name = SOURCE_TEMPLATES.get((config.language, config.project_type))
    if template_name is None:
        raise UnknownProjectTypeError(config.project_type.value)
    return render_template(env, template_name, config)


def build_presets(config: ResolvedConfig) -> dict[str, Any]:
    """
    Build the ``CMakePresets.json`` document.

    Two configure presets (``debug`` and ``release``) share the chosen
    generator and differ only in build type and binary directory; each has
    a build preset of the same name.
    """
    major, minor, patch = CMAKE_MINIMUM_VERSION
    configure_presets = [
        {
            "name": name,
            "displayName": build_type,
            "description": f"Use {build_type} configuration",
            "generator": config.generator,
            "binaryDir": f"${{sourceDir}}/build/{name}",
            "cacheVariables": {
                "CMAKE_BUILD_TYPE": build_type,
            },
        }
        for name, build_type in BUILD_PRESETS.items()
    ]
    build_presets_list = [
        {"name": name, "configurePreset": name}
        for name in BUILD_PRESETS
    ]
    return {
        "version": 3,
        "cmakeMinimumRequired": {"major": major, "minor": minor, "patch": patch},
        "configurePresets": configure_presets,
        "buildPresets": build_presets_list,
    }


def build_vscode_tasks(config: ResolvedConfig) -> dict[str, Any]:
    """
    Build the ``.vscode/tasks.json`` document.

    For each preset: a hidden ``Configure`` task, a ``Build`` task that
    depends on it, and a ``Run`` task that depends on the build and starts
    ``./build/<preset>/<name>``. A library has no binary to start, so its
    ``Run`` tasks only build and then say so.
    """
    tasks: list[dict[str, Any]] = []
    for name, build_type in BUILD_PRESETS.items():
        if config.project_type is ProjectType.EXE:
            run_command = f"./build/{name}/{config.name}"
        else:
            run_command = f'echo "{config.name} is a library; nothing to run"'
        configure = f"Configure ({build_type})"
        build = f"Build ({build_type})"
        tasks.extend([
            {
                "label": configure,
                "type": "shell",
                "command": f"cmake --preset {name}",
                "hide": True,
            },
            {
                "label": build,
                "type": "shell",
                "command": f"cmake --build --preset {name}",
                "dependsOn": [configure],
                "dependsOrder": "sequence",
                "hide": False,
            },
            {
                "label": f"Run ({build_type})",
                "type": "shell",
                "command": run_command,
                "dependsOn": [build],
                "dependsOrder": "sequence",
            },
        ])
    return {"version": "2.0.0", "tasks": tasks}


def to_json(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2) + "\n"


# =============================================================================
# All Documents
# =============================================================================

def render_all(config: ResolvedConfig) -> dict[Path, str]:
    """
    Render every document for the project.

    Parameters
    ----------
    config : ResolvedConfig
        Validated configuration.

    Returns
    -------
    dict[Path, str]
        Project-relative output paths mapped to file contents, in the order
        they should be written.

    Raises
    ------
    UnknownProjectTypeError
        If the project type has no starter template.
    """
    env = create_jinja_env()
    rendered: dict[Path, str] = {
        config.source_path: render_source(env, config),
    }

    for template_name, (output_path, condition) in TEMPLATE_MAPPINGS.items():
        if condition is not None and not condition(config):
            continue
        rendered[Path(output_path)] = render_template(env, template_name, config)

    rendered[PRESETS_PATH] = to_json(build_presets(config))

    if config.vscode_tasks:
        rendered[VSCODE_TASKS_PATH] = to_json(build_vscode_tasks(config))

    return rendered
