"""
cmake-new - CMake Project Scaffolder
====================================

A CLI tool that creates a ready-to-build CMake project: a starter C or C++
source file, ``CMakeLists.txt``, ``CMakePresets.json`` with debug and
release presets, optional VS Code tasks, a README, and optionally a git
repository.

Features
--------
- **Languages**: C and C++ (C++14, C++17, C++20)
- **Project Types**: executable or library
- **Presets**: ``debug`` and ``release`` for any CMake generator
- **Editor Support**: Configure / Build / Run tasks for VS Code
- **User Defaults**: persisted in a small JSON config file

Quick Start
-----------
```bash
cmake-new demo
cmake-new tool --lang C --vscode
cmake-new mylib --lang C++17 --type lib --git --branch main
```

Example
-------
>>> from cmake_new import create_project, resolve_config
>>> config, warnings = resolve_config("demo", {"lang": "C"})
>>> create_project(config).success
True

Architecture
------------
- ``cli``: Typer-based command line interface
- ``config``: layering of defaults, config file and flags
- ``languages``: language / standard / project type tokens
- ``renderer``: document contents (Jinja2 templates and JSON)
- ``generator``: writes the project to disk
- ``vcs``: git initialization
- ``models``: Pydantic models for configuration
- ``errors``: exception hierarchy
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__author__ = "Technical-1"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================

from cmake_new.config import resolve_config
from cmake_new.generator import create_project
from cmake_new.models import Language, ProjectType, ResolvedConfig


__all__ = [
    "Language",
    "ProjectType",
    "ResolvedConfig",
    "__author__",
    "__version__",
    "create_project",
    "resolve_config",
]
