"""
cmake_new.models - Pydantic Models for Project Configuration
============================================================

This module defines the data models used throughout cmake-new. Pydantic
gives us validation of user input, cheap immutable copies, and clear error
messages when the persisted config file contains garbage.

Architecture Notes
------------------
Configuration flows through three models:

    GeneratorOptions   raw option tokens, layered defaults → file → flags
          │
          ▼  (cmake_new.config.build_config)
    ResolvedConfig     validated, enum-typed, immutable
          │
          ▼
    renderer / generator

    UserConfigFile     schema of the persisted JSON file, converted into
                       a plain override mapping for GeneratorOptions

Usage Example
-------------
>>> from cmake_new.models import GeneratorOptions
>>> options = GeneratorOptions().override({"lang": "C", "git": None})
>>> options.lang
'C'
>>> options.git
False
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from cmake_new.errors import InvalidProjectNameError


# =============================================================================
# Constants
# =============================================================================

PROJECT_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")

DEFAULT_LANG = "C++20"
DEFAULT_GENERATOR = "Ninja"
DEFAULT_PROJECT_TYPE = "exe"


def validate_project_name(name: str) -> str:
    """
    Check a project name against ``[A-Za-z0-9_-]+``.

    The name is used verbatim as a directory name and as the CMake target,
    so it is neither normalized nor lowercased.

    Raises
    ------
    InvalidProjectNameError
        If the name is empty or contains any other character.
    """
    if not PROJECT_NAME_PATTERN.fullmatch(name):
        raise InvalidProjectNameError(name)
    return name


# =============================================================================
# Enumerations
# =============================================================================

class Language(str, Enum):
    """
    Canonical CMake project languages.

    The values are exactly what goes into ``project(... LANGUAGES ...)``.
    """

    C = "C"
    CXX = "CXX"

    @property
    def source_extension(self) -> str:
        """File extension of the starter source file."""
        return "c" if self is Language.C else "cpp"

    @property
    def display_name(self) -> str:
        return "C" if self is Language.C else "C++"


class CxxStandard(str, Enum):
    """C++ standard levels that get an explicit ``CXX_STANDARD`` property."""

    CXX14 = "14"
    CXX17 = "17"
    CXX20 = "20"


class ProjectType(str, Enum):
    """
    Kind of CMake target to generate.

    Attributes
    ----------
    EXE : str
        An executable target (``add_executable``).

    LIB : str
        A library target (``add_library``).
    """

    EXE = "exe"
    LIB = "lib"

    @property
    def description(self) -> str:
        descriptions = {
            ProjectType.EXE: "Executable",
            ProjectType.LIB: "Library",
        }
        return descriptions[self]

    @property
    def cmake_command(self) -> str:
        """CMake command that declares a target of this type."""
        commands = {
            ProjectType.EXE: "add_executable",
            ProjectType.LIB: "add_library",
        }
        return commands[self]


# =============================================================================
# Option Layering
# =============================================================================

class GeneratorOptions(BaseModel):
    """
    Raw generation options before validation.

    Values are kept as the user typed them (``lang="c++17"``,
    ``project_type="LIB"``); mapping them to enums happens in
    ``cmake_new.config.build_config``, which also rejects empty tokens.
    Instances are frozen: every layer produces a new value through
    ``override``.

    Attributes
    ----------
    lang : str
        Language token, e.g. ``C``, ``C++17``, ``cxx``.

    generator : str
        CMake generator name, passed through to the presets unchanged.

    project_type : str
        Project type token, ``exe`` or ``lib``.

    vscode_tasks : bool
        Generate ``.vscode/tasks.json``.

    git : bool
        Write a ``.gitignore`` and initialize a git repository.

    git_branch : str | None
        Initial branch name for ``git init``; git's own default when None.
    """

    model_config = ConfigDict(frozen=True)

    lang: str = DEFAULT_LANG
    generator: str = DEFAULT_GENERATOR
    project_type: str = DEFAULT_PROJECT_TYPE
    vscode_tasks: bool = False
    git: bool = False
    git_branch: str | None = None

    def override(self, overrides: Mapping[str, Any]) -> GeneratorOptions:
        """
        Return a copy with every non-None entry of ``overrides`` applied.

        ``None`` means "not given by this layer", so the value from the
        previous layer survives.

        Raises
        ------
        pydantic.ValidationError
            If an override has the wrong type.
        """
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        return GeneratorOptions.model_validate({**self.model_dump(), **updates})


class UserConfigFile(BaseModel):
    """
    Schema of the persisted user config file.

    All keys are optional and unknown keys are ignored. ``branch`` is an
    older spelling of ``git_branch``; when both are present ``git_branch``
    wins.

    Examples
    --------
    >>> UserConfigFile.model_validate({"type": "lib", "branch": "main"}).to_overrides()
    {'project_type': 'lib', 'git_branch': 'main'}
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, strict=True)

    vscode_tasks: bool | None = None
    git: bool | None = None
    lang: str | None = Field(default=None, min_length=1)
    generator: str | None = Field(default=None, min_length=1)
    project_type: str | None = Field(default=None, alias="type", min_length=1)
    git_branch: str | None = None
    branch: str | None = None

    def to_overrides(self) -> dict[str, Any]:
        """Mapping of the keys that were actually set, ready for ``override``."""
        data = self.model_dump(exclude_none=True, exclude={"branch"})
        if self.git_branch is None and self.branch is not None:
            data["git_branch"] = self.branch
        return data


# =============================================================================
# Resolved Configuration
# =============================================================================

class ResolvedConfig(BaseModel):
    """
    Final, validated configuration for one generator run.

    This is the only object the renderer and the generator consume. It
    does not keep the raw language token, so ``"C++20"`` and ``"c++20"``
    produce equal instances.

    Attributes
    ----------
    name : str
        Project name, directory name, and CMake target name.

    language : Language
        Canonical language.

    standard : CxxStandard | None
        Explicit C++ standard; always None for C.

    generator : str
        CMake generator written into the presets.

    project_type : ProjectType
        Executable or library.

    vscode_tasks : bool
        Whether ``.vscode/tasks.json`` is generated.

    init_git : bool
        Whether ``.gitignore`` is written and git is initialized.

    git_branch : str | None
        Initial branch for ``git init``.

    output_dir : Path
        Directory the project directory is created in.

    Examples
    --------
    >>> config = ResolvedConfig(name="demo", language=Language.CXX,
    ...                         standard=CxxStandard.CXX17,
    ...                         project_type=ProjectType.LIB)
    >>> config.source_path
    PosixPath('src/main.cpp')
    >>> config.language_label
    'C++17'
    """

    model_config = ConfigDict(frozen=True)

    name: str
    language: Language = Language.CXX
    standard: CxxStandard | None = None
    generator: str = Field(default=DEFAULT_GENERATOR, min_length=1)
    project_type: ProjectType = ProjectType.EXE
    vscode_tasks: bool = False
    init_git: bool = False
    git_branch: str | None = None
    output_dir: Path = Field(default_factory=Path.cwd)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return validate_project_name(v)

    @field_validator("git_branch")
    @classmethod
    def normalize_branch(cls, v: str | None) -> str | None:
        # An empty branch means "use git's default"
        if v is None:
            return None
        v = v.strip()
        return v or None

    @property
    def project_dir(self) -> Path:
        return self.output_dir / self.name

    @property
    def source_extension(self) -> str:
        return self.language.source_extension

    @property
    def source_path(self) -> Path:
        """Starter source file, relative to the project root."""
        return Path("src") / f"main.{self.source_extension}"

    @property
    def symbol_prefix(self) -> str:
        """
        The project name as a C identifier, for library starter functions.

        >>> ResolvedConfig(name="my-lib").symbol_prefix
        'my_lib'
        >>> ResolvedConfig(name="3d").symbol_prefix
        '_3d'
        """
        prefix = self.name.replace("-", "_")
        if prefix[0].isdigit():
            prefix = f"_{prefix}"
        return prefix

    @property
    def language_label(self) -> str:
        """Human-readable language, e.g. ``C``, ``C++``, ``C++20``."""
        label = self.language.display_name
        if self.standard is not None:
            label += self.standard.value
        return label
