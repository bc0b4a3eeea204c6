"""
cmake_new.errors - Exception Taxonomy
=====================================

Every failure cmake-new reports to the user derives from ``CmakeNewError``.

    CmakeNewError
    ├── UsageError (also a ValueError)
    │   ├── MissingProjectNameError
    │   ├── InvalidProjectNameError
    │   ├── UnsupportedLanguageError
    │   ├── UnknownProjectTypeError
    │   └── MissingGeneratorError
    ├── ConfigFileError
    └── PreexistingTargetError (also a FileExistsError)

Usage errors are raised before anything is written to disk. A
``ConfigFileError`` never reaches the user as a failure: the resolver turns
it into a warning and keeps going. Plain ``OSError``s raised while writing
files are deliberately not wrapped; they leave whatever was already written
in place.
"""

from __future__ import annotations


class CmakeNewError(Exception):
    """Base class for all cmake-new errors."""


class UsageError(CmakeNewError, ValueError):
    """Invalid user input. Always fatal, never touches the filesystem."""


class MissingProjectNameError(UsageError):
    def __init__(self) -> None:
        super().__init__("Project name required")


class InvalidProjectNameError(UsageError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Invalid project name '{name}'. Names may contain only letters, "
            "numbers, hyphens, and underscores."
        )


class UnsupportedLanguageError(UsageError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unsupported language: {token}")


class UnknownProjectTypeError(UsageError):
    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"Unknown project type: {token}")


class MissingGeneratorError(UsageError):
    def __init__(self) -> None:
        super().__init__("CMake generator name required")


class ConfigFileError(CmakeNewError):
    """The persisted user config file could not be used."""

    def __init__(self, path: object, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Ignoring config file {path}: {reason}")


class PreexistingTargetError(CmakeNewError, FileExistsError):
    """The project directory already exists; it is never overwritten."""

    def __init__(self, path: object) -> None:
        self.path = path
        super().__init__(
            f"Directory '{path}' already exists. "
            "Use a different name or remove the existing directory."
        )
