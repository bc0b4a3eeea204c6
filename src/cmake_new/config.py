"""
cmake_new.config - Configuration Resolution
===========================================

Builds the ``ResolvedConfig`` for a run from three layers, later layers
winning:

    1. built-in defaults      (C++20, Ninja, exe)
    2. user config file       (JSON, platform-specific location)
    3. command-line flags

A broken config file is never fatal: ``resolve_options`` reports it as a
warning and continues with the defaults. Input validation then runs in a
fixed order (name, language, project type) so the first problem the user
sees is always the same one, and nothing has touched the disk yet.

Config File Location
--------------------
- Windows: ``%APPDATA%/cmake-new/cmake-new.json``
- elsewhere: ``~/.config/cmake-new.json``

The ``CMAKE_NEW_CONFIG`` environment variable (or ``--config``) points the
CLI somewhere else.

Example File
------------
.. code-block:: json

    {
        "lang": "C++17",
        "generator": "Unix Makefiles",
        "vscode_tasks": true,
        "git": true,
        "git_branch": "main"
    }
"""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from cmake_new.errors import (
    ConfigFileError,
    MissingGeneratorError,
    MissingProjectNameError,
)
from cmake_new.languages import map_language, map_project_type
from cmake_new.models import (
    GeneratorOptions,
    ResolvedConfig,
    UserConfigFile,
    validate_project_name,
)


CONFIG_DIR_NAME = "cmake-new"
CONFIG_FILE_NAME = "cmake-new.json"
CONFIG_ENV_VAR = "CMAKE_NEW_CONFIG"


# =============================================================================
# Result Data Classes
# =============================================================================

@dataclass
class OptionResolution:
    """
    Outcome of layering defaults, config file, and flags.

    Attributes
    ----------
    options : GeneratorOptions
        The merged raw options.

    config_path : Path | None
        The config file that was consulted, if any.

    warnings : list[str]
        Non-fatal problems, e.g. a malformed config file.
    """

    options: GeneratorOptions
    config_path: Path | None = None
    warnings: list[str] = field(default_factory=list)


# =============================================================================
# Config File
# =============================================================================

def default_config_path(
    *,
    windows: bool | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """
    Platform-specific location of the user config file.

    Parameters
    ----------
    windows : bool | None
        Force the Windows or POSIX layout; detected from ``os.name`` when None.

    environ : Mapping[str, str] | None
        Environment to read ``APPDATA`` from; ``os.environ`` when None.
    """
    if windows is None:
        windows = os.name == "nt"
    if environ is None:
        environ = os.environ

    if windows:
        appdata = environ.get("APPDATA")
        base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
        return base / CONFIG_DIR_NAME / CONFIG_FILE_NAME

    return Path.home() / ".config" / CONFIG_FILE_NAME


def load_user_config(path: Path) -> dict[str, Any]:
    """
    Read the overrides stored in a user config file.

    A missing file is not an error and yields no overrides.

    Returns
    -------
    dict[str, Any]
        ``GeneratorOptions`` field names mapped to the configured values.

    Raises
    ------
    ConfigFileError
        If the file is unreadable, is not UTF-8 encoded, is not valid JSON,
        is not a JSON object, or holds a value of the wrong type or an empty
        string.
    """
    if not path.is_file():
        return {}

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ConfigFileError(path, f"not valid UTF-8 ({e.reason})") from e
    except OSError as e:
        raise ConfigFileError(path, str(e)) from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigFileError(path, f"invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise ConfigFileError(path, "expected a JSON object at the top level")

    try:
        parsed = UserConfigFile.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigFileError(path, problems) from e

    return parsed.to_overrides()


# =============================================================================
# Layering
# =============================================================================

def resolve_options(
    cli_overrides: Mapping[str, Any] | None = None,
    config_path: Path | None = None,
    *,
    use_config_file: bool = True,
) -> OptionResolution:
    """
    Layer defaults, the user config file, and command-line flags.

    Parameters
    ----------
    cli_overrides : Mapping[str, Any] | None
        Flag values keyed by ``GeneratorOptions`` field; None entries mean
        the flag was not given.

    config_path : Path | None
        Config file to read; ``default_config_path()`` when None.

    use_config_file : bool, default=True
        Skip the config file layer entirely when False.

    Returns
    -------
    OptionResolution
        Merged options plus any warnings.
    """
    options = GeneratorOptions()
    resolution = OptionResolution(options=options)

    if use_config_file:
        path = config_path if config_path is not None else default_config_path()
        resolution.config_path = path
        try:
            options = options.override(load_user_config(path))
        except ConfigFileError as e:
            resolution.warnings.append(str(e))

    if cli_overrides:
        options = options.override(cli_overrides)

    resolution.options = options
    return resolution


# =============================================================================
# Validation
# =============================================================================

def build_config(
    name: str | None,
    options: GeneratorOptions,
    output_dir: Path | None = None,
) -> ResolvedConfig:
    """
    Validate the merged options and produce the final configuration.

    Checks run in this order and stop at the first failure: project name
    present, project name characters, language, project type, generator.

    Raises
    ------
    MissingProjectNameError
    InvalidProjectNameError
    UnsupportedLanguageError
    UnknownProjectTypeError
    MissingGeneratorError
    """
    if not name:
        raise MissingProjectNameError()
    validate_project_name(name)

    language, standard = map_language(options.lang)
    project_type = map_project_type(options.project_type)
    if not options.generator.strip():
        raise MissingGeneratorError()

    return ResolvedConfig(
        name=name,
        language=language,
        standard=standard,
        generator=options.generator,
        project_type=project_type,
        vscode_tasks=options.vscode_tasks,
        init_git=options.git,
        git_branch=options.git_branch,
        output_dir=output_dir if output_dir is not None else Path.cwd(),
    )


def resolve_config(
    name: str | None,
    cli_overrides: Mapping[str, Any] | None = None,
    *,
    config_path: Path | None = None,
    use_config_file: bool = True,
    output_dir: Path | None = None,
) -> tuple[ResolvedConfig, list[str]]:
    """
    Resolve options and validate them in one step.

    Returns
    -------
    tuple[ResolvedConfig, list[str]]
        The configuration and the warnings collected while resolving it.
    """
    resolution = resolve_options(
        cli_overrides,
        config_path,
        use_config_file=use_config_file,
    )
    config = build_config(name, resolution.options, output_dir)
    return config, resolution.warnings
