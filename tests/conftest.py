"""
pytest configuration and shared fixtures for cmake-new tests.

Fixtures
--------
isolated_home : Path
    Autouse. Points HOME and CMAKE_NEW_CONFIG into the test's tmp_path so
    no test ever reads the developer's real config file.

output_dir : Path
    An empty directory to generate projects into.

write_config : Callable
    Writes a user config file and returns its path.

fake_vcs : FakeVcs
    A VcsInitializer that records calls instead of running git.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from cmake_new.vcs import VcsResult


class FakeVcs:
    """Records ``init`` calls; succeeds unless told otherwise."""

    def __init__(self, success: bool = True, message: str = "ok") -> None:
        self.calls: list[tuple[Path, str | None]] = []
        self.success = success
        self.message = message

    def init(self, path: Path, branch: str | None = None) -> VcsResult:
        self.calls.append((path, branch))
        return VcsResult(self.success, self.message)


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the real user config out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    monkeypatch.delenv("CMAKE_NEW_CONFIG", raising=False)
    return home


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Create an empty directory for generated projects."""
    out = tmp_path / "projects"
    out.mkdir()
    return out


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[Any], Path]:
    """
    Return a helper that writes a config file.

    Dicts and lists are dumped as JSON; strings are written verbatim so
    tests can produce malformed files.
    """
    def _write(content: Any, name: str = "cmake-new.json") -> Path:
        path = tmp_path / name
        if isinstance(content, str):
            path.write_text(content, encoding="utf-8")
        else:
            path.write_text(json.dumps(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fake_vcs() -> FakeVcs:
    return FakeVcs()


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests requiring external executables (git)"
    )
