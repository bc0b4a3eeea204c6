"""
cmake_new.vcs - Version Control Initialization
==============================================

The generator talks to version control only through the ``VcsInitializer``
protocol, so tests can pass a fake and never spawn git.

``GitInitializer`` runs::

    git init [--initial-branch=<branch>]
    git add .

in the new project directory. The outcome is reported, not enforced: a
missing git executable or a failing command produces an unsuccessful
``VcsResult`` and the project is still usable.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol


if TYPE_CHECKING:
    from pathlib import Path


@dataclass
class VcsResult:
    """
    Outcome of a repository initialization.

    Attributes
    ----------
    success : bool
        True if every command exited with status 0.

    message : str
        Short description for the user, e.g. the failing command's stderr.
    """

    success: bool
    message: str = ""


class VcsInitializer(Protocol):
    """Anything that can turn a directory into a repository."""

    def init(self, path: Path, branch: str | None = None) -> VcsResult:
        ...


class GitInitializer:
    """
    ``VcsInitializer`` backed by the ``git`` executable.

    Parameters
    ----------
    executable : str, default="git"
        Name or path of the git binary.
    """

    def __init__(self, executable: str = "git") -> None:
        self.executable = executable

    def init_command(self, branch: str | None = None) -> list[str]:
        command = [self.executable, "init"]
        if branch:
            command.append(f"--initial-branch={branch}")
        return command

    def init(self, path: Path, branch: str | None = None) -> VcsResult:
        """
        Initialize a repository in ``path`` and stage every file.

        Never raises for git failures; see ``VcsResult``.
        """
        commands = [
            self.init_command(branch),
            [self.executable, "add", "."],
        ]

        for command in commands:
            try:
                completed = subprocess.run(
                    command,
                    cwd=path,
                    check=False,
                    capture_output=True,
                    text=True,
                )
            except FileNotFoundError:
                return VcsResult(False, f"{self.executable} is not installed")

            if completed.returncode != 0:
                detail = completed.stderr.strip() or f"exit status {completed.returncode}"
                return VcsResult(False, f"'{' '.join(command)}' failed: {detail}")

        if branch:
            return VcsResult(True, f"Initialized git repository on branch '{branch}'")
        return VcsResult(True, "Initialized git repository")
