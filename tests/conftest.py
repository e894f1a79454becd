"""Shared pytest fixtures and configuration for the xtask-runner test suite.

Guidelines
----------
* No test launches a real process — runners are mocked at the
  ``ProcessRunner`` boundary or ``subprocess.run`` is patched.
* Core tests use plain test doubles, never infra adapters.
* Tests must not depend on the local Rust toolchain.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from xtask_runner.core.models import WorkspaceMember, WorkspaceMemberType
from xtask_runner.core.tooling import ToolInstaller

CRATES: tuple[str, ...] = ("core", "cli", "macros")
EXAMPLES: tuple[str, ...] = ("hello", "mnist")


class FakeWorkspace:
    """In-memory :class:`WorkspaceProvider` with fixed members."""

    def __init__(
        self,
        crates: tuple[str, ...] = CRATES,
        examples: tuple[str, ...] = EXAMPLES,
    ) -> None:
        self._members = [
            WorkspaceMember(name, Path("crates") / name, WorkspaceMemberType.CRATE)
            for name in crates
        ] + [
            WorkspaceMember(name, Path("examples") / name, WorkspaceMemberType.EXAMPLE)
            for name in examples
        ]
        self.calls: list[WorkspaceMemberType] = []

    def members(self, kind: WorkspaceMemberType) -> list[WorkspaceMember]:
        self.calls.append(kind)
        return [member for member in self._members if member.kind is kind]


@pytest.fixture
def runner() -> MagicMock:
    """Process runner whose every invocation succeeds."""
    mock = MagicMock()
    mock.run.return_value = 0
    mock.capture.return_value = ""
    return mock


@pytest.fixture
def reporter() -> MagicMock:
    return MagicMock()


@pytest.fixture
def prompter() -> MagicMock:
    """Prompter that answers yes."""
    mock = MagicMock()
    mock.confirm.return_value = True
    return mock


@pytest.fixture
def installer() -> MagicMock:
    return MagicMock(spec=ToolInstaller)


@pytest.fixture
def workspace() -> FakeWorkspace:
    return FakeWorkspace()


def command_lines(runner: MagicMock) -> list[str]:
    """Return the command lines passed to ``runner.run`` in call order."""
    return [c.args[0].command_line for c in runner.run.call_args_list]
