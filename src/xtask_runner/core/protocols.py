"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure and CLI adapters must
satisfy.  Core code depends ONLY on these protocols — never on concrete
implementations — so services can be driven entirely by test doubles.
"""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol

from xtask_runner.core.models import (
    InstalledCrate,
    ToolInvocation,
    WorkspaceMember,
    WorkspaceMemberType,
)


class ProcessRunner(Protocol):
    """Contract for launching external executables."""

    def run(self, invocation: ToolInvocation) -> int:
        """Run *invocation* attached to the terminal and return its exit code.

        Raises
        ------
        ToolNotFoundError
            When the executable cannot be launched.
        """
        ...  # pragma: no cover

    def capture(self, invocation: ToolInvocation) -> str:
        """Run *invocation* and return its standard output.

        Raises
        ------
        ToolNotFoundError
            When the executable cannot be launched.
        CommandFailedError
            When the executable exits with a non-zero status.
        """
        ...  # pragma: no cover


class WorkspaceProvider(Protocol):
    """Contract for workspace member discovery."""

    def members(self, kind: WorkspaceMemberType) -> list[WorkspaceMember]:
        """Return the workspace members of *kind* in manifest order.

        Raises
        ------
        WorkspaceMetadataError
            When the workspace layout cannot be determined.
        """
        ...  # pragma: no cover


class InstalledCratesProvider(Protocol):
    def installed_crates(self) -> dict[str, InstalledCrate]:
        """Return binaries installed via ``cargo install`` keyed by crate name."""
        ...  # pragma: no cover


class ToolchainProbe(Protocol):
    def is_nightly(self) -> bool:
        """Return ``True`` when the active Rust toolchain is a nightly one."""
        ...  # pragma: no cover


class Prompter(Protocol):
    """Contract for yes/no confirmation."""

    def confirm(self, message: str) -> bool:
        """Show *message* and return the user's answer.

        Raises
        ------
        PromptCancelledError
            When the prompt is dismissed without an answer.
        """
        ...  # pragma: no cover


class Reporter(Protocol):
    """Contract for grouping console output of one step."""

    def group(self, title: str) -> AbstractContextManager[None]:
        ...  # pragma: no cover
