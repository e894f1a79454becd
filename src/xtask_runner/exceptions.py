"""Custom exception hierarchy for xtask-runner.

All exceptions that cross layer boundaries must inherit from
:class:`XtaskError`.  Raw ``OSError`` / ``subprocess`` failures must
never propagate beyond the infrastructure layer — they are caught there
and re-raised as a typed subclass defined here.

Hierarchy
---------
XtaskError
├── ToolNotFoundError
├── CommandFailedError
│   └── ToolInstallError
├── WorkspaceMetadataError
├── PromptCancelledError
└── EnvironmentError
"""

from __future__ import annotations


class XtaskError(Exception):
    """Base exception for all xtask-runner errors.

    Every user-visible error condition maps to a subclass of this
    exception so that the CLI error boundary can render a clean message
    without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- External processes ----------------------------------------------------

class ToolNotFoundError(XtaskError):
    """Raised when an external executable cannot be launched."""


class CommandFailedError(XtaskError):
    """Raised when an external tool exits with a non-zero status."""

    def __init__(
        self,
        message: str,
        *,
        returncode: int,
        command_line: str = "",
        hint: str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.returncode: int = returncode
        self.command_line: str = command_line


class ToolInstallError(CommandFailedError):
    """Raised when ``cargo install`` fails to provide a required crate."""


# --- Workspace -------------------------------------------------------------

class WorkspaceMetadataError(XtaskError):
    """Raised when ``cargo metadata`` output cannot be interpreted."""


# --- Interaction -----------------------------------------------------------

class PromptCancelledError(XtaskError):
    """Raised when a confirmation prompt is dismissed without an answer."""


# --- Environment / tooling -------------------------------------------------

class EnvironmentError(XtaskError):
    """Raised when a required runtime dependency is not available."""
