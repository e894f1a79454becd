"""Subprocess-backed implementation of :class:`~xtask_runner.core.protocols.ProcessRunner`.

This module is the **only** place in the codebase that launches
external processes.  Launch failures are caught here and re-raised as
:class:`~xtask_runner.exceptions.ToolNotFoundError`.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import Any

from xtask_runner.core.models import ToolInvocation
from xtask_runner.exceptions import CommandFailedError, ToolNotFoundError
from xtask_runner.infra.tool_detector import install_hint

logger = logging.getLogger(__name__)


class SubprocessRunner:
    """Concrete :class:`ProcessRunner` backed by :func:`subprocess.run`.

    Satisfies the protocol structurally — no explicit inheritance.

    Parameters
    ----------
    cwd:
        Working directory for invocations that do not set their own.
    """

    def __init__(self, *, cwd: Path | None = None) -> None:
        self._cwd = cwd

    def _build_kwargs(self, invocation: ToolInvocation) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"check": False}
        if invocation.env:
            kwargs["env"] = {**os.environ, **invocation.env}
        cwd = invocation.cwd if invocation.cwd is not None else self._cwd
        if cwd is not None:
            kwargs["cwd"] = cwd
        return kwargs

    def run(self, invocation: ToolInvocation) -> int:
        """Run *invocation* with inherited stdio and return its exit code."""
        completed = self._launch(invocation)
        return completed.returncode

    def capture(self, invocation: ToolInvocation) -> str:
        """Run *invocation* and return its decoded standard output.

        Raises
        ------
        CommandFailedError
            When the command exits with a non-zero status.
        """
        completed = self._launch(
            invocation, capture_output=True, text=True, encoding="utf-8", errors="replace",
        )
        if completed.returncode != 0:
            stderr = (completed.stderr or "").strip()
            raise CommandFailedError(
                f"Failed to execute {invocation.command_line}",
                returncode=completed.returncode,
                command_line=invocation.command_line,
                hint=stderr or None,
            )
        return completed.stdout or ""

    def _launch(
        self, invocation: ToolInvocation, **extra: Any,
    ) -> subprocess.CompletedProcess[Any]:
        logger.debug("Launching: %s", invocation.command_line)
        try:
            return subprocess.run(
                [invocation.program, *invocation.args],
                **self._build_kwargs(invocation),
                **extra,
            )
        except (FileNotFoundError, PermissionError) as exc:
            raise ToolNotFoundError(
                f"Failed to execute {invocation.program}: {exc}",
                hint=install_hint(invocation.program),
            ) from exc
