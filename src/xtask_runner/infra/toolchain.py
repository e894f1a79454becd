"""Rust toolchain probing."""

from __future__ import annotations

import os
from collections.abc import Mapping

from xtask_runner.core.models import ToolInvocation
from xtask_runner.core.protocols import ProcessRunner


class RustToolchain:
    """Concrete :class:`ToolchainProbe` based on ``rustc --version``.

    ``cargo +nightly xtask ...`` exports ``RUSTUP_TOOLCHAIN``, which is
    consulted first so that no extra process is needed in that case.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        *,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._runner = runner
        self._environ = os.environ if environ is None else environ

    def version(self) -> str:
        """Return the ``rustc --version`` line, e.g. ``rustc 1.83.0 (90b35a623 2024-11-26)``."""
        return self._runner.capture(ToolInvocation("rustc", ("--version",))).strip()

    def is_nightly(self) -> bool:
        if "nightly" in self._environ.get("RUSTUP_TOOLCHAIN", ""):
            return True
        return "nightly" in self.version()
