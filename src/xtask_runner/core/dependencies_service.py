"""Core dependencies service — drives the ``xtask dependencies`` family.

``deny`` checks licences, advisories and bans with ``cargo-deny``;
``unused`` looks for unused dependencies with ``cargo-udeps``, which
only works on a nightly toolchain.
"""

from __future__ import annotations

import logging

from xtask_runner.core.models import DependenciesCommand, ToolInvocation
from xtask_runner.core.protocols import ProcessRunner, Reporter, ToolchainProbe
from xtask_runner.core.tooling import ToolInstaller
from xtask_runner.exceptions import CommandFailedError

logger = logging.getLogger(__name__)

CARGO_NIGHTLY_MSG: str = (
    "You must use 'cargo +nightly' to run nightly checks.\n"
    "Install a nightly toolchain with 'rustup toolchain install nightly'."
)


class DependenciesService:
    """Stateless service behind ``xtask dependencies``."""

    def __init__(
        self,
        runner: ProcessRunner,
        installer: ToolInstaller,
        toolchain: ToolchainProbe,
        reporter: Reporter,
        *,
        cargo: str = "cargo",
    ) -> None:
        self._runner = runner
        self._installer = installer
        self._toolchain = toolchain
        self._reporter = reporter
        self._cargo = cargo

    def handle(self, command: DependenciesCommand) -> None:
        """Run *command*; ``all`` runs every other command in declared order.

        Raises
        ------
        CommandFailedError
            When an invoked tool exits with a non-zero status.
        """
        if command is DependenciesCommand.DENY:
            self.run_cargo_deny()
        elif command is DependenciesCommand.UNUSED:
            self.run_cargo_udeps()
        else:
            for sub in DependenciesCommand:
                if sub is not DependenciesCommand.ALL:
                    self.handle(sub)

    def run_cargo_deny(self) -> None:
        self._installer.ensure_installed("cargo-deny")
        with self._reporter.group("Cargo: run deny checks"):
            self._run(
                ToolInvocation(self._cargo, ("deny", "check")),
                "Some dependencies don't meet the requirements!",
            )

    def run_cargo_udeps(self) -> None:
        """Run ``cargo udeps``; on a stable toolchain log why and carry on."""
        if not self._toolchain.is_nightly():
            logger.error(CARGO_NIGHTLY_MSG)
            return

        self._installer.ensure_installed("cargo-udeps")
        with self._reporter.group("Cargo: run unused dependencies checks"):
            self._run(
                ToolInvocation(self._cargo, ("udeps",)),
                "Unused dependencies found!",
            )

    def _run(self, invocation: ToolInvocation, failure: str) -> None:
        logger.info("Command line: %s", invocation.command_line)
        code = self._runner.run(invocation)
        if code != 0:
            raise CommandFailedError(
                failure,
                returncode=code,
                command_line=invocation.command_line,
            )
