"""On-demand installation of cargo-installed helper tools.

Checks such as ``cargo audit`` or ``typos`` rely on crates that are not
part of a default Rust toolchain.  :class:`ToolInstaller` makes sure
they are present (at the requested version) before a service uses them.
"""

from __future__ import annotations

import logging

from xtask_runner.core.models import ToolInvocation
from xtask_runner.core.protocols import InstalledCratesProvider, ProcessRunner, Reporter
from xtask_runner.exceptions import ToolInstallError

logger = logging.getLogger(__name__)


class ToolInstaller:
    """Install crates with ``cargo install`` when they are missing.

    Parameters
    ----------
    runner:
        Used to run ``cargo install``.
    registry:
        Source of the currently installed crates.
    reporter:
        Groups the install output.
    cargo:
        Cargo executable name or path.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        registry: InstalledCratesProvider,
        reporter: Reporter,
        *,
        cargo: str = "cargo",
    ) -> None:
        self._runner = runner
        self._registry = registry
        self._reporter = reporter
        self._cargo = cargo

    @staticmethod
    def build_install_args(
        crate: str,
        *,
        features: str | None = None,
        version: str | None = None,
        locked: bool = False,
        force: bool = False,
    ) -> tuple[str, ...]:
        """Return the ``cargo`` arguments installing *crate*."""
        args: list[str] = ["install", crate]
        if locked:
            args.append("--locked")
        if version:
            args.extend(["--version", version])
        if force:
            args.append("--force")
        if features:
            args.extend(["--features", features])
        return tuple(args)

    def ensure_installed(
        self,
        crate: str,
        *,
        features: str | None = None,
        version: str | None = None,
        locked: bool = False,
    ) -> None:
        """Install *crate* unless it is already available.

        Raises
        ------
        ToolInstallError
            When ``cargo install`` exits with a non-zero status.
        """
        installed = self._registry.installed_crates().get(crate)
        if installed is not None and (version is None or installed.version == version):
            logger.debug("Crate '%s' %s is already installed", crate, installed.version)
            return

        # A different version is present: cargo refuses to overwrite it
        # without --force.
        force = installed is not None
        invocation = ToolInvocation(
            self._cargo,
            self.build_install_args(
                crate, features=features, version=version, locked=locked, force=force,
            ),
        )
        with self._reporter.group(f"Cargo: install crate '{crate}'"):
            logger.info("Command line: %s", invocation.command_line)
            code = self._runner.run(invocation)
            if code != 0:
                raise ToolInstallError(
                    f"crate '{crate}' should be installed",
                    returncode=code,
                    command_line=invocation.command_line,
                    hint=f"Try running it manually: {invocation.command_line}",
                )
