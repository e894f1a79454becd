"""Read the crates installed with ``cargo install``."""

from __future__ import annotations

import re

from xtask_runner.core.models import InstalledCrate, ToolInvocation
from xtask_runner.core.protocols import ProcessRunner

# "typos-cli v1.29.4:" or "foo v0.1.0 (/path/to/foo):"
_HEADER = re.compile(r"^(?P<name>\S+) v(?P<version>[^\s:]+)(?: \(.*\))?:$")


class CargoInstallRegistry:
    """Concrete :class:`InstalledCratesProvider` over ``cargo install --list``."""

    def __init__(self, runner: ProcessRunner, *, cargo: str = "cargo") -> None:
        self._runner = runner
        self._cargo = cargo

    def installed_crates(self) -> dict[str, InstalledCrate]:
        raw = self._runner.capture(ToolInvocation(self._cargo, ("install", "--list")))
        return parse_install_list(raw)


def parse_install_list(raw: str) -> dict[str, InstalledCrate]:
    """Parse ``cargo install --list`` output into crates keyed by name."""
    crates: dict[str, InstalledCrate] = {}
    name: str | None = None
    version = ""
    binaries: list[str] = []

    def _flush() -> None:
        if name is not None:
            crates[name] = InstalledCrate(name, version, tuple(binaries))

    for line in raw.splitlines():
        if not line.strip():
            continue
        if line[0].isspace():
            if name is not None:
                binaries.append(line.strip())
            continue
        match = _HEADER.match(line.strip())
        if match is None:
            continue
        _flush()
        name, version, binaries = match["name"], match["version"], []
    _flush()
    return crates
