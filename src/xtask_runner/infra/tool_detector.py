"""Infrastructure: executable detection and install guidance.

Locates the tools xtask-runner shells out to and provides installation
guidance when one is missing.

Rules
-----
* Detection via :func:`shutil.which` only — no subprocess.
* No automatic installation here; see :mod:`xtask_runner.core.tooling`.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import platform
import shutil
from dataclasses import dataclass
from pathlib import Path

from xtask_runner.exceptions import ToolNotFoundError

# Binaries provided by cargo-installed crates, mapped to their crate.
CRATE_BINARIES: dict[str, str] = {
    "cargo-audit": "cargo-audit",
    "cargo-deny": "cargo-deny",
    "cargo-udeps": "cargo-udeps",
    "typos": "typos-cli",
}

_TOOLCHAIN_BINARIES: frozenset[str] = frozenset({"cargo", "rustc", "rustup"})


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolStatus:
    """Result of an executable detection probe.

    Attributes
    ----------
    name : str
        Binary name that was looked up.
    found : bool
        Whether the binary was located on PATH.
    path : Path | None
        Absolute path to the binary, or ``None``.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing the tool.  Empty when
        it is already present.
    """

    name: str
    found: bool
    path: Path | None
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Detection logic
# ---------------------------------------------------------------------------

def detect_tool(binary: str) -> ToolStatus:
    """Probe PATH for *binary*.

    Returns a :class:`ToolStatus` regardless of whether the tool is
    present — the caller decides whether to abort or merely warn.
    """
    result = shutil.which(binary)

    if result is not None:
        return ToolStatus(
            name=binary,
            found=True,
            path=Path(result).resolve(),
            install_commands=(),
        )

    return ToolStatus(
        name=binary,
        found=False,
        path=None,
        install_commands=install_commands_for(binary),
    )


def require_tool(binary: str) -> Path:
    """Locate *binary* or raise :class:`ToolNotFoundError`."""
    status = detect_tool(binary)
    if not status.found or status.path is None:
        raise ToolNotFoundError(
            f"'{binary}' is not installed or not on PATH.",
            hint=install_hint(binary),
        )
    return status.path


def install_hint(binary: str) -> str | None:
    """Render install guidance for *binary* as a multi-line hint."""
    commands = install_commands_for(binary)
    if not commands:
        return None
    lines = [f"Install {binary} using one of:"]
    lines.extend(f"  {cmd}" for cmd in commands)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Install guidance
# ---------------------------------------------------------------------------

def install_commands_for(binary: str) -> tuple[str, ...]:
    """Return install commands for *binary*, or ``()`` when unknown."""
    name = Path(binary).name
    if name in CRATE_BINARIES:
        return (f"cargo install {CRATE_BINARIES[name]}",)
    if name in _TOOLCHAIN_BINARIES:
        return _platform_rustup_commands()
    return ()


def _platform_rustup_commands() -> tuple[str, ...]:
    """Return rustup install commands appropriate for the current OS."""
    system = platform.system().lower()
    if system == "windows":
        return (
            "winget install Rustlang.Rustup",
            "choco install rustup.install",
        )
    if system in {"linux", "darwin"}:
        return ("curl --proto '=https' --tlsv1.2 -sSf https://sh.rustup.rs | sh",)
    return ("Please install Rust from https://rustup.rs",)
