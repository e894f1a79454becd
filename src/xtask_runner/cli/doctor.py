"""``xtask doctor`` — environment diagnostics command.

Gathers information about the Rust toolchain and the helper tools the
checks rely on, and renders a Rich table summarising whether the
environment is ready.

Missing helper crates only warn: the checks install them on demand.
A missing ``cargo`` fails, since nothing can run without it.
"""

from __future__ import annotations

import platform
import sys
from pathlib import Path

from xtask_runner.cli import exit_codes
from xtask_runner.cli.console import console
from xtask_runner.exceptions import XtaskError
from xtask_runner.infra.process import SubprocessRunner
from xtask_runner.infra.tool_detector import CRATE_BINARIES, ToolStatus, detect_tool
from xtask_runner.infra.toolchain import RustToolchain
from xtask_runner.version import __version__

_OK = "[green]OK[/green]"
_WARN = "[yellow]WARN[/yellow]"
_FAIL = "[red]FAIL[/red]"


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _xtask_version_check() -> tuple[str, str, str]:
    return "xtask-runner", __version__, _OK


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = _OK if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _cargo_check(cargo: str = "cargo") -> tuple[str, str, str]:
    """Return (label, value, status) for the cargo row."""
    status = detect_tool(cargo)
    if status.found:
        return "cargo", str(status.path) if status.path else "found", _OK
    return "cargo", "not found", _FAIL


def _toolchain_check(workspace_root: Path | None = None) -> tuple[str, str, str]:
    """Return (label, value, status) for the active rustc toolchain.

    rustc is probed from *workspace_root* so a pinned
    ``rust-toolchain.toml`` there is honoured.

    A stable toolchain only warns: ``dependencies unused`` is the sole
    check needing nightly.
    """
    toolchain = RustToolchain(SubprocessRunner(cwd=workspace_root))
    try:
        version = toolchain.version()
        nightly = toolchain.is_nightly()
    except XtaskError:
        return "rustc", "not found", _FAIL
    return "rustc", version, _OK if nightly else "[yellow]WARN (stable)[/yellow]"


def _helper_checks(statuses: list[ToolStatus]) -> list[tuple[str, str, str]]:
    """Return one row per cargo-installed helper tool."""
    rows: list[tuple[str, str, str]] = []
    for status in statuses:
        if status.found:
            rows.append((status.name, str(status.path), _OK))
        else:
            rows.append((status.name, "not installed", _WARN))
    return rows


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nxtask doctor", file=sys.stderr)
    print("=" * 64, file=sys.stderr)
    print(f"{'Component':<14} {'Value':<40} {'Status':<8}", file=sys.stderr)
    print("-" * 64, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<14} {value:<40} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor(cargo: str = "cargo", workspace_root: Path | None = None) -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    helper_statuses = [detect_tool(binary) for binary in CRATE_BINARIES]
    checks = [
        _xtask_version_check(),
        _python_version_check(),
        _cargo_check(cargo),
        _toolchain_check(workspace_root),
        *_helper_checks(helper_statuses),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    try:
        from rich.table import Table
    except ModuleNotFoundError:
        _print_plain_doctor_table(checks)
    else:
        table = Table(
            title="xtask doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=14)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)
        console.print()
        console.print(table)
        console.print()

    missing = [status for status in helper_statuses if not status.found and status.install_commands]
    if missing:
        console.print("Missing helpers are installed on first use, or now with:")
        for status in missing:
            for cmd in status.install_commands:
                console.print(f"  [bold]{cmd}[/bold]")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]")
    return exit_codes.SUCCESS
