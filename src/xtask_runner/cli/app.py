"""CLI application entry point and command routing for xtask-runner.

This module is the **sole error boundary** for the entire application.
It catches :class:`~xtask_runner.exceptions.XtaskError`,
``KeyboardInterrupt``, and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Architecture notes
------------------
* No business logic lives here — all work is delegated to the core
  services, wired to their infrastructure adapters below.
* A failing external tool's exit code becomes the process exit code.
"""

from __future__ import annotations

import argparse
import sys

from xtask_runner.cli import exit_codes
from xtask_runner.cli.console import console, escape
from xtask_runner.cli.log_setup import configure_logging
from xtask_runner.config import Settings
from xtask_runner.core.check_service import CheckService
from xtask_runner.core.dependencies_service import DependenciesService
from xtask_runner.core.models import (
    CheckCommand,
    DependenciesCommand,
    MemberFilter,
    Target,
)
from xtask_runner.core.protocols import ProcessRunner, Prompter, Reporter
from xtask_runner.core.tooling import ToolInstaller
from xtask_runner.exceptions import CommandFailedError, XtaskError
from xtask_runner.infra.tool_detector import require_tool
from xtask_runner.utils import dedupe, split_comma_list
from xtask_runner.version import __version__

_CHECK_HELP: dict[CheckCommand, str] = {
    CheckCommand.AUDIT: "Run audit command.",
    CheckCommand.FORMAT: "Run format command and fix formatting.",
    CheckCommand.LINT: "Run lint command and fix issues.",
    CheckCommand.TYPOS: "Find typos in source code and fix them.",
    CheckCommand.ALL: "Run all the checks.",
}

_DEPENDENCIES_HELP: dict[DependenciesCommand, str] = {
    DependenciesCommand.DENY: "Run cargo-deny checks.",
    DependenciesCommand.UNUSED: "Find unused dependencies (requires nightly).",
    DependenciesCommand.ALL: "Run all dependency checks.",
}


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the top-level argument parser.

    * ``xtask check [-t T] [-x ...] [-n ...] {audit,format,lint,typos,all}``
    * ``xtask dependencies {deny,unused,all}``
    * ``xtask doctor``
    """
    parser = argparse.ArgumentParser(
        prog="xtask",
        description="Developer workflow tasks for Cargo workspaces.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug output.",
    )
    parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Answer yes to every confirmation prompt.",
    )
    parser.add_argument(
        "-C",
        "--manifest-dir",
        dest="workspace_root",
        metavar="DIR",
        default=None,
        help="Workspace root directory (default: current directory).",
    )

    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    check = commands.add_parser("check", help="Run checks such as format, lint, audit.")
    check.add_argument(
        "-t",
        "--target",
        type=Target,
        choices=list(Target),
        default=Target.WORKSPACE,
        help="Target to check for (default: workspace).",
    )
    check.add_argument(
        "-x",
        "--exclude",
        type=split_comma_list,
        action="extend",
        default=[],
        metavar="CRATE,CRATE,...",
        help="Comma-separated list of excluded crates.",
    )
    check.add_argument(
        "-n",
        "--only",
        type=split_comma_list,
        action="extend",
        default=[],
        metavar="CRATE,CRATE,...",
        help="Comma-separated list of crates to include exclusively.",
    )
    check_commands = check.add_subparsers(dest="check_command", metavar="CHECK")
    check_commands.required = True
    for check_command, help_text in _CHECK_HELP.items():
        check_commands.add_parser(check_command.value, help=help_text)

    dependencies = commands.add_parser(
        "dependencies", help="Run dependency checks such as deny and unused.",
    )
    dependencies_commands = dependencies.add_subparsers(
        dest="dependencies_command", metavar="CHECK",
    )
    dependencies_commands.required = True
    for dependencies_command, help_text in _DEPENDENCIES_HELP.items():
        dependencies_commands.add_parser(dependencies_command.value, help=help_text)

    commands.add_parser("doctor", help="Diagnose the local toolchain.")
    return parser


# ---------------------------------------------------------------------------
# Service wiring
# ---------------------------------------------------------------------------

def _build_adapters(settings: Settings) -> tuple[ProcessRunner, Prompter, Reporter, ToolInstaller]:
    from xtask_runner.cli.confirm_prompt import AutoAnswerPrompter, QuestionaryPrompter
    from xtask_runner.cli.reporter import ConsoleReporter
    from xtask_runner.infra.cargo_install import CargoInstallRegistry
    from xtask_runner.infra.process import SubprocessRunner

    runner = SubprocessRunner(cwd=settings.workspace_root)
    prompter: Prompter = (
        AutoAnswerPrompter(True) if settings.assume_yes else QuestionaryPrompter()
    )
    reporter = ConsoleReporter(github_actions=settings.github_actions)
    installer = ToolInstaller(
        runner,
        CargoInstallRegistry(runner, cargo=settings.cargo),
        reporter,
        cargo=settings.cargo,
    )
    return runner, prompter, reporter, installer


def _build_check_service(settings: Settings) -> CheckService:
    from xtask_runner.infra.cargo_metadata import CargoWorkspaceProvider

    runner, prompter, reporter, installer = _build_adapters(settings)
    workspace = CargoWorkspaceProvider(
        runner, cargo=settings.cargo, workspace_root=settings.workspace_root,
    )
    return CheckService(
        runner,
        workspace,
        prompter,
        installer,
        reporter,
        cargo=settings.cargo,
        typos_version=settings.typos_version,
    )


def _build_dependencies_service(settings: Settings) -> DependenciesService:
    from xtask_runner.infra.toolchain import RustToolchain

    runner, _prompter, reporter, installer = _build_adapters(settings)
    return DependenciesService(
        runner,
        installer,
        RustToolchain(runner),
        reporter,
        cargo=settings.cargo,
    )


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_check(args: argparse.Namespace, settings: Settings) -> int:
    require_tool(settings.cargo)
    member_filter = MemberFilter(
        exclude=dedupe(args.exclude),
        only=dedupe(args.only),
    )
    service = _build_check_service(settings)
    service.handle(CheckCommand(args.check_command), args.target, member_filter)
    return exit_codes.SUCCESS


def _handle_dependencies(args: argparse.Namespace, settings: Settings) -> int:
    require_tool(settings.cargo)
    service = _build_dependencies_service(settings)
    service.handle(DependenciesCommand(args.dependencies_command))
    return exit_codes.SUCCESS


def _handle_doctor(settings: Settings) -> int:
    from xtask_runner.cli.doctor import run_doctor

    return run_doctor(settings.cargo, settings.workspace_root)


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the xtask CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    settings = Settings.from_env(
        assume_yes=args.yes,
        verbose=args.verbose,
        workspace_root=args.workspace_root,
    )
    configure_logging(verbose=settings.verbose)

    if args.command == "doctor":
        return _handle_doctor(settings)
    if args.command == "check":
        return _handle_check(args, settings)
    return _handle_dependencies(args, settings)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def exit_code_for(exc: XtaskError) -> int:
    """Map a domain error to the process exit code.

    A failing tool's own non-zero exit code is surfaced unchanged.
    """
    if isinstance(exc, CommandFailedError) and exc.returncode > 0:
        return exc.returncode
    return exit_codes.GENERAL_ERROR


def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point.

    This function wraps :func:`main` and guarantees the process never
    exits with a raw stack trace during normal usage.
    """
    try:
        code = main()
        sys.exit(code)
    except XtaskError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {escape(exc.hint)}")
        sys.exit(exit_code_for(exc))
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {escape(str(exc))}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
