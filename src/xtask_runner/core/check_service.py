"""Core check service — drives the ``xtask check`` family.

Each check resolves a :class:`~xtask_runner.core.models.Target`, asks
for confirmation (unless an answer was already given by an aggregate
command), makes sure the backing tool is installed and runs it.

Guarantees
----------
* Pure orchestration — no ``print()``, no direct process launching.
* The first failing tool aborts the whole sequence with a
  :class:`~xtask_runner.exceptions.CommandFailedError`.
* A declined confirmation skips the step without failing.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from xtask_runner.config import TYPOS_VERSION
from xtask_runner.core.models import (
    CheckCommand,
    MemberFilter,
    Target,
    ToolInvocation,
)
from xtask_runner.core.protocols import ProcessRunner, Prompter, Reporter, WorkspaceProvider
from xtask_runner.core.tooling import ToolInstaller
from xtask_runner.exceptions import CommandFailedError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Per-member check descriptors
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class _MemberCheck:
    """A check that runs one cargo command per workspace member."""

    label: str
    workspace_prompt: str
    target_prompt: str
    """Prompt for a single target; ``{target}`` is substituted."""

    build_args: Callable[[str], tuple[str, ...]]
    failure: str
    """Failure message; ``{name}`` is substituted."""


_FORMAT = _MemberCheck(
    label="Format",
    workspace_prompt="This will run format check on all members of the workspace.",
    target_prompt="This will run format checks on all {target} of the workspace.",
    build_args=lambda name: ("fmt", "-p", name, "--", "--color=always"),
    failure="Format check execution failed for {name}",
)

_LINT = _MemberCheck(
    label="Lint",
    workspace_prompt="This will run lint fix on all members of the workspace.",
    target_prompt="This will run lint fix on all {target} of the workspace.",
    build_args=lambda name: (
        "clippy",
        "--no-deps",
        "--fix",
        "--allow-dirty",
        "--allow-staged",
        "--color=always",
        "-p",
        name,
        "--",
        "--deny",
        "warnings",
    ),
    failure="Lint fix execution failed for {name}",
)


class CheckService:
    """Stateless service behind ``xtask check``.

    Parameters
    ----------
    runner:
        Launches the external tools.
    workspace:
        Lists the crates and examples of the workspace.
    prompter:
        Asks for confirmation before tools that rewrite files.
    installer:
        Installs ``cargo-audit`` and ``typos-cli`` on demand.
    reporter:
        Groups the output of each step.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        workspace: WorkspaceProvider,
        prompter: Prompter,
        installer: ToolInstaller,
        reporter: Reporter,
        *,
        cargo: str = "cargo",
        typos_version: str = TYPOS_VERSION,
    ) -> None:
        self._runner = runner
        self._workspace = workspace
        self._prompter = prompter
        self._installer = installer
        self._reporter = reporter
        self._cargo = cargo
        self._typos_version = typos_version

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle(
        self,
        command: CheckCommand,
        target: Target = Target.WORKSPACE,
        member_filter: MemberFilter | None = None,
        answer: bool | None = None,
    ) -> None:
        """Run *command* against *target*.

        Raises
        ------
        CommandFailedError
            When any invoked tool exits with a non-zero status.
        ToolNotFoundError
            When a tool cannot be launched.
        """
        member_filter = member_filter or MemberFilter()

        if command is CheckCommand.AUDIT:
            self.run_audit(target, answer)
        elif command is CheckCommand.FORMAT:
            self.run_format(target, member_filter, answer)
        elif command is CheckCommand.LINT:
            self.run_lint(target, member_filter, answer)
        elif command is CheckCommand.TYPOS:
            self.run_typos(target, answer)
        else:
            answer = self._resolve(
                answer,
                "This will run all the checks with autofix on all members of the workspace.",
            )
            for sub in CheckCommand:
                if sub is CheckCommand.ALL:
                    continue
                self.handle(sub, target, member_filter, answer)

    # ------------------------------------------------------------------
    # Workspace-wide checks
    # ------------------------------------------------------------------

    def run_audit(self, target: Target, answer: bool | None = None) -> None:
        if target is Target.WORKSPACE:
            answer = self._resolve(answer, "This will run audit checks on all targets.")
            # cargo audit covers the whole lockfile; one run is enough.
            self.run_audit(Target.CRATES, answer)
            return

        answer = self._resolve(
            answer, "This will run the audit check with autofix mode enabled.",
        )
        if not answer:
            logger.info("Audit skipped.")
            return

        self._installer.ensure_installed("cargo-audit", features="fix")
        with self._reporter.group("Audit: Crates and Examples"):
            self._run(
                ToolInvocation(self._cargo, ("audit", "-q", "--color", "always", "fix")),
                "Audit check execution failed",
            )

    def run_typos(self, target: Target, answer: bool | None = None) -> None:
        if target is Target.WORKSPACE:
            answer = self._resolve(answer, "This will look for typos on all targets.")
            # typos scans the whole tree; one run is enough.
            self.run_typos(Target.CRATES, answer)
            return

        answer = self._resolve(
            answer,
            "This will look for typos in the source code check and auto-fix them.",
        )
        if not answer:
            logger.info("Typos check skipped.")
            return

        self._installer.ensure_installed("typos-cli", version=self._typos_version)
        with self._reporter.group("Typos: Crates and Examples"):
            self._run(
                ToolInvocation("typos", ("--write-changes",)),
                "Some typos have been found and cannot be fixed.",
            )

    # ------------------------------------------------------------------
    # Per-member checks
    # ------------------------------------------------------------------

    def run_format(
        self,
        target: Target,
        member_filter: MemberFilter,
        answer: bool | None = None,
    ) -> None:
        self._run_per_member(_FORMAT, target, member_filter, answer)

    def run_lint(
        self,
        target: Target,
        member_filter: MemberFilter,
        answer: bool | None = None,
    ) -> None:
        self._run_per_member(_LINT, target, member_filter, answer)

    def _run_per_member(
        self,
        check: _MemberCheck,
        target: Target,
        member_filter: MemberFilter,
        answer: bool | None,
    ) -> None:
        if target is Target.WORKSPACE:
            answer = self._resolve(answer, check.workspace_prompt)
            if not answer:
                logger.info("%s skipped.", check.label)
                return
            for concrete in target.concrete():
                self._run_per_member(check, concrete, member_filter, answer)
            return

        members = self._workspace.members(target.member_type())
        answer = self._resolve(answer, check.target_prompt.format(target=target.value))
        if not answer:
            logger.info("%s skipped for %s.", check.label, target.value)
            return

        logger.debug(
            "%s: %d of %d %s selected",
            check.label,
            len(member_filter.apply(members)),
            len(members),
            target.value,
        )
        for member in members:
            with self._reporter.group(f"{check.label}: {member.name}"):
                if member_filter.is_skipped(member.name):
                    logger.info("Skip '%s' because it has been excluded!", member.name)
                    continue
                self._run(
                    ToolInvocation(self._cargo, check.build_args(member.name)),
                    check.failure.format(name=member.name),
                )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _resolve(self, answer: bool | None, message: str) -> bool:
        if answer is not None:
            return answer
        return self._prompter.confirm(message)

    def _run(self, invocation: ToolInvocation, failure: str) -> None:
        logger.info("Command line: %s", invocation.command_line)
        code = self._runner.run(invocation)
        if code != 0:
            raise CommandFailedError(
                failure,
                returncode=code,
                command_line=invocation.command_line,
            )
