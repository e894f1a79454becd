"""Output grouping for local terminals and GitHub Actions.

On GitHub Actions each step is wrapped in ``::group::`` /
``::endgroup::`` workflow commands so the log collapses per step.
Locally the group title is drawn as a rule.
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from contextlib import contextmanager

from xtask_runner.cli.console import console


class ConsoleReporter:
    """Concrete :class:`~xtask_runner.core.protocols.Reporter`."""

    def __init__(self, *, github_actions: bool = False) -> None:
        self._github_actions = github_actions

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        if self._github_actions:
            # Workflow commands must be on stdout, unstyled, one per line.
            sys.stdout.write(f"::group::{title}\n")
            sys.stdout.flush()
            try:
                yield
            finally:
                sys.stdout.write("::endgroup::\n")
                sys.stdout.flush()
            return

        console.rule(f"[bold cyan]{title}[/bold cyan]")
        yield
