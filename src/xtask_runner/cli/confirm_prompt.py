"""Interactive yes/no confirmation for the CLI layer.

Checks that rewrite files (``fmt``, ``clippy --fix``, ``typos
--write-changes``, ``audit fix``) ask before running.  The answer can be
given up front with ``--yes`` or ``XTASK_ASSUME_YES``.
"""

from __future__ import annotations

from typing import Any

from xtask_runner.exceptions import EnvironmentError, PromptCancelledError


def _import_questionary() -> Any:
    """Import questionary lazily for interactive confirmation."""
    try:
        import questionary
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "questionary is not installed. Install with: pip install questionary",
            hint="Or pass --yes to skip confirmation prompts.",
        ) from exc
    return questionary


class QuestionaryPrompter:
    """Concrete :class:`~xtask_runner.core.protocols.Prompter` using questionary."""

    def confirm(self, message: str) -> bool:
        """Ask *message* followed by "Do you want to proceed?".

        Raises
        ------
        PromptCancelledError
            If the user dismisses the prompt (Esc / ``None`` return).
        """
        questionary = _import_questionary()
        answer: bool | None = questionary.confirm(
            f"{message}\nDo you want to proceed?",
            default=False,
        ).ask()  # Returns None on Ctrl+C / Esc

        if answer is None:
            raise PromptCancelledError(
                "Confirmation prompt was cancelled.",
                hint="Answer with y/n, or pass --yes to skip prompts.",
            )
        return answer


class AutoAnswerPrompter:
    """Prompter that answers every question with a fixed value."""

    def __init__(self, answer: bool = True) -> None:
        self._answer = answer

    def confirm(self, message: str) -> bool:
        return self._answer
