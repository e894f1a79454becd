"""CLI console helpers with optional Rich support.

Rich is imported lazily so bootstrap paths (``--help``, ``--version``)
keep working even when it is not installed.  All console output goes to
stderr; stdout belongs to the external tools and to CI markers.
"""

from __future__ import annotations

import re
import sys
from typing import Any

from xtask_runner.exceptions import EnvironmentError

_MARKUP = re.compile(r"(?<!\\)\[/?[a-z][a-z ]*\]")


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed. Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console() -> Any:
    """Create a Rich console instance targeting stderr."""
    console_class = _load_rich_console_class()
    return console_class(stderr=True)


def strip_markup(text: str) -> str:
    """Remove Rich style tags such as ``[bold red]`` from *text*.

    Brackets escaped with :func:`escape` are kept as literal text.
    """
    return _MARKUP.sub("", text).replace("\\[", "[")


def escape(text: str) -> str:
    """Escape *text* so brackets in it are printed rather than parsed as markup.

    Used for anything that did not originate in this package, such as
    error output relayed from cargo.
    """
    try:
        from rich.markup import escape as rich_escape
    except ModuleNotFoundError:
        return _MARKUP.sub(lambda match: "\\" + match.group(0), text)
    return rich_escape(text)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with plain-text fallback."""

    def print(self, *objects: object) -> None:
        """Render with Rich when available, else plain stderr print."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(
                *(strip_markup(o) if isinstance(o, str) else o for o in objects),
                file=sys.stderr,
            )
            return
        rich_console.print(*objects)

    def rule(self, title: str) -> None:
        """Draw a horizontal rule with *title*."""
        try:
            rich_console = get_rich_console()
        except EnvironmentError:
            print(f"── {strip_markup(title)} ──", file=sys.stderr)
            return
        rich_console.rule(title, align="left")


console = _ConsoleProxy()
