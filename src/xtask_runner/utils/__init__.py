"""Shared utilities — small parsing helpers used across layers.

Rules
-----
* No business logic.
* No I/O.
* Importable by any layer.
"""

from __future__ import annotations

from collections.abc import Iterable

_TRUTHY: frozenset[str] = frozenset({"1", "true", "yes", "on"})


def is_truthy(value: str | None) -> bool:
    """Interpret an environment-variable style flag."""
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


def split_comma_list(value: str) -> list[str]:
    """Split ``"a, b,,c"`` into ``["a", "b", "c"]``."""
    return [item.strip() for item in value.split(",") if item.strip()]


def dedupe(items: Iterable[str]) -> tuple[str, ...]:
    """Return *items* without duplicates, first occurrence wins."""
    seen: dict[str, None] = {}
    for item in items:
        seen.setdefault(item, None)
    return tuple(seen)
