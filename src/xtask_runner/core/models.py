"""Domain models for xtask-runner.

Enums select what a command applies to; frozen dataclasses carry the
workspace members, member filters and tool invocations between layers.
None of them perform I/O.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path


# ---------------------------------------------------------------------------
# Command selectors
# ---------------------------------------------------------------------------

class Target(str, enum.Enum):
    """Subset of the workspace a check applies to."""

    CRATES = "crates"
    EXAMPLES = "examples"
    WORKSPACE = "workspace"

    def __str__(self) -> str:
        return self.value

    def concrete(self) -> tuple[Target, ...]:
        """Return the non-aggregate targets this target stands for."""
        if self is Target.WORKSPACE:
            return (Target.CRATES, Target.EXAMPLES)
        return (self,)

    def member_type(self) -> WorkspaceMemberType:
        """Map a concrete target to the member kind it selects."""
        if self is Target.CRATES:
            return WorkspaceMemberType.CRATE
        if self is Target.EXAMPLES:
            return WorkspaceMemberType.EXAMPLE
        raise ValueError(f"Target '{self}' does not map to a single member type")


class CheckCommand(str, enum.Enum):
    """Sub-commands of ``xtask check``, in execution order for ``all``."""

    AUDIT = "audit"
    FORMAT = "format"
    LINT = "lint"
    TYPOS = "typos"
    ALL = "all"

    def __str__(self) -> str:
        return self.value


class DependenciesCommand(str, enum.Enum):
    """Sub-commands of ``xtask dependencies``, in execution order for ``all``."""

    DENY = "deny"
    UNUSED = "unused"
    ALL = "all"

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Workspace members
# ---------------------------------------------------------------------------

class WorkspaceMemberType(str, enum.Enum):
    CRATE = "crate"
    EXAMPLE = "example"


@dataclass(frozen=True, slots=True)
class WorkspaceMember:
    """A package listed in the workspace ``Cargo.toml``."""

    name: str
    """Package name as passed to ``cargo -p``."""

    path: Path
    """Directory containing the member's manifest."""

    kind: WorkspaceMemberType


@dataclass(frozen=True, slots=True)
class MemberFilter:
    """Include/exclude lists applied to workspace members by name.

    An empty ``only`` means "no restriction".  A name present in both
    lists is excluded.
    """

    exclude: tuple[str, ...] = ()
    only: tuple[str, ...] = ()

    def is_skipped(self, name: str) -> bool:
        if name in self.exclude:
            return True
        return bool(self.only) and name not in self.only

    def apply(self, members: Iterable[WorkspaceMember]) -> list[WorkspaceMember]:
        """Return the members that pass the filter, preserving order."""
        return [member for member in members if not self.is_skipped(member.name)]


# ---------------------------------------------------------------------------
# External processes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class ToolInvocation:
    """A fully specified external command.

    ``env`` entries are layered over the inherited environment by the
    runner; ``None`` inherits it unchanged.
    """

    program: str
    args: tuple[str, ...] = ()
    env: Mapping[str, str] | None = field(default=None, compare=False)
    cwd: Path | None = None

    @property
    def command_line(self) -> str:
        return " ".join((self.program, *self.args))


@dataclass(frozen=True, slots=True)
class InstalledCrate:
    """One entry of ``cargo install --list``."""

    name: str
    version: str
    binaries: tuple[str, ...] = ()
