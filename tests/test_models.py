"""Tests for domain models (core/models.py)."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from xtask_runner.core.models import (
    CheckCommand,
    DependenciesCommand,
    MemberFilter,
    Target,
    ToolInvocation,
    WorkspaceMember,
    WorkspaceMemberType,
)


def _member(name: str) -> WorkspaceMember:
    return WorkspaceMember(name, Path("crates") / name, WorkspaceMemberType.CRATE)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TestTarget:
    def test_values_are_lowercase(self) -> None:
        assert [t.value for t in Target] == ["crates", "examples", "workspace"]

    def test_parse_from_string(self) -> None:
        assert Target("examples") is Target.EXAMPLES

    def test_str_is_value(self) -> None:
        assert str(Target.CRATES) == "crates"

    def test_workspace_expands_to_crates_and_examples(self) -> None:
        assert Target.WORKSPACE.concrete() == (Target.CRATES, Target.EXAMPLES)

    @pytest.mark.parametrize("target", [Target.CRATES, Target.EXAMPLES])
    def test_concrete_target_expands_to_itself(self, target: Target) -> None:
        assert target.concrete() == (target,)

    def test_member_type(self) -> None:
        assert Target.CRATES.member_type() is WorkspaceMemberType.CRATE
        assert Target.EXAMPLES.member_type() is WorkspaceMemberType.EXAMPLE

    def test_workspace_has_no_member_type(self) -> None:
        with pytest.raises(ValueError):
            Target.WORKSPACE.member_type()


class TestCommandOrder:
    def test_check_commands_declared_order(self) -> None:
        assert [c.value for c in CheckCommand] == ["audit", "format", "lint", "typos", "all"]

    def test_dependencies_commands_declared_order(self) -> None:
        assert [c.value for c in DependenciesCommand] == ["deny", "unused", "all"]


# ---------------------------------------------------------------------------
# MemberFilter
# ---------------------------------------------------------------------------

class TestMemberFilter:
    members = [_member(n) for n in ("a", "b", "c", "d")]

    def test_empty_filter_keeps_everything(self) -> None:
        assert MemberFilter().apply(self.members) == self.members

    def test_exclude_is_disjoint(self) -> None:
        kept = MemberFilter(exclude=("b", "d")).apply(self.members)
        assert [m.name for m in kept] == ["a", "c"]

    def test_only_is_intersection(self) -> None:
        kept = MemberFilter(only=("c", "a", "zzz")).apply(self.members)
        assert [m.name for m in kept] == ["a", "c"]

    def test_exclude_wins_over_only(self) -> None:
        f = MemberFilter(exclude=("a",), only=("a", "b"))
        assert f.is_skipped("a")
        assert not f.is_skipped("b")
        assert f.is_skipped("c")

    def test_is_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            MemberFilter().exclude = ("x",)  # type: ignore[misc]


# ---------------------------------------------------------------------------
# ToolInvocation
# ---------------------------------------------------------------------------

class TestToolInvocation:
    def test_command_line(self) -> None:
        inv = ToolInvocation("cargo", ("fmt", "-p", "core"))
        assert inv.command_line == "cargo fmt -p core"

    def test_command_line_without_args(self) -> None:
        assert ToolInvocation("typos").command_line == "typos"

    def test_is_hashable_despite_env_mapping(self) -> None:
        inv = ToolInvocation("cargo", env={"A": "1"})
        assert hash(inv) == hash(ToolInvocation("cargo", env={"B": "2"}))
