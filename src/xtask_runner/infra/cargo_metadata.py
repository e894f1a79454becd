"""``cargo metadata`` backed implementation of :class:`~xtask_runner.core.protocols.WorkspaceProvider`.

Workspace members whose manifest lives under an ``examples`` directory
are reported as examples; every other member is a crate.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from xtask_runner.core.models import ToolInvocation, WorkspaceMember, WorkspaceMemberType
from xtask_runner.core.protocols import ProcessRunner
from xtask_runner.exceptions import WorkspaceMetadataError

logger = logging.getLogger(__name__)


class CargoWorkspaceProvider:
    """Discover workspace members from ``cargo metadata --no-deps``.

    The metadata is fetched lazily and cached for the lifetime of the
    provider, so the members of both kinds cost a single cargo run.
    """

    def __init__(
        self,
        runner: ProcessRunner,
        *,
        cargo: str = "cargo",
        workspace_root: Path | None = None,
    ) -> None:
        self._runner = runner
        self._cargo = cargo
        self._workspace_root = workspace_root
        self._members: list[WorkspaceMember] | None = None

    def members(self, kind: WorkspaceMemberType) -> list[WorkspaceMember]:
        return [member for member in self._all_members() if member.kind is kind]

    def _all_members(self) -> list[WorkspaceMember]:
        if self._members is None:
            invocation = ToolInvocation(
                self._cargo,
                ("metadata", "--no-deps", "--format-version", "1"),
                cwd=self._workspace_root,
            )
            raw = self._runner.capture(invocation)
            self._members = parse_workspace_members(raw)
            logger.debug("Found %d workspace members", len(self._members))
        return self._members


# ---------------------------------------------------------------------------
# Parsing (pure)
# ---------------------------------------------------------------------------

def parse_workspace_members(raw: str) -> list[WorkspaceMember]:
    """Parse ``cargo metadata --format-version 1`` output.

    Raises
    ------
    WorkspaceMetadataError
        When *raw* is not valid metadata JSON.
    """
    try:
        metadata: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise WorkspaceMetadataError(
            f"cargo metadata returned invalid JSON: {exc}",
        ) from exc

    if not isinstance(metadata, dict):
        raise WorkspaceMetadataError("cargo metadata returned an unexpected structure.")

    members: list[WorkspaceMember] = []
    try:
        workspace_root = Path(metadata["workspace_root"])
        member_ids = set(metadata["workspace_members"])
        for package in metadata["packages"]:
            if package.get("id") not in member_ids:
                continue
            manifest_dir = Path(package["manifest_path"]).parent
            members.append(
                WorkspaceMember(
                    name=package["name"],
                    path=manifest_dir,
                    kind=classify_member(manifest_dir, workspace_root),
                )
            )
    except (KeyError, TypeError, AttributeError) as exc:
        raise WorkspaceMetadataError(
            f"cargo metadata output is missing a required field: {exc}",
            hint="Make sure the command runs inside a Cargo workspace.",
        ) from exc
    return members


def classify_member(manifest_dir: Path, workspace_root: Path) -> WorkspaceMemberType:
    """Return ``EXAMPLE`` when *manifest_dir* sits under an ``examples`` directory."""
    try:
        parts = manifest_dir.relative_to(workspace_root).parts
    except ValueError:
        parts = manifest_dir.parts
    if "examples" in parts:
        return WorkspaceMemberType.EXAMPLE
    return WorkspaceMemberType.CRATE
