"""Runtime settings resolved from the environment and CLI overrides.

Settings are built once at process start and passed down explicitly;
no module reads ``os.environ`` for configuration after that point.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from xtask_runner.utils import is_truthy

TYPOS_VERSION: str = "1.29.4"
"""Pinned ``typos-cli`` release installed on demand."""


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved configuration for a single invocation."""

    cargo: str = "cargo"
    """Cargo executable.  Cargo exports ``CARGO`` when running aliases."""

    workspace_root: Path = Path(".")
    """Directory holding the workspace ``Cargo.toml``."""

    assume_yes: bool = False
    """Answer every confirmation prompt with *yes*."""

    github_actions: bool = False
    """Emit ``::group::`` markers understood by GitHub Actions."""

    typos_version: str = TYPOS_VERSION
    verbose: bool = False

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> Settings:
        """Build settings from *environ*, then apply non-``None`` *overrides*.

        Raises
        ------
        TypeError
            If an override names an unknown setting.
        """
        env = os.environ if environ is None else environ

        root = env.get("XTASK_WORKSPACE_ROOT")
        settings = cls(
            cargo=env.get("CARGO") or "cargo",
            workspace_root=Path(root) if root else Path.cwd(),
            assume_yes=is_truthy(env.get("XTASK_ASSUME_YES")),
            github_actions=env.get("GITHUB_ACTIONS", "").lower() == "true",
            typos_version=env.get("XTASK_TYPOS_VERSION") or TYPOS_VERSION,
        )

        known = {f.name for f in fields(cls)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown settings: {', '.join(sorted(unknown))}")

        explicit = {key: value for key, value in overrides.items() if value is not None}
        if "workspace_root" in explicit:
            explicit["workspace_root"] = Path(explicit["workspace_root"])
        # Flags default to False on the CLI; only a True flag overrides env.
        for flag in ("assume_yes", "verbose"):
            if explicit.get(flag) is False:
                del explicit[flag]
        return replace(settings, **explicit)
