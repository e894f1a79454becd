"""Core / service layer — orchestration of workspace checks.

Rules
-----
* No ``print()`` calls.
* No direct process launching or filesystem access.
* No imports from ``cli`` or ``infra``.
* Effects go through the protocols in :mod:`xtask_runner.core.protocols`.
"""

from xtask_runner.core.check_service import CheckService
from xtask_runner.core.dependencies_service import CARGO_NIGHTLY_MSG, DependenciesService
from xtask_runner.core.models import (
    CheckCommand,
    DependenciesCommand,
    InstalledCrate,
    MemberFilter,
    Target,
    ToolInvocation,
    WorkspaceMember,
    WorkspaceMemberType,
)
from xtask_runner.core.protocols import (
    InstalledCratesProvider,
    ProcessRunner,
    Prompter,
    Reporter,
    ToolchainProbe,
    WorkspaceProvider,
)
from xtask_runner.core.tooling import ToolInstaller

__all__: list[str] = [
    "CARGO_NIGHTLY_MSG",
    "CheckCommand",
    "CheckService",
    "DependenciesCommand",
    "DependenciesService",
    "InstalledCrate",
    "InstalledCratesProvider",
    "MemberFilter",
    "ProcessRunner",
    "Prompter",
    "Reporter",
    "Target",
    "ToolInstaller",
    "ToolInvocation",
    "ToolchainProbe",
    "WorkspaceMember",
    "WorkspaceMemberType",
    "WorkspaceProvider",
]
