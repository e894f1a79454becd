"""Infrastructure layer — external system integration.

This layer wraps all interaction with cargo, rustc and the operating
system.  Every raw ``OSError`` is caught here and re-raised as a
:class:`~xtask_runner.exceptions.XtaskError` subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from xtask_runner.infra.cargo_install import CargoInstallRegistry
from xtask_runner.infra.cargo_metadata import CargoWorkspaceProvider
from xtask_runner.infra.process import SubprocessRunner
from xtask_runner.infra.tool_detector import ToolStatus, detect_tool, require_tool
from xtask_runner.infra.toolchain import RustToolchain

__all__: list[str] = [
    "CargoInstallRegistry",
    "CargoWorkspaceProvider",
    "RustToolchain",
    "SubprocessRunner",
    "ToolStatus",
    "detect_tool",
    "require_tool",
]
