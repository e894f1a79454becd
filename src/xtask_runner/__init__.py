"""xtask-runner — developer-workflow tasks for Cargo workspaces.

Dispatches format, lint, audit, typo and dependency checks to the
external tools that implement them and aggregates their exit status.
"""

from xtask_runner.version import __version__

__all__: list[str] = ["__version__"]
