"""Allow ``python -m xtask_runner`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m xtask_runner`` behaves identically to the ``xtask``
console script.
"""

from __future__ import annotations

from xtask_runner.cli.app import cli

if __name__ == "__main__":
    cli()
