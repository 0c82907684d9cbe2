"""Allow ``python -m bandou_utils`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m bandou_utils`` behaves identically to the ``bandou-utils``
console script.
"""

from __future__ import annotations

from bandou_utils.cli.app import cli

if __name__ == "__main__":
    cli()
