"""CLI console helpers with optional Rich support.

Rich is imported lazily so that ``--help``, ``--version`` and
``digest`` keep working when it is not installed.
"""

from __future__ import annotations

import sys
from typing import Any

from bandou_utils.exceptions import EnvironmentError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``EnvironmentError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise EnvironmentError(
            "rich is not installed.",
            hint="Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = True) -> Any:
    """Create a Rich console instance targeting stderr (or stdout)."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


class _ConsoleProxy:
    """Minimal ``print``-compatible proxy with Rich fallback."""

    def __init__(self, *, stderr: bool) -> None:
        self._stderr = stderr

    def print(self, *objects: object, **options: Any) -> None:
        """Render with Rich when available, else plain ``print``."""
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except EnvironmentError:
            stream = sys.stderr if self._stderr else sys.stdout
            print(*objects, file=stream)
            return
        rich_console.print(*objects, **options)


console = _ConsoleProxy(stderr=True)
"""Diagnostics, errors and hints."""

output = _ConsoleProxy(stderr=False)
"""Command results meant for pipes (e.g. a digest)."""
