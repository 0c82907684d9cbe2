"""``bandou-utils doctor`` — environment diagnostics command.

Gathers system information and renders a table summarising whether the
runtime can compute digests and render rich output.  MD5 support is
the only critical check: without it :func:`~bandou_utils.core.digest.digest`
terminates the process.
"""

from __future__ import annotations

import hashlib
import platform
import sys
from importlib import metadata

from bandou_utils.cli import exit_codes
from bandou_utils.cli.console import console
from bandou_utils.version import __version__

_MD5_GUIDANCE: tuple[str, ...] = (
    "Use a Python build whose OpenSSL allows MD5 for non-security use,",
    "or disable FIPS mode for this interpreter.",
)


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _package_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the bandou-utils version row."""
    return "bandou-utils", __version__, "[green]OK[/green]"


def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _md5_available() -> bool:
    try:
        hashlib.new("md5", usedforsecurity=False)
    except ValueError:
        return False
    return True


def _md5_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the MD5 support row."""
    if _md5_available():
        return "MD5", "available", "[green]OK[/green]"
    return "MD5", "NOT AVAILABLE", "[red]FAIL[/red]"


def _distribution_check(label: str, distribution: str, missing_status: str) -> tuple[str, str, str]:
    """Return (label, value, status) for an installed distribution row."""
    try:
        return label, metadata.version(distribution), "[green]OK[/green]"
    except metadata.PackageNotFoundError:
        return label, "NOT INSTALLED", missing_status


def _rich_check() -> tuple[str, str, str]:
    """Rich is optional: output degrades to plain text without it."""
    return _distribution_check("rich", "rich", "[yellow]WARN[/yellow]")


def _dotenv_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the python-dotenv row."""
    return _distribution_check("python-dotenv", "python-dotenv", "[red]FAIL[/red]")


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {"Darwin": "macOS"}.get(system_raw, system_raw)
    value = f"{system_display} {platform.release()} ({platform.machine()})"
    return "OS", value, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    for word in ("FAIL", "WARN", "OK"):
        if word in status:
            return word
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\nbandou-utils doctor", file=sys.stderr)
    print("=" * 60, file=sys.stderr)
    print(f"{'Component':<16} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 60, file=sys.stderr)
    for label, value, status in checks:
        print(f"{label:<16} {value:<32} {_status_plain(status):<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all critical checks pass,
        :data:`exit_codes.GENERAL_ERROR` if a critical check fails.
    """
    checks = [
        _package_version_check(),
        _python_version_check(),
        _md5_check(),
        _rich_check(),
        _dotenv_check(),
        _os_check(),
    ]
    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="bandou-utils doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)
        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    if not _md5_available():
        if rich_available:
            console.print("[yellow]MD5 is unavailable; digest commands will exit.[/yellow]")
            for line in _MD5_GUIDANCE:
                console.print(f"  {line}")
        else:
            print("MD5 is unavailable; digest commands will exit.", file=sys.stderr)
            for line in _MD5_GUIDANCE:
                print(f"  {line}", file=sys.stderr)

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]" if rich_available else "Some checks failed.")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]" if rich_available else "All checks passed.")
    return exit_codes.SUCCESS
