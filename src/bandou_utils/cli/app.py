"""CLI application entry point and command routing for bandou-utils.

This module is the **sole error boundary** for the command line.  It
catches :class:`~bandou_utils.exceptions.BandouError`,
``KeyboardInterrupt`` and any unexpected ``Exception``, rendering
user-friendly messages and returning well-defined exit codes.

Commands
--------
* ``bandou-utils digest PART [PART ...]`` — MD5 of the joined parts
* ``bandou-utils doctor`` — environment diagnostics
* ``bandou-utils --version``
"""

from __future__ import annotations

import argparse
import sys

from bandou_utils.cli import exit_codes
from bandou_utils.cli.console import console, output
from bandou_utils.config import load_settings
from bandou_utils.exceptions import BandouError, EnvironmentError
from bandou_utils.log import configure_logging
from bandou_utils.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bandou-utils",
        description="Reflection and digest helpers.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level (overrides BANDOU_LOG_LEVEL).",
    )

    commands = parser.add_subparsers(dest="command", metavar="command")
    digest_parser = commands.add_parser(
        "digest",
        help="Print the MD5 of the given parts joined without separator.",
    )
    digest_parser.add_argument("parts", nargs="*", metavar="PART")
    commands.add_parser("doctor", help="Run environment diagnostics.")
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_digest(parts: list[str]) -> int:
    from bandou_utils.core.digest import digest

    output.print(digest(*parts), highlight=False)
    return exit_codes.SUCCESS


def _handle_doctor() -> int:
    from bandou_utils.cli.doctor import run_doctor

    return run_doctor()


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the bandou-utils CLI.

    Parameters
    ----------
    argv:
        Explicit argument list.  When ``None`` (default), ``sys.argv[1:]``
        is used.

    Returns
    -------
    int
        OS process exit code.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    configure_logging("DEBUG" if args.verbose else settings.log_level)

    if args.command is None:
        parser.print_help()
        return exit_codes.SUCCESS

    if args.command == "doctor":
        return _handle_doctor()

    return _handle_digest(args.parts)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except BandouError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        if isinstance(exc, EnvironmentError):
            sys.exit(exit_codes.ENVIRONMENT_FAILURE)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
