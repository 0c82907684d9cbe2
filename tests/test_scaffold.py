"""Smoke tests — verify package wiring.

These tests prove that:
* The public API is importable from the package root.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
* The CLI routes ``digest`` and ``doctor`` and maps errors to exit codes.
"""

from __future__ import annotations

from unittest.mock import patch

import pytest

import bandou_utils
from bandou_utils import __version__
from bandou_utils.cli import exit_codes
from bandou_utils.cli.app import cli, main
from bandou_utils.exceptions import (
    ArgumentError,
    BandouError,
    DigestUnavailableError,
    EnvironmentError,
    InvocationTargetError,
    MemberAccessError,
    MemberLookupError,
)


# ---------------------------------------------------------------------------
# Version / exports
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


def test_public_api_exported() -> None:
    for name in bandou_utils.__all__:
        assert hasattr(bandou_utils, name), name


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [
            ArgumentError,
            MemberLookupError,
            MemberAccessError,
            InvocationTargetError,
            EnvironmentError,
            DigestUnavailableError,
        ],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[BandouError]
    ) -> None:
        assert issubclass(exc_class, BandouError)

    def test_digest_unavailable_is_environment_error(self) -> None:
        assert issubclass(DigestUnavailableError, EnvironmentError)

    def test_hint_is_stored(self) -> None:
        err = BandouError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert BandouError("boom").hint is None

    def test_invocation_target_keeps_target(self) -> None:
        cause = KeyError("k")
        err = InvocationTargetError("wrapped", cause, hint="h")
        assert err.target_exception is cause
        assert err.hint == "h"


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_values(self) -> None:
        assert exit_codes.SUCCESS == 0
        assert exit_codes.GENERAL_ERROR == 1
        assert exit_codes.UNEXPECTED_ERROR == 2
        assert exit_codes.ENVIRONMENT_FAILURE == 3
        assert exit_codes.KEYBOARD_INTERRUPT == 130


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestCLIRouting:
    def test_no_args_returns_success(self) -> None:
        assert main([]) == exit_codes.SUCCESS

    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_digest_prints_hash(self, capsys: pytest.CaptureFixture[str]) -> None:
        code = main(["digest", "abc"])
        assert code == exit_codes.SUCCESS
        assert "900150983cd24fb0d6963f7d28e17f72" in capsys.readouterr().out

    def test_digest_joins_parts(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["digest", "a", "bc"])
        assert "900150983cd24fb0d6963f7d28e17f72" in capsys.readouterr().out

    def test_digest_without_parts(self, capsys: pytest.CaptureFixture[str]) -> None:
        main(["digest"])
        assert "d41d8cd98f00b204e9800998ecf8427e" in capsys.readouterr().out

    @patch("bandou_utils.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_returns_success(self, _mock_doc: object) -> None:
        assert main(["doctor"]) == exit_codes.SUCCESS

    def test_verbose_sets_debug(self) -> None:
        import logging

        main(["-v", "digest", "x"])
        assert logging.getLogger("bandou_utils").level == logging.DEBUG


# ---------------------------------------------------------------------------
# Error boundary
# ---------------------------------------------------------------------------

class TestErrorBoundary:
    def _run(self, monkeypatch: pytest.MonkeyPatch, exc: BaseException) -> int:
        from bandou_utils.cli import app as app_module

        def _boom(argv: list[str] | None = None) -> int:
            raise exc

        monkeypatch.setattr(app_module, "main", _boom)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        return int(exc_info.value.code)

    def test_known_error(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = self._run(monkeypatch, ArgumentError("bad input", hint="fix it"))
        assert code == exit_codes.GENERAL_ERROR
        err = capsys.readouterr().err
        assert "bad input" in err
        assert "fix it" in err

    def test_environment_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        code = self._run(monkeypatch, EnvironmentError("missing"))
        assert code == exit_codes.ENVIRONMENT_FAILURE

    def test_keyboard_interrupt(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run(monkeypatch, KeyboardInterrupt()) == exit_codes.KEYBOARD_INTERRUPT

    def test_unexpected_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        assert self._run(monkeypatch, RuntimeError("?")) == exit_codes.UNEXPECTED_ERROR

    def test_success_exits_zero(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from bandou_utils.cli import app as app_module

        monkeypatch.setattr(app_module, "main", lambda argv=None: exit_codes.SUCCESS)
        with pytest.raises(SystemExit) as exc_info:
            cli()
        assert exc_info.value.code == exit_codes.SUCCESS
