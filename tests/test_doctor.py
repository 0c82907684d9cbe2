"""Tests for the ``bandou-utils doctor`` command (cli/doctor.py).

MD5 availability and installed distributions are mocked — no
dependency on how the interpreter was built.

Coverage:
* Individual check functions return correct tuples.
* Doctor returns SUCCESS when MD5 is available.
* Doctor returns GENERAL_ERROR when MD5 is missing, with guidance.
* Plain-text rendering when Rich is absent.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

from importlib import metadata
from unittest.mock import MagicMock, patch

import pytest

from bandou_utils.cli import exit_codes


def _refuse_md5(name: str, *args: object, **kwargs: object) -> None:
    raise ValueError(f"unsupported hash type {name}")


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestPythonVersionCheck:
    def test_returns_tuple(self) -> None:
        from bandou_utils.cli.doctor import _python_version_check

        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert "OK" in status


class TestMd5Check:
    def test_available(self) -> None:
        from bandou_utils.cli.doctor import _md5_check

        assert _md5_check() == ("MD5", "available", "[green]OK[/green]")

    @patch("bandou_utils.cli.doctor.hashlib.new", side_effect=_refuse_md5)
    def test_missing(self, _mock_new: MagicMock) -> None:
        from bandou_utils.cli.doctor import _md5_check

        label, value, status = _md5_check()
        assert label == "MD5"
        assert value == "NOT AVAILABLE"
        assert "FAIL" in status


class TestDistributionChecks:
    @patch("bandou_utils.cli.doctor.metadata.version", return_value="13.7.1")
    def test_rich_installed(self, _mock_version: MagicMock) -> None:
        from bandou_utils.cli.doctor import _rich_check

        assert _rich_check() == ("rich", "13.7.1", "[green]OK[/green]")

    @patch(
        "bandou_utils.cli.doctor.metadata.version",
        side_effect=metadata.PackageNotFoundError("rich"),
    )
    def test_rich_missing_is_warning(self, _mock_version: MagicMock) -> None:
        from bandou_utils.cli.doctor import _rich_check

        label, value, status = _rich_check()
        assert value == "NOT INSTALLED"
        assert "WARN" in status

    @patch(
        "bandou_utils.cli.doctor.metadata.version",
        side_effect=metadata.PackageNotFoundError("python-dotenv"),
    )
    def test_dotenv_missing_is_failure(self, _mock_version: MagicMock) -> None:
        from bandou_utils.cli.doctor import _dotenv_check

        assert "FAIL" in _dotenv_check()[2]


class TestOsCheck:
    @patch("bandou_utils.cli.doctor.platform.machine", return_value="arm64")
    @patch("bandou_utils.cli.doctor.platform.release", return_value="23.4.0")
    @patch("bandou_utils.cli.doctor.platform.system", return_value="Darwin")
    def test_darwin_is_displayed_as_macos(
        self,
        _mock_system: MagicMock,
        _mock_release: MagicMock,
        _mock_machine: MagicMock,
    ) -> None:
        from bandou_utils.cli.doctor import _os_check

        _label, value, _status = _os_check()
        assert value == "macOS 23.4.0 (arm64)"


class TestPackageVersionCheck:
    def test_returns_current_version(self) -> None:
        from bandou_utils.cli.doctor import _package_version_check
        from bandou_utils.version import __version__

        assert _package_version_check() == ("bandou-utils", __version__, "[green]OK[/green]")


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

@pytest.fixture()
def installed_distributions():
    with patch("bandou_utils.cli.doctor.metadata.version", return_value="1.0.0") as mock:
        yield mock


@pytest.mark.usefixtures("installed_distributions")
class TestRunDoctor:
    def test_all_pass_returns_success(self) -> None:
        from bandou_utils.cli.doctor import run_doctor

        assert run_doctor() == exit_codes.SUCCESS

    @patch("bandou_utils.cli.doctor.hashlib.new", side_effect=_refuse_md5)
    def test_md5_missing_fails_with_guidance(
        self, _mock_new: MagicMock, capsys: pytest.CaptureFixture[str],
    ) -> None:
        from bandou_utils.cli.doctor import run_doctor

        assert run_doctor() == exit_codes.GENERAL_ERROR
        assert "FIPS" in capsys.readouterr().err

    @patch.dict("sys.modules", {"rich": None, "rich.table": None, "rich.console": None})
    def test_plain_output_without_rich(self, capsys: pytest.CaptureFixture[str]) -> None:
        from bandou_utils.cli.doctor import run_doctor

        assert run_doctor() == exit_codes.SUCCESS
        err = capsys.readouterr().err
        assert "bandou-utils doctor" in err
        assert "All checks passed." in err


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestDoctorRouting:
    @patch("bandou_utils.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_run: MagicMock) -> None:
        from bandou_utils.cli.app import main

        assert main(["doctor"]) == exit_codes.SUCCESS
        mock_run.assert_called_once()

    @patch("bandou_utils.cli.doctor.run_doctor", return_value=exit_codes.GENERAL_ERROR)
    def test_doctor_failure_propagates(self, _mock_run: MagicMock) -> None:
        from bandou_utils.cli.app import main

        assert main(["doctor"]) == exit_codes.GENERAL_ERROR
