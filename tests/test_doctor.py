"""Tests for the ``xtask doctor`` command (cli/doctor.py).

Tool detection and rustc probing are mocked — no toolchain needed.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from xtask_runner.cli import exit_codes
from xtask_runner.exceptions import ToolNotFoundError
from xtask_runner.infra.tool_detector import CRATE_BINARIES, ToolStatus, install_commands_for


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _found(binary: str) -> ToolStatus:
    return ToolStatus(
        name=binary,
        found=True,
        path=Path("/usr/bin") / binary,
        install_commands=(),
    )


def _missing(binary: str) -> ToolStatus:
    return ToolStatus(
        name=binary,
        found=False,
        path=None,
        install_commands=install_commands_for(binary),
    )


def _only_cargo(binary: str) -> ToolStatus:
    return _found(binary) if binary == "cargo" else _missing(binary)


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestCargoCheck:
    @patch("xtask_runner.cli.doctor.detect_tool", side_effect=_found)
    def test_found(self, _mock_detect: MagicMock) -> None:
        from xtask_runner.cli.doctor import _cargo_check

        label, value, status = _cargo_check()
        assert label == "cargo"
        assert "cargo" in value
        assert "OK" in status

    @patch("xtask_runner.cli.doctor.detect_tool", side_effect=_missing)
    def test_missing_fails(self, _mock_detect: MagicMock) -> None:
        from xtask_runner.cli.doctor import _cargo_check

        _label, value, status = _cargo_check()
        assert value == "not found"
        assert "FAIL" in status


class TestToolchainCheck:
    @patch("xtask_runner.cli.doctor.RustToolchain")
    def test_nightly_ok(self, mock_toolchain: MagicMock) -> None:
        from xtask_runner.cli.doctor import _toolchain_check

        mock_toolchain.return_value.version.return_value = "rustc 1.85.0-nightly"
        mock_toolchain.return_value.is_nightly.return_value = True
        label, value, status = _toolchain_check()
        assert (label, value) == ("rustc", "rustc 1.85.0-nightly")
        assert "OK" in status

    @patch("xtask_runner.cli.doctor.RustToolchain")
    def test_stable_warns(self, mock_toolchain: MagicMock) -> None:
        from xtask_runner.cli.doctor import _toolchain_check

        mock_toolchain.return_value.version.return_value = "rustc 1.83.0"
        mock_toolchain.return_value.is_nightly.return_value = False
        _label, _value, status = _toolchain_check()
        assert "WARN" in status

    @patch("xtask_runner.cli.doctor.RustToolchain")
    def test_missing_rustc_fails(self, mock_toolchain: MagicMock) -> None:
        from xtask_runner.cli.doctor import _toolchain_check

        mock_toolchain.return_value.version.side_effect = ToolNotFoundError("no rustc")
        _label, value, status = _toolchain_check()
        assert value == "not found"
        assert "FAIL" in status

    @patch("xtask_runner.cli.doctor.SubprocessRunner")
    @patch("xtask_runner.cli.doctor.RustToolchain")
    def test_probes_from_workspace_root(
        self, mock_toolchain: MagicMock, mock_runner: MagicMock,
    ) -> None:
        from xtask_runner.cli.doctor import _toolchain_check

        mock_toolchain.return_value.version.return_value = "rustc 1.85.0-nightly"
        _toolchain_check(Path("/work/burn"))

        mock_runner.assert_called_once_with(cwd=Path("/work/burn"))
        mock_toolchain.assert_called_once_with(mock_runner.return_value)


class TestHelperChecks:
    def test_missing_helpers_warn(self) -> None:
        from xtask_runner.cli.doctor import _helper_checks

        rows = _helper_checks([_missing(binary) for binary in CRATE_BINARIES])
        assert [label for label, _, _ in rows] == [
            "cargo-audit", "cargo-deny", "cargo-udeps", "typos",
        ]
        assert all("WARN" in status for _, _, status in rows)


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

def _patch_toolchain(nightly: bool = True) -> MagicMock:
    toolchain = MagicMock()
    toolchain.return_value.version.return_value = "rustc 1.85.0-nightly"
    toolchain.return_value.is_nightly.return_value = nightly
    return toolchain


class TestRunDoctor:
    @patch("xtask_runner.cli.doctor.detect_tool", side_effect=_found)
    def test_all_pass_returns_success(self, _mock_detect: MagicMock) -> None:
        from xtask_runner.cli.doctor import run_doctor

        with patch("xtask_runner.cli.doctor.RustToolchain", _patch_toolchain()):
            assert run_doctor() == exit_codes.SUCCESS

    @patch("xtask_runner.cli.doctor.detect_tool", side_effect=_only_cargo)
    def test_missing_helpers_still_succeed(self, _mock_detect: MagicMock) -> None:
        from xtask_runner.cli.doctor import run_doctor

        with patch("xtask_runner.cli.doctor.RustToolchain", _patch_toolchain(nightly=False)):
            assert run_doctor() == exit_codes.SUCCESS

    @patch("xtask_runner.cli.doctor.detect_tool", side_effect=_missing)
    def test_missing_cargo_fails(self, _mock_detect: MagicMock) -> None:
        from xtask_runner.cli.doctor import run_doctor

        with patch("xtask_runner.cli.doctor.RustToolchain", _patch_toolchain()):
            assert run_doctor() == exit_codes.GENERAL_ERROR

    @patch("xtask_runner.cli.doctor.detect_tool", side_effect=_only_cargo)
    @patch.dict("sys.modules", {"rich": None, "rich.table": None, "rich.console": None})
    def test_plain_output_lists_install_commands(
        self,
        _mock_detect: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from xtask_runner.cli.doctor import run_doctor

        with patch("xtask_runner.cli.doctor.RustToolchain", _patch_toolchain()):
            run_doctor()

        err = capsys.readouterr().err
        assert "xtask doctor" in err
        assert "cargo install typos-cli" in err
        assert "[bold]" not in err

    @patch("xtask_runner.cli.doctor.detect_tool")
    @patch.dict("sys.modules", {"rich": None, "rich.table": None, "rich.console": None})
    def test_guidance_comes_from_tool_status(
        self,
        mock_detect: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from xtask_runner.cli.doctor import run_doctor

        def _detect(binary: str) -> ToolStatus:
            if binary == "cargo-deny":
                return ToolStatus(binary, False, None, ("cargo binstall cargo-deny",))
            return _found(binary)

        mock_detect.side_effect = _detect
        with patch("xtask_runner.cli.doctor.RustToolchain", _patch_toolchain()):
            run_doctor()

        err = capsys.readouterr().err
        assert "cargo binstall cargo-deny" in err
        assert "cargo install cargo-deny" not in err


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestDoctorRouting:
    @patch("xtask_runner.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_run: MagicMock) -> None:
        from xtask_runner.cli.app import main

        assert main(["doctor"]) == exit_codes.SUCCESS
        mock_run.assert_called_once()

    @patch("xtask_runner.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_honours_manifest_dir(self, mock_run: MagicMock) -> None:
        from xtask_runner.cli.app import main

        main(["-C", "/work/burn", "doctor"])
        assert mock_run.call_args.args[1] == Path("/work/burn")

    @patch("xtask_runner.cli.doctor.run_doctor", return_value=exit_codes.GENERAL_ERROR)
    def test_doctor_failure_propagates(self, _mock_run: MagicMock) -> None:
        from xtask_runner.cli.app import main

        assert main(["doctor"]) == exit_codes.GENERAL_ERROR
