from unittest.mock import patch

import pytest

from nethunter_installer import __version__
from nethunter_installer.exit_codes import ExitCode
from nethunter_installer.main import build_steps, exit_pause, main

from .conftest import ScriptedOperator


@pytest.fixture(autouse=True)
def _no_log_files():
    with patch("nethunter_installer.main.configure_logging") as configure:
        yield configure


@pytest.mark.unit
class TestMain:
    def test_version(self):
        op = ScriptedOperator()

        assert main(["--version"], operator=op) == 0
        assert op.text.startswith(f"NetHunter installer version {__version__} ")

    def test_bad_config_is_a_prerequisite_failure(self, tmp_path):
        path = tmp_path / "installer.toml"
        path.write_text("", encoding="utf-8")
        op = ScriptedOperator()

        with patch("nethunter_installer.main.platform.system", return_value="Linux"):
            code = main(["--config", str(path)], operator=op)

        assert code == ExitCode.ERROR_PREREQS == 65
        assert "Failed to load installer configuration" in op.text

    def test_bad_wait_value_fails_before_any_device_call(self, tmp_path):
        path = tmp_path / "installer.yaml"
        path.write_text("waits:\n  wipe_pause: soon\n", encoding="utf-8")
        op = ScriptedOperator(answers=["yes"])

        with patch("nethunter_installer.main.platform.system", return_value="Linux"), patch(
            "nethunter_installer.main.AdbClient"
        ) as adb_client:
            code = main(["--config", str(path), "--workdir", str(tmp_path)], operator=op)

        assert code == ExitCode.ERROR_PREREQS
        assert "waits.wipe_pause" in op.text
        adb_client.assert_not_called()

    def test_missing_device_table(self, tmp_path):
        op = ScriptedOperator()

        with patch("nethunter_installer.main.platform.system", return_value="Linux"):
            code = main(["--devices", str(tmp_path / "devices.yaml")], operator=op)

        assert code == ExitCode.ERROR_PREREQS

    def test_declined_welcome_prompt(self, tmp_path):
        op = ScriptedOperator(answers=["no"])

        with patch("nethunter_installer.main.platform.system", return_value="Linux"):
            code = main(["--workdir", str(tmp_path)], operator=op)

        assert code == ExitCode.SUCCESS_USER_ABORT == 33


@pytest.mark.unit
class TestExitPause:
    def test_waits_on_windows(self):
        op = ScriptedOperator()

        with patch("nethunter_installer.main.platform.system", return_value="Windows"):
            exit_pause(op)

        assert op.acknowledged == ["\nPress [Enter] to exit..."]

    def test_no_wait_elsewhere(self):
        op = ScriptedOperator()

        with patch("nethunter_installer.main.platform.system", return_value="Darwin"):
            exit_pause(op)

        assert op.acknowledged == []


def test_procedure_order():
    ids = [s.step_id for s in build_steps()]

    assert ids[:4] == ["00_welcome", "10_verify_tools", "20_detect_mode", "30_identify_device"]
    assert ids[-1] == "99_reboot"
    assert len(ids) == len(set(ids)) == 17
