import io

import pytest

from nethunter_installer.errors import UserInputError
from nethunter_installer.operator import ConsoleOperator


def _operator(text):
    return ConsoleOperator(stdin=io.StringIO(text), stdout=io.StringIO())


@pytest.mark.unit
class TestConsoleOperator:
    def test_ask_strips_newline(self):
        assert _operator("yes\r\n").ask("Ready? ") == "yes"

    def test_closed_input(self):
        with pytest.raises(UserInputError):
            _operator("").ask("Ready? ")

    @pytest.mark.parametrize("answer,expected", [("y\n", True), ("YES\n", True), ("no\n", False), ("n\n", False)])
    def test_confirm(self, answer, expected):
        assert _operator(answer).confirm("Install companion apps (GApps)?") is expected

    def test_confirm_rejects_other_answers(self):
        with pytest.raises(UserInputError):
            _operator("maybe\n").confirm("Install companion apps (GApps)?")

    def test_choose_prints_menu(self):
        op = _operator("2\n")

        assert op.choose("Select which device:", ["OnePlus 5", "OnePlus 2", "OnePlus 1"]) == 1
        out = op.stdout.getvalue()
        assert "  1) OnePlus 5" in out
        assert "  3) OnePlus 1" in out
        assert "*" not in out

    def test_bare_enter_is_not_a_selection(self):
        with pytest.raises(UserInputError, match="No option selected"):
            _operator("\n").choose("Select which device:", ["OnePlus 5", "OnePlus 2", "OnePlus 1"])

    def test_bare_enter_takes_explicit_default(self):
        op = _operator("\n")

        assert op.choose("Pick", ["a", "b"], default=1) == 1
        assert "* 2) b" in op.stdout.getvalue()

    @pytest.mark.parametrize("answer", ["abc\n", "0\n", "4\n"])
    def test_choose_invalid(self, answer):
        with pytest.raises(UserInputError):
            _operator(answer).choose("Pick", ["a", "b", "c"])

    def test_acknowledge_waits_for_line(self):
        op = _operator("\n")
        op.acknowledge("Press enter when TWRP is fully loaded & ready")

        assert "TWRP" in op.stdout.getvalue()
