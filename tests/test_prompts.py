import io

import pytest

from campaign_flow.graph_model import WaitParams
from campaign_flow.labels import MENU_ACTIONS
from campaign_flow.prompts import ConsolePrompts, ScriptedPrompts


def _console(text):
    out = io.StringIO()
    return ConsolePrompts(io.StringIO(text), out), out


def test_scripted_prompts_answer_in_order():
    prompts = ScriptedPrompts(actions=["message", None], confirms=[True])
    assert prompts.choose_action(MENU_ACTIONS) == "message"
    assert prompts.choose_action(MENU_ACTIONS) is None
    assert prompts.confirm_delete(3) is True


def test_scripted_prompts_run_dry():
    with pytest.raises(RuntimeError):
        ScriptedPrompts().wait_params(WaitParams())


def test_console_choose_by_number_and_name():
    prompts, out = _console("2\nfollow\n")
    assert prompts.choose_action(MENU_ACTIONS) == "message"
    assert prompts.choose_action(MENU_ACTIONS) == "follow"
    assert "Send Connection Request" in out.getvalue()
    assert "7. Wait" in out.getvalue()


def test_console_choose_rejects_unknown_then_accepts():
    prompts, out = _console("99\n1\n")
    assert prompts.choose_action(MENU_ACTIONS) == "request"
    assert "Unknown action: 99" in out.getvalue()


def test_console_empty_answer_cancels():
    prompts, _ = _console("\n")
    assert prompts.choose_action(MENU_ACTIONS) is None


def test_console_wait_rejects_non_numeric_days():
    prompts, out = _console("two\n2\n09:30\n")
    assert prompts.wait_params(WaitParams()) == WaitParams(days=2, time="09:30")
    assert "whole number" in out.getvalue()


def test_console_wait_rejects_bad_time():
    prompts, out = _console("3\n25:00\n08:15\n")
    assert prompts.wait_params(WaitParams()) == WaitParams(days=3, time="08:15")
    assert "09:30" in out.getvalue()


def test_console_wait_keeps_defaults():
    prompts, _ = _console("-\n-\n")
    assert prompts.wait_params(WaitParams(days=1, time="00:00")) == WaitParams()


def test_console_wait_cancel_at_end_of_input():
    prompts, _ = _console("2\n")
    assert prompts.wait_params(WaitParams()) is None


def test_console_zero_days_passes_through():
    # the minimum is enforced by the builder, not the prompt
    prompts, _ = _console("0\n10:00\n")
    assert prompts.wait_params(WaitParams()) == WaitParams(days=0, time="10:00")


@pytest.mark.parametrize("answer,expected", [("y\n", True), ("YES\n", True), ("n\n", False), ("", False)])
def test_console_confirm(answer, expected):
    prompts, _ = _console(answer)
    assert prompts.confirm_delete(5) is expected


def test_console_wait_rejects_non_ascii_digits():
    prompts, out = _console("²\n2\n09:30\n")
    assert prompts.wait_params(WaitParams()) == WaitParams(days=2, time="09:30")
    assert "whole number" in out.getvalue()


def test_console_choose_rejects_non_ascii_digits():
    prompts, out = _console("²\n1\n")
    assert prompts.choose_action(MENU_ACTIONS) == "request"
    assert "Unknown action: ²" in out.getvalue()
