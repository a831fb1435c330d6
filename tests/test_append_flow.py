"""Interactive add-action flow: menu, wait prompt, cancellation."""

import pytest

from campaign_flow.errors import InvalidWaitParamsError
from campaign_flow.graph_model import WAIT, WaitParams
from campaign_flow.labels import MENU_ACTIONS
from campaign_flow.prompts import ScriptedPrompts


class PhaseRecordingPrompts(ScriptedPrompts):
    def __init__(self, builder, **kwargs):
        super().__init__(**kwargs)
        self.builder = builder
        self.phases = []

    def choose_action(self, choices):
        self.phases.append(self.builder.phase)
        return super().choose_action(choices)

    def wait_params(self, defaults):
        self.phases.append(self.builder.phase)
        return super().wait_params(defaults)


def test_menu_choice_is_committed(builder):
    prompts = ScriptedPrompts(actions=["request"])
    result = builder.run_add_action(prompts)

    assert result is not None
    state = builder.snapshot()
    assert state.nodes[result.node_id].label == "Send Connection Request"
    assert prompts.asked == [("choose_action", MENU_ACTIONS)]
    assert builder.phase == "idle"


def test_wait_choice_opens_wait_prompt(builder):
    prompts = PhaseRecordingPrompts(
        builder, actions=["wait"], waits=[WaitParams(days=3, time="14:15")]
    )
    result = builder.run_add_action(prompts)

    node = builder.snapshot().nodes[result.node_id]
    assert node.kind == WAIT
    assert node.label == "3 Days at 14:15"
    assert prompts.phases == ["action_menu_open", "wait_params_open"]
    assert prompts.asked[1] == ("wait_params", WaitParams())
    assert builder.phase == "idle"


def test_cancel_action_menu_leaves_graph_unchanged(builder):
    builder.append_action("message")
    before = builder.snapshot()
    next_id = before.next_id

    assert builder.run_add_action(ScriptedPrompts(actions=[None])) is None
    after = builder.snapshot()
    assert after is before
    assert after.next_id == next_id
    assert builder.phase == "idle"


def test_cancel_wait_prompt_leaves_graph_unchanged(builder):
    before = builder.snapshot()
    assert builder.run_add_action(ScriptedPrompts(actions=["wait"], waits=[None])) is None
    assert builder.snapshot() is before


def test_continuation_trigger_goes_straight_to_wait(builder):
    builder.append_action("message")
    prompts = ScriptedPrompts(waits=[WaitParams(days=1, time="07:45")])
    result = builder.run_add_wait(prompts)

    assert [name for name, _ in prompts.asked] == ["wait_params"]
    assert builder.snapshot().nodes[result.node_id].label == "1 Day at 07:45"


def test_invalid_wait_propagates_and_resets_phase(builder):
    before = builder.snapshot()
    with pytest.raises(InvalidWaitParamsError):
        builder.run_add_wait(ScriptedPrompts(waits=[WaitParams(days=0, time="09:00")]))
    assert builder.snapshot() is before
    assert builder.phase == "idle"


def test_unknown_menu_choice_is_rejected(builder):
    before = builder.snapshot()
    with pytest.raises(ValueError):
        builder.run_add_action(ScriptedPrompts(actions=["end"]))
    assert builder.snapshot() is before
