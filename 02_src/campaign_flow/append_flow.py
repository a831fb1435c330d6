"""Add-action interaction flow compiled as a LangGraph state machine.

Idle -> ActionMenuOpen -> (WaitParamsOpen if "wait") -> Committed -> Idle.
Cancelling either prompt returns to Idle before any id is allocated.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional, Sequence

from langgraph.graph import END, START, StateGraph
from typing_extensions import TypedDict

from .graph_model import WaitParams
from .labels import WAIT_ACTION
from .logs import get_logger

if TYPE_CHECKING:
    from .flow_builder import AppendResult, FlowBuilder

logger = get_logger(__name__)

IDLE = "idle"
ACTION_MENU_OPEN = "action_menu_open"
WAIT_PARAMS_OPEN = "wait_params_open"
COMMITTED = "committed"
PENDING_CONFIRMATION = "pending_confirmation"


class AddActionState(TypedDict):
    prompts: Any
    entry: str
    choices: Sequence[str]
    action: Optional[str]
    wait: Optional[WaitParams]
    cancelled: bool
    result: Any


class AddActionWorkflow:
    def __init__(self, builder: "FlowBuilder") -> None:
        self._builder = builder
        self._graph = self._build_workflow()

    def run(self, prompts: Any, entry: str, choices: Sequence[str]) -> Optional["AppendResult"]:
        try:
            final_state = self._graph.invoke(
                {
                    "prompts": prompts,
                    "entry": entry,
                    "choices": tuple(choices),
                    "action": None,
                    "wait": None,
                    "cancelled": False,
                    "result": None,
                }
            )
        finally:
            self._builder.phase = IDLE
        return final_state.get("result")

    def _build_workflow(self):
        graph = StateGraph(AddActionState)
        graph.add_node("action_menu", self._open_action_menu)
        graph.add_node("wait_params", self._open_wait_params)
        graph.add_node("commit", self._commit)
        graph.add_node("cancel", self._cancel)
        graph.add_conditional_edges(
            START,
            self._route_entry,
            {"menu": "action_menu", "wait": "wait_params"},
        )
        graph.add_conditional_edges(
            "action_menu",
            self._route_after_menu,
            {"cancel": "cancel", "wait": "wait_params", "commit": "commit"},
        )
        graph.add_conditional_edges(
            "wait_params",
            self._route_after_wait,
            {"cancel": "cancel", "commit": "commit"},
        )
        graph.add_edge("commit", END)
        graph.add_edge("cancel", END)
        return graph.compile()

    @staticmethod
    def _route_entry(state: AddActionState) -> str:
        return "wait" if state["entry"] == "wait" else "menu"

    @staticmethod
    def _route_after_menu(state: AddActionState) -> str:
        if state.get("cancelled"):
            return "cancel"
        return "wait" if state.get("action") == WAIT_ACTION else "commit"

    @staticmethod
    def _route_after_wait(state: AddActionState) -> str:
        return "cancel" if state.get("cancelled") else "commit"

    def _open_action_menu(self, state: AddActionState) -> Dict[str, Any]:
        self._builder.phase = ACTION_MENU_OPEN
        action = state["prompts"].choose_action(state["choices"])
        if action is None:
            return {"cancelled": True}
        if action not in state["choices"]:
            raise ValueError(f"Action menu returned an unknown choice: {action}")
        return {"action": action}

    def _open_wait_params(self, state: AddActionState) -> Dict[str, Any]:
        self._builder.phase = WAIT_PARAMS_OPEN
        wait = state["prompts"].wait_params(WaitParams())
        if wait is None:
            return {"cancelled": True}
        return {"action": WAIT_ACTION, "wait": wait}

    def _commit(self, state: AddActionState) -> Dict[str, Any]:
        result = self._builder.append_action(state["action"], state.get("wait"))
        self._builder.phase = COMMITTED
        return {"result": result}

    def _cancel(self, state: AddActionState) -> Dict[str, Any]:
        logger.info(
            "add action cancelled",
            extra={"phase": self._builder.phase, "tail_node_id": self._builder.tail_node_id},
        )
        return {"result": None}
