"""Turns user intents into atomic flow graph mutations."""

from dataclasses import dataclass
from typing import Dict, List, Optional

from .append_flow import IDLE, PENDING_CONFIRMATION, AddActionWorkflow
from .errors import FlowGraphError, InvalidWaitParamsError, ProtectedNodeError
from .graph_model import (
    ACTION,
    CONTINUATION,
    END,
    START,
    START_NODE_ID,
    WAIT,
    FlowNode,
    FlowState,
    WaitParams,
)
from .graph_store import GraphStore
from .id_allocator import IdAllocator
from .labels import (
    CONTINUATION_LABEL,
    END_ACTION,
    MENU_ACTIONS,
    START_LABEL,
    WAIT_ACTION,
    action_label,
)
from .logs import get_logger
from .prompts import ModalPrompts
from .settings import FlowSettings

logger = get_logger(__name__)


@dataclass(frozen=True)
class AppendResult:
    node_id: int
    continuation_id: Optional[int]
    edge_ids: List[str]


class FlowBuilder:
    """Sole mutator of a campaign flow.

    Owns the id allocator, the graph store and the ephemeral interaction
    phase. Every public mutation is published to the store as one transition.
    """

    def __init__(self, settings: Optional[FlowSettings] = None) -> None:
        self.settings = settings or FlowSettings()
        self._ids = IdAllocator(start=START_NODE_ID + 1, stride=self.settings.id_stride)
        self.store = GraphStore(
            FlowNode(id=START_NODE_ID, kind=START, label=START_LABEL),
            next_id=self._ids.next_id,
        )
        self.phase = IDLE
        self.pending_delete: Optional[int] = None
        self._workflow = AddActionWorkflow(self)

    @property
    def tail_node_id(self) -> int:
        return self.store.snapshot().tail_node_id

    def snapshot(self) -> FlowState:
        return self.store.snapshot()

    # Append protocol

    def append_action(self, action: str, wait: Optional[WaitParams] = None) -> AppendResult:
        """Append ``action`` after the tail, followed by a fresh continuation node."""
        if action == END_ACTION:
            return self.append_end()
        if action == WAIT_ACTION:
            wait = wait or WaitParams()
            if wait.days < 1:
                logger.warning("wait rejected", extra={"action": action})
                raise InvalidWaitParamsError(wait.days)

        label = action_label(action, wait)
        kind = WAIT if action == WAIT_ACTION else ACTION
        properties: Dict[str, object] = {}
        if wait is not None and action == WAIT_ACTION:
            properties = {"days": wait.days, "time": wait.time}

        node_id, continuation_id = self._ids.reserve(2)
        tail = self.tail_node_id
        edge_ids = self._commit(
            nodes=[
                FlowNode(id=node_id, kind=kind, label=label, action=action, properties=properties),
                FlowNode(id=continuation_id, kind=CONTINUATION, label=CONTINUATION_LABEL),
            ],
            edges=[(tail, node_id), (node_id, continuation_id)],
            tail_node_id=continuation_id,
        )
        logger.info(
            "action appended",
            extra={"action": action, "node_id": node_id, "tail_node_id": continuation_id},
        )
        return AppendResult(node_id=node_id, continuation_id=continuation_id, edge_ids=edge_ids)

    def append_wait(self, days: int, time: str = "00:00") -> AppendResult:
        return self.append_action(WAIT_ACTION, WaitParams(days=days, time=time))

    def append_end(self) -> AppendResult:
        """Close the chain with an end node; the end node becomes the tail."""
        node_id = self._ids.reserve(1)[0]
        edge_ids = self._commit(
            nodes=[FlowNode(id=node_id, kind=END, label=action_label(END_ACTION), action=END_ACTION)],
            edges=[(self.tail_node_id, node_id)],
            tail_node_id=node_id,
        )
        logger.info("end appended", extra={"node_id": node_id, "tail_node_id": node_id})
        return AppendResult(node_id=node_id, continuation_id=None, edge_ids=edge_ids)

    def run_add_action(self, prompts: ModalPrompts) -> Optional[AppendResult]:
        """Open the action menu and append whatever the user picks. ``None`` if cancelled."""
        return self._workflow.run(prompts, entry="menu", choices=MENU_ACTIONS)

    def run_add_wait(self, prompts: ModalPrompts) -> Optional[AppendResult]:
        """Entry point of a continuation node's trigger: go straight to the wait prompt."""
        return self._workflow.run(prompts, entry="wait", choices=MENU_ACTIONS)

    # Deletion protocol

    def request_node_delete(self, node_id: int) -> None:
        try:
            node = self.store.get_node(node_id)
            if not node.deletable:
                raise ProtectedNodeError(node_id, f"{node.kind} nodes cannot be deleted")
        except FlowGraphError as error:
            logger.warning("node delete rejected: %s", error, extra={"node_id": node_id})
            raise
        self.phase = PENDING_CONFIRMATION
        self.pending_delete = node_id

    def resolve_node_delete(self, confirmed: bool) -> bool:
        if self.phase != PENDING_CONFIRMATION or self.pending_delete is None:
            raise RuntimeError("No node deletion is pending")
        node_id = self.pending_delete
        try:
            if not confirmed:
                logger.info("node delete declined", extra={"node_id": node_id})
                return False
            self.store.remove_node(node_id)
            logger.info(
                "node deleted",
                extra={"node_id": node_id, "tail_node_id": self.tail_node_id},
            )
            return True
        finally:
            self._reset_phase()

    def delete_node(self, node_id: int, prompts: ModalPrompts) -> bool:
        self.request_node_delete(node_id)
        try:
            confirmed = prompts.confirm_delete(node_id)
        except Exception:
            self._reset_phase()
            raise
        return self.resolve_node_delete(confirmed)

    def delete_edge(self, edge_id: str) -> None:
        try:
            self.store.remove_edge(edge_id)
        except FlowGraphError as error:
            logger.warning("edge delete rejected: %s", error, extra={"edge_id": edge_id})
            raise
        logger.info("edge deleted", extra={"edge_id": edge_id})

    # Direct manipulation

    def connect(self, source_id: int, target_id: int) -> str:
        try:
            edge_id = self.store.add_edge(source_id, target_id)
        except FlowGraphError as error:
            logger.warning("connection rejected: %s", error)
            raise
        logger.info("nodes connected", extra={"edge_id": edge_id})
        return edge_id

    def _commit(self, nodes: List[FlowNode], edges: List, tail_node_id: int) -> List[str]:
        try:
            return self.store.commit(
                nodes=nodes,
                edges=edges,
                tail_node_id=tail_node_id,
                next_id=self._ids.next_id,
            )
        except FlowGraphError as error:
            # The allocator guarantees fresh ids; a rejection here is a broken invariant.
            logger.error("append rejected: %s", error, extra={"tail_node_id": self.tail_node_id})
            raise

    def _reset_phase(self) -> None:
        self.phase = IDLE
        self.pending_delete = None
