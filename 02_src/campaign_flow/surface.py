"""Rendering contract between the flow builder and a diagramming canvas."""

from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Tuple

from .flow_builder import FlowBuilder
from .graph_model import START, FlowNode
from .labels import icon_for
from .logs import get_logger
from .prompts import ModalPrompts

logger = get_logger(__name__)

Position = Tuple[float, float]

EDGE_RENDER_STYLE = "custom"
START_POSITION: Position = (250.0, 5.0)


@dataclass(frozen=True)
class NodeView:
    id: int
    renderable_label: str
    position: Position
    draggable: bool
    deletable: bool
    has_add_action: bool


@dataclass(frozen=True)
class EdgeView:
    id: str
    source: int
    target: int
    render_style: str
    on_delete_requested: Callable[[str], None]


class CanvasState:
    """Node positions. Ephemeral view state, never part of the flow graph."""

    def __init__(self, layout_x: float = 250.0, spacing: float = 100.0) -> None:
        self._layout_x = layout_x
        self._spacing = spacing
        self._positions: Dict[int, Position] = {}

    def position_of(self, node: FlowNode) -> Position:
        if node.id in self._positions:
            return self._positions[node.id]
        if node.kind == START:
            return START_POSITION
        return (self._layout_x, self._spacing + node.id * self._spacing)

    def move(self, node_id: int, position: Position) -> None:
        self._positions[node_id] = (float(position[0]), float(position[1]))

    def forget(self, node_id: int) -> None:
        self._positions.pop(node_id, None)

    def prune(self, live_ids: Iterable[int]) -> None:
        live = set(live_ids)
        for node_id in [key for key in self._positions if key not in live]:
            del self._positions[node_id]


class Canvas:
    """Adapter a diagramming surface talks to: renders snapshots, forwards gestures."""

    def __init__(self, builder: FlowBuilder) -> None:
        self.builder = builder
        self.positions = CanvasState(
            layout_x=builder.settings.layout_x,
            spacing=builder.settings.layout_spacing,
        )

    def render(self) -> Tuple[List[NodeView], List[EdgeView]]:
        state = self.builder.snapshot()
        self.positions.prune(state.nodes)
        nodes = [
            NodeView(
                id=node.id,
                renderable_label=self._renderable_label(node),
                position=self.positions.position_of(node),
                draggable=node.kind != START,
                deletable=node.deletable,
                has_add_action=node.has_add_action,
            )
            for node in state.nodes.values()
        ]
        edges = [
            EdgeView(
                id=edge.id,
                source=edge.source,
                target=edge.target,
                render_style=EDGE_RENDER_STYLE,
                on_delete_requested=self.on_edge_delete_requested,
            )
            for edge in state.edges.values()
        ]
        return nodes, edges

    def on_nodes_repositioned(self, moves: Mapping[int, Position]) -> None:
        nodes = self.builder.snapshot().nodes
        for node_id, position in moves.items():
            node = nodes.get(node_id)
            if node is None or node.kind == START:
                logger.debug("reposition ignored", extra={"node_id": node_id})
                continue
            self.positions.move(node_id, position)

    def on_edge_delete_requested(self, edge_id: str) -> None:
        self.builder.delete_edge(edge_id)

    def on_node_delete_requested(self, node_id: int, prompts: ModalPrompts) -> bool:
        deleted = self.builder.delete_node(node_id, prompts)
        if deleted:
            self.positions.forget(node_id)
        return deleted

    def on_connect(self, source_id: int, target_id: int) -> str:
        return self.builder.connect(source_id, target_id)

    def on_add_action(self, prompts: ModalPrompts) -> Any:
        return self.builder.run_add_action(prompts)

    def on_continuation_clicked(self, node_id: int, prompts: ModalPrompts) -> Any:
        node = self.builder.store.get_node(node_id)
        if not node.has_add_action:
            raise ValueError(f"Node {node_id} has no add-action trigger")
        return self.builder.run_add_wait(prompts)

    def to_json(self) -> Dict[str, Any]:
        nodes, edges = self.render()
        state = self.builder.snapshot()
        return {
            "nodes": [asdict(view) for view in nodes],
            "edges": [
                {
                    "id": view.id,
                    "source": view.source,
                    "target": view.target,
                    "render_style": view.render_style,
                }
                for view in edges
            ],
            "tail_node_id": state.tail_node_id,
            "next_id": state.next_id,
        }

    @staticmethod
    def _renderable_label(node: FlowNode) -> str:
        icon = icon_for(node.action or node.kind)
        return f"{icon} {node.label}" if icon else node.label
