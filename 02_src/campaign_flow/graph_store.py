"""Authoritative node and edge storage with copy-on-write publication."""

from dataclasses import replace
from types import MappingProxyType
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .errors import (
    DuplicateEdgeError,
    DuplicateIdError,
    ProtectedNodeError,
    UnknownEdgeError,
    UnknownNodeError,
)
from .graph_model import START, FlowEdge, FlowNode, FlowState
from .logs import get_logger

logger = get_logger(__name__)


class GraphStore:
    """Owns the published flow state and every structural mutation.

    Each mutation builds complete new node/edge mappings and publishes them in
    a single assignment, so ``snapshot()`` never exposes a half-applied change.
    """

    def __init__(self, start_node: FlowNode, next_id: Optional[int] = None) -> None:
        if start_node.kind != START:
            raise ValueError(f"Graph must be seeded with a start node, got {start_node.kind}")
        self._start_id = start_node.id
        self._issued: Set[int] = {start_node.id}
        self._state = FlowState(
            nodes=MappingProxyType({start_node.id: start_node}),
            edges=MappingProxyType({}),
            tail_node_id=start_node.id,
            next_id=next_id if next_id is not None else start_node.id + 1,
        )

    @property
    def start_node_id(self) -> int:
        return self._start_id

    def snapshot(self) -> FlowState:
        return self._state

    def get_node(self, node_id: int) -> FlowNode:
        try:
            return self._state.nodes[node_id]
        except KeyError:
            raise UnknownNodeError(node_id) from None

    def incoming(self, node_id: int) -> List[FlowEdge]:
        return [edge for edge in self._state.edges.values() if edge.target == node_id]

    def outgoing(self, node_id: int) -> List[FlowEdge]:
        return [edge for edge in self._state.edges.values() if edge.source == node_id]

    def add_node(self, node: FlowNode) -> None:
        self.commit(nodes=[node])

    def add_edge(self, source_id: int, target_id: int) -> str:
        return self.commit(edges=[(source_id, target_id)])[0]

    def commit(
        self,
        nodes: Iterable[FlowNode] = (),
        edges: Iterable[Tuple[int, int]] = (),
        tail_node_id: Optional[int] = None,
        next_id: Optional[int] = None,
    ) -> List[str]:
        """Apply node inserts, then edge inserts, then the tail update as one transition.

        Returns the ids of the created edges. Nothing is published if any
        insert is rejected.
        """
        new_nodes: Dict[int, FlowNode] = dict(self._state.nodes)
        new_edges: Dict[str, FlowEdge] = dict(self._state.edges)
        issued = set(self._issued)

        for node in nodes:
            if node.id in issued:
                raise DuplicateIdError(node.id)
            if node.kind == START:
                raise ProtectedNodeError(node.id, "a flow has exactly one start node")
            new_nodes[node.id] = node
            issued.add(node.id)

        edge_ids: List[str] = []
        for source_id, target_id in edges:
            if source_id not in new_nodes:
                raise UnknownNodeError(source_id)
            if target_id not in new_nodes:
                raise UnknownNodeError(target_id)
            if target_id == self._start_id:
                raise ProtectedNodeError(target_id, "the start node cannot have incoming edges")
            edge_id = self._build_edge_id(source_id, target_id)
            if edge_id in new_edges:
                raise DuplicateEdgeError(source_id, target_id)
            new_edges[edge_id] = FlowEdge(id=edge_id, source=source_id, target=target_id)
            edge_ids.append(edge_id)

        tail = self._state.tail_node_id if tail_node_id is None else tail_node_id
        if tail not in new_nodes:
            raise UnknownNodeError(tail)

        self._publish(
            new_nodes,
            new_edges,
            tail_node_id=tail,
            next_id=self._state.next_id if next_id is None else next_id,
        )
        self._issued = issued
        for edge_id in edge_ids:
            logger.debug("edge added", extra={"edge_id": edge_id})
        return edge_ids

    def remove_node(self, node_id: int) -> None:
        node = self.get_node(node_id)
        if node.kind == START:
            raise ProtectedNodeError(node_id, "the start node cannot be removed")

        incident = [
            edge for edge in self._state.edges.values() if node_id in (edge.source, edge.target)
        ]
        tail = self._state.tail_node_id
        if tail == node_id:
            predecessors = sorted(
                (edge for edge in incident if edge.target == node_id and edge.source != node_id),
                key=lambda edge: edge.source,
            )
            tail = predecessors[0].source if predecessors else self._start_id

        new_nodes = {key: value for key, value in self._state.nodes.items() if key != node_id}
        removed = {edge.id for edge in incident}
        new_edges = {key: value for key, value in self._state.edges.items() if key not in removed}
        self._publish(new_nodes, new_edges, tail_node_id=tail, next_id=self._state.next_id)
        logger.debug(
            "node removed",
            extra={"node_id": node_id, "edge_count": len(removed), "tail_node_id": tail},
        )

    def remove_edge(self, edge_id: str) -> None:
        if edge_id not in self._state.edges:
            raise UnknownEdgeError(edge_id)
        new_edges = {key: value for key, value in self._state.edges.items() if key != edge_id}
        self._publish(
            dict(self._state.nodes),
            new_edges,
            tail_node_id=self._state.tail_node_id,
            next_id=self._state.next_id,
        )
        logger.debug("edge removed", extra={"edge_id": edge_id})

    def _publish(
        self,
        nodes: Dict[int, FlowNode],
        edges: Dict[str, FlowEdge],
        tail_node_id: int,
        next_id: int,
    ) -> None:
        self._state = replace(
            self._state,
            nodes=MappingProxyType(nodes),
            edges=MappingProxyType(edges),
            tail_node_id=tail_node_id,
            next_id=next_id,
        )

    @staticmethod
    def _build_edge_id(source_id: int, target_id: int) -> str:
        return f"e{source_id}-{target_id}"
