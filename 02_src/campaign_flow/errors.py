"""Errors raised when a flow graph mutation would break an invariant."""

from typing import Any


class FlowGraphError(ValueError):
    """Base class for rejected flow graph operations."""


class DuplicateIdError(FlowGraphError):
    def __init__(self, node_id: int) -> None:
        super().__init__(f"Node id already issued: {node_id}")
        self.node_id = node_id


class UnknownNodeError(FlowGraphError):
    def __init__(self, node_id: Any) -> None:
        super().__init__(f"Unknown node: {node_id}")
        self.node_id = node_id


class DuplicateEdgeError(FlowGraphError):
    def __init__(self, source_id: int, target_id: int) -> None:
        super().__init__(f"Edge already exists: {source_id} -> {target_id}")
        self.source_id = source_id
        self.target_id = target_id


class UnknownEdgeError(FlowGraphError):
    def __init__(self, edge_id: str) -> None:
        super().__init__(f"Unknown edge: {edge_id}")
        self.edge_id = edge_id


class ProtectedNodeError(FlowGraphError):
    def __init__(self, node_id: int, reason: str = "node is protected") -> None:
        super().__init__(f"Cannot modify node {node_id}: {reason}")
        self.node_id = node_id
        self.reason = reason


class InvalidWaitParamsError(FlowGraphError):
    def __init__(self, days: Any) -> None:
        super().__init__(f"Wait duration must be at least 1 day, got {days!r}")
        self.days = days
