"""Flow graph data model primitives."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

START = "start"
ACTION = "action"
WAIT = "wait"
CONTINUATION = "placeholder-continue"
END = "end"

NODE_KINDS = (START, ACTION, WAIT, CONTINUATION, END)

FLOW_EDGE = "flow"

START_NODE_ID = 1


@dataclass(frozen=True)
class WaitParams:
    days: int = 1
    time: str = "00:00"


@dataclass(frozen=True)
class FlowNode:
    id: int
    kind: str
    label: str
    action: str = ""
    properties: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @property
    def deletable(self) -> bool:
        return self.kind in (ACTION, WAIT, END)

    @property
    def has_add_action(self) -> bool:
        return self.kind == CONTINUATION


@dataclass(frozen=True)
class FlowEdge:
    id: str
    source: int
    target: int
    kind: str = FLOW_EDGE


@dataclass(frozen=True)
class FlowState:
    """Published, read-only view of a flow graph."""

    nodes: Mapping[int, FlowNode] = field(default_factory=lambda: MappingProxyType({}))
    edges: Mapping[str, FlowEdge] = field(default_factory=lambda: MappingProxyType({}))
    tail_node_id: int = START_NODE_ID
    next_id: int = START_NODE_ID + 1
