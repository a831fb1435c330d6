"""Campaign flow builder: a linear outreach automation graph."""

from .errors import (
    DuplicateEdgeError,
    DuplicateIdError,
    FlowGraphError,
    InvalidWaitParamsError,
    ProtectedNodeError,
    UnknownEdgeError,
    UnknownNodeError,
)
from .flow_builder import AppendResult, FlowBuilder
from .graph_model import FlowEdge, FlowNode, FlowState, WaitParams
from .graph_store import GraphStore
from .id_allocator import IdAllocator
from .prompts import ConsolePrompts, ModalPrompts, ScriptedPrompts
from .settings import FlowSettings, load_settings
from .surface import Canvas, CanvasState, EdgeView, NodeView

__all__ = [
    "FlowNode",
    "FlowEdge",
    "FlowState",
    "WaitParams",
    "IdAllocator",
    "GraphStore",
    "FlowBuilder",
    "AppendResult",
    "ModalPrompts",
    "ScriptedPrompts",
    "ConsolePrompts",
    "Canvas",
    "CanvasState",
    "NodeView",
    "EdgeView",
    "FlowSettings",
    "load_settings",
    "FlowGraphError",
    "DuplicateIdError",
    "UnknownNodeError",
    "DuplicateEdgeError",
    "UnknownEdgeError",
    "ProtectedNodeError",
    "InvalidWaitParamsError",
]
