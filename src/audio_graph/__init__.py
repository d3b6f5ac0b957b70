"""Visual audio node graphs: model, runtime synchronizer and program generator."""

from audio_graph.backend import AudioBackend, BackendError, RecordedPrimitive, RecordingBackend
from audio_graph.bindings import BINDINGS, ControlBinding, PrimitiveBinding, binding_for
from audio_graph.codegen import (
    Statement,
    display_names,
    render_program,
    render_program_to_file,
    serialize,
)
from audio_graph.config import DEFAULT_CONFIG, EditorConfig, load_config
from audio_graph.interaction import (
    CanvasPanner,
    ConnectionDrafter,
    Dragging,
    Idle,
    NodeDragger,
    port_position,
)
from audio_graph.models import (
    Connection,
    Endpoint,
    GraphNode,
    GraphSnapshot,
    Position,
    Preset,
    ViewState,
)
from audio_graph.presets import PRESETS, get_preset
from audio_graph.registry import (
    CATEGORY_COLORS,
    NODE_REGISTRY,
    PALETTE_NODES,
    NodeMeta,
    NodeType,
    ParamDefinition,
    PortDefinition,
    default_params,
    meta_of,
    param_preview,
    param_value,
)
from audio_graph.runtime import MaterializedNode, RuntimeSynchronizer
from audio_graph.session import Playground
from audio_graph.state import SINK_ID, GraphState, IdAllocator
from audio_graph.validate import GraphValidationError, validate_graph
from audio_graph.visualize import graph_to_dot, graph_to_dot_file

__all__ = [
    "BINDINGS",
    "CATEGORY_COLORS",
    "DEFAULT_CONFIG",
    "NODE_REGISTRY",
    "PALETTE_NODES",
    "PRESETS",
    "SINK_ID",
    "AudioBackend",
    "BackendError",
    "CanvasPanner",
    "Connection",
    "ConnectionDrafter",
    "ControlBinding",
    "Dragging",
    "EditorConfig",
    "Endpoint",
    "GraphNode",
    "GraphSnapshot",
    "GraphState",
    "GraphValidationError",
    "IdAllocator",
    "Idle",
    "MaterializedNode",
    "NodeDragger",
    "NodeMeta",
    "NodeType",
    "ParamDefinition",
    "Playground",
    "PortDefinition",
    "Position",
    "Preset",
    "PrimitiveBinding",
    "RecordedPrimitive",
    "RecordingBackend",
    "RuntimeSynchronizer",
    "Statement",
    "ViewState",
    "binding_for",
    "default_params",
    "display_names",
    "get_preset",
    "graph_to_dot",
    "graph_to_dot_file",
    "load_config",
    "meta_of",
    "param_preview",
    "param_value",
    "port_position",
    "render_program",
    "render_program_to_file",
    "serialize",
    "validate_graph",
]
