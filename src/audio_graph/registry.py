"""Node type registry: the static catalog of node types, ports and params."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal, Union

from pydantic import BaseModel

if TYPE_CHECKING:
    from audio_graph.models import GraphNode

NodeType = Literal[
    "oscillator",
    "gain",
    "destination",
    "analyser",
    "biquadFilter",
    "delay",
    "stereoPanner",
    "dynamicsCompressor",
]
NodeCategory = Literal["source", "effect", "analysis", "output"]
PortKind = Literal["input", "output"]

# Param values are either numbers (range) or strings (select).
ParamValue = Union[float, int, str]

SINK_TYPE: NodeType = "destination"

CATEGORY_COLORS: dict[str, str] = {
    "source": "#3b82f6",
    "effect": "#22c55e",
    "analysis": "#a855f7",
    "output": "#f97316",
}


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


class PortDefinition(BaseModel):
    id: str
    kind: PortKind
    label: str


class ParamOption(BaseModel):
    label: str
    value: str


class ParamDefinition(BaseModel):
    key: str
    label: str
    type: Literal["range", "select"]
    min: float | None = None
    max: float | None = None
    step: float | None = None
    default: ParamValue
    options: list[ParamOption] = []

    def option_values(self) -> list[str]:
        return [opt.value for opt in self.options]

    def accepts(self, value: ParamValue) -> bool:
        """Return True if *value* lies within this definition's range or options."""
        if self.type == "select":
            return str(value) in self.option_values()
        if isinstance(value, str):
            return False
        lo = self.min if self.min is not None else float("-inf")
        hi = self.max if self.max is not None else float("inf")
        return lo <= value <= hi

    def clamp(self, value: ParamValue) -> ParamValue:
        """Constrain *value* the way the inspector controls do.

        Range values are clamped into ``[min, max]``; select values outside
        the option list fall back to the default.
        """
        if self.type == "select":
            return value if str(value) in self.option_values() else self.default
        if isinstance(value, str):
            return self.default
        if self.min is not None:
            value = max(self.min, value)
        if self.max is not None:
            value = min(self.max, value)
        return value


class NodeMeta(BaseModel):
    type: NodeType
    label: str
    category: NodeCategory
    ports: list[PortDefinition]
    params: list[ParamDefinition] = []
    description: str

    def has_port(self, kind: PortKind) -> bool:
        return any(p.kind == kind for p in self.ports)

    def param(self, key: str) -> ParamDefinition | None:
        return next((p for p in self.params if p.key == key), None)

    @property
    def param_keys(self) -> list[str]:
        return [p.key for p in self.params]


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

_IN = PortDefinition(id="input", kind="input", label="in")
_OUT = PortDefinition(id="output", kind="output", label="out")


def _options(*values: str) -> list[ParamOption]:
    return [ParamOption(label=v if v.isdigit() else v.capitalize(), value=v) for v in values]


NODE_REGISTRY: dict[str, NodeMeta] = {
    "oscillator": NodeMeta(
        type="oscillator",
        label="Oscillator",
        category="source",
        ports=[_OUT],
        params=[
            ParamDefinition(
                key="type",
                label="Waveform",
                type="select",
                default="sine",
                options=_options("sine", "square", "sawtooth", "triangle"),
            ),
            ParamDefinition(
                key="frequency", label="Frequency", type="range", min=20, max=2000, step=1,
                default=440,
            ),
            ParamDefinition(
                key="detune", label="Detune", type="range", min=-100, max=100, step=1, default=0
            ),
        ],
        description="Periodic waveform generator. Maps to an OscillatorNode.",
    ),
    "gain": NodeMeta(
        type="gain",
        label="Gain",
        category="effect",
        ports=[_IN, _OUT],
        params=[
            ParamDefinition(
                key="gain", label="Gain", type="range", min=0, max=1, step=0.01, default=0.5
            ),
        ],
        description="Volume control. Maps to a GainNode.",
    ),
    "destination": NodeMeta(
        type="destination",
        label="Destination",
        category="output",
        ports=[_IN],
        description="Final audio output (speakers). Maps to the AudioDestinationNode.",
    ),
    "analyser": NodeMeta(
        type="analyser",
        label="Analyser",
        category="analysis",
        ports=[_IN, _OUT],
        params=[
            ParamDefinition(
                key="fftSize",
                label="FFT Size",
                type="select",
                default="2048",
                options=_options("256", "512", "1024", "2048", "4096"),
            ),
        ],
        description="Waveform and spectrum analysis. Maps to an AnalyserNode.",
    ),
    "biquadFilter": NodeMeta(
        type="biquadFilter",
        label="BiquadFilter",
        category="effect",
        ports=[_IN, _OUT],
        params=[
            ParamDefinition(
                key="type",
                label="Filter Type",
                type="select",
                default="lowpass",
                options=_options("lowpass", "highpass", "bandpass", "notch", "peaking"),
            ),
            ParamDefinition(
                key="frequency", label="Frequency", type="range", min=20, max=20000, step=1,
                default=1000,
            ),
            ParamDefinition(key="Q", label="Q", type="range", min=0.1, max=20, step=0.1, default=1),
        ],
        description="Second-order filter. Maps to a BiquadFilterNode.",
    ),
    "delay": NodeMeta(
        type="delay",
        label="Delay",
        category="effect",
        ports=[_IN, _OUT],
        params=[
            ParamDefinition(
                key="delayTime", label="Delay Time", type="range", min=0, max=5, step=0.01,
                default=0.5,
            ),
        ],
        description="Delays the signal. Maps to a DelayNode.",
    ),
    "stereoPanner": NodeMeta(
        type="stereoPanner",
        label="StereoPanner",
        category="effect",
        ports=[_IN, _OUT],
        params=[
            ParamDefinition(
                key="pan", label="Pan", type="range", min=-1, max=1, step=0.01, default=0
            ),
        ],
        description="Left/right placement. Maps to a StereoPannerNode.",
    ),
    "dynamicsCompressor": NodeMeta(
        type="dynamicsCompressor",
        label="Compressor",
        category="effect",
        ports=[_IN, _OUT],
        params=[
            ParamDefinition(
                key="threshold", label="Threshold", type="range", min=-100, max=0, step=1,
                default=-24,
            ),
            ParamDefinition(
                key="knee", label="Knee", type="range", min=0, max=40, step=1, default=30
            ),
            ParamDefinition(
                key="ratio", label="Ratio", type="range", min=1, max=20, step=0.5, default=12
            ),
            ParamDefinition(
                key="attack", label="Attack", type="range", min=0, max=1, step=0.001,
                default=0.003,
            ),
            ParamDefinition(
                key="release", label="Release", type="range", min=0, max=1, step=0.01,
                default=0.25,
            ),
        ],
        description="Compresses dynamic range. Maps to a DynamicsCompressorNode.",
    ),
}

# Everything the palette offers; the sink is always present and never added.
PALETTE_NODES: list[NodeMeta] = [m for m in NODE_REGISTRY.values() if m.type != SINK_TYPE]


def meta_of(node_type: NodeType) -> NodeMeta:
    """Return the metadata for *node_type*."""
    return NODE_REGISTRY[node_type]


def default_params(node_type: NodeType) -> dict[str, ParamValue]:
    """Build a fresh params mapping holding every declared default."""
    return {p.key: p.default for p in meta_of(node_type).params}


def param_value(node: GraphNode, key: str) -> ParamValue | None:
    """Return the node's override for *key*, or the type default if absent."""
    if key in node.params:
        return node.params[key]
    definition = meta_of(node.type).param(key)
    return definition.default if definition is not None else None


def param_preview(node: GraphNode, limit: int = 2) -> str:
    """Summarize the first *limit* params as ``Label: value | Label: value``."""
    meta = meta_of(node.type)
    return " | ".join(f"{p.label}: {param_value(node, p.key)}" for p in meta.params[:limit])
