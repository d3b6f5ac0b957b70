"""Per-type primitive bindings shared by the runtime and the code generator.

One table describes, for each node type, how its primitive is constructed
and which backend control each registry param drives.  The runtime uses it to
configure on build and to route live param edits, and the code generator
uses it to render configure statements, so the three can never disagree.
"""

from __future__ import annotations

from typing import Any, Callable, Literal

from pydantic import BaseModel

from audio_graph.registry import NodeType, ParamValue


def _number(value: ParamValue) -> float:
    return float(value)


def _integer(value: ParamValue) -> int:
    return int(float(value))


def _text(value: ParamValue) -> str:
    return str(value)


_COERCE: dict[str, Callable[[ParamValue], Any]] = {
    "number": _number,
    "integer": _integer,
    "text": _text,
}


class ControlBinding(BaseModel):
    target: str
    value_type: Literal["number", "integer", "text"] = "number"
    # a-rate/k-rate controls are written through ``.value``
    audio_param: bool = True
    # the code generator leaves this line out when the value equals omit_when
    omit_when: float | None = None

    def coerce(self, value: ParamValue) -> Any:
        return _COERCE[self.value_type](value)

    def omitted(self, value: ParamValue) -> bool:
        if self.omit_when is None or isinstance(value, str):
            return False
        return float(value) == self.omit_when


class PrimitiveBinding(BaseModel):
    factory: str | None = None
    options: dict[str, float] = {}
    is_source: bool = False
    is_sink: bool = False
    controls: dict[str, ControlBinding] = {}


def _param(target: str, **kw: Any) -> ControlBinding:
    return ControlBinding(target=target, **kw)


def _prop(target: str, value_type: Literal["number", "integer", "text"]) -> ControlBinding:
    return ControlBinding(target=target, value_type=value_type, audio_param=False)


BINDINGS: dict[str, PrimitiveBinding] = {
    "oscillator": PrimitiveBinding(
        factory="createOscillator",
        is_source=True,
        controls={
            "type": _prop("type", "text"),
            "frequency": _param("frequency"),
            "detune": _param("detune", omit_when=0.0),
        },
    ),
    "gain": PrimitiveBinding(
        factory="createGain",
        controls={"gain": _param("gain")},
    ),
    "destination": PrimitiveBinding(is_sink=True),
    "analyser": PrimitiveBinding(
        factory="createAnalyser",
        controls={"fftSize": _prop("fftSize", "integer")},
    ),
    "biquadFilter": PrimitiveBinding(
        factory="createBiquadFilter",
        controls={
            "type": _prop("type", "text"),
            "frequency": _param("frequency"),
            "Q": _param("Q"),
        },
    ),
    "delay": PrimitiveBinding(
        factory="createDelay",
        options={"maxDelayTime": 5.0},
        controls={"delayTime": _param("delayTime")},
    ),
    "stereoPanner": PrimitiveBinding(
        factory="createStereoPanner",
        controls={"pan": _param("pan")},
    ),
    "dynamicsCompressor": PrimitiveBinding(
        factory="createDynamicsCompressor",
        controls={
            "threshold": _param("threshold"),
            "knee": _param("knee"),
            "ratio": _param("ratio"),
            "attack": _param("attack"),
            "release": _param("release"),
        },
    ),
}


def binding_for(node_type: NodeType | str) -> PrimitiveBinding | None:
    """Return the binding for *node_type*, or None for types the runtime cannot build."""
    return BINDINGS.get(node_type)
