"""Built-in example graphs, from a bare oscillator up to a feedback echo."""

from __future__ import annotations

from audio_graph.models import Connection, Endpoint, GraphNode, Position, Preset
from audio_graph.registry import NodeType, ParamValue
from audio_graph.state import SINK_ID


def _node(
    node_id: str, node_type: NodeType, x: float, y: float, **params: ParamValue
) -> GraphNode:
    return GraphNode(id=node_id, type=node_type, position=Position(x=x, y=y), params=params)


def _sink(x: float, y: float) -> GraphNode:
    return _node(SINK_ID, "destination", x, y)


def _wires(*pairs: tuple[str, str]) -> list[Connection]:
    return [
        Connection(
            id=f"conn_{i}",
            from_=Endpoint(node_id=src, port="output"),
            to=Endpoint(node_id=dst, port="input"),
        )
        for i, (src, dst) in enumerate(pairs, start=1)
    ]


PRESETS: list[Preset] = [
    Preset(
        id="hello-sound",
        name="1. Hello, sound",
        description="An oscillator wired straight to the destination: the smallest audible graph.",
        nodes=[
            _node("osc_1", "oscillator", 100, 200, type="sine", frequency=440, detune=0),
            _sink(500, 200),
        ],
        connections=_wires(("osc_1", SINK_ID)),
    ),
    Preset(
        id="volume-control",
        name="2. Volume control",
        description="A gain stage between oscillator and output; gain 0..1 sets the level.",
        nodes=[
            _node("osc_1", "oscillator", 80, 200, type="sine", frequency=440, detune=0),
            _node("gain_1", "gain", 340, 200, gain=0.3),
            _sink(600, 200),
        ],
        connections=_wires(("osc_1", "gain_1"), ("gain_1", SINK_ID)),
    ),
    Preset(
        id="see-waveform",
        name="3. See the waveform",
        description="An analyser tapped off the gain stage to show waveform and spectrum.",
        nodes=[
            _node("osc_1", "oscillator", 60, 200, type="sawtooth", frequency=220, detune=0),
            _node("gain_1", "gain", 280, 200, gain=0.3),
            _node("analyser_1", "analyser", 500, 120, fftSize="2048"),
            _sink(500, 320),
        ],
        connections=_wires(("osc_1", "gain_1"), ("gain_1", "analyser_1"), ("gain_1", SINK_ID)),
    ),
    Preset(
        id="filter-tone",
        name="4. Tone filter",
        description="A lowpass biquad trims harmonics; move cutoff and Q to hear the change.",
        nodes=[
            _node("osc_1", "oscillator", 60, 200, type="sawtooth", frequency=220, detune=0),
            _node("filter_1", "biquadFilter", 280, 200, type="lowpass", frequency=800, Q=5),
            _node("gain_1", "gain", 500, 200, gain=0.3),
            _sink(720, 200),
        ],
        connections=_wires(("osc_1", "filter_1"), ("filter_1", "gain_1"), ("gain_1", SINK_ID)),
    ),
    Preset(
        id="echo-feedback",
        name="5. Echo",
        description="A delay with a gain in its feedback loop; tune delayTime and feedback gain.",
        nodes=[
            _node("osc_1", "oscillator", 60, 180, type="sine", frequency=440, detune=0),
            _node("gain_dry", "gain", 280, 120, gain=0.4),
            _node("delay_1", "delay", 280, 280, delayTime=0.3),
            _node("gain_fb", "gain", 500, 280, gain=0.4),
            _node("gain_master", "gain", 560, 120, gain=0.5),
            _sink(780, 180),
        ],
        connections=_wires(
            ("osc_1", "gain_dry"),
            ("osc_1", "delay_1"),
            ("delay_1", "gain_fb"),
            ("gain_fb", "delay_1"),
            ("gain_fb", "gain_master"),
            ("gain_dry", "gain_master"),
            ("gain_master", SINK_ID),
        ),
    ),
    Preset(
        id="additive-synth",
        name="6. Additive synth",
        description="Three oscillators at 220/440/660 Hz mixed through individual gains.",
        nodes=[
            _node("osc_1", "oscillator", 60, 80, type="sine", frequency=220, detune=0),
            _node("osc_2", "oscillator", 60, 220, type="sine", frequency=440, detune=0),
            _node("osc_3", "oscillator", 60, 360, type="sine", frequency=660, detune=0),
            _node("gain_1", "gain", 300, 80, gain=0.3),
            _node("gain_2", "gain", 300, 220, gain=0.15),
            _node("gain_3", "gain", 300, 360, gain=0.1),
            _node("gain_master", "gain", 540, 220, gain=0.5),
            _sink(760, 220),
        ],
        connections=_wires(
            ("osc_1", "gain_1"),
            ("osc_2", "gain_2"),
            ("osc_3", "gain_3"),
            ("gain_1", "gain_master"),
            ("gain_2", "gain_master"),
            ("gain_3", "gain_master"),
            ("gain_master", SINK_ID),
        ),
    ),
    Preset(
        id="stereo-panning",
        name="7. Stereo field",
        description="A stereo panner places the tone between left (-1) and right (1).",
        nodes=[
            _node("osc_1", "oscillator", 60, 200, type="square", frequency=330, detune=0),
            _node("gain_1", "gain", 280, 200, gain=0.2),
            _node("panner_1", "stereoPanner", 500, 200, pan=-0.7),
            _sink(720, 200),
        ],
        connections=_wires(("osc_1", "gain_1"), ("gain_1", "panner_1"), ("panner_1", SINK_ID)),
    ),
]

_BY_ID: dict[str, Preset] = {p.id: p for p in PRESETS}


def get_preset(preset_id: str) -> Preset:
    """Return the preset named *preset_id*; raises KeyError if there is none."""
    try:
        return _BY_ID[preset_id]
    except KeyError:
        raise KeyError(f"unknown preset '{preset_id}'") from None
