from __future__ import annotations

import pytest

from graph_helpers import wire

from audio_graph import (
    Connection,
    GraphNode,
    GraphState,
    Playground,
    Position,
    RecordingBackend,
    RuntimeSynchronizer,
)


@pytest.fixture
def state() -> GraphState:
    return GraphState()


@pytest.fixture
def backend() -> RecordingBackend:
    return RecordingBackend()


@pytest.fixture
def runtime(backend: RecordingBackend) -> RuntimeSynchronizer:
    return RuntimeSynchronizer(backend)


@pytest.fixture
def playground(backend: RecordingBackend) -> Playground:
    return Playground(backend)


@pytest.fixture
def osc_to_sink() -> tuple[list[GraphNode], list[Connection]]:
    """One default oscillator wired to the sink."""
    nodes = [
        GraphNode(
            id="osc",
            type="oscillator",
            position=Position(x=100, y=200),
            params={"type": "sine", "frequency": 440, "detune": 0},
        ),
        GraphNode(id="destination_0", type="destination", position=Position(x=500, y=200)),
    ]
    return nodes, [wire("c1", "osc", "destination_0")]


@pytest.fixture
def feedback_graph() -> tuple[list[GraphNode], list[Connection]]:
    """Oscillator into a delay whose output loops back through a gain."""
    nodes = [
        GraphNode(id="osc", type="oscillator", params={"type": "sine", "frequency": 440}),
        GraphNode(id="dly", type="delay", params={"delayTime": 0.3}),
        GraphNode(id="fb", type="gain", params={"gain": 0.4}),
        GraphNode(id="destination_0", type="destination"),
    ]
    connections = [
        wire("c1", "osc", "dly"),
        wire("c2", "dly", "fb"),
        wire("c3", "fb", "dly"),
        wire("c4", "fb", "destination_0"),
    ]
    return nodes, connections
