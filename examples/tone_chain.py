"""Oscillator through a lowpass filter and gain stage to the output."""

from audio_graph import (
    Connection,
    Endpoint,
    GraphNode,
    GraphSnapshot,
    Position,
    graph_to_dot_file,
    render_program_to_file,
    validate_graph,
)


def _wire(conn_id: str, src: str, dst: str) -> Connection:
    return Connection(
        id=conn_id,
        from_=Endpoint(node_id=src, port="output"),
        to=Endpoint(node_id=dst, port="input"),
    )


graph = GraphSnapshot(
    nodes=[
        GraphNode(
            id="osc",
            type="oscillator",
            position=Position(x=60, y=200),
            params={"type": "sawtooth", "frequency": 110, "detune": 7},
        ),
        GraphNode(
            id="lpf",
            type="biquadFilter",
            position=Position(x=280, y=200),
            params={"type": "lowpass", "frequency": 600, "Q": 8},
        ),
        GraphNode(id="vol", type="gain", position=Position(x=500, y=200), params={"gain": 0.2}),
        GraphNode(id="destination_0", type="destination", position=Position(x=720, y=200)),
    ],
    connections=[
        _wire("c1", "osc", "lpf"),
        _wire("c2", "lpf", "vol"),
        _wire("c3", "vol", "destination_0"),
    ],
)

if __name__ == "__main__":
    errors = validate_graph(graph.nodes, graph.connections)
    if errors:
        print("Validation errors:")
        for e in errors:
            print(f"  - {e}")
    else:
        print("Graph is valid.")
    print()
    print(graph.model_dump_json(indent=2, by_alias=True))
    path = render_program_to_file(graph.nodes, graph.connections, "build", "tone_chain")
    print(f"\nGenerated: {path}")
    print(path.read_text())
    dot_path = graph_to_dot_file(graph.nodes, graph.connections, "build", "tone_chain")
    print(f"DOT: {dot_path}")
