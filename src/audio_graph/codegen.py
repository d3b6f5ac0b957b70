"""Program generation: render a graph as an equivalent Web Audio script."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from pydantic import BaseModel

from audio_graph.bindings import binding_for
from audio_graph.models import Connection, GraphNode
from audio_graph.registry import SINK_TYPE, ParamValue, meta_of, param_value

SINK_NAME = "ctx.destination"
EMPTY_PROGRAM = "// Add nodes and connect them\n"


class Statement(BaseModel):
    kind: Literal["construct", "configure", "connect", "start"]
    target: str
    factory: str | None = None
    args: list[float] = []
    control: str | None = None
    value: ParamValue | None = None
    audio_param: bool = False
    peer: str | None = None

    def render(self) -> str:
        if self.kind == "construct":
            args = ", ".join(_literal(a) for a in self.args)
            return f"const {self.target} = ctx.{self.factory}({args});"
        if self.kind == "configure":
            lhs = f"{self.target}.{self.control}"
            if self.audio_param:
                lhs += ".value"
            return f"{lhs} = {_literal(self.value)};"
        if self.kind == "connect":
            return f"{self.target}.connect({self.peer});"
        return f"{self.target}.start();"


def _literal(value: ParamValue | None) -> str:
    """Format a value as a JavaScript literal (440.0 -> 440, 'sine' -> 'sine')."""
    if isinstance(value, str):
        return "'" + value.replace("\\", "\\\\").replace("'", "\\'") + "'"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def display_names(nodes: Sequence[GraphNode]) -> dict[str, str]:
    """Assign each node its variable name: ``{type}``, ``{type}2``, ``{type}3``..."""
    names: dict[str, str] = {}
    counters: dict[str, int] = {}
    for node in nodes:
        if node.type == SINK_TYPE:
            names[node.id] = SINK_NAME
            continue
        counters[node.type] = counters.get(node.type, 0) + 1
        n = counters[node.type]
        names[node.id] = node.type if n == 1 else f"{node.type}{n}"
    return names


def serialize(nodes: Sequence[GraphNode], connections: Sequence[Connection]) -> list[Statement]:
    """Translate a graph into an ordered list of statements.

    Order: per node a construct followed by its configures, then every
    connection in stored order, then one start per source node.
    """
    names = display_names(nodes)
    out: list[Statement] = []

    for node in nodes:
        binding = binding_for(node.type)
        if node.type == SINK_TYPE or binding is None or binding.factory is None:
            continue
        name = names[node.id]
        out.append(
            Statement(
                kind="construct",
                target=name,
                factory=binding.factory,
                args=list(binding.options.values()),
            )
        )
        for key in meta_of(node.type).param_keys:
            control = binding.controls.get(key)
            value = param_value(node, key)
            if control is None or value is None or control.omitted(value):
                continue
            try:
                rendered = control.coerce(value)
            except (TypeError, ValueError):
                rendered = value
            out.append(
                Statement(
                    kind="configure",
                    target=name,
                    control=control.target,
                    value=rendered,
                    audio_param=control.audio_param,
                )
            )

    for conn in connections:
        src = names.get(conn.from_.node_id)
        dst = names.get(conn.to.node_id)
        if src is None or dst is None:
            continue
        out.append(Statement(kind="connect", target=src, peer=dst))

    for node in nodes:
        binding = binding_for(node.type)
        if binding is not None and binding.is_source:
            out.append(Statement(kind="start", target=names[node.id]))

    return out


def render_program(nodes: Sequence[GraphNode], connections: Sequence[Connection]) -> str:
    """Render the graph as a runnable Web Audio script."""
    if not nodes:
        return EMPTY_PROGRAM

    lines: list[str] = ["const ctx = new AudioContext();", ""]
    w = lines.append
    previous: str | None = None
    for stmt in serialize(nodes, connections):
        # blank line before each node block and before the connect/start sections
        starts_block = stmt.kind == "construct" or (
            stmt.kind in ("connect", "start") and stmt.kind != previous
        )
        if previous is not None and starts_block:
            w("")
        w(stmt.render())
        previous = stmt.kind

    while lines and lines[-1] == "":
        lines.pop()
    return "\n".join(lines) + "\n"


def render_program_to_file(
    nodes: Sequence[GraphNode],
    connections: Sequence[Connection],
    output_dir: str | Path,
    name: str = "graph",
) -> Path:
    """Render the program and write ``{name}.js`` to *output_dir*.

    Creates the output directory if it doesn't exist.
    """
    code = render_program(nodes, connections)
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    path = out / f"{name}.js"
    path.write_text(code)
    return path
