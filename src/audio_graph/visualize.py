"""Graphviz DOT visualization for audio graphs."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

from audio_graph.models import Connection, GraphNode
from audio_graph.registry import CATEGORY_COLORS, meta_of, param_preview


def _node_attrs(node: GraphNode) -> tuple[str, str, str]:
    """Return (shape, fillcolor, label) for a graph node."""
    meta = meta_of(node.type)
    color = CATEGORY_COLORS[meta.category]
    label = f"{meta.label}\\n{node.id}"
    preview = param_preview(node)
    if preview:
        label += "\\n" + preview.replace('"', '\\"')
    if meta.category == "source":
        return "box", color, label
    if meta.category == "output":
        return "doubleoctagon", color, label
    if meta.category == "analysis":
        return "note", color, label
    return "box", color, label


def graph_to_dot(
    nodes: Sequence[GraphNode], connections: Sequence[Connection], name: str = "graph"
) -> str:
    """Convert an audio graph to a Graphviz DOT string."""
    lines: list[str] = []
    w = lines.append

    w(f'digraph "{name}" {{')
    w("    rankdir=LR;")
    w('    node [fontname="Helvetica" fontsize=10 fontcolor="white"];')
    w("")

    node_ids = set()
    for node in nodes:
        node_ids.add(node.id)
        shape, color, label = _node_attrs(node)
        w(f'    "{node.id}" [shape={shape} style=filled fillcolor="{color}" label="{label}"];')

    w("")

    for conn in connections:
        src, dst = conn.from_.node_id, conn.to.node_id
        if src not in node_ids or dst not in node_ids:
            continue
        w(f'    "{src}" -> "{dst}" [tooltip="{conn.id}"];')

    w("}")
    return "\n".join(lines) + "\n"


def graph_to_dot_file(
    nodes: Sequence[GraphNode],
    connections: Sequence[Connection],
    output_dir: str | Path,
    name: str = "graph",
) -> Path:
    """Write the graph to ``output_dir/{name}.dot`` and return that path.

    Edges carry their connection id as a tooltip.  When Graphviz is
    installed the drawing is also rendered to ``{name}.pdf``.
    """
    dot_src = graph_to_dot(nodes, connections, name)
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    dot_path = out / f"{name}.dot"
    dot_path.write_text(dot_src)

    dot_bin = shutil.which("dot")
    if dot_bin is not None:
        pdf_path = out / f"{name}.pdf"
        subprocess.run(
            [dot_bin, "-Tpdf", str(dot_path), "-o", str(pdf_path)],
            check=True,
        )

    return dot_path
