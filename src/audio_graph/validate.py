from __future__ import annotations

from collections.abc import Sequence

from audio_graph.models import Connection, GraphNode
from audio_graph.registry import NODE_REGISTRY, SINK_TYPE, meta_of


class GraphValidationError(str):
    """A validation finding that reads as its message.

    Besides the node it concerns, a finding can point at a connection
    (``connection_id``) and at the endpoint or param involved
    (``field_name``: ``"from"``, ``"to"`` or a param key).  ``severity`` is
    ``"warning"`` for findings that still leave a playable graph.
    """

    kind: str
    node_id: str | None
    connection_id: str | None
    field_name: str | None
    severity: str  # "error" | "warning"

    def __new__(
        cls,
        kind: str,
        message: str,
        *,
        node_id: str | None = None,
        connection_id: str | None = None,
        field_name: str | None = None,
        severity: str = "error",
    ) -> GraphValidationError:
        return super().__new__(cls, message)

    def __init__(
        self,
        kind: str,
        message: str,
        *,
        node_id: str | None = None,
        connection_id: str | None = None,
        field_name: str | None = None,
        severity: str = "error",
    ) -> None:
        self.kind = kind
        self.node_id = node_id
        self.connection_id = connection_id
        self.field_name = field_name
        self.severity = severity


def validate_graph(
    nodes: Sequence[GraphNode], connections: Sequence[Connection]
) -> list[GraphValidationError]:
    """Check a graph's referential integrity and param schema.

    Returns errors first, then warnings; an empty list means the graph is
    clean.  Feedback cycles are legal and never reported.
    """
    errors: list[GraphValidationError] = []
    warnings: list[GraphValidationError] = []

    # 1. Unique node IDs
    by_id: dict[str, GraphNode] = {}
    for node in nodes:
        if node.id in by_id:
            errors.append(
                GraphValidationError(
                    "duplicate_id", f"Duplicate node ID: '{node.id}'", node_id=node.id
                )
            )
            continue
        by_id[node.id] = node

    # 2. Exactly one sink
    sinks = [n.id for n in nodes if n.type == SINK_TYPE]
    if len(sinks) > 1:
        errors.append(
            GraphValidationError(
                "multiple_sinks", f"Graph has {len(sinks)} sinks: {', '.join(sinks)}"
            )
        )
    elif not sinks:
        warnings.append(
            GraphValidationError(
                "missing_sink", "Graph has no destination; nothing will be heard",
                severity="warning",
            )
        )

    # 3. Params match the type's schema
    for node in nodes:
        if node.type not in NODE_REGISTRY:
            continue
        meta = meta_of(node.type)
        for key, value in node.params.items():
            definition = meta.param(key)
            if definition is None:
                errors.append(
                    GraphValidationError(
                        "unknown_param",
                        f"Node '{node.id}' ({node.type}) has no param '{key}'",
                        node_id=node.id,
                        field_name=key,
                    )
                )
            elif not definition.accepts(value):
                warnings.append(
                    GraphValidationError(
                        "param_out_of_range",
                        f"Node '{node.id}' param '{key}' value {value!r} is outside its range",
                        node_id=node.id,
                        field_name=key,
                        severity="warning",
                    )
                )

    # 4. Connections: unique IDs, resolvable endpoints, right port kinds, no duplicates
    conn_ids: set[str] = set()
    quads: set[tuple[str, str, str, str]] = set()
    for conn in connections:
        if conn.id in conn_ids:
            errors.append(
                GraphValidationError(
                    "duplicate_connection_id",
                    f"Duplicate connection ID: '{conn.id}'",
                    connection_id=conn.id,
                )
            )
        conn_ids.add(conn.id)

        for field_name, end, kind in (("from", conn.from_, "output"), ("to", conn.to, "input")):
            node = by_id.get(end.node_id)
            if node is None:
                errors.append(
                    GraphValidationError(
                        "dangling_connection",
                        f"Connection '{conn.id}' {field_name} references unknown node "
                        f"'{end.node_id}'",
                        connection_id=conn.id,
                        field_name=field_name,
                    )
                )
            elif end.port != kind or not meta_of(node.type).has_port(kind):
                errors.append(
                    GraphValidationError(
                        "bad_port",
                        f"Connection '{conn.id}' {field_name} needs an {kind} port on "
                        f"'{end.node_id}'",
                        node_id=end.node_id,
                        connection_id=conn.id,
                        field_name=field_name,
                    )
                )

        quad = conn.quad()
        if quad in quads:
            errors.append(
                GraphValidationError(
                    "duplicate_connection",
                    f"Connection '{conn.id}' duplicates {quad[0]}.{quad[1]} -> "
                    f"{quad[2]}.{quad[3]}",
                    connection_id=conn.id,
                )
            )
        quads.add(quad)

    errors.extend(warnings)
    return errors
