"""Mutable graph model: nodes, connections, selection and view state.

Every operation is applied completely or not at all, and an operation that
names an id which no longer exists is a silent no-op.  The model never
validates port kinds or param values; callers (the interaction layer and the
inspector) only propose legal edits.
"""

from __future__ import annotations

from collections.abc import Iterable

from audio_graph.config import DEFAULT_CONFIG, EditorConfig
from audio_graph.models import (
    Connection,
    Endpoint,
    GraphNode,
    GraphSnapshot,
    Position,
    ViewState,
)
from audio_graph.registry import SINK_TYPE, NodeType, ParamValue, default_params

SINK_ID = "destination_0"


class IdAllocator:
    """Monotonic id source owned by one graph.

    Ids are ``{prefix}_{n}`` with ``n`` shared across prefixes and never
    decreasing, so an id is never handed out twice even after deletion.
    """

    def __init__(self, start: int = 1) -> None:
        self._next = start

    def allocate(self, prefix: str, taken: set[str] | None = None) -> str:
        while True:
            candidate = f"{prefix}_{self._next}"
            self._next += 1
            if not taken or candidate not in taken:
                return candidate


def initial_nodes() -> list[GraphNode]:
    """The starting graph: just the output sink."""
    return [GraphNode(id=SINK_ID, type=SINK_TYPE, position=Position(x=600, y=250))]


class GraphState:
    def __init__(
        self,
        config: EditorConfig | None = None,
        ids: IdAllocator | None = None,
    ) -> None:
        self.config = config or DEFAULT_CONFIG
        self._ids = ids or IdAllocator()
        self.nodes: list[GraphNode] = initial_nodes()
        # every id this graph has ever held; allocation never hands one out again
        self._seen: set[str] = {n.id for n in self.nodes}
        self.connections: list[Connection] = []
        self.selected: str | None = None
        self.playing = False
        self.view = ViewState()

    # -- Queries ------------------------------------------------------------

    def node(self, node_id: str) -> GraphNode | None:
        return next((n for n in self.nodes if n.id == node_id), None)

    def connection(self, connection_id: str) -> Connection | None:
        return next((c for c in self.connections if c.id == connection_id), None)

    def snapshot(self) -> GraphSnapshot:
        """Return a deep copy of the whole state."""
        return GraphSnapshot(
            nodes=[n.model_copy(deep=True) for n in self.nodes],
            connections=[c.model_copy(deep=True) for c in self.connections],
            selected=self.selected,
            playing=self.playing,
            view=self.view.model_copy(deep=True),
        )

    def _allocate(self, prefix: str) -> str:
        new_id = self._ids.allocate(prefix, self._seen)
        self._seen.add(new_id)
        return new_id

    # -- Nodes --------------------------------------------------------------

    def add_node(self, node_type: NodeType, position: Position) -> str:
        node_id = self._allocate("node")
        node = GraphNode(
            id=node_id,
            type=node_type,
            position=position.model_copy(),
            params=default_params(node_type),
        )
        self.nodes = [*self.nodes, node]
        return node_id

    def remove_node(self, node_id: str) -> None:
        if self.node(node_id) is None:
            return
        nodes = [n for n in self.nodes if n.id != node_id]
        connections = [c for c in self.connections if not c.references(node_id)]
        self.nodes = nodes
        self.connections = connections
        if self.selected == node_id:
            self.selected = None

    def move_node(self, node_id: str, position: Position) -> None:
        node = self.node(node_id)
        if node is not None:
            node.position = position.model_copy()

    def update_param(self, node_id: str, key: str, value: ParamValue) -> None:
        node = self.node(node_id)
        if node is not None:
            node.params = {**node.params, key: value}

    # -- Connections --------------------------------------------------------

    def add_connection(self, from_: Endpoint, to: Endpoint) -> str | None:
        """Add a from -> to connection unless one with the same endpoints exists.

        Returns the new connection id, or None when the call was a duplicate.
        """
        quad = (from_.node_id, from_.port, to.node_id, to.port)
        if any(c.quad() == quad for c in self.connections):
            return None
        conn = Connection(
            id=self._allocate("conn"),
            from_=from_.model_copy(),
            to=to.model_copy(),
        )
        self.connections = [*self.connections, conn]
        return conn.id

    def remove_connection(self, connection_id: str) -> None:
        self.connections = [c for c in self.connections if c.id != connection_id]

    # -- Selection, view and transport ---------------------------------------

    def select_node(self, node_id: str | None) -> None:
        self.selected = node_id

    def set_canvas_offset(self, offset: Position) -> None:
        self.view = ViewState(offset=offset.model_copy(), zoom=self.view.zoom)

    def set_zoom(self, zoom: float) -> None:
        self.view = ViewState(offset=self.view.offset, zoom=self.config.clamp_zoom(zoom))

    def set_view_state(self, offset: Position, zoom: float) -> None:
        self.view = ViewState(offset=offset.model_copy(), zoom=self.config.clamp_zoom(zoom))

    def set_playing(self, playing: bool) -> None:
        self.playing = playing

    # -- Presets ------------------------------------------------------------

    def load_preset(self, nodes: Iterable[GraphNode], connections: Iterable[Connection]) -> None:
        """Replace the graph wholesale.

        Stopping any live runtime graph beforehand is the caller's job.
        """
        new_nodes = [n.model_copy(deep=True) for n in nodes]
        new_connections = [c.model_copy(deep=True) for c in connections]
        self.nodes = new_nodes
        self.connections = new_connections
        self._seen.update(n.id for n in new_nodes)
        self._seen.update(c.id for c in new_connections)
        self.selected = None
        self.playing = False
