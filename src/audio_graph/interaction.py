"""Pointer-driven interaction state machines.

All positions passed in are graph coordinates (already inverse-projected
through pan and zoom by the caller), except for :class:`CanvasPanner`, which
works in screen coordinates because it moves the projection itself.
"""

from __future__ import annotations

from typing import Literal, Union

from pydantic import BaseModel

from audio_graph.models import Endpoint, GraphNode, Position
from audio_graph.registry import PortKind, meta_of
from audio_graph.state import GraphState


class Idle(BaseModel):
    state: Literal["idle"] = "idle"


def port_position(graph: GraphState, node: GraphNode, kind: PortKind) -> Position:
    """World position of a node's port."""
    rel = graph.config.port_offset(kind)
    return node.position.offset(rel.x, rel.y)


def _opposite(kind: PortKind) -> PortKind:
    return "input" if kind == "output" else "output"


# ---------------------------------------------------------------------------
# Connection drafting
# ---------------------------------------------------------------------------


class Dragging(BaseModel):
    state: Literal["dragging"] = "dragging"
    source_node_id: str
    source_port: PortKind
    anchor: Position
    pointer: Position


DraftState = Union[Idle, Dragging]


class ConnectionDrafter:
    """Tracks a wire being dragged out of a port until it is dropped."""

    def __init__(self, graph: GraphState) -> None:
        self.graph = graph
        self.state: DraftState = Idle()

    @property
    def is_dragging(self) -> bool:
        return isinstance(self.state, Dragging)

    def pointer_down(self, node_id: str, port: PortKind) -> bool:
        """Start a draft from *node_id*'s *port*. Returns True if a draft began."""
        if self.is_dragging:
            return False
        node = self.graph.node(node_id)
        if node is None or not meta_of(node.type).has_port(port):
            return False
        anchor = port_position(self.graph, node, port)
        self.state = Dragging(
            source_node_id=node_id, source_port=port, anchor=anchor, pointer=anchor
        )
        return True

    def pointer_move(self, position: Position) -> None:
        if isinstance(self.state, Dragging):
            self.state = self.state.model_copy(update={"pointer": position})

    def pointer_up(self, position: Position) -> str | None:
        """Drop the draft at *position*.

        Connects to the first node (in node order) whose opposite-kind port
        is within snapping distance. Returns the new connection id, or None
        if nothing was connected.
        """
        draft = self.state
        self.state = Idle()
        if not isinstance(draft, Dragging):
            return None
        if self.graph.node(draft.source_node_id) is None:
            return None

        target = self._find_target(draft, position)
        if target is None:
            return None

        source = Endpoint(node_id=draft.source_node_id, port=draft.source_port)
        other = Endpoint(node_id=target.id, port=_opposite(draft.source_port))
        if draft.source_port == "output":
            return self.graph.add_connection(source, other)
        return self.graph.add_connection(other, source)

    def _find_target(self, draft: Dragging, release: Position) -> GraphNode | None:
        wanted = _opposite(draft.source_port)
        threshold = self.graph.config.snap_distance / self.graph.view.zoom
        for node in self.graph.nodes:
            if node.id == draft.source_node_id:
                continue
            if not meta_of(node.type).has_port(wanted):
                continue
            if port_position(self.graph, node, wanted).distance_to(release) < threshold:
                return node
        return None


# ---------------------------------------------------------------------------
# Node dragging
# ---------------------------------------------------------------------------


class Moving(BaseModel):
    state: Literal["moving"] = "moving"
    node_id: str
    grab_dx: float
    grab_dy: float


class NodeDragger:
    """Moves a node while keeping the grab point under the pointer."""

    def __init__(self, graph: GraphState) -> None:
        self.graph = graph
        self.state: Union[Idle, Moving] = Idle()

    def pointer_down(self, node_id: str, position: Position) -> bool:
        node = self.graph.node(node_id)
        if node is None:
            return False
        self.graph.select_node(node_id)
        self.state = Moving(
            node_id=node_id,
            grab_dx=position.x - node.position.x,
            grab_dy=position.y - node.position.y,
        )
        return True

    def pointer_move(self, position: Position) -> None:
        if isinstance(self.state, Moving):
            self.graph.move_node(
                self.state.node_id,
                Position(x=position.x - self.state.grab_dx, y=position.y - self.state.grab_dy),
            )

    def pointer_up(self) -> None:
        self.state = Idle()


# ---------------------------------------------------------------------------
# Canvas panning
# ---------------------------------------------------------------------------


class Panning(BaseModel):
    state: Literal["panning"] = "panning"
    start_pointer: Position
    start_offset: Position


class CanvasPanner:
    """Pans the view; positions here are screen coordinates."""

    def __init__(self, graph: GraphState) -> None:
        self.graph = graph
        self.state: Union[Idle, Panning] = Idle()

    def pointer_down(self, screen: Position) -> None:
        self.state = Panning(start_pointer=screen, start_offset=self.graph.view.offset)

    def pointer_move(self, screen: Position) -> None:
        if isinstance(self.state, Panning):
            start = self.state.start_offset
            self.graph.set_canvas_offset(
                start.offset(
                    screen.x - self.state.start_pointer.x,
                    screen.y - self.state.start_pointer.y,
                )
            )

    def pointer_up(self) -> None:
        self.state = Idle()
