from __future__ import annotations

import math

from pydantic import BaseModel, Field

from audio_graph.registry import NodeType, ParamValue, PortKind

# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0

    def offset(self, dx: float, dy: float) -> Position:
        return Position(x=self.x + dx, y=self.y + dy)

    def distance_to(self, other: Position) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


# ---------------------------------------------------------------------------
# Nodes and connections
# ---------------------------------------------------------------------------


class GraphNode(BaseModel):
    id: str
    type: NodeType
    position: Position = Field(default_factory=Position)
    params: dict[str, ParamValue] = {}


class Endpoint(BaseModel):
    node_id: str = Field(alias="nodeId")
    port: PortKind

    model_config = {"populate_by_name": True}

    def key(self) -> tuple[str, str]:
        return (self.node_id, self.port)


class Connection(BaseModel):
    id: str
    from_: Endpoint = Field(alias="from")
    to: Endpoint

    model_config = {"populate_by_name": True}

    def quad(self) -> tuple[str, str, str, str]:
        """Return the (from-node, from-port, to-node, to-port) identity."""
        return (self.from_.node_id, self.from_.port, self.to.node_id, self.to.port)

    def references(self, node_id: str) -> bool:
        return self.from_.node_id == node_id or self.to.node_id == node_id


# ---------------------------------------------------------------------------
# Whole-state aggregates
# ---------------------------------------------------------------------------


class ViewState(BaseModel):
    offset: Position = Field(default_factory=Position)
    zoom: float = 1.0


class GraphSnapshot(BaseModel):
    nodes: list[GraphNode] = []
    connections: list[Connection] = []
    selected: str | None = None
    playing: bool = False
    view: ViewState = Field(default_factory=ViewState)


class Preset(BaseModel):
    id: str
    name: str
    description: str
    nodes: list[GraphNode]
    connections: list[Connection]
