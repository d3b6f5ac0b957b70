"""Editor configuration: zoom bounds, snapping and node geometry."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, model_validator

from audio_graph.models import Position
from audio_graph.registry import PortKind


class EditorConfig(BaseModel):
    zoom_min: float = 0.25
    zoom_max: float = 2.0
    # Port snapping radius in screen units (i.e. at zoom 1).
    snap_distance: float = 20.0
    node_width: float = 160.0
    node_height: float = 80.0
    port_y: float = 50.0

    @model_validator(mode="after")
    def _check_bounds(self) -> EditorConfig:
        if self.zoom_min <= 0 or self.zoom_min > self.zoom_max:
            raise ValueError(
                f"zoom range [{self.zoom_min}, {self.zoom_max}] must be positive and ordered"
            )
        if self.snap_distance <= 0:
            raise ValueError("snap_distance must be positive")
        return self

    def clamp_zoom(self, zoom: float) -> float:
        return max(self.zoom_min, min(self.zoom_max, zoom))

    def port_offset(self, kind: PortKind) -> Position:
        """Port position relative to the node's top-left corner."""
        if kind == "input":
            return Position(x=0.0, y=self.port_y)
        return Position(x=self.node_width, y=self.port_y)


DEFAULT_CONFIG = EditorConfig()


def load_config(path: str | Path) -> EditorConfig:
    """Load an editor config from a JSON file."""
    data = json.loads(Path(path).read_text())
    return EditorConfig.model_validate(data)
