from __future__ import annotations

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from audio_graph import DEFAULT_CONFIG, EditorConfig, GraphState, Position, load_config


class TestEditorConfig:
    def test_defaults(self) -> None:
        assert DEFAULT_CONFIG.zoom_min == 0.25
        assert DEFAULT_CONFIG.zoom_max == 2.0
        assert DEFAULT_CONFIG.snap_distance == 20.0

    def test_clamp_zoom(self) -> None:
        assert DEFAULT_CONFIG.clamp_zoom(0.1) == 0.25
        assert DEFAULT_CONFIG.clamp_zoom(5) == 2.0
        assert DEFAULT_CONFIG.clamp_zoom(1.5) == 1.5

    def test_port_offsets(self) -> None:
        assert DEFAULT_CONFIG.port_offset("input") == Position(x=0, y=50)
        assert DEFAULT_CONFIG.port_offset("output") == Position(x=160, y=50)

    def test_inverted_zoom_range(self) -> None:
        with pytest.raises(ValidationError):
            EditorConfig(zoom_min=2.0, zoom_max=1.0)

    def test_nonpositive_snap(self) -> None:
        with pytest.raises(ValidationError):
            EditorConfig(snap_distance=0)

    def test_custom_config_drives_state(self) -> None:
        state = GraphState(EditorConfig(zoom_max=4.0))
        state.set_zoom(3.0)
        assert state.view.zoom == 3.0


class TestLoadConfig:
    def test_partial_file(self, tmp_path: Path) -> None:
        p = tmp_path / "editor.json"
        p.write_text(json.dumps({"snap_distance": 30, "node_width": 200}))
        config = load_config(p)
        assert config.snap_distance == 30.0
        assert config.port_offset("output") == Position(x=200, y=50)
        assert config.zoom_min == 0.25

    def test_invalid_file(self, tmp_path: Path) -> None:
        p = tmp_path / "editor.json"
        p.write_text(json.dumps({"zoom_min": -1}))
        with pytest.raises(ValidationError):
            load_config(p)
