"""Tests for the audio-graph CLI."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from audio_graph.cli import main


def _endpoint(node_id: str, port: str) -> dict[str, str]:
    return {"nodeId": node_id, "port": port}


@pytest.fixture
def graph_json(tmp_path: Path) -> Path:
    """Write a minimal valid graph JSON and return its path."""
    data = {
        "nodes": [
            {"id": "osc", "type": "oscillator", "params": {"type": "square", "frequency": 220}},
            {"id": "destination_0", "type": "destination"},
        ],
        "connections": [
            {
                "id": "c1",
                "from": _endpoint("osc", "output"),
                "to": _endpoint("destination_0", "input"),
            }
        ],
    }
    p = tmp_path / "tone.json"
    p.write_text(json.dumps(data))
    return p


@pytest.fixture
def invalid_graph_json(tmp_path: Path) -> Path:
    """Write a graph JSON with a dangling connection and return its path."""
    data = {
        "nodes": [{"id": "destination_0", "type": "destination"}],
        "connections": [
            {
                "id": "c1",
                "from": _endpoint("missing", "output"),
                "to": _endpoint("destination_0", "input"),
            }
        ],
    }
    p = tmp_path / "bad.json"
    p.write_text(json.dumps(data))
    return p


class TestPresets:
    def test_lists_all(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["presets"]) == 0
        out = capsys.readouterr().out
        assert len(out.splitlines()) == 7
        assert out.startswith("hello-sound")

    def test_long(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["presets", "-l"]) == 0
        assert len(capsys.readouterr().out.splitlines()) == 14


class TestCode:
    def test_preset_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["code", "hello-sound"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("const ctx = new AudioContext();")
        assert "oscillator.connect(ctx.destination);" in out

    def test_json_to_stdout(self, graph_json: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["code", str(graph_json)]) == 0
        out = capsys.readouterr().out
        assert "oscillator.type = 'square';" in out
        assert "oscillator.frequency.value = 220;" in out

    def test_to_dir(self, graph_json: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "build"
        assert main(["code", str(graph_json), "-o", str(out_dir)]) == 0
        assert (out_dir / "tone.js").exists()

    def test_unknown_preset(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["code", "no-such-preset"]) == 1
        assert "unknown preset" in capsys.readouterr().err

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["code", str(tmp_path / "nope.json")]) == 1
        assert "error:" in capsys.readouterr().err

    def test_bad_json(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        p = tmp_path / "broken.json"
        p.write_text("{not json")
        assert main(["code", str(p)]) == 1
        assert "invalid JSON" in capsys.readouterr().err

    def test_bad_schema(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        p = tmp_path / "schema.json"
        p.write_text(json.dumps({"nodes": [{"id": "x", "type": "reverb"}]}))
        assert main(["code", str(p)]) == 1
        assert "invalid graph" in capsys.readouterr().err


class TestValidate:
    def test_valid(self, graph_json: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["validate", str(graph_json)]) == 0
        assert "valid" in capsys.readouterr().out

    def test_preset_valid(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["validate", "echo-feedback"]) == 0

    def test_invalid(self, invalid_graph_json: Path, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["validate", str(invalid_graph_json)]) == 1
        assert "error:" in capsys.readouterr().err

    def test_warnings_only(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        p = tmp_path / "quiet.json"
        p.write_text(json.dumps({"nodes": [{"id": "g", "type": "gain"}]}))
        assert main(["validate", str(p)]) == 0
        captured = capsys.readouterr()
        assert "valid (with warnings)" in captured.out
        assert "warning:" in captured.err


class TestDot:
    def test_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["dot", "filter-tone"]) == 0
        assert 'digraph "filter-tone"' in capsys.readouterr().out

    def test_to_dir(self, graph_json: Path, tmp_path: Path) -> None:
        out_dir = tmp_path / "viz"
        assert main(["dot", str(graph_json), "-o", str(out_dir)]) == 0
        assert (out_dir / "tone.dot").exists()


class TestBuild:
    def test_prints_operations(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["build", "hello-sound"]) == 0
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "create createOscillator#1"
        assert "connect createOscillator#1 destination" in lines
        assert "start createOscillator#1" in lines
        assert lines[-1] == "2 primitives materialized"


class TestNoCommand:
    def test_returns_1(self) -> None:
        assert main([]) == 1
