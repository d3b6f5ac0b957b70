"""Tests for the editing session."""

from __future__ import annotations

import asyncio

import pytest

from audio_graph import Endpoint, Playground, Position, RecordingBackend


def _connect(pg: Playground, src: str, dst: str) -> str | None:
    return pg.connect(Endpoint(node_id=src, port="output"), Endpoint(node_id=dst, port="input"))


class TestTransport:
    def test_play_builds_and_marks_playing(
        self, playground: Playground, backend: RecordingBackend
    ) -> None:
        playground.load_preset("hello-sound")
        asyncio.run(playground.play())
        assert playground.state.playing
        assert backend.resumed == 1
        assert playground.runtime.get_primitive("osc_1").started

    def test_stop(self, playground: Playground) -> None:
        playground.load_preset("hello-sound")
        asyncio.run(playground.play())
        osc = playground.runtime.get_primitive("osc_1")
        playground.stop()
        assert not playground.state.playing
        assert not playground.runtime.is_materialized
        assert osc.stopped

    def test_play_twice_resumes_once(
        self, playground: Playground, backend: RecordingBackend
    ) -> None:
        asyncio.run(playground.play())
        playground.stop()
        asyncio.run(playground.play())
        assert backend.resumed == 1


class TestEdits:
    def test_param_edit_pushes_live(
        self, playground: Playground, backend: RecordingBackend
    ) -> None:
        playground.load_preset("hello-sound")
        asyncio.run(playground.play())
        osc = playground.runtime.get_primitive("osc_1")
        playground.set_param("osc_1", "frequency", 880)
        assert playground.state.node("osc_1").params["frequency"] == 880
        assert osc.controls["frequency"] == 880.0
        assert playground.runtime.get_primitive("osc_1") is osc
        assert len(backend.operations("create")) == 1

    def test_param_edit_while_stopped_touches_model_only(
        self, playground: Playground, backend: RecordingBackend
    ) -> None:
        playground.load_preset("hello-sound")
        playground.set_param("osc_1", "frequency", 660)
        assert playground.state.node("osc_1").params["frequency"] == 660
        assert backend.log == []

    def test_add_node_while_playing_rebuilds(
        self, playground: Playground, backend: RecordingBackend
    ) -> None:
        playground.load_preset("hello-sound")
        asyncio.run(playground.play())
        node_id = playground.add_node("gain", Position(x=300, y=200))
        assert playground.runtime.get_primitive(node_id, "gain") is not None
        assert len(backend.operations("create")) == 3

    def test_add_node_while_stopped_does_not_build(
        self, playground: Playground, backend: RecordingBackend
    ) -> None:
        playground.add_node("gain", Position(x=300, y=200))
        assert backend.log == []

    def test_connect_and_disconnect_rebuild(
        self, playground: Playground, backend: RecordingBackend
    ) -> None:
        asyncio.run(playground.play())
        osc = playground.add_node("oscillator", Position(x=100, y=100))
        conn_id = _connect(playground, osc, "destination_0")
        assert conn_id is not None
        assert playground.runtime.get_primitive("destination_0") in (
            playground.runtime.get_primitive(osc).outputs
        )
        playground.disconnect(conn_id)
        assert playground.runtime.get_primitive(osc).outputs == []

    def test_duplicate_connect_does_not_rebuild(
        self, playground: Playground, backend: RecordingBackend
    ) -> None:
        playground.load_preset("hello-sound")
        asyncio.run(playground.play())
        mark = len(backend.log)
        assert _connect(playground, "osc_1", "destination_0") is None
        assert backend.log[mark:] == []

    def test_remove_node_while_playing(self, playground: Playground) -> None:
        playground.load_preset("volume-control")
        asyncio.run(playground.play())
        playground.remove_node("gain_1")
        assert playground.runtime.get_primitive("gain_1") is None
        assert playground.state.connections == []

    def test_remove_missing_node_is_noop(
        self, playground: Playground, backend: RecordingBackend
    ) -> None:
        asyncio.run(playground.play())
        mark = len(backend.log)
        playground.remove_node("ghost")
        playground.disconnect("ghost")
        assert backend.log[mark:] == []

    def test_move_does_not_rebuild(
        self, playground: Playground, backend: RecordingBackend
    ) -> None:
        playground.load_preset("hello-sound")
        asyncio.run(playground.play())
        mark = len(backend.log)
        playground.dragger.pointer_down("osc_1", Position(x=110, y=210))
        playground.dragger.pointer_move(Position(x=160, y=260))
        playground.dragger.pointer_up()
        assert playground.state.node("osc_1").position == Position(x=150, y=250)
        assert backend.log[mark:] == []


class TestPresetsAndDrafts:
    def test_load_preset_stops_runtime(self, playground: Playground) -> None:
        playground.load_preset("hello-sound")
        asyncio.run(playground.play())
        playground.load_preset("volume-control")
        assert not playground.state.playing
        assert not playground.runtime.is_materialized
        assert [n.id for n in playground.state.nodes] == ["osc_1", "gain_1", "destination_0"]

    def test_load_unknown_preset(self, playground: Playground) -> None:
        with pytest.raises(KeyError):
            playground.load_preset("nope")

    def test_finish_draft_connects_and_rebuilds(self, playground: Playground) -> None:
        asyncio.run(playground.play())
        osc = playground.add_node("oscillator", Position(x=100, y=100))
        assert playground.drafter.pointer_down(osc, "output")
        # destination_0 sits at (600, 250); its input port is at (600, 300)
        conn_id = playground.finish_draft(Position(x=605, y=298))
        assert conn_id is not None
        assert playground.runtime.get_primitive(osc).outputs == [
            playground.runtime.get_primitive("destination_0")
        ]

    def test_finish_draft_missed(self, playground: Playground) -> None:
        osc = playground.add_node("oscillator", Position(x=100, y=100))
        playground.drafter.pointer_down(osc, "output")
        assert playground.finish_draft(Position(x=0, y=0)) is None
        assert playground.state.connections == []

    def test_program_tracks_model(self, playground: Playground) -> None:
        assert playground.program() == "const ctx = new AudioContext();\n"
        playground.load_preset("hello-sound")
        assert "oscillator.connect(ctx.destination);" in playground.program()
