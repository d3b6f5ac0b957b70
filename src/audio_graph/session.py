"""Editor session: ties the graph model, runtime and interactions together."""

from __future__ import annotations

import logging

from audio_graph.backend import AudioBackend
from audio_graph.codegen import render_program
from audio_graph.config import EditorConfig
from audio_graph.interaction import CanvasPanner, ConnectionDrafter, NodeDragger
from audio_graph.models import Endpoint, Position
from audio_graph.presets import get_preset
from audio_graph.registry import NodeType, ParamValue
from audio_graph.runtime import RuntimeSynchronizer
from audio_graph.state import GraphState

logger = logging.getLogger(__name__)


class Playground:
    """One editing session against one audio backend.

    Param edits are pushed to live primitives; structural edits rebuild the
    runtime graph while playing.  Moving nodes, selection and view changes
    never touch the runtime.
    """

    def __init__(self, backend: AudioBackend, config: EditorConfig | None = None) -> None:
        self.state = GraphState(config)
        self.runtime = RuntimeSynchronizer(backend)
        self.drafter = ConnectionDrafter(self.state)
        self.dragger = NodeDragger(self.state)
        self.panner = CanvasPanner(self.state)

    # -- Transport -----------------------------------------------------------

    async def play(self) -> None:
        await self.runtime.resume()
        self.runtime.build(self.state.nodes, self.state.connections)
        self.state.set_playing(True)

    def stop(self) -> None:
        self.runtime.stop()
        self.state.set_playing(False)

    def _rebuild_if_playing(self) -> None:
        if self.state.playing:
            self.runtime.build(self.state.nodes, self.state.connections)

    # -- Edits ---------------------------------------------------------------

    def add_node(self, node_type: NodeType, position: Position) -> str:
        node_id = self.state.add_node(node_type, position)
        self._rebuild_if_playing()
        return node_id

    def remove_node(self, node_id: str) -> None:
        if self.state.node(node_id) is None:
            return
        self.state.remove_node(node_id)
        self._rebuild_if_playing()

    def connect(self, from_: Endpoint, to: Endpoint) -> str | None:
        conn_id = self.state.add_connection(from_, to)
        if conn_id is not None:
            self._rebuild_if_playing()
        return conn_id

    def disconnect(self, connection_id: str) -> None:
        if self.state.connection(connection_id) is None:
            return
        self.state.remove_connection(connection_id)
        self._rebuild_if_playing()

    def finish_draft(self, position: Position) -> str | None:
        """Drop the wire being drafted, rebuilding if it produced a connection."""
        conn_id = self.drafter.pointer_up(position)
        if conn_id is not None:
            self._rebuild_if_playing()
        return conn_id

    def set_param(self, node_id: str, key: str, value: ParamValue) -> None:
        self.state.update_param(node_id, key, value)
        self.runtime.update_param(node_id, key, value)

    def load_preset(self, preset_id: str) -> None:
        preset = get_preset(preset_id)
        self.runtime.stop()
        self.state.load_preset(preset.nodes, preset.connections)
        logger.info("loaded preset %s", preset_id)

    # -- Derived views -------------------------------------------------------

    def program(self) -> str:
        return render_program(self.state.nodes, self.state.connections)
