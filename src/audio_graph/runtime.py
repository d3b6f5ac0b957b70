"""Runtime synchronizer: materializes the graph model onto an audio backend."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from audio_graph.backend import AudioBackend
from audio_graph.bindings import ControlBinding, PrimitiveBinding, binding_for
from audio_graph.models import Connection, GraphNode
from audio_graph.registry import NodeType, ParamValue, param_value

logger = logging.getLogger(__name__)


class MaterializedNode:
    """A live primitive, tagged with the node type it was built for."""

    __slots__ = ("node_id", "kind", "handle", "binding")

    def __init__(
        self, node_id: str, kind: NodeType, handle: Any, binding: PrimitiveBinding
    ) -> None:
        self.node_id = node_id
        self.kind = kind
        self.handle = handle
        self.binding = binding

    def __repr__(self) -> str:
        return f"MaterializedNode({self.node_id!r}, {self.kind!r})"


class RuntimeSynchronizer:
    """Owns the one materialized runtime graph.

    ``build`` always tears everything down before constructing, so the caller
    must not interleave two builds.  Backend failures never escape: each one
    is logged and the rest of the graph is built as far as possible.
    """

    def __init__(self, backend: AudioBackend) -> None:
        self.backend = backend
        self._live: dict[str, MaterializedNode] = {}
        self._ready = False

    @property
    def is_materialized(self) -> bool:
        return bool(self._live)

    def materialized_nodes(self) -> list[MaterializedNode]:
        return list(self._live.values())

    async def resume(self) -> None:
        """Wait for backend readiness; only the first call reaches the backend."""
        if self._ready:
            return
        await self.backend.resume()
        self._ready = True

    # -- Build / teardown ----------------------------------------------------

    def build(self, nodes: Iterable[GraphNode], connections: Iterable[Connection]) -> None:
        self.stop()

        for node in nodes:
            if node.id in self._live:
                logger.warning("duplicate node id %s; keeping the first", node.id)
                continue
            live = self._materialize(node)
            if live is not None:
                self._live[node.id] = live

        for conn in connections:
            src = self._live.get(conn.from_.node_id)
            dst = self._live.get(conn.to.node_id)
            if src is None or dst is None:
                logger.debug("skipping connection %s: endpoint not materialized", conn.id)
                continue
            try:
                self.backend.connect(src.handle, dst.handle)
            except Exception as e:
                logger.warning("connect %s failed: %s", conn.id, e)

        # Every connection is wired before any source starts, so feedback
        # loops are complete when sound begins.
        for live in self._live.values():
            if live.binding.is_source:
                try:
                    self.backend.start(live.handle)
                except Exception as e:
                    logger.warning("start %s failed: %s", live.node_id, e)

        logger.info("built runtime graph with %d primitives", len(self._live))

    def stop(self) -> None:
        if not self._live:
            return
        for live in self._live.values():
            if live.binding.is_source:
                try:
                    self.backend.stop(live.handle)
                except Exception as e:
                    logger.debug("stop %s: %s", live.node_id, e)
        for live in self._live.values():
            try:
                self.backend.disconnect(live.handle)
            except Exception as e:
                logger.debug("disconnect %s: %s", live.node_id, e)
        self._live.clear()

    def _materialize(self, node: GraphNode) -> MaterializedNode | None:
        binding = binding_for(node.type)
        if binding is None:
            logger.warning("node %s has unknown type %r; left inert", node.id, node.type)
            return None
        if binding.is_sink:
            return MaterializedNode(node.id, node.type, self.backend.destination, binding)
        try:
            handle = self.backend.create(binding.factory, binding.options)
        except Exception as e:
            logger.warning("create %s (%s) failed: %s", node.id, node.type, e)
            return None
        for key, control in binding.controls.items():
            value = param_value(node, key)
            if value is None:
                continue
            self._apply(node.id, handle, key, control, value)
        return MaterializedNode(node.id, node.type, handle, binding)

    def _apply(
        self, node_id: str, handle: Any, key: str, control: ControlBinding, value: ParamValue
    ) -> None:
        try:
            self.backend.set_control(
                handle, control.target, control.coerce(value), control.audio_param
            )
        except Exception as e:
            logger.warning("set %s.%s failed: %s", node_id, key, e)

    # -- Live edits ----------------------------------------------------------

    def update_param(self, node_id: str, key: str, value: ParamValue) -> None:
        """Push one param edit to a live primitive without rebuilding."""
        live = self._live.get(node_id)
        if live is None:
            return
        control = live.binding.controls.get(key)
        if control is None:
            return
        self._apply(node_id, live.handle, key, control, value)

    def get_primitive(self, node_id: str, kind: NodeType | None = None) -> Any:
        live = self._live.get(node_id)
        if live is None or (kind is not None and live.kind != kind):
            return None
        return live.handle
