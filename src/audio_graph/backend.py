"""Audio backend capability interface and an in-memory recording backend.

The runtime synchronizer only ever talks to a backend through
:class:`AudioBackend`: construct a primitive, set a control, connect,
disconnect, start, stop, and resume.  :class:`RecordingBackend` implements
that surface without producing sound; it keeps every primitive and an
operation log so a materialized graph can be inspected (tests, the CLI
``build`` command, headless use).
"""

from __future__ import annotations

from typing import Any, Protocol


class BackendError(RuntimeError):
    """Raised by a backend that rejects an operation."""


class AudioBackend(Protocol):
    @property
    def destination(self) -> Any: ...

    def create(self, factory: str, options: dict[str, float]) -> Any: ...

    def set_control(self, handle: Any, control: str, value: Any, audio_param: bool) -> None: ...

    def connect(self, source: Any, target: Any) -> None: ...

    def disconnect(self, handle: Any) -> None: ...

    def start(self, handle: Any) -> None: ...

    def stop(self, handle: Any) -> None: ...

    async def resume(self) -> None: ...


class RecordedPrimitive:
    """A primitive held by :class:`RecordingBackend`."""

    def __init__(self, name: str, factory: str, options: dict[str, float]) -> None:
        self.name = name
        self.factory = factory
        self.options = dict(options)
        self.controls: dict[str, Any] = {}
        self.outputs: list[RecordedPrimitive] = []
        self.started = False
        self.stopped = False

    def __repr__(self) -> str:
        return f"<{self.name}>"


class RecordingBackend:
    """Backend that records primitives and operations instead of making sound.

    *fail_on* names operations (``create``, ``set_control``, ``connect``,
    ``start``, ``stop``, ``disconnect``) or factories (``createDelay``) that
    should raise :class:`BackendError`, to exercise best-effort behaviour.
    """

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.fail_on = set(fail_on or ())
        self.log: list[tuple[str, ...]] = []
        self.primitives: list[RecordedPrimitive] = []
        self.resumed = 0
        self._count = 0
        self._destination = RecordedPrimitive("destination", "destination", {})

    @property
    def destination(self) -> RecordedPrimitive:
        return self._destination

    def _check(self, *names: str) -> None:
        for name in names:
            if name in self.fail_on:
                raise BackendError(f"backend rejected {name}")

    def create(self, factory: str, options: dict[str, float]) -> RecordedPrimitive:
        self._check("create", factory)
        self._count += 1
        prim = RecordedPrimitive(f"{factory}#{self._count}", factory, options)
        self.primitives.append(prim)
        self.log.append(("create", prim.name))
        return prim

    def set_control(
        self, handle: RecordedPrimitive, control: str, value: Any, audio_param: bool
    ) -> None:
        self._check("set_control")
        handle.controls[control] = value
        self.log.append(("set", handle.name, control, repr(value)))

    def connect(self, source: RecordedPrimitive, target: RecordedPrimitive) -> None:
        self._check("connect")
        source.outputs.append(target)
        self.log.append(("connect", source.name, target.name))

    def disconnect(self, handle: RecordedPrimitive) -> None:
        self._check("disconnect")
        handle.outputs.clear()
        self.log.append(("disconnect", handle.name))

    def start(self, handle: RecordedPrimitive) -> None:
        self._check("start")
        if handle.started:
            raise BackendError(f"{handle.name} already started")
        handle.started = True
        self.log.append(("start", handle.name))

    def stop(self, handle: RecordedPrimitive) -> None:
        self._check("stop")
        if not handle.started or handle.stopped:
            raise BackendError(f"{handle.name} is not running")
        handle.stopped = True
        self.log.append(("stop", handle.name))

    async def resume(self) -> None:
        self.resumed += 1
        self.log.append(("resume",))

    def operations(self, kind: str) -> list[tuple[str, ...]]:
        return [op for op in self.log if op[0] == kind]
