"""Drive an editing session: load the echo preset, play, tweak, rewire."""

import asyncio
import logging

from audio_graph import Playground, Position, RecordingBackend


async def main() -> None:
    backend = RecordingBackend()
    pg = Playground(backend)

    pg.load_preset("echo-feedback")
    await pg.play()
    print(f"playing: {len(pg.runtime.materialized_nodes())} nodes materialized")

    # Live param edits reach the running delay without a rebuild.
    pg.set_param("delay_1", "delayTime", 0.25)
    pg.set_param("gain_fb", "gain", 0.6)

    # Drag a new analyser into the graph and wire the echo into it.
    analyser = pg.add_node("analyser", Position(x=700, y=60))
    pg.drafter.pointer_down("delay_1", "output")
    pg.finish_draft(Position(x=700, y=110))
    print(f"analyser live: {pg.runtime.get_primitive(analyser, 'analyser') is not None}")

    pg.stop()
    print()
    for op in backend.log:
        print(" ".join(op))
    print()
    print(pg.program())


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
