"""Relay Graphite lines through the codec into an outbox.

Decodes a chunked Graphite stream into events, re-encodes each event under
a ``relay.*`` prefix and stores the batches in a SQLite outbox that a
transport could drain.

Run with:
    python examples/relay_example.py
"""

import asyncio
import logging

from graphitecodec import (
    GraphiteCodec,
    GraphiteCodecConfig,
    SQLiteBatchSink,
    get_logger,
)

logger = get_logger(__name__)

CHUNKS = [
    b"servers.web1.cpu 0.75 1702300000\nservers.web1.m",
    b"em 2048 1702300000\nnot a graphite line at all\n",
    b"servers.web2.cpu 0.10 1702300001",
]


async def main() -> None:
    codec = GraphiteCodec(
        GraphiteCodecConfig(fields_are_metrics=True, metrics_format="relay.*")
    )
    outbox = SQLiteBatchSink(":memory:")

    for chunk in CHUNKS:
        for event in codec.decode(chunk):
            await codec.emit(event, outbox)
    for event in codec.flush():
        await codec.emit(event, outbox)

    for emitted in await outbox.drain():
        logger.info("outbox batch: %s", emitted.batch.rstrip())
    await outbox.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
