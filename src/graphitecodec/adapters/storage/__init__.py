"""Emission sinks implementing EventSinkPort."""

from graphitecodec.adapters.storage.in_memory import InMemoryBatchSink
from graphitecodec.adapters.storage.ring_buffer import RingBufferBatchSink
from graphitecodec.adapters.storage.sqlite_batches import SQLiteBatchSink

__all__ = [
    "InMemoryBatchSink",
    "RingBufferBatchSink",
    "SQLiteBatchSink",
]
