"""Port interfaces for emission sinks.

The codec hands every non-empty encoded batch to an object implementing
EventSinkPort. Transport to a Carbon collector lives behind this port.
"""

from typing import Protocol, runtime_checkable

from graphitecodec.core.models import Event


@runtime_checkable
class EventSinkPort(Protocol):
    """Port for receiving encoded Graphite batches.

    Examples: InMemoryBatchSink, RingBufferBatchSink, SQLiteBatchSink.
    """

    async def write(self, event: Event, batch: str) -> None:
        """Accept the batch encoded from event."""
        ...
