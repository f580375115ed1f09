"""In-memory emission sink."""

from graphitecodec.core.models import EmittedBatch, Event


class InMemoryBatchSink:
    """Unbounded in-memory outbox implementing EventSinkPort.

    Batches are held in emission order until a transport drains them.
    """

    def __init__(self) -> None:
        self._pending: list[EmittedBatch] = []

    async def write(self, event: Event, batch: str) -> None:
        self._pending.append(EmittedBatch(timestamp=event.timestamp, batch=batch))

    async def drain(self) -> list[EmittedBatch]:
        """Return every pending batch in emission order and forget them."""
        drained, self._pending = self._pending, []
        return drained

    async def count(self) -> int:
        """Return the number of batches waiting to be drained."""
        return len(self._pending)
