"""Bounded emission sink.

Keeps at most ``max_size`` pending batches. When a new batch arrives at a
full outbox the oldest pending batch is dropped, so a stalled transport
costs data instead of memory.
"""

import logging
from collections import deque

from graphitecodec.core.models import EmittedBatch, Event

logger = logging.getLogger(__name__)


class RingBufferBatchSink:
    """Bounded outbox implementing EventSinkPort.

    Args:
        max_size: Maximum number of pending batches.
    """

    def __init__(self, max_size: int) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._pending: deque[EmittedBatch] = deque(maxlen=max_size)
        self._dropped = 0

    @property
    def dropped(self) -> int:
        """Number of batches evicted before they were drained."""
        return self._dropped

    async def write(self, event: Event, batch: str) -> None:
        if len(self._pending) == self._pending.maxlen:
            self._dropped += 1
            logger.warning(
                "Outbox full, dropping oldest batch",
                extra={"timestamp": self._pending[0].timestamp},
            )
        self._pending.append(EmittedBatch(timestamp=event.timestamp, batch=batch))

    async def drain(self) -> list[EmittedBatch]:
        """Return every pending batch in emission order and forget them."""
        drained = list(self._pending)
        self._pending.clear()
        return drained

    async def count(self) -> int:
        return len(self._pending)
