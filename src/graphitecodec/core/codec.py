"""Graphite codec combining stream decoding, encoding and emission."""

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from graphitecodec.core.config import GraphiteCodecConfig
from graphitecodec.core.encoding.graphite import GraphiteDecoder, GraphiteEncoder
from graphitecodec.core.errors import MalformedLineError
from graphitecodec.core.lines import LineSplitter
from graphitecodec.core.models import Event
from graphitecodec.core.ports import EventSinkPort

logger = logging.getLogger(__name__)


class GraphiteCodec:
    """Bidirectional Graphite plaintext codec.

    Example:
        ```python
        codec = GraphiteCodec(GraphiteCodecConfig(fields_are_metrics=True))
        for event in codec.decode(b"cpu 0.5 1000\\n"):
            ...
        batch = codec.encode(event)
        ```

    The line splitter buffers partial input between decode() calls; the
    encoder keeps no state between calls.
    """

    def __init__(
        self,
        config: GraphiteCodecConfig | None = None,
        *,
        splitter: LineSplitter | None = None,
    ) -> None:
        self._config = config or GraphiteCodecConfig()
        self._decoder = GraphiteDecoder()
        self._encoder = GraphiteEncoder(self._config)
        self._splitter = splitter or LineSplitter()

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "GraphiteCodec":
        """Create a codec from host-supplied options."""
        return cls(GraphiteCodecConfig.from_dict(options))

    @property
    def config(self) -> GraphiteCodecConfig:
        return self._config

    def decode(self, data: bytes | str) -> list[Event]:
        """Decode every line completed by data.

        data is buffered as soon as this is called and the completed lines
        are decoded eagerly. Blank lines are ignored. Malformed lines are
        logged and skipped.
        """
        return list(self._decode_lines(self._splitter.feed(data)))

    def flush(self) -> list[Event]:
        """Decode whatever partial line is still buffered."""
        return list(self._decode_lines(self._splitter.flush()))

    def decode_line(self, line: str) -> Event:
        """Decode one line.

        Raises:
            MalformedLineError: If the line is not a Graphite line.
        """
        return self._decoder.decode(line)

    def encode_lines(self, event: Event) -> list[str]:
        return self._encoder.encode_lines(event)

    def encode(self, event: Event) -> str:
        return self._encoder.encode(event)

    async def emit(self, event: Event, sink: EventSinkPort) -> bool:
        """Encode event and hand a non-empty batch to sink.

        Returns:
            True if the sink was called, False if there was nothing to emit.
        """
        batch = self._encoder.encode(event)
        if not batch:
            return False
        await sink.write(event, batch)
        return True

    def _decode_lines(self, lines: list[str]) -> Iterator[Event]:
        for line in lines:
            if not line.strip():
                continue
            try:
                yield self._decoder.decode(line)
            except MalformedLineError as exc:
                logger.warning(
                    "Skipping malformed graphite line", extra={"line": exc.line}
                )
