"""graphitecodec - Graphite plaintext codec for structured event pipelines."""

import logging

from graphitecodec.adapters.storage import (
    InMemoryBatchSink,
    RingBufferBatchSink,
    SQLiteBatchSink,
)
from graphitecodec.core.codec import GraphiteCodec
from graphitecodec.core.coercion import coerce_float
from graphitecodec.core.config import GraphiteCodecConfig
from graphitecodec.core.encoding.graphite import GraphiteDecoder, GraphiteEncoder
from graphitecodec.core.errors import (
    ConfigurationError,
    GraphiteCodecError,
    InvalidPatternError,
    MalformedLineError,
    ValueShapeError,
)
from graphitecodec.core.formatting import MetricNameFormatter
from graphitecodec.core.lines import LineSplitter
from graphitecodec.core.models import EmittedBatch, Event
from graphitecodec.core.ports import EventSinkPort
from graphitecodec.core.template import sprintf


def get_logger(name: str) -> logging.Logger:
    """Return a stdlib logger; the package installs no handlers itself."""
    return logging.getLogger(name)


__all__ = [
    "ConfigurationError",
    "EmittedBatch",
    "Event",
    "EventSinkPort",
    "GraphiteCodec",
    "GraphiteCodecConfig",
    "GraphiteCodecError",
    "GraphiteDecoder",
    "GraphiteEncoder",
    "InMemoryBatchSink",
    "InvalidPatternError",
    "LineSplitter",
    "MalformedLineError",
    "MetricNameFormatter",
    "RingBufferBatchSink",
    "SQLiteBatchSink",
    "ValueShapeError",
    "coerce_float",
    "get_logger",
    "sprintf",
]
