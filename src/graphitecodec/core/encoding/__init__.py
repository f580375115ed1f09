"""Wire encoders for Graphite data."""

from graphitecodec.core.encoding.graphite import GraphiteDecoder, GraphiteEncoder

__all__ = [
    "GraphiteDecoder",
    "GraphiteEncoder",
]
