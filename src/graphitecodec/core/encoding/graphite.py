"""Graphite plaintext encoder and decoder.

Wire format, one metric per line::

    <metric-path> <value> <timestamp>\\n
"""

import logging
from collections.abc import Mapping

from graphitecodec.core.coercion import coerce_float, format_float, render_scalar
from graphitecodec.core.config import GraphiteCodecConfig
from graphitecodec.core.errors import MalformedLineError, ValueShapeError
from graphitecodec.core.formatting import MetricNameFormatter
from graphitecodec.core.models import EXCLUDE_ALWAYS, Event, FieldValue
from graphitecodec.core.template import render_timestamp, sprintf

logger = logging.getLogger(__name__)

NL = "\n"


def _is_wire_token(name: str) -> bool:
    """A Graphite name must be one non-empty token without whitespace."""
    if name and not any(c.isspace() for c in name):
        return True
    logger.warning("Skipping metric with unusable name", extra={"metric_name": name})
    return False


class GraphiteDecoder:
    """Decode single Graphite lines into events."""

    def decode(self, line: str) -> Event:
        """Parse ``<name> <value> <timestamp>`` into an Event.

        The value is coerced leniently (non-numeric text becomes 0.0). The
        timestamp is truncated to whole seconds.

        Raises:
            MalformedLineError: If the line does not hold exactly three
                whitespace-separated tokens or the timestamp is not numeric.
        """
        tokens = line.split()
        if len(tokens) != 3:
            raise MalformedLineError(line, f"expected 3 tokens, got {len(tokens)}")
        name, value, time = tokens

        try:
            seconds = int(float(time))
        except (ValueError, OverflowError) as exc:
            reason = f"timestamp {time!r} is not numeric"
            raise MalformedLineError(line, reason) from exc

        return Event(fields={name: coerce_float(value)}, timestamp=float(seconds))


class GraphiteEncoder:
    """Expand events into Graphite lines according to a codec config.

    Filters are compiled once here; an invalid pattern makes construction
    fail with InvalidPatternError.
    """

    def __init__(self, config: GraphiteCodecConfig | None = None) -> None:
        self._config = config or GraphiteCodecConfig()
        self._filters = self._config.compile()
        self._formatter = MetricNameFormatter(self._config.metrics_format)

    @property
    def config(self) -> GraphiteCodecConfig:
        return self._config

    def encode_lines(self, event: Event) -> list[str]:
        """Return the Graphite lines for event, without terminators.

        Raises:
            ValueShapeError: If a field's value does not match values_are_hash.
        """
        timestamp = render_timestamp(event)
        if self._config.fields_are_metrics:
            return self._field_lines(event, timestamp)
        return self._mapped_lines(event, timestamp)

    def encode(self, event: Event) -> str:
        """Return a newline-terminated batch, or "" if nothing passes."""
        messages = self.encode_lines(event)
        if not messages:
            logger.debug("Message is empty, not emitting anything")
            return ""
        logger.debug("Emitting carbon messages", extra={"line_count": len(messages)})
        return NL.join(messages) + NL

    def _field_lines(self, event: Event, timestamp: str) -> list[str]:
        logger.debug("got metrics event", extra={"field_count": len(event.fields)})
        messages: list[str] = []
        for metric, value in event.to_dict().items():
            if metric in EXCLUDE_ALWAYS:
                continue
            if not self._filters.accepts_metric(metric):
                continue
            name = self._formatter.format(metric)
            if not _is_wire_token(name):
                continue
            if self._config.values_are_hash:
                messages.extend(
                    self._submetric_lines(event, metric, name, value, timestamp)
                )
            else:
                if isinstance(value, Mapping):
                    raise ValueShapeError(metric, "scalar")
                number = coerce_float(sprintf(event, render_scalar(value)))
                messages.append(f"{name} {format_float(number)} {timestamp}")
        return messages

    def _submetric_lines(
        self,
        event: Event,
        metric: str,
        name: str,
        value: FieldValue,
        timestamp: str,
    ) -> list[str]:
        if not isinstance(value, Mapping):
            raise ValueShapeError(metric, "mapping")
        messages = []
        for value_name, sub_value in value.items():
            if not self._filters.accepts_submetric(value_name):
                continue
            number = coerce_float(sprintf(event, render_scalar(sub_value)))
            sub_name = sprintf(event, str(value_name))
            if not _is_wire_token(sub_name):
                continue
            messages.append(f"{name} {sub_name}={format_float(number)} {timestamp}")
        return messages

    def _mapped_lines(self, event: Event, timestamp: str) -> list[str]:
        messages = []
        for metric_template, value_template in self._config.metrics.items():
            logger.debug(
                "processing", extra={"metric": metric_template, "value": value_template}
            )
            metric = sprintf(event, metric_template)
            if not self._filters.accepts_metric(metric):
                continue
            number = coerce_float(sprintf(event, value_template))
            name = self._formatter.format(metric)
            if not _is_wire_token(name):
                continue
            messages.append(f"{name} {format_float(number)} {timestamp}")
        return messages
