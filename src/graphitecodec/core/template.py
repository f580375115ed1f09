"""Template substitution of field references against an event.

Supported references:

- ``%{host}`` or ``%{[stats][p99]}``: the field value as text.
- ``%{@timestamp}``: ISO-8601 UTC timestamp; ``%{@version}``: the version.
- ``%{+%s}``: the event timestamp as integer epoch seconds.
- ``%{+FORMAT}``: the event timestamp in UTC rendered with ``strftime``.

References that cannot be resolved are left in place verbatim. That
includes date references for timestamps outside the range of ``datetime``.
"""

import json
import math
import re
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Any

from graphitecodec.core.coercion import render_scalar
from graphitecodec.core.models import TIMESTAMP_FIELD, Event

_REFERENCE = re.compile(r"%\{([^}]+)\}")

EPOCH_SECONDS_TEMPLATE = "%{+%s}"


def _epoch_seconds(event: Event) -> int:
    return math.floor(event.timestamp)


def _as_datetime(event: Event) -> datetime | None:
    try:
        return datetime.fromtimestamp(event.timestamp, tz=timezone.utc)
    except (OverflowError, ValueError, OSError):
        return None


def _render_value(value: Any) -> str:
    if isinstance(value, Mapping):
        return json.dumps(dict(value), separators=(",", ":"))
    if isinstance(value, Sequence) and not isinstance(value, str):
        return ",".join(_render_value(v) for v in value)
    return render_scalar(value)


def _resolve(event: Event, reference: str) -> str | None:
    if reference.startswith("+"):
        time_format = reference[1:]
        if time_format == "%s":
            return str(_epoch_seconds(event))
        moment = _as_datetime(event)
        return None if moment is None else moment.strftime(time_format)

    if reference == TIMESTAMP_FIELD:
        moment = _as_datetime(event)
        if moment is None:
            return None
        millis = moment.microsecond // 1000
        return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{millis:03d}Z"

    value = event.get(reference)
    if value is None:
        return None
    return _render_value(value)


def sprintf(event: Event, template: str) -> str:
    """Substitute field references in template with values from event."""
    if "%{" not in template:
        return template

    def _replace(match: re.Match[str]) -> str:
        resolved = _resolve(event, match.group(1))
        return match.group(0) if resolved is None else resolved

    return _REFERENCE.sub(_replace, template)


def render_timestamp(event: Event) -> str:
    """Render the event timestamp as integer epoch seconds."""
    return sprintf(event, EPOCH_SECONDS_TEMPLATE)
