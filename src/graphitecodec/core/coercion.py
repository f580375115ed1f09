"""Lenient float coercion shared by the decoder and encoder."""

import re
from typing import Any

# Leading decimal number; anything after it is ignored
_DECIMAL_PREFIX = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


def render_scalar(value: Any) -> str:
    """Render a scalar the way template substitution does."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def coerce_float(value: Any) -> float:
    """Coerce a value to float through its textual form.

    The leading decimal number of the text is parsed. Text with no such
    number (including ``nan`` and ``inf``) coerces to exactly 0.0.
    Never raises.
    """
    match = _DECIMAL_PREFIX.match(render_scalar(value))
    if match is None:
        return 0.0
    result = float(match.group(1))
    # Exponent overflow like 1e999
    if result in (float("inf"), float("-inf")):
        return 0.0
    return result


def format_float(value: float) -> str:
    """Shortest round-trippable text form of a float."""
    return repr(float(value))
