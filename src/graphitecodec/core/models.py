"""Core domain models for Graphite codec data."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

Scalar = str | int | float | bool
NestedMap = Mapping[str, Scalar]
FieldValue = Scalar | NestedMap

TIMESTAMP_FIELD = "@timestamp"
VERSION_FIELD = "@version"

# Reserved fields that are never treated as metrics
EXCLUDE_ALWAYS = (TIMESTAMP_FIELD, VERSION_FIELD)

_BRACKET_PATH = re.compile(r"\[([^\]]+)\]")


@dataclass(frozen=True)
class Event:
    """A structured pipeline event.

    Attributes:
        fields: User fields in their defined order. A value is either a
            scalar or a one-level mapping of sub-name to scalar.
        timestamp: Unix timestamp in seconds.
        version: Opaque event schema version.
    """

    fields: dict[str, FieldValue] = field(default_factory=dict)
    timestamp: float = 0.0
    version: str = "1"

    def to_dict(self) -> dict[str, Any]:
        """Return the full ordered view, reserved fields first."""
        return {
            TIMESTAMP_FIELD: self.timestamp,
            VERSION_FIELD: self.version,
            **self.fields,
        }

    def get(self, reference: str) -> Any:
        """Resolve a field reference against this event.

        Accepts a plain field name (``host``), a reserved name
        (``@timestamp``) or a bracketed path (``[stats][p99]``).

        Returns:
            The referenced value, or None if it does not exist.
        """
        if reference == TIMESTAMP_FIELD:
            return self.timestamp
        if reference == VERSION_FIELD:
            return self.version

        path = _BRACKET_PATH.findall(reference)
        if not path or "".join(f"[{p}]" for p in path) != reference:
            return self.fields.get(reference)

        value: Any = self.to_dict()
        for key in path:
            if not isinstance(value, Mapping) or key not in value:
                return None
            value = value[key]
        return value


@dataclass(frozen=True)
class EmittedBatch:
    """A Graphite batch handed to an emission sink.

    Attributes:
        timestamp: Unix timestamp of the event the batch was encoded from.
        batch: Newline-terminated Graphite plaintext lines.
    """

    timestamp: float
    batch: str

    @property
    def lines(self) -> list[str]:
        """Batch lines without their terminators."""
        return self.batch.splitlines()
