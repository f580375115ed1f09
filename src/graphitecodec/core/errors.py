"""Error types raised by the Graphite codec."""


class GraphiteCodecError(Exception):
    """Base class for all codec errors."""


class ConfigurationError(GraphiteCodecError, ValueError):
    """Codec options have the wrong type or an unknown name."""


class InvalidPatternError(ConfigurationError):
    """A configured metric filter regex does not compile.

    Attributes:
        option: Name of the option holding the pattern.
        pattern: The pattern source that failed.
    """

    def __init__(self, option: str, pattern: str, reason: str) -> None:
        super().__init__(f"invalid pattern {pattern!r} in {option}: {reason}")
        self.option = option
        self.pattern = pattern


class MalformedLineError(GraphiteCodecError, ValueError):
    """A Graphite line is not ``<name> <value> <timestamp>``."""

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"malformed graphite line {line!r}: {reason}")
        self.line = line


class ValueShapeError(GraphiteCodecError, TypeError):
    """A field value is scalar where a mapping is expected, or vice versa."""

    def __init__(self, field: str, expected: str) -> None:
        super().__init__(f"field {field!r} must be a {expected}")
        self.field = field
        self.expected = expected
