"""Codec configuration and compiled metric filters."""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any

from graphitecodec.core.errors import ConfigurationError, InvalidPatternError
from graphitecodec.core.formatting import DEFAULT_METRICS_FORMAT

DEFAULT_INCLUDE_METRICS = (".*",)
DEFAULT_INCLUDE_SUBMETRICS = (".*",)
# Drops metric names that still carry an unresolved %{field} reference
DEFAULT_EXCLUDE_METRICS = (r"%\{[^}]+\}",)

_PATTERN_OPTIONS = ("include_metrics", "exclude_metrics", "include_submetrics")


def _as_patterns(option: str, value: Any) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise ConfigurationError(f"{option} must be a list of patterns")
    patterns = tuple(value)
    for pattern in patterns:
        if not isinstance(pattern, str):
            raise ConfigurationError(f"{option} entries must be strings")
    return patterns


def _compile(option: str, patterns: tuple[str, ...]) -> tuple[re.Pattern[str], ...]:
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as exc:
            raise InvalidPatternError(option, pattern, str(exc)) from exc
    return tuple(compiled)


@dataclass(frozen=True)
class CompiledFilters:
    """Metric name filters compiled once per codec instance."""

    include_metrics: tuple[re.Pattern[str], ...]
    exclude_metrics: tuple[re.Pattern[str], ...]
    include_submetrics: tuple[re.Pattern[str], ...]

    def accepts_metric(self, name: str) -> bool:
        """Include check first, then exclusion. Exclusion wins."""
        if not any(p.search(name) for p in self.include_metrics):
            return False
        return not any(p.search(name) for p in self.exclude_metrics)

    def accepts_submetric(self, name: str) -> bool:
        """An empty include list accepts every sub-metric."""
        if not self.include_submetrics:
            return True
        return any(p.search(name) for p in self.include_submetrics)


@dataclass(frozen=True)
class GraphiteCodecConfig:
    """Immutable codec options.

    Attributes:
        metrics: Metric-name template to value template pairs, emitted in
            order when fields_are_metrics is False.
        fields_are_metrics: Treat every event field as a metric.
        values_are_hash: Field values are mappings of sub-metric to value.
        include_submetrics: Sub-metric names must match one of these.
        include_metrics: Metric names must match one of these.
        exclude_metrics: Metric names matching any of these are dropped.
        metrics_format: Wire name template; ``*`` is the metric name.
    """

    metrics: Mapping[str, str] = field(default_factory=dict)
    fields_are_metrics: bool = False
    values_are_hash: bool = False
    include_submetrics: tuple[str, ...] = DEFAULT_INCLUDE_SUBMETRICS
    include_metrics: tuple[str, ...] = DEFAULT_INCLUDE_METRICS
    exclude_metrics: tuple[str, ...] = DEFAULT_EXCLUDE_METRICS
    metrics_format: str | None = DEFAULT_METRICS_FORMAT

    def __post_init__(self) -> None:
        if not isinstance(self.metrics, Mapping):
            raise ConfigurationError("metrics must be a mapping")
        for key, value in self.metrics.items():
            if not isinstance(key, str) or not isinstance(value, str):
                raise ConfigurationError("metrics keys and values must be strings")
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))

        for option in ("fields_are_metrics", "values_are_hash"):
            if not isinstance(getattr(self, option), bool):
                raise ConfigurationError(f"{option} must be a boolean")

        for option in _PATTERN_OPTIONS:
            patterns = _as_patterns(option, getattr(self, option))
            object.__setattr__(self, option, patterns)

        if self.metrics_format is not None and not isinstance(self.metrics_format, str):
            raise ConfigurationError("metrics_format must be a string")

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "GraphiteCodecConfig":
        """Build a config from host-supplied options.

        Raises:
            ConfigurationError: On unknown option names or bad types.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ConfigurationError(f"unknown codec options: {', '.join(unknown)}")
        return cls(**options)

    def compile(self) -> CompiledFilters:
        """Compile the filter patterns.

        Raises:
            InvalidPatternError: If any pattern fails to compile.
        """
        return CompiledFilters(
            include_metrics=_compile("include_metrics", self.include_metrics),
            exclude_metrics=_compile("exclude_metrics", self.exclude_metrics),
            include_submetrics=_compile("include_submetrics", self.include_submetrics),
        )
