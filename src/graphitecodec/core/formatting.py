"""Metric name templating."""

DEFAULT_METRICS_FORMAT = "*"
METRIC_PLACEHOLDER = "*"


class MetricNameFormatter:
    """Render the wire name of a metric from a format template.

    Example:
        ```python
        MetricNameFormatter("prod.*.sum").format("cpu")  # "prod.cpu.sum"
        ```

    A template without the placeholder yields the same name for every
    metric. An empty or None template leaves names unchanged.
    """

    def __init__(self, metrics_format: str | None = DEFAULT_METRICS_FORMAT) -> None:
        self._metrics_format = metrics_format

    def format(self, metric_name: str) -> str:
        if self._metrics_format:
            return self._metrics_format.replace(METRIC_PLACEHOLDER, metric_name)
        return metric_name
