"""Shared test fixtures for all test modules."""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from graphitecodec.core.codec import GraphiteCodec
from graphitecodec.core.config import GraphiteCodecConfig
from graphitecodec.core.models import Event


@pytest.fixture
def batch_db_path(tmp_path: Path) -> str:
    """Provide a temporary database path for SQLite sink tests."""
    return str(tmp_path / "batches.db")


@pytest.fixture
def make_event() -> Callable[..., Event]:
    """Factory fixture for events at a fixed epoch.

    Usage:
        event = make_event(host="web1", uptime_1m="42.5")
    """

    def _event(timestamp: float = 1000.0, **fields: Any) -> Event:
        return Event(fields=dict(fields), timestamp=timestamp)

    return _event


@pytest.fixture
def make_codec() -> Callable[..., GraphiteCodec]:
    """Factory fixture building a codec from keyword options."""

    def _codec(**options: Any) -> GraphiteCodec:
        return GraphiteCodec(GraphiteCodecConfig(**options))

    return _codec
