"""Tests for template substitution."""

import pytest

from graphitecodec.core.models import Event
from graphitecodec.core.template import render_timestamp, sprintf


@pytest.fixture
def event() -> Event:
    return Event(
        fields={
            "host": "web1",
            "uptime_1m": "42.5",
            "up": True,
            "stats": {"p99": "9.9"},
            "tags": ["a", "b"],
        },
        timestamp=1000.0,
    )


class TestSprintf:
    """Tests for sprintf()."""

    @pytest.mark.core
    def test_plain_text_is_unchanged(self, event: Event) -> None:
        assert sprintf(event, "cpu.load") == "cpu.load"

    @pytest.mark.core
    def test_field_reference(self, event: Event) -> None:
        assert sprintf(event, "%{host}/uptime") == "web1/uptime"

    @pytest.mark.core
    def test_multiple_references(self, event: Event) -> None:
        assert sprintf(event, "%{host}.%{uptime_1m}") == "web1.42.5"

    @pytest.mark.core
    def test_unresolved_reference_is_left_verbatim(self, event: Event) -> None:
        assert sprintf(event, "%{missing_field}") == "%{missing_field}"

    @pytest.mark.core
    def test_nested_reference(self, event: Event) -> None:
        assert sprintf(event, "%{[stats][p99]}") == "9.9"

    @pytest.mark.core
    def test_mapping_renders_as_json(self, event: Event) -> None:
        assert sprintf(event, "%{stats}") == '{"p99":"9.9"}'

    @pytest.mark.core
    def test_sequence_renders_comma_joined(self, event: Event) -> None:
        assert sprintf(event, "%{tags}") == "a,b"

    @pytest.mark.core
    def test_boolean_renders_lowercase(self, event: Event) -> None:
        assert sprintf(event, "%{up}") == "true"

    @pytest.mark.core
    def test_epoch_seconds(self, event: Event) -> None:
        assert sprintf(event, "%{+%s}") == "1000"

    @pytest.mark.core
    def test_strftime_format(self) -> None:
        event = Event(timestamp=86400.0)
        assert sprintf(event, "%{+%Y.%m.%d}") == "1970.01.02"

    @pytest.mark.core
    def test_iso_timestamp(self) -> None:
        event = Event(timestamp=1000.25)
        assert sprintf(event, "%{@timestamp}") == "1970-01-01T00:16:40.250Z"

    @pytest.mark.core
    def test_date_references_out_of_range_stay_verbatim(self) -> None:
        event = Event(timestamp=1e20)

        assert sprintf(event, "%{@timestamp}") == "%{@timestamp}"
        assert sprintf(event, "d.%{+%Y}") == "d.%{+%Y}"
        assert sprintf(event, "%{+%s}") == "100000000000000000000"

    @pytest.mark.core
    def test_version(self, event: Event) -> None:
        assert sprintf(event, "v%{@version}") == "v1"


class TestRenderTimestamp:
    """Tests for render_timestamp()."""

    @pytest.mark.core
    def test_fractional_seconds_are_floored(self) -> None:
        assert render_timestamp(Event(timestamp=1000.9)) == "1000"

    @pytest.mark.core
    def test_no_leading_zeros(self) -> None:
        assert render_timestamp(Event(timestamp=7.0)) == "7"
