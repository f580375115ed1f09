"""BDD step definitions for Graphite codec features."""

from dataclasses import dataclass, field
from typing import Any

import pytest
from pytest_bdd import given, parsers, then, when

from graphitecodec.core.codec import GraphiteCodec
from graphitecodec.core.config import GraphiteCodecConfig
from graphitecodec.core.errors import GraphiteCodecError, MalformedLineError
from graphitecodec.core.models import Event

_BOOLEAN_OPTIONS = {"fields_are_metrics", "values_are_hash"}
_PATTERN_OPTIONS = {"include_metrics", "exclude_metrics", "include_submetrics"}


@dataclass
class CodecScenarioContext:
    """Mutable state shared between the steps of one scenario."""

    codec: GraphiteCodec = field(default_factory=GraphiteCodec)
    event: Event | None = None
    batch: str | None = None
    decoded: Event | None = None
    error: GraphiteCodecError | None = None


@pytest.fixture
def ctx() -> CodecScenarioContext:
    """Fresh scenario context for each test."""
    return CodecScenarioContext()


def _options_from_table(datatable: list[list[str]]) -> dict[str, Any]:
    """Turn an option/value table into codec options.

    Pattern options may repeat; each row adds one pattern.
    """
    options: dict[str, Any] = {}
    for option, value in datatable[1:]:
        if option in _BOOLEAN_OPTIONS:
            options[option] = value.lower() == "true"
        elif option in _PATTERN_OPTIONS:
            options.setdefault(option, []).append(value)
        else:
            options[option] = value
    return options


# === Codec setup ===
@given("a default codec")
def step_default_codec(ctx: CodecScenarioContext) -> None:
    ctx.codec = GraphiteCodec()


@given(parsers.parse('a codec with the metric "{metric}" valued "{value}"'))
def step_codec_with_metric(ctx: CodecScenarioContext, metric: str, value: str) -> None:
    ctx.codec = GraphiteCodec(GraphiteCodecConfig(metrics={metric: value}))


@given("a codec with options:")
def step_codec_with_options(
    ctx: CodecScenarioContext, datatable: list[list[str]]
) -> None:
    ctx.codec = GraphiteCodec.from_dict(_options_from_table(datatable))


# === Events ===
@given(parsers.parse("an event at epoch {epoch:d} with fields:"))
def step_event_with_fields(
    ctx: CodecScenarioContext, epoch: int, datatable: list[list[str]]
) -> None:
    fields = {name: value for name, value in datatable[1:]}
    ctx.event = Event(fields=fields, timestamp=float(epoch))


@given(parsers.parse('an event at epoch {epoch:d} with the nested field "{name}":'))
def step_event_with_nested_field(
    ctx: CodecScenarioContext, epoch: int, name: str, datatable: list[list[str]]
) -> None:
    nested = {sub_name: value for sub_name, value in datatable[1:]}
    ctx.event = Event(fields={name: nested}, timestamp=float(epoch))


@given(parsers.parse("an event at epoch {epoch:d} with no fields"))
def step_event_without_fields(ctx: CodecScenarioContext, epoch: int) -> None:
    ctx.event = Event(timestamp=float(epoch))


# === Actions ===
@when("the event is encoded")
def step_encode(ctx: CodecScenarioContext) -> None:
    assert ctx.event is not None
    ctx.batch = ctx.codec.encode(ctx.event)


@when("the batch is decoded")
def step_decode_batch(ctx: CodecScenarioContext) -> None:
    assert ctx.batch
    events = list(ctx.codec.decode(ctx.batch))
    assert len(events) == 1
    ctx.decoded = events[0]


@when(parsers.parse('the line "{line}" is decoded'))
def step_decode_line(ctx: CodecScenarioContext, line: str) -> None:
    try:
        ctx.decoded = ctx.codec.decode_line(line)
    except GraphiteCodecError as exc:
        ctx.error = exc


# === Outcomes ===
@then(parsers.parse('the batch is the single line "{line}"'))
def step_single_line(ctx: CodecScenarioContext, line: str) -> None:
    assert ctx.batch == line + "\n"


@then("the encoded lines are:")
def step_encoded_lines(ctx: CodecScenarioContext, datatable: list[list[str]]) -> None:
    expected = [row[0] for row in datatable[1:]]
    assert ctx.batch is not None
    assert ctx.batch.splitlines() == expected
    assert ctx.batch.endswith("\n")


@then("nothing is emitted")
def step_nothing_emitted(ctx: CodecScenarioContext) -> None:
    assert ctx.batch == ""


@then(parsers.parse('the event has field "{name}" equal to {value:g}'))
def step_event_field(ctx: CodecScenarioContext, name: str, value: float) -> None:
    assert ctx.error is None
    assert ctx.decoded is not None
    assert ctx.decoded.fields == {name: value}


@then(parsers.parse("the event timestamp is {timestamp:d}"))
def step_event_timestamp(ctx: CodecScenarioContext, timestamp: int) -> None:
    assert ctx.decoded is not None
    assert ctx.decoded.timestamp == timestamp


@then("decoding fails with a malformed line error")
def step_malformed(ctx: CodecScenarioContext) -> None:
    assert isinstance(ctx.error, MalformedLineError)
    assert ctx.decoded is None
