import logging

import pytest

from dicegen.config import GeneratorConfig, TelemetryConfig
from dicegen.errors import ExhaustionError
from dicegen.generator import Generator
from dicegen.policies import DecayOnPick
from dicegen.random_source import PythonRandomSource
from dicegen.telemetry import DRAW, FALLBACK, InMemoryTelemetrySink, LoggingTelemetrySink, TelemetryPublisher
from dicegen.types import TelemetryEvent


class FailingSink:
    def handle(self, event):
        raise RuntimeError("sink down")


def _publisher(sink, **kwargs) -> TelemetryPublisher:
    publisher = TelemetryPublisher(TelemetryConfig(**kwargs))
    publisher.subscribe(sink)
    return publisher


def test_generator_emits_draw_fallback_and_reset_events():
    sink = InMemoryTelemetrySink()
    generator = Generator(
        [(1, "apple")],
        policy=DecayOnPick(),
        config=GeneratorConfig(name="loot"),
        telemetry=_publisher(sink),
    )

    generator.draw_many(2)
    generator.reset()

    assert sink.names() == ["generator.draw", "generator.fallback", "generator.draw", "generator.reset"]
    assert sink.events[0].generator == "loot"
    assert sink.events[0].round_index == 1
    assert sink.events[2].payload == {"index": 0, "fallback": True}
    assert sink.draws() == [0, 0]


def test_generator_emits_exhausted_event():
    sink = InMemoryTelemetrySink()
    generator = Generator([(0, "apple")], config=GeneratorConfig(always_ensure_selection=False))
    generator.attach_telemetry(_publisher(sink))

    with pytest.raises(ExhaustionError):
        generator.draw()

    assert sink.names() == ["generator.exhausted"]


def test_disabled_publisher_forwards_nothing():
    sink = InMemoryTelemetrySink()
    generator = Generator([(1, "apple")], telemetry=_publisher(sink, enabled=False))

    generator.draw()

    assert sink.events == []


def test_event_filter_limits_forwarded_events():
    sink = InMemoryTelemetrySink()
    generator = Generator([(0, "apple"), (0, "pear")], telemetry=_publisher(sink, events={FALLBACK}))

    generator.draw_many(3)

    assert sink.names() == [FALLBACK] * 3


def test_telemetry_does_not_change_seeded_draws():
    options = [(1, "apple"), (2, "banana"), (3, "cherry")]
    plain = Generator(options, random_source=PythonRandomSource(21))
    observed = Generator(
        options,
        random_source=PythonRandomSource(21),
        telemetry=_publisher(InMemoryTelemetrySink()),
    )

    assert plain.draw_many(25) == observed.draw_many(25)


def test_unsubscribed_sink_stops_receiving():
    sink = InMemoryTelemetrySink()
    publisher = _publisher(sink)

    publisher.publish(DRAW, payload={"index": 1})
    publisher.unsubscribe(sink)
    publisher.publish(DRAW, payload={"index": 2})

    assert sink.draws() == [1]


def test_failing_sink_is_logged_and_others_still_run(caplog):
    sink = InMemoryTelemetrySink()
    publisher = TelemetryPublisher()
    publisher.subscribe(FailingSink())
    publisher.subscribe(sink)

    with caplog.at_level(logging.ERROR, logger="dicegen.telemetry"):
        publisher.emit(TelemetryEvent(event=DRAW, payload={"index": 0}))

    assert sink.names() == [DRAW]
    assert "failed" in caplog.text


def test_logging_sink_writes_round_line(caplog):
    sink = LoggingTelemetrySink()

    with caplog.at_level(logging.INFO, logger="dicegen.telemetry"):
        sink.handle(TelemetryEvent(event=DRAW, generator="loot", round_index=4, payload={"index": 2}))

    assert "generator.draw generator=loot round=4" in caplog.text
