"""Generator telemetry: round events routed to pluggable sinks.

Publishing never touches a generator's random source, so attaching telemetry
does not change the sequence a seeded generator draws.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from .config import TelemetryConfig
from .types import TelemetryEvent

LOGGER = logging.getLogger(__name__)

DRAW = "generator.draw"
FALLBACK = "generator.fallback"
EXHAUSTED = "generator.exhausted"
RESET = "generator.reset"


class TelemetrySink(Protocol):
    """Receives generator events."""

    def handle(self, event: TelemetryEvent) -> None:  # pragma: no cover - protocol
        ...


class TelemetryPublisher:
    """Forwards generator events to sinks, filtered by :class:`TelemetryConfig`."""

    def __init__(self, config: Optional[TelemetryConfig] = None) -> None:
        self.config = config or TelemetryConfig(enabled=True)
        self._sinks: list[TelemetrySink] = []

    def subscribe(self, sink: TelemetrySink) -> None:
        self._sinks.append(sink)

    def unsubscribe(self, sink: TelemetrySink) -> None:
        if sink in self._sinks:
            self._sinks.remove(sink)

    def wants(self, event: str) -> bool:
        if not self.config.enabled:
            return False
        return self.config.events is None or event in self.config.events

    def publish(
        self,
        event: str,
        *,
        generator: Optional[str] = None,
        round_index: Optional[int] = None,
        payload: Optional[dict[str, object]] = None,
    ) -> None:
        """Build a :class:`TelemetryEvent` and hand it to every sink."""

        if not self.wants(event):
            return
        self.emit(
            TelemetryEvent(
                event=event,
                payload=payload or {},
                generator=generator,
                round_index=round_index,
            )
        )

    def emit(self, event: TelemetryEvent) -> None:
        if not self.wants(event.event):
            return
        for sink in list(self._sinks):
            try:
                sink.handle(event)
            except Exception:
                LOGGER.exception("Telemetry sink %s failed on %s", sink, event.event)


class LoggingTelemetrySink:
    """Writes one log line per generator round."""

    def __init__(self, level: int = logging.INFO) -> None:
        self.level = level

    def handle(self, event: TelemetryEvent) -> None:
        LOGGER.log(
            self.level,
            "%s generator=%s round=%s %s",
            event.event,
            event.generator or "-",
            event.round_index,
            event.payload,
        )


class InMemoryTelemetrySink:
    """Keeps events in memory, e.g. to replay a game session's draws."""

    def __init__(self) -> None:
        self.events: list[TelemetryEvent] = []

    def handle(self, event: TelemetryEvent) -> None:
        self.events.append(event)

    def names(self) -> list[str]:
        return [event.event for event in self.events]

    def draws(self) -> list[int]:
        """Indices picked by every recorded draw, in order."""

        return [int(event.payload["index"]) for event in self.events if event.event == DRAW]


__all__ = [
    "DRAW",
    "EXHAUSTED",
    "FALLBACK",
    "InMemoryTelemetrySink",
    "LoggingTelemetrySink",
    "RESET",
    "TelemetryPublisher",
    "TelemetrySink",
]
