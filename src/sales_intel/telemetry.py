"""Structured telemetry for the engine entry points."""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Protocol, runtime_checkable


@dataclass
class TelemetryEvent:
    """Single structured telemetry event."""

    name: str
    attributes: dict[str, Any] = field(default_factory=dict)
    timestamp_ms: float = field(default_factory=lambda: time.time() * 1000)


@runtime_checkable
class TelemetrySink(Protocol):
    def emit(self, event: TelemetryEvent) -> None: ...


class NoOpTelemetrySink:
    """Default sink that records nothing."""

    def emit(self, event: TelemetryEvent) -> None:
        _ = event


class InMemoryTelemetrySink:
    """Test-friendly sink that stores events in memory."""

    def __init__(self) -> None:
        self.events: list[TelemetryEvent] = []

    def emit(self, event: TelemetryEvent) -> None:
        self.events.append(event)

    def named(self, name: str) -> list[TelemetryEvent]:
        return [e for e in self.events if e.name == name]


class LoggerTelemetrySink:
    """Sink that emits structured events through Python logging."""

    def __init__(self, logger_name: str = "sales_intel.telemetry") -> None:
        self.logger = logging.getLogger(logger_name)

    def emit(self, event: TelemetryEvent) -> None:
        self.logger.info(
            "telemetry_event",
            extra={
                "event_name": event.name,
                "event_timestamp_ms": event.timestamp_ms,
                "event_attributes": event.attributes,
            },
        )


@contextmanager
def timed_event(
    sink: TelemetrySink | None, name: str, **attributes: Any,
) -> Iterator[dict[str, Any]]:
    """Yield a mutable attribute dict; emit it with ``elapsed_ms`` on success.

    Nothing is emitted when the body raises, so failed scans never report
    partial counts.
    """
    attrs = dict(attributes)
    started = time.perf_counter()
    yield attrs
    if sink is not None:
        attrs["elapsed_ms"] = round((time.perf_counter() - started) * 1000, 3)
        sink.emit(TelemetryEvent(name=name, attributes=attrs))
