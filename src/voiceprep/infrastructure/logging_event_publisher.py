"""Event sink that writes sample lifecycle events to structured logs."""

from __future__ import annotations

import logging

from voiceprep.domain.events import DomainEvent, PreparationFailed

LOGGER = logging.getLogger("voiceprep.events")


class LoggingEventPublisher:
    """Log each event's payload summary; failures are logged at WARNING."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or LOGGER

    def publish(self, event: DomainEvent) -> None:
        level = logging.WARNING if isinstance(event, PreparationFailed) else logging.INFO
        self._logger.log(
            level,
            "sample_event",
            extra={
                "event_name": type(event).__name__,
                "correlation_id": event.correlation_id,
                "payload_summary": event.payload_summary,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )
