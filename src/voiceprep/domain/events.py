"""Domain event contracts for preparation workflows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base domain event emitted by application services."""

    correlation_id: str
    payload_summary: dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


@dataclass(frozen=True, slots=True)
class SampleValidated(DomainEvent):
    """The raw sample passed size and duration policy."""


@dataclass(frozen=True, slots=True)
class SampleRejected(DomainEvent):
    """The raw sample failed size or duration policy."""


@dataclass(frozen=True, slots=True)
class SampleDecoded(DomainEvent):
    """The decoder produced a sample buffer."""


@dataclass(frozen=True, slots=True)
class SampleNormalized(DomainEvent):
    """The mono buffer was gain-normalized and peak-limited."""


@dataclass(frozen=True, slots=True)
class SampleEncoded(DomainEvent):
    """The normalized buffer was serialized to a WAV container."""


@dataclass(frozen=True, slots=True)
class PreparationFailed(DomainEvent):
    """Pipeline execution failed for a correlation id."""
