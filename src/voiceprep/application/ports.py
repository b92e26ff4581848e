"""Ports the preparation use case depends on."""

from __future__ import annotations

from typing import ContextManager, Protocol

from voiceprep.domain.events import DomainEvent
from voiceprep.domain.models import SampleBuffer


class Decoder(Protocol):
    """Port for turning a compressed blob into channel-first float PCM.

    ``open`` returns a context manager so that whatever decoding resource the
    backend acquires is released when the caller leaves the ``with`` block,
    whether it exits normally or by exception. Implementations raise
    :class:`voiceprep.errors.DecodeError` for unreadable input.
    """

    def open(self, blob: bytes, media_type: str | None = None) -> ContextManager[SampleBuffer]:
        """Decode ``blob`` and yield the resulting buffer."""


class EventPublisher(Protocol):
    """Sink for the sample lifecycle events of one preparation run."""

    def publish(self, event: DomainEvent) -> None:
        """Publish a single event."""


class NullEventPublisher:
    """Drops every event; the default when no sink is wired in."""

    def publish(self, event: DomainEvent) -> None:  # noqa: ARG002
        return None
