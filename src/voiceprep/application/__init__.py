"""DDD application layer."""

from .ports import Decoder, EventPublisher, NullEventPublisher
from .preparation_service import PrepareVoiceSample

__all__ = ["Decoder", "EventPublisher", "NullEventPublisher", "PrepareVoiceSample"]
