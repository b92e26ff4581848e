"""Infrastructure adapters: decoders and event sinks."""

from .ffmpeg_decoder import FFmpegDecoder
from .logging_event_publisher import LoggingEventPublisher
from .pedalboard_decoder import PedalboardDecoder
from .routing_decoder import MediaTypeRoutingDecoder
from .soundfile_decoder import SoundFileDecoder

__all__ = [
    "FFmpegDecoder",
    "LoggingEventPublisher",
    "MediaTypeRoutingDecoder",
    "PedalboardDecoder",
    "SoundFileDecoder",
]
