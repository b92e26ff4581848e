"""Decoder that picks a backend per sample from its media type."""

from __future__ import annotations

from typing import TYPE_CHECKING, ContextManager

from voiceprep.audio_contract import UNSPECIFIED_MIME_TYPE, base_media_type, sniff_media_type
from voiceprep.domain.models import SampleBuffer

from .ffmpeg_decoder import FFmpegDecoder
from .pedalboard_decoder import PedalboardDecoder

if TYPE_CHECKING:
    from voiceprep.application.ports import Decoder

# Containers pedalboard reads natively on every platform.
NATIVE_MEDIA_TYPES: frozenset[str] = frozenset(
    {
        "audio/wav",
        "audio/x-wav",
        "audio/wave",
        "audio/flac",
        "audio/ogg",
        "audio/mpeg",
        "audio/mp3",
    }
)


class MediaTypeRoutingDecoder:
    """Send natively readable containers to ``native`` and the rest to ``fallback``.

    Undeclared or generic binary uploads are routed on their sniffed media type.
    """

    def __init__(
        self,
        native: Decoder,
        fallback: Decoder,
        native_media_types: frozenset[str] = NATIVE_MEDIA_TYPES,
    ) -> None:
        self.native = native
        self.fallback = fallback
        self.native_media_types = native_media_types

    def decoder_for(self, blob: bytes, media_type: str | None = None) -> Decoder:
        resolved = base_media_type(media_type) if media_type else ""
        if resolved in ("", UNSPECIFIED_MIME_TYPE):
            resolved = sniff_media_type(blob) or ""
        if not resolved or resolved in self.native_media_types:
            return self.native
        return self.fallback

    def open(self, blob: bytes, media_type: str | None = None) -> ContextManager[SampleBuffer]:
        return self.decoder_for(blob, media_type).open(blob, media_type)


def recorder_decoder(sample_rate_hz: int | None = None) -> MediaTypeRoutingDecoder:
    """Pedalboard for native containers, ffmpeg for WebM/MP4/AAC recordings."""

    return MediaTypeRoutingDecoder(
        native=PedalboardDecoder(sample_rate_hz=sample_rate_hz),
        fallback=FFmpegDecoder(sample_rate_hz=sample_rate_hz),
    )
