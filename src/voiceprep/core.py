"""Core preparation entry points shared by CLI and API interfaces."""

from __future__ import annotations

import logging
from pathlib import Path

from .application.ports import Decoder, EventPublisher, NullEventPublisher
from .application.preparation_service import PrepareVoiceSample
from .audio_contract import sniff_media_type
from .domain.models import PreparationResult
from .domain.policies import VoiceProfile
from .infrastructure.ffmpeg_decoder import FFmpegDecoder
from .infrastructure.pedalboard_decoder import PedalboardDecoder
from .infrastructure.routing_decoder import recorder_decoder
from .infrastructure.soundfile_decoder import SoundFileDecoder
from .options import DecoderBackend


def build_decoder(backend: DecoderBackend, sample_rate_hz: int | None = None) -> Decoder:
    """Create a decoder for ``backend``; soundfile keeps the native rate."""

    if backend is DecoderBackend.SOUNDFILE:
        return SoundFileDecoder()
    if backend is DecoderBackend.PEDALBOARD:
        return PedalboardDecoder(sample_rate_hz=sample_rate_hz)
    if backend is DecoderBackend.FFMPEG:
        return FFmpegDecoder(sample_rate_hz=sample_rate_hz)
    return recorder_decoder(sample_rate_hz)


def build_preparation_service(
    profile: VoiceProfile,
    backend: DecoderBackend = DecoderBackend.AUTO,
    event_publisher: EventPublisher | None = None,
    logger: logging.Logger | None = None,
) -> PrepareVoiceSample:
    service = PrepareVoiceSample(
        profile=profile,
        decoder=build_decoder(backend, profile.decode_sample_rate_hz),
        event_publisher=event_publisher or NullEventPublisher(),
    )
    if logger is not None:
        service.logger = logger
    return service


def prepare_voice_sample(
    blob: bytes,
    profile: VoiceProfile,
    media_type: str | None = None,
    decoder: Decoder | None = None,
    event_publisher: EventPublisher | None = None,
    logger: logging.Logger | None = None,
) -> PreparationResult:
    """Validate, downmix, normalize and encode one recorded sample."""

    service = PrepareVoiceSample(
        profile=profile,
        decoder=decoder,
        event_publisher=event_publisher or NullEventPublisher(),
    )
    if logger is not None:
        service.logger = logger
    return service.run(blob, media_type=media_type)


def prepare_file(
    input_path: Path,
    output_path: Path,
    profile: VoiceProfile,
    decoder: Decoder | None = None,
    event_publisher: EventPublisher | None = None,
) -> PreparationResult:
    """Prepare a sample on disk and write the WAV when validation passes."""

    raw_bytes = input_path.read_bytes()
    result = prepare_voice_sample(
        raw_bytes,
        profile,
        media_type=sniff_media_type(raw_bytes),
        decoder=decoder,
        event_publisher=event_publisher,
    )
    if result.encoded is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(result.encoded.data)
    return result
