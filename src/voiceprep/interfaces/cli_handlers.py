"""CLI-facing handlers that delegate to application services."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from uuid import uuid4

from voiceprep.analyzer.loudness import LoudnessAnalyzer, measure_integrated_lufs
from voiceprep.audio_contract import sniff_media_type
from voiceprep.core import build_decoder, build_preparation_service
from voiceprep.domain.models import PreparationResult
from voiceprep.infrastructure.logging_event_publisher import LoggingEventPublisher
from voiceprep.ingest_validation import ValidationResult
from voiceprep.interfaces.serialization import levels_to_dict, result_to_dict
from voiceprep.options import DecoderBackend
from voiceprep.processor.mixer import ChannelMixer
from voiceprep.utils.config import resolve_profile

_event_publisher = LoggingEventPublisher()


def prepare_from_path(
    input_path: Path,
    output_path: Path,
    *,
    profile_id: str,
    profile_config: Path | None = None,
    decoder_backend: DecoderBackend = DecoderBackend.AUTO,
    report_json: Path | None = None,
    correlation_id: str | None = None,
) -> PreparationResult:
    """Prepare ``input_path`` and write the WAV to ``output_path`` when valid."""

    profile = resolve_profile(profile_id, profile_config)
    service = build_preparation_service(profile, decoder_backend, event_publisher=_event_publisher)

    raw_bytes = input_path.read_bytes()
    result = service.run(
        raw_bytes,
        media_type=sniff_media_type(raw_bytes),
        correlation_id=correlation_id or str(uuid4()),
    )

    if result.encoded is not None:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(result.encoded.data)

    if report_json is not None:
        report_json.parent.mkdir(parents=True, exist_ok=True)
        report_json.write_text(
            json.dumps(result_to_dict(result, profile_id=profile.profile_id), indent=2),
            encoding="utf-8",
        )
    return result


def validate_from_path(
    input_path: Path,
    *,
    profile_id: str,
    profile_config: Path | None = None,
    decoder_backend: DecoderBackend = DecoderBackend.AUTO,
) -> ValidationResult:
    profile = resolve_profile(profile_id, profile_config)
    service = build_preparation_service(profile, decoder_backend, event_publisher=_event_publisher)
    raw_bytes = input_path.read_bytes()
    return service.validate(raw_bytes, media_type=sniff_media_type(raw_bytes))


def inspect_path(
    input_path: Path,
    decoder_backend: DecoderBackend = DecoderBackend.AUTO,
) -> dict[str, Any]:
    """Decode a sample and report its format and recording levels."""

    raw_bytes = input_path.read_bytes()
    media_type = sniff_media_type(raw_bytes)
    decoder = build_decoder(decoder_backend)
    with decoder.open(raw_bytes, media_type) as decoded:
        mono = ChannelMixer().mix(decoded)

    return {
        "media_type": media_type,
        "size_bytes": len(raw_bytes),
        "sample_rate_hz": decoded.sample_rate_hz,
        "channel_count": decoded.channel_count,
        "duration_seconds": decoded.duration_seconds,
        "integrated_lufs": measure_integrated_lufs(mono),
        "levels": levels_to_dict(LoudnessAnalyzer().report(mono)),
    }
