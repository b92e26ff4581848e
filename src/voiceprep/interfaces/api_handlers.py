"""API-facing handlers that delegate to application services."""

from __future__ import annotations

from voiceprep.application.preparation_service import PrepareVoiceSample
from voiceprep.core import build_preparation_service
from voiceprep.domain.models import PreparationResult
from voiceprep.infrastructure.logging_event_publisher import LoggingEventPublisher
from voiceprep.ingest_validation import ValidationResult
from voiceprep.utils.config import load_runtime_settings, resolve_profile

_event_publisher = LoggingEventPublisher()


def build_service(profile_id: str | None = None) -> PrepareVoiceSample:
    """Build a preparation service for ``profile_id`` or the configured default."""

    settings = load_runtime_settings()
    profile = resolve_profile(profile_id or settings.profile_id, settings.profile_config_path)
    return build_preparation_service(profile, settings.decoder_backend, event_publisher=_event_publisher)


def prepare_uploaded_bytes(
    sample_bytes: bytes,
    media_type: str | None,
    profile_id: str | None,
    correlation_id: str,
) -> tuple[PreparationResult, str]:
    service = build_service(profile_id)
    result = service.run(sample_bytes, media_type=media_type, correlation_id=correlation_id)
    return result, service.profile.profile_id


def validate_uploaded_bytes(
    sample_bytes: bytes,
    media_type: str | None,
    profile_id: str | None,
    correlation_id: str,
) -> tuple[ValidationResult, str]:
    service = build_service(profile_id)
    result = service.validate(sample_bytes, media_type=media_type, correlation_id=correlation_id)
    return result, service.profile.profile_id


__all__ = ["build_service", "prepare_uploaded_bytes", "validate_uploaded_bytes"]
