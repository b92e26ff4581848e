"""Application service orchestrating voice sample preparation."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from uuid import uuid4

from voiceprep.analyzer.loudness import LoudnessAnalyzer
from voiceprep.application.ports import Decoder, EventPublisher, NullEventPublisher
from voiceprep.audio_contract import ensure_supported_media_type
from voiceprep.domain.events import (
    PreparationFailed,
    SampleDecoded,
    SampleEncoded,
    SampleNormalized,
    SampleRejected,
    SampleValidated,
)
from voiceprep.domain.models import PreparationResult, SampleBuffer
from voiceprep.domain.policies import VoiceProfile
from voiceprep.encoding import PCMEncoder
from voiceprep.errors import DecodeError, EmptyBufferError, EncodingInvariantViolation
from voiceprep.infrastructure.routing_decoder import recorder_decoder
from voiceprep.ingest_validation import DurationValidator, ValidationResult
from voiceprep.processor.mixer import ChannelMixer
from voiceprep.processor.normalizer import Normalizer


@dataclass(slots=True)
class PrepareVoiceSample:
    """Use case: recorded sample -> validated, mono, normalized 16-bit WAV.

    The blob size is checked before decoding so undersized uploads never reach
    the decoder. Duration is checked on the decoded buffer. Policy failures come
    back as data on :class:`PreparationResult`; decode, empty-buffer and encoding
    failures are raised after a :class:`PreparationFailed` event is published.
    """

    profile: VoiceProfile
    decoder: Decoder | None = None
    normalizer: Normalizer | None = None
    mixer: ChannelMixer = field(default_factory=ChannelMixer)
    encoder: PCMEncoder = field(default_factory=PCMEncoder)
    validator: DurationValidator = field(default_factory=DurationValidator)
    analyzer: LoudnessAnalyzer = field(default_factory=LoudnessAnalyzer)
    event_publisher: EventPublisher = NullEventPublisher()
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def __post_init__(self) -> None:
        if self.decoder is None:
            self.decoder = recorder_decoder(self.profile.decode_sample_rate_hz)
        if self.normalizer is None:
            self.normalizer = Normalizer(self.profile.normalization)

    def validate(
        self,
        blob: bytes,
        media_type: str | None = None,
        correlation_id: str | None = None,
    ) -> ValidationResult:
        """Run the size and duration gates without normalizing or encoding."""

        run_correlation_id = correlation_id or str(uuid4())
        validation, _ = self._decode_and_validate(blob, media_type, run_correlation_id)
        return validation

    def run(
        self,
        blob: bytes,
        media_type: str | None = None,
        correlation_id: str | None = None,
    ) -> PreparationResult:
        run_correlation_id = correlation_id or str(uuid4())
        validation, decoded = self._decode_and_validate(blob, media_type, run_correlation_id)
        if decoded is None:
            return PreparationResult(validation=validation)

        mono = self.mixer.mix(decoded) if decoded.channel_count > 1 else decoded
        input_levels = self.analyzer.report(mono)

        normalized = self.normalizer.normalize(mono, self.profile.normalization)
        output_levels = self.analyzer.report(normalized)
        self.event_publisher.publish(
            SampleNormalized(
                correlation_id=run_correlation_id,
                payload_summary={
                    "input_rms_db": input_levels.rms_db,
                    "input_peak_db": input_levels.peak_db,
                    "output_rms_db": output_levels.rms_db,
                    "output_peak_db": output_levels.peak_db,
                    "target_rms_db": self.profile.normalization.target_rms_db,
                    "peak_limit_db": self.profile.normalization.peak_limit_db,
                },
            )
        )

        try:
            encoded = self.encoder.encode(normalized, normalized.sample_rate_hz)
        except EncodingInvariantViolation as error:
            self._fail(run_correlation_id, "encode", error)
            raise

        self.event_publisher.publish(
            SampleEncoded(
                correlation_id=run_correlation_id,
                payload_summary={
                    "media_type": encoded.media_type,
                    "sample_rate_hz": encoded.sample_rate_hz,
                    "frame_count": encoded.frame_count,
                    "size_bytes": encoded.size_bytes,
                },
            )
        )
        self.logger.info(
            "sample_prepared",
            extra={
                "correlation_id": run_correlation_id,
                "profile_id": self.profile.profile_id,
                "duration_seconds": validation.duration_seconds,
                "size_bytes": encoded.size_bytes,
            },
        )
        return PreparationResult(
            validation=validation,
            encoded=encoded,
            input_levels=input_levels,
            output_levels=output_levels,
        )

    def _decode_and_validate(
        self,
        blob: bytes,
        media_type: str | None,
        correlation_id: str,
    ) -> tuple[ValidationResult, SampleBuffer | None]:
        ensure_supported_media_type(media_type)
        policy = self.profile.validation

        size_result = self.validator.validate_size(blob, policy)
        if not size_result.valid:
            self._reject(correlation_id, "pre_decode", size_result)
            return size_result, None

        try:
            with self.decoder.open(blob, media_type) as decoded:
                if decoded.is_empty:
                    raise EmptyBufferError("Decoding produced no audio samples.")
                self.event_publisher.publish(
                    SampleDecoded(
                        correlation_id=correlation_id,
                        payload_summary={
                            "media_type": media_type,
                            "sample_rate_hz": decoded.sample_rate_hz,
                            "channel_count": decoded.channel_count,
                            "duration_seconds": decoded.duration_seconds,
                        },
                    )
                )
                validation = self.validator.validate(blob, decoded.duration_seconds, policy)
        except (DecodeError, EmptyBufferError) as error:
            self._fail(correlation_id, "decode", error)
            raise

        if not validation.valid:
            self._reject(correlation_id, "post_decode", validation)
            return validation, None

        self.event_publisher.publish(
            SampleValidated(
                correlation_id=correlation_id,
                payload_summary={
                    "size_bytes": len(blob),
                    "duration_seconds": validation.duration_seconds,
                    "profile_id": self.profile.profile_id,
                },
            )
        )
        return validation, decoded

    def _reject(self, correlation_id: str, stage: str, result: ValidationResult) -> None:
        self.logger.info(
            "sample_rejected",
            extra={"correlation_id": correlation_id, "stage": stage, "code": result.code},
        )
        self.event_publisher.publish(
            SampleRejected(
                correlation_id=correlation_id,
                payload_summary={"stage": stage, **result.as_dict()},
            )
        )

    def _fail(self, correlation_id: str, stage: str, error: Exception) -> None:
        self.logger.warning(
            "sample_preparation_failed",
            extra={"correlation_id": correlation_id, "stage": stage, "error": str(error)},
        )
        self.event_publisher.publish(
            PreparationFailed(
                correlation_id=correlation_id,
                payload_summary={"stage": stage, "error": str(error)},
            )
        )
