from __future__ import annotations

from contextlib import contextmanager
import logging

import numpy as np
import pytest

from voiceprep.application.preparation_service import PrepareVoiceSample
from voiceprep.audio_contract import UnsupportedAudioFormatError
from voiceprep.domain.events import (
    PreparationFailed,
    SampleDecoded,
    SampleEncoded,
    SampleNormalized,
    SampleRejected,
    SampleValidated,
)
from voiceprep.domain.models import SampleBuffer
from voiceprep.domain.policies import NormalizationTarget, ValidationPolicy, VoiceProfile, ZERO_SHOT_PROFILE
from voiceprep.encoding import read_wav_header
from voiceprep.errors import DecodeError, EmptyBufferError
from voiceprep.infrastructure.pedalboard_decoder import PedalboardDecoder
from voiceprep.infrastructure.routing_decoder import MediaTypeRoutingDecoder

PROFILE = VoiceProfile(
    profile_id="test",
    normalization=NormalizationTarget(target_rms_db=-20.0, peak_limit_db=-3.0),
    validation=ValidationPolicy(min_duration_seconds=1.0, max_duration_seconds=10.0, min_size_bytes=16),
)
BLOB = b"\x00" * 64


class RecordingPublisher:
    def __init__(self) -> None:
        self.events = []

    def publish(self, event) -> None:
        self.events.append(event)


class FakeDecoder:
    def __init__(self, buffer: SampleBuffer | None = None, error: Exception | None = None) -> None:
        self.buffer = buffer
        self.error = error
        self.opened = False
        self.closed = False

    @contextmanager
    def open(self, blob: bytes, media_type: str | None = None):
        self.opened = True
        try:
            if self.error is not None:
                raise self.error
            yield self.buffer
        finally:
            self.closed = True


def _stereo_tone(duration_seconds: float = 2.0, sample_rate: int = 8_000) -> SampleBuffer:
    t = np.arange(int(duration_seconds * sample_rate)) / sample_rate
    tone = 0.2 * np.sin(2 * np.pi * 200.0 * t)
    return SampleBuffer(samples=np.stack([tone, 0.5 * tone]).astype(np.float32), sample_rate_hz=sample_rate)


def test_run_produces_mono_wav_and_emits_events_in_order():
    publisher = RecordingPublisher()
    decoder = FakeDecoder(_stereo_tone())
    service = PrepareVoiceSample(profile=PROFILE, decoder=decoder, event_publisher=publisher)

    result = service.run(BLOB, media_type="audio/webm", correlation_id="corr-1")

    assert result.valid
    assert result.encoded is not None
    header = read_wav_header(result.encoded.data)
    assert header.channel_count == 1
    assert header.bits_per_sample == 16
    assert header.sample_rate_hz == 8_000
    assert result.encoded.frame_count == 16_000
    assert result.validation.duration_seconds == pytest.approx(2.0)
    assert result.output_levels.peak <= 10 ** (-3.0 / 20.0) + 1e-6
    assert decoder.closed
    assert [type(event) for event in publisher.events] == [
        SampleDecoded,
        SampleValidated,
        SampleNormalized,
        SampleEncoded,
    ]
    assert all(event.correlation_id == "corr-1" for event in publisher.events)


def test_undersized_blob_is_rejected_before_decoding():
    publisher = RecordingPublisher()
    decoder = FakeDecoder(_stereo_tone())
    service = PrepareVoiceSample(profile=PROFILE, decoder=decoder, event_publisher=publisher)

    result = service.run(b"\x00" * 4, correlation_id="corr-small")

    assert not result.valid
    assert result.encoded is None
    assert result.validation.code == "file_too_small"
    assert not decoder.opened
    assert [type(event) for event in publisher.events] == [SampleRejected]
    assert publisher.events[0].payload_summary["stage"] == "pre_decode"


def test_short_recording_is_rejected_and_decoder_released():
    publisher = RecordingPublisher()
    decoder = FakeDecoder(_stereo_tone(duration_seconds=0.5))
    service = PrepareVoiceSample(profile=PROFILE, decoder=decoder, event_publisher=publisher)

    result = service.run(BLOB)

    assert not result.valid
    assert result.encoded is None
    assert result.validation.code == "duration_too_short"
    assert result.validation.duration_seconds == pytest.approx(0.5)
    assert decoder.closed
    assert [type(event) for event in publisher.events] == [SampleDecoded, SampleRejected]


def test_empty_decode_raises_empty_buffer_error():
    publisher = RecordingPublisher()
    decoder = FakeDecoder(SampleBuffer(samples=np.zeros((1, 0), dtype=np.float32), sample_rate_hz=48_000))
    service = PrepareVoiceSample(profile=PROFILE, decoder=decoder, event_publisher=publisher)

    with pytest.raises(EmptyBufferError):
        service.run(BLOB, correlation_id="corr-empty")

    assert decoder.closed
    assert [type(event) for event in publisher.events] == [PreparationFailed]
    assert publisher.events[0].correlation_id == "corr-empty"


def test_decode_error_propagates_unchanged():
    publisher = RecordingPublisher()
    error = DecodeError("codec not supported")
    decoder = FakeDecoder(error=error)
    service = PrepareVoiceSample(profile=PROFILE, decoder=decoder, event_publisher=publisher)

    with pytest.raises(DecodeError) as exc_info:
        service.run(BLOB)

    assert exc_info.value is error
    assert decoder.closed
    assert [type(event) for event in publisher.events] == [PreparationFailed]
    assert publisher.events[0].payload_summary["stage"] == "decode"


def test_unsupported_media_type_never_reaches_decoder():
    decoder = FakeDecoder(_stereo_tone())
    service = PrepareVoiceSample(profile=PROFILE, decoder=decoder)

    with pytest.raises(UnsupportedAudioFormatError):
        service.run(BLOB, media_type="video/x-msvideo")

    assert not decoder.opened


def test_validate_does_not_normalize_or_encode():
    publisher = RecordingPublisher()
    service = PrepareVoiceSample(profile=PROFILE, decoder=FakeDecoder(_stereo_tone()), event_publisher=publisher)

    validation = service.validate(BLOB)

    assert validation.valid
    assert [type(event) for event in publisher.events] == [SampleDecoded, SampleValidated]


def test_run_logs_prepared_sample_with_injected_logger(caplog):
    logger = logging.getLogger("tests.voiceprep.service")
    service = PrepareVoiceSample(profile=PROFILE, decoder=FakeDecoder(_stereo_tone()), logger=logger)

    with caplog.at_level(logging.INFO, logger="tests.voiceprep.service"):
        service.run(BLOB, correlation_id="corr-log")

    records = [record for record in caplog.records if record.getMessage() == "sample_prepared"]
    assert len(records) == 1
    assert records[0].correlation_id == "corr-log"
    assert records[0].profile_id == "test"


def test_default_decoder_follows_profile_decode_rate():
    service = PrepareVoiceSample(profile=ZERO_SHOT_PROFILE)

    assert isinstance(service.decoder, MediaTypeRoutingDecoder)
    assert isinstance(service.decoder.native, PedalboardDecoder)
    assert service.decoder.native.sample_rate_hz == 48_000
    assert service.decoder.fallback.sample_rate_hz == 48_000
    assert service.normalizer.target == ZERO_SHOT_PROFILE.normalization
