"""Audio decode adapter backed by pedalboard."""

from __future__ import annotations

from contextlib import contextmanager
import io
import logging
from typing import Iterator

import numpy as np
from pedalboard.io import AudioFile

from voiceprep.domain.models import SampleBuffer
from voiceprep.errors import DecodeError

logger = logging.getLogger(__name__)


class PedalboardDecoder:
    """Decode any container pedalboard understands from an in-memory blob.

    When ``sample_rate_hz`` is set, audio is resampled while it is read, the
    way a decoding context opened at a fixed rate would deliver it.
    """

    def __init__(self, sample_rate_hz: int | None = None) -> None:
        self.sample_rate_hz = sample_rate_hz

    @contextmanager
    def open(self, blob: bytes, media_type: str | None = None) -> Iterator[SampleBuffer]:
        try:
            audio_file = AudioFile(io.BytesIO(blob))
        except (ValueError, RuntimeError, OSError) as exc:
            raise DecodeError(f"Unable to open {media_type or 'audio'} sample: {exc}") from exc

        with audio_file:
            buffer = self._read(audio_file)
            logger.debug(
                "sample_decoded",
                extra={
                    "decoder": "pedalboard",
                    "media_type": media_type,
                    "sample_rate_hz": buffer.sample_rate_hz,
                    "channel_count": buffer.channel_count,
                    "frame_count": buffer.frame_count,
                },
            )
            yield buffer

    def _read(self, audio_file) -> SampleBuffer:
        reader = audio_file
        if self.sample_rate_hz and int(round(audio_file.samplerate)) != self.sample_rate_hz:
            reader = audio_file.resampled_to(float(self.sample_rate_hz))
        try:
            samples = reader.read(reader.frames)
        except (ValueError, RuntimeError, OSError) as exc:
            raise DecodeError(f"Unable to decode audio frames: {exc}") from exc
        return SampleBuffer(
            samples=np.asarray(samples, dtype=np.float32),
            sample_rate_hz=int(round(reader.samplerate)),
        )
