"""Audio decode adapter backed by soundfile/libsndfile."""

from __future__ import annotations

from contextlib import contextmanager
import io
from typing import Iterator

import numpy as np
import soundfile as sf

from voiceprep.domain.models import SampleBuffer
from voiceprep.errors import DecodeError


class SoundFileDecoder:
    """Decode WAV/FLAC/OGG/MP3 blobs through libsndfile."""

    @contextmanager
    def open(self, blob: bytes, media_type: str | None = None) -> Iterator[SampleBuffer]:
        try:
            sound_file = sf.SoundFile(io.BytesIO(blob))
        except (RuntimeError, TypeError) as exc:
            raise DecodeError(f"Unable to open {media_type or 'audio'} sample: {exc}") from exc

        with sound_file:
            try:
                frames = sound_file.read(dtype="float32", always_2d=True)
            except RuntimeError as exc:
                raise DecodeError(f"Unable to decode audio frames: {exc}") from exc
            yield SampleBuffer(
                samples=np.ascontiguousarray(frames.T),
                sample_rate_hz=int(sound_file.samplerate),
            )
