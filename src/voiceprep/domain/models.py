"""Domain models for voice sample preparation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from voiceprep.audio_contract import OUTPUT_MEDIA_TYPE

if TYPE_CHECKING:
    from voiceprep.analyzer.loudness import LevelReport
    from voiceprep.ingest_validation import ValidationResult


@dataclass(frozen=True, slots=True)
class SampleBuffer:
    """Channel-first float PCM owned by whichever pipeline stage holds it."""

    samples: np.ndarray
    sample_rate_hz: int

    def __post_init__(self) -> None:
        if self.samples.ndim != 2:
            raise ValueError("Samples must be a 2D channel-first array.")
        if self.sample_rate_hz <= 0:
            raise ValueError("Sample rate must be a positive integer.")

    @classmethod
    def from_mono(cls, samples: np.ndarray, sample_rate_hz: int) -> "SampleBuffer":
        mono = np.asarray(samples, dtype=np.float32)
        return cls(samples=mono[np.newaxis, :], sample_rate_hz=sample_rate_hz)

    @classmethod
    def from_frames(cls, frames: np.ndarray, sample_rate_hz: int) -> "SampleBuffer":
        """Build a buffer from frame-major data such as ``[[l, r], [l, r]]``."""

        frame_major = np.asarray(frames, dtype=np.float32)
        if frame_major.ndim == 1:
            return cls.from_mono(frame_major, sample_rate_hz)
        return cls(samples=np.ascontiguousarray(frame_major.T), sample_rate_hz=sample_rate_hz)

    @property
    def channel_count(self) -> int:
        return int(self.samples.shape[0])

    @property
    def frame_count(self) -> int:
        return int(self.samples.shape[1])

    @property
    def duration_seconds(self) -> float:
        return self.frame_count / self.sample_rate_hz

    @property
    def is_empty(self) -> bool:
        return self.samples.size == 0

    def mono(self) -> np.ndarray:
        """Return the single channel of a mono buffer as a 1D array."""

        if self.channel_count != 1:
            raise ValueError(f"Expected a mono buffer, got {self.channel_count} channels.")
        return self.samples[0]


@dataclass(frozen=True, slots=True)
class EncodedAudio:
    """Immutable encoded container produced once by the PCM encoder."""

    data: bytes
    sample_rate_hz: int
    frame_count: int
    media_type: str = OUTPUT_MEDIA_TYPE

    @property
    def size_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class PreparationResult:
    """Outcome of a preparation run; ``encoded`` is set only when validation passed."""

    validation: "ValidationResult"
    encoded: EncodedAudio | None = None
    input_levels: "LevelReport | None" = None
    output_levels: "LevelReport | None" = None

    @property
    def valid(self) -> bool:
        return self.validation.valid
