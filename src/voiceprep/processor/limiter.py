from __future__ import annotations

import numpy as np

from voiceprep.analyzer.loudness import linear_from_db
from voiceprep.domain.models import SampleBuffer

from .base import BaseProcessor

# Empirical curve constants; changing them alters output loudness.
KNEE_THRESHOLD_RATIO = 0.85
COMPRESSION_RATIO = 4.0


def soft_knee(
    samples: np.ndarray,
    peak_limit: float,
    knee_threshold_ratio: float = KNEE_THRESHOLD_RATIO,
    compression_ratio: float = COMPRESSION_RATIO,
) -> np.ndarray:
    """Saturate magnitudes above the knee exponentially toward ``peak_limit``.

    Samples at or below ``peak_limit * knee_threshold_ratio`` pass through
    untouched. Above it, the excess is mapped onto
    ``knee_range * (1 - exp(-excess / knee_range * compression_ratio))`` and the
    result is hard-clamped to ``[-peak_limit, peak_limit]``.
    """

    as_float = samples.astype(np.float64, copy=True)
    knee_start = peak_limit * knee_threshold_ratio
    knee_range = peak_limit - knee_start

    magnitude = np.abs(as_float)
    over_knee = magnitude > knee_start
    if knee_range > 0.0 and np.any(over_knee):
        excess = magnitude[over_knee] - knee_start
        compressed = knee_start + knee_range * (1.0 - np.exp(-excess / knee_range * compression_ratio))
        as_float[over_knee] = np.sign(as_float[over_knee]) * compressed

    return np.clip(as_float, -peak_limit, peak_limit)


class SoftKneeLimiter(BaseProcessor):
    """Apply the soft-knee curve followed by a hard safety clamp."""

    def __init__(
        self,
        peak_limit_db: float = -1.0,
        knee_threshold_ratio: float = KNEE_THRESHOLD_RATIO,
        compression_ratio: float = COMPRESSION_RATIO,
    ) -> None:
        if not 0.0 < knee_threshold_ratio <= 1.0:
            raise ValueError("knee_threshold_ratio must be in (0.0, 1.0].")
        if compression_ratio <= 0.0:
            raise ValueError("compression_ratio must be > 0.0.")
        self.peak_limit_db = float(peak_limit_db)
        self.knee_threshold_ratio = float(knee_threshold_ratio)
        self.compression_ratio = float(compression_ratio)

    @property
    def peak_limit(self) -> float:
        return linear_from_db(self.peak_limit_db)

    def limit(self, samples: np.ndarray, peak_limit: float | None = None) -> np.ndarray:
        return soft_knee(
            samples,
            self.peak_limit if peak_limit is None else peak_limit,
            knee_threshold_ratio=self.knee_threshold_ratio,
            compression_ratio=self.compression_ratio,
        )

    def process(self, buffer: SampleBuffer) -> SampleBuffer:
        limited = self.limit(buffer.samples).astype(np.float32)
        return SampleBuffer(samples=limited, sample_rate_hz=buffer.sample_rate_hz)
