from __future__ import annotations

import logging

import numpy as np

from voiceprep.analyzer.loudness import LoudnessAnalyzer, linear_from_db
from voiceprep.domain.models import SampleBuffer
from voiceprep.domain.policies import NormalizationTarget

from .base import BaseProcessor
from .limiter import COMPRESSION_RATIO, KNEE_THRESHOLD_RATIO, SoftKneeLimiter

logger = logging.getLogger(__name__)

# Linear RMS below which a buffer is treated as silence and left untouched.
SILENCE_RMS_THRESHOLD = 1e-4


class Normalizer(BaseProcessor):
    """Bring a mono buffer to a target RMS without exceeding a peak ceiling.

    Gain is chosen to hit ``target.target_rms_db``; when that would push the
    peak over ``target.peak_limit_db`` the peak wins. The gained signal then
    runs through :class:`SoftKneeLimiter`.
    """

    def __init__(
        self,
        target: NormalizationTarget | None = None,
        knee_threshold_ratio: float = KNEE_THRESHOLD_RATIO,
        compression_ratio: float = COMPRESSION_RATIO,
        silence_rms_threshold: float = SILENCE_RMS_THRESHOLD,
        analyzer: LoudnessAnalyzer | None = None,
    ) -> None:
        self.target = target
        self.silence_rms_threshold = float(silence_rms_threshold)
        self._analyzer = analyzer or LoudnessAnalyzer()
        self._limiter = SoftKneeLimiter(
            knee_threshold_ratio=knee_threshold_ratio,
            compression_ratio=compression_ratio,
        )

    @property
    def knee_threshold_ratio(self) -> float:
        return self._limiter.knee_threshold_ratio

    @property
    def compression_ratio(self) -> float:
        return self._limiter.compression_ratio

    def normalize(self, buffer: SampleBuffer, target: NormalizationTarget | None = None) -> SampleBuffer:
        target = target or self.target
        if target is None:
            raise ValueError("A NormalizationTarget is required.")
        samples = buffer.mono()

        metrics = self._analyzer.analyze(buffer)
        if metrics.rms < self.silence_rms_threshold:
            logger.debug("normalize_skipped_silence", extra={"rms": metrics.rms})
            return SampleBuffer(samples=buffer.samples.copy(), sample_rate_hz=buffer.sample_rate_hz)

        target_rms = linear_from_db(target.target_rms_db)
        peak_limit = linear_from_db(target.peak_limit_db)

        gain = target_rms / metrics.rms
        if metrics.peak * gain > peak_limit:
            gain = peak_limit / metrics.peak

        gained = samples.astype(np.float64) * gain
        limited = self._limiter.limit(gained, peak_limit=peak_limit)
        logger.debug(
            "normalize_applied",
            extra={"rms": metrics.rms, "peak": metrics.peak, "gain": gain, "peak_limit": peak_limit},
        )
        return SampleBuffer.from_mono(limited.astype(np.float32), buffer.sample_rate_hz)

    def process(self, buffer: SampleBuffer) -> SampleBuffer:
        return self.normalize(buffer)
