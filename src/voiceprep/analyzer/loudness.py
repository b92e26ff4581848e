"""Loudness measurement primitives for voice samples.

All amplitudes are linear unless a name ends in ``_db``. Decibel values are
dBFS relative to a full-scale amplitude of ``1.0``.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pyloudnorm as pyln

from voiceprep.domain.models import SampleBuffer

# Reported instead of ``-inf`` for zero or negative amplitudes.
DB_FLOOR = -100.0

# pyloudnorm gates on 400 ms blocks; anything shorter has no integrated loudness.
_LUFS_BLOCK_SECONDS = 0.4
_LUFS_FLOOR = -70.0


def linear_from_db(db: float) -> float:
    return float(10.0 ** (db / 20.0))


def db_from_linear(value: float) -> float:
    if value <= 0.0:
        return DB_FLOOR
    return float(20.0 * np.log10(value))


@dataclass(frozen=True, slots=True)
class LoudnessMetrics:
    """Linear RMS and peak amplitude of a buffer."""

    rms: float
    peak: float

    @property
    def rms_db(self) -> float:
        return db_from_linear(self.rms)

    @property
    def peak_db(self) -> float:
        return db_from_linear(self.peak)


@dataclass(frozen=True, slots=True)
class LevelThresholds:
    """Recording level zones for voice cloning input, in dBFS."""

    clipping_peak_db: float = -3.0
    too_quiet_rms_db: float = -30.0
    optimal_rms_min_db: float = -23.0
    optimal_rms_max_db: float = -18.0
    silence_rms_db: float = -60.0


@dataclass(frozen=True, slots=True)
class LevelReport:
    """Measured levels plus the zone they fall into."""

    rms: float
    peak: float
    rms_db: float
    peak_db: float
    is_clipping: bool
    is_too_quiet: bool
    is_optimal: bool
    is_good: bool
    is_silent: bool


class LoudnessAnalyzer:
    """Compute RMS and peak amplitude over every sample of a buffer."""

    def analyze(self, buffer: SampleBuffer) -> LoudnessMetrics:
        samples = buffer.samples
        if samples.size == 0:
            return LoudnessMetrics(rms=0.0, peak=0.0)
        as_float = samples.astype(np.float64, copy=False)
        rms = float(np.sqrt(np.mean(np.square(as_float))))
        peak = float(np.max(np.abs(as_float)))
        return LoudnessMetrics(rms=rms, peak=peak)

    def classify(
        self, metrics: LoudnessMetrics, thresholds: LevelThresholds | None = None
    ) -> LevelReport:
        thresholds = thresholds or LevelThresholds()
        rms_db = metrics.rms_db
        peak_db = metrics.peak_db
        return LevelReport(
            rms=metrics.rms,
            peak=metrics.peak,
            rms_db=rms_db,
            peak_db=peak_db,
            is_clipping=peak_db >= thresholds.clipping_peak_db,
            is_too_quiet=rms_db < thresholds.too_quiet_rms_db,
            is_optimal=thresholds.optimal_rms_min_db <= rms_db <= thresholds.optimal_rms_max_db,
            is_good=thresholds.too_quiet_rms_db <= rms_db < thresholds.optimal_rms_min_db,
            is_silent=rms_db < thresholds.silence_rms_db,
        )

    def report(self, buffer: SampleBuffer, thresholds: LevelThresholds | None = None) -> LevelReport:
        return self.classify(self.analyze(buffer), thresholds)


def measure_integrated_lufs(buffer: SampleBuffer) -> float | None:
    """Measure integrated loudness in LUFS, or ``None`` for sub-block audio."""

    if buffer.duration_seconds < _LUFS_BLOCK_SECONDS:
        return None

    meter = pyln.Meter(buffer.sample_rate_hz)
    # pyloudnorm expects frame-major (frames, channels) input.
    measured = float(meter.integrated_loudness(buffer.samples.T.astype(np.float64)))
    if not np.isfinite(measured):
        return _LUFS_FLOOR
    return measured
