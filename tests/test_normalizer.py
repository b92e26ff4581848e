import numpy as np
import pytest

from voiceprep.analyzer.loudness import LoudnessAnalyzer, linear_from_db
from voiceprep.domain.models import SampleBuffer
from voiceprep.domain.policies import NormalizationTarget
from voiceprep.processor.normalizer import Normalizer


def _uniform_noise(seed: int = 7, frames: int = 48_000) -> SampleBuffer:
    rng = np.random.default_rng(seed)
    return SampleBuffer.from_mono(rng.uniform(-1.0, 1.0, frames), 48_000)


def test_normalizer_reaches_target_rms_when_peak_allows(sine_wave):
    buffer = SampleBuffer.from_mono(sine_wave["quiet"], sine_wave["sample_rate"])
    normalizer = Normalizer(NormalizationTarget(target_rms_db=-20.0, peak_limit_db=-3.0))

    normalized = normalizer.normalize(buffer)
    metrics = LoudnessAnalyzer().analyze(normalized)

    assert metrics.rms == pytest.approx(0.1, rel=1e-4)
    assert normalized.frame_count == buffer.frame_count
    assert normalized.sample_rate_hz == buffer.sample_rate_hz


def test_normalizer_prefers_peak_limit_over_rms_target(sine_wave):
    buffer = SampleBuffer.from_mono(sine_wave["quiet"], sine_wave["sample_rate"])
    target = NormalizationTarget(target_rms_db=-3.0, peak_limit_db=-6.0)

    normalized = Normalizer(target).normalize(buffer)
    metrics = LoudnessAnalyzer().analyze(normalized)

    assert metrics.peak <= linear_from_db(-6.0) + 1e-6
    assert metrics.rms_db < -3.0


@pytest.mark.parametrize(
    ("target_rms_db", "peak_limit_db"),
    [(-20.0, -3.0), (-18.0, -1.0), (-6.0, -3.0), (-3.0, -6.0), (0.0, 0.0)],
)
def test_normalizer_never_exceeds_peak_limit(target_rms_db, peak_limit_db):
    buffer = _uniform_noise()
    target = NormalizationTarget(target_rms_db=target_rms_db, peak_limit_db=peak_limit_db)

    normalized = Normalizer(target).normalize(buffer)

    assert np.max(np.abs(normalized.samples)) <= linear_from_db(peak_limit_db) + 1e-6


@pytest.mark.parametrize("amplitude", [0.0, 5e-5])
def test_normalizer_leaves_silence_untouched(amplitude):
    buffer = SampleBuffer.from_mono(np.full(4_800, amplitude), 48_000)

    normalized = Normalizer(NormalizationTarget(target_rms_db=-18.0, peak_limit_db=-1.0)).normalize(buffer)

    np.testing.assert_array_equal(normalized.samples, buffer.samples)


def test_normalizer_is_idempotent_for_unclipped_speech_levels():
    rng = np.random.default_rng(11)
    buffer = SampleBuffer.from_mono(rng.normal(0.0, 0.05, 48_000), 48_000)
    normalizer = Normalizer(NormalizationTarget(target_rms_db=-20.0, peak_limit_db=-3.0))
    analyzer = LoudnessAnalyzer()

    once = normalizer.normalize(buffer)
    twice = normalizer.normalize(once)

    assert abs(analyzer.analyze(twice).rms_db - analyzer.analyze(once).rms_db) < 0.5


def test_normalizer_target_can_be_passed_per_call(sine_wave):
    buffer = SampleBuffer.from_mono(sine_wave["loud"], sine_wave["sample_rate"])

    normalized = Normalizer().normalize(buffer, NormalizationTarget(target_rms_db=-20.0, peak_limit_db=-1.0))

    assert LoudnessAnalyzer().analyze(normalized).rms == pytest.approx(0.1, rel=1e-4)


def test_normalizer_requires_a_target():
    buffer = SampleBuffer.from_mono(np.full(10, 0.1), 8_000)

    with pytest.raises(ValueError):
        Normalizer().normalize(buffer)


def test_normalizer_rejects_multichannel_buffers():
    buffer = SampleBuffer.from_frames([[0.1, 0.2], [0.3, 0.4]], 8_000)

    with pytest.raises(ValueError):
        Normalizer(NormalizationTarget(target_rms_db=-20.0, peak_limit_db=-3.0)).normalize(buffer)


def test_knee_constants_are_overridable():
    buffer = _uniform_noise()
    target = NormalizationTarget(target_rms_db=-6.0, peak_limit_db=-3.0)

    default = Normalizer(target).normalize(buffer)
    steeper = Normalizer(target, compression_ratio=8.0).normalize(buffer)

    assert Normalizer(target, compression_ratio=8.0).compression_ratio == 8.0
    assert not np.allclose(default.samples, steeper.samples)


def test_disabling_knee_leaves_only_the_gain():
    buffer = _uniform_noise()
    target = NormalizationTarget(target_rms_db=-6.0, peak_limit_db=-3.0)

    normalized = Normalizer(target, knee_threshold_ratio=1.0).normalize(buffer)

    peak = float(np.max(np.abs(buffer.samples)))
    expected = buffer.samples.astype(np.float64) * (linear_from_db(-3.0) / peak)
    np.testing.assert_allclose(normalized.samples, expected, atol=1e-6)
