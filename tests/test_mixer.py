import numpy as np

from voiceprep.domain.models import SampleBuffer
from voiceprep.processor.mixer import ChannelMixer


def test_mixer_averages_stereo_frames():
    buffer = SampleBuffer.from_frames([[1.0, 1.0], [-1.0, -1.0], [0.5, 0.5]], 48_000)

    mixed = ChannelMixer().mix(buffer)

    assert mixed.channel_count == 1
    np.testing.assert_allclose(mixed.mono(), [1.0, -1.0, 0.5])


def test_mixer_cancels_opposite_channels():
    buffer = SampleBuffer.from_frames([[0.5, -0.5], [0.25, 0.75]], 16_000)

    mixed = ChannelMixer().mix(buffer)

    np.testing.assert_allclose(mixed.mono(), [0.0, 0.5])


def test_mixer_handles_more_than_two_channels():
    samples = np.array([[0.3, 0.6], [0.0, 0.0], [-0.3, 0.3]], dtype=np.float32)
    buffer = SampleBuffer(samples=samples, sample_rate_hz=44_100)

    mixed = ChannelMixer().mix(buffer)

    np.testing.assert_allclose(mixed.mono(), [0.0, 0.3], atol=1e-7)
    assert mixed.sample_rate_hz == 44_100


def test_mixer_copies_mono_input():
    buffer = SampleBuffer.from_mono(np.array([0.1, -0.2, 0.3]), 8_000)

    mixed = ChannelMixer().process(buffer)

    np.testing.assert_array_equal(mixed.samples, buffer.samples)
    assert mixed.samples is not buffer.samples


def test_mixer_keeps_empty_buffers_empty():
    buffer = SampleBuffer(samples=np.zeros((2, 0), dtype=np.float32), sample_rate_hz=48_000)

    mixed = ChannelMixer().mix(buffer)

    assert mixed.channel_count == 1
    assert mixed.is_empty
