import io
import wave

import numpy as np
import pytest


@pytest.fixture
def sine_wave():
    sample_rate = 44100
    duration_s = 5.0
    t = np.linspace(0.0, duration_s, int(sample_rate * duration_s), endpoint=False)
    base = np.sin(2 * np.pi * 440.0 * t)
    return {
        "sample_rate": sample_rate,
        "quiet": 0.1 * base,
        "loud": 0.5 * base,
    }


def _render_wav_bytes(
    *,
    duration_seconds: float = 1.0,
    sample_rate: int = 16_000,
    channels: int = 1,
    amplitude: float = 0.3,
    frequency_hz: float = 220.0,
) -> bytes:
    frames = int(duration_seconds * sample_rate)
    t = np.arange(frames, dtype=np.float64) / sample_rate
    tone = amplitude * np.sin(2 * np.pi * frequency_hz * t)
    interleaved = np.repeat(tone[:, np.newaxis], channels, axis=1)
    pcm = (interleaved * 32767.0).astype("<i2")
    with io.BytesIO() as buffer:
        with wave.open(buffer, "wb") as wav:
            wav.setnchannels(channels)
            wav.setsampwidth(2)
            wav.setframerate(sample_rate)
            wav.writeframes(pcm.tobytes())
        return buffer.getvalue()


@pytest.fixture
def make_wav_bytes():
    return _render_wav_bytes
