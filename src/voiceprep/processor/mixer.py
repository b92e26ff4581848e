from __future__ import annotations

import numpy as np

from voiceprep.domain.models import SampleBuffer

from .base import BaseProcessor


class ChannelMixer(BaseProcessor):
    """Downmix any channel layout to mono by averaging channels per frame."""

    def mix(self, buffer: SampleBuffer) -> SampleBuffer:
        if buffer.channel_count == 1:
            return SampleBuffer(samples=buffer.samples.copy(), sample_rate_hz=buffer.sample_rate_hz)

        mixed = np.mean(buffer.samples, axis=0, keepdims=True, dtype=np.float64)
        return SampleBuffer(samples=mixed.astype(np.float32), sample_rate_hz=buffer.sample_rate_hz)

    def process(self, buffer: SampleBuffer) -> SampleBuffer:
        return self.mix(buffer)
