from .base import BaseProcessor
from .limiter import COMPRESSION_RATIO, KNEE_THRESHOLD_RATIO, SoftKneeLimiter, soft_knee
from .mixer import ChannelMixer
from .normalizer import SILENCE_RMS_THRESHOLD, Normalizer

__all__ = [
    "BaseProcessor",
    "ChannelMixer",
    "Normalizer",
    "SoftKneeLimiter",
    "soft_knee",
    "COMPRESSION_RATIO",
    "KNEE_THRESHOLD_RATIO",
    "SILENCE_RMS_THRESHOLD",
]
