"""DDD domain layer."""

from .events import (
    DomainEvent,
    PreparationFailed,
    SampleDecoded,
    SampleEncoded,
    SampleNormalized,
    SampleRejected,
    SampleValidated,
)
from .models import EncodedAudio, PreparationResult, SampleBuffer
from .policies import (
    BUILTIN_PROFILES,
    ELEVENLABS_PROFILE,
    ZERO_SHOT_PROFILE,
    NormalizationTarget,
    ValidationPolicy,
    VoiceProfile,
)

__all__ = [
    "DomainEvent",
    "SampleValidated",
    "SampleRejected",
    "SampleDecoded",
    "SampleNormalized",
    "SampleEncoded",
    "PreparationFailed",
    "SampleBuffer",
    "EncodedAudio",
    "PreparationResult",
    "NormalizationTarget",
    "ValidationPolicy",
    "VoiceProfile",
    "ELEVENLABS_PROFILE",
    "ZERO_SHOT_PROFILE",
    "BUILTIN_PROFILES",
]
