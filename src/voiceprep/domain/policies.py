"""Domain value objects describing caller-supplied quality targets."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class NormalizationTarget:
    """Loudness target and peak ceiling, both in dBFS."""

    target_rms_db: float
    peak_limit_db: float

    def __post_init__(self) -> None:
        if self.target_rms_db > 0.0:
            raise ValueError("target_rms_db must be <= 0.0.")
        if self.peak_limit_db > 0.0:
            raise ValueError("peak_limit_db must be <= 0.0.")


@dataclass(frozen=True, slots=True)
class ValidationPolicy:
    """Size and duration bounds a sample must satisfy for a cloning provider."""

    min_duration_seconds: float
    max_duration_seconds: float
    min_size_bytes: int

    def __post_init__(self) -> None:
        if self.min_duration_seconds < 0.0:
            raise ValueError("min_duration_seconds must be >= 0.0.")
        if self.max_duration_seconds < self.min_duration_seconds:
            raise ValueError("max_duration_seconds must be >= min_duration_seconds.")
        if self.min_size_bytes < 0:
            raise ValueError("min_size_bytes must be >= 0.")


@dataclass(frozen=True, slots=True)
class VoiceProfile:
    """Named bundle of targets for one downstream cloning provider."""

    profile_id: str
    normalization: NormalizationTarget
    validation: ValidationPolicy
    decode_sample_rate_hz: int | None = None


ELEVENLABS_PROFILE = VoiceProfile(
    profile_id="elevenlabs",
    normalization=NormalizationTarget(target_rms_db=-20.0, peak_limit_db=-3.0),
    validation=ValidationPolicy(min_duration_seconds=60.0, max_duration_seconds=180.0, min_size_bytes=50_000),
    decode_sample_rate_hz=44_100,
)
ZERO_SHOT_PROFILE = VoiceProfile(
    profile_id="zero-shot",
    normalization=NormalizationTarget(target_rms_db=-18.0, peak_limit_db=-1.0),
    validation=ValidationPolicy(min_duration_seconds=6.0, max_duration_seconds=90.0, min_size_bytes=50_000),
    decode_sample_rate_hz=48_000,
)

BUILTIN_PROFILES: dict[str, VoiceProfile] = {
    ELEVENLABS_PROFILE.profile_id: ELEVENLABS_PROFILE,
    ZERO_SHOT_PROFILE.profile_id: ZERO_SHOT_PROFILE,
}
