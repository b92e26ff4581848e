from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import json
import os

from pydantic import BaseModel, Field, model_validator

from voiceprep.domain.policies import BUILTIN_PROFILES, NormalizationTarget, ValidationPolicy, VoiceProfile
from voiceprep.errors import UnknownProfileError
from voiceprep.options import DecoderBackend, parse_case_insensitive_enum


class NormalizationTargetConfig(BaseModel):
    target_rms_db: float = Field(..., le=0.0)
    peak_limit_db: float = Field(..., le=0.0)

    def to_target(self) -> NormalizationTarget:
        return NormalizationTarget(target_rms_db=self.target_rms_db, peak_limit_db=self.peak_limit_db)


class ValidationPolicyConfig(BaseModel):
    min_duration_seconds: float = Field(0.0, ge=0.0)
    max_duration_seconds: float = Field(..., gt=0.0)
    min_size_bytes: int = Field(0, ge=0)

    @model_validator(mode="after")
    def _check_duration_bounds(self) -> "ValidationPolicyConfig":
        if self.max_duration_seconds < self.min_duration_seconds:
            raise ValueError("max_duration_seconds must be >= min_duration_seconds.")
        return self

    def to_policy(self) -> ValidationPolicy:
        return ValidationPolicy(
            min_duration_seconds=self.min_duration_seconds,
            max_duration_seconds=self.max_duration_seconds,
            min_size_bytes=self.min_size_bytes,
        )


class ProfileConfig(BaseModel):
    profile_id: str = Field(..., min_length=1)
    normalization: NormalizationTargetConfig
    validation: ValidationPolicyConfig
    decode_sample_rate_hz: int | None = Field(None, gt=0)

    def to_profile(self) -> VoiceProfile:
        return VoiceProfile(
            profile_id=self.profile_id,
            normalization=self.normalization.to_target(),
            validation=self.validation.to_policy(),
            decode_sample_rate_hz=self.decode_sample_rate_hz,
        )


class ProfilesConfig(BaseModel):
    profiles: list[ProfileConfig]


def load_profile_config(path: Path) -> ProfilesConfig:
    data = _load_config_data(path)
    return ProfilesConfig.model_validate(data)


def load_profiles(path: Path) -> dict[str, VoiceProfile]:
    """Load profiles from a YAML/JSON file, keyed by ``profile_id``."""

    config = load_profile_config(path)
    return {item.profile_id: item.to_profile() for item in config.profiles}


def resolve_profile(profile_id: str, config_path: Path | None = None) -> VoiceProfile:
    """Look up a profile among the built-ins and, if given, a profile file.

    Profiles from ``config_path`` override built-ins with the same id.
    """

    available = dict(BUILTIN_PROFILES)
    if config_path is not None:
        available.update(load_profiles(config_path))

    normalized = profile_id.strip().lower()
    for key, profile in available.items():
        if key.lower() == normalized:
            return profile

    allowed = ", ".join(sorted(available))
    raise UnknownProfileError(f"Unknown voice profile '{profile_id}'. Allowed: {allowed}.")


@dataclass(frozen=True, slots=True)
class RuntimeSettings:
    """Process-level settings for the CLI and API entry points."""

    profile_id: str
    profile_config_path: Path | None
    decoder_backend: DecoderBackend


@lru_cache(maxsize=1)
def load_runtime_settings() -> RuntimeSettings:
    """Load runtime settings from environment."""

    config_path = os.getenv("VOICEPREP_PROFILE_CONFIG")
    return RuntimeSettings(
        profile_id=os.getenv("VOICEPREP_PROFILE", "zero-shot"),
        profile_config_path=Path(config_path) if config_path else None,
        decoder_backend=parse_case_insensitive_enum(
            os.getenv("VOICEPREP_DECODER", DecoderBackend.AUTO.value), DecoderBackend
        ),
    )


def _load_config_data(path: Path) -> dict:
    if path.suffix.lower() in {".yaml", ".yml"}:
        try:
            import yaml
        except ImportError as exc:
            raise ImportError("PyYAML is required to load YAML configs.") from exc

        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)
