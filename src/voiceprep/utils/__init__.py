from .config import (
    NormalizationTargetConfig,
    ProfileConfig,
    ProfilesConfig,
    RuntimeSettings,
    ValidationPolicyConfig,
    load_profile_config,
    load_profiles,
    load_runtime_settings,
    resolve_profile,
)

__all__ = [
    "NormalizationTargetConfig",
    "ProfileConfig",
    "ProfilesConfig",
    "RuntimeSettings",
    "ValidationPolicyConfig",
    "load_profile_config",
    "load_profiles",
    "load_runtime_settings",
    "resolve_profile",
]
