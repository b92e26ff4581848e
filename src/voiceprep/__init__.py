"""Public package exports for voiceprep with lazy imports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "ChannelMixer",
    "DecodeError",
    "DurationValidator",
    "EmptyBufferError",
    "EncodedAudio",
    "EncodingInvariantViolation",
    "LoudnessAnalyzer",
    "NormalizationTarget",
    "Normalizer",
    "PCMEncoder",
    "PrepareVoiceSample",
    "PreparationResult",
    "SampleBuffer",
    "ValidationPolicy",
    "ValidationResult",
    "VoiceProfile",
    "prepare_file",
    "prepare_voice_sample",
]

_EXPORT_MODULES: dict[str, str] = {
    "ChannelMixer": "voiceprep.processor.mixer",
    "DecodeError": "voiceprep.errors",
    "DurationValidator": "voiceprep.ingest_validation",
    "EmptyBufferError": "voiceprep.errors",
    "EncodedAudio": "voiceprep.domain.models",
    "EncodingInvariantViolation": "voiceprep.errors",
    "LoudnessAnalyzer": "voiceprep.analyzer.loudness",
    "NormalizationTarget": "voiceprep.domain.policies",
    "Normalizer": "voiceprep.processor.normalizer",
    "PCMEncoder": "voiceprep.encoding",
    "PrepareVoiceSample": "voiceprep.application.preparation_service",
    "PreparationResult": "voiceprep.domain.models",
    "SampleBuffer": "voiceprep.domain.models",
    "ValidationPolicy": "voiceprep.domain.policies",
    "ValidationResult": "voiceprep.ingest_validation",
    "VoiceProfile": "voiceprep.domain.policies",
    "prepare_file": "voiceprep.core",
    "prepare_voice_sample": "voiceprep.core",
}


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MODULES:
        raise AttributeError(f"module 'voiceprep' has no attribute {name!r}")

    module = import_module(_EXPORT_MODULES[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
