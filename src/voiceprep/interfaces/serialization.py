"""Plain-dict views of pipeline results for JSON reports and HTTP payloads."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from voiceprep.analyzer.loudness import LevelReport
from voiceprep.domain.models import PreparationResult


def levels_to_dict(levels: LevelReport | None) -> dict[str, Any] | None:
    if levels is None:
        return None
    return asdict(levels)


def result_to_dict(result: PreparationResult, profile_id: str | None = None) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "validation": result.validation.as_dict(),
        "input_levels": levels_to_dict(result.input_levels),
        "output_levels": levels_to_dict(result.output_levels),
    }
    if profile_id is not None:
        payload["profile_id"] = profile_id
    if result.encoded is not None:
        payload["encoded"] = {
            "media_type": result.encoded.media_type,
            "sample_rate_hz": result.encoded.sample_rate_hz,
            "frame_count": result.encoded.frame_count,
            "size_bytes": result.encoded.size_bytes,
        }
    return payload
