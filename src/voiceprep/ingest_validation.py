"""Sample size and duration policy checks.

Validation failures are ordinary outcomes for recorded samples, so they are
returned as :class:`ValidationResult` values rather than raised. Checks run in
order and the first failure wins:

1. raw blob smaller than ``policy.min_size_bytes``;
2. decoded duration shorter than ``policy.min_duration_seconds``;
3. decoded duration longer than ``policy.max_duration_seconds``.
"""

from __future__ import annotations

from dataclasses import dataclass

from .domain.policies import ValidationPolicy


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool
    duration_seconds: float
    message: str | None = None
    code: str | None = None

    def as_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {"valid": self.valid, "duration_seconds": self.duration_seconds}
        if self.message is not None:
            payload["message"] = self.message
        if self.code is not None:
            payload["code"] = self.code
        return payload


class DurationValidator:
    """Apply a :class:`ValidationPolicy` to a raw blob and its decoded duration."""

    def validate_size(self, blob: bytes, policy: ValidationPolicy) -> ValidationResult:
        size_bytes = len(blob)
        if size_bytes < policy.min_size_bytes:
            return ValidationResult(
                valid=False,
                duration_seconds=0.0,
                message=(
                    f"Audio file too small ({size_bytes} bytes, minimum {policy.min_size_bytes} bytes). "
                    "Please record a longer sample."
                ),
                code="file_too_small",
            )
        return ValidationResult(valid=True, duration_seconds=0.0)

    def validate(
        self,
        blob: bytes,
        decoded_duration_seconds: float,
        policy: ValidationPolicy,
    ) -> ValidationResult:
        size_result = self.validate_size(blob, policy)
        if not size_result.valid:
            return size_result

        duration = float(decoded_duration_seconds)
        if duration < policy.min_duration_seconds:
            return ValidationResult(
                valid=False,
                duration_seconds=duration,
                message=(
                    f"Recording too short ({duration:.1f}s). "
                    f"Please record at least {policy.min_duration_seconds:g} seconds for best quality."
                ),
                code="duration_too_short",
            )
        if duration > policy.max_duration_seconds:
            return ValidationResult(
                valid=False,
                duration_seconds=duration,
                message=(
                    f"Recording too long ({duration:.1f}s). "
                    f"Please keep it under {policy.max_duration_seconds:g} seconds."
                ),
                code="duration_too_long",
            )
        return ValidationResult(valid=True, duration_seconds=duration)


def validate_sample(blob: bytes, decoded_duration_seconds: float, policy: ValidationPolicy) -> ValidationResult:
    return DurationValidator().validate(blob, decoded_duration_seconds, policy)
