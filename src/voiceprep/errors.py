"""Error taxonomy shared by the preparation pipeline and its entry points."""

from __future__ import annotations


class VoicePrepError(Exception):
    """Base error carrying a stable machine-readable code."""

    code = "voiceprep_error"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}


class DecodeError(VoicePrepError):
    """Raised by a decoder for unsupported codecs or corrupt containers."""

    code = "decode_failed"


class EmptyBufferError(VoicePrepError):
    """Raised when decoding succeeded but produced zero samples."""

    code = "empty_buffer"


class EncodingInvariantViolation(VoicePrepError):
    """Raised when the encoded container fails its header self-check."""

    code = "encoding_invariant_violation"


class UnknownProfileError(VoicePrepError, ValueError):
    """Raised when a voice profile id matches no built-in or configured profile."""

    code = "unknown_profile"
