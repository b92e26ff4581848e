"""Audio ingest/output contract shared by all external entry points.

Invariants
----------
* Ingest accepts only a known set of recorder media types.
* Everything the pipeline emits is mono 16-bit PCM in a WAV container.
"""

from __future__ import annotations

from .errors import VoicePrepError

# Media types produced by browser/mobile recorders and common uploads.
ACCEPTED_SOURCE_MIME_TYPES: tuple[str, ...] = (
    "audio/webm",
    "audio/ogg",
    "audio/mp4",
    "audio/x-m4a",
    "audio/aac",
    "audio/mpeg",
    "audio/mp3",
    "audio/wav",
    "audio/x-wav",
    "audio/wave",
    "audio/flac",
)

UNSPECIFIED_MIME_TYPE = "application/octet-stream"

OUTPUT_MEDIA_TYPE = "audio/wav"
OUTPUT_CHANNEL_COUNT = 1
OUTPUT_BITS_PER_SAMPLE = 16


class UnsupportedAudioFormatError(VoicePrepError, ValueError):
    """Raised when ingest receives media outside the supported source contract."""

    code = "unsupported_media_type"


def base_media_type(media_type: str) -> str:
    """Strip parameters such as ``;codecs=opus`` and normalize case."""

    return media_type.split(";", 1)[0].strip().lower()


def ensure_supported_media_type(media_type: str | None) -> None:
    """Validate a declared media type against the accepted recorder formats."""

    if not media_type:
        return
    # Generic binary uploads carry no format claim; the decoder decides.
    if base_media_type(media_type) in ACCEPTED_SOURCE_MIME_TYPES + (UNSPECIFIED_MIME_TYPE,):
        return

    supported = ", ".join(ACCEPTED_SOURCE_MIME_TYPES)
    raise UnsupportedAudioFormatError(
        f"Unsupported media type '{media_type}'. Supported media types: {supported}."
    )


def sniff_media_type(raw_bytes: bytes) -> str | None:
    """Guess a container media type from magic bytes, or ``None`` if unknown."""

    if raw_bytes.startswith(b"RIFF") and raw_bytes[8:12] == b"WAVE":
        return "audio/wav"
    if raw_bytes.startswith(b"fLaC"):
        return "audio/flac"
    if raw_bytes.startswith(b"OggS"):
        return "audio/ogg"
    if raw_bytes.startswith(b"\x1a\x45\xdf\xa3"):
        return "audio/webm"
    if raw_bytes[4:8] == b"ftyp":
        return "audio/mp4"
    if raw_bytes.startswith(b"ID3"):
        return "audio/mpeg"
    if len(raw_bytes) >= 2 and raw_bytes[0] == 0xFF and (raw_bytes[1] & 0xE0) == 0xE0:
        return "audio/mpeg"
    return None
