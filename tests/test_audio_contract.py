import pytest

from voiceprep.audio_contract import (
    UnsupportedAudioFormatError,
    base_media_type,
    ensure_supported_media_type,
    sniff_media_type,
)
from voiceprep.errors import VoicePrepError


@pytest.mark.parametrize(
    "media_type",
    ["audio/webm", "audio/webm;codecs=opus", "AUDIO/MP4", "audio/wav", "application/octet-stream", None, ""],
)
def test_supported_media_types_pass(media_type):
    ensure_supported_media_type(media_type)


def test_unsupported_media_type_lists_supported_formats():
    with pytest.raises(UnsupportedAudioFormatError) as exc_info:
        ensure_supported_media_type("video/x-msvideo")

    error = exc_info.value
    assert isinstance(error, ValueError)
    assert isinstance(error, VoicePrepError)
    assert error.code == "unsupported_media_type"
    assert "audio/webm" in error.message


def test_base_media_type_strips_parameters():
    assert base_media_type(" Audio/Ogg; codecs=opus ") == "audio/ogg"


@pytest.mark.parametrize(
    ("header", "expected"),
    [
        (b"RIFF\x24\x00\x00\x00WAVEfmt ", "audio/wav"),
        (b"fLaC\x00\x00\x00\x22", "audio/flac"),
        (b"OggS\x00\x02\x00\x00", "audio/ogg"),
        (b"\x1a\x45\xdf\xa3\x9f\x42\x86\x81", "audio/webm"),
        (b"\x00\x00\x00\x20ftypM4A ", "audio/mp4"),
        (b"ID3\x04\x00\x00\x00\x00", "audio/mpeg"),
        (b"\xff\xfb\x90\x64\x00\x00", "audio/mpeg"),
        (b"hello world", None),
        (b"", None),
    ],
)
def test_sniff_media_type_detects_containers(header, expected):
    assert sniff_media_type(header) == expected
