"""Canonical mono 16-bit PCM WAV serialization.

Layout (all integers little-endian)::

    0   "RIFF"          4   u32 36 + data_size     8   "WAVE"
    12  "fmt "          16  u32 16                 20  u16 1 (PCM)
    22  u16 channels    24  u32 sample_rate        28  u32 byte_rate
    32  u16 block_align 34  u16 bits_per_sample    36  "data"
    40  u32 data_size   44  int16 samples...
"""

from __future__ import annotations

from dataclasses import dataclass
import struct

import numpy as np

from .audio_contract import OUTPUT_BITS_PER_SAMPLE, OUTPUT_CHANNEL_COUNT, OUTPUT_MEDIA_TYPE
from .domain.models import EncodedAudio, SampleBuffer
from .errors import EncodingInvariantViolation

WAV_HEADER_SIZE = 44
_PCM_FORMAT_TAG = 1
_FMT_CHUNK_SIZE = 16
_HEADER_STRUCT = struct.Struct("<4sI4s4sIHHIIHH4sI")


@dataclass(frozen=True, slots=True)
class WavHeader:
    riff_size: int
    format_tag: int
    channel_count: int
    sample_rate_hz: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_size: int


def read_wav_header(data: bytes) -> WavHeader:
    """Parse the canonical 44-byte header written by :class:`PCMEncoder`."""

    if len(data) < WAV_HEADER_SIZE:
        raise ValueError(f"WAV data is shorter than the {WAV_HEADER_SIZE}-byte header.")
    (
        riff,
        riff_size,
        wave,
        fmt,
        fmt_size,
        format_tag,
        channel_count,
        sample_rate_hz,
        byte_rate,
        block_align,
        bits_per_sample,
        data_id,
        data_size,
    ) = _HEADER_STRUCT.unpack_from(data)
    if riff != b"RIFF" or wave != b"WAVE" or fmt != b"fmt " or data_id != b"data" or fmt_size != _FMT_CHUNK_SIZE:
        raise ValueError("Data is not a canonical PCM WAV container.")
    return WavHeader(
        riff_size=riff_size,
        format_tag=format_tag,
        channel_count=channel_count,
        sample_rate_hz=sample_rate_hz,
        byte_rate=byte_rate,
        block_align=block_align,
        bits_per_sample=bits_per_sample,
        data_size=data_size,
    )


def float_to_pcm16(samples: np.ndarray) -> np.ndarray:
    """Clamp to ``[-1, 1]`` and scale asymmetrically onto the int16 range.

    Negative values scale by 32768 and non-negative values by 32767, then
    truncate toward zero.
    """

    clipped = np.clip(samples.astype(np.float64, copy=False), -1.0, 1.0)
    scaled = np.where(clipped < 0.0, clipped * 32768.0, clipped * 32767.0)
    return np.trunc(scaled).astype("<i2")


class PCMEncoder:
    """Serialize a mono float buffer into a byte-exact canonical WAV blob."""

    bits_per_sample = OUTPUT_BITS_PER_SAMPLE
    channel_count = OUTPUT_CHANNEL_COUNT

    def encode(self, buffer: SampleBuffer, sample_rate_hz: int | None = None) -> EncodedAudio:
        samples = buffer.mono()
        sample_rate_hz = int(sample_rate_hz or buffer.sample_rate_hz)

        bytes_per_sample = self.bits_per_sample // 8
        block_align = self.channel_count * bytes_per_sample
        byte_rate = sample_rate_hz * block_align
        data_size = samples.size * bytes_per_sample

        header = _HEADER_STRUCT.pack(
            b"RIFF",
            36 + data_size,
            b"WAVE",
            b"fmt ",
            _FMT_CHUNK_SIZE,
            _PCM_FORMAT_TAG,
            self.channel_count,
            sample_rate_hz,
            byte_rate,
            block_align,
            self.bits_per_sample,
            b"data",
            data_size,
        )
        payload = header + float_to_pcm16(samples).tobytes()
        _check_container(payload)

        return EncodedAudio(
            data=payload,
            sample_rate_hz=sample_rate_hz,
            frame_count=int(samples.size),
            media_type=OUTPUT_MEDIA_TYPE,
        )


def _check_container(payload: bytes) -> None:
    if payload[0:4] != b"RIFF" or payload[8:12] != b"WAVE":
        raise EncodingInvariantViolation("Encoded WAV header failed its RIFF/WAVE self-check.")
