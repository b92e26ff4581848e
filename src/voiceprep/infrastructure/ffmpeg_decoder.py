"""Audio decode adapter backed by pydub/ffmpeg for browser recorder containers."""

from __future__ import annotations

from contextlib import contextmanager
import io
import logging
from typing import Iterator

import numpy as np
from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError

from voiceprep.audio_contract import base_media_type
from voiceprep.domain.models import SampleBuffer
from voiceprep.errors import DecodeError

logger = logging.getLogger(__name__)

# ffmpeg demuxer names keyed by declared media type.
FFMPEG_FORMATS: dict[str, str] = {
    "audio/webm": "webm",
    "audio/ogg": "ogg",
    "audio/mp4": "mp4",
    "audio/x-m4a": "mp4",
    "audio/aac": "aac",
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/flac": "flac",
}


class FFmpegDecoder:
    """Decode WebM/MP4/AAC and other ffmpeg-readable blobs through pydub.

    When ``sample_rate_hz`` is set, the decoded segment is resampled before it
    is handed out.
    """

    def __init__(self, sample_rate_hz: int | None = None) -> None:
        self.sample_rate_hz = sample_rate_hz

    @contextmanager
    def open(self, blob: bytes, media_type: str | None = None) -> Iterator[SampleBuffer]:
        container = FFMPEG_FORMATS.get(base_media_type(media_type)) if media_type else None
        try:
            segment = AudioSegment.from_file(io.BytesIO(blob), format=container)
            if self.sample_rate_hz and segment.frame_rate != self.sample_rate_hz:
                segment = segment.set_frame_rate(self.sample_rate_hz)
        except CouldntDecodeError as exc:
            raise DecodeError(f"Unable to decode {media_type or 'audio'} sample: {exc}") from exc
        except OSError as exc:
            # Raised when the ffmpeg binary itself cannot be started.
            raise DecodeError(f"Unable to run ffmpeg for {media_type or 'audio'} sample: {exc}") from exc

        buffer = _segment_to_buffer(segment)
        logger.debug(
            "sample_decoded",
            extra={
                "decoder": "ffmpeg",
                "media_type": media_type,
                "sample_rate_hz": buffer.sample_rate_hz,
                "channel_count": buffer.channel_count,
                "frame_count": buffer.frame_count,
            },
        )
        yield buffer


def _segment_to_buffer(segment: AudioSegment) -> SampleBuffer:
    samples = np.array(segment.get_array_of_samples(), dtype=np.float32)
    full_scale = float(1 << (8 * segment.sample_width - 1))
    frames = samples.reshape(-1, segment.channels) / full_scale
    return SampleBuffer(
        samples=np.ascontiguousarray(frames.T, dtype=np.float32),
        sample_rate_hz=int(segment.frame_rate),
    )
