"""RIFF/WAVE 16-bit PCM encoding for decoded audio buffers."""
from __future__ import annotations
import io
import wave

import numpy as np

from assistant_relay.common.errors import OutOfRangeError
from assistant_relay.common.schema import PCMBuffer

WAV_MIME_TYPE = "audio/wav"
HEADER_SIZE = 44
SAMPLE_WIDTH = 2


def quantize(samples: np.ndarray) -> np.ndarray:
    """Map float samples to int16 with the asymmetric 16-bit scale.

    Samples below -0.5 scale by 32768, everything else by 32767, and the
    product is truncated toward zero rather than rounded.
    """
    clamped = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 1.0)
    scaled = np.where(0.5 + clamped < 0, clamped * 32768.0, clamped * 32767.0)
    return np.trunc(scaled).astype("<i2")


def encode_wav(buffer: PCMBuffer, frame_limit: int | None = None) -> bytes:
    """
    Encode the first `frame_limit` frames of `buffer` as a WAVE file.

    Args:
        buffer: Decoded PCM audio.
        frame_limit: Frames to encode from the start; all frames when None.

    Returns:
        The complete container, header included
        (frame_limit * channels * 2 + 44 bytes).

    Raises:
        OutOfRangeError: frame_limit is negative or exceeds a channel's length.
    """
    if frame_limit is None:
        frame_limit = buffer.frame_count
    if frame_limit < 0:
        raise OutOfRangeError(f"frame_limit must be non-negative, got {frame_limit}")
    for idx, channel in enumerate(buffer.channel_data):
        if len(channel) < frame_limit:
            raise OutOfRangeError(
                f"channel {idx} has {len(channel)} samples, {frame_limit} requested"
            )

    # (frames, channels) in C order interleaves channel samples within each frame.
    frames = np.stack(
        [quantize(ch[:frame_limit]) for ch in buffer.channel_data], axis=1
    )
    out = io.BytesIO()
    with wave.open(out, "wb") as wf:
        wf.setnchannels(buffer.channel_count)
        wf.setsampwidth(SAMPLE_WIDTH)
        wf.setframerate(buffer.sample_rate)
        wf.setnframes(frame_limit)
        wf.writeframes(frames.tobytes(order="C"))
    return out.getvalue()
