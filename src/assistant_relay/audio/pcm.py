"""Helpers for turning inline generated audio into PCM buffers."""
from __future__ import annotations
import base64
import binascii
from typing import Any

import numpy as np

from assistant_relay.common.schema import PCMBuffer

SPEECH_SAMPLE_RATE = 24000


def decode_base64_audio(data: str | bytes) -> bytes:
    """Decode base64 audio; accepts both the standard and URL-safe alphabet."""
    if isinstance(data, str):
        data = data.encode("ascii")
    data = data.strip()
    padded = data + b"=" * (-len(data) % 4)
    try:
        return base64.b64decode(padded, altchars=b"-_")
    except binascii.Error as e:
        raise ValueError(f"Inline audio is not valid base64: {e}") from e


def pcm16_to_buffer(
    data: bytes, sample_rate: int = SPEECH_SAMPLE_RATE, channels: int = 1
) -> PCMBuffer:
    """
    De-interleave 16-bit little-endian PCM into float channels.

    Args:
        data: Raw PCM bytes.
        sample_rate: Sample rate of the stream.
        channels: Number of interleaved channels.

    Returns:
        PCMBuffer with samples scaled by 1/32768.
    """
    if channels <= 0:
        raise ValueError(f"channels must be positive, got {channels}")
    frame_size = 2 * channels
    if len(data) % frame_size:
        raise ValueError(
            f"PCM byte length {len(data)} is not a multiple of the frame size {frame_size}"
        )
    samples = np.frombuffer(data, dtype="<i2").astype(np.float32) / np.float32(32768.0)
    frames = samples.reshape(-1, channels)
    return PCMBuffer(
        sample_rate=sample_rate,
        channel_data=[frames[:, c] for c in range(channels)],
    )


def extract_inline_audio(payload: dict[str, Any]) -> bytes | None:
    """Return the audio bytes of the first candidate's first part, if any."""
    try:
        part = payload["candidates"][0]["content"]["parts"][0]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(part, dict):
        return None
    inline = part.get("inlineData") or part.get("inline_data") or {}
    data = inline.get("data")
    if not data:
        return None
    if isinstance(data, (bytes, bytearray)):
        return bytes(data)
    return decode_base64_audio(data)
