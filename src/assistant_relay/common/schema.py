"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict


class GenerationRequest(BaseModel):
    """Body of a relayed generation call. `contents` and `config` are opaque."""

    model: str | None = None
    contents: Any = None
    config: Any = None

    model_config = ConfigDict(extra="ignore")

    def is_complete(self) -> bool:
        return bool(self.model) and bool(self.contents)


@dataclass
class PCMBuffer:
    """Decoded linear PCM audio, one float array per channel."""
    sample_rate: int
    channel_data: list[np.ndarray] = field(default_factory=list)

    def __post_init__(self) -> None:
        if int(self.sample_rate) <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if not self.channel_data:
            raise ValueError("PCMBuffer needs at least one channel")
        self.channel_data = [np.asarray(ch, dtype=np.float64) for ch in self.channel_data]
        lengths = {len(ch) for ch in self.channel_data}
        if len(lengths) != 1:
            raise ValueError(f"channels have different lengths: {sorted(lengths)}")

    @classmethod
    def from_channels(cls, sample_rate: int, *channels: Sequence[float]) -> "PCMBuffer":
        return cls(sample_rate=sample_rate, channel_data=list(channels))

    @property
    def channel_count(self) -> int:
        return len(self.channel_data)

    @property
    def frame_count(self) -> int:
        return len(self.channel_data[0])
