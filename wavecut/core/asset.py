from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .types import AudioArray, MonoArray


@dataclass(frozen=True)
class AudioAsset:
    """
    Decoded recording under edit.
    Samples are stored as a read-only (frames, channels) float32 array;
    a new import replaces the whole asset instead of mutating it.
    """
    data: AudioArray
    samplerate: int
    name: str = ""

    def __post_init__(self) -> None:
        if self.samplerate <= 0:
            raise ValueError(f"Sample rate must be positive, got {self.samplerate}")

        data = np.array(self.data, dtype=np.float32)  # Always a private copy
        if data.ndim == 1:
            data = data.reshape(-1, 1)
        if data.ndim != 2 or data.shape[1] < 1:
            raise ValueError(f"Expected (frames, channels) samples, got shape {data.shape}")

        data.setflags(write=False)
        object.__setattr__(self, "data", data)

    @classmethod
    def from_channels(cls, channels: Sequence[np.ndarray], samplerate: int, name: str = "") -> "AudioAsset":
        """Build an asset from one array per channel (all of equal length)."""
        lengths = {len(c) for c in channels}
        if len(lengths) != 1:
            raise ValueError("All channels must have the same length")
        return cls(np.column_stack(channels), samplerate, name)

    @property
    def frame_count(self) -> int:
        return self.data.shape[0]

    @property
    def channels(self) -> int:
        return self.data.shape[1]

    @property
    def duration_seconds(self) -> float:
        return self.frame_count / self.samplerate

    def channel(self, index: int) -> MonoArray:
        """Samples of a single channel (a read-only view)."""
        return self.data[:, index]

    def __repr__(self) -> str:
        return (f"AudioAsset(name={self.name!r}, channels={self.channels}, "
                f"samplerate={self.samplerate}, duration={self.duration_seconds:.2f}s)")
