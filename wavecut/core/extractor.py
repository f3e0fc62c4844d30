from __future__ import annotations
from typing import Optional

from .asset import AudioAsset
from .errors import InvalidSelectionForExport
from .mapper import time_to_sample
from .selection import Selection
from .types import AudioArray


def extract_range(asset: AudioAsset, selection: Optional[Selection]) -> AudioArray:
    """
    Copy the samples covered by ``selection`` out of ``asset``.

    Bounds are converted with floor(time * samplerate); the result holds
    every channel for frames [start_sample, end_sample).
    """
    if selection is None:
        raise InvalidSelectionForExport("No selection to extract")

    selection = selection.normalized()
    start_sample = time_to_sample(selection.start, asset.samplerate)
    end_sample = time_to_sample(selection.end, asset.samplerate)
    return asset.data[start_sample:end_sample].copy()
