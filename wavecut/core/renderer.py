"""
Waveform rasterization for WaveCut.
Produces an RGB frame from the reference channel, the selection and the playhead.
"""
from __future__ import annotations
import math
from typing import Optional

import numpy as np

from .asset import AudioAsset
from .config import WAVEFORM_CONFIG, WaveformConfig
from .mapper import time_to_pixel
from .selection import Selection
from .types import MonoArray, Raster

REFERENCE_CHANNEL = 0


def compute_envelope(channel: MonoArray, width: int) -> tuple[np.ndarray, np.ndarray]:
    """
    Min/max envelope of ``channel`` over ``width`` pixel columns.

    Each column covers ceil(len / width) consecutive samples. Trailing
    columns past the end of the data are omitted, so the returned arrays may
    be shorter than ``width``.
    """
    n = len(channel)
    if n == 0 or width <= 0:
        empty = np.zeros(0, dtype=np.float32)
        return empty, empty

    step = math.ceil(n / width)
    starts = np.arange(0, n, step)
    mins = np.minimum.reduceat(channel, starts)
    maxs = np.maximum.reduceat(channel, starts)
    return mins, maxs


def _fill_columns(raster: Raster, c0: int, c1: int, color, alpha: float = 1.0) -> None:
    width = raster.shape[1]
    c0, c1 = max(0, c0), min(width, c1)
    if c1 <= c0:
        return
    if alpha >= 1.0:
        raster[:, c0:c1] = color
    else:
        band = raster[:, c0:c1].astype(np.float32)
        band = band * (1.0 - alpha) + np.asarray(color, dtype=np.float32) * alpha
        raster[:, c0:c1] = np.clip(band, 0, 255).astype(np.uint8)


def _draw_vline(raster: Raster, x: float, line_width: int, color) -> None:
    c0 = int(round(x - line_width / 2))
    _fill_columns(raster, c0, c0 + line_width, color)


class WaveformRenderer:
    """
    Renders the waveform view of an asset into an RGB raster.
    The envelope is cached per width since assets never change in place.
    """

    def __init__(self, config: WaveformConfig = WAVEFORM_CONFIG) -> None:
        self._config = config
        self._asset: Optional[AudioAsset] = None
        self._cached_width: Optional[int] = None
        self._cached_envelope: Optional[tuple[np.ndarray, np.ndarray]] = None

    @property
    def asset(self) -> Optional[AudioAsset]:
        return self._asset

    def set_asset(self, asset: Optional[AudioAsset]) -> None:
        self._asset = asset
        self._cached_width = None
        self._cached_envelope = None

    def envelope(self, width: int) -> tuple[np.ndarray, np.ndarray]:
        if self._asset is None:
            raise RuntimeError("No asset loaded")
        if self._cached_width != width or self._cached_envelope is None:
            channel = self._asset.channel(REFERENCE_CHANNEL)
            self._cached_envelope = compute_envelope(channel, width)
            self._cached_width = width
        return self._cached_envelope

    def render(
        self,
        width: int,
        height: int,
        selection: Optional[Selection] = None,
        playhead: Optional[float] = None
    ) -> Optional[Raster]:
        """
        Draw a full frame.

        Layers, bottom to top: background, selection band, waveform, center
        line, selection borders, playhead. Borders and playhead come last so
        they stay visible over dense waveforms.

        Args:
            width: Viewport width in pixels
            height: Viewport height in pixels
            selection: Current selection, if any
            playhead: Playback position in seconds, only while playing

        Returns:
            (height, width, 3) uint8 array, or None without an asset
        """
        if self._asset is None or width <= 0 or height <= 0:
            return None

        cfg = self._config
        duration = self._asset.duration_seconds
        raster = np.empty((height, width, 3), dtype=np.uint8)
        raster[:] = cfg.background_color

        if selection is not None:
            x0 = time_to_pixel(min(selection.start, selection.end), width, duration)
            x1 = time_to_pixel(max(selection.start, selection.end), width, duration)
            _fill_columns(raster, int(math.floor(x0)), int(math.ceil(x1)),
                          cfg.selection_color, cfg.selection_alpha / 255.0)

        mins, maxs = self.envelope(width)
        if len(mins):
            amp = height / 2
            top = np.floor((1.0 - maxs.astype(np.float64)) * amp).astype(np.int64)
            bottom = np.floor((1.0 - mins.astype(np.float64)) * amp).astype(np.int64)
            top = np.clip(top, 0, height - 1)
            bottom = np.clip(bottom, 0, height - 1)
            rows = np.arange(height)[:, np.newaxis]
            mask = (rows >= top[np.newaxis, :]) & (rows <= bottom[np.newaxis, :])
            raster[:, :len(mins)][mask] = cfg.waveform_color

        raster[height // 2, :] = cfg.center_line_color

        if selection is not None:
            for t in (selection.start, selection.end):
                _draw_vline(raster, time_to_pixel(t, width, duration),
                            cfg.border_width, cfg.border_color)

        if playhead is not None:
            _draw_vline(raster, time_to_pixel(playhead, width, duration),
                        cfg.playhead_width, cfg.playhead_color)

        return raster
