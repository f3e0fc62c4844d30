"""
Audio output voice for WaveCut.
Plays one range of an asset through a sounddevice OutputStream.
"""
from __future__ import annotations
import logging
from typing import Callable, Optional

import numpy as np

from .asset import AudioAsset
from .config import AUDIO_CONFIG
from .mapper import time_to_sample

logger = logging.getLogger("WaveCut")


class SoundDeviceVoice:
    """
    A single playing range of an asset.

    ``on_ended`` is invoked from the PortAudio thread once the stream has
    finished, whether the range ran out or ``stop()`` was called.
    """
    __slots__ = ('_asset', '_start_frame', '_end_frame', '_position', '_on_ended', '_stream')

    def __init__(
        self,
        asset: AudioAsset,
        start: float,
        duration: Optional[float],
        on_ended: Callable[[], None]
    ) -> None:
        self._asset = asset
        self._start_frame = min(asset.frame_count, max(0, time_to_sample(start, asset.samplerate)))
        if duration is None:
            self._end_frame = asset.frame_count
        else:
            length = time_to_sample(duration, asset.samplerate)
            self._end_frame = min(asset.frame_count, self._start_frame + length)
        self._position = self._start_frame
        self._on_ended = on_ended
        self._stream = None

    @property
    def position_frames(self) -> int:
        return self._position

    def start(self) -> None:
        import sounddevice as sd

        data = self._asset.data
        end_frame = self._end_frame

        def playback_callback(outdata: np.ndarray, frames: int, time: object, status) -> None:
            """Real-time audio callback."""
            pos = self._position
            end = min(pos + frames, end_frame)
            count = end - pos
            if count > 0:
                outdata[:count] = data[pos:end]
            outdata[max(count, 0):] = 0
            self._position = end
            if end >= end_frame:
                raise sd.CallbackStop()

        self._stream = sd.OutputStream(
            samplerate=self._asset.samplerate,
            channels=self._asset.channels,
            dtype='float32',
            blocksize=AUDIO_CONFIG.playback_blocksize,
            callback=playback_callback,
            finished_callback=self._on_ended
        )
        self._stream.start()
        logger.debug("Voice started: frames %d-%d", self._start_frame, self._end_frame)

    def stop(self) -> None:
        if self._stream is None:
            return
        try:
            self._stream.stop()
            self._stream.close()
        except Exception as e:
            logger.warning("Error stopping stream: %s", e)
        self._stream = None
