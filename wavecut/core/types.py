"""
Type definitions for the WaveCut core module.
Provides type aliases and protocols for type safety and better IDE support.
"""
from typing import TYPE_CHECKING, Callable, Optional, Protocol
import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from .asset import AudioAsset
    from .config import PlaybackState
    from .errors import EditorError
    from .selection import Selection, SelectionInfo

# Audio data types
AudioArray = NDArray[np.float32]  # Shape: (frames, channels)
MonoArray = NDArray[np.float32]   # Shape: (frames,)
Raster = NDArray[np.uint8]        # Shape: (height, width, 3)

# Callback types
PositionCallback = Callable[[float], None]
StateCallback = Callable[["PlaybackState"], None]
FrameCallback = Callable[[], None]
SelectionCallback = Callable[[Optional["Selection"]], None]
SelectionInfoCallback = Callable[[Optional["SelectionInfo"]], None]
SeekCallback = Callable[[float], None]
ErrorCallback = Callable[["EditorError"], None]
ExportSink = Callable[[bytes, str], None]  # (payload, filename)
Clock = Callable[[], float]


class FrameHandle(Protocol):
    """Pending frame callback that can be withdrawn."""
    def cancel(self) -> None: ...


class FrameScheduler(Protocol):
    """Display-refresh bound scheduling used by the transport tick."""
    def schedule_frame(self, callback: Callable[[], None]) -> FrameHandle: ...

    def call_soon_threadsafe(self, callback: Callable[[], None]) -> None: ...


class Voice(Protocol):
    """A single playing sound."""
    def start(self) -> None: ...

    def stop(self) -> None: ...


class VoiceFactory(Protocol):
    def __call__(
        self,
        asset: "AudioAsset",
        start: float,
        duration: Optional[float],
        on_ended: Callable[[], None],
    ) -> Voice: ...
