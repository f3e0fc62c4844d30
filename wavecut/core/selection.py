"""
Selection state machine for WaveCut.
Turns pointer events in waveform pixel space into a committed time range.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from .config import SELECTION_CONFIG, EditMode, SelectionConfig
from .mapper import format_time, pixel_to_time, time_to_pixel
from .types import SeekCallback, SelectionCallback

logger = logging.getLogger("WaveCut")


@dataclass(frozen=True, slots=True)
class Selection:
    """
    Time range in seconds.
    Committed selections always have start < end; while a gesture is in
    progress the bounds may be equal or reversed.
    """
    start: float
    end: float

    @property
    def duration(self) -> float:
        return abs(self.end - self.start)

    def contains(self, t: float) -> bool:
        return self.start <= t <= self.end

    def normalized(self) -> "Selection":
        if self.start > self.end:
            return Selection(self.end, self.start)
        return self


@dataclass(frozen=True, slots=True)
class SelectionInfo:
    """Formatted selection bounds for display."""
    start: str
    end: str
    duration: str

    @classmethod
    def from_selection(cls, selection: Selection) -> "SelectionInfo":
        return cls(
            start=format_time(selection.start),
            end=format_time(selection.end),
            duration=format_time(selection.duration),
        )


class SelectionStateMachine:
    """
    Owns the current selection and the gesture editing it.

    Pointer coordinates are pixel columns of a viewport ``viewport_width``
    pixels wide showing ``duration`` seconds of audio.
    """
    __slots__ = (
        '_config', '_mode', '_start', '_end', '_duration', '_width',
        '_press_x', '_moved', '_on_changed', '_on_seek'
    )

    def __init__(
        self,
        config: SelectionConfig = SELECTION_CONFIG,
        on_changed: Optional[SelectionCallback] = None,
        on_seek: Optional[SeekCallback] = None
    ) -> None:
        """
        Initialize the state machine.

        Args:
            config: Edge tolerance and minimum selection width
            on_changed: Called with the selection (or None) after every mutation
            on_seek: Called with a time when a plain click lands outside the selection
        """
        self._config = config
        self._mode = EditMode.IDLE
        self._start: Optional[float] = None
        self._end: Optional[float] = None
        self._duration: float = 0.0
        self._width: float = 0.0
        self._press_x: Optional[float] = None
        self._moved: bool = False
        self._on_changed = on_changed
        self._on_seek = on_seek

    # --- State ---

    @property
    def mode(self) -> EditMode:
        return self._mode

    @property
    def selection(self) -> Optional[Selection]:
        if self._start is None or self._end is None:
            return None
        return Selection(self._start, self._end)

    @property
    def duration(self) -> float:
        return self._duration

    @property
    def viewport_width(self) -> float:
        return self._width

    @property
    def is_gesture_active(self) -> bool:
        return self._mode != EditMode.IDLE

    def _ready(self) -> bool:
        return self._duration > 0 and self._width > 0

    def _notify(self) -> None:
        if self._on_changed:
            self._on_changed(self.selection)

    def _time_at(self, x: float) -> float:
        return pixel_to_time(x, self._width, self._duration)

    def _pixel_of(self, t: float) -> float:
        return time_to_pixel(t, self._width, self._duration)

    # --- Configuration ---

    def connect(
        self,
        on_changed: Optional[SelectionCallback] = None,
        on_seek: Optional[SeekCallback] = None
    ) -> None:
        """Replace the notification callbacks."""
        self._on_changed = on_changed
        self._on_seek = on_seek

    def reset(self, duration: float) -> None:
        """Bind to a newly loaded asset, dropping any selection and gesture."""
        self._duration = max(0.0, duration)
        self._mode = EditMode.IDLE
        self._start = None
        self._end = None
        self._press_x = None
        self._moved = False
        self._notify()

    def set_viewport_width(self, width: float) -> None:
        self._width = max(0.0, width)

    # --- Pointer events ---

    def edge_at(self, x: float) -> Optional[EditMode]:
        """Drag mode a press at ``x`` would start, or None when no edge is in reach."""
        if not self._ready() or self.selection is None:
            return None
        tolerance = self._config.edge_hit_px
        if abs(x - self._pixel_of(self._start)) <= tolerance:
            return EditMode.DRAGGING_START
        if abs(x - self._pixel_of(self._end)) <= tolerance:
            return EditMode.DRAGGING_END
        return None

    def pointer_down(self, x: float) -> EditMode:
        if not self._ready():
            return self._mode

        self._press_x = x
        self._moved = False

        edge = self.edge_at(x)
        if edge is not None:
            self._mode = edge
            return self._mode

        t = self._time_at(x)
        selection = self.selection
        if selection is not None and selection.contains(t):
            # Press inside the selection keeps it untouched
            return self._mode

        self._mode = EditMode.CREATING
        self._start = t
        self._end = t
        self._notify()
        return self._mode

    def pointer_move(self, x: float) -> None:
        if not self._ready() or self._press_x is None:
            return
        if x != self._press_x:
            self._moved = True

        t = self._time_at(x)
        if self._mode == EditMode.CREATING:
            self._end = t
            self._notify()
        elif self._mode == EditMode.DRAGGING_START:
            # Start edge never crosses the end edge
            if t < self._end:
                self._start = t
                self._notify()
        elif self._mode == EditMode.DRAGGING_END:
            if t > self._start:
                self._end = t
                self._notify()

    def pointer_up(self, x: Optional[float] = None) -> Optional[float]:
        """
        Finish the current gesture.

        Returns:
            The clicked time when the press/release was a plain click outside
            the selection (also reported through ``on_seek``), else None
        """
        was_click = self._press_x is not None and not self._moved
        self._commit()
        self._press_x = None

        if not was_click or x is None or not self._ready():
            return None

        t = self._time_at(x)
        selection = self.selection
        if selection is not None and selection.contains(t):
            return None
        if self._on_seek:
            self._on_seek(t)
        return t

    def pointer_leave(self) -> None:
        """Pointer left the viewport: commit like a release, never a click."""
        self._commit()
        self._press_x = None

    def _commit(self) -> None:
        if self._mode != EditMode.IDLE:
            # Edge drags keep start < end on their own, but may end up too narrow
            self._mode = EditMode.IDLE
            self._apply_committed(self._start, self._end)

    # --- Programmatic edits ---

    def set_selection(self, start: float, end: float) -> Optional[Selection]:
        """Commit a range directly, with the same rules as a finished drag."""
        start = max(0.0, min(self._duration, start))
        end = max(0.0, min(self._duration, end))
        self._mode = EditMode.IDLE
        self._press_x = None
        self._apply_committed(start, end)
        return self.selection

    def clear(self) -> None:
        self._mode = EditMode.IDLE
        self._press_x = None
        self._start = None
        self._end = None
        self._notify()

    def _apply_committed(self, start: Optional[float], end: Optional[float]) -> None:
        if start is not None and end is not None:
            if start > end:
                start, end = end, start
            if end - start < self._config.min_duration:
                logger.debug("Selection %.3f-%.3f below minimum width, cleared", start, end)
                start = end = None
        self._start = start
        self._end = end
        self._notify()
