"""
Playback controller for WaveCut.
Owns the transport state and the per-frame position tick.
"""
from __future__ import annotations
import logging
import time
from functools import partial
from typing import TYPE_CHECKING, Optional

from .config import PlaybackState
from .types import (Clock, FrameCallback, FrameHandle, FrameScheduler,
                    PositionCallback, StateCallback, Voice, VoiceFactory)
from .voice import SoundDeviceVoice

if TYPE_CHECKING:
    from .session import EditorSession

logger = logging.getLogger("WaveCut")


class PlaybackController:
    """
    Plays the session's asset, one voice at a time.

    Elapsed time is derived from a monotonic clock rather than counted
    frames: ``elapsed = clock() - engine_start_offset`` is the position in
    the asset, in seconds.
    """
    __slots__ = (
        '_session', '_scheduler', '_voice_factory', '_clock', '_state', '_voice',
        '_engine_start_offset', '_play_range_start', '_play_range_duration',
        '_pause_time', '_generation', '_pending_tick',
        '_on_position_changed', '_on_state_changed', '_on_frame', '_disposed'
    )

    def __init__(
        self,
        session: "EditorSession",
        scheduler: FrameScheduler,
        voice_factory: VoiceFactory = SoundDeviceVoice,
        clock: Clock = time.monotonic,
        on_position_changed: Optional[PositionCallback] = None,
        on_state_changed: Optional[StateCallback] = None,
        on_frame: Optional[FrameCallback] = None
    ) -> None:
        """
        Initialize playback controller.

        Args:
            session: Session holding the asset and selection to play
            scheduler: Frame scheduler driving the position tick
            voice_factory: Creates the voice for a play range
            clock: Monotonic clock in seconds
            on_position_changed: Callback for position updates (seconds)
            on_state_changed: Callback for state changes
            on_frame: Callback asking for a redraw
        """
        self._session = session
        self._scheduler = scheduler
        self._voice_factory = voice_factory
        self._clock = clock
        self._state = PlaybackState.STOPPED
        self._voice: Optional[Voice] = None
        self._engine_start_offset: float = 0.0
        self._play_range_start: float = 0.0
        self._play_range_duration: Optional[float] = None
        self._pause_time: float = 0.0
        self._generation: int = 0
        self._pending_tick: Optional[FrameHandle] = None
        self._on_position_changed = on_position_changed
        self._on_state_changed = on_state_changed
        self._on_frame = on_frame
        self._disposed: bool = False

    # --- State ---

    @property
    def state(self) -> PlaybackState:
        """Current playback state."""
        return self._state

    @property
    def is_playing(self) -> bool:
        return self._state == PlaybackState.PLAYING

    @property
    def elapsed(self) -> Optional[float]:
        """Current playback position in seconds, None unless playing."""
        if not self.is_playing:
            return None
        return self._clock() - self._engine_start_offset

    @property
    def engine_start_offset(self) -> float:
        return self._engine_start_offset

    @property
    def play_range_start(self) -> float:
        return self._play_range_start

    @property
    def play_range_duration(self) -> Optional[float]:
        """Length of a bounded play, None when playing to the end."""
        return self._play_range_duration

    @property
    def pause_time(self) -> float:
        """
        Position recorded by the last pause().
        Note that play() does not resume from it.
        """
        return self._pause_time

    def _set_state(self, state: PlaybackState) -> None:
        """Update state and notify callback."""
        if self._state != state:
            self._state = state
            if self._on_state_changed and not self._disposed:
                self._on_state_changed(state)

    def _request_frame(self) -> None:
        if self._on_frame and not self._disposed:
            self._on_frame()

    # --- Transport ---

    def play(self, start_time: Optional[float] = None) -> bool:
        """
        Start playback, replacing any current voice.

        Args:
            start_time: Play from here to the end. When omitted, the selection
                is played if there is one, otherwise the whole asset.

        Returns:
            True if playback started successfully
        """
        if self._disposed:
            return False

        asset = self._session.asset
        if asset is None:
            return False

        self.stop()

        range_start, range_duration = self._resolve_range(start_time)
        self._generation += 1
        generation = self._generation

        try:
            voice = self._voice_factory(
                asset, range_start, range_duration,
                partial(self._voice_finished, generation)
            )
            voice.start()
        except Exception as e:
            logger.error("Failed to start playback: %s", e, exc_info=True)
            self._set_state(PlaybackState.STOPPED)
            return False

        self._voice = voice
        self._engine_start_offset = self._clock() - range_start
        self._play_range_start = range_start
        self._play_range_duration = range_duration
        self._set_state(PlaybackState.PLAYING)
        logger.info("Playback started at %.3fs (%s)", range_start,
                    "to end" if range_duration is None else f"{range_duration:.3f}s")

        self._tick(generation)
        return True

    def _resolve_range(self, start_time: Optional[float]) -> tuple[float, Optional[float]]:
        duration = self._session.duration_seconds
        if start_time is not None:
            return max(0.0, min(duration, start_time)), None

        selection = self._session.selection
        if selection is not None:
            selection = selection.normalized()
            return selection.start, selection.end - selection.start

        return 0.0, None

    def pause(self) -> None:
        """Pause playback, recording the position reached."""
        if not self.is_playing:
            return

        self._pause_time = self._clock() - self._engine_start_offset
        self._release()
        self._set_state(PlaybackState.PAUSED)
        self._request_frame()
        logger.info("Playback paused at %.3fs", self._pause_time)

    def stop(self) -> None:
        """Stop playback and reset the transport."""
        self._release()
        self._pause_time = 0.0
        self._set_state(PlaybackState.STOPPED)
        self._request_frame()

    def toggle_play_pause(self) -> None:
        """Toggle between play and pause states."""
        if self.is_playing:
            self.pause()
        else:
            self.play()

    def _release(self) -> None:
        """Drop the voice and the pending tick."""
        self._generation += 1
        if self._pending_tick is not None:
            self._pending_tick.cancel()
            self._pending_tick = None

        voice, self._voice = self._voice, None
        if voice is not None:
            try:
                voice.stop()
            except Exception as e:
                logger.warning("Error stopping voice: %s", e)
            logger.info("Playback stopped")

        self._engine_start_offset = 0.0
        self._play_range_start = 0.0
        self._play_range_duration = None

    # --- Frame tick ---

    def _tick(self, generation: int) -> None:
        self._pending_tick = None
        if generation != self._generation or not self.is_playing or self._disposed:
            return

        elapsed = self._clock() - self._engine_start_offset
        if (self._play_range_duration is not None
                and elapsed >= self._play_range_start + self._play_range_duration):
            logger.debug("Reached end of play range at %.3fs", elapsed)
            self.stop()
            return

        if self._on_position_changed:
            self._on_position_changed(elapsed)
        self._request_frame()
        self._pending_tick = self._scheduler.schedule_frame(partial(self._tick, generation))

    def _voice_finished(self, generation: int) -> None:
        """Called by the voice, possibly from the audio thread."""
        if self._disposed:
            return
        self._scheduler.call_soon_threadsafe(partial(self._on_voice_ended, generation))

    def _on_voice_ended(self, generation: int) -> None:
        # Voices that were replaced or stopped also report; only the live one counts
        if generation == self._generation and self.is_playing:
            logger.debug("Voice reached end of clip")
            self.stop()

    def cleanup(self) -> None:
        """Clean up resources."""
        self._disposed = True
        self._on_position_changed = None
        self._on_state_changed = None
        self._on_frame = None
        self._release()
        self._state = PlaybackState.STOPPED
