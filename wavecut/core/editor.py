"""
Editor orchestrator for WaveCut.
Wires the session, selection, playback, rendering and export together and
is the boundary where failures become user notifications.
"""
from __future__ import annotations
import os
import time
from typing import Optional

from .asset import AudioAsset
from .audio_io import AudioSource, decode_audio, extract_audio_track
from .config import EXTRACTION_CONFIG, EditMode, ExtractionConfig, PlaybackState
from .errors import (DecodeFailure, EditorError, ExtractionFailure,
                     GenericExportFailure, NoAssetLoaded)
from .export import ExportJob, plain_filename
from .extractor import extract_range
from .playback import PlaybackController
from .renderer import WaveformRenderer
from .selection import Selection, SelectionInfo
from .session import EditorSession
from .types import (Clock, ErrorCallback, ExportSink, FrameCallback, FrameScheduler,
                    PositionCallback, Raster, SelectionInfoCallback, StateCallback,
                    VoiceFactory)
from .voice import SoundDeviceVoice
from wavecut.utils.logger import logger


class AudioEditor:
    """
    Core engine: import, selection gestures, preview playback and export.
    Frontends drive it with pointer events and transport calls, and listen
    through the callbacks.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        export_sink: Optional[ExportSink] = None,
        voice_factory: VoiceFactory = SoundDeviceVoice,
        clock: Clock = time.monotonic,
        session: Optional[EditorSession] = None,
        renderer: Optional[WaveformRenderer] = None,
        extraction_config: ExtractionConfig = EXTRACTION_CONFIG,
        on_selection_changed: Optional[SelectionInfoCallback] = None,
        on_position_changed: Optional[PositionCallback] = None,
        on_state_changed: Optional[StateCallback] = None,
        on_redraw: Optional[FrameCallback] = None,
        on_asset_changed: Optional[FrameCallback] = None,
        on_error: Optional[ErrorCallback] = None
    ):
        self.session = session if session is not None else EditorSession()
        self.session.selection_machine.connect(self._on_selection_changed, self._on_seek_requested)
        self.renderer = renderer if renderer is not None else WaveformRenderer()
        self.renderer.set_asset(self.session.asset)
        self.export_sink = export_sink
        self.extraction_config = extraction_config

        self.on_selection_changed = on_selection_changed
        self.on_redraw = on_redraw
        self.on_asset_changed = on_asset_changed
        self.on_error = on_error

        self.playback = PlaybackController(
            self.session,
            scheduler,
            voice_factory=voice_factory,
            clock=clock,
            on_position_changed=on_position_changed,
            on_state_changed=on_state_changed,
            on_frame=self._request_redraw
        )
        logger.info("AudioEditor initialized")

    # --- State ---

    @property
    def asset(self) -> Optional[AudioAsset]:
        return self.session.asset

    @property
    def selection(self) -> Optional[Selection]:
        return self.session.selection

    @property
    def edit_mode(self) -> EditMode:
        return self.session.selection_machine.mode

    @property
    def playback_state(self) -> PlaybackState:
        return self.playback.state

    # --- Notifications ---

    def _request_redraw(self) -> None:
        if self.on_redraw:
            self.on_redraw()

    def _on_selection_changed(self, selection: Optional[Selection]) -> None:
        self._request_redraw()
        if self.on_selection_changed:
            info = SelectionInfo.from_selection(selection) if selection is not None else None
            self.on_selection_changed(info)

    def _on_seek_requested(self, t: float) -> None:
        # Clicking outside the selection only relocates an ongoing playback
        if self.playback.is_playing:
            self.playback.stop()
            self.playback.play(t)

    def _report(self, error: EditorError) -> None:
        logger.error(f"{type(error).__name__}: {error}", exc_info=error)
        if self.on_error:
            self.on_error(error)

    # --- File I/O ---

    def load_file(self, file_path: str | os.PathLike) -> bool:
        """Decode an audio file and make it the asset under edit."""
        logger.info(f"Loading file: {file_path}")
        name = os.path.basename(os.fspath(file_path))
        return self._load(file_path, name)

    def load_bytes(self, payload: bytes, name: str) -> bool:
        """Decode in-memory audio file contents named ``name``."""
        logger.info(f"Loading {len(payload)} bytes as {name}")
        return self._load(payload, name)

    def _load(self, source: AudioSource, name: str) -> bool:
        try:
            asset = decode_audio(source, name)
        except EditorError as e:
            self._report(e)
            return False
        except Exception as e:
            self._report(DecodeFailure(str(e)))
            return False

        # The previous asset stays in place until decoding has succeeded
        self._install(asset, name)
        return True

    def _install(self, asset: AudioAsset, name: str) -> None:
        self.playback.stop()
        self.session.replace_asset(asset, name)
        self.renderer.set_asset(asset)
        if self.on_asset_changed:
            self.on_asset_changed()
        self._request_redraw()
        logger.info(f"Loaded {asset!r}")

    def convert_video_to_wav(self, file_path: str | os.PathLike) -> Optional[ExportJob]:
        """
        Extract the audio track of a video and export it as ``<basename>.wav``.
        The asset under edit and the export numbering are left alone.
        """
        logger.info(f"Converting video to WAV: {file_path}")
        try:
            asset = extract_audio_track(file_path, self.extraction_config)
            job = ExportJob(asset.data, asset.samplerate, plain_filename(asset.name))
            self._deliver(job)
            return job
        except EditorError as e:
            self._report(e)
        except Exception as e:
            self._report(ExtractionFailure(str(e)))
        return None

    # --- Export ---

    def export_selection(self) -> Optional[ExportJob]:
        """Export the selected range as the next numbered file."""
        try:
            asset = self._require_asset()
            data = extract_range(asset, self.session.selection)
            job = ExportJob(data, asset.samplerate, self.session.next_export_filename())
            self._deliver(job)
            return job
        except EditorError as e:
            self._report(e)
        except Exception as e:
            self._report(GenericExportFailure(str(e)))
        return None

    def export_all(self) -> Optional[ExportJob]:
        """Export the whole asset as the next numbered file."""
        try:
            asset = self._require_asset()
            job = ExportJob(asset.data, asset.samplerate, self.session.next_export_filename())
            self._deliver(job)
            return job
        except EditorError as e:
            self._report(e)
        except Exception as e:
            self._report(GenericExportFailure(str(e)))
        return None

    def _require_asset(self) -> AudioAsset:
        if self.session.asset is None:
            raise NoAssetLoaded("No audio loaded")
        return self.session.asset

    def _deliver(self, job: ExportJob) -> None:
        if self.export_sink is None:
            raise GenericExportFailure("No export destination configured")
        payload = job.encode()
        self.export_sink(payload, job.filename)
        logger.info(f"Exported {job.filename} ({job.frame_count} frames)")

    # --- Playback Control ---

    def play(self, start_time: Optional[float] = None) -> bool:
        return self.playback.play(start_time)

    def pause(self) -> None:
        self.playback.pause()

    def stop(self) -> None:
        self.playback.stop()

    def toggle_play_pause(self) -> None:
        self.playback.toggle_play_pause()

    # --- Pointer interaction ---

    def set_viewport_width(self, width: float) -> None:
        self.session.selection_machine.set_viewport_width(width)

    def edge_at(self, x: float) -> Optional[EditMode]:
        return self.session.selection_machine.edge_at(x)

    def pointer_down(self, x: float) -> EditMode:
        return self.session.selection_machine.pointer_down(x)

    def pointer_move(self, x: float) -> None:
        self.session.selection_machine.pointer_move(x)

    def pointer_up(self, x: Optional[float] = None) -> Optional[float]:
        return self.session.selection_machine.pointer_up(x)

    def pointer_leave(self) -> None:
        self.session.selection_machine.pointer_leave()

    # --- Rendering ---

    def render(self, width: int, height: int) -> Optional[Raster]:
        """Current waveform frame, None when nothing is loaded."""
        return self.renderer.render(width, height, self.session.selection, self.playback.elapsed)

    def cleanup(self) -> None:
        self.playback.cleanup()
