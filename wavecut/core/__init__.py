"""
WaveCut Core Module

This module contains the selection/playback/export engine:
- AudioEditor: Main orchestrator and error boundary
- EditorSession: Explicit editing state
- AudioAsset: Immutable decoded recording
- SelectionStateMachine: Pointer-driven selection editing
- PlaybackController: Transport and position tick
- WaveformRenderer: Min/max envelope rasterization
- extract_range / encode_wav: Export pipeline
"""
from .asset import AudioAsset
from .editor import AudioEditor
from .session import EditorSession
from .selection import Selection, SelectionInfo, SelectionStateMachine
from .playback import PlaybackController
from .renderer import WaveformRenderer, compute_envelope
from .extractor import extract_range
from .wav_encoder import encode_wav, iter_wav_chunks, wav_header
from .export import DirectoryExportSink, ExportJob
from .audio_io import decode_audio, extract_audio_track
from .mapper import format_time, pixel_to_time, time_to_pixel
from .config import (
    AUDIO_CONFIG,
    SELECTION_CONFIG,
    WAVEFORM_CONFIG,
    PLAYBACK_CONFIG,
    EXPORT_CONFIG,
    EXTRACTION_CONFIG,
    EditMode,
    PlaybackState
)
from . import errors

__all__ = [
    # Main classes
    'AudioEditor',
    'EditorSession',
    'AudioAsset',
    'Selection',
    'SelectionInfo',
    'SelectionStateMachine',
    'PlaybackController',
    'WaveformRenderer',
    'ExportJob',
    'DirectoryExportSink',
    # Functions
    'compute_envelope',
    'extract_range',
    'encode_wav',
    'iter_wav_chunks',
    'wav_header',
    'decode_audio',
    'extract_audio_track',
    'format_time',
    'pixel_to_time',
    'time_to_pixel',
    # Config
    'AUDIO_CONFIG',
    'SELECTION_CONFIG',
    'WAVEFORM_CONFIG',
    'PLAYBACK_CONFIG',
    'EXPORT_CONFIG',
    'EXTRACTION_CONFIG',
    'EditMode',
    'PlaybackState',
    # Submodules
    'errors',
]
