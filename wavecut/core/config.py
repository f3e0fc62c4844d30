"""
Centralized configuration for WaveCut.
All magic numbers and default settings in one place.
"""
from dataclasses import dataclass
from enum import Enum, auto


class PlaybackState(Enum):
    """Playback state enumeration."""
    STOPPED = auto()
    PLAYING = auto()
    PAUSED = auto()


class EditMode(Enum):
    """Gesture currently in progress on the selection."""
    IDLE = auto()
    CREATING = auto()
    DRAGGING_START = auto()
    DRAGGING_END = auto()


@dataclass(frozen=True, slots=True)
class AudioConfig:
    """Audio engine configuration."""
    default_samplerate: int = 44100
    playback_blocksize: int = 4096


@dataclass(frozen=True, slots=True)
class SelectionConfig:
    """Selection gesture settings."""
    edge_hit_px: float = 6.0  # Grab radius around a boundary line
    min_duration: float = 0.1  # Narrower committed selections are dropped


@dataclass(frozen=True, slots=True)
class WaveformConfig:
    """Waveform visualization settings."""
    background_color: tuple[int, int, int] = (20, 20, 20)
    waveform_color: tuple[int, int, int] = (44, 199, 201)  # Teal
    center_line_color: tuple[int, int, int] = (90, 90, 90)
    selection_color: tuple[int, int, int] = (102, 126, 234)
    selection_alpha: int = 80
    border_color: tuple[int, int, int] = (231, 76, 60)
    border_width: int = 4
    playhead_color: tuple[int, int, int] = (240, 79, 90)  # Warm red
    playhead_width: int = 2


@dataclass(frozen=True, slots=True)
class PlaybackConfig:
    """Transport tick settings."""
    frame_interval_ms: int = 16  # ~60 fps


@dataclass(frozen=True, slots=True)
class ExportConfig:
    """Export naming and encoding settings."""
    extension: str = "wav"
    fallback_basename: str = "audio"
    chunk_frames: int = 65536


@dataclass(frozen=True, slots=True)
class ExtractionConfig:
    """External ffmpeg tooling used to pull audio out of video files."""
    ffmpeg_binary: str = "ffmpeg"
    ffprobe_binary: str = "ffprobe"
    metadata_timeout: float = 30.0


# Global config instances (immutable singletons)
AUDIO_CONFIG = AudioConfig()
SELECTION_CONFIG = SelectionConfig()
WAVEFORM_CONFIG = WaveformConfig()
PLAYBACK_CONFIG = PlaybackConfig()
EXPORT_CONFIG = ExportConfig()
EXTRACTION_CONFIG = ExtractionConfig()
