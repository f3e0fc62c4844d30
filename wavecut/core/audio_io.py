"""
Import boundary for WaveCut: decoding audio files and pulling audio tracks out of videos.
Both return an AudioAsset or raise an EditorError subclass.
"""
from __future__ import annotations
import io
import json
import os
import subprocess
from pathlib import Path
from typing import Optional, Union

import numpy as np
import soundfile as sf

from .asset import AudioAsset
from .config import EXTRACTION_CONFIG, ExtractionConfig
from .errors import DecodeFailure, ExtractionFailure, ExtractionTimeout, NoAudioTrack
from wavecut.utils.logger import logger

AudioSource = Union[str, os.PathLike, bytes]


def decode_audio(source: AudioSource, name: Optional[str] = None) -> AudioAsset:
    """
    Decode an audio file into an asset.

    Paths are read with librosa at their native rate and channel layout;
    raw bytes go through soundfile.

    Raises:
        DecodeFailure: on any read error or when the file holds no samples
    """
    if name is None:
        name = "" if isinstance(source, bytes) else os.path.basename(os.fspath(source))

    try:
        if isinstance(source, bytes):
            data, samplerate = sf.read(io.BytesIO(source), dtype='float32', always_2d=True)
        else:
            import librosa
            data, samplerate = librosa.load(os.fspath(source), sr=None, mono=False)
            # Convert to (samples, channels)
            if data.ndim > 1:
                data = data.T
    except Exception as e:
        raise DecodeFailure(f"Could not decode {name or 'audio data'}: {e}") from e

    if len(data) == 0:
        raise DecodeFailure(f"{name or 'audio data'} contains no samples")

    asset = AudioAsset(np.asarray(data, dtype=np.float32), int(samplerate), name)
    logger.info(f"Decoded {asset!r}")
    return asset


def probe_audio_stream(path: Path, config: ExtractionConfig = EXTRACTION_CONFIG) -> dict:
    """
    Read container metadata via ffprobe and return the first audio stream.

    Raises:
        ExtractionTimeout: metadata did not arrive within the configured bound
        NoAudioTrack: the container has no audio stream
        ExtractionFailure: ffprobe is missing, failed, or reported no duration
    """
    cmd = [
        config.ffprobe_binary,
        "-v", "quiet",
        "-print_format", "json",
        "-show_format",
        "-show_streams",
        str(path),
    ]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=True,
                                timeout=config.metadata_timeout)
        info = json.loads(result.stdout)
    except subprocess.TimeoutExpired as e:
        raise ExtractionTimeout(f"ffprobe timed out after {config.metadata_timeout}s on {path}") from e
    except FileNotFoundError as e:
        raise ExtractionFailure(f"{config.ffprobe_binary} not found on PATH") from e
    except (subprocess.CalledProcessError, json.JSONDecodeError) as e:
        raise ExtractionFailure(f"Could not read metadata of {path}: {e}") from e

    duration = float(info.get("format", {}).get("duration") or 0.0)
    if not np.isfinite(duration) or duration <= 0:
        raise ExtractionFailure(f"Could not determine the duration of {path}")

    audio_stream = next(
        (s for s in info.get("streams", []) if s.get("codec_type") == "audio"), None
    )
    if audio_stream is None:
        raise NoAudioTrack(f"No audio stream found in {path}")
    return audio_stream


def extract_audio_track(path: Union[str, os.PathLike], config: ExtractionConfig = EXTRACTION_CONFIG) -> AudioAsset:
    """
    Decode the audio track of a (video) container with ffmpeg.
    Samples are piped back as raw float32 at the stream's own rate and layout.
    """
    path = Path(path)
    stream = probe_audio_stream(path, config)
    try:
        samplerate = int(stream["sample_rate"])
        channels = int(stream["channels"])
    except (KeyError, ValueError) as e:
        raise ExtractionFailure(f"Incomplete audio stream metadata in {path}") from e

    cmd = [
        config.ffmpeg_binary,
        "-v", "error",
        "-i", str(path),
        "-vn",
        "-f", "f32le",
        "-acodec", "pcm_f32le",
        "-ar", str(samplerate),
        "-ac", str(channels),
        "pipe:1",
    ]
    logger.info(f"Extracting audio track from {path} ({channels} ch @ {samplerate} Hz)")
    try:
        result = subprocess.run(cmd, capture_output=True, check=True)
    except FileNotFoundError as e:
        raise ExtractionFailure(f"{config.ffmpeg_binary} not found on PATH") from e
    except subprocess.CalledProcessError as e:
        stderr = e.stderr.decode(errors="replace") if e.stderr else ""
        raise ExtractionFailure(f"ffmpeg failed (rc={e.returncode}): {stderr.strip()}") from e

    samples = np.frombuffer(result.stdout, dtype='<f4')
    usable = len(samples) - len(samples) % channels
    if usable == 0:
        raise ExtractionFailure(f"ffmpeg produced no audio for {path}")

    return AudioAsset(samples[:usable].reshape(-1, channels), samplerate, path.name)
