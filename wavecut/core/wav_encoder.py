"""
16-bit PCM WAV encoding for WaveCut exports.

Samples are clamped to [-1, 1] and scaled asymmetrically: negative values
by 32768 and the rest by 32767, truncating toward zero. This keeps -1.0
addressable as -32768 while +1.0 maps to 32767.
"""
from __future__ import annotations
import struct
from typing import Iterator

import numpy as np

from .config import EXPORT_CONFIG
from .types import AudioArray

HEADER_SIZE = 44
BITS_PER_SAMPLE = 16
BYTES_PER_SAMPLE = BITS_PER_SAMPLE // 8
PCM_FORMAT_TAG = 1


def _as_frames(data: AudioArray) -> np.ndarray:
    data = np.asarray(data, dtype=np.float32)
    if data.ndim == 1:
        data = data.reshape(-1, 1)
    return data


def wav_header(frame_count: int, channels: int, samplerate: int) -> bytes:
    """44-byte RIFF/WAVE header for ``frame_count`` interleaved int16 frames."""
    data_size = frame_count * channels * BYTES_PER_SAMPLE
    block_align = channels * BYTES_PER_SAMPLE
    byte_rate = samplerate * block_align
    return struct.pack(
        '<4sI4s4sIHHIIHH4sI',
        b'RIFF', HEADER_SIZE + data_size - 8, b'WAVE',
        b'fmt ', 16, PCM_FORMAT_TAG, channels, samplerate,
        byte_rate, block_align, BITS_PER_SAMPLE,
        b'data', data_size,
    )


def float_to_pcm16(samples: np.ndarray) -> np.ndarray:
    """Convert float samples to int16 with clamping and asymmetric scaling."""
    clipped = np.clip(np.nan_to_num(samples, nan=0.0), -1.0, 1.0).astype(np.float64)
    scaled = np.where(clipped < 0, clipped * 32768.0, clipped * 32767.0)
    return np.trunc(scaled).astype('<i2')


def iter_wav_chunks(
    data: AudioArray,
    samplerate: int,
    chunk_frames: int = EXPORT_CONFIG.chunk_frames
) -> Iterator[bytes]:
    """
    Encode incrementally: the header first, then ``chunk_frames`` frames at a time.
    Joining the chunks gives exactly ``encode_wav(data, samplerate)``.
    """
    frames = _as_frames(data)
    frame_count, channels = frames.shape
    yield wav_header(frame_count, channels, samplerate)

    chunk_frames = max(1, chunk_frames)
    for start in range(0, frame_count, chunk_frames):
        # C-order rows give frame-major, channel-minor interleaving
        yield float_to_pcm16(frames[start:start + chunk_frames]).tobytes()


def encode_wav(data: AudioArray, samplerate: int) -> bytes:
    """Serialize (frames, channels) float samples as a 16-bit PCM WAV file."""
    return b''.join(iter_wav_chunks(data, samplerate))
