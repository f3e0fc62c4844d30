"""
Conversions between the time domain and waveform pixel columns.
All functions are pure; callers guarantee a loaded asset (duration > 0).
"""
import math


def time_to_pixel(t: float, width: float, duration: float) -> float:
    """Pixel column of time ``t`` in a viewport ``width`` pixels wide."""
    return t / duration * width


def pixel_to_time(x: float, width: float, duration: float) -> float:
    """Time at pixel column ``x``, clamped to [0, duration]."""
    return max(0.0, min(duration, x / width * duration))


def time_to_sample(t: float, samplerate: int) -> int:
    return math.floor(t * samplerate)


def format_time(seconds: float) -> str:
    """Format seconds as MM:SS.cc"""
    mins = math.floor(seconds / 60)
    secs = math.floor(seconds % 60)
    hundredths = math.floor((seconds % 1) * 100)
    return f"{mins:02d}:{secs:02d}.{hundredths:02d}"
