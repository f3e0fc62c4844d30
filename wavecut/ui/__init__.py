"""
WaveCut UI Module

Qt-based user interface components:
- MainWindow: Main application window
- WaveformWidget: Waveform display and selection gestures
- QtFrameScheduler: Event-loop driven transport ticks
"""
from .main_window import MainWindow
from .waveform_view import WaveformWidget
from .scheduler import QtFrameScheduler

__all__ = [
    'MainWindow',
    'WaveformWidget',
    'QtFrameScheduler',
]
