from typing import Callable

from PyQt6.QtCore import QObject, QTimer, Qt, pyqtSignal, pyqtSlot

from wavecut.core.config import PLAYBACK_CONFIG


class _FrameTimer:
    """One pending single-shot frame callback."""
    __slots__ = ('_timer',)

    def __init__(self, parent: QObject, interval_ms: int, callback: Callable[[], None]):
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(callback)
        self._timer.timeout.connect(self._timer.deleteLater)
        self._timer.start()

    def cancel(self) -> None:
        try:
            self._timer.stop()
            self._timer.deleteLater()
        except RuntimeError:
            pass  # Already fired and deleted


class QtFrameScheduler(QObject):
    """
    Runs transport ticks on the Qt event loop at the display cadence.
    Callbacks posted from other threads (audio stream completion) are
    delivered on the GUI thread through a queued signal.
    """
    _posted = pyqtSignal(object)

    def __init__(self, interval_ms: int = PLAYBACK_CONFIG.frame_interval_ms, parent=None):
        super().__init__(parent)
        self.interval_ms = interval_ms
        self._posted.connect(self._run_posted, Qt.ConnectionType.QueuedConnection)

    def schedule_frame(self, callback: Callable[[], None]) -> _FrameTimer:
        return _FrameTimer(self, self.interval_ms, callback)

    def call_soon_threadsafe(self, callback: Callable[[], None]) -> None:
        self._posted.emit(callback)

    @pyqtSlot(object)
    def _run_posted(self, callback):
        callback()
