from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QPainter, QColor, QImage, QPalette
import numpy as np

from wavecut.core.editor import AudioEditor


class WaveformWidget(QWidget):
    """Shows the editor's waveform frame and forwards pointer gestures to it."""

    def __init__(self, editor: AudioEditor, parent=None):
        super().__init__(parent)
        self.editor = editor
        self.setMinimumHeight(150)
        self.setAutoFillBackground(True)
        self.setBackgroundRole(QPalette.ColorRole.Base)
        self.setSizePolicy(
            self.sizePolicy().Policy.Expanding,
            self.sizePolicy().Policy.Expanding
        )
        self.setMouseTracking(True)  # Hover feedback over selection edges
        self.setCursor(Qt.CursorShape.CrossCursor)

    def resizeEvent(self, event):
        self.editor.set_viewport_width(self.width())
        super().resizeEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        raster = self.editor.render(self.width(), self.height())

        if raster is None:
            painter.fillRect(self.rect(), QColor(20, 20, 20))
            painter.setPen(QColor(100, 100, 100))
            painter.drawText(self.rect(), Qt.AlignmentFlag.AlignCenter, "No Audio Loaded")
            return

        # QImage borrows the buffer; keep it contiguous and alive until drawn
        raster = np.ascontiguousarray(raster)
        h, w, _ = raster.shape
        img = QImage(raster.data, w, h, 3 * w, QImage.Format.Format_RGB888)
        painter.drawImage(0, 0, img)

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self.editor.pointer_down(event.position().x())

    def mouseMoveEvent(self, event):
        x = event.position().x()
        if event.buttons() & Qt.MouseButton.LeftButton:
            self.editor.pointer_move(x)
            return

        if self.editor.edge_at(x) is not None:
            self.setCursor(Qt.CursorShape.SizeHorCursor)
        else:
            self.setCursor(Qt.CursorShape.CrossCursor)

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self.editor.pointer_up(event.position().x())
        self.setCursor(Qt.CursorShape.CrossCursor)

    def leaveEvent(self, event):
        self.editor.pointer_leave()
        super().leaveEvent(event)
