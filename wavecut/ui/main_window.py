from PyQt6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
                             QPushButton, QLabel, QFileDialog, QMessageBox)
from PyQt6.QtCore import QSize
from PyQt6.QtGui import QAction, QKeySequence
import qtawesome as qta

from wavecut.core.config import PlaybackState
from wavecut.core.editor import AudioEditor
from wavecut.core.errors import EditorError
from wavecut.core.export import DirectoryExportSink
from wavecut.core.mapper import format_time
from wavecut.ui.scheduler import QtFrameScheduler
from wavecut.ui.waveform_view import WaveformWidget
from wavecut.utils.logger import logger


class MainWindow(QMainWindow):
    def __init__(self):
        super().__init__()

        self.setWindowTitle("WaveCut - Audio Clipper")
        self.resize(1000, 500)

        # Core Components
        self.scheduler = QtFrameScheduler(parent=self)
        self.editor = AudioEditor(
            self.scheduler,
            on_selection_changed=self.on_selection_changed,
            on_position_changed=self.on_position_changed,
            on_state_changed=self.on_state_changed,
            on_redraw=self.on_redraw,
            on_asset_changed=self.on_asset_changed,
            on_error=self.on_error
        )
        self.export_dir = None

        # UI Setup
        self.central_widget = QWidget()
        self.setCentralWidget(self.central_widget)
        self.main_layout = QVBoxLayout(self.central_widget)

        self.create_toolbar()
        self.create_info_bar()
        self.create_waveform_view()
        self.create_transport_controls()

    def create_toolbar(self):
        file_toolbar = self.addToolBar("File")
        file_toolbar.setMovable(False)

        import_action = QAction(qta.icon("fa5s.file-import", color="white"), "&Import Audio...", self)
        import_action.setShortcut(QKeySequence.StandardKey.Open)
        import_action.triggered.connect(self.import_file_dialog)
        file_toolbar.addAction(import_action)

        video_action = QAction(qta.icon("fa5s.film", color="white"), "Video to WAV...", self)
        video_action.triggered.connect(self.convert_video_dialog)
        file_toolbar.addAction(video_action)

        export_toolbar = self.addToolBar("Export")
        export_toolbar.setMovable(False)

        export_sel_action = QAction(qta.icon("fa5s.cut", color="#ffaa00"), "Export Selection", self)
        export_sel_action.setShortcut(QKeySequence.StandardKey.Save)
        export_sel_action.triggered.connect(self.export_selection)
        export_toolbar.addAction(export_sel_action)

        export_all_action = QAction(qta.icon("fa5s.file-export", color="white"), "Export All", self)
        export_all_action.triggered.connect(self.export_all)
        export_toolbar.addAction(export_all_action)

    def create_info_bar(self):
        info_layout = QHBoxLayout()

        self.file_label = QLabel("No file loaded")
        self.file_label.setStyleSheet("font-weight: bold; color: #ddd;")
        self.duration_label = QLabel("")
        self.selection_label = QLabel("")
        self.selection_label.setStyleSheet("color: #8fa0ff;")
        self.selection_label.hide()

        info_layout.addWidget(self.file_label)
        info_layout.addWidget(self.duration_label)
        info_layout.addStretch()
        info_layout.addWidget(self.selection_label)
        self.main_layout.addLayout(info_layout)

    def create_waveform_view(self):
        self.waveform = WaveformWidget(self.editor)
        self.main_layout.addWidget(self.waveform, stretch=1)

    def create_transport_controls(self):
        transport_widget = QWidget()
        transport_widget.setStyleSheet("background-color: #222; border-top: 1px solid #444;")
        transport_layout = QHBoxLayout(transport_widget)
        transport_layout.setContentsMargins(20, 10, 20, 10)

        self.time_label = QLabel("00:00.00")
        self.time_label.setStyleSheet("font-family: 'Consolas'; font-size: 20px; font-weight: bold; color: #00ffff; min-width: 140px;")

        # Style helper for transport buttons
        btn_style = """
            QPushButton {
                background-color: transparent;
                border-radius: 20px;
                padding: 5px;
            }
            QPushButton:hover { background-color: #444; }
            QPushButton:pressed { background-color: #555; }
        """

        self.btn_stop = QPushButton()
        self.btn_stop.setIcon(qta.icon("fa5s.stop", color="#ff5555"))
        self.btn_stop.setIconSize(QSize(24, 24))
        self.btn_stop.setStyleSheet(btn_style)
        self.btn_stop.clicked.connect(self.editor.stop)

        self.btn_play = QPushButton()
        self.btn_play.setIcon(qta.icon("fa5s.play", color="#55ff55"))
        self.btn_play.setIconSize(QSize(32, 32))
        self.btn_play.setStyleSheet(btn_style)
        self.btn_play.clicked.connect(lambda: self.editor.play())

        self.btn_pause = QPushButton()
        self.btn_pause.setIcon(qta.icon("fa5s.pause", color="#ffff55"))
        self.btn_pause.setIconSize(QSize(32, 32))
        self.btn_pause.setStyleSheet(btn_style)
        self.btn_pause.clicked.connect(self.editor.pause)
        self.btn_pause.hide()

        transport_layout.addWidget(self.time_label)
        transport_layout.addStretch()
        transport_layout.addWidget(self.btn_stop)
        transport_layout.addWidget(self.btn_play)
        transport_layout.addWidget(self.btn_pause)
        transport_layout.addStretch()

        self.main_layout.addWidget(transport_widget)
        self.statusBar().showMessage("Ready")

    # --- File dialogs ---

    def import_file_dialog(self):
        logger.info("Opening import file dialog")
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Import Audio File", "", "Audio Files (*.wav *.mp3 *.flac *.ogg *.m4a *.aac)"
        )
        if file_path:
            logger.info(f"User selected: {file_path}")
            if self.editor.load_file(file_path):
                self.statusBar().showMessage(f"Imported: {file_path}", 5000)

    def convert_video_dialog(self):
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Extract Audio From Video", "", "Video Files (*.mp4 *.mov *.mkv *.webm *.avi)"
        )
        if not file_path or not self.ensure_export_sink():
            return
        self.statusBar().showMessage("Extracting audio...")
        job = self.editor.convert_video_to_wav(file_path)
        if job is not None:
            self.statusBar().showMessage(f"Converted: {job.filename}", 5000)

    def ensure_export_sink(self):
        """Ask once for the folder exported files are written to."""
        if self.editor.export_sink is not None:
            return True
        directory = QFileDialog.getExistingDirectory(self, "Export Folder")
        if not directory:
            return False
        self.export_dir = directory
        self.editor.export_sink = DirectoryExportSink(directory)
        return True

    def export_selection(self):
        if not self.ensure_export_sink():
            return
        job = self.editor.export_selection()
        if job is not None:
            self.statusBar().showMessage(f"Exported: {job.filename}", 5000)

    def export_all(self):
        if not self.ensure_export_sink():
            return
        job = self.editor.export_all()
        if job is not None:
            self.statusBar().showMessage(f"Exported: {job.filename}", 5000)

    # --- Editor callbacks ---

    def on_redraw(self):
        self.waveform.update()

    def on_asset_changed(self):
        asset = self.editor.asset
        self.file_label.setText(asset.name)
        self.duration_label.setText(format_time(asset.duration_seconds))
        self.time_label.setText(format_time(0))

    def on_selection_changed(self, info):
        if info is None:
            self.selection_label.hide()
            return
        self.selection_label.setText(f"Selection: {info.start} - {info.end} ({info.duration})")
        self.selection_label.show()

    def on_position_changed(self, seconds):
        self.time_label.setText(format_time(seconds))

    def on_state_changed(self, state):
        self.statusBar().showMessage(f"State: {state.name.lower()}", 2000)
        playing = state == PlaybackState.PLAYING
        self.btn_play.setVisible(not playing)
        self.btn_pause.setVisible(playing)

    def on_error(self, error: EditorError):
        QMessageBox.critical(self, "WaveCut", f"{error.user_message}\n\n{error}")

    def closeEvent(self, event):
        self.editor.cleanup()
        super().closeEvent(event)
