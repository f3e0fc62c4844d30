"""
Pytest configuration and fixtures for WaveCut tests.
"""
import io

import pytest
import numpy as np
import soundfile as sf

from wavecut.core.asset import AudioAsset
from wavecut.core.config import AUDIO_CONFIG
from wavecut.core.editor import AudioEditor
from wavecut.core.session import EditorSession


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 100.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ManualHandle:
    def __init__(self, callback):
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Frame scheduler whose frames and posted callbacks run on demand."""

    def __init__(self):
        self.frames: list[ManualHandle] = []
        self.posted = []

    def schedule_frame(self, callback):
        handle = ManualHandle(callback)
        self.frames.append(handle)
        return handle

    def call_soon_threadsafe(self, callback):
        self.posted.append(callback)

    @property
    def pending_frames(self) -> int:
        return sum(1 for h in self.frames if not h.cancelled)

    def run_frame(self) -> bool:
        """Run the oldest live frame callback; False when none is pending."""
        while self.frames:
            handle = self.frames.pop(0)
            if not handle.cancelled:
                handle.callback()
                return True
        return False

    def run_posted(self) -> None:
        posted, self.posted = self.posted, []
        for callback in posted:
            callback()


class FakeVoice:
    def __init__(self, asset, start, duration, on_ended):
        self.asset = asset
        self.start_time = start
        self.duration = duration
        self.on_ended = on_ended
        self.started = False
        self.stopped = False

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    def finish(self):
        """Simulate the stream running out of samples."""
        self.on_ended()


class VoiceRecorder:
    """Voice factory keeping every voice it created."""

    def __init__(self):
        self.voices: list[FakeVoice] = []

    def __call__(self, asset, start, duration, on_ended):
        voice = FakeVoice(asset, start, duration, on_ended)
        self.voices.append(voice)
        return voice

    @property
    def last(self) -> FakeVoice:
        return self.voices[-1]


class RecordingSink:
    def __init__(self):
        self.files: list[tuple[str, bytes]] = []

    def __call__(self, payload, filename):
        self.files.append((filename, payload))


def wav_bytes(data: np.ndarray, samplerate: int) -> bytes:
    """Float WAV file contents for feeding the import boundary."""
    buf = io.BytesIO()
    sf.write(buf, data, samplerate, format='WAV', subtype='FLOAT')
    return buf.getvalue()


@pytest.fixture
def sample_mono_audio() -> np.ndarray:
    """Generate 1 second of mono sine wave audio."""
    sr = AUDIO_CONFIG.default_samplerate
    t = np.linspace(0, 1, sr, dtype=np.float32)
    return np.sin(2 * np.pi * 440 * t).astype(np.float32)


@pytest.fixture
def sample_stereo_audio() -> np.ndarray:
    """Generate 1 second of stereo sine wave audio."""
    sr = AUDIO_CONFIG.default_samplerate
    t = np.linspace(0, 1, sr, dtype=np.float32)
    left = np.sin(2 * np.pi * 440 * t).astype(np.float32)
    right = np.sin(2 * np.pi * 880 * t).astype(np.float32)
    return np.column_stack((left, right))


@pytest.fixture
def ten_second_asset() -> AudioAsset:
    """10 seconds of mono noise at 100 Hz, small enough for per-sample checks."""
    rng = np.random.default_rng(7)
    data = rng.uniform(-0.8, 0.8, 1000).astype(np.float32)
    return AudioAsset(data, 100, "take.wav")


@pytest.fixture
def session(ten_second_asset) -> EditorSession:
    session = EditorSession()
    session.replace_asset(ten_second_asset, "take.wav")
    return session


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def voices() -> VoiceRecorder:
    return VoiceRecorder()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def errors() -> list:
    return []


@pytest.fixture
def editor(scheduler, voices, clock, sink, errors) -> AudioEditor:
    editor = AudioEditor(
        scheduler,
        export_sink=sink,
        voice_factory=voices,
        clock=clock,
        on_error=errors.append
    )
    editor.set_viewport_width(1000)
    return editor
