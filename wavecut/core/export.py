"""
Export jobs and sinks for WaveCut.
A sink receives the encoded bytes and a file name; how it persists them is its own business.
"""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

from .config import EXPORT_CONFIG, ExportConfig
from .types import AudioArray
from .wav_encoder import encode_wav

logger = logging.getLogger("WaveCut")

_EXTENSION_RE = re.compile(r'\.[^/.]+$')


def export_basename(source_name: str, config: ExportConfig = EXPORT_CONFIG) -> str:
    """Source file name without its trailing extension."""
    if not source_name:
        return config.fallback_basename
    return _EXTENSION_RE.sub('', Path(source_name).name)


def numbered_filename(source_name: str, counter: int, config: ExportConfig = EXPORT_CONFIG) -> str:
    """``<basename>_<counter>.<ext>``"""
    return f"{export_basename(source_name, config)}_{counter}.{config.extension}"


def plain_filename(source_name: str, config: ExportConfig = EXPORT_CONFIG) -> str:
    """``<basename>.<ext>``"""
    return f"{export_basename(source_name, config)}.{config.extension}"


@dataclass
class ExportJob:
    """PCM waiting to be encoded and handed to a sink."""
    data: AudioArray = field(repr=False)
    samplerate: int
    filename: str

    @property
    def frame_count(self) -> int:
        return len(self.data)

    def encode(self) -> bytes:
        return encode_wav(self.data, self.samplerate)


class DirectoryExportSink:
    """Writes exported files into a directory."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def __call__(self, payload: bytes, filename: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / filename
        path.write_bytes(payload)
        logger.info(f"Exported {len(payload)} bytes to {path}")
