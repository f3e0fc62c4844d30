"""
Session abstraction for WaveCut.
Encapsulates all editing state (asset, selection, export numbering).
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional

from .asset import AudioAsset
from .config import EXPORT_CONFIG, ExportConfig
from .export import numbered_filename
from .selection import Selection, SelectionStateMachine


@dataclass
class EditorSession:
    """
    Represents one document being edited.
    Every component operates on an explicit session instead of global state.
    """
    asset: Optional[AudioAsset] = None
    source_name: str = ""
    export_counter: int = 0
    selection_machine: SelectionStateMachine = field(default_factory=SelectionStateMachine, repr=False)
    export_config: ExportConfig = field(default=EXPORT_CONFIG, repr=False)

    @property
    def has_asset(self) -> bool:
        return self.asset is not None

    @property
    def duration_seconds(self) -> float:
        """Asset duration in seconds (0 when nothing is loaded)."""
        if self.asset is None:
            return 0.0
        return self.asset.duration_seconds

    @property
    def selection(self) -> Optional[Selection]:
        return self.selection_machine.selection

    def replace_asset(self, asset: AudioAsset, source_name: str) -> None:
        """Swap in a newly imported asset; numbering and selection start over."""
        self.asset = asset
        self.source_name = source_name
        self.export_counter = 0
        self.selection_machine.reset(asset.duration_seconds)

    def next_export_filename(self) -> str:
        """Advance the export counter and name the next numbered export."""
        self.export_counter += 1
        return numbered_filename(self.source_name, self.export_counter, self.export_config)

    def clear(self) -> None:
        """Reset session to empty state."""
        self.asset = None
        self.source_name = ""
        self.export_counter = 0
        self.selection_machine.reset(0.0)
