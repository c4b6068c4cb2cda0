"""Restoration job state.

This module defines the transient `RestorationJob` that the workflow engine
drives through its lifecycle (select -> upload -> restore -> completed/failed),
together with the small value types it is built from.
"""

import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Set

from restora.const import PRESETS

mimetypes.add_type("image/webp", ".webp")


class Phase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    UPLOADING = "uploading"
    UPLOAD_FAILED = "upload_failed"
    READY = "ready"
    RESTORING = "restoring"
    COMPLETED = "completed"
    FAILED = "failed"


class Preset(str, Enum):
    """Enhancement presets, declared in the order their clauses are applied."""

    SHARPNESS = "sharpness"
    LIGHTING = "lighting"
    PORTRAIT = "portrait"

    @property
    def display_name(self) -> str:
        return PRESETS[self.value][0]

    @property
    def clause(self) -> str:
        return PRESETS[self.value][1]


@dataclass
class SourceFile:
    """Raw bytes of a user-selected file plus its declared media type."""

    name: str
    content_type: str
    data: bytes = field(repr=False)
    size: Optional[int] = None

    def __post_init__(self):
        if self.size is None:
            self.size = len(self.data)

    @classmethod
    def from_path(cls, path) -> "SourceFile":
        path = Path(path)
        content_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            content_type=content_type or "application/octet-stream",
            data=path.read_bytes(),
        )


@dataclass(frozen=True)
class Dimensions:
    width: int
    height: int

    @property
    def ratio(self) -> Optional[float]:
        if self.height <= 0:
            return None
        return self.width / self.height


@dataclass(frozen=True)
class Outcome:
    restored_url: str
    analysis_text: str = ""
    status: str = "completed"


@dataclass
class RestorationJob:
    """Image restoration job tracking"""

    source_file: Optional[SourceFile] = None
    preview_handle: Optional[object] = None
    original_ref: str = ""
    asset_refs: List[str] = field(default_factory=list)
    dimensions: Optional[Dimensions] = None
    selected_presets: Set[Preset] = field(default_factory=set)
    phase: Phase = Phase.IDLE
    progress: int = 0
    outcome: Optional[Outcome] = None

    def __str__(self):
        name = self.source_file.name if self.source_file else "<no file>"
        return f"Job {name} - {self.phase.value} ({self.progress}%)"

    @property
    def active_presets(self) -> List[Preset]:
        """Selected presets in their fixed application order."""
        return [preset for preset in Preset if preset in self.selected_presets]
