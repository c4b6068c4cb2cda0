"""Durable restoration history record."""

import uuid
from dataclasses import dataclass, field
from typing import Optional, Tuple

from django.utils import timezone


def _new_entry_id() -> str:
    return uuid.uuid4().hex


def _now_iso() -> str:
    return timezone.now().isoformat()


@dataclass(frozen=True)
class RestorationEntry:
    """One successful restoration, as stored in the history collection."""

    original_ref: str
    restored_ref: str
    file_name: str
    file_size_bytes: int
    analysis_text: str = ""
    presets: Tuple[str, ...] = ()
    aspect_ratio: Optional[float] = None
    id: str = field(default_factory=_new_entry_id)
    timestamp: str = field(default_factory=_now_iso)

    def __post_init__(self):
        object.__setattr__(self, "presets", tuple(self.presets))

    def __str__(self):
        return f"Entry {self.id} - {self.file_name} ({self.timestamp})"
