"""Data models used by the restoration engine.

This package aggregates model classes to provide a convenient import surface
for other parts of the project.
"""

from .entry import RestorationEntry
from .job import Dimensions, Outcome, Phase, Preset, RestorationJob, SourceFile

__all__ = [
    "Dimensions",
    "Outcome",
    "Phase",
    "Preset",
    "RestorationEntry",
    "RestorationJob",
    "SourceFile",
]
