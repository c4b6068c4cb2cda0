"""Before/after comparison widget.

The widget is a small state machine fed with pointer events. A pointer-down
inside the bounding box starts a drag and captures that pointer: every later
move of the same pointer updates the split position, even outside the box,
until the pointer is released or cancelled. The split position is clamped to
[0, 100] percent of the box width.
"""

from dataclasses import dataclass
from typing import Dict, Optional

DEFAULT_SPLIT = 50.0


@dataclass(frozen=True)
class BoundingBox:
    left: float
    width: float
    top: float = 0.0
    height: Optional[float] = None

    def contains(self, x: float, y: Optional[float] = None) -> bool:
        if not self.left <= x <= self.left + self.width:
            return False
        if y is None or self.height is None:
            return True
        return self.top <= y <= self.top + self.height


def clamp(value: float, lower: float = 0.0, upper: float = 100.0) -> float:
    return max(lower, min(upper, value))


def split_from_pointer(x: float, box: BoundingBox) -> float:
    """Map an absolute pointer x-coordinate to a split percentage."""
    if box.width <= 0:
        return 0.0 if x <= box.left else 100.0
    return clamp(((x - box.left) / box.width) * 100)


@dataclass(frozen=True)
class ComparisonLayout:
    """How the two images are composed for one split position."""

    before_ref: str
    after_ref: str
    split_position: float
    before_label: str = "Before"
    after_label: str = "After"

    @property
    def before_clip(self):
        """Visible horizontal span of the before image, in percent."""
        return (0.0, self.split_position)

    @property
    def divider_position(self) -> float:
        return self.split_position

    def as_css(self) -> Dict[str, Dict[str, str]]:
        position = f"{self.split_position:g}%"
        return {
            "after": {"position": "absolute", "inset": "0", "width": "100%"},
            "before": {"position": "absolute", "inset": "0", "width": position, "overflow": "hidden"},
            "divider": {"position": "absolute", "left": position, "transform": "translateX(-50%)"},
        }


class ComparisonWidget:
    def __init__(self, before_ref: str, after_ref: str, split_position: float = DEFAULT_SPLIT):
        self.before_ref = before_ref
        self.after_ref = after_ref
        self.split_position = clamp(split_position)
        self.captured_pointer: Optional[int] = None

    @property
    def dragging(self) -> bool:
        return self.captured_pointer is not None

    def pointer_down(self, x: float, box: BoundingBox, y: Optional[float] = None,
                     pointer_id: int = 1) -> bool:
        """Start a drag if the pointer is inside the box; returns whether it did."""
        if self.dragging or not box.contains(x, y):
            return False
        self.captured_pointer = pointer_id
        self.split_position = split_from_pointer(x, box)
        return True

    def pointer_move(self, x: float, box: BoundingBox, pointer_id: int = 1) -> float:
        if self.captured_pointer == pointer_id:
            self.split_position = split_from_pointer(x, box)
        return self.split_position

    def pointer_up(self, pointer_id: int = 1) -> None:
        if self.captured_pointer == pointer_id:
            self.captured_pointer = None

    pointer_cancel = pointer_up

    def layout(self) -> ComparisonLayout:
        return ComparisonLayout(
            before_ref=self.before_ref,
            after_ref=self.after_ref,
            split_position=self.split_position,
        )
