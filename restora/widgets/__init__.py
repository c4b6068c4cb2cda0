from .comparison import (
    BoundingBox,
    ComparisonLayout,
    ComparisonWidget,
    split_from_pointer,
)

__all__ = [
    "BoundingBox",
    "ComparisonLayout",
    "ComparisonWidget",
    "split_from_pointer",
]
