from typing import Iterable, List, Optional, Tuple

from restora.const import LANDSCAPE_RATIO, ORIENTATION_PROMPT, PORTRAIT_RATIO, PROMPT
from restora.models import Dimensions, Preset

LANDSCAPE = "landscape"
PORTRAIT = "portrait"
SQUARE = "square"


def classify_orientation(dimensions: Optional[Dimensions]) -> Optional[str]:
    """Classify by width/height ratio; both thresholds are exclusive."""
    if dimensions is None:
        return None
    ratio = dimensions.ratio
    if ratio is None:
        return None
    if ratio > LANDSCAPE_RATIO:
        return LANDSCAPE
    if ratio < PORTRAIT_RATIO:
        return PORTRAIT
    return SQUARE


def build_instruction(dimensions: Optional[Dimensions],
                      presets: Iterable[Preset] = ()) -> Tuple[str, List[str]]:
    """
    Build the restoration instruction for the agent

    Args:
        dimensions: probed source dimensions, if known
        presets: selected presets, in any order

    Returns:
        (instruction text, preset display names in application order)
    """
    selected = set(presets)
    message = PROMPT

    orientation = classify_orientation(dimensions)
    if orientation:
        message += ORIENTATION_PROMPT.format(
            orientation=orientation,
            width=dimensions.width,
            height=dimensions.height,
        )

    applied = []
    for preset in Preset:
        if preset in selected:
            message += preset.clause
            applied.append(preset.display_name)

    return message, applied
