import base64
import io
import logging
import uuid
from typing import Dict, Optional

from PIL import Image, UnidentifiedImageError

from restora.models import Dimensions

logger = logging.getLogger(__name__)

# Live preview handles: url -> source bytes
_previews: Dict[str, bytes] = {}


class PreviewHandle:
    """Revocable, process-local reference to a source file's bytes."""

    def __init__(self, source_file):
        self.url = f"blob:restora/{uuid.uuid4()}"
        self.content_type = source_file.content_type
        _previews[self.url] = source_file.data

    def __repr__(self):
        return f"PreviewHandle({self.url!r})"

    @property
    def revoked(self) -> bool:
        return self.url not in _previews

    def revoke(self) -> None:
        _previews.pop(self.url, None)


def create_preview(source_file) -> PreviewHandle:
    return PreviewHandle(source_file)


def resolve_preview(url: str) -> Optional[bytes]:
    return _previews.get(url)


def to_data_url(source_file) -> str:
    """Encode the source bytes as a data URL that stays valid across sessions."""
    encoded = base64.b64encode(source_file.data).decode("ascii")
    return f"data:{source_file.content_type};base64,{encoded}"


def probe_dimensions(data: bytes) -> Optional[Dimensions]:
    """
    Read pixel width/height from the image header.

    Returns None when the bytes cannot be decoded; the probe never raises.
    """
    try:
        with Image.open(io.BytesIO(data)) as image:
            width, height = image.size
    except (UnidentifiedImageError, OSError, ValueError) as exc:
        logger.warning(f"Could not probe image dimensions: {exc}")
        return None

    return Dimensions(width=width, height=height)
