from .restoration import (
    FILE_TOO_LARGE_MESSAGE,
    UNSUPPORTED_TYPE_MESSAGE,
    RestorationEntrySerializer,
    RestorationUploadSerializer,
    file_too_large_message,
    validate_source_file,
)

__all__ = [
    "FILE_TOO_LARGE_MESSAGE",
    "UNSUPPORTED_TYPE_MESSAGE",
    "RestorationEntrySerializer",
    "RestorationUploadSerializer",
    "file_too_large_message",
    "validate_source_file",
]
