from .agent_client import AgentClient, get_agent_client
from .exceptions import (
    EmptyResultAnomaly,
    ErrorKind,
    FileValidationError,
    RemoteApplicationError,
    RestorationError,
    TransportError,
    UploadError,
    format_error,
)

__all__ = [
    "AgentClient",
    "get_agent_client",
    "format_error",
    "ErrorKind",
    "RestorationError",
    "FileValidationError",
    "UploadError",
    "TransportError",
    "RemoteApplicationError",
    "EmptyResultAnomaly",
]
