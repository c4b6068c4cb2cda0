from enum import Enum


class ErrorKind(str, Enum):
    """Every class of error that can reach the user-visible message slot."""

    VALIDATION = "validation_error"
    UPLOAD = "upload_error"
    TRANSPORT = "transport_error"
    REMOTE_APPLICATION = "remote_application_error"
    EMPTY_RESULT = "empty_result"


def format_error(code: str, message: str, details=None):
    return {
        "error": {
            "code": str(code).upper(),
            "message": message,
            "details": details if details is not None else {},
        }
    }


class RestorationError(Exception):
    """Base class for errors surfaced to the user during a restoration job"""

    kind = None
    default_message = "Something went wrong"

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details if details is not None else {}
        super().__init__(self.message)

    def as_dict(self):
        return format_error(code=self.kind.value, message=self.message, details=self.details)


class FileValidationError(RestorationError):
    """Raised when a selected file violates the type/size policy"""

    kind = ErrorKind.VALIDATION
    default_message = "Invalid image file"

    def __init__(self, message=None, code="invalid"):
        self.code = code
        super().__init__(message, details={"reason": code})


class UploadError(RestorationError):
    """Raised when the upload collaborator fails or returns no asset ids"""

    kind = ErrorKind.UPLOAD
    default_message = "Upload failed. Please try again."


class TransportError(RestorationError):
    """Raised when the restoration call itself fails"""

    kind = ErrorKind.TRANSPORT
    default_message = "An error occurred during restoration."


class RemoteApplicationError(RestorationError):
    """Raised when the restoration service answers but reports an error"""

    kind = ErrorKind.REMOTE_APPLICATION
    prefix = "Restoration service error: "
    default_message = "Restoration service error: unknown error"

    def __init__(self, remote_message):
        self.remote_message = remote_message
        super().__init__(f"{self.prefix}{remote_message}")


class EmptyResultAnomaly(RestorationError):
    """Raised when the service reports success but returns no artifact"""

    kind = ErrorKind.EMPTY_RESULT
    default_message = "Restoration completed but no image was returned. Please try again."
