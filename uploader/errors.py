class UploaderError(Exception):
    """Base class for every error raised by the upload pipeline."""


class ValidationError(UploaderError):
    """A selected file has an unsupported type or is too large."""


class EncodingError(UploaderError):
    """A selected file could not be read or encoded."""


class TransportError(UploaderError):
    """A remote call failed or returned a non-2xx response."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ServerValidationError(TransportError):
    """The ingest endpoint rejected a file the local validator accepted."""


class InvalidTransitionError(UploaderError):
    """A state transition was requested from a state that does not allow it."""
