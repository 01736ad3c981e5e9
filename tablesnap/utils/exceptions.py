"""
Custom Exceptions Module.

This module defines all custom exceptions used throughout TableSnap.
Using specific exceptions lets the HTTP layer and the review session
map each failure to the right status code and user-facing message.

Exception Hierarchy:
    TableSnapError (base)
    ├── InputError
    │   ├── MissingUploadError
    │   ├── UnsupportedMediaTypeError
    │   └── EmptyUploadError
    ├── ConfigurationError
    │   └── MissingCredentialError
    ├── ModelError
    │   ├── NoTableDetectedError
    │   ├── MalformedModelOutputError
    │   └── ModelRequestError
    ├── SessionError
    │   └── InvalidTransitionError
    └── OutputError
        ├── CsvExportError
        ├── ClipboardExportError
        └── ExcelExportError
"""


class TableSnapError(Exception):
    """
    Base exception for all TableSnap errors.

    Attributes:
        message: Human-readable error message.
        details: Optional dictionary with additional error details.
    """

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# =============================================================================
# INPUT ERRORS
# =============================================================================

class InputError(TableSnapError):
    """Base exception for upload intake errors."""
    pass


class MissingUploadError(InputError):
    """Raised when a request carries no image file."""

    def __init__(self):
        super().__init__("No image file provided")


class UnsupportedMediaTypeError(InputError):
    """
    Raised when an upload is not one of the accepted image types.

    Example:
        >>> raise UnsupportedMediaTypeError("application/pdf", ["image/png"])
    """

    def __init__(self, media_type: str, supported_types: list):
        message = (
            f"Unsupported image type: '{media_type or 'unknown'}'. "
            f"Please upload a PNG, JPEG, WEBP, HEIC or HEIF image."
        )
        details = {"media_type": media_type, "supported_types": supported_types}
        super().__init__(message, details)


class EmptyUploadError(InputError):
    """Raised when an uploaded file has no content."""

    def __init__(self, filename: str = None):
        message = "Uploaded image is empty"
        details = {"filename": filename} if filename else None
        super().__init__(message, details)


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================

class ConfigurationError(TableSnapError):
    """Base exception for server configuration errors."""
    pass


class MissingCredentialError(ConfigurationError):
    """Raised when the model API key is not configured."""

    def __init__(self, env_name: str):
        message = (
            f"API key not configured. Please add {env_name} "
            f"to your environment or .env file."
        )
        super().__init__(message)


# =============================================================================
# MODEL ERRORS
# =============================================================================

class ModelError(TableSnapError):
    """Base exception for extraction model errors."""
    pass


class NoTableDetectedError(ModelError):
    """Raised when the model reports that the image holds no table."""

    def __init__(self, reason: str = "No table detected"):
        super().__init__(reason)


class MalformedModelOutputError(ModelError):
    """
    Raised when the model reply is not the expected JSON shape.

    The raw reply is kept in ``details['raw_text']`` for diagnosis.
    """

    def __init__(self, message: str, raw_text: str = None):
        details = {"raw_text": raw_text} if raw_text is not None else None
        super().__init__(message, details)

    def __str__(self) -> str:
        # Raw model text can be large; keep it out of the string form.
        return self.message


class ModelRequestError(ModelError):
    """Raised when the call to the model or the extraction server fails."""

    def __init__(self, reason: str):
        super().__init__(reason)


# =============================================================================
# SESSION ERRORS
# =============================================================================

class SessionError(TableSnapError):
    """Base exception for review session errors."""
    pass


class InvalidTransitionError(SessionError):
    """Raised when the session is asked to move between unrelated phases."""

    def __init__(self, current: str, target: str):
        message = f"Cannot move from '{current}' to '{target}'"
        details = {"current": current, "target": target}
        super().__init__(message, details)


# =============================================================================
# OUTPUT ERRORS
# =============================================================================

class OutputError(TableSnapError):
    """Base exception for export errors."""
    pass


class CsvExportError(OutputError):
    """Raised when writing a CSV file fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export CSV file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


class ClipboardExportError(OutputError):
    """Raised when the system clipboard cannot be written."""

    def __init__(self, reason: str = None):
        message = "Failed to copy table to clipboard"
        details = {"reason": reason}
        super().__init__(message, details)


class ExcelExportError(OutputError):
    """Raised when Excel export fails."""

    def __init__(self, filepath: str, reason: str = None):
        message = f"Failed to export Excel file: {filepath}"
        details = {"filepath": filepath, "reason": reason}
        super().__init__(message, details)


__all__ = [
    'TableSnapError',
    'InputError',
    'MissingUploadError',
    'UnsupportedMediaTypeError',
    'EmptyUploadError',
    'ConfigurationError',
    'MissingCredentialError',
    'ModelError',
    'NoTableDetectedError',
    'MalformedModelOutputError',
    'ModelRequestError',
    'SessionError',
    'InvalidTransitionError',
    'OutputError',
    'CsvExportError',
    'ClipboardExportError',
    'ExcelExportError',
]
