"""
Custom error types for presigned POST uploads
"""

from typing import Optional


class UploadError(Exception):
    """Base exception for upload failures

    Args:
        message (str): Error message
        object_key (Optional[str]): Target object key (if resolved)
        error_code (Optional[str]): Machine-readable code
    Example:
        raise UploadError("Failed to upload", object_key="uploads/a.png")
    """

    def __init__(
        self,
        message: str,
        object_key: Optional[str] = None,
        error_code: Optional[str] = None,
    ):
        self.message = message
        self.object_key = object_key
        self.error_code = error_code
        super().__init__(self.message)


class TransportError(UploadError):
    """Exception raised when the POST fails at the HTTP level or is rejected"""

    def __init__(
        self,
        message: str,
        object_key: Optional[str] = None,
        status_code: Optional[int] = None,
        body: Optional[str] = None,
    ):
        super().__init__(message, object_key, "TRANSPORT_ERROR")
        self.status_code = status_code
        self.body = body


class UploadCanceledError(UploadError):
    """Exception raised when the caller cancels an in-flight upload"""

    def __init__(
        self,
        message: Optional[str] = None,
        object_key: Optional[str] = None,
        reason: Optional[str] = None,
    ):
        self.reason = reason
        msg = message or "Upload was cancelled"
        super().__init__(msg, object_key, "UPLOAD_CANCELED")


class SigningError(UploadError, ValueError):
    """Exception raised when credential material cannot be used for signing"""

    def __init__(self, message: str):
        super().__init__(message, error_code="SIGNING_ERROR")


class ConfigurationError(UploadError):
    """Exception raised when configuration is invalid"""

    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(message, error_code="CONFIGURATION_ERROR")
        self.config_key = config_key
