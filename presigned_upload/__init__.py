"""Single-object S3 uploads through presigned POST policies."""

from presigned_upload.api import upload_file
from presigned_upload.application.cancellation import CancelToken
from presigned_upload.application.progress import (
    CallbackProgressReporter,
    FractionProgressReporter,
)
from presigned_upload.application.use_cases.upload_file import UploadFileUseCase
from presigned_upload.core.exceptions import (
    ConfigurationError,
    SigningError,
    TransportError,
    UploadCanceledError,
    UploadError,
)
from presigned_upload.core.schemas import (
    ACL,
    TransferProgress,
    TransferState,
    UploadRequest,
)

__all__ = [
    "upload_file",
    "CancelToken",
    "CallbackProgressReporter",
    "FractionProgressReporter",
    "UploadFileUseCase",
    "ConfigurationError",
    "SigningError",
    "TransportError",
    "UploadCanceledError",
    "UploadError",
    "ACL",
    "TransferProgress",
    "TransferState",
    "UploadRequest",
]
