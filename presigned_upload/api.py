"""
Caller-facing upload entry point wired to the aiohttp transport.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional, Union

from presigned_upload.application.cancellation import CancelToken
from presigned_upload.application.interfaces import IClock, IFormPoster
from presigned_upload.application.use_cases.upload_file import (
    ProgressArg,
    UploadFileUseCase,
)
from presigned_upload.core.schemas import ACL, UploadRequest
from presigned_upload.infrastructure.adapters.clock import SystemClock
from presigned_upload.infrastructure.adapters.form_poster_aiohttp import (
    AiohttpFormPoster,
)


async def upload_file(
    *,
    access_key: str,
    secret_key: str,
    bucket: str,
    file_path: Union[str, Path],
    key: Optional[str] = None,
    dest_dir: str = "",
    region: str = "us-east-2",
    acl: Union[ACL, str] = ACL.public_read,
    filename: Optional[str] = None,
    content_type: str = "binary/octet-stream",
    use_ssl: bool = True,
    metadata: Optional[Dict[str, str]] = None,
    endpoint_url: Optional[str] = None,
    on_progress: ProgressArg = None,
    cancel_token: Optional[CancelToken] = None,
    poster: Optional[IFormPoster] = None,
    clock: Optional[IClock] = None,
) -> str:
    """Upload a file with progress tracking, returning its URL on success.

    Args:
        key: Full object key; overrides ``dest_dir`` and ``filename``.
        dest_dir: Key prefix joined with ``filename`` (or the file's base name).
        on_progress: ``IProgressReporter`` or a callable taking
            ``TransferProgress``. Wrap a float callback in
            ``FractionProgressReporter`` for 0..1 values.
        cancel_token: Cancelling it aborts the in-flight request.
        poster: Transport override; defaults to the shared aiohttp session.

    Raises:
        TransportError: Connection fault or any status other than 204.
        UploadCanceledError: ``cancel_token`` was cancelled mid-transfer.
        UploadError: The source file could not be read.
    """
    request = UploadRequest(
        bucket=bucket,
        access_key=access_key,
        secret_key=secret_key,
        file_path=file_path,
        region=region,
        key=key,
        dest_dir=dest_dir,
        filename=filename,
        content_type=content_type,
        acl=acl,
        use_ssl=use_ssl,
        metadata=metadata or {},
        endpoint_url=endpoint_url,
    )
    use_case = UploadFileUseCase(
        poster or AiohttpFormPoster(), clock=clock or SystemClock()
    )
    return await use_case.execute(
        request, progress=on_progress, cancel_token=cancel_token
    )
