"""
Upload one file to S3 through a presigned POST policy.

Flow: resolve key -> stat file -> normalize metadata -> build policy -> sign ->
POST the form while streaming progress -> map the outcome to a URL or an error.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
from typing import Callable, List, Mapping, Optional, Tuple, Union

import aiofiles.os

from presigned_upload.application.cancellation import CancelToken
from presigned_upload.application.interfaces import (
    IClock,
    IFormPoster,
    IProgressReporter,
)
from presigned_upload.application.presign import (
    ALGORITHM,
    Policy,
    build_policy,
    normalize_metadata,
    sign,
)
from presigned_upload.application.progress import as_reporter
from presigned_upload.core.config import settings
from presigned_upload.core.exceptions import (
    TransportError,
    UploadCanceledError,
    UploadError,
)
from presigned_upload.core.schemas import (
    FilePart,
    FormPostResponse,
    TransferProgress,
    TransferState,
    UploadRequest,
)

logger = logging.getLogger(__name__)

SUCCESS_STATUS = 204

ProgressArg = Union[IProgressReporter, Callable[[TransferProgress], None], None]


def presigned_form_fields(
    policy: Policy,
    signature: str,
    content_type: str,
    metadata_params: Mapping[str, str],
) -> List[Tuple[str, str]]:
    """Form fields in the order servers expect them; the file part follows."""
    fields = [
        ("key", policy.key),
        ("acl", policy.acl),
        ("X-Amz-Credential", policy.credential),
        ("X-Amz-Algorithm", ALGORITHM),
        ("X-Amz-Date", policy.datetime),
        ("Policy", policy.encode()),
        ("X-Amz-Signature", signature),
        ("Content-Type", content_type),
    ]
    fields.extend(metadata_params.items())
    return fields


class _ProgressEmitter:
    """Turns transport ticks into snapshots and closes on the first terminal state."""

    def __init__(
        self,
        reporter: Optional[IProgressReporter],
        total: int,
        cancel_token: Optional[CancelToken],
    ) -> None:
        self._reporter = reporter
        self._total = total
        self._cancel_token = cancel_token
        self._transferred = 0
        self._closed = False

    def tick(self, sent: int, total: Optional[int]) -> None:
        # Unknown length
        if total is None or total < 0:
            return
        if self._closed or (self._cancel_token is not None and self._cancel_token.cancelled):
            return
        self._transferred = sent
        self._emit(TransferProgress(sent, total, TransferState.in_progress))

    def start(self) -> None:
        self._emit(TransferProgress(0, self._total, TransferState.in_progress))

    def finish(self, state: TransferState) -> None:
        if self._closed:
            return
        self._closed = True
        transferred = self._total if state == TransferState.success else self._transferred
        self._emit(TransferProgress(transferred, self._total, state))

    def _emit(self, progress: TransferProgress) -> None:
        if self._reporter is not None:
            self._reporter.on_progress(progress)


class UploadFileUseCase:
    """Single configurable upload entry point.

    Progress goes to an ``IProgressReporter``; use ``FractionProgressReporter``
    for callers that only want a 0..1 value.
    """

    def __init__(
        self,
        poster: IFormPoster,
        clock: Optional[IClock] = None,
        policy_expiry_minutes: Optional[int] = None,
    ) -> None:
        self._poster = poster
        self._clock = clock
        self._policy_expiry_minutes = (
            policy_expiry_minutes or settings.upload_policy_expiry_minutes
        )

    async def execute(
        self,
        request: UploadRequest,
        progress: ProgressArg = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> str:
        object_key = request.object_key
        endpoint = request.endpoint
        file_path = os.fspath(request.file_path)

        try:
            size = (await aiofiles.os.stat(file_path)).st_size
        except OSError as e:
            logger.error("Cannot read upload source %s: %s", file_path, e)
            raise UploadError(
                f"Cannot read file {file_path}: {e}", object_key=object_key
            ) from e

        metadata_params = normalize_metadata(request.metadata)
        policy = build_policy(
            object_key,
            request.bucket,
            request.access_key,
            self._policy_expiry_minutes,
            size,
            request.acl,
            request.region,
            metadata_params,
            content_type=request.content_type,
            now=self._clock.now() if self._clock is not None else None,
        )
        signature = sign(
            request.secret_key, policy.datetime, request.region, policy.encode()
        )

        emitter = _ProgressEmitter(as_reporter(progress), size, cancel_token)
        emitter.start()

        fields = presigned_form_fields(
            policy, signature.signature, request.content_type, metadata_params
        )
        file_part = FilePart(
            path=file_path,
            filename=os.path.basename(file_path),
            content_type=request.content_type,
            size=size,
        )

        logger.info("Uploading %s (%d bytes) -> %s/%s", file_path, size, endpoint, object_key)
        try:
            response = await self._send(endpoint, fields, file_part, emitter, cancel_token)
        except UploadCanceledError as e:
            e.object_key = object_key
            emitter.finish(TransferState.canceled)
            logger.warning("Upload was cancelled: %s", object_key)
            raise
        except asyncio.CancelledError:
            emitter.finish(TransferState.canceled)
            logger.warning("Upload task cancelled: %s", object_key)
            raise
        except TransportError as e:
            e.object_key = object_key
            emitter.finish(TransferState.failure)
            logger.error("Failed to upload %s: %s", object_key, e.message)
            raise
        except Exception as e:
            emitter.finish(TransferState.failure)
            logger.error("Upload request for %s failed: %s", object_key, e, exc_info=True)
            raise TransportError(
                f"Upload request failed: {e}", object_key=object_key
            ) from e

        if response.status != SUCCESS_STATUS:
            emitter.finish(TransferState.failure)
            logger.error(
                "Upload of %s rejected with status %s: %s",
                object_key,
                response.status,
                response.body[:500],
            )
            raise TransportError(
                f"Upload failed with status: {response.status}",
                object_key=object_key,
                status_code=response.status,
                body=response.body,
            )

        emitter.finish(TransferState.success)
        url = f"{endpoint}/{object_key}"
        logger.info("Upload complete: %s", url)
        return url

    async def _send(
        self,
        endpoint: str,
        fields: List[Tuple[str, str]],
        file_part: FilePart,
        emitter: _ProgressEmitter,
        cancel_token: Optional[CancelToken],
    ) -> FormPostResponse:
        post = self._poster.post_form(
            endpoint, fields, file_part, on_send_progress=emitter.tick
        )
        if cancel_token is None:
            return await post
        if cancel_token.cancelled:
            post.close()
            raise UploadCanceledError(reason=cancel_token.reason)

        request_task = asyncio.ensure_future(post)
        cancel_task = asyncio.ensure_future(cancel_token.wait())
        try:
            done, _ = await asyncio.wait(
                {request_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            cancel_task.cancel()
            if not request_task.done():
                request_task.cancel()
                with contextlib.suppress(asyncio.CancelledError, UploadError):
                    await request_task

        if request_task in done:
            return request_task.result()
        raise UploadCanceledError(reason=cancel_token.reason)
