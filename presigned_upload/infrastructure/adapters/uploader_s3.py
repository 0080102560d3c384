from __future__ import annotations
import os
import logging
import mimetypes
from typing import Optional

from presigned_upload.application.interfaces import IFormPoster, IUploader
from presigned_upload.application.use_cases.upload_file import (
    ProgressArg,
    UploadFileUseCase,
)
from presigned_upload.core.config import settings
from presigned_upload.core.exceptions import ConfigurationError
from presigned_upload.core.schemas import UploadRequest
from presigned_upload.infrastructure.adapters.clock import SystemClock
from presigned_upload.infrastructure.adapters.form_poster_aiohttp import (
    AiohttpFormPoster,
)

logger = logging.getLogger(__name__)


class PresignedPostS3Uploader(IUploader):
    """Uploader driven by ``settings``: bucket, region, credentials and key prefix."""

    def __init__(
        self,
        poster: Optional[IFormPoster] = None,
        progress: ProgressArg = None,
    ) -> None:
        self._use_case = UploadFileUseCase(
            poster or AiohttpFormPoster(), clock=SystemClock()
        )
        self._progress = progress

    async def upload_file(
        self,
        local_path: str,
        *,
        dest_path: Optional[str] = None,
        content_type: Optional[str] = None,
        public: bool = True,
    ) -> str:
        if not settings.has_aws_credentials:
            raise ConfigurationError(
                "S3 bucket and credentials must be configured",
                config_key="aws_s3_bucket",
            )

        key = dest_path or f"{settings.aws_s3_prefix}{os.path.basename(local_path)}"
        if not content_type:
            guessed, _ = mimetypes.guess_type(local_path)
            content_type = guessed or settings.upload_default_content_type

        request = UploadRequest(
            bucket=settings.aws_s3_bucket,
            region=settings.aws_s3_region,
            access_key=settings.aws_access_key_id,
            secret_key=settings.aws_secret_access_key,
            file_path=local_path,
            key=key,
            content_type=content_type,
            acl=settings.upload_default_acl if public else settings.upload_private_acl,
            use_ssl=settings.aws_s3_use_ssl,
            endpoint_url=settings.aws_s3_endpoint_url,
        )
        logger.debug("Settings-driven upload of %s as %s", local_path, key)
        return await self._use_case.execute(request, progress=self._progress)
