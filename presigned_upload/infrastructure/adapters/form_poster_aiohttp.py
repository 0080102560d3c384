from __future__ import annotations

import asyncio
import logging
from typing import Optional, Sequence, Tuple

import aiohttp

from presigned_upload.application.interfaces import IFormPoster, SendProgressCallback
from presigned_upload.core.config import settings
from presigned_upload.core.exceptions import TransportError
from presigned_upload.core.schemas import FilePart, FormPostResponse
from presigned_upload.infrastructure.adapters.http_session import http_sessions
from presigned_upload.infrastructure.adapters.progress_payload import (
    FileProgressPayload,
)

logger = logging.getLogger(__name__)


class AiohttpFormPoster(IFormPoster):
    """Multipart POST over a shared aiohttp session.

    Fields are written in the order given and the file part always goes last;
    some S3-compatible servers parse the form sequentially and reject a file
    part that arrives before its fields.
    """

    def __init__(
        self,
        session: Optional[aiohttp.ClientSession] = None,
        chunk_size: Optional[int] = None,
    ) -> None:
        self._session = session
        self._chunk_size = chunk_size or settings.upload_chunk_size

    async def post_form(
        self,
        url: str,
        fields: Sequence[Tuple[str, str]],
        file: FilePart,
        *,
        on_send_progress: Optional[SendProgressCallback] = None,
    ) -> FormPostResponse:
        session = self._session or http_sessions.get()

        form = aiohttp.FormData()
        for name, value in fields:
            form.add_field(name, value)
        form.add_field(
            "file",
            FileProgressPayload(
                file.path,
                size=file.size,
                chunk_size=self._chunk_size,
                on_progress=on_send_progress,
                content_type=file.content_type,
            ),
            filename=file.filename,
            content_type=file.content_type,
        )

        try:
            async with session.post(
                url,
                data=form,
                headers={"Accept": "*/*"},
                allow_redirects=False,
            ) as resp:
                body = await resp.text()
                return FormPostResponse(
                    status=resp.status, body=body, headers=dict(resp.headers)
                )
        except aiohttp.ClientError as e:
            logger.error("HTTP error posting to %s: %s", url, e)
            raise TransportError(f"Upload request failed: {e}") from e
        except asyncio.TimeoutError as e:
            logger.error("Timed out posting to %s", url)
            raise TransportError("Upload request timed out") from e
