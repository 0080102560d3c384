from __future__ import annotations

from typing import Any, Optional

import aiofiles
from aiohttp import payload
from aiohttp.abc import AbstractStreamWriter

from presigned_upload.application.interfaces import SendProgressCallback

DEFAULT_CHUNK_SIZE = 64 * 1024


class FileProgressPayload(payload.Payload):
    """Streams a file from disk in chunks, reporting bytes sent after each one.

    The size is fixed up front so the multipart body carries a
    Content-Length; S3 rejects chunked POST bodies.
    """

    def __init__(
        self,
        path: str,
        *,
        size: int,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        on_progress: Optional[SendProgressCallback] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(path, **kwargs)
        self._path = path
        self._size = size
        self._chunk_size = chunk_size
        self._on_progress = on_progress

    async def write(self, writer: AbstractStreamWriter) -> None:
        sent = 0
        async with aiofiles.open(self._path, "rb") as f:
            while True:
                chunk = await f.read(self._chunk_size)
                if not chunk:
                    break
                await writer.write(chunk)
                sent += len(chunk)
                if self._on_progress is not None:
                    self._on_progress(sent, self._size)

    def decode(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        raise TypeError("File payloads are streamed and cannot be decoded")
