"""
Process-wide aiohttp session with fixed timeouts.

The session is created lazily inside the running event loop, reused by every
upload in that loop, and closed explicitly at shutdown. A session belongs to
the loop that created it, so a call from another loop gets a fresh one.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import aiohttp

from presigned_upload.core.config import settings

logger = logging.getLogger(__name__)


def default_timeout() -> aiohttp.ClientTimeout:
    # total bounds the whole send for very large files
    return aiohttp.ClientTimeout(
        total=settings.http_send_timeout,
        connect=settings.http_connect_timeout,
        sock_read=settings.http_read_timeout,
    )


class HttpSessionProvider:
    """Owns the shared ClientSession."""

    def __init__(self, timeout: Optional[aiohttp.ClientTimeout] = None) -> None:
        self._timeout = timeout
        self._session: Optional[aiohttp.ClientSession] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None

    def get(self) -> aiohttp.ClientSession:
        loop = asyncio.get_running_loop()
        if self._session is not None and not self._session.closed and self._loop is not loop:
            # the owning loop is gone or busy elsewhere; its session cannot be reused here
            logger.debug("Discarding HTTP session bound to another event loop")
            self._session = None
        if self._session is None or self._session.closed:
            timeout = self._timeout or default_timeout()
            logger.debug(
                "Creating shared HTTP session (connect=%ss, read=%ss, total=%ss)",
                timeout.connect,
                timeout.sock_read,
                timeout.total,
            )
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._loop = loop
        return self._session

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
            logger.debug("Shared HTTP session closed")
        self._session = None
        self._loop = None


# Global session provider instance
http_sessions = HttpSessionProvider()
