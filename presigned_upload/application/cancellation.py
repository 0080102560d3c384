from __future__ import annotations

import asyncio
from typing import Optional


class CancelToken:
    """Cooperative cancellation handle shared between a caller and an upload.

    The upload observes the token while its request is in flight; calling
    ``cancel()`` from a progress callback, another task, or a signal handler
    aborts the transfer.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: Optional[str] = None

    def cancel(self, reason: Optional[str] = None) -> None:
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    async def wait(self) -> None:
        await self._event.wait()
