import asyncio

import pytest

from presigned_upload.application.cancellation import CancelToken


@pytest.mark.asyncio
async def test_wait_returns_after_cancel():
    token = CancelToken()
    waiter = asyncio.ensure_future(token.wait())
    await asyncio.sleep(0)
    assert not waiter.done()

    token.cancel("user pressed stop")
    await asyncio.wait_for(waiter, timeout=1)

    assert token.cancelled
    assert token.reason == "user pressed stop"


def test_first_reason_is_kept():
    token = CancelToken()
    token.cancel("first")
    token.cancel("second")
    assert token.reason == "first"
