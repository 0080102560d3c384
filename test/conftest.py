"""
Test configuration and shared fixtures for presigned uploads.
"""

import asyncio
import logging
import os
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Callable, List

import aiohttp
import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from presigned_upload.core.schemas import TransferProgress

logger = logging.getLogger(__name__)


def setup_logging():
    """Console logging for the whole test run."""
    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)-8s [%(name)s:%(lineno)d] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(console_handler)

    # Quiet noisy libraries
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    logging.getLogger("presigned_upload").setLevel(logging.DEBUG)


def pytest_configure(config):  # pylint: disable=unused-argument
    """Configure pytest for tests."""
    setup_logging()
    log = logging.getLogger("pytest")
    log.info("=" * 80)
    log.info("Python: %s", os.sys.version)
    log.info("Working directory: %s", os.getcwd())
    log.info("-" * 80)


@pytest.fixture(autouse=True)
def log_test_name(request):
    """Log test name when test starts and finishes."""
    log = logging.getLogger(request.node.nodeid)
    log.info("Starting test: %s", request.node.name)
    start_time = datetime.now()

    def log_test_end():
        duration = (datetime.now() - start_time).total_seconds()
        has_rep_call = hasattr(request.node, "rep_call")
        if has_rep_call and request.node.rep_call.failed:
            log.error("Test failed after %.2fs", duration)
        else:
            log.info("Test finished after %.2fs", duration)

    request.addfinalizer(log_test_end)


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    """Add test result to report object."""
    outcome = yield
    rep = outcome.get_result()
    setattr(item, f"rep_{rep.when}", rep)


# -------------------- Upload fixtures --------------------
@pytest.fixture
def make_file(tmp_path):
    """Factory writing ``size`` bytes to ``tmp_path/name``."""

    def _make(name: str = "a.png", size: int = 1000) -> str:
        p = tmp_path / name
        p.write_bytes(os.urandom(size))
        return str(p)

    return _make


@pytest.fixture
def fixed_clock():
    return SimpleNamespace(now=lambda: datetime(2015, 12, 29, 0, 0, 0, tzinfo=timezone.utc))


class RecordingReporter:
    """Collects snapshots; optionally runs a hook on each one."""

    def __init__(self, hook: Callable[[TransferProgress], None] = None):
        self.snapshots: List[TransferProgress] = []
        self._hook = hook

    def on_progress(self, progress: TransferProgress) -> None:
        self.snapshots.append(progress)
        if self._hook is not None:
            self._hook(progress)

    @property
    def last(self) -> TransferProgress:
        return self.snapshots[-1]


@pytest.fixture
def recorder():
    return RecordingReporter


@pytest_asyncio.fixture
async def http_session():
    session = aiohttp.ClientSession()
    yield session
    await session.close()


@pytest_asyncio.fixture
async def stub_s3():
    """In-process S3 stand-in accepting presigned POST forms.

    Records field order and received file size. Set ``status`` to change the
    reply and ``delay`` to hold the response without reading the body.
    """
    state = SimpleNamespace(
        status=204,
        delay=0.0,
        requests=0,
        paths=[],
        field_names=[],
        fields={},
        file_size=None,
        file_content_type=None,
        headers={},
    )

    async def handle(request: web.Request) -> web.StreamResponse:
        state.requests += 1
        state.paths.append(request.path)
        state.headers = dict(request.headers)
        if state.delay:
            await asyncio.sleep(state.delay)
            return web.Response(status=state.status)

        reader = await request.multipart()
        while True:
            part = await reader.next()
            if part is None:
                break
            state.field_names.append(part.name)
            if part.filename is not None:
                data = await part.read()
                state.file_size = len(data)
                state.file_content_type = part.headers.get("Content-Type")
            else:
                state.fields[part.name] = await part.text()

        if state.status == 204:
            return web.Response(status=204)
        return web.Response(
            status=state.status,
            text="<Error><Code>AccessDenied</Code></Error>",
            content_type="application/xml",
        )

    app = web.Application()
    app.router.add_post("/", handle)
    app.router.add_post("/{bucket}", handle)

    server = TestServer(app)
    await server.start_server()
    state.server = server
    state.port = server.port
    state.endpoint_url = str(server.make_url("")).rstrip("/")
    yield state
    await server.close()
