from .clock import SystemClock
from .form_poster_aiohttp import AiohttpFormPoster
from .http_session import HttpSessionProvider, http_sessions
from .progress_payload import FileProgressPayload
from .uploader_s3 import PresignedPostS3Uploader

__all__ = [
    "SystemClock",
    "AiohttpFormPoster",
    "HttpSessionProvider",
    "http_sessions",
    "FileProgressPayload",
    "PresignedPostS3Uploader",
]
