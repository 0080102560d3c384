from __future__ import annotations
from typing import Protocol

from presigned_upload.core.schemas import TransferProgress


class IProgressReporter(Protocol):
    """Receives transfer snapshots synchronously on the uploading event loop."""

    def on_progress(self, progress: TransferProgress) -> None:
        ...
