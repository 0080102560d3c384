"""Progress reporter adapters.

Uploads report rich ``TransferProgress`` snapshots; callers that only want a
completion fraction wrap their callback in ``FractionProgressReporter``.
"""

from __future__ import annotations

from typing import Callable, Optional, Union

from presigned_upload.application.interfaces import IProgressReporter
from presigned_upload.core.schemas import TransferProgress, TransferState


class CallbackProgressReporter:
    """Forward every snapshot to a plain function."""

    def __init__(self, callback: Callable[[TransferProgress], None]) -> None:
        self._callback = callback

    def on_progress(self, progress: TransferProgress) -> None:
        self._callback(progress)


class FractionProgressReporter:
    """Report 0..1 while sending and 1.0 on success; stay silent otherwise."""

    def __init__(self, callback: Callable[[float], None]) -> None:
        self._callback = callback

    def on_progress(self, progress: TransferProgress) -> None:
        if progress.state == TransferState.success:
            self._callback(1.0)
        elif progress.state == TransferState.in_progress:
            self._callback(progress.fraction)


def as_reporter(
    progress: Union[IProgressReporter, Callable[[TransferProgress], None], None],
) -> Optional[IProgressReporter]:
    """Accept a reporter object or a bare snapshot callback."""
    if progress is None or hasattr(progress, "on_progress"):
        return progress
    if callable(progress):
        return CallbackProgressReporter(progress)
    raise TypeError(f"Unsupported progress reporter: {type(progress).__name__}")
