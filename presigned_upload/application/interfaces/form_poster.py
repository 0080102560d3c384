from __future__ import annotations
from typing import Callable, Optional, Protocol, Sequence, Tuple

from presigned_upload.core.schemas import FilePart, FormPostResponse

SendProgressCallback = Callable[[int, Optional[int]], None]


class IFormPoster(Protocol):
    """Sends an ordered multipart/form-data POST with a streamed file part last."""

    async def post_form(
        self,
        url: str,
        fields: Sequence[Tuple[str, str]],
        file: FilePart,
        *,
        on_send_progress: Optional[SendProgressCallback] = None,
    ) -> FormPostResponse:
        """Return the raw response; raise TransportError on connection faults."""
        ...
