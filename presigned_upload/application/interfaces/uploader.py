from __future__ import annotations
from typing import Protocol, Optional


class IUploader(Protocol):
    """Settings-driven upload of a local file through a presigned POST form.

    Bucket, region, credentials and key prefix come from configuration, so
    callers only name the file and, optionally, where it should land.
    """

    async def upload_file(
        self,
        local_path: str,
        *,
        dest_path: Optional[str] = None,
        content_type: Optional[str] = None,
        public: bool = True,
    ) -> str:
        """Upload ``local_path`` and return the object URL.

        ``dest_path`` is the object key; without it the key is the configured
        prefix plus the file's basename. ``content_type`` is guessed from the
        file name when omitted. ``public`` selects ``upload_default_acl``,
        otherwise ``upload_private_acl`` is used.

        Raises:
            ConfigurationError: bucket or credentials are not configured.
            UploadError: the file is unreadable or the store rejected the form.
        """
        ...
