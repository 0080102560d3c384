from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, constr


class ACL(str, Enum):
    private = "private"
    public_read = "public-read"
    public_read_write = "public-read-write"
    aws_exec_read = "aws-exec-read"
    authenticated_read = "authenticated-read"
    bucket_owner_read = "bucket-owner-read"
    bucket_owner_full_control = "bucket-owner-full-control"
    log_delivery_write = "log-delivery-write"


class TransferState(str, Enum):
    in_progress = "in_progress"
    success = "success"
    canceled = "canceled"
    failure = "failure"


TERMINAL_STATES = frozenset(
    {TransferState.success, TransferState.canceled, TransferState.failure}
)


@dataclass(frozen=True)
class TransferProgress:
    """One snapshot of an upload's progress."""

    transferred_bytes: int
    total_bytes: int
    state: TransferState

    @property
    def fraction(self) -> float:
        if self.total_bytes <= 0:
            return 1.0 if self.state == TransferState.success else 0.0
        return self.transferred_bytes / self.total_bytes

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES


@dataclass(frozen=True)
class FilePart:
    """The file field of a multipart form, streamed from disk."""

    path: str
    filename: str
    content_type: str
    size: int


@dataclass(frozen=True)
class FormPostResponse:
    status: int
    body: str = ""
    headers: Dict[str, str] = field(default_factory=dict)


def resolve_object_key(
    file_path: str | os.PathLike,
    key: Optional[str] = None,
    dest_dir: str = "",
    filename: Optional[str] = None,
) -> str:
    """Explicit key wins; otherwise dest_dir/(filename or basename of file_path)."""
    if key is not None:
        return key
    name = filename or os.path.basename(os.fspath(file_path))
    if dest_dir:
        return f"{dest_dir}/{name}"
    return name


def build_endpoint(
    bucket: str, region: str, use_ssl: bool = True, endpoint_url: Optional[str] = None
) -> str:
    """Virtual-hosted AWS endpoint, or path-style when an endpoint_url is given."""
    if endpoint_url:
        return f"{endpoint_url.rstrip('/')}/{bucket}"
    scheme = "https" if use_ssl else "http"
    return f"{scheme}://{bucket}.s3.{region}.amazonaws.com"


class UploadRequest(BaseModel):
    """Everything needed to upload one file through a presigned POST."""

    model_config = ConfigDict(frozen=True)

    bucket: constr(strip_whitespace=True, min_length=1)
    access_key: constr(strip_whitespace=True, min_length=1)
    secret_key: constr(min_length=1) = Field(repr=False)
    file_path: Path
    region: constr(strip_whitespace=True, min_length=1) = "us-east-2"
    key: Optional[str] = None
    dest_dir: str = ""
    filename: Optional[str] = None
    content_type: str = "binary/octet-stream"
    acl: ACL = ACL.public_read
    use_ssl: bool = True
    metadata: Dict[str, str] = Field(default_factory=dict)
    endpoint_url: Optional[str] = None

    @property
    def object_key(self) -> str:
        return resolve_object_key(
            self.file_path, key=self.key, dest_dir=self.dest_dir, filename=self.filename
        )

    @property
    def endpoint(self) -> str:
        return build_endpoint(
            self.bucket, self.region, use_ssl=self.use_ssl, endpoint_url=self.endpoint_url
        )

    @property
    def object_url(self) -> str:
        return f"{self.endpoint}/{self.object_key}"
