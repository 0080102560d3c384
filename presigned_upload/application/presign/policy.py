"""
POST policy document for browser-style S3 uploads.

The policy is a JSON document listing every form field the server must
accept, base64-encoded. The encoded string is both the ``Policy`` form field
and the payload that gets signed.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional, Union

from presigned_upload.core.schemas import ACL

ALGORITHM = "AWS4-HMAC-SHA256"
SERVICE = "s3"
SCOPE_TERMINATOR = "aws4_request"
AMZ_DATE_FORMAT = "%Y%m%dT%H%M%SZ"
EXPIRATION_FORMAT = "%Y-%m-%dT%H:%M:%S.000Z"


def credential_scope(date_stamp: str, region: str, service: str = SERVICE) -> str:
    return f"{date_stamp}/{region}/{service}/{SCOPE_TERMINATOR}"


@dataclass(frozen=True)
class Policy:
    key: str
    bucket: str
    acl: str
    region: str
    datetime: str
    expiration: str
    credential: str
    content_length: int
    content_type: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def conditions(self) -> List[Any]:
        conditions: List[Any] = [
            {"bucket": self.bucket},
            {"key": self.key},
            {"acl": self.acl},
            # Exact size: the body cannot be swapped for a different payload
            ["content-length-range", self.content_length, self.content_length],
        ]
        if self.content_type is not None:
            conditions.append({"Content-Type": self.content_type})
        conditions.extend({name: value} for name, value in self.metadata.items())
        conditions.extend(
            [
                {"x-amz-algorithm": ALGORITHM},
                {"x-amz-credential": self.credential},
                {"x-amz-date": self.datetime},
            ]
        )
        return conditions

    def to_json(self) -> str:
        return json.dumps(
            {"expiration": self.expiration, "conditions": self.conditions()},
            separators=(",", ":"),
        )

    def encode(self) -> str:
        """Base64 of the JSON document; used for the form field and for signing."""
        return base64.b64encode(self.to_json().encode("utf-8")).decode("ascii")


def _as_utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def build_policy(
    object_key: str,
    bucket: str,
    access_key: str,
    validity_minutes: int,
    content_length: int,
    acl: Union[ACL, str],
    region: str,
    metadata_params: Optional[Mapping[str, str]] = None,
    *,
    content_type: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Policy:
    """Build the policy for one upload.

    Args:
        object_key: Exact key the object will be stored under.
        validity_minutes: Lifetime of the policy from ``now``.
        content_length: Exact file size in bytes.
        metadata_params: Already-normalized ``x-amz-meta-*`` fields.
        content_type: Value of the ``Content-Type`` form field, if one is sent.
        now: Current time; naive values are taken as UTC. Defaults to the
            system clock.

    Returns:
        Policy: Immutable policy with the derived datetime and credential.
    """
    moment = _as_utc(now)
    amz_date = moment.strftime(AMZ_DATE_FORMAT)
    expiration = (moment + timedelta(minutes=validity_minutes)).strftime(
        EXPIRATION_FORMAT
    )
    credential = f"{access_key}/{credential_scope(amz_date[:8], region)}"
    return Policy(
        key=object_key,
        bucket=bucket,
        acl=ACL(acl).value,
        region=region,
        datetime=amz_date,
        expiration=expiration,
        credential=credential,
        content_length=content_length,
        content_type=content_type,
        metadata=dict(metadata_params or {}),
    )
