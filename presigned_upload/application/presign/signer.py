"""SigV4 signing of POST policies (HMAC-SHA256 with a scoped key)."""

from __future__ import annotations

import hashlib
import hmac
import re
from dataclasses import dataclass, field

from presigned_upload.application.presign.policy import SCOPE_TERMINATOR, SERVICE
from presigned_upload.core.exceptions import SigningError

_AMZ_DATE_RE = re.compile(r"^\d{8}T\d{6}Z$")


@dataclass(frozen=True)
class Signature:
    signing_key: bytes = field(repr=False)
    signature: str


def _hmac(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def derive_signing_key(
    secret_key: str, date_stamp: str, region: str, service: str = SERVICE
) -> bytes:
    """AWS4+secret -> date -> region -> service -> aws4_request."""
    k_date = _hmac(f"AWS4{secret_key}".encode("utf-8"), date_stamp)
    k_region = _hmac(k_date, region)
    k_service = _hmac(k_region, service)
    return _hmac(k_service, SCOPE_TERMINATOR)


def sign(
    secret_key: str,
    datetime: str,
    region: str,
    policy_encoded: str,
    service: str = SERVICE,
) -> Signature:
    """Sign an encoded policy.

    ``datetime`` is the policy's ``X-Amz-Date`` value (``YYYYMMDDTHHMMSSZ``);
    its first eight characters scope the key.
    """
    if not isinstance(secret_key, str) or not secret_key:
        raise SigningError("Secret key must be a non-empty string")
    if not isinstance(datetime, str) or not _AMZ_DATE_RE.match(datetime):
        raise SigningError(f"Malformed X-Amz-Date: {datetime!r}")
    if not region:
        raise SigningError("Region is required for the credential scope")

    signing_key = derive_signing_key(secret_key, datetime[:8], region, service)
    signature = hmac.new(
        signing_key, policy_encoded.encode("utf-8"), hashlib.sha256
    ).hexdigest()
    return Signature(signing_key=signing_key, signature=signature)
