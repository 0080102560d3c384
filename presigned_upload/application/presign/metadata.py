from __future__ import annotations

from typing import Dict, Mapping, Optional

from presigned_upload.utils.text_utils import param_case

METADATA_PREFIX = "x-amz-meta-"


def normalize_metadata(metadata: Optional[Mapping[str, str]]) -> Dict[str, str]:
    """Rewrite user metadata keys to S3 header-parameter names.

    ``{"userId": "42"}`` becomes ``{"x-amz-meta-user-id": "42"}``. Values pass
    through unchanged. Keys that collide after rewriting keep the last value.

    Raises:
        ValueError: a key is empty or made only of separators.
    """
    params: Dict[str, str] = {}
    for name, value in (metadata or {}).items():
        suffix = param_case(name)
        if not suffix:
            raise ValueError(f"Metadata key {name!r} has no name characters")
        params[f"{METADATA_PREFIX}{suffix}"] = value
    return params
