from .metadata import METADATA_PREFIX, normalize_metadata
from .policy import ALGORITHM, Policy, build_policy
from .signer import Signature, derive_signing_key, sign

__all__ = [
    "METADATA_PREFIX",
    "normalize_metadata",
    "ALGORITHM",
    "Policy",
    "build_policy",
    "Signature",
    "derive_signing_key",
    "sign",
]
