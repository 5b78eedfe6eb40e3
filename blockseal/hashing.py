"""
BlockSeal Content Hashing

Unkeyed SHA-256 fingerprints of blocks, encoded like signatures
(unpadded standard base64). A digest identifies content; it does not
authenticate it. Callers use digests as externally stored
"previous block" pointers when they want to link blocks.
"""

import hashlib
import hmac
from typing import Union

from .canonicalization import canonicalize
from .encoding import b64encode_nopad
from .errors import SerializationError


def sha256_b64(data: Union[bytes, str]) -> str:
    """Compute SHA-256 and return it as unpadded standard base64."""
    if isinstance(data, str):
        data = data.encode('utf-8')
    return b64encode_nopad(hashlib.sha256(data).digest())


def hash_block(block) -> str:
    """
    Hash a block over its canonical JSON form.

    hash = B64(SHA-256(CJE({"data": ..., "signature": ...})))

    Raises:
        SerializationError: If the block cannot be canonicalized
    """
    try:
        fields = {"data": block.data, "signature": block.signature}
    except AttributeError as e:
        raise SerializationError(f"Serialization error: {e}") from e

    for name, value in fields.items():
        if not isinstance(value, str):
            raise SerializationError(f"Serialization error: field `{name}` must be a string")

    return sha256_b64(canonicalize(fields))


def verify_hash(declared_hash: str, block) -> bool:
    """Recompute a block's digest and compare it with a declared one."""
    if not isinstance(declared_hash, str):
        return False
    computed = hash_block(block)
    return hmac.compare_digest(computed.encode('ascii'), declared_hash.encode('utf-8'))
