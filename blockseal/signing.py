"""
BlockSeal Signing Primitive

HMAC-SHA256 authentication tags over block data, encoded as unpadded
standard base64.

Verification distinguishes three outcomes structurally:
- the tag matches (TagCheck.MATCH)
- the tag is well-formed but does not match (TagCheck.MISMATCH)
- the tag is malformed (EncodingError / MalformedTagError raised)
"""

import hashlib
import hmac
from enum import Enum

from .encoding import b64decode_nopad, b64encode_nopad
from .errors import CryptoError, InvalidSecretKeyError, MalformedTagError

ALGORITHM = "HMAC-SHA256"
TAG_LENGTH = hashlib.sha256().digest_size


class TagCheck(str, Enum):
    """Outcome of comparing a stored tag against a recomputed one."""
    MATCH = "MATCH"
    MISMATCH = "MISMATCH"


def _payload(key: bytes, data: str) -> bytes:
    if not key:
        raise InvalidSecretKeyError()
    if not isinstance(data, str):
        raise CryptoError(f"HMAC error: data must be str, got {type(data).__name__}")
    return data.encode('utf-8')


def _mac(key: bytes, payload: bytes) -> bytes:
    return hmac.new(key, payload, hashlib.sha256).digest()


def sign(key: bytes, data: str) -> str:
    """
    Sign data with HMAC-SHA256.

    Args:
        key: Secret key bytes (non-empty)
        data: Payload to authenticate

    Returns:
        Unpadded standard base64 tag (43 characters)
    """
    try:
        payload = _payload(key, data)
    except UnicodeEncodeError as e:
        raise CryptoError(f"HMAC error: {e}") from e
    return b64encode_nopad(_mac(key, payload))


def check(key: bytes, data: str, signature: str) -> TagCheck:
    """
    Compare a stored signature against the tag recomputed over data.

    The comparison is constant-time over the decoded tag.

    Raises:
        EncodingError: If signature is not canonical unpadded base64
        MalformedTagError: If the decoded tag is not TAG_LENGTH bytes
    """
    tag = b64decode_nopad(signature)
    if len(tag) != TAG_LENGTH:
        raise MalformedTagError(TAG_LENGTH, len(tag))

    try:
        payload = _payload(key, data)
    except UnicodeEncodeError:
        # sign() refuses such data, so no stored tag can match it
        return TagCheck.MISMATCH

    expected = _mac(key, payload)
    if hmac.compare_digest(expected, tag):
        return TagCheck.MATCH
    return TagCheck.MISMATCH


def verify(key: bytes, data: str, signature: str) -> bool:
    """Verify an HMAC-SHA256 signature. Malformed signatures raise."""
    return check(key, data, signature) is TagCheck.MATCH
