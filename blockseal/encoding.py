"""
BlockSeal Binary-to-Text Encoding

Signatures and digests use the standard base64 alphabet with the
padding characters stripped. Decoding is strict: only the canonical
encoding of some byte string is accepted.
"""

import base64
import binascii
import re

from .errors import EncodingError

_ALPHABET = re.compile(r'^[A-Za-z0-9+/]*$')


def b64encode_nopad(data: bytes) -> str:
    """Standard base64 encode bytes to string (no padding)."""
    return base64.b64encode(data).rstrip(b'=').decode('ascii')


def b64decode_nopad(value: str) -> bytes:
    """
    Decode unpadded standard base64.

    Rejects padding characters, characters outside the standard
    alphabet, impossible lengths and non-zero trailing bits.

    Raises:
        EncodingError: If the value is not canonical unpadded base64
    """
    if not isinstance(value, str):
        raise EncodingError(repr(value), "signature must be a string")

    if '=' in value:
        raise EncodingError(value, "padding characters are not allowed")

    if not _ALPHABET.match(value):
        raise EncodingError(value, "invalid symbol")

    if len(value) % 4 == 1:
        raise EncodingError(value, "invalid length")

    padded = value + '=' * (-len(value) % 4)
    try:
        decoded = base64.b64decode(padded, validate=True)
    except binascii.Error as e:
        raise EncodingError(value, str(e)) from e

    # Trailing bits must be zero, i.e. the input must re-encode to itself
    if b64encode_nopad(decoded) != value:
        raise EncodingError(value, "invalid last symbol")

    return decoded
