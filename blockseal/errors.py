"""
BlockSeal Error Taxonomy

Every failure surfaced by the library derives from BlockSealError.
A tag mismatch is NOT an error: it is the normal False result of
verification.
"""


class BlockSealError(Exception):
    """Base class for all BlockSeal errors."""


class InvalidSecretKeyError(BlockSealError):
    """Raised when a Verifier is constructed with empty key material."""

    def __init__(self, message: str = "Invalid secret key"):
        super().__init__(message)


class EncodingError(BlockSealError):
    """Raised when a signature is not canonical unpadded base64."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Base64 decoding error: {reason}")


class CryptoError(BlockSealError):
    """Raised when the HMAC primitive rejects the key material or input."""


class MalformedTagError(CryptoError):
    """Raised when a decoded tag has the wrong length for HMAC-SHA256."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"HMAC error: tag must be {expected} bytes, got {actual}")


class SerializationError(BlockSealError):
    """Raised when a block cannot be canonicalized or parsed."""


class UnrecoverableChainError(BlockSealError):
    """Raised when no block in a chain passes verification."""

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"No valid blocks found among {length} block(s)")
