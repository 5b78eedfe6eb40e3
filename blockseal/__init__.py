"""
BlockSeal Reference Implementation

Version: 0.1.0

Tamper classification for chains of HMAC-signed blocks.

Each block carries a data payload and an HMAC-SHA256 signature. Given a
chain that may have been modified after signing, BlockSeal determines
which suffix of the chain can still be trusted:

    RECOVERED  the most recent block that still verifies
    VALID      an older block that still verifies
    TAMPERED   a block whose signature no longer matches its data

Usage:
    from blockseal import Verifier, Status

    verifier = Verifier("secret-key")
    chain = [verifier.create_block(d) for d in ("data1", "data2", "data3")]

    for item in verifier.information(chain):
        print(item.block.data, item.status.value)

    # Content fingerprint for external linking (keyless)
    digest = Verifier.hash_block(chain[-1])
"""

__version__ = "0.1.0"
__license__ = "MIT"

# Errors
from .errors import (
    BlockSealError,
    InvalidSecretKeyError,
    EncodingError,
    CryptoError,
    MalformedTagError,
    SerializationError,
    UnrecoverableChainError,
)

# Encoding and canonicalization
from .encoding import b64encode_nopad, b64decode_nopad
from .canonicalization import canonicalize, canonicalize_str

# Hashing
from .hashing import sha256_b64, hash_block, verify_hash

# Signing primitive
from .signing import TagCheck, sign, verify, check

# Record model
from .block import (
    Block,
    BlockDraft,
    BlockWithStatus,
    ChainSummary,
    Status,
)

# Verifier and chain classifier
from .verifier import Verifier, summarize


__all__ = [
    # Version
    "__version__",

    # Errors
    "BlockSealError",
    "InvalidSecretKeyError",
    "EncodingError",
    "CryptoError",
    "MalformedTagError",
    "SerializationError",
    "UnrecoverableChainError",

    # Encoding
    "b64encode_nopad",
    "b64decode_nopad",
    "canonicalize",
    "canonicalize_str",

    # Hashing
    "sha256_b64",
    "hash_block",
    "verify_hash",

    # Signing
    "TagCheck",
    "sign",
    "verify",
    "check",

    # Model
    "Block",
    "BlockDraft",
    "BlockWithStatus",
    "ChainSummary",
    "Status",

    # Verifier
    "Verifier",
    "summarize",
]
