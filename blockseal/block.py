"""
BlockSeal Record Model

A Block pairs a data payload with its authentication tag. Blocks are
immutable: changing the data means building a new Block, which will no
longer verify unless it is re-signed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .errors import SerializationError


class Status(str, Enum):
    """
    Classification assigned to a block by a chain scan.

    RECOVERED: The first block in traversal order that verifies
    VALID: A verified block visited after the recovery point
    TAMPERED: A block whose signature does not match its data
    """
    RECOVERED = "Recovered"
    VALID = "Valid"
    TAMPERED = "Tampered"

    def trusted(self) -> bool:
        return self is not Status.TAMPERED


@dataclass(frozen=True)
class Block:
    """A data payload and its HMAC-SHA256 signature."""
    data: str
    signature: str

    def to_dict(self) -> Dict[str, str]:
        return {"data": self.data, "signature": self.signature}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'Block':
        """
        Build a Block from its JSON form.

        Raises:
            SerializationError: If a field is missing or not a string
        """
        if not isinstance(d, dict):
            raise SerializationError(f"Serialization error: block must be an object, got {type(d).__name__}")
        for field_name in ("data", "signature"):
            if field_name not in d:
                raise SerializationError(f"Serialization error: missing field `{field_name}`")
            if not isinstance(d[field_name], str):
                raise SerializationError(f"Serialization error: field `{field_name}` must be a string")
        return cls(data=d["data"], signature=d["signature"])


@dataclass
class BlockDraft:
    """
    Unsigned, mutable staging form of a block.

    A draft carries no signature; Verifier.seal() turns it into an
    immutable Block.
    """
    data: str = ""


@dataclass(frozen=True)
class BlockWithStatus:
    """A block paired with the status a scan assigned to it."""
    block: Block
    status: Status

    def to_dict(self) -> Dict[str, Any]:
        return {
            "block": self.block.to_dict(),
            "status": self.status.value,
        }


@dataclass(frozen=True)
class ChainSummary:
    """Status counts for one classification result."""
    total: int
    recovered: int
    valid: int
    tampered: int
    recovered_block: Optional[Block] = None

    def is_intact(self) -> bool:
        return self.tampered == 0 and self.total > 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "recovered": self.recovered,
            "valid": self.valid,
            "tampered": self.tampered,
            "recovered_block": self.recovered_block.to_dict() if self.recovered_block else None,
        }
