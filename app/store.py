"""
In-memory chain storage for the BlockSeal host service.

Holds the chain for the lifetime of the process. Nothing is persisted.
The chain is never exposed to clients directly; only classifications are.
"""

import threading
from dataclasses import replace
from typing import List

from blockseal import Block


class BlockStore:
    """
    Thread-safe ordered list of blocks.

    FastAPI runs sync endpoints on a worker pool, so every access
    goes through a re-entrant lock.
    """

    def __init__(self):
        self._blocks: List[Block] = []
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._blocks)

    def append(self, block: Block) -> int:
        """Append a block and return its index."""
        with self._lock:
            self._blocks.append(block)
            return len(self._blocks) - 1

    def get(self, index: int) -> Block:
        with self._lock:
            if index < 0 or index >= len(self._blocks):
                raise IndexError(index)
            return self._blocks[index]

    def snapshot(self) -> List[Block]:
        """Return a copy of the current chain."""
        with self._lock:
            return list(self._blocks)

    def tamper(self, index: int, new_data: str) -> Block:
        """
        Overwrite the data of a stored block without re-signing it.

        Raises:
            IndexError: If index is out of range
        """
        with self._lock:
            if index < 0 or index >= len(self._blocks):
                raise IndexError(index)
            tampered = replace(self._blocks[index], data=new_data)
            self._blocks[index] = tampered
            return tampered

    def reset(self) -> None:
        with self._lock:
            self._blocks = []


# Global store instance
_store = BlockStore()


def get_store() -> BlockStore:
    return _store


def reset_store() -> None:
    """Clear the chain. Used between tests."""
    _store.reset()
