"""
BlockSeal Chain Verifier

Signs blocks and classifies a (possibly tampered) chain of blocks.

The classification scan visits blocks from the last to the first and
carries a single `recovered` flag:
- the first block that verifies is RECOVERED and sets the flag
- every later verified block is VALID
- every block that fails verification is TAMPERED, before or after
  the recovery point

The flag never reverts. The result lists blocks in traversal order,
so index 0 of the result is the last block of the input.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Iterator, List, Optional, Sequence, Union

from . import hashing, signing
from .block import Block, BlockDraft, BlockWithStatus, ChainSummary, Status
from .errors import BlockSealError, InvalidSecretKeyError, UnrecoverableChainError

logger = logging.getLogger(__name__)


class Verifier:
    """
    Holds the secret key and performs every keyed operation.

    The key is fixed at construction and never exposed again, so one
    instance can be shared freely across threads and calls.
    """

    def __init__(self, secret_key: Union[str, bytes]):
        """
        Create a Verifier for the given secret key.

        Any non-empty key is accepted; choosing a strong key is the
        caller's responsibility.

        Raises:
            InvalidSecretKeyError: If the key is empty or not str/bytes
        """
        if isinstance(secret_key, str):
            secret_key = secret_key.encode('utf-8')
        if not isinstance(secret_key, (bytes, bytearray)) or not secret_key:
            raise InvalidSecretKeyError()
        self._secret_key = bytes(secret_key)

    def __repr__(self) -> str:
        return f"Verifier(algorithm={signing.ALGORITHM!r}, key=<redacted>)"

    def sign_data(self, data: str) -> str:
        """Sign data and return the unpadded base64 HMAC-SHA256 tag."""
        return signing.sign(self._secret_key, data)

    def verify_data(self, data: str, signature: str) -> bool:
        """
        Check that signature authenticates data under this key.

        Returns False on a clean mismatch, e.g. when the data was altered
        or the signature came from another key.

        Raises:
            EncodingError: If the signature is not unpadded base64
            CryptoError: If the decoded tag is structurally invalid
        """
        return signing.verify(self._secret_key, data, signature)

    def verify_block(self, block: Block) -> bool:
        return self.verify_data(block.data, block.signature)

    def create_block(self, data: str) -> Block:
        """Sign data and wrap it in a new Block. No chaining is implied."""
        return Block(data=data, signature=self.sign_data(data))

    def seal(self, draft: BlockDraft) -> Block:
        """Convert an unsigned draft into an immutable signed Block."""
        return self.create_block(draft.data)

    @staticmethod
    def hash_block(block: Block) -> str:
        return hashing.hash_block(block)

    def information(
        self,
        blocks: Iterable[Block],
        strict: bool = True,
        max_workers: Optional[int] = None
    ) -> List[BlockWithStatus]:
        """
        Classify every block of a chain.

        Args:
            blocks: Blocks in caller order; they are not re-sorted
            strict: Propagate malformed-signature errors (default). When
                False, a malformed block is classified TAMPERED instead.
            max_workers: Verify blocks on a thread pool of this size
                before folding the results sequentially

        Returns:
            One BlockWithStatus per block, in reverse input order

        Raises:
            EncodingError, CryptoError: In strict mode, on the first
                malformed signature
        """
        ordered = list(blocks)
        ordered.reverse()

        results: List[BlockWithStatus] = []
        recovered = False

        for block, ok in zip(ordered, self._verify_all(ordered, strict, max_workers)):
            if not ok:
                status = Status.TAMPERED
            elif not recovered:
                status = Status.RECOVERED
                recovered = True
            else:
                status = Status.VALID
            results.append(BlockWithStatus(block=block, status=status))

        logger.debug(
            "Classified %d block(s), recovered=%s, tampered=%d",
            len(results),
            recovered,
            sum(1 for r in results if r.status is Status.TAMPERED),
        )
        return results

    def recover(self, blocks: Sequence[Block], **kwargs) -> List[Block]:
        """
        Return the trusted blocks of a chain in their original order.

        Trusted means RECOVERED or VALID. Keyword arguments are passed
        to information().

        Raises:
            UnrecoverableChainError: If no block verifies
        """
        classified = self.information(blocks, **kwargs)
        trusted = [r.block for r in reversed(classified) if r.status.trusted()]
        if not trusted:
            raise UnrecoverableChainError(len(classified))
        return trusted

    def _verify_all(
        self,
        ordered: List[Block],
        strict: bool,
        max_workers: Optional[int]
    ) -> Iterator[bool]:
        check = self.verify_block if strict else self._verify_lenient

        if max_workers and max_workers > 1 and len(ordered) > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                # map() re-raises worker errors in submission order
                return iter(list(pool.map(check, ordered)))

        return (check(block) for block in ordered)

    def _verify_lenient(self, block: Block) -> bool:
        try:
            return self.verify_block(block)
        except BlockSealError as e:
            logger.debug("Treating malformed block as tampered: %s", e)
            return False


def summarize(classified: Sequence[BlockWithStatus]) -> ChainSummary:
    """Count the statuses of a classification result."""
    counts = {status: 0 for status in Status}
    recovered_block = None
    for item in classified:
        counts[item.status] += 1
        if item.status is Status.RECOVERED:
            recovered_block = item.block
    return ChainSummary(
        total=len(classified),
        recovered=counts[Status.RECOVERED],
        valid=counts[Status.VALID],
        tampered=counts[Status.TAMPERED],
        recovered_block=recovered_block,
    )
