"""
Hash Chain Replay

Executes an operation sequence against a running hash value:

    v_0 = seed
    v_{t+1} = op_t(v_t)

and records every state. The first double hash of a run marks the anchor
index; it is a run-local latch returned with the trace, so runs share no
state and can be replayed independently.
"""

from typing import Iterable, List, Optional
import logging

from .codec import reverse_byte_order, sha256, sha256d
from .errors import MalformedInput
from .tags import BITCOIN_TAG
from .types import (
    AnchorMarker,
    ConcatLeft,
    ConcatRight,
    Hash,
    HashValue,
    Operation,
    ReplayResult,
    TraceEntry,
)

logger = logging.getLogger(__name__)


LABEL_CONCAT_RIGHT = 'Concat (RHS)'
LABEL_CONCAT_LEFT = 'Concat (LHS)'
LABEL_MERKLE_ROOT = 'Merkle Root'
LABEL_OP_RETURN = 'OP_RETURN'
LABEL_TXID = 'TXID'


def hash_label(op: Hash) -> str:
    return f'OP ({op.algorithm.value})'


def apply(op: Operation, current: HashValue) -> HashValue:
    """Apply one hashing or concat operation; anchor markers are identity."""
    if isinstance(op, ConcatRight):
        return HashValue(current.raw + op.operand)
    if isinstance(op, ConcatLeft):
        return HashValue(op.operand + current.raw)
    if isinstance(op, Hash):
        digest = sha256d(current.raw) if op.is_double else sha256(current.raw)
        return HashValue(digest)
    if isinstance(op, AnchorMarker):
        return current
    raise MalformedInput(f"Not an operation: {op!r}")


class HashChainReplayer:
    """
    Replays operation sequences for one anchoring chain.

    chain_tag selects which anchor descriptors produce a Merkle Root entry.
    """

    def __init__(self, chain_tag: str = BITCOIN_TAG):
        self.chain_tag = chain_tag

    def replay(self, seed: HashValue, ops: Iterable[Operation]) -> ReplayResult:
        """
        Replay ops starting from seed.

        Returns:
            ReplayResult with the trace, the terminal value and the index of
            the first double hash (None if there is none)
        """
        current = seed
        trace: List[TraceEntry] = []
        anchor_index: Optional[int] = None

        for op in ops:
            if isinstance(op, AnchorMarker):
                if op.matches(self.chain_tag):
                    trace.append(TraceEntry(
                        label=LABEL_MERKLE_ROOT,
                        value=current,
                        digest=reverse_byte_order(current.hex),
                        highlight=True,
                    ))
                    logger.debug("Merkle root (%s): %s", self.chain_tag, trace[-1].digest)
                continue

            current = apply(op, current)

            if isinstance(op, ConcatRight):
                label = LABEL_CONCAT_RIGHT
            elif isinstance(op, ConcatLeft):
                label = LABEL_CONCAT_LEFT
            else:
                label = hash_label(op)
                if op.is_double and anchor_index is None:
                    anchor_index = len(trace)

            trace.append(TraceEntry.of(label, current))
            logger.debug("step %d %s: %s", len(trace) - 1, label, current.hex)

        return ReplayResult(
            trace=tuple(trace),
            terminal=current,
            anchor_index=anchor_index,
        )


def replay(seed: HashValue, ops: Iterable[Operation], chain_tag: str = BITCOIN_TAG) -> ReplayResult:
    """Convenience function to replay one sequence."""
    return HashChainReplayer(chain_tag).replay(seed, ops)
