"""
Anchor Resolution

The anchor branch of a receipt replays the construction of the Bitcoin
transaction that carries the calendar root. Within that replay:

    k       = index of the first sha-256-x2 step (the transaction hash)
    TXID    = byte-reversed digest at step k
    OP_RETURN = digest at step k - 3

The offset is fixed by the receipt format, not discovered.
"""

from typing import Iterable, Tuple
import logging

from .codec import reverse_byte_order
from .errors import AnchorExtractionFailed
from .replay import HashChainReplayer
from .tags import BITCOIN_TAG, OP_RETURN_OFFSET
from .types import AnchorInfo, HashValue, Operation, ReplayResult

logger = logging.getLogger(__name__)


class AnchorResolver:
    """Derive AnchorInfo from the inner (anchor) operation sequence."""

    def __init__(self, chain_tag: str = BITCOIN_TAG):
        self.replayer = HashChainReplayer(chain_tag)

    def resolve_with_trace(
        self,
        outer_terminal_hash: str,
        inner_ops: Iterable[Operation]
    ) -> Tuple[AnchorInfo, ReplayResult]:
        """
        Replay the anchor branch seeded with the outer terminal hash.

        Raises:
            AnchorExtractionFailed: no double hash in the branch
        """
        result = self.replayer.replay(HashValue.from_hex(outer_terminal_hash), inner_ops)
        k = result.anchor_index

        if k is None:
            raise AnchorExtractionFailed("Unable to obtain BTC TXID! No sha-256-x2 step in anchor branch.")

        op_index = k - OP_RETURN_OFFSET
        op_return = result.trace[op_index].value.hex if op_index >= 0 else None
        txid = reverse_byte_order(result.trace[k].value.hex)

        logger.info("Anchor resolved: txid=%s op_return=%s", txid, op_return)
        return AnchorInfo(txid=txid, op_return=op_return), result

    def resolve(self, outer_terminal_hash: str, inner_ops: Iterable[Operation]) -> AnchorInfo:
        info, _ = self.resolve_with_trace(outer_terminal_hash, inner_ops)
        return info


def resolve(
    outer_terminal_hash: str,
    inner_ops: Iterable[Operation],
    chain_tag: str = BITCOIN_TAG
) -> AnchorInfo:
    """Convenience function to resolve anchor values."""
    return AnchorResolver(chain_tag).resolve(outer_terminal_hash, inner_ops)
