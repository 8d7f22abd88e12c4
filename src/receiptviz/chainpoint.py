"""
Receipt Orchestration

    parse -> extract (outer, inner) -> replay outer from the receipt hash
          -> resolve anchor from the outer terminal hash and the inner ops

compute_anchor() returns only the anchor values; compute_full_trace() also
returns both traces for the graph projector. ChainpointViz wraps both with
a configuration and the renderer.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging

from .anchor import AnchorResolver
from .config import VizConfig
from .errors import AnchorExtractionFailed
from .extract import extract_sequences
from .graph import to_dot
from .receipt import Receipt, load_receipt
from .render import GraphvizRenderer
from .replay import LABEL_OP_RETURN, LABEL_TXID, HashChainReplayer
from .types import AnchorInfo, FullTrace, HashValue, TraceEntry

logger = logging.getLogger(__name__)

ReceiptSource = Union[Receipt, Dict[str, Any], str, bytes]


def compute_full_trace(source: ReceiptSource, config: Optional[VizConfig] = None) -> FullTrace:
    """
    Replay both branches of a receipt.

    The outer trace ends with two synthetic entries: OP_RETURN (only when
    the anchor branch yields one) and TXID, linked to the configured
    explorer.
    """
    config = config or VizConfig()
    receipt = load_receipt(source)
    outer_ops, inner_ops = extract_sequences(receipt)

    start = HashValue.from_hex(receipt.hash)
    outer = HashChainReplayer(config.chain_tag).replay(start, outer_ops)
    logger.debug("Outer branch: %d steps, terminal %s", len(outer.trace), outer.terminal.hex)

    anchor, inner = AnchorResolver(config.chain_tag).resolve_with_trace(outer.terminal.hex, inner_ops)

    annotated = list(outer.trace)
    if anchor.op_return is not None:
        annotated.append(TraceEntry(
            label=LABEL_OP_RETURN,
            value=HashValue.from_hex(anchor.op_return),
            digest=anchor.op_return,
            highlight=True,
        ))
    annotated.append(TraceEntry(
        label=LABEL_TXID,
        value=HashValue.from_hex(anchor.txid),
        digest=anchor.txid,
        highlight=True,
        href=config.txid_link(anchor.txid),
    ))

    return FullTrace(
        version=receipt.version,
        start=start,
        outer=tuple(annotated),
        inner=inner.trace,
        anchor=anchor,
        anchor_index=inner.anchor_index,
    )


def compute_anchor(source: ReceiptSource, config: Optional[VizConfig] = None) -> AnchorInfo:
    """OP_RETURN and TXID of a receipt."""
    config = config or VizConfig()
    receipt = load_receipt(source)
    outer_ops, inner_ops = extract_sequences(receipt)

    outer = HashChainReplayer(config.chain_tag).replay(HashValue.from_hex(receipt.hash), outer_ops)
    return AnchorResolver(config.chain_tag).resolve(outer.terminal.hex, inner_ops)


class ChainpointViz:
    """
    Works with v3 Chainpoint receipts and Graphviz to produce visual
    representations of the receipt's hash chain, in any image format
    Graphviz supports.

    Usage:
        viz = ChainpointViz(receipt_json, VizConfig(explorer='blockchain.com'))
        viz.btc_txid()
        viz.visualise()
    """

    def __init__(self, receipt: ReceiptSource, config: Optional[VizConfig] = None):
        self.receipt = load_receipt(receipt)
        self.config = config or VizConfig()

    def anchor_info(self) -> AnchorInfo:
        return compute_anchor(self.receipt, self.config)

    def full_trace(self) -> FullTrace:
        return compute_full_trace(self.receipt, self.config)

    def btc_txid(self) -> str:
        return self.anchor_info().txid

    def btc_op_return(self) -> str:
        """OP_RETURN value saved to the blockchain."""
        op_return = self.anchor_info().op_return
        if not op_return:
            raise AnchorExtractionFailed("Unable to obtain BTC OP_RETURN!")
        return op_return

    def to_dot(self) -> str:
        return to_dot(self.full_trace())

    def visualise(self, renderer=None) -> Path:
        """Render the receipt to config.filename; returns the output path."""
        renderer = renderer or GraphvizRenderer()
        return renderer.render(self.to_dot(), self.config.filename, self.config.format)

    # For our American friends
    visualize = visualise
