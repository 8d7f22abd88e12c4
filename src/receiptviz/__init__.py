"""
receiptviz: Chainpoint Receipt Replay and Visualisation

Replays the hash operations of a v3 Chainpoint receipt, derives the
OP_RETURN value and TXID anchoring it to Bitcoin, and projects the
reconstructed chain into a Graphviz graph.

Usage:
    from receiptviz import compute_anchor

    info = compute_anchor(open('receipt.json').read())
    info.txid
    info.op_return

    # Render an image (requires Graphviz)
    from receiptviz import ChainpointViz, VizConfig
    ChainpointViz(receipt, VizConfig(filename='proof.svg', explorer='blockchain.com')).visualise()
"""

# Errors
from .errors import (
    ReceiptError,
    MalformedInput,
    MissingField,
    MissingBranches,
    UnsupportedVersion,
    UnsupportedOperation,
    AnchorExtractionFailed,
    RendererError,
    RendererUnavailable,
    RendererFailed,
)

# Codec
from .codec import (
    decode_hex,
    encode_hex,
    is_hex,
    reverse_byte_order,
    operand_bytes,
)

# Data model
from .tags import OpTag, HashAlgorithm, OP_RETURN_OFFSET
from .types import (
    HashValue,
    Operation,
    ConcatRight,
    ConcatLeft,
    Hash,
    AnchorMarker,
    AnchorDescriptor,
    TraceEntry,
    ReplayResult,
    AnchorInfo,
    FullTrace,
)
from .receipt import Receipt, load_receipt, parse_version
from .extract import extract_sequences, decode_ops

# Replay
from .replay import HashChainReplayer, replay
from .anchor import AnchorResolver, resolve

# Orchestration
from .config import VizConfig
from .chainpoint import ChainpointViz, compute_anchor, compute_full_trace

# Rendering
from .graph import to_dot
from .render import GraphvizRenderer

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Errors
    "ReceiptError",
    "MalformedInput",
    "MissingField",
    "MissingBranches",
    "UnsupportedVersion",
    "UnsupportedOperation",
    "AnchorExtractionFailed",
    "RendererError",
    "RendererUnavailable",
    "RendererFailed",
    # Codec
    "decode_hex",
    "encode_hex",
    "is_hex",
    "reverse_byte_order",
    "operand_bytes",
    # Data model
    "OpTag",
    "HashAlgorithm",
    "OP_RETURN_OFFSET",
    "HashValue",
    "Operation",
    "ConcatRight",
    "ConcatLeft",
    "Hash",
    "AnchorMarker",
    "AnchorDescriptor",
    "TraceEntry",
    "ReplayResult",
    "AnchorInfo",
    "FullTrace",
    "Receipt",
    "load_receipt",
    "parse_version",
    "extract_sequences",
    "decode_ops",
    # Replay
    "HashChainReplayer",
    "replay",
    "AnchorResolver",
    "resolve",
    # Orchestration
    "VizConfig",
    "ChainpointViz",
    "compute_anchor",
    "compute_full_trace",
    # Rendering
    "to_dot",
    "GraphvizRenderer",
]
