"""
Data Model for Receipt Replay

HashValue   raw bytes of the running hash, with its hex digest
Operation   one decoded entry of an 'ops' list (tagged union)
TraceEntry  one recorded state of a replay run
AnchorInfo  the OP_RETURN / TXID pair derived from the anchor branch
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .codec import decode_hex, encode_hex, operand_bytes
from .errors import MalformedInput, UnsupportedOperation
from .tags import OpTag, HashAlgorithm


# =============================================================================
# HASH VALUES
# =============================================================================

@dataclass(frozen=True)
class HashValue:
    """
    The running value of a replay.

    Frozen, so every operation produces a new instance and trace entries
    stay valid snapshots.
    """
    raw: bytes

    @property
    def hex(self) -> str:
        return encode_hex(self.raw)

    @classmethod
    def from_hex(cls, digest: str) -> 'HashValue':
        return cls(decode_hex(digest))

    def __len__(self) -> int:
        return len(self.raw)

    def __str__(self) -> str:
        return self.hex


# =============================================================================
# OPERATIONS
# =============================================================================

class Operation:
    """Base class of the operation variants."""

    tag: OpTag

    @staticmethod
    def from_record(record: Any) -> 'Operation':
        """
        Decode a single-key record such as {"r": "..."} or {"op": "sha-256"}.

        Raises:
            MalformedInput: record is not a single-key mapping, or has an
                unknown key or an operand of the wrong type
            UnsupportedOperation: 'op' value is not a known hash algorithm
        """
        if not isinstance(record, dict) or len(record) != 1:
            raise MalformedInput(f"Operation must be a single-key mapping, got {record!r}")

        (key, value), = record.items()
        try:
            tag = OpTag(key)
        except ValueError:
            raise MalformedInput(f"Unknown operation key: {key!r}") from None

        if tag is OpTag.CONCAT_RIGHT:
            return ConcatRight(operand_bytes(value), str(value))
        if tag is OpTag.CONCAT_LEFT:
            return ConcatLeft(operand_bytes(value), str(value))
        if tag is OpTag.HASH:
            if not isinstance(value, str):
                raise MalformedInput(f"'op' value must be a string, got {value!r}")
            try:
                return Hash(HashAlgorithm(value))
            except ValueError:
                raise UnsupportedOperation(value) from None

        if not isinstance(value, list):
            raise MalformedInput(f"'anchors' must be a list, got {value!r}")
        return AnchorMarker(tuple(AnchorDescriptor.from_dict(a) for a in value))


@dataclass(frozen=True)
class ConcatRight(Operation):
    """current <- current ++ operand"""
    operand: bytes
    source: str = field(default='', compare=False)
    tag = OpTag.CONCAT_RIGHT


@dataclass(frozen=True)
class ConcatLeft(Operation):
    """current <- operand ++ current"""
    operand: bytes
    source: str = field(default='', compare=False)
    tag = OpTag.CONCAT_LEFT


@dataclass(frozen=True)
class Hash(Operation):
    """current <- H(current), or H(H(current)) for the double hash"""
    algorithm: HashAlgorithm
    tag = OpTag.HASH

    @property
    def is_double(self) -> bool:
        return self.algorithm is HashAlgorithm.SHA256_X2


@dataclass(frozen=True)
class AnchorDescriptor:
    """One entry of an 'anchors' list."""
    type: str
    anchor_id: Optional[str] = None
    uris: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> 'AnchorDescriptor':
        if not isinstance(data, dict) or not isinstance(data.get('type'), str):
            raise MalformedInput(f"Anchor descriptor needs a 'type', got {data!r}")
        uris = data.get('uris', [])
        if not isinstance(uris, list) or not all(isinstance(u, str) for u in uris):
            raise MalformedInput(f"Anchor 'uris' must be a list of strings, got {uris!r}")
        anchor_id = data.get('anchor_id')
        return cls(
            type=data['type'],
            anchor_id=str(anchor_id) if anchor_id is not None else None,
            uris=tuple(uris),
        )


@dataclass(frozen=True)
class AnchorMarker(Operation):
    """Terminal anchor declaration of an ops list."""
    anchors: Tuple[AnchorDescriptor, ...]
    tag = OpTag.ANCHORS

    def matches(self, chain_tag: str) -> bool:
        return any(a.type == chain_tag for a in self.anchors)


# =============================================================================
# REPLAY OUTPUT
# =============================================================================

@dataclass(frozen=True)
class TraceEntry:
    """
    One recorded state.

    digest is what gets displayed; it equals value.hex except for the
    Merkle Root entry, which shows the byte-reversed digest.
    """
    label: str
    value: HashValue
    digest: str
    highlight: bool = False
    href: Optional[str] = None

    @classmethod
    def of(cls, label: str, value: HashValue) -> 'TraceEntry':
        return cls(label=label, value=value, digest=value.hex)


ReplayTrace = List[TraceEntry]


@dataclass(frozen=True)
class ReplayResult:
    """Outcome of one replay run."""
    trace: Tuple[TraceEntry, ...]
    terminal: HashValue
    anchor_index: Optional[int] = None


@dataclass(frozen=True)
class AnchorInfo:
    """Values anchoring a receipt to the blockchain."""
    txid: str
    op_return: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {'op_return': self.op_return, 'txid': self.txid}


@dataclass(frozen=True)
class FullTrace:
    """Everything the rendering side needs from one receipt."""
    version: int
    start: HashValue
    outer: Tuple[TraceEntry, ...]
    inner: Tuple[TraceEntry, ...]
    anchor: AnchorInfo
    anchor_index: int = field(default=0)
