"""
Chainpoint Receipt Model

A receipt is a JSON-LD document:

    {
      "@context": "https://w3id.org/chainpoint/v3",
      "type": "Chainpoint",
      "hash": "<hex>",
      "proof_id": "...",
      "branches": [
        {"label": "cal_anchor_branch",
         "ops": [{"l": "..."}, {"op": "sha-256"}, ..., {"anchors": [...]}],
         "branches": [
           {"label": "btc_anchor_branch",
            "ops": [{"r": "..."}, ..., {"op": "sha-256-x2"}, ..., {"anchors": [...]}]}
         ]}
      ]
    }

Parsing validates the fields the replay depends on; the branch structure is
copied and kept raw for the extractor, so later edits to the source document
do not reach a parsed Receipt.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union
import copy
import json
import re

from .codec import decode_hex
from .errors import MalformedInput, MissingField, UnsupportedVersion
from .tags import SUPPORTED_VERSION


_NON_DIGITS = re.compile(r'[^\d]+')

# Metadata carried through without interpretation
METADATA_FIELDS = (
    'type',
    'proof_id',
    'hash_id_node',
    'hash_submitted_node_at',
    'hash_id_core',
    'hash_submitted_core_at',
)


def parse_version(context: str) -> int:
    """
    Integer version from a versioned context identifier.

    'https://w3id.org/chainpoint/v3' -> 3 (digits of the fifth '/' component)
    """
    parts = context.split('/')
    if len(parts) < 5:
        raise UnsupportedVersion(f"Cannot determine receipt version from {context!r}")
    digits = _NON_DIGITS.sub('', parts[4])
    if not digits:
        raise UnsupportedVersion(f"Cannot determine receipt version from {context!r}")
    return int(digits)


@dataclass(frozen=True)
class Receipt:
    """A parsed, version-checked v3 receipt."""
    hash: str
    version: int
    context: str
    branches: List[Dict[str, Any]] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_json(cls, text: Union[str, bytes]) -> 'Receipt':
        try:
            document = json.loads(text)
        except ValueError as e:
            raise MalformedInput(f"Receipt is not valid JSON: {e}") from e
        return cls.from_dict(document)

    @classmethod
    def from_dict(cls, document: Any) -> 'Receipt':
        """
        Validate and wrap a decoded receipt document.

        Raises:
            MalformedInput: not a JSON object, or 'hash' is not hex
            MissingField: 'hash' or '@context' absent
            UnsupportedVersion: version is not 3
        """
        if not isinstance(document, dict):
            raise MalformedInput("Receipt must be a JSON object")

        initial = document.get('hash')
        if not initial:
            raise MissingField('hash')
        decode_hex(initial)

        context = document.get('@context')
        if not context or not isinstance(context, str):
            raise MissingField('@context')

        version = parse_version(context)
        if version != SUPPORTED_VERSION:
            raise UnsupportedVersion(
                f"Invalid receipt! Only v{SUPPORTED_VERSION} receipts are currently "
                f"supported, got v{version}."
            )

        branches = document.get('branches')
        return cls(
            hash=initial,
            version=version,
            context=context,
            branches=copy.deepcopy(branches) if isinstance(branches, list) else [],
            metadata={k: copy.deepcopy(document[k]) for k in METADATA_FIELDS if k in document},
        )

    @property
    def proof_id(self) -> Optional[str]:
        return self.metadata.get('proof_id')


def load_receipt(source: Union['Receipt', Dict[str, Any], str, bytes]) -> Receipt:
    """Accept a Receipt, a decoded document, or JSON text."""
    if isinstance(source, Receipt):
        return source
    if isinstance(source, dict):
        return Receipt.from_dict(source)
    if isinstance(source, (str, bytes)):
        return Receipt.from_json(source)
    raise MalformedInput(f"Cannot load a receipt from {type(source).__name__}")
