"""
Operation Sequence Extraction

A v3 receipt nests exactly two levels of branches:

    branches[0].ops                  calendar ops, ending in a 'cal' anchor
    branches[0].branches[0].ops      anchor-chain ops, ending in a 'btc' anchor

Both lists are decoded into Operation objects once, here.
"""

from typing import Any, Dict, List, Tuple

from .errors import MalformedInput, MissingBranches, UnsupportedVersion
from .receipt import Receipt
from .types import Operation


OpSequence = Tuple[Operation, ...]


def decode_ops(records: Any) -> OpSequence:
    """Decode an 'ops' list."""
    if not isinstance(records, list):
        raise MalformedInput(f"'ops' must be a list, got {type(records).__name__}")
    return tuple(Operation.from_record(r) for r in records)


def _first_branch(branches: Any, where: str) -> Dict[str, Any]:
    if not isinstance(branches, list) or not branches or not branches[0]:
        raise MissingBranches(f"Invalid receipt! Sub branches not found in {where}.")
    branch = branches[0]
    if not isinstance(branch, dict):
        raise MalformedInput(f"Branch in {where} must be an object")
    return branch


def extract_sequences(receipt: Receipt) -> Tuple[OpSequence, OpSequence]:
    """
    Flatten a receipt into its (outer, inner) operation sequences.

    The inner sequence is empty when the top branch has no sub-branch.

    Raises:
        MissingBranches: no top-level branch
        UnsupportedVersion: branches nest deeper than two levels
        MalformedInput: an 'ops' list or record is malformed
    """
    top = _first_branch(receipt.branches, 'receipt')
    outer = decode_ops(top.get('ops', []))

    sub_branches = top.get('branches')
    if not sub_branches:
        return outer, ()

    sub = _first_branch(sub_branches, 'top branch')
    if sub.get('branches'):
        raise UnsupportedVersion("Branches nested deeper than two levels are not part of v3 receipts")

    return outer, decode_ops(sub.get('ops', []))
