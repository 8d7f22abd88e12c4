"""Shared receipt fixtures."""

import pytest

from sample_receipts import BTC_OPS, CAL_OPS, build_receipt


@pytest.fixture
def receipt_doc():
    """A complete two-level v3 receipt document."""
    return build_receipt(CAL_OPS, BTC_OPS)


@pytest.fixture
def minimal_doc():
    """
    Smallest receipt with an OP_RETURN: one l-concat, one double hash and a
    btc anchor on the outer branch; four inner ops ending in a double hash.
    """
    return build_receipt(
        [{'l': 'ab'}, {'op': 'sha-256-x2'}, {'anchors': [{'type': 'btc'}]}],
        [{'r': 'cd'}, {'op': 'sha-256'}, {'l': 'ef'}, {'op': 'sha-256-x2'}],
        start_hash='aa',
    )
