"""
Operation Tags for v3 Chainpoint Receipts

Every entry of an 'ops' list is a single-key mapping; the key selects the
operation kind.
"""

from enum import Enum


class OpTag(str, Enum):
    """Keys of the single-key operation records."""

    CONCAT_RIGHT = 'r'     # Append operand on the right
    CONCAT_LEFT = 'l'      # Prepend operand on the left
    HASH = 'op'            # Hash the running value
    ANCHORS = 'anchors'    # Terminal anchor descriptors


class HashAlgorithm(str, Enum):
    """Values accepted by an 'op' record."""

    SHA256 = 'sha-256'
    SHA256_X2 = 'sha-256-x2'


# Anchor descriptor types used by Chainpoint nodes
CALENDAR_TAG = 'cal'
BITCOIN_TAG = 'btc'
BITCOIN_TESTNET_TAG = 'tbtc'

# Receipt schema version this engine replays
SUPPORTED_VERSION = 3

# Distance (in anchor-branch steps) from the first double hash back to the
# step holding the OP_RETURN commitment
OP_RETURN_OFFSET = 3
