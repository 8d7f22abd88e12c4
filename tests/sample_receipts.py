"""Sample v3 receipts shared by the tests."""

import copy
import hashlib
import string


CONTEXT_V3 = 'https://w3id.org/chainpoint/v3'

START_HASH = 'bdf8c9bdf076d6aff0292a1c9448691d2ae283f2ce41b045355e2c8cb8e85ef2'

# Calendar branch: node/core ids are free text, the rest is hex
CAL_OPS = [
    {'l': 'node_id:52eb8d80-3125-11e8-9c84-01f8e5a9b4b1'},
    {'op': 'sha-256'},
    {'l': 'core_id:53bbb5d0-3125-11e8-8d29-01c68e3ca4ce'},
    {'op': 'sha-256'},
    {'l': 'c0a1ff3e4f0e1d2a3b4c5d6e7f8091a2b3c4d5e6f708192a3b4c5d6e7f8091a2'},
    {'op': 'sha-256'},
    {'anchors': [{'type': 'cal', 'anchor_id': '1024', 'uris': ['https://a.chainpoint.org/calendar/1024/hash']}]},
]

# Anchor branch: two aggregation steps, the transaction halves, the tx hash,
# then a Merkle path to the block root
BTC_OPS = [
    {'r': '8f2ab0c1d2e3f405162738495a6b7c8d9eafb0c1d2e3f405162738495a6b7c8d'},
    {'op': 'sha-256'},
    {'l': '1e2d3c4b5a69788796a5b4c3d2e1f00f1e2d3c4b5a69788796a5b4c3d2e1f00f'},
    {'op': 'sha-256'},
    {'l': '01000000010000000000000000000000000000000000000000000000000000000000000000ffffffff0000000000016a20'},
    {'r': '00000000'},
    {'op': 'sha-256-x2'},
    {'l': 'aa11bb22cc33dd44ee55ff6600770088aa11bb22cc33dd44ee55ff6600770088'},
    {'op': 'sha-256-x2'},
    {'r': '99887766554433221100ffeeddccbbaa99887766554433221100ffeeddccbbaa'},
    {'op': 'sha-256-x2'},
    {'anchors': [{'type': 'btc', 'anchor_id': '514215', 'uris': ['https://a.chainpoint.org/calendar/1025/data']}]},
]

# Index of the first sha-256-x2 in BTC_OPS
BTC_ANCHOR_INDEX = 6


def build_receipt(outer_ops, inner_ops=None, start_hash=START_HASH, context=CONTEXT_V3):
    branch = {'label': 'cal_anchor_branch', 'ops': copy.deepcopy(outer_ops)}
    if inner_ops is not None:
        branch['branches'] = [{'label': 'btc_anchor_branch', 'ops': copy.deepcopy(inner_ops)}]
    return {
        '@context': context,
        'type': 'Chainpoint',
        'hash': start_hash,
        'proof_id': '5e0433d0-46da-11ea-a79e-017f19452571',
        'hash_received': '2020-02-03T23:10:28Z',
        'branches': [branch],
    }




def reference_states(start_hex, records):
    """
    Independent replay of raw op records with hashlib, one hex state per
    concat/hash record (anchors skipped).
    """
    value = bytes.fromhex(start_hex)
    states = []
    for record in records:
        (key, operand), = record.items()
        if key in ('l', 'r'):
            if len(operand) % 2 == 0 and all(c in string.hexdigits for c in operand):
                data = bytes.fromhex(operand)
            else:
                data = operand.encode('utf-8')
            value = value + data if key == 'r' else data + value
        elif key == 'op':
            value = hashlib.sha256(value).digest()
            if operand == 'sha-256-x2':
                value = hashlib.sha256(value).digest()
        else:
            continue
        states.append(value.hex())
    return states
