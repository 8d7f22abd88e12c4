"""
Property-Based Testing with Hypothesis

Random operation sequences and byte strings exercise the codec and the
replay engine against the properties they must hold for every input.
"""

import hashlib

import pytest
from hypothesis import given, settings, strategies as st
from hypothesis.strategies import composite

from receiptviz.anchor import resolve
from receiptviz.codec import encode_hex, is_hex, operand_bytes, reverse_byte_order
from receiptviz.errors import AnchorExtractionFailed
from receiptviz.extract import decode_ops
from receiptviz.replay import replay
from receiptviz.tags import OP_RETURN_OFFSET
from receiptviz.types import HashValue

from sample_receipts import reference_states


# =============================================================================
# STRATEGIES
# =============================================================================

hex_digests = st.binary(max_size=64).map(encode_hex)

# Same digests with random letter case
mixed_case_digests = st.text(alphabet='0123456789abcdefABCDEF', max_size=128).filter(lambda s: len(s) % 2 == 0)

text_operands = st.text(min_size=1, max_size=40).filter(lambda s: not is_hex(s))


@composite
def op_records(draw, with_double=None):
    """Random single-key op records (no anchors)."""
    kind = draw(st.sampled_from(['r', 'l', 'sha-256', 'sha-256-x2']))
    if with_double is False and kind == 'sha-256-x2':
        kind = 'sha-256'
    if kind in ('r', 'l'):
        operand = draw(st.one_of(hex_digests, text_operands))
        return {kind: operand}
    return {'op': kind}


@composite
def op_sequences(draw, min_size=0, with_double=None):
    return draw(st.lists(op_records(with_double=with_double), min_size=min_size, max_size=20))


# =============================================================================
# PROPERTY: CODEC
# =============================================================================

class TestCodecProperties:

    @given(digest=st.one_of(st.binary(max_size=128).map(encode_hex), mixed_case_digests))
    def test_reverse_byte_order_self_inverse(self, digest):
        assert reverse_byte_order(reverse_byte_order(digest)) == digest

    @given(data=st.binary(max_size=128))
    def test_encode_hex_output_is_hex(self, data):
        assert is_hex(encode_hex(data))

    @given(prefix=hex_digests, bad=st.characters().filter(lambda c: c not in '0123456789abcdefABCDEF'))
    def test_non_hex_character(self, prefix, bad):
        assert not is_hex(prefix + bad + bad)

    @given(data=st.binary(max_size=64))
    def test_hex_operand_decodes(self, data):
        assert operand_bytes(encode_hex(data)) == data

    @given(text=text_operands)
    def test_text_operand_is_utf8(self, text):
        assert operand_bytes(text) == text.encode('utf-8')


# =============================================================================
# PROPERTY: REPLAY
# =============================================================================

class TestReplayProperties:

    @given(seed=st.binary(min_size=1, max_size=32), records=op_sequences())
    @settings(max_examples=200)
    def test_matches_reference(self, seed, records):
        result = replay(HashValue(seed), decode_ops(records))
        assert [e.value.hex for e in result.trace] == reference_states(seed.hex(), records)

    @given(seed=st.binary(min_size=1, max_size=32), records=op_sequences())
    @settings(max_examples=200)
    def test_deterministic(self, seed, records):
        ops = decode_ops(records)
        assert replay(HashValue(seed), ops) == replay(HashValue(seed), ops)

    @given(seed=st.binary(min_size=1, max_size=32), records=op_sequences())
    @settings(max_examples=200)
    def test_anchor_index_is_first_double_hash(self, seed, records):
        result = replay(HashValue(seed), decode_ops(records))
        doubles = [i for i, r in enumerate(records) if r == {'op': 'sha-256-x2'}]
        assert result.anchor_index == (doubles[0] if doubles else None)

    @given(seed=st.binary(min_size=1, max_size=32), records=op_sequences())
    def test_one_entry_per_operation(self, seed, records):
        result = replay(HashValue(seed), decode_ops(records))
        assert len(result.trace) == len(records)


# =============================================================================
# PROPERTY: ANCHOR RESOLUTION
# =============================================================================

class TestAnchorProperties:

    @given(seed=st.binary(min_size=32, max_size=32), records=op_sequences(with_double=False))
    def test_no_double_hash_fails(self, seed, records):
        with pytest.raises(AnchorExtractionFailed):
            resolve(seed.hex(), decode_ops(records))

    @given(
        seed=st.binary(min_size=32, max_size=32),
        before=op_sequences(with_double=False),
        after=op_sequences(),
    )
    @settings(max_examples=200)
    def test_offsets(self, seed, before, after):
        records = before + [{'op': 'sha-256-x2'}] + after
        states = reference_states(seed.hex(), records)
        k = len(before)

        info = resolve(seed.hex(), decode_ops(records))

        assert info.txid == reverse_byte_order(states[k])
        if k < OP_RETURN_OFFSET:
            assert info.op_return is None
        else:
            assert info.op_return == states[k - OP_RETURN_OFFSET]

    @given(seed=st.binary(min_size=32, max_size=32))
    def test_txid_is_reversed_double_sha(self, seed):
        info = resolve(seed.hex(), decode_ops([{'op': 'sha-256-x2'}]))
        expected = hashlib.sha256(hashlib.sha256(seed).digest()).digest()[::-1].hex()
        assert info.txid == expected
