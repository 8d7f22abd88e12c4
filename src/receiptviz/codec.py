"""
Byte Codec

Hex and UTF-8 conversions shared by the receipt parser and the replayer.

Chainpoint operands are either hex strings or free text; a value is read
as hex if and only if it looks like hex (even length, hex digits only).
Digests are shown in the chain's display order, which for Bitcoin is the
byte-reversed form of the internal hash.
"""

import hashlib
import string

from .errors import MalformedInput


_HEX_DIGITS = frozenset(string.hexdigits)


def is_hex(value: str) -> bool:
    """True iff value has even length and consists only of hex digits."""
    return len(value) % 2 == 0 and all(ch in _HEX_DIGITS for ch in value)


def decode_hex(value: str) -> bytes:
    """Decode a hex string, raising MalformedInput on bad input."""
    if not isinstance(value, str):
        raise MalformedInput(f"Expected a hex string, got {type(value).__name__}")
    if len(value) % 2:
        raise MalformedInput(f"Odd-length hex string: {value!r}")
    if not is_hex(value):
        raise MalformedInput(f"Non-hex characters in {value!r}")
    return bytes.fromhex(value)


def encode_hex(data: bytes) -> str:
    """Lowercase hex encoding."""
    return data.hex()


def reverse_byte_order(digest: str) -> str:
    """
    Flip a hex digest between big- and little-endian byte order.

    Works on the digit pairs, so the input's letter case is kept and
    applying it twice returns the original string.
    """
    decode_hex(digest)
    pairs = [digest[i:i + 2] for i in range(0, len(digest), 2)]
    return ''.join(reversed(pairs))


def operand_bytes(value: str) -> bytes:
    """Bytes of a concat operand: hex-decoded if it is hex, UTF-8 otherwise."""
    if not isinstance(value, str):
        raise MalformedInput(f"Concat operand must be a string, got {type(value).__name__}")
    if is_hex(value):
        return bytes.fromhex(value)
    try:
        return value.encode('utf-8')
    except UnicodeEncodeError as e:
        raise MalformedInput(f"Concat operand is not encodable as UTF-8: {value!r}") from e


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def sha256d(data: bytes) -> bytes:
    """SHA-256 applied twice (Bitcoin's hash256)."""
    return sha256(sha256(data))
