"""
Unsigned LEB128 varints, as used by the protobuf wire format.

Key records and public keys are small protobuf messages. Their field tags,
key type codes and byte-string lengths are all varints: 7 data bits per byte,
low-order group first, with the MSB set on every byte except the last.

    Value 0-127:       1 byte   [0xxxxxxx]
    Value 128-16383:   2 bytes  [1xxxxxxx] [0xxxxxxx]

Example: 64 (the length of an Ed25519 private key blob) is the single byte
0x40, and 300 is [0xAC, 0x02].

Only unsigned values are handled. Decoding stops after 10 bytes, the most a
64-bit value can need, so malformed input cannot loop forever.

References:
    https://protobuf.dev/programming-guides/encoding/#varints
"""

from __future__ import annotations

from typing import Final

_MAX_VARINT_BYTES: Final = 10
"""Upper bound on the encoded size of a 64-bit value."""


class VarintError(ValueError):
    """Raised when a varint cannot be decoded."""


def encode_varint(value: int) -> bytes:
    """
    Encode a non-negative integer as an unsigned LEB128 varint.

    Args:
        value: Integer to encode.

    Returns:
        The encoded bytes, one to ten of them.

    Raises:
        ValueError: If value is negative.
    """
    if value < 0:
        raise ValueError("Varint must be non-negative")

    out = bytearray()
    while value >= 0x80:
        out.append((value & 0x7F) | 0x80)
        value >>= 7
    out.append(value)
    return bytes(out)


def decode_varint(data: bytes, offset: int = 0) -> tuple[int, int]:
    """
    Decode a varint starting at ``offset``.

    Args:
        data: Buffer containing the varint.
        offset: Position of the first varint byte.

    Returns:
        Tuple of (value, bytes_consumed).

    Raises:
        VarintError: If the buffer ends mid-varint or the varint is longer
            than ten bytes.
    """
    value = 0
    for i in range(_MAX_VARINT_BYTES):
        pos = offset + i
        if pos >= len(data):
            raise VarintError("Truncated varint")

        byte = data[pos]
        value |= (byte & 0x7F) << (7 * i)

        # MSB clear marks the final byte.
        if not byte & 0x80:
            return value, i + 1

    raise VarintError("Varint too long")
