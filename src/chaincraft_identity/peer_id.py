"""
PeerId derivation from public keys.

A peer is named on the network by a libp2p PeerId, computed from its public
key alone:

    1. Encode the public key as a libp2p-crypto protobuf
    2. If the encoding is <= 42 bytes: PeerId = multihash(identity, encoded)
    3. Otherwise:                      PeerId = multihash(sha256, encoded)
    4. Display as Base58

Protobuf wire format (from crypto.proto):
    message PublicKey {
        required KeyType Type = 1;  // Field 1, varint
        required bytes Data = 2;    // Field 2, length-delimited
    }

An Ed25519 public key is 32 bytes, so its encoding is 36 bytes:

    [0x08][0x01][0x12][0x20][32 key bytes]

which is small enough for the identity multihash. The resulting 38-byte
multihash always starts with 00 24 08 01 12 20, and its Base58 form always
starts with "12D3KooW".

References:
    - https://github.com/libp2p/specs/blob/master/peer-ids/peer-ids.md
    - https://github.com/multiformats/multihash
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import IntEnum
from typing import Final

from .varint import encode_varint

__all__ = [
    "Base58",
    "KeyType",
    "Multihash",
    "MultihashCode",
    "PeerId",
    "ProtobufTag",
    "PublicKeyProto",
    "derive_peer_id",
]


class KeyType(IntEnum):
    """libp2p-crypto key type codes (crypto.proto KeyType enum)."""

    RSA = 0
    ED25519 = 1
    SECP256K1 = 2
    ECDSA = 3


class MultihashCode(IntEnum):
    """
    Multihash function codes.

    Multihash is a self-describing hash format: [code][length][digest].
    """

    IDENTITY = 0x00
    """No hashing; the digest is the data itself."""

    SHA256 = 0x12
    """SHA-256 (32-byte digest)."""


class ProtobufTag(IntEnum):
    """
    Field tags shared by the PublicKey and PrivateKey messages.

    Tag format: (field_number << 3) | wire_type
    """

    TYPE = 0x08
    """Field 1, varint."""

    DATA = 0x12
    """Field 2, length-delimited."""


class Base58:
    """
    Base58 encoding/decoding (Bitcoin alphabet).

    The alphabet leaves out 0, O, I and l so PeerIds can be read aloud and
    copied by hand.
    """

    ALPHABET: Final[str] = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

    @classmethod
    def encode(cls, data: bytes) -> str:
        """
        Encode bytes as a Base58 string.

        Each leading zero byte becomes a leading '1'.
        """
        stripped = data.lstrip(b"\x00")
        leading_zeros = len(data) - len(stripped)

        num = int.from_bytes(stripped, "big")
        digits: list[str] = []
        while num > 0:
            num, remainder = divmod(num, 58)
            digits.append(cls.ALPHABET[remainder])

        return cls.ALPHABET[0] * leading_zeros + "".join(reversed(digits))

    @classmethod
    def decode(cls, s: str) -> bytes:
        """
        Decode a Base58 string.

        Raises:
            ValueError: If the string contains a character outside the alphabet.
        """
        num = 0
        for char in s:
            index = cls.ALPHABET.find(char)
            if index < 0:
                raise ValueError(f"Invalid Base58 character: {char!r}")
            num = num * 58 + index

        leading_ones = len(s) - len(s.lstrip(cls.ALPHABET[0]))
        body = num.to_bytes((num.bit_length() + 7) // 8, "big") if num else b""
        return b"\x00" * leading_ones + body


IDENTITY_THRESHOLD: Final = 42
"""Largest encoded public key that is embedded instead of hashed."""


@dataclass(frozen=True, slots=True)
class Multihash:
    """
    A self-describing hash: [code varint][length varint][digest].

    Attributes:
        code: Hash function identifier.
        digest: Hash output, or the raw data for the identity code.
    """

    code: MultihashCode
    digest: bytes

    def encode(self) -> bytes:
        """Return the multihash bytes."""
        return encode_varint(self.code) + encode_varint(len(self.digest)) + self.digest

    @classmethod
    def identity(cls, data: bytes) -> Multihash:
        """Wrap data without hashing."""
        return cls(code=MultihashCode.IDENTITY, digest=data)

    @classmethod
    def sha256(cls, data: bytes) -> Multihash:
        """Hash data with SHA-256."""
        return cls(code=MultihashCode.SHA256, digest=hashlib.sha256(data).digest())

    @classmethod
    def from_data(cls, data: bytes) -> Multihash:
        """
        Pick the hash function the way libp2p does for PeerIds.

        Data up to 42 bytes is inlined with the identity code, anything
        larger is hashed with SHA-256.
        """
        if len(data) <= IDENTITY_THRESHOLD:
            return cls.identity(data)
        return cls.sha256(data)


@dataclass(frozen=True, slots=True)
class PublicKeyProto:
    """
    A public key in libp2p-crypto protobuf form.

    Attributes:
        key_type: Key algorithm.
        key_data: Raw public key bytes (format depends on key_type).
    """

    key_type: KeyType
    key_data: bytes

    def encode(self) -> bytes:
        """
        Encode deterministically: minimal varints, fields in tag order.

        Returns:
            [0x08][type varint][0x12][length varint][key bytes]
        """
        return (
            bytes([ProtobufTag.TYPE])
            + encode_varint(self.key_type)
            + bytes([ProtobufTag.DATA])
            + encode_varint(len(self.key_data))
            + self.key_data
        )


@dataclass(frozen=True, slots=True)
class PeerId:
    """
    A libp2p peer identifier.

    Attributes:
        multihash: Raw multihash bytes (before Base58 encoding).
    """

    multihash: bytes

    def __str__(self) -> str:
        return Base58.encode(self.multihash)

    def __repr__(self) -> str:
        return f"PeerId({self!s})"

    def to_base58(self) -> str:
        """Return the Base58 string form."""
        return Base58.encode(self.multihash)

    def to_bytes(self) -> bytes:
        """Return the raw multihash bytes."""
        return self.multihash

    @classmethod
    def from_base58(cls, s: str) -> PeerId:
        """
        Parse a Base58-encoded PeerId.

        Raises:
            ValueError: If the string is not valid Base58.
        """
        return cls(multihash=Base58.decode(s))

    @classmethod
    def from_public_key(cls, public_key: PublicKeyProto) -> PeerId:
        """Derive a PeerId from a protobuf public key."""
        return cls(multihash=Multihash.from_data(public_key.encode()).encode())

    @classmethod
    def derive(cls, key_data: bytes, key_type: KeyType) -> PeerId:
        """Derive a PeerId from raw public key bytes of the given type."""
        return cls.from_public_key(PublicKeyProto(key_type=key_type, key_data=key_data))


def derive_peer_id(public_key_bytes: bytes) -> PeerId:
    """
    Derive the PeerId of an Ed25519 public key.

    Args:
        public_key_bytes: 32-byte raw Ed25519 public key.

    Returns:
        PeerId whose Base58 form starts with "12D3KooW".

    Raises:
        ValueError: If the key is not 32 bytes.
    """
    if len(public_key_bytes) != 32:
        raise ValueError(f"Ed25519 public key must be 32 bytes, got {len(public_key_bytes)}")
    return PeerId.derive(public_key_bytes, KeyType.ED25519)
