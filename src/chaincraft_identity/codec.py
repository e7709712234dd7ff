"""
Key record encoding.

The key file holds the private key as two stacked transforms:

    keypair  <->  protobuf PrivateKey bytes  <->  base64 text

Each stage is a pure function pair, usable and testable on its own.

Protobuf wire format (from crypto.proto):
    message PrivateKey {
        required KeyType Type = 1;  // Field 1, varint
        required bytes Data = 2;    // Field 2, length-delimited
    }

For Ed25519 the Data field is 64 bytes, the secret seed followed by the
public key, so a record is always 68 bytes:

    [0x08][0x01][0x12][0x40][32-byte secret][32-byte public]

and its base64 text always starts with "CAESQ". This matches what other
libp2p implementations write, so key files are interchangeable with them.

References:
    - https://github.com/libp2p/specs/blob/master/peer-ids/peer-ids.md#keys
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

from .exceptions import KeyDecodeError
from .keypair import IdentityKeypair
from .peer_id import KeyType, ProtobufTag
from .varint import VarintError, decode_varint, encode_varint

__all__ = [
    "PrivateKeyProto",
    "decode_private_key",
    "decode_text",
    "encode_private_key",
    "encode_text",
]


@dataclass(frozen=True, slots=True)
class PrivateKeyProto:
    """
    A private key in libp2p-crypto protobuf form.

    Attributes:
        key_type: Key algorithm.
        key_data: Algorithm-specific private key bytes.
    """

    key_type: KeyType
    key_data: bytes

    def encode(self) -> bytes:
        """Encode with fields in tag order and minimal varints."""
        return (
            bytes([ProtobufTag.TYPE])
            + encode_varint(self.key_type)
            + bytes([ProtobufTag.DATA])
            + encode_varint(len(self.key_data))
            + self.key_data
        )

    @classmethod
    def decode(cls, data: bytes) -> PrivateKeyProto:
        """
        Parse a PrivateKey message.

        Both fields are required and may appear at most once. Unknown fields
        are rejected: a key record has nothing else in it.

        Raises:
            KeyDecodeError: If the message is malformed.
        """
        key_type: KeyType | None = None
        key_data: bytes | None = None
        pos = 0

        try:
            while pos < len(data):
                tag = data[pos]
                pos += 1

                if tag == ProtobufTag.TYPE:
                    if key_type is not None:
                        raise KeyDecodeError("protobuf", "duplicate Type field")
                    value, consumed = decode_varint(data, pos)
                    pos += consumed
                    try:
                        key_type = KeyType(value)
                    except ValueError:
                        raise KeyDecodeError("protobuf", f"unknown key type {value}") from None

                elif tag == ProtobufTag.DATA:
                    if key_data is not None:
                        raise KeyDecodeError("protobuf", "duplicate Data field")
                    length, consumed = decode_varint(data, pos)
                    pos += consumed
                    if pos + length > len(data):
                        raise KeyDecodeError(
                            "protobuf",
                            f"Data field needs {length} bytes, {len(data) - pos} left",
                        )
                    key_data = data[pos : pos + length]
                    pos += length

                else:
                    raise KeyDecodeError(
                        "protobuf", f"unexpected tag 0x{tag:02x} at offset {pos - 1}"
                    )
        except VarintError as e:
            raise KeyDecodeError("protobuf", str(e)) from e

        if key_type is None:
            raise KeyDecodeError("protobuf", "missing Type field")
        if key_data is None:
            raise KeyDecodeError("protobuf", "missing Data field")

        return cls(key_type=key_type, key_data=key_data)


def encode_private_key(keypair: IdentityKeypair) -> bytes:
    """
    Serialize a keypair as a protobuf PrivateKey message.

    Args:
        keypair: Identity keypair.

    Returns:
        68-byte protobuf encoding.
    """
    return PrivateKeyProto(key_type=KeyType.ED25519, key_data=keypair.to_bytes()).encode()


def decode_private_key(data: bytes) -> IdentityKeypair:
    """
    Rebuild a keypair from a protobuf PrivateKey message.

    Args:
        data: Protobuf bytes as produced by encode_private_key.

    Returns:
        The full keypair.

    Raises:
        KeyDecodeError: If the message is malformed, holds a key type other
            than Ed25519, or holds inconsistent key halves.
    """
    proto = PrivateKeyProto.decode(data)
    if proto.key_type != KeyType.ED25519:
        raise KeyDecodeError("protobuf", f"unsupported key type {proto.key_type.name}")

    try:
        return IdentityKeypair.from_bytes(proto.key_data)
    except ValueError as e:
        raise KeyDecodeError("protobuf", str(e)) from e


def encode_text(data: bytes) -> str:
    """Encode bytes as standard base64 with padding."""
    return base64.b64encode(data).decode("ascii")


def decode_text(text: str) -> bytes:
    """
    Decode standard base64 text.

    Surrounding whitespace (a trailing newline left by an editor) is
    ignored; anything else outside the alphabet is an error.

    Raises:
        KeyDecodeError: If the text is not valid padded base64.
    """
    try:
        return base64.b64decode(text.strip(), validate=True)
    except (binascii.Error, ValueError) as e:
        raise KeyDecodeError("base64", str(e)) from e
