"""
Ed25519 identity keypair.

The peer identity is an Ed25519 signing key. Its public half is encoded as a
libp2p-crypto protobuf and hashed into the PeerId; its private half is what
the key store persists.

An Ed25519 private key is fully determined by its 32-byte secret seed, which
is what makes seed phrases work: the same seed always expands to the same
signing scalar and the same public key.
"""

from __future__ import annotations

from dataclasses import dataclass

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519

from .exceptions import KeyConstructionError
from .peer_id import PeerId, derive_peer_id

__all__ = [
    "IdentityKeypair",
    "generate_keypair",
    "verify_signature",
]

_SECRET_LENGTH = 32
_PUBLIC_LENGTH = 32


@dataclass(frozen=True, slots=True)
class IdentityKeypair:
    """
    Ed25519 keypair for peer identity.

    Attributes:
        private_key: The Ed25519 private key.
    """

    private_key: ed25519.Ed25519PrivateKey

    @classmethod
    def generate(cls) -> IdentityKeypair:
        """
        Generate a new random keypair from the OS CSPRNG.

        Returns:
            A fresh identity keypair.
        """
        return cls(private_key=ed25519.Ed25519PrivateKey.generate())

    @classmethod
    def from_seed(cls, seed: bytes) -> IdentityKeypair:
        """
        Build a keypair deterministically from a 32-byte secret seed.

        Args:
            seed: Ed25519 secret seed.

        Returns:
            The keypair for that seed.

        Raises:
            KeyConstructionError: If the primitive rejects the seed.
        """
        try:
            private_key = ed25519.Ed25519PrivateKey.from_private_bytes(seed)
        except (ValueError, TypeError) as e:
            raise KeyConstructionError(len(seed), str(e)) from e
        return cls(private_key=private_key)

    @classmethod
    def from_bytes(cls, data: bytes) -> IdentityKeypair:
        """
        Load a keypair from its 64-byte form (secret seed || public key).

        This is the layout libp2p stores inside the protobuf PrivateKey
        message for Ed25519. The public half is redundant, so it is checked
        against the one recomputed from the secret.

        Args:
            data: 64 bytes, secret seed followed by public key.

        Returns:
            Identity keypair.

        Raises:
            ValueError: If the length is wrong or the halves do not match.
        """
        if len(data) != _SECRET_LENGTH + _PUBLIC_LENGTH:
            raise ValueError(f"Expected {_SECRET_LENGTH + _PUBLIC_LENGTH} bytes, got {len(data)}")

        secret, public = data[:_SECRET_LENGTH], data[_SECRET_LENGTH:]
        keypair = cls(private_key=ed25519.Ed25519PrivateKey.from_private_bytes(secret))
        if keypair.public_key_bytes() != public:
            raise ValueError("Public key does not match secret key")
        return keypair

    def private_key_bytes(self) -> bytes:
        """Return the raw 32-byte secret seed."""
        return self.private_key.private_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PrivateFormat.Raw,
            encryption_algorithm=serialization.NoEncryption(),
        )

    def public_key_bytes(self) -> bytes:
        """Return the raw 32-byte public key."""
        return self.private_key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    def to_bytes(self) -> bytes:
        """Return the 64-byte form: secret seed followed by public key."""
        return self.private_key_bytes() + self.public_key_bytes()

    def sign(self, message: bytes) -> bytes:
        """
        Sign a message.

        Args:
            message: Data to sign.

        Returns:
            64-byte Ed25519 signature.
        """
        return self.private_key.sign(message)

    def to_peer_id(self) -> PeerId:
        """Derive the PeerId of this keypair's public key."""
        return derive_peer_id(self.public_key_bytes())


def generate_keypair(seed: bytes | None) -> IdentityKeypair:
    """
    Create the identity keypair, deterministically when a seed is given.

    Args:
        seed: 32-byte secret seed, or None for a random keypair.

    Returns:
        The keypair.

    Raises:
        KeyConstructionError: If the seed is not a valid Ed25519 secret.
    """
    if seed is None:
        return IdentityKeypair.generate()
    return IdentityKeypair.from_seed(seed)


def verify_signature(public_key_bytes: bytes, message: bytes, signature: bytes) -> bool:
    """
    Verify an Ed25519 signature.

    Args:
        public_key_bytes: 32-byte raw public key.
        message: Original message that was signed.
        signature: 64-byte signature.

    Returns:
        True if signature is valid, False otherwise.
    """
    public_key = ed25519.Ed25519PublicKey.from_public_bytes(public_key_bytes)
    try:
        public_key.verify(signature, message)
        return True
    except InvalidSignature:
        return False
