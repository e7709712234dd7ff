"""
Peer identity for chaincraft nodes.

Derives an Ed25519 keypair (optionally from a seed phrase), stores it under
~/.chaincraft with owner-only permissions, and reports the libp2p PeerId of
its public key.
"""

from .config import KeyStoreConfig
from .exceptions import (
    HomeDirectoryNotFoundError,
    IdentityError,
    KeyConstructionError,
    KeyDecodeError,
    KeyFileNotFoundError,
    KeyStorageError,
)
from .identity import generate_new_identity, read_identity
from .keypair import IdentityKeypair, generate_keypair, verify_signature
from .peer_id import PeerId, derive_peer_id
from .seed import derive_seed
from .store import (
    DefaultHomeDirectoryProvider,
    FixedHomeDirectoryProvider,
    HomeDirectoryProvider,
    KeyStore,
)

__all__ = [
    # Workflows
    "generate_new_identity",
    "read_identity",
    # Building blocks
    "derive_seed",
    "generate_keypair",
    "IdentityKeypair",
    "verify_signature",
    "PeerId",
    "derive_peer_id",
    # Storage
    "KeyStore",
    "KeyStoreConfig",
    "HomeDirectoryProvider",
    "DefaultHomeDirectoryProvider",
    "FixedHomeDirectoryProvider",
    # Errors
    "IdentityError",
    "HomeDirectoryNotFoundError",
    "KeyStorageError",
    "KeyFileNotFoundError",
    "KeyDecodeError",
    "KeyConstructionError",
]
