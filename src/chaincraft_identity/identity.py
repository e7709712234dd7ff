"""
Identity workflows.

Two operations, composed from the seed, keypair, store and PeerId pieces:

- New identity: derive seed -> generate keypair -> save -> load -> PeerId
- Lookup:       load -> PeerId

The new-identity flow reports the PeerId of the key it reads back from disk,
not of the key it holds in memory. If saving or encoding ever drifted, the
reported identifier would still match what is actually persisted, and a
record that does not decode fails the operation right away.
"""

from __future__ import annotations

import logging

from .config import KeyStoreConfig
from .keypair import generate_keypair
from .peer_id import PeerId
from .seed import derive_seed
from .store import HomeDirectoryProvider, KeyStore

__all__ = [
    "generate_new_identity",
    "read_identity",
]

logger = logging.getLogger(__name__)


def generate_new_identity(
    seed_phrase: str | None,
    provider: HomeDirectoryProvider,
    config: KeyStoreConfig | None = None,
) -> PeerId:
    """
    Create, persist and report a new identity.

    Overwrites any existing key file.

    Args:
        seed_phrase: Phrase for a reproducible identity, or None for a random one.
        provider: Source of the home directory.
        config: Key store settings. Defaults apply when None.

    Returns:
        PeerId of the key now on disk.

    Raises:
        IdentityError: Any subclass, from key construction or the store.
    """
    seed = derive_seed(seed_phrase)
    logger.debug("Generating %s keypair", "seeded" if seed is not None else "random")

    store = KeyStore(provider, config)
    store.save(generate_keypair(seed))

    peer_id = store.load().to_peer_id()
    logger.info("New identity %s", peer_id)
    return peer_id


def read_identity(
    provider: HomeDirectoryProvider,
    config: KeyStoreConfig | None = None,
) -> PeerId:
    """
    Report the PeerId of the stored identity.

    Args:
        provider: Source of the home directory.
        config: Key store settings. Defaults apply when None.

    Returns:
        PeerId of the stored key.

    Raises:
        IdentityError: Any subclass, from the store.
    """
    return KeyStore(provider, config).load().to_peer_id()
