"""
Seed phrase to key seed derivation.

A seed phrase makes key generation reproducible: the phrase is hashed with
SHA3-256 and the 32-byte digest is used directly as the Ed25519 secret seed.
Anyone holding the phrase can regenerate the identity, so the phrase must be
treated with the same care as the key file itself.
"""

from __future__ import annotations

import hashlib
from typing import Final

__all__ = [
    "SEED_LENGTH",
    "derive_seed",
]

SEED_LENGTH: Final = 32
"""Size of a derived seed, and of an Ed25519 secret seed."""


def derive_seed(seed_phrase: str | None) -> bytes | None:
    """
    Map an optional seed phrase to 32 deterministic seed bytes.

    Args:
        seed_phrase: User-supplied phrase, or None for a random identity.
            The empty string is a valid phrase.

    Returns:
        SHA3-256 of the UTF-8 encoded phrase, or None when no phrase was given.
    """
    if seed_phrase is None:
        return None

    # surrogatepass keeps lone surrogates (e.g. from undecodable argv) hashable.
    return hashlib.sha3_256(seed_phrase.encode("utf-8", "surrogatepass")).digest()
