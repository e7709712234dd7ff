"""Tests for the Ed25519 identity keypair."""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from chaincraft_identity.exceptions import KeyConstructionError
from chaincraft_identity.keypair import IdentityKeypair, generate_keypair, verify_signature
from chaincraft_identity.seed import derive_seed
from tests.chaincraft_identity.helpers import RFC8032_PUBLIC, RFC8032_SECRET

RFC8032_EMPTY_MESSAGE_SIGNATURE = bytes.fromhex(
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)
"""RFC 8032 section 7.1, TEST 1: signature over the empty message."""

SEED = bytes(range(1, 33))


class TestGenerateKeypair:
    """Tests for generate_keypair()."""

    def test_same_seed_same_keys(self) -> None:
        """A seed reproduces bit-identical keys."""
        keypair_a = generate_keypair(SEED)
        keypair_b = generate_keypair(SEED)

        assert keypair_a.public_key_bytes() == keypair_b.public_key_bytes()
        assert keypair_a.private_key_bytes() == keypair_b.private_key_bytes()

    def test_different_seeds_different_keys(self) -> None:
        """Changing one seed byte changes the public key."""
        other = bytes([0]) + SEED[1:]
        assert generate_keypair(SEED).public_key_bytes() != generate_keypair(other).public_key_bytes()

    def test_without_seed_keys_differ(self) -> None:
        """Random keypairs do not collide."""
        keypair_a = generate_keypair(None)
        keypair_b = generate_keypair(None)

        assert keypair_a.public_key_bytes() != keypair_b.public_key_bytes()

    def test_seed_is_the_secret(self) -> None:
        """The seed becomes the Ed25519 secret unchanged."""
        assert generate_keypair(SEED).private_key_bytes() == SEED

    def test_rfc8032_vector(self) -> None:
        """Seeded generation matches the RFC 8032 test vector."""
        keypair = generate_keypair(RFC8032_SECRET)
        assert keypair.public_key_bytes() == RFC8032_PUBLIC

    @pytest.mark.parametrize("length", [0, 16, 31, 33, 64])
    def test_bad_seed_length_raises(self, length: int) -> None:
        """A seed the primitive rejects surfaces as KeyConstructionError."""
        with pytest.raises(KeyConstructionError, match=f"{length}-byte seed") as exc_info:
            generate_keypair(bytes(length))

        assert exc_info.value.seed_length == length
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_seed_phrase_pipeline(self) -> None:
        """A derived seed always fits the key construction."""
        seed = derive_seed("test_seed_phrase")
        assert seed is not None

        keypair = generate_keypair(seed)
        assert keypair.private_key_bytes() == seed


class TestIdentityKeypair:
    """Tests for IdentityKeypair encoding and signing."""

    def test_key_sizes(self) -> None:
        """Ed25519 keys are 32 bytes each, 64 together."""
        keypair = IdentityKeypair.generate()

        assert len(keypair.private_key_bytes()) == 32
        assert len(keypair.public_key_bytes()) == 32
        assert len(keypair.to_bytes()) == 64

    def test_to_bytes_layout(self) -> None:
        """The 64-byte form is secret followed by public."""
        keypair = IdentityKeypair.from_seed(RFC8032_SECRET)
        assert keypair.to_bytes() == RFC8032_SECRET + RFC8032_PUBLIC

    def test_from_bytes(self) -> None:
        """The 64-byte form loads back to the same keypair."""
        keypair = IdentityKeypair.from_bytes(RFC8032_SECRET + RFC8032_PUBLIC)
        assert keypair.public_key_bytes() == RFC8032_PUBLIC

    def test_from_bytes_wrong_length(self) -> None:
        """Only the 64-byte form is accepted."""
        with pytest.raises(ValueError, match="Expected 64 bytes"):
            IdentityKeypair.from_bytes(RFC8032_SECRET)

    def test_from_bytes_mismatched_public_half(self) -> None:
        """A public half not derived from the secret is rejected."""
        tampered = RFC8032_PUBLIC[:-1] + bytes([RFC8032_PUBLIC[-1] ^ 1])

        with pytest.raises(ValueError, match="does not match"):
            IdentityKeypair.from_bytes(RFC8032_SECRET + tampered)

    def test_rfc8032_signature(self) -> None:
        """Signing is deterministic and matches the RFC 8032 vector."""
        keypair = IdentityKeypair.from_seed(RFC8032_SECRET)
        assert keypair.sign(b"") == RFC8032_EMPTY_MESSAGE_SIGNATURE

    def test_sign_and_verify(self) -> None:
        """Signatures verify against the signer's public key only."""
        keypair = IdentityKeypair.generate()
        other = IdentityKeypair.generate()
        signature = keypair.sign(b"hello")

        assert verify_signature(keypair.public_key_bytes(), b"hello", signature)
        assert not verify_signature(keypair.public_key_bytes(), b"goodbye", signature)
        assert not verify_signature(other.public_key_bytes(), b"hello", signature)

    def test_to_peer_id(self) -> None:
        """Keypairs name themselves with an Ed25519 PeerId."""
        peer_id = IdentityKeypair.generate().to_peer_id()
        assert str(peer_id).startswith("12D3KooW")


@given(st.binary(min_size=32, max_size=32))
@settings(max_examples=50)
def test_property_seeded_generation_reproducible(seed: bytes) -> None:
    """Any 32-byte seed reproduces the same public key."""
    assert generate_keypair(seed).public_key_bytes() == generate_keypair(seed).public_key_bytes()
