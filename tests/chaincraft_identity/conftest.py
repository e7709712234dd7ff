"""
Shared pytest fixtures for chaincraft_identity tests.

Every test that touches the key store gets its own scratch home directory.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from chaincraft_identity import KeyStore
from tests.chaincraft_identity.helpers import ScratchHomeDirectoryProvider


@pytest.fixture
def home_dir(tmp_path: Path) -> Path:
    """Empty scratch home directory."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def provider(home_dir: Path) -> ScratchHomeDirectoryProvider:
    """Home directory provider pointing at the scratch home."""
    return ScratchHomeDirectoryProvider(home_dir)


@pytest.fixture
def store(provider: ScratchHomeDirectoryProvider) -> KeyStore:
    """Key store with default settings rooted at the scratch home."""
    return KeyStore(provider)
