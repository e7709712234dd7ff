"""Test helpers for chaincraft_identity unit tests."""

from __future__ import annotations

import stat
from pathlib import Path

from .mocks import MissingHomeDirectoryProvider, ScratchHomeDirectoryProvider

RFC8032_SECRET = bytes.fromhex("9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60")
"""Secret key from RFC 8032 section 7.1, TEST 1."""

RFC8032_PUBLIC = bytes.fromhex("d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a")
"""Public key matching RFC8032_SECRET."""


def file_mode(path: Path) -> int:
    """Return only the permission bits of a path."""
    return stat.S_IMODE(path.stat().st_mode)


__all__ = [
    "MissingHomeDirectoryProvider",
    "ScratchHomeDirectoryProvider",
    "RFC8032_SECRET",
    "RFC8032_PUBLIC",
    "file_mode",
]
