"""
Key storage configuration.

Fixed locations and permission modes for the persisted identity, plus a
frozen model for overriding them at runtime (mostly from tests).

Layout on disk::

    <home>/
        .chaincraft/          mode 0700
            keypair.key       mode 0600, base64(protobuf PrivateKey)
"""

from __future__ import annotations

from typing import Final

from pydantic import field_validator

from chaincraft_identity.types import StrictBaseModel

APP_DIR_NAME: Final = ".chaincraft"
"""Application directory created inside the user's home directory."""

KEY_FILE_NAME: Final = "keypair.key"
"""Name of the file holding the encoded private key."""

DIR_MODE: Final = 0o700
"""Owner read/write/execute. No group or other access."""

FILE_MODE: Final = 0o600
"""Owner read/write. No group or other access."""

HOME_ENV_VAR: Final = "CHAINCRAFT_HOME"
"""Environment variable that, when set, replaces the user's home directory."""


class KeyStoreConfig(StrictBaseModel):
    """Where the key file lives and which permissions it gets."""

    app_dir_name: str = APP_DIR_NAME
    """Directory under the home directory that holds the key file."""

    key_file_name: str = KEY_FILE_NAME
    """File name of the key record."""

    dir_mode: int = DIR_MODE
    """Permission bits applied to the application directory."""

    file_mode: int = FILE_MODE
    """Permission bits applied to the key file after every write."""

    @field_validator("app_dir_name", "key_file_name")
    @classmethod
    def _single_path_segment(cls, value: str) -> str:
        # Each name is exactly one path component below the home directory.
        if not value or value in (".", "..") or "/" in value or "\\" in value:
            raise ValueError(f"Expected a single path segment, got {value!r}")
        return value

    @field_validator("dir_mode", "file_mode")
    @classmethod
    def _permission_bits(cls, value: int) -> int:
        if not 0 <= value <= 0o777:
            raise ValueError(f"Permission mode out of range: {oct(value)}")
        return value
