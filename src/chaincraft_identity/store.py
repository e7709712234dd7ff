"""
Secure on-disk storage for the identity key.

The key store writes a single text file under the user's home directory and
reads it back. Where the home directory is comes from a narrow provider
protocol, so tests and the CLI can point the store somewhere else without
touching the real user profile.

Save sequence::

    mkdir -p <home>/.chaincraft      then chmod 0700
    write    <home>/.chaincraft/keypair.key (truncate)
    chmod    <home>/.chaincraft/keypair.key 0600

The sequence is not atomic. A crash between steps can leave the directory
without a key file, or a freshly written key file that still carries the
default mode from the process umask until the final chmod runs. Concurrent
saves from two processes race, and the last writer wins.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from .codec import decode_private_key, decode_text, encode_private_key, encode_text
from .config import HOME_ENV_VAR, KeyStoreConfig
from .exceptions import (
    HomeDirectoryNotFoundError,
    KeyDecodeError,
    KeyFileNotFoundError,
    KeyStorageError,
)
from .keypair import IdentityKeypair

__all__ = [
    "DefaultHomeDirectoryProvider",
    "FixedHomeDirectoryProvider",
    "HomeDirectoryProvider",
    "KeyStore",
]

logger = logging.getLogger(__name__)


class HomeDirectoryProvider(Protocol):
    """
    Protocol for locating the user's home directory.

    Uses structural subtyping - any class with a matching method satisfies it.
    """

    def get_user_home_dir(self) -> Path | None:
        """
        Return the home directory, or None if it cannot be determined.
        """
        ...


class DefaultHomeDirectoryProvider:
    """
    Resolves the home directory from the environment.

    CHAINCRAFT_HOME wins when set and non-empty; otherwise the platform's
    notion of the current user's home is used.
    """

    def get_user_home_dir(self) -> Path | None:
        override = os.environ.get(HOME_ENV_VAR)
        if override:
            return Path(override)

        try:
            return Path.home()
        except (RuntimeError, KeyError):
            return None


class FixedHomeDirectoryProvider:
    """Always returns the directory it was built with."""

    def __init__(self, home_dir: Path | str) -> None:
        self._home_dir = Path(home_dir)

    def get_user_home_dir(self) -> Path | None:
        return self._home_dir


class KeyStore:
    """
    Reads and writes the encoded identity key.

    The record is never exposed: callers hand in and get back an
    IdentityKeypair.
    """

    def __init__(
        self,
        provider: HomeDirectoryProvider,
        config: KeyStoreConfig | None = None,
    ) -> None:
        """
        Initialize the key store.

        Args:
            provider: Source of the home directory.
            config: Path and permission settings. Defaults apply when None.
        """
        self._provider = provider
        self._config = config if config is not None else KeyStoreConfig()

    @property
    def config(self) -> KeyStoreConfig:
        """Path and permission settings in effect."""
        return self._config

    def path(self) -> Path:
        """
        Resolve the key file path.

        Returns:
            <home>/<app_dir_name>/<key_file_name>

        Raises:
            HomeDirectoryNotFoundError: If the provider returns None.
        """
        home_dir = self._provider.get_user_home_dir()
        if home_dir is None:
            raise HomeDirectoryNotFoundError()
        return home_dir / self._config.app_dir_name / self._config.key_file_name

    def save(self, keypair: IdentityKeypair) -> None:
        """
        Persist a keypair, replacing any existing key file.

        Args:
            keypair: Keypair to store.

        Raises:
            HomeDirectoryNotFoundError: If the provider returns None.
            KeyStorageError: If a directory or file operation fails.
        """
        text = encode_text(encode_private_key(keypair))

        file_path = self.path()
        parent_dir = file_path.parent

        try:
            parent_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise KeyStorageError(parent_dir, "create directory", e.strerror) from e
        try:
            parent_dir.chmod(self._config.dir_mode)
        except OSError as e:
            raise KeyStorageError(parent_dir, "set permissions on", e.strerror) from e

        try:
            file_path.write_text(text, encoding="ascii")
        except OSError as e:
            raise KeyStorageError(file_path, "write", e.strerror) from e

        # Applied after the write so a pre-existing file with looser bits is fixed too.
        try:
            file_path.chmod(self._config.file_mode)
        except OSError as e:
            raise KeyStorageError(file_path, "set permissions on", e.strerror) from e

        logger.info("Saved identity key to %s", file_path)

    def load(self) -> IdentityKeypair:
        """
        Read the stored keypair.

        Returns:
            The full keypair (private and public halves).

        Raises:
            HomeDirectoryNotFoundError: If the provider returns None.
            KeyFileNotFoundError: If there is no key file.
            KeyStorageError: If the key file cannot be read.
            KeyDecodeError: If the content is not a valid key record.
        """
        file_path = self.path()

        try:
            raw = file_path.read_bytes()
        except FileNotFoundError as e:
            raise KeyFileNotFoundError(file_path) from e
        except OSError as e:
            raise KeyStorageError(file_path, "read", e.strerror) from e

        try:
            text = raw.decode("ascii")
        except UnicodeDecodeError as e:
            raise KeyDecodeError("base64", "key file is not ASCII text") from e

        keypair = decode_private_key(decode_text(text))
        logger.debug("Loaded identity key from %s", file_path)
        return keypair
