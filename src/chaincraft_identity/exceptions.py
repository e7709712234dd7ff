"""Exception hierarchy for identity derivation and key storage."""

from __future__ import annotations

from pathlib import Path


class IdentityError(Exception):
    """
    Base exception for all identity-related errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class HomeDirectoryNotFoundError(IdentityError):
    """Raised when the home directory provider cannot resolve a directory."""

    def __init__(self) -> None:
        super().__init__("Home directory not found")


class KeyStorageError(IdentityError):
    """
    Raised when the key file or its directory cannot be accessed.

    The underlying OSError is chained as __cause__.

    Attributes:
        path: The file or directory being accessed.
        operation: What was being done (e.g., "write", "chmod").
        detail: The OS error description, if any.
    """

    def __init__(self, path: Path, operation: str, detail: str | None = None) -> None:
        self.path = path
        self.operation = operation
        self.detail = detail

        msg = f"Failed to {operation} {path}"
        if detail:
            msg = f"{msg}: {detail}"

        super().__init__(msg)


class KeyFileNotFoundError(KeyStorageError):
    """Raised when no key file exists at the expected path."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, "open", "no such key file")


class KeyDecodeError(IdentityError):
    """
    Raised when stored key material cannot be decoded.

    Attributes:
        stage: The decoding stage that failed ("base64" or "protobuf").
        detail: Description of what went wrong.
    """

    def __init__(self, stage: str, detail: str) -> None:
        self.stage = stage
        self.detail = detail
        super().__init__(f"Failed to decode {stage} key record: {detail}")


class KeyConstructionError(IdentityError):
    """
    Raised when seed bytes are rejected by the key construction primitive.

    Attributes:
        seed_length: Length of the rejected seed.
    """

    def __init__(self, seed_length: int, detail: str | None = None) -> None:
        self.seed_length = seed_length

        msg = f"Cannot construct keypair from {seed_length}-byte seed"
        if detail:
            msg = f"{msg}: {detail}"

        super().__init__(msg)
