"""
Vault Errors — a single exception taxonomy for every vault operation.

Each error carries a ``kind`` so callers can branch on what went wrong
without parsing the human-readable ``reason``.
"""
from enum import Enum


class ErrorKind(str, Enum):
    """Origin of a vault failure."""

    IO = "io"
    DECODE = "decode"
    KEY_INVALID = "key_invalid"
    AUTH_FAILED = "auth_failed"
    NOT_FOUND = "not_found"
    UNKNOWN_KEY = "unknown_key"


class VaultError(Exception):
    """Base error for vault operations.

    Args:
        reason: Human-readable description of the failure.
        kind: Failure origin; subclasses fix it.
    """

    kind: ErrorKind = ErrorKind.IO

    def __init__(self, reason: str, kind: ErrorKind | None = None):
        super().__init__(reason)
        self.reason = reason
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        return self.reason

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, reason={self.reason!r})"


class VaultIOError(VaultError):
    """File could not be created, read, written or removed."""

    kind = ErrorKind.IO


class VaultNotFound(VaultIOError):
    """Vault or key file does not exist."""

    kind = ErrorKind.NOT_FOUND


class VaultDecodeError(VaultError):
    """Decrypted payload is not a valid vault document."""

    kind = ErrorKind.DECODE


class InvalidKeyError(VaultError):
    """Key material is not exactly 32 bytes."""

    kind = ErrorKind.KEY_INVALID


class AuthenticationError(VaultError):
    """Ciphertext was altered or sealed under another key."""

    kind = ErrorKind.AUTH_FAILED


class UnknownKeyError(VaultError):
    """Entry key is not present in the vault."""

    kind = ErrorKind.UNKNOWN_KEY
