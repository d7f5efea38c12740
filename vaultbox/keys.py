"""
Vault Keys — Generation, persistence and loading of vault secret keys.

Each vault is protected by a raw 32-byte symmetric key stored in a sibling
file named ``<vault_name>.vlt.key``. The key file has no header and no
encoding: it is exactly the key bytes.

Security Note:
    Never log key material. Only log file paths and vault names.
"""
import os
import hmac
import logging
import secrets
from pathlib import Path
from typing import Union

from .exceptions import InvalidKeyError, VaultIOError, VaultNotFound

logger = logging.getLogger("vaultbox.keys")

KEY_LENGTH = 32  # AEAD-256 key size
VAULT_SUFFIX = ".vlt"
KEY_SUFFIX = ".key"
KEY_FILE_MODE = 0o600  # owner read/write only

PathLike = Union[str, Path]


def key_file_name(name: str) -> str:
    """Return the key file name for a vault name (``<name>.vlt.key``)."""
    return f"{name}{VAULT_SUFFIX}{KEY_SUFFIX}"


class SecretKey:
    """Opaque 32-byte symmetric key.

    The key bytes are only reachable through ``unprotected_as_bytes()``;
    ``repr`` and ``str`` never show them.
    """

    __slots__ = ("_value",)

    def __init__(self, value: bytes):
        if not isinstance(value, (bytes, bytearray)):
            raise InvalidKeyError(
                f"Secret key must be bytes, got {type(value).__name__}"
            )
        if len(value) != KEY_LENGTH:
            raise InvalidKeyError(
                f"Secret key must be exactly {KEY_LENGTH} bytes, got {len(value)}"
            )
        self._value = bytes(value)

    @classmethod
    def generate(cls) -> "SecretKey":
        """Create a new key from the OS CSPRNG."""
        return cls(secrets.token_bytes(KEY_LENGTH))

    def unprotected_as_bytes(self) -> bytes:
        return self._value

    def __len__(self) -> int:
        return KEY_LENGTH

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SecretKey):
            return NotImplemented
        return hmac.compare_digest(self._value, other._value)

    def __hash__(self) -> int:
        return hash((SecretKey, self._value))

    def __repr__(self) -> str:
        return "<SecretKey [redacted]>"

    __str__ = __repr__


def generate_key() -> SecretKey:
    """Generate a random 32-byte secret key.

    Returns:
        New SecretKey.
    """
    return SecretKey.generate()


def generate_and_store(path: PathLike) -> SecretKey:
    """Generate a new key and write its raw bytes to ``path``.

    The file is created or truncated and left readable by its owner only.

    Args:
        path: Destination key file.

    Returns:
        The generated SecretKey.

    Raises:
        VaultIOError: If the file cannot be created or written.
    """
    key = generate_key()
    try:
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, KEY_FILE_MODE)
        with os.fdopen(fd, "wb") as fp:
            fp.write(key.unprotected_as_bytes())
        # O_CREAT mode does not apply to an existing file
        os.chmod(path, KEY_FILE_MODE)
    except OSError as err:
        raise VaultIOError(f"Unable to write key file {path}: {err}") from err
    logger.debug("Stored new vault key at %s", path)
    return key


def load_key(path: PathLike) -> SecretKey:
    """Load a secret key from ``path``.

    The file must contain exactly 32 bytes; shorter or longer files are
    rejected instead of padded or truncated.

    Args:
        path: Key file to read.

    Returns:
        SecretKey read from disk.

    Raises:
        VaultNotFound: If the key file does not exist.
        VaultIOError: If the key file cannot be read.
        InvalidKeyError: If the file is not exactly 32 bytes.
    """
    try:
        with open(path, "rb") as fp:
            # one extra byte is enough to detect an oversized file
            raw = fp.read(KEY_LENGTH + 1)
    except FileNotFoundError as err:
        raise VaultNotFound(f"Key file {path} not found") from err
    except OSError as err:
        raise VaultIOError(f"Unable to read key file {path}: {err}") from err
    if len(raw) != KEY_LENGTH:
        logger.warning("Rejected key file %s: invalid length", path)
        if len(raw) > KEY_LENGTH:
            raise InvalidKeyError(
                f"Key file {path} is longer than {KEY_LENGTH} bytes"
            )
        raise InvalidKeyError(
            f"Key file {path} must contain exactly {KEY_LENGTH} bytes, "
            f"got {len(raw)}"
        )
    return SecretKey(raw)
