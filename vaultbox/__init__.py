"""Vaultbox — Encrypted key-value vaults stored as local files.

Security Note (Threat Model):
    The key file sits next to the vault file and is not itself protected.
    Anyone who can read both files can read the vault. Vault contents are
    decrypted into process memory for the duration of a command.
"""

from .data import Entry, Vault
from .exceptions import (
    AuthenticationError,
    ErrorKind,
    InvalidKeyError,
    UnknownKeyError,
    VaultDecodeError,
    VaultError,
    VaultIOError,
    VaultNotFound,
)
from .keys import SecretKey, generate_and_store, key_file_name, load_key
from .crypto import open_vault, seal
from .config import VaultConfig
from .store import VaultStore
from .version import __version__

__all__ = [
    "Entry",
    "Vault",
    "VaultStore",
    "VaultConfig",
    "SecretKey",
    "generate_and_store",
    "load_key",
    "key_file_name",
    "seal",
    "open_vault",
    "ErrorKind",
    "VaultError",
    "VaultIOError",
    "VaultNotFound",
    "VaultDecodeError",
    "InvalidKeyError",
    "AuthenticationError",
    "UnknownKeyError",
    "__version__",
]
