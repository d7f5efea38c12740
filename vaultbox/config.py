"""
Vault Configuration — Storage root and cipher settings.

Reads settings from environment variables:
    VAULTBOX_ROOT = <directory holding .vlt and .vlt.key files>
    VAULTBOX_CIPHER = aesgcm | chacha20
"""
import os
import logging
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from .crypto import CIPHERS, DEFAULT_CIPHER

logger = logging.getLogger("vaultbox.config")


class VaultConfig(BaseModel):
    """Validated vault configuration."""

    root: Path = Field(default=Path("."))
    cipher_backend: str = Field(default=DEFAULT_CIPHER)

    @field_validator("cipher_backend")
    @classmethod
    def validate_cipher(cls, v: str) -> str:
        """Validate cipher backend is supported."""
        v = v.lower()
        if v not in CIPHERS:
            raise ValueError(f"Unsupported cipher backend: {v}")
        return v

    @classmethod
    def from_env(cls, root=None, cipher_backend=None) -> "VaultConfig":
        """Create VaultConfig by loading values from environment.

        Args:
            root: Overrides VAULTBOX_ROOT when given.
            cipher_backend: Overrides VAULTBOX_CIPHER when given.

        Returns:
            Populated VaultConfig instance.
        """
        if root is None:
            root = os.environ.get("VAULTBOX_ROOT", ".")
        if cipher_backend is None:
            cipher_backend = os.environ.get("VAULTBOX_CIPHER", DEFAULT_CIPHER)
        logger.debug("Vault config from env: root=%s cipher=%s", root, cipher_backend)
        return cls(root=root, cipher_backend=cipher_backend)
