"""
Vault Crypto Core — Serialization and authenticated encryption of vaults.

The only place where plaintext vault content meets its encrypted form:
- Serialization: Vault → orjson ``{"name": ..., "entries": {...}}`` (UTF-8)
- Sealing: AEAD (AES-256-GCM or ChaCha20-Poly1305) → [nonce 12B][payload + tag 16B]

Security Note:
    Never log plaintext or ciphertext values.
    Nonces are random 96-bit; collision probability negligible under normal usage.
"""
import os
import logging
from typing import Optional

import orjson
from pydantic import BaseModel, ValidationError
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305

from .data import Vault
from .exceptions import AuthenticationError, InvalidKeyError, VaultDecodeError
from .keys import SecretKey

logger = logging.getLogger("vaultbox.crypto")

NONCE_SIZE = 12  # 96-bit nonce
TAG_SIZE = 16  # AEAD tag
DEFAULT_CIPHER = "aesgcm"

CIPHERS: dict[str, type] = {
    "aesgcm": AESGCM,
    "chacha20": ChaCha20Poly1305,
}


def get_cipher_cls(backend: Optional[str] = None) -> type:
    """Return the AEAD cipher class for a backend name.

    Args:
        backend: ``"aesgcm"`` or ``"chacha20"``; defaults to AES-GCM.

    Raises:
        ValueError: If the backend is not supported.
    """
    name = (backend or DEFAULT_CIPHER).lower()
    try:
        return CIPHERS[name]
    except KeyError:
        raise ValueError(f"Unsupported cipher backend: {backend}") from None


def _make_cipher(key: SecretKey, backend: Optional[str]):
    if not isinstance(key, SecretKey):
        raise InvalidKeyError(
            f"Expected a SecretKey, got {type(key).__name__}"
        )
    return get_cipher_cls(backend)(key.unprotected_as_bytes())


# ---------------------------------------------------------------------------
# Vault serialization
# ---------------------------------------------------------------------------

class VaultDocument(BaseModel):
    """Shape of a decrypted vault payload."""

    name: str
    entries: dict[str, str]

    model_config = {"strict": True}


def serialize_vault(vault: Vault) -> bytes:
    """Serialize a vault to its canonical JSON form.

    Args:
        vault: Vault to serialize.

    Returns:
        orjson-encoded bytes, fields ordered ``name`` then ``entries``.
    """
    return orjson.dumps(vault.to_dict())


def deserialize_vault(data: bytes) -> Vault:
    """Parse canonical JSON bytes back into a Vault.

    Args:
        data: UTF-8 JSON document produced by serialize_vault.

    Returns:
        Decoded Vault.

    Raises:
        VaultDecodeError: If data is not UTF-8, not JSON, or not vault-shaped.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as err:
        raise VaultDecodeError(f"Vault payload is not valid UTF-8: {err}") from err
    try:
        parsed = orjson.loads(text)
    except orjson.JSONDecodeError as err:
        raise VaultDecodeError(f"Vault payload is not valid JSON: {err}") from err
    try:
        document = VaultDocument.model_validate(parsed)
    except ValidationError as err:
        raise VaultDecodeError(
            f"Vault payload has an invalid shape: {err.error_count()} error(s)"
        ) from err
    return Vault(document.name, document.entries)


# ---------------------------------------------------------------------------
# Sealing
# ---------------------------------------------------------------------------

def seal(key: SecretKey, vault: Vault, cipher: Optional[str] = None) -> bytes:
    """Serialize and encrypt a vault.

    Format: [nonce 12B][encrypted_payload + tag 16B]

    Args:
        key: Vault secret key.
        vault: Vault to seal.
        cipher: AEAD backend name (default AES-GCM).

    Returns:
        Sealed vault bytes; differs on every call.

    Raises:
        InvalidKeyError: If key is not a valid 32-byte SecretKey.
    """
    aead = _make_cipher(key, cipher)
    nonce = os.urandom(NONCE_SIZE)
    ct = aead.encrypt(nonce, serialize_vault(vault), None)
    logger.debug("Sealed vault '%s' (%d entries)", vault.name, len(vault))
    return nonce + ct


def open_vault(key: SecretKey, sealed: bytes, cipher: Optional[str] = None) -> Vault:
    """Authenticate, decrypt and decode a sealed vault.

    Args:
        key: Vault secret key.
        sealed: Bytes produced by seal.
        cipher: AEAD backend name used when sealing.

    Returns:
        Decoded Vault.

    Raises:
        InvalidKeyError: If key is not a valid 32-byte SecretKey.
        AuthenticationError: If the data was altered, truncated or sealed
            under another key.
        VaultDecodeError: If the authenticated plaintext is not a vault.
    """
    aead = _make_cipher(key, cipher)
    _min = NONCE_SIZE + TAG_SIZE
    if len(sealed) < _min:
        raise AuthenticationError(
            f"Sealed vault too short: {len(sealed)} bytes (minimum {_min})"
        )
    nonce = sealed[:NONCE_SIZE]
    ct = sealed[NONCE_SIZE:]
    try:
        plaintext = aead.decrypt(nonce, ct, None)
    except InvalidTag as err:
        raise AuthenticationError(
            "Vault authentication failed: wrong key or tampered data"
        ) from err
    return deserialize_vault(plaintext)
