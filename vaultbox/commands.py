"""
Vault Commands — One function per user-facing vault verb.

Every command receives a VaultStore, performs a single load → act →
(persist) cycle and either returns its result or raises a VaultError.
Read-only commands never rewrite the vault file.
"""
import logging

from .data import Entry, Vault
from .exceptions import UnknownKeyError
from .store import VaultStore

logger = logging.getLogger("vaultbox.commands")

OK = "Success"
NO_SUCH_KEY = "No such key in this vault"
UNKNOWN_KEY = "Unknown key"


def new_vault(store: VaultStore, name: str, overwrite: bool = True) -> str:
    store.create(name, overwrite=overwrite)
    return OK


def list_vaults(store: VaultStore) -> list[str]:
    return store.list_vaults()


def list_keys(store: VaultStore, name: str) -> list[str]:
    return store.load(name).list_keys()


def dump_vault(store: VaultStore, name: str) -> Vault:
    return store.load(name)


def add_entry(store: VaultStore, name: str, key: str, value: str) -> str:
    """Upsert ``key`` in vault ``name`` and persist it."""
    vault = store.load(name)
    vault.add_entry(Entry(key=key, value=value))
    store.persist(vault)
    logger.info("Stored key '%s' in vault '%s'", key, name)
    return OK


def get_value(store: VaultStore, name: str, key: str) -> str:
    """Return the value stored under ``key``.

    Raises:
        UnknownKeyError: If the vault has no such key.
    """
    value = store.load(name).get(key)
    if value is None:
        logger.warning("Key '%s' not found in vault '%s'", key, name)
        raise UnknownKeyError(NO_SUCH_KEY)
    return value


def delete_key(store: VaultStore, name: str, key: str) -> str:
    """Remove ``key`` from vault ``name`` and persist the result.

    The vault file is left untouched when the key is absent.

    Raises:
        UnknownKeyError: If the vault has no such key.
    """
    vault = store.load(name)
    if not vault.remove(key):
        logger.warning("Key '%s' not found for delete in vault '%s'", key, name)
        raise UnknownKeyError(UNKNOWN_KEY)
    store.persist(vault)
    logger.info("Removed key '%s' from vault '%s'", key, name)
    return OK


def delete_vault(store: VaultStore, name: str) -> str:
    store.delete(name)
    return OK
