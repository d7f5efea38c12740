"""
VaultStore — Maps vault names to their files and persists sealed vaults.

For a vault named ``N`` under the storage root:
- ``N.vlt``      — the sealed vault payload
- ``N.vlt.key``  — the raw 32-byte secret key

Provides the persistence API used by the command layer:
- ``create(name)`` — new key + empty sealed vault
- ``load(name)`` — read key and payload, open the vault
- ``persist(vault)`` — re-seal and atomically replace the vault file
- ``delete(name)`` — remove key and vault files
- ``exists(name)`` / ``list_vaults()`` — enumerate vaults under the root

Concurrency Note:
    There is no file locking. Two processes running load → mutate → persist
    against the same vault race and the last writer wins.
"""
import os
import logging
from pathlib import Path
from typing import Optional, Union

from .config import VaultConfig
from .crypto import DEFAULT_CIPHER, open_vault, seal
from .data import Vault
from .exceptions import VaultIOError, VaultNotFound
from .keys import (
    VAULT_SUFFIX,
    SecretKey,
    generate_and_store,
    key_file_name,
    load_key,
)

logger = logging.getLogger("vaultbox.store")

_TMP_SUFFIX = ".tmp"


def vault_file_name(name: str) -> str:
    """Return the payload file name for a vault name (``<name>.vlt``)."""
    return f"{name}{VAULT_SUFFIX}"


class VaultStore:
    """File-backed storage for sealed vaults under a single root directory."""

    def __init__(
        self,
        root: Union[str, Path] = ".",
        cipher: Optional[str] = None,
    ):
        self._root = Path(root)
        self._cipher = cipher or DEFAULT_CIPHER

    @classmethod
    def from_config(cls, config: VaultConfig) -> "VaultStore":
        return cls(root=config.root, cipher=config.cipher_backend)

    def __repr__(self) -> str:
        return f"<VaultStore root={str(self._root)!r} cipher={self._cipher!r}>"

    @property
    def root(self) -> Path:
        return self._root

    @property
    def cipher(self) -> str:
        return self._cipher

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    def _check_name(self, name: str) -> str:
        """Ensure a vault name maps to files directly under the root.

        Raises:
            VaultIOError: If the name is empty or would leave the root.
        """
        if not name or name in (".", ".."):
            raise VaultIOError(f"Invalid vault name: {name!r}")
        separators = {"/", "\\", "\0", os.sep}
        if os.altsep:
            separators.add(os.altsep)
        if any(sep in name for sep in separators):
            raise VaultIOError(f"Invalid vault name: {name!r}")
        return name

    def vault_path(self, name: str) -> Path:
        """Path of the sealed payload file for ``name``."""
        return self._root / vault_file_name(self._check_name(name))

    def key_path(self, name: str) -> Path:
        """Path of the key file for ``name``."""
        return self._root / key_file_name(self._check_name(name))

    def exists(self, name: str) -> bool:
        """True if both the key file and the vault file are present."""
        return self.key_path(name).is_file() and self.vault_path(name).is_file()

    def list_vaults(self) -> list[str]:
        """Return the sorted names of vaults that have both files under the root."""
        if not self._root.is_dir():
            return []
        names = []
        for path in self._root.glob(f"*{VAULT_SUFFIX}"):
            name = path.name[:-len(VAULT_SUFFIX)]
            if path.is_file() and self.key_path(name).is_file():
                names.append(name)
        return sorted(names)

    # ------------------------------------------------------------------
    # File helpers
    # ------------------------------------------------------------------

    def _read_sealed(self, name: str) -> bytes:
        path = self.vault_path(name)
        try:
            return path.read_bytes()
        except FileNotFoundError as err:
            raise VaultNotFound(f"Vault file {path} not found") from err
        except OSError as err:
            raise VaultIOError(f"Unable to read vault file {path}: {err}") from err

    def _write_sealed(self, name: str, data: bytes) -> None:
        """Write to a temporary sibling file, then atomically replace."""
        path = self.vault_path(name)
        tmp_path = path.with_name(path.name + _TMP_SUFFIX)
        try:
            with open(tmp_path, "wb") as fp:
                fp.write(data)
                fp.flush()
                os.fsync(fp.fileno())
            os.replace(tmp_path, path)
        except OSError as err:
            try:
                tmp_path.unlink()
            except FileNotFoundError:
                pass
            except OSError as cleanup_err:
                logger.warning(
                    "Unable to remove temporary file %s: %s", tmp_path, cleanup_err,
                )
            raise VaultIOError(f"Unable to write vault file {path}: {err}") from err

    def _load_key(self, name: str) -> SecretKey:
        return load_key(self.key_path(name))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create(self, name: str, overwrite: bool = True) -> Vault:
        """Create a new empty vault with a fresh key.

        An existing vault of the same name is silently replaced unless
        ``overwrite`` is False; replacing it discards the old key, so the
        old contents are unrecoverable.

        Args:
            name: Vault name.
            overwrite: Replace existing files of the same name.

        Returns:
            The new, empty Vault.

        Raises:
            VaultIOError: If files cannot be written, or already exist and
                ``overwrite`` is False.
        """
        key_path = self.key_path(name)
        vault_path = self.vault_path(name)
        if not overwrite and (key_path.exists() or vault_path.exists()):
            raise VaultIOError(f"Vault '{name}' already exists")
        if key_path.exists() or vault_path.exists():
            logger.warning("Overwriting existing vault '%s'", name)
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise VaultIOError(
                f"Unable to create vault directory {self._root}: {err}"
            ) from err
        key = generate_and_store(key_path)
        vault = Vault(name)
        self._write_sealed(name, seal(key, vault, self._cipher))
        logger.info("Created vault '%s' in %s", name, self._root)
        return vault

    def load(self, name: str) -> Vault:
        """Load and open a vault.

        Args:
            name: Vault name.

        Returns:
            Decrypted Vault.

        Raises:
            VaultNotFound: If the key file or vault file is missing.
            InvalidKeyError: If the key file is not 32 bytes.
            AuthenticationError: If the key does not match the vault file
                or the file was altered.
            VaultDecodeError: If the plaintext is not a vault document.
        """
        key = self._load_key(name)
        vault = open_vault(key, self._read_sealed(name), self._cipher)
        if vault.name != name:
            logger.warning(
                "Vault file '%s' holds a vault named '%s'", name, vault.name,
            )
        logger.debug("Loaded vault '%s': %d entries", name, len(vault))
        return vault

    def persist(self, vault: Vault) -> None:
        """Re-seal a vault and replace its file on disk.

        The key is re-read from the key file derived from ``vault.name``.

        Raises:
            VaultNotFound: If the vault's key file is missing.
            VaultIOError: If the vault file cannot be written.
        """
        key = self._load_key(vault.name)
        self._write_sealed(vault.name, seal(key, vault, self._cipher))
        vault.is_changed = False
        logger.debug("Persisted vault '%s': %d entries", vault.name, len(vault))

    def delete(self, name: str) -> None:
        """Remove the key file and then the vault file.

        Removals are sequential with no rollback: if the second removal
        fails, the first artifact is already gone.

        Raises:
            VaultNotFound: If neither file exists.
            VaultIOError: If a file cannot be removed.
        """
        paths = (self.key_path(name), self.vault_path(name))
        if not any(path.exists() for path in paths):
            raise VaultNotFound(f"Vault '{name}' not found")
        for path in paths:
            try:
                path.unlink()
            except FileNotFoundError:
                logger.warning("Vault '%s' was missing %s", name, path.name)
            except OSError as err:
                logger.error("Unable to remove %s: %s", path, err)
                raise VaultIOError(f"Unable to remove {path}: {err}") from err
        logger.info("Deleted vault '%s'", name)
