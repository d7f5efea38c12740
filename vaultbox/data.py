from typing import Any, Optional
from collections.abc import Iterator, Mapping, MutableMapping

from pydantic import BaseModel, ValidationError


class Entry(BaseModel):
    """A single key/value pair to be added to a vault."""

    key: str
    value: str

    model_config = {"frozen": True}


class Vault(MutableMapping[str, str]):
    """Vault dict-like object.

    A named table of string entries. Entry keys are unique: setting an
    existing key overwrites its value. The ``name`` identifies the vault
    on disk and is not part of the entry table.
    """

    __slots__ = ('name', '_entries', '_changed')

    def __init__(
        self,
        name: str,
        entries: Optional[Mapping[str, str]] = None
    ) -> None:
        self.name = name
        self._entries: dict[str, str] = dict(entries) if entries else {}
        self._changed = False

    def __repr__(self) -> str:
        return f'<Vault [name:{self.name}] entries={self._entries!r}>'

    # --- Entry table ---

    def add_entry(self, entry: Entry) -> None:
        """Insert or overwrite an entry."""
        self._entries[entry.key] = entry.value
        self._changed = True

    def remove(self, key: str) -> bool:
        """Delete ``key`` if present.

        Returns:
            True if the key was removed, False if it was absent.
        """
        if key not in self._entries:
            return False
        del self._entries[key]
        self._changed = True
        return True

    def list_keys(self) -> list[str]:
        """Return every entry key (order is not significant)."""
        return list(self._entries)

    @property
    def entries(self) -> dict[str, str]:
        return self._entries

    @property
    def empty(self) -> bool:
        return not bool(self._entries)

    @property
    def is_changed(self) -> bool:
        return self._changed

    @is_changed.setter
    def is_changed(self, value: bool) -> None:
        self._changed = value

    # --- Serialization helpers ---

    def to_dict(self) -> dict[str, Any]:
        """Return the canonical document shape (name first, then entries)."""
        return {'name': self.name, 'entries': dict(self._entries)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Vault":
        return cls(data['name'], data.get('entries') or {})

    # --- Magic Methods ---

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __setitem__(self, key: str, value: str) -> None:
        try:
            entry = Entry(key=key, value=value)
        except ValidationError as err:
            raise TypeError(
                f"Vault entries map str to str, got "
                f"{type(key).__name__} -> {type(value).__name__}"
            ) from err
        self.add_entry(entry)

    def __delitem__(self, key: str) -> None:
        if not self.remove(key):
            raise KeyError(key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vault):
            return NotImplemented
        return self.name == other.name and self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]
