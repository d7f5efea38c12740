"""
End-to-end tests for the vault command layer.
"""
import pytest

from vaultbox import commands
from vaultbox.exceptions import ErrorKind, UnknownKeyError, VaultNotFound
from vaultbox.store import VaultStore


@pytest.fixture
def store(tmp_path):
    return VaultStore(tmp_path)


class TestVaultLifecycle:

    def test_new_vault(self, store, tmp_path):
        assert commands.new_vault(store, "test1") == commands.OK
        assert (tmp_path / "test1.vlt.key").exists()
        assert (tmp_path / "test1.vlt").exists()

    def test_dump_new_vault(self, store):
        commands.new_vault(store, "v1")
        vault = commands.dump_vault(store, "v1")
        assert vault.name == "v1"
        assert vault.empty

    def test_list_vaults(self, store):
        commands.new_vault(store, "b")
        commands.new_vault(store, "a")
        assert commands.list_vaults(store) == ["a", "b"]

    def test_delete_vault(self, store):
        commands.new_vault(store, "v1")
        assert commands.delete_vault(store, "v1") == commands.OK
        assert commands.list_vaults(store) == []
        with pytest.raises(VaultNotFound):
            commands.dump_vault(store, "v1")

    def test_operations_on_missing_vault(self, store):
        for call in (
            lambda: commands.dump_vault(store, "ghost"),
            lambda: commands.list_keys(store, "ghost"),
            lambda: commands.add_entry(store, "ghost", "k", "v"),
            lambda: commands.get_value(store, "ghost", "k"),
            lambda: commands.delete_key(store, "ghost", "k"),
            lambda: commands.delete_vault(store, "ghost"),
        ):
            with pytest.raises(VaultNotFound) as exc:
                call()
            assert exc.value.kind is ErrorKind.NOT_FOUND


class TestEntryCommands:

    def test_add_entry_read_back(self, store):
        commands.new_vault(store, "test2")
        assert commands.add_entry(store, "test2", "name", "fred") == commands.OK
        assert commands.get_value(store, "test2", "name") == "fred"

    def test_add_entry_delete_it_try_read_back(self, store):
        commands.new_vault(store, "test2")
        commands.add_entry(store, "test2", "name", "fred")
        assert commands.delete_key(store, "test2", "name") == commands.OK
        with pytest.raises(UnknownKeyError) as exc:
            commands.get_value(store, "test2", "name")
        assert exc.value.reason == "No such key in this vault"
        assert exc.value.kind is ErrorKind.UNKNOWN_KEY

    def test_get_missing_does_not_touch_file(self, store):
        commands.new_vault(store, "test3")
        before = store.vault_path("test3").read_bytes()
        with pytest.raises(UnknownKeyError) as exc:
            commands.get_value(store, "test3", "missing")
        assert str(exc.value) == "No such key in this vault"
        assert store.vault_path("test3").read_bytes() == before

    def test_delete_unknown_key(self, store):
        commands.new_vault(store, "v1")
        before = store.vault_path("v1").read_bytes()
        with pytest.raises(UnknownKeyError) as exc:
            commands.delete_key(store, "v1", "missing")
        assert exc.value.reason == "Unknown key"
        assert store.vault_path("v1").read_bytes() == before

    def test_add_overwrites(self, store):
        commands.new_vault(store, "v1")
        commands.add_entry(store, "v1", "name", "fred")
        commands.add_entry(store, "v1", "name", "wilma")
        assert commands.get_value(store, "v1", "name") == "wilma"
        assert commands.list_keys(store, "v1") == ["name"]

    def test_list_keys(self, store):
        commands.new_vault(store, "v1")
        commands.add_entry(store, "v1", "a", "1")
        commands.add_entry(store, "v1", "b", "2")
        assert sorted(commands.list_keys(store, "v1")) == ["a", "b"]

    def test_empty_value_is_found(self, store):
        commands.new_vault(store, "v1")
        commands.add_entry(store, "v1", "blank", "")
        assert commands.get_value(store, "v1", "blank") == ""

    def test_vaults_are_independent(self, store):
        commands.new_vault(store, "v1")
        commands.new_vault(store, "v2")
        commands.add_entry(store, "v1", "k", "one")
        with pytest.raises(UnknownKeyError):
            commands.get_value(store, "v2", "k")
