"""
Tests for the vaultbox command-line front end.
"""
import pytest
from click.testing import CliRunner

from vaultbox.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path):
    def _invoke(*args):
        return runner.invoke(cli, ['--root', str(tmp_path), *args])
    return _invoke


class TestCli:

    def test_new_and_list(self, invoke, tmp_path):
        result = invoke('new', 'test1')
        assert result.exit_code == 0
        assert result.output.strip() == 'Success'
        assert (tmp_path / 'test1.vlt').exists()
        result = invoke('list')
        assert result.output.splitlines() == ['test1']

    def test_add_and_get(self, invoke):
        invoke('new', 'test2')
        assert invoke('add', 'test2', 'name', 'fred').output.strip() == 'Success'
        result = invoke('key', 'test2', 'name')
        assert result.exit_code == 0
        assert 'Key name has value: fred' in result.output

    def test_list_keys(self, invoke):
        invoke('new', 'v1')
        invoke('add', 'v1', 'a', '1')
        invoke('add', 'v1', 'b', '2')
        result = invoke('list', 'v1')
        assert sorted(result.output.splitlines()) == ['a', 'b']

    def test_dump(self, invoke):
        invoke('new', 'v1')
        invoke('add', 'v1', 'a', '1')
        result = invoke('dump', 'v1')
        assert result.exit_code == 0
        assert "<Vault [name:v1] entries={'a': '1'}>" in result.output

    def test_missing_key(self, invoke):
        invoke('new', 'test3')
        result = invoke('key', 'test3', 'missing')
        assert result.exit_code == 1
        assert 'No such key in this vault' in result.output

    def test_delete_key(self, invoke):
        invoke('new', 'v1')
        invoke('add', 'v1', 'a', '1')
        assert invoke('delete-key', 'v1', 'a').output.strip() == 'Success'
        result = invoke('delete-key', 'v1', 'a')
        assert result.exit_code == 1
        assert 'Unknown key' in result.output

    def test_delete_vault(self, invoke, tmp_path):
        invoke('new', 'v1')
        assert invoke('delete-vault', 'v1').output.strip() == 'Success'
        assert not (tmp_path / 'v1.vlt').exists()
        assert not (tmp_path / 'v1.vlt.key').exists()

    def test_no_overwrite(self, invoke):
        invoke('new', 'v1')
        result = invoke('new', 'v1', '--no-overwrite')
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_missing_vault(self, invoke):
        result = invoke('dump', 'ghost')
        assert result.exit_code == 1
        assert 'not found' in result.output

    def test_root_from_env(self, runner, tmp_path):
        result = runner.invoke(
            cli, ['new', 'envvault'], env={'VAULTBOX_ROOT': str(tmp_path)}
        )
        assert result.exit_code == 0
        assert (tmp_path / 'envvault.vlt').exists()

    def test_chacha20_cipher(self, invoke, tmp_path):
        root = str(tmp_path)
        runner = CliRunner()
        runner.invoke(cli, ['--root', root, '--cipher', 'chacha20', 'new', 'v1'])
        runner.invoke(cli, ['--root', root, '--cipher', 'chacha20', 'add', 'v1', 'k', 'v'])
        result = runner.invoke(cli, ['--root', root, '--cipher', 'chacha20', 'key', 'v1', 'k'])
        assert 'Key k has value: v' in result.output
        # default cipher cannot open a chacha20 vault
        result = invoke('key', 'v1', 'k')
        assert result.exit_code == 1

    def test_error_reported_by_click(self, tmp_path):
        runner = CliRunner()
        runner.invoke(cli, ['--root', str(tmp_path), 'new', 'v1'])
        result = runner.invoke(cli, ['--root', str(tmp_path), 'key', 'v1', 'missing'])
        assert result.exit_code == 1
        assert 'Error: No such key in this vault' in result.output

    def test_cipher_from_env(self, runner, tmp_path):
        env = {'VAULTBOX_ROOT': str(tmp_path), 'VAULTBOX_CIPHER': 'chacha20'}
        runner.invoke(cli, ['new', 'v1'], env=env)
        runner.invoke(cli, ['add', 'v1', 'k', 'v'], env=env)
        assert 'Key k has value: v' in runner.invoke(cli, ['key', 'v1', 'k'], env=env).output
        result = runner.invoke(cli, ['--cipher', 'aesgcm', 'key', 'v1', 'k'], env=env)
        assert result.exit_code == 1

    def test_invalid_cipher_in_env(self, runner, tmp_path):
        result = runner.invoke(
            cli, ['list'], env={'VAULTBOX_ROOT': str(tmp_path), 'VAULTBOX_CIPHER': 'rot13'}
        )
        assert result.exit_code == 2
        assert 'Invalid configuration' in result.output

    def test_invalid_vault_name(self, invoke, tmp_path):
        result = invoke('new', '../escaped')
        assert result.exit_code == 1
        assert 'Invalid vault name' in result.output
        assert not (tmp_path.parent / 'escaped.vlt').exists()
