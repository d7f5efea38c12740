"""Command-line front end for vaultbox."""
import logging

import click
from pydantic import ValidationError

from .commands import (
    add_entry,
    delete_key,
    delete_vault,
    dump_vault,
    get_value,
    list_keys,
    list_vaults,
    new_vault,
)
from .config import VaultConfig
from .crypto import CIPHERS, DEFAULT_CIPHER
from .exceptions import VaultError
from .store import VaultStore
from .version import __version__


def _run(func, *args, **kwargs):
    """Call a command, reporting a VaultError as a click error (exit status 1)."""
    try:
        return func(*args, **kwargs)
    except VaultError as err:
        raise click.ClickException(err.reason) from err


@click.group()
@click.version_option(__version__, prog_name="vaultbox")
@click.option(
    '--root',
    default=None,
    type=click.Path(file_okay=False),
    help='Directory holding the vault files [env: VAULTBOX_ROOT, default: .]',
)
@click.option(
    '--cipher',
    default=None,
    type=click.Choice(sorted(CIPHERS), case_sensitive=False),
    help=f'AEAD cipher used to seal vaults [env: VAULTBOX_CIPHER, default: {DEFAULT_CIPHER}]',
)
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, root, cipher, verbose):
    """Encrypted key-value vaults stored as local files."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        config = VaultConfig.from_env(root=root, cipher_backend=cipher)
    except ValidationError as err:
        raise click.UsageError(f"Invalid configuration: {err}") from err
    ctx.obj = VaultStore.from_config(config)


@cli.command()
@click.argument('name')
@click.option(
    '--overwrite/--no-overwrite',
    default=True,
    help='Replace an existing vault of the same name',
)
@click.pass_obj
def new(store, name, overwrite):
    """Create a new empty vault and its key."""
    click.echo(_run(new_vault, store, name, overwrite=overwrite))


@cli.command(name='list')
@click.argument('name', required=False)
@click.pass_obj
def list_(store, name):
    """List vaults, or the keys of vault NAME."""
    if name is None:
        items = _run(list_vaults, store)
    else:
        items = _run(list_keys, store, name)
    for item in items:
        click.echo(item)


@cli.command()
@click.argument('name')
@click.pass_obj
def dump(store, name):
    """Print the decrypted contents of a vault."""
    click.echo(repr(_run(dump_vault, store, name)))


@cli.command()
@click.argument('name')
@click.argument('key')
@click.argument('val')
@click.pass_obj
def add(store, name, key, val):
    """Add or replace KEY in vault NAME."""
    click.echo(_run(add_entry, store, name, key, val))


@cli.command()
@click.argument('name')
@click.argument('key')
@click.pass_obj
def key(store, name, key):
    """Show the value stored under KEY."""
    value = _run(get_value, store, name, key)
    click.echo(f"Key {key} has value: {value}")


@cli.command(name='delete-key')
@click.argument('name')
@click.argument('key')
@click.pass_obj
def delete_key_(store, name, key):
    """Remove KEY from vault NAME."""
    click.echo(_run(delete_key, store, name, key))


@cli.command(name='delete-vault')
@click.argument('name')
@click.pass_obj
def delete_vault_(store, name):
    """Delete vault NAME and its key."""
    click.echo(_run(delete_vault, store, name))


def main():
    cli()


if __name__ == '__main__':
    main()
