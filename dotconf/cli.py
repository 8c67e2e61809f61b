# dotconf/cli.py

import json
import logging

import click

from .exceptions import ConfigError, ConversionError
from .files import FileLocator
from .loader import FORMATS, dumps

_TYPED_GETTERS = {
    "string": "get_string",
    "int": "get_int",
    "long": "get_long",
    "double": "get_double",
    "bool": "get_boolean",
    "list": "get_list",
}


def _parse_value(raw: str):
    """Parse VALUE as JSON, falling back to the raw string."""
    try:
        return json.loads(raw)
    except ValueError:
        return raw


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-c", "--config", "file_path", required=True, help="JSON/TOML file to load")
@click.option("--root", default=None, help="Directory that relative config paths are resolved against")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def cli(ctx, file_path, root, verbose):
    """
    dotconf CLI: inspect & edit JSON/TOML configs via dot-notation.

    Load a file (`-c config.json`), then run subcommands:
      • get       KEY [--type T]
      • set       KEY VAL
      • exists    KEY
      • keys      [--deep]
      • dump
      • convert   [--to json|toml] [--out FILE]
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    locator = FileLocator(root)
    try:
        cfg = locator.load(file_path)
    except ConfigError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        ctx.exit(1)

    ctx.obj = {
        "cfg": cfg,
        "locator": locator,
    }


@cli.command()
@click.argument("key")
@click.option("--type", "type_name", type=click.Choice(sorted(_TYPED_GETTERS)),
              help="Read KEY through the typed getter for this type")
@click.pass_context
def get(ctx, key, type_name):
    """Print the value of KEY (dot-notation) as JSON."""
    cfg = ctx.obj["cfg"]
    if key not in cfg:
        click.secho(f"Key not found: {key}", fg="yellow", err=True)
        ctx.exit(1)

    if type_name:
        try:
            val = getattr(cfg, _TYPED_GETTERS[type_name])(key)
        except ConversionError as e:
            click.secho(f"Error: {e}", fg="red", err=True)
            ctx.exit(1)
    else:
        val = cfg.get(key)
    click.echo(json.dumps(val, indent=2, ensure_ascii=False))


@cli.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_(ctx, key, value):
    """
    Set KEY to JSON-parsed VALUE and write the file back
    (same format: JSON or TOML).
    """
    cfg = ctx.obj["cfg"]
    parsed = _parse_value(value)
    try:
        cfg.set(key, parsed)
    except ConfigError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        ctx.exit(1)
    cfg.save()
    click.secho(f"Set {key} = {parsed!r} in {cfg.current_path}", fg="green")


@cli.command()
@click.argument("key")
@click.pass_context
def exists(ctx, key):
    """Exit 0 if KEY exists in config, 1 otherwise."""
    if key in ctx.obj["cfg"]:
        click.echo("true")
        ctx.exit(0)
    click.echo("false")
    ctx.exit(1)


@cli.command()
@click.option("--deep", is_flag=True, help="List every nested dot-notation key")
@click.pass_context
def keys(ctx, deep):
    """List the keys of the config, one per line."""
    for key in sorted(ctx.obj["cfg"].get_keys(deep)):
        click.echo(key)


@cli.command()
@click.pass_context
def dump(ctx):
    """Pretty-print the entire config as JSON."""
    click.echo(dumps(ctx.obj["cfg"], "json"))


@cli.command()
@click.option("--to", "fmt", type=click.Choice(FORMATS), default="json",
              help="Format to convert to")
@click.option("--out", "out_file", help="Write to file (instead of stdout)")
@click.pass_context
def convert(ctx, fmt, out_file):
    """
    Convert loaded config to JSON or TOML.
    """
    cfg = ctx.obj["cfg"]
    if out_file:
        ctx.obj["locator"].save(cfg, out_file, fmt=fmt)
        click.secho(f"Wrote {fmt.upper()} to {out_file}", fg="green")
    else:
        click.echo(dumps(cfg, fmt))
