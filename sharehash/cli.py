"""CLI entry point for ShareHash."""

from __future__ import annotations

import asyncio
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table
from rich.tree import Tree

from sharehash_core.config import ShareHashConfig, load_config
from sharehash_core.config.loader import DEFAULT_CONFIG_TEMPLATE
from sharehash_core.errors import ShareHashError
from sharehash_core.merkle import MerkleDigest
from sharehash_core.share import SchemaLayout, Share, ShareKind, find_schema, get_schema, supported_versions

app = typer.Typer(
    name="sharehash",
    help="Content fingerprints for personal-information shares.",
)

config_app = typer.Typer(help="Manage ShareHash configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: ShareHashConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


def _get_config() -> ShareHashConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to sharehash.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    logging.basicConfig(
        level=_LOG_LEVELS[_config.log_level],
        format="%(levelname)s %(name)s: %(message)s",
    )


def _fail(e: Exception) -> typer.Exit:
    rprint(f"[red]Error:[/red] {escape(str(e))}")
    return typer.Exit(1)


def _read_envelope(file: str | None) -> Share:
    """Read envelope text from *file*, or stdin when no file is given."""
    if file is None or file == "-":
        text = sys.stdin.read()
    else:
        path = Path(file)
        if not path.is_file():
            raise _fail(FileNotFoundError(f"No such file: {file}"))
        text = path.read_text()
    try:
        return Share.from_envelope(text)
    except ShareHashError as e:
        raise _fail(e)


def _digest_tree(node: MerkleDigest, tree: Tree) -> None:
    for child in node.children:
        label = f"[cyan]{child.name}[/cyan] [dim]{child.hash}[/dim]"
        if child.is_leaf:
            tree.add(label)
        else:
            _digest_tree(child, tree.add(f"[bold]{child.name}[/bold] [dim]{child.hash}[/dim]"))


# ---------------------------------------------------------------------------
# Hashing commands
# ---------------------------------------------------------------------------


@app.command("hash")
def hash_cmd(
    file: Annotated[str | None, typer.Argument(help="Envelope file (default: stdin)")] = None,
    use_async: Annotated[bool, typer.Option("--async", help="Use the async evaluator")] = False,
) -> None:
    """Print the root hash of a share envelope."""
    share = _read_envelope(file)
    try:
        digest = asyncio.run(share.async_hash()) if use_async else share.hash
    except ShareHashError as e:
        raise _fail(e)
    typer.echo(digest)


@app.command()
def inspect(
    file: Annotated[str | None, typer.Argument(help="Envelope file (default: stdin)")] = None,
) -> None:
    """Show every container and leaf digest of a share."""
    share = _read_envelope(file)
    try:
        digest = share.digest()
    except ShareHashError as e:
        raise _fail(e)
    tree = Tree(f"[bold]{digest.name}[/bold] [green]{digest.hash}[/green]")
    _digest_tree(digest, tree)
    rprint(f"[dim]schema {share.schema_version}, type {share.kind.value}[/dim]")
    rprint(tree)


@app.command()
def verify(
    file: Annotated[str, typer.Argument(help="Envelope file, or - for stdin")],
    expected: Annotated[str, typer.Argument(help="Expected root hash")],
) -> None:
    """Exit 0 when the envelope hashes to EXPECTED, 1 otherwise."""
    share = _read_envelope(file)
    try:
        actual = share.hash
    except ShareHashError as e:
        raise _fail(e)
    if actual != expected.strip().lower():
        rprint(f"[red]Mismatch:[/red] expected {expected}, got {actual}")
        raise typer.Exit(1)
    rprint(f"[green]OK[/green] {actual}")


@app.command()
def create(
    pub_key: Annotated[str | None, typer.Option("--pub-key", help="Public key text")] = None,
    pub_key_file: Annotated[
        Path | None, typer.Option("--pub-key-file", help="Read the public key from a file")
    ] = None,
    version: Annotated[str | None, typer.Option("--version", help="Schema version")] = None,
    kind: Annotated[ShareKind, typer.Option("--type", help="Share type")] = ShareKind.personal,
    tag: Annotated[str, typer.Option("--tag", help="Free-form label")] = "",
    name: Annotated[str | None, typer.Option("--name", help="Name (flat schemas)")] = None,
    phone: Annotated[str | None, typer.Option("--phone")] = None,
    first_name: Annotated[str | None, typer.Option("--first-name")] = None,
    last_name: Annotated[str | None, typer.Option("--last-name")] = None,
    email: Annotated[str | None, typer.Option("--email")] = None,
    address: Annotated[str | None, typer.Option("--address")] = None,
    city: Annotated[str | None, typer.Option("--city")] = None,
    state: Annotated[str | None, typer.Option("--state")] = None,
    zip_code: Annotated[str | None, typer.Option("--zip")] = None,
    facebook: Annotated[str | None, typer.Option("--facebook")] = None,
    twitter: Annotated[str | None, typer.Option("--twitter")] = None,
    instagram: Annotated[str | None, typer.Option("--instagram")] = None,
) -> None:
    """Build a share from options and print its envelope."""
    cfg = _get_config()
    if (pub_key is None) == (pub_key_file is None):
        raise _fail(ValueError("Pass exactly one of --pub-key or --pub-key-file"))
    if pub_key_file is not None and not pub_key_file.is_file():
        raise _fail(FileNotFoundError(f"No such file: {pub_key_file}"))
    key = pub_key if pub_key is not None else pub_key_file.read_text()

    version = version or cfg.default_version
    try:
        schema = get_schema(version)
    except ShareHashError as e:
        raise _fail(e)

    if schema.layout is SchemaLayout.flat:
        structured_only = [first_name, last_name, email, address, city, state, zip_code,
                           facebook, twitter, instagram]
        if any(v is not None for v in structured_only):
            raise _fail(ValueError(f"Schema {version} only has --name and --phone"))
        pi: dict = {"name": name, "phone": phone}
    else:
        if name is not None:
            raise _fail(ValueError(f"Schema {version} uses --first-name/--last-name, not --name"))
        pi = {
            "name": {"first_name": first_name, "last_name": last_name},
            "contact": {"email": email, "phone": phone},
            "address": {"address": address, "city": city, "state": state, "zip": zip_code},
            "social": {"facebook": facebook, "twitter": twitter, "instagram": instagram},
        }
        pi = {group: fields for group, fields in pi.items()
              if any(v is not None for v in fields.values())}

    share = Share(key, pi, schema_version=version, kind=kind, tag=tag)
    typer.echo(share.to_envelope(indent=cfg.envelope.indent, sort_keys=cfg.envelope.sort_keys))


@app.command()
def versions() -> None:
    """List the registered schema versions."""
    default = _get_config().default_version
    table = Table(title=f"Schema versions ({len(supported_versions())})")
    table.add_column("Version", style="cyan")
    table.add_column("Layout", style="green")
    table.add_column("Envelope keys")
    for v in supported_versions():
        schema = find_schema(v)
        marker = " (default)" if v == default else ""
        table.add_row(
            f"{v}{marker}",
            schema.layout.value,
            ", ".join(schema.envelope_keys),
        )
    rprint(table)


# ---------------------------------------------------------------------------
# Config commands
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default sharehash.yaml in current directory."""
    target = Path("sharehash.yaml")
    if target.exists() and not force:
        rprint("[yellow]sharehash.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
