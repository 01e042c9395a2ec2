"""Command line interface for DocVault."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.tree import Tree

from docvault.config import AppConfig
from docvault.errors import InvalidDocumentPathError, MissingPathError
from docvault.storage.documents import DEFAULT_CONTENT_KEY, DocumentStore
from docvault.storage.tree import TreeEnumerator
from docvault.storage.vector_cache import VectorCache
from docvault.utils.paths import normalize_path


console = Console()
app = typer.Typer(help="DocVault - document store and embedding cache")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_config(storage: Optional[Path], dev: bool, content_key: str) -> AppConfig:
    if dev:
        return AppConfig(storage_root=storage, development=True, content_key=content_key)
    return AppConfig(storage_root=storage, content_key=content_key)


def _open_storage(config: AppConfig) -> tuple[DocumentStore, VectorCache]:
    base_dir = Path.cwd()
    cache = VectorCache(config.vector_cache_dir(base_dir))
    store = DocumentStore(
        config.documents_dir(base_dir), cache=cache, content_key=config.content_key
    )
    return store, cache


def _render_tree(directory: Dict[str, Any]) -> Tree:
    root = Tree(f"[bold]{directory['name']}[/bold]")
    for folder in directory["items"]:
        branch = root.add(f"[bold blue]{folder['name']}[/bold blue]")
        for item in folder["items"]:
            status = "[green]cached[/green]" if item.get("cached") else "[dim]not cached[/dim]"
            branch.add(f"{item['name']} ({status})")
    return root


StorageOption = typer.Option(None, "--storage", help="Storage root directory")
DevOption = typer.Option(False, "--dev", help="Use the development storage root")
ContentKeyOption = typer.Option(DEFAULT_CONTENT_KEY, help="JSON key holding the document body")
VerboseOption = typer.Option(False, "--verbose", "-v", help="Verbose logging")


@app.command()
def tree(
    storage: Path = StorageOption,
    dev: bool = DevOption,
    content_key: str = ContentKeyOption,
    as_json: bool = typer.Option(False, "--json", help="Print the tree as JSON"),
    verbose: bool = VerboseOption,
) -> None:
    """Show every document grouped by folder, with cache status."""
    _setup_logging(verbose)
    store, cache = _open_storage(_build_config(storage, dev, content_key))
    directory = TreeEnumerator(store, cache).enumerate()

    if as_json:
        typer.echo(json.dumps(directory, indent=2, ensure_ascii=False))
        return
    if not directory["items"]:
        console.print("[yellow]No documents found.[/yellow]")
        return
    console.print(_render_tree(directory))


@app.command()
def show(
    path: str = typer.Argument(..., help="Document path as group/name.json"),
    storage: Path = StorageOption,
    dev: bool = DevOption,
    content_key: str = ContentKeyOption,
    verbose: bool = VerboseOption,
) -> None:
    """Show the metadata of a single document."""
    _setup_logging(verbose)
    store, _ = _open_storage(_build_config(storage, dev, content_key))
    try:
        record = store.get(path)
    except MissingPathError as exc:
        raise typer.BadParameter(str(exc), param_hint="PATH") from exc
    if record is None:
        console.print(f"[yellow]Document not found: {normalize_path(path)}[/yellow]")
        raise typer.Exit(code=1)

    table = Table(title=record.identifier, show_header=True, header_style="bold magenta")
    table.add_column("Field")
    table.add_column("Value")
    for key, value in record.metadata.items():
        table.add_row(str(key), json.dumps(value, ensure_ascii=False))
    if isinstance(record.content, str):
        table.add_row("content length", str(len(record.content)))
    else:
        table.add_row("content", json.dumps(record.content, ensure_ascii=False))
    console.print(table)


@app.command()
def find(
    name: str = typer.Argument(..., help="Document file name, e.g. video-123.json"),
    storage: Path = StorageOption,
    dev: bool = DevOption,
    content_key: str = ContentKeyOption,
    verbose: bool = VerboseOption,
) -> None:
    """Find a document by name across all groups."""
    _setup_logging(verbose)
    store, _ = _open_storage(_build_config(storage, dev, content_key))
    record = store.find(name)
    if record is None:
        console.print(f"[yellow]No document named {name}.[/yellow]")
        raise typer.Exit(code=1)

    status = "cached" if record.cached else "not cached"
    console.print(f"Found [bold]{record.identifier}[/bold] ({status})")


@app.command()
def add(
    group: str = typer.Argument(..., help="Group folder to store the document in"),
    source: Path = typer.Argument(..., help="JSON document record to import", exists=True, dir_okay=False),
    name: Optional[str] = typer.Option(None, help="Stored file name (defaults to the source name)"),
    storage: Path = StorageOption,
    dev: bool = DevOption,
    content_key: str = ContentKeyOption,
    verbose: bool = VerboseOption,
) -> None:
    """Store a JSON document record under a group."""
    _setup_logging(verbose)
    payload = json.loads(source.read_text(encoding="utf-8"))
    if not isinstance(payload, dict):
        raise typer.BadParameter("Document record must be a JSON object", param_hint="SOURCE")

    target_name = name or source.name
    if not target_name.endswith(".json"):
        target_name = f"{target_name}.json"

    store, _ = _open_storage(_build_config(storage, dev, content_key))
    content = payload.pop(content_key, "")
    try:
        record = store.write(group, target_name, content, payload)
    except (MissingPathError, InvalidDocumentPathError) as exc:
        raise typer.BadParameter(str(exc)) from exc
    console.print(f"Stored [bold]{record.identifier}[/bold]")


@app.command()
def purge(
    path: str = typer.Argument(..., help="Document path as group/name.json"),
    cache: bool = typer.Option(False, "--cache/--no-cache", help="Also drop cached vectors"),
    storage: Path = StorageOption,
    dev: bool = DevOption,
    verbose: bool = VerboseOption,
) -> None:
    """Delete a document and optionally its cached vectors."""
    _setup_logging(verbose)
    store, vector_cache = _open_storage(_build_config(storage, dev, DEFAULT_CONTENT_KEY))
    identifier = normalize_path(path)

    removed = store.remove(identifier)
    console.print(f"Document {'removed' if removed else 'not found'}: {identifier}")
    if cache:
        dropped = vector_cache.remove(identifier)
        console.print(f"Cache entry {'removed' if dropped else 'not found'}: {identifier}")


@app.command("cache-status")
def cache_status(
    path: str = typer.Argument(..., help="Document path as group/name.json"),
    storage: Path = StorageOption,
    dev: bool = DevOption,
    verbose: bool = VerboseOption,
) -> None:
    """Report whether chunks are cached for a document."""
    _setup_logging(verbose)
    _, vector_cache = _open_storage(_build_config(storage, dev, DEFAULT_CONTENT_KEY))
    identifier = normalize_path(path)
    lookup = vector_cache.get(identifier)
    if not lookup.exists:
        console.print(f"[yellow]No cached chunks for {identifier}.[/yellow]")
        return
    console.print(f"{identifier}: {len(lookup.chunks)} cached chunks")


@app.command("cache-purge")
def cache_purge(
    path: str = typer.Argument(..., help="Document path as group/name.json"),
    storage: Path = StorageOption,
    dev: bool = DevOption,
    verbose: bool = VerboseOption,
) -> None:
    """Delete the cached chunks of a document."""
    _setup_logging(verbose)
    _, vector_cache = _open_storage(_build_config(storage, dev, DEFAULT_CONTENT_KEY))
    identifier = normalize_path(path)
    dropped = vector_cache.remove(identifier)
    console.print(f"Cache entry {'removed' if dropped else 'not found'}: {identifier}")
