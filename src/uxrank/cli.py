"""CLI interface for uxrank.

Typer-based command-line interface with Rich output formatting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from uxrank import __version__
from uxrank.composer import DesignComposer
from uxrank.config import CONFIG_FILE, UxrankConfig, default_config, load_config, save_config
from uxrank.convert import convert_directory
from uxrank.exceptions import UxrankError
from uxrank.render import TemplateEngine, format_recommendation, recommendation_to_json
from uxrank.search.collections import COLLECTIONS
from uxrank.store import CollectionStore

__all__ = ["app"]

app = typer.Typer(
    name="uxrank",
    help="BM25-ranked design system recommendations for niche landing pages.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


@dataclass
class _State:
    config_path: Path | None = None
    data_dir: Path | None = None


_state = _State()


def _fail(message: str, error: Exception) -> typer.Exit:
    console.print(f"[red]{message}:[/red] {error}")
    return typer.Exit(code=1)


def _load_config() -> UxrankConfig:
    """Load the config file if present, applying the --data-dir override."""
    path = _state.config_path or Path(CONFIG_FILE)
    if _state.config_path is not None or path.exists():
        config = load_config(path)
    else:
        config = default_config()
    if _state.data_dir is not None:
        config.data.directory = str(_state.data_dir)
    return config


def _open_store() -> tuple[UxrankConfig, CollectionStore]:
    try:
        config = _load_config()
    except UxrankError as e:
        raise _fail("Invalid configuration", e) from e
    return config, CollectionStore.from_config(config)


@app.callback()
def main(
    config: Annotated[
        Path | None,
        typer.Option("--config", "-c", help=f"Config file (default: ./{CONFIG_FILE} if present)"),
    ] = None,
    data_dir: Annotated[
        Path | None,
        typer.Option("--data-dir", "-d", help="Directory with the JSON collections"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Global options."""
    _state.config_path = config
    _state.data_dir = data_dir
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Show uxrank version."""
    console.print(f"uxrank {__version__}")


@app.command()
def init(
    path: Annotated[
        Path,
        typer.Argument(help="Where to write the config file"),
    ] = Path(CONFIG_FILE),
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing file"),
    ] = False,
) -> None:
    """Write a default configuration file."""
    if path.exists() and not force:
        console.print(f"[yellow]{path} already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(code=1)
    try:
        save_config(default_config(), path)
    except UxrankError as e:
        raise _fail("Failed to write config", e) from e
    console.print(f"[green]Wrote config[/green] to {path}")


@app.command()
def collections() -> None:
    """List collections and their row counts."""
    _, store = _open_store()
    try:
        counts = store.validate()
    except UxrankError as e:
        raise _fail("Failed to load data", e) from e

    table = Table(title=f"Collections in {store.data_dir}")
    table.add_column("name", style="bold")
    table.add_column("file", style="dim")
    table.add_column("rows", justify="right")
    table.add_column("description")
    for name, spec in COLLECTIONS.items():
        table.add_row(name, spec.filename, str(counts[name]), spec.description)
    table.add_row("reasoning", store.reasoning_file, str(counts["reasoning"]), "Category rules")
    console.print(table)


@app.command()
def search(
    domain: Annotated[str, typer.Argument(help=f"Collection: {', '.join(COLLECTIONS)}")],
    query: Annotated[str, typer.Argument(help="Search query")],
    top_k: Annotated[
        int,
        typer.Option("--top-k", "-k", help="Number of results"),
    ] = 3,
) -> None:
    """Search one design collection."""
    if domain not in COLLECTIONS:
        console.print(
            f"[red]Unknown collection {domain!r}.[/red] Available: {', '.join(COLLECTIONS)}"
        )
        raise typer.Exit(code=1)

    _, store = _open_store()
    try:
        results = store.search(domain, query, top_k)
    except UxrankError as e:
        raise _fail("Search failed", e) from e

    if not results:
        console.print(f"[dim]No {domain} results for {query!r}.[/dim]")
        return

    for i, row in enumerate(results, 1):
        table = Table(title=f"{domain} #{i}", show_header=False, title_justify="left")
        table.add_column("field", style="dim")
        table.add_column("value")
        for key, value in row.items():
            table.add_row(key, value)
        console.print(table)


@app.command()
def design(
    query: Annotated[str, typer.Argument(help="Niche description, e.g. 'fitness app'")],
    name: Annotated[
        str,
        typer.Option("--name", "-n", help="Project name"),
    ] = "",
    fmt: Annotated[
        str | None,
        typer.Option("--format", "-f", help="Output format (md, json)"),
    ] = None,
) -> None:
    """Generate a design system recommendation."""
    config, store = _open_store()
    output_format = fmt or config.output.format
    if output_format not in ("md", "json"):
        console.print(f"[red]Unknown format {output_format!r}.[/red] Use md or json.")
        raise typer.Exit(code=1)

    try:
        recommendation = DesignComposer(store, config).generate(query, name)
        if output_format == "json":
            text = recommendation_to_json(recommendation)
        else:
            template_dir = Path(config.output.template_dir) if config.output.template_dir else None
            text = format_recommendation(
                recommendation, TemplateEngine(template_dir), config.output.template
            )
    except UxrankError as e:
        raise _fail("Failed to generate design", e) from e

    # Plain print: output is meant to be piped into prompts.
    console.print(text, markup=False, emoji=False, highlight=False, soft_wrap=True)


@app.command()
def convert(
    src: Annotated[Path, typer.Argument(help="Directory holding the source CSV files")],
    dest: Annotated[
        Path | None,
        typer.Argument(help="Output directory (default: data.directory from the config)"),
    ] = None,
) -> None:
    """Convert design CSV files into JSON collections."""
    try:
        config = _load_config()
    except UxrankError as e:
        raise _fail("Invalid configuration", e) from e

    if dest is None and not config.data.directory:
        # The bundled data lives inside the installed package.
        console.print(
            "[red]No destination given.[/red] Pass DEST or set data.directory in the config."
        )
        raise typer.Exit(code=1)

    out_dir = dest or config.data.resolve_directory()
    try:
        written = convert_directory(src, out_dir)
    except UxrankError as e:
        raise _fail("Conversion failed", e) from e

    for path, rows in written.items():
        console.print(f"  [green]{path.name}[/green] ({rows} rows)")
    console.print(f"\nConverted {len(written)} file(s) to {out_dir}")
