"""Seed command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..classification import Classifier
from ..errors import StoreError
from ..store import ArticleStore, load_export, records_from_export
from .common import CONFIG_OPTION, load_config_or_exit

console = Console()


def seed_command(
    export_file: Path = typer.Argument(..., help="Export JSON (array or {articles: [...]})"),
    force: bool = typer.Option(False, "--force", "-f", help="Replace an existing article store"),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Seed the article store from a historical export."""
    config = load_config_or_exit(config_path)
    settings = config.config
    articles_path = config.articles_path

    if articles_path.exists() and not force:
        console.print(
            f"[red]Article store already exists: {articles_path}[/red]\n"
            "Use --force to replace it."
        )
        raise typer.Exit(1)

    try:
        rows = load_export(export_file)
        records, skipped = records_from_export(rows, Classifier(), settings.author.name)

        store = ArticleStore(articles_path)
        for record in records:
            store.add(record)
        store.save()
    except StoreError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    console.print(f"✅ Seed complete → {articles_path}")
    console.print(f"Kept: {len(records)} | Duplicates/invalid skipped: {skipped}")
