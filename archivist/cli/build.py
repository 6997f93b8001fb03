"""Build command implementation."""

from enum import Enum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..errors import StoreError
from ..generation import write_bibliography, write_related, write_topic_indexes
from ..store import ArticleStore
from .common import CONFIG_OPTION, load_config_or_exit

console = Console()


class BuildTarget(str, Enum):
    bibliography = "bibliography"
    topics = "topics"
    related = "related"
    all = "all"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


def build_command(
    target: BuildTarget = typer.Argument(BuildTarget.all, help="What to build"),
    order: SortOrder = typer.Option(
        SortOrder.asc,
        "--order",
        help="Bibliography order by publication date",
    ),
    config_path: Optional[Path] = CONFIG_OPTION,
) -> None:
    """Build bibliography, topic indexes and related lists from the store."""
    config = load_config_or_exit(config_path)
    settings = config.config

    try:
        store = ArticleStore(config.articles_path).load()
    except StoreError as e:
        console.print(f"[red]❌ Article store error: {e}[/red]")
        raise typer.Exit(1)

    records = store.records
    if not records:
        console.print("[yellow]No articles; nothing to build.[/yellow]")
        return

    author = settings.author
    data_dir = config.data_dir

    if target in (BuildTarget.bibliography, BuildTarget.all):
        path = write_bibliography(records, data_dir, config.outbox_dir, author, order.value)
        console.print(f"✅ Master bibliography written: {path}")

    if target in (BuildTarget.topics, BuildTarget.all):
        paths = write_topic_indexes(records, data_dir, author)
        console.print(f"✅ {len(paths)} topic indexes written to {data_dir / 'topics'}")

    if target in (BuildTarget.related, BuildTarget.all):
        paths = write_related(records, data_dir, config.outbox_dir, author)
        console.print(f"✅ {len(paths)} related lists written to {data_dir / 'related'}")
