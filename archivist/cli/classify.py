"""Classify command implementation."""

import typer
from rich.console import Console
from rich.table import Table

from ..classification import Classifier, enrich

console = Console()


def classify_command(
    title: str = typer.Argument(..., help="Article title"),
    description: str = typer.Option("", "--description", "-d", help="Snippet or subtitle"),
    platform: str = typer.Option("", "--platform", "-p", help="Publisher name, e.g. Newsweek"),
) -> None:
    """Show how a title would be classified."""
    classification = Classifier().classify(title, description, platform)
    extra = enrich(title, description, classification)

    table = Table(title="Classification")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Type", classification.type)
    table.add_row("Topics", ", ".join(classification.topics))
    table.add_row("Genre", extra.genre)
    table.add_row("Educational level", extra.educational_level)
    table.add_row("Disciplines", ", ".join(extra.disciplines) or "-")
    table.add_row("Mentions", ", ".join(extra.mentions) or "-")
    if extra.interview_subject:
        table.add_row("Interview subject", extra.interview_subject)

    console.print(table)
