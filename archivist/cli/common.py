"""Helpers shared by CLI commands."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config

console = Console()


def load_config_or_exit(config_path: Optional[Path] = None) -> Config:
    """Load configuration, exiting with status 1 if the file is unusable."""
    config = Config(config_path)
    try:
        config.config
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)
    return config


CONFIG_OPTION = typer.Option(
    None,
    "--config",
    "-c",
    help="Configuration file (default: ~/.config/archivist/config.yaml)",
)
