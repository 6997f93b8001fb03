"""Init command implementation."""

from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import AuthorConfig, ConfigModel, StorageConfig, save_config
from ..config.loader import DEFAULT_CONFIG_PATH

console = Console()


def init_command(
    config_path: Path = typer.Option(
        DEFAULT_CONFIG_PATH,
        "--config",
        "-c",
        help="Configuration file to create",
    ),
    workspace: Path = typer.Option(
        Path("."),
        "--workspace",
        "-w",
        help="Workspace root directory",
    ),
    author_name: str = typer.Option(
        AuthorConfig.model_fields["name"].default,
        "--author",
        help="Author whose bylines are archived",
    ),
    site_url: str = typer.Option(
        AuthorConfig.model_fields["site_url"].default,
        "--site-url",
        help="Site hosting the shadow archive",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config file"),
) -> None:
    """Initialize Archivist configuration and workspace."""
    console.print(Panel.fit("Archivist - Initialization", style="bold blue"))

    if config_path.exists() and not force:
        console.print(f"[red]Config already exists: {config_path}[/red]\nUse --force to overwrite it.")
        raise typer.Exit(1)

    workspace = workspace.expanduser().resolve()
    config = ConfigModel(
        author=AuthorConfig(name=author_name, site_url=site_url),
        storage=StorageConfig(workspace_root=str(workspace)),
    )

    save_config(config, config_path)
    console.print(f"✅ Created config: {config_path}")

    data_dir = workspace / config.storage.data_dir
    data_dir.mkdir(parents=True, exist_ok=True)
    console.print(f"✅ Created data directory: {data_dir}")

    console.print(
        Panel(
            f"[green]✅ Archivist initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Workspace: {workspace}\n\n"
            f"Next steps:\n"
            f"1. Set search credentials: [bold]export {config.search.api_key_env}=... "
            f"{config.search.engine_id_env}=...[/bold]\n"
            f"2. Optionally seed history: [bold]archivist seed export.json[/bold]\n"
            f"3. Run: [bold]archivist discover[/bold]",
            style="green",
        )
    )
