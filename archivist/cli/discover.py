"""Discover command implementation."""

import time
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..classification import Classifier
from ..discovery import GoogleSearchClient, PageFetcher, Verifier
from ..errors import MissingCredentialsError, StoreError
from ..pipeline import DiscoveryOrchestrator
from ..store import ArticleStore
from .common import CONFIG_OPTION, load_config_or_exit

console = Console()


def discover_command(
    config_path: Optional[Path] = CONFIG_OPTION,
    window: Optional[str] = typer.Option(
        None,
        "--window",
        "-w",
        help="Search recency window, e.g. d7 or m1 (default from config)",
    ),
    allow_missing_credentials: bool = typer.Option(
        False,
        "--allow-missing-credentials",
        help="Exit cleanly instead of failing when search credentials are missing",
    ),
) -> None:
    """Search for new articles by the author and update the store."""
    config = load_config_or_exit(config_path)
    settings = config.config

    if window:
        settings = settings.model_copy(
            update={"search": settings.search.model_copy(update={"date_window": window})}
        )

    api_key, engine_id = config.get_search_credentials()
    try:
        search_client = GoogleSearchClient(
            api_key=api_key,
            engine_id=engine_id,
            date_window=settings.search.date_window,
            num_results=settings.search.results_per_query,
            timeout=settings.search.timeout,
            endpoint=settings.search.endpoint,
        )
    except MissingCredentialsError as e:
        if settings.require_credentials and not allow_missing_credentials:
            console.print(f"[red]❌ {e}[/red]")
            raise typer.Exit(2)
        console.print(f"[yellow]Warning: {e} Skipping discovery.[/yellow]")
        return

    fetcher = PageFetcher(
        timeout=settings.verification.timeout,
        user_agent=settings.verification.user_agent,
    )
    verifier = Verifier(
        author_name=settings.author.name,
        fetcher=fetcher,
        target_language=settings.verification.language,
        sleep=time.sleep,
        delay=settings.verification.fetch_delay,
    )

    orchestrator = DiscoveryOrchestrator(
        config=settings,
        search_provider=search_client,
        verifier=verifier,
        classifier=Classifier(),
        store=ArticleStore(config.articles_path),
        outbox_dir=config.outbox_dir,
        reports_dir=config.reports_dir,
    )

    try:
        orchestrator.run()
    except StoreError as e:
        console.print(f"[red]❌ Article store error: {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Discovery interrupted by user[/yellow]")
        raise typer.Exit(1)
    finally:
        search_client.close()
        fetcher.close()
