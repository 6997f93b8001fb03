"""Discovery orchestrator: search, deduplicate, verify, classify and persist."""

import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Set

import pendulum
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from ..classification import Classifier
from ..config import ConfigModel
from ..discovery import (
    SearchHit,
    SearchProvider,
    Verification,
    Verifier,
    build_queries,
    canonicalize,
    clean_title,
    collapse_ws,
    content_fingerprint,
    detect_platform,
    extract_host,
    host_matches,
    is_known_non_article_url,
    unwrap_url,
)
from ..errors import ArchivistError
from ..generation import write_outbox, write_report
from ..models import ArticleRecord, ArticleSchemas, RunReport, SkipEntry, build_url_slug, to_iso_date
from ..store import ArticleStore

console = Console()


class PipelineStage:
    """Represents a pipeline stage."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.stats: Dict = {}

    def start(self):
        """Mark stage as started."""
        self.start_time = time.time()

    def complete(self, stats: Optional[Dict] = None):
        """Mark stage as completed successfully."""
        self.end_time = time.time()
        self.success = True
        if stats:
            self.stats.update(stats)

    def fail(self, error: str):
        """Mark stage as failed."""
        self.end_time = time.time()
        self.success = False
        self.error = error

    @property
    def duration(self) -> float:
        """Get stage duration in seconds."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0


class DiscoveryOrchestrator:
    """Run one discovery pass over the article store.

    Candidates are processed one at a time. A failure while handling a single
    candidate becomes a skip entry; only store errors abort the run.

    Args:
        config: Loaded configuration
        search_provider: Runs the author queries
        verifier: Fetches candidate pages for authorship and language checks
        classifier: Assigns type and topics to accepted articles
        store: Article store; loaded here if it has not been loaded yet
        outbox_dir: Where per-article bundles go (None disables them)
        reports_dir: Where run reports go (None disables them)
        sleep: Called between search queries
    """

    def __init__(
        self,
        config: ConfigModel,
        search_provider: SearchProvider,
        verifier: Verifier,
        classifier: Classifier,
        store: ArticleStore,
        outbox_dir: Optional[Path] = None,
        reports_dir: Optional[Path] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize discovery orchestrator."""
        self.config = config
        self.search_provider = search_provider
        self.verifier = verifier
        self.classifier = classifier
        self.store = store
        self.outbox_dir = outbox_dir
        self.reports_dir = reports_dir
        self.sleep = sleep
        self.stages = [
            PipelineStage("search", "Querying search provider"),
            PipelineStage("triage", "Deduplicating and verifying candidates"),
            PipelineStage("store", "Saving article store"),
            PipelineStage("artifacts", "Writing outbox bundles and report"),
        ]
        self.total_start_time: Optional[float] = None
        self._seen: Set[str] = set()
        self._touched: Set[str] = set()
        self._accepted: Set[str] = set()

    @property
    def author_name(self) -> str:
        return self.config.author.name

    def _now(self) -> str:
        return pendulum.now("UTC").to_iso8601_string()

    def _blocked_hosts(self) -> List[str]:
        hosts = list(self.config.filters.exclude_hosts) + list(self.config.filters.blocklist)
        # The author's own site mirrors every article with a matching byline
        site_host = extract_host(self.config.author.site_url)
        if site_host:
            hosts.append(site_host)
        return hosts

    def _skip(self, report: RunReport, title: str, url: str, reason: str) -> None:
        host = extract_host(url)
        report.skipped.append(SkipEntry(title=title, url=url, host=host, reason=reason))
        console.print(f"[dim]  skip {host or url}: {reason}[/dim]")

    def run(self) -> RunReport:
        """Run discovery once.

        Returns:
            Report describing new, updated, unchanged and skipped candidates

        Raises:
            StoreError: If the store cannot be read or written
        """
        self.total_start_time = time.time()
        self._seen = set()
        self._touched = set()
        self._accepted = set()
        report = RunReport(started_at=self._now())

        console.print(Panel.fit(
            f"Article discovery for {self.author_name}\n"
            f"Window: {self.config.search.date_window} • "
            f"Verify authorship: {'on' if self.config.verification.enabled else 'off'} • "
            f"Language: {self.config.verification.language or 'any'}",
            style="bold blue"
        ))

        if not self.store.loaded:
            self.store.load()

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
        ) as progress:

            # Stage 1: search
            stage = self.stages[0]
            task = progress.add_task(stage.description, total=1)
            stage.start()
            hits = self._search(report)
            stage.complete({"queries": len(report.queries), "results": len(hits), "errors": len(report.search_errors)})
            progress.advance(task, 1)

            # Stage 2: triage
            stage = self.stages[1]
            progress.remove_task(task)
            task = progress.add_task(stage.description, total=max(len(hits), 1))
            stage.start()
            for hit in hits:
                self._handle_hit(hit, report)
                progress.advance(task, 1)
            stage.complete({
                "new": len(report.new_articles),
                "updated": len(report.updated_articles),
                "skipped": len(report.skipped),
            })

            # Stage 3: store
            stage = self.stages[2]
            progress.remove_task(task)
            task = progress.add_task(stage.description, total=1)
            stage.start()
            if report.has_changes:
                try:
                    self.store.save()
                except ArchivistError as e:
                    stage.fail(str(e))
                    self._print_summary(report)
                    raise
                stage.complete({"saved": True, "total": len(self.store)})
            else:
                stage.complete({"saved": False, "total": len(self.store)})
            progress.advance(task, 1)

            # Stage 4: artifacts
            stage = self.stages[3]
            progress.remove_task(task)
            task = progress.add_task(stage.description, total=1)
            stage.start()
            report.finished_at = self._now()
            try:
                bundles = self._write_artifacts(report)
                stage.complete({"bundles": bundles})
            except OSError as e:
                stage.fail(f"Cannot write artifacts: {e}")
                console.print(f"[red]Cannot write artifacts: {e}[/red]")
            progress.advance(task, 1)

        self._print_summary(report)
        return report

    def _search(self, report: RunReport) -> List[SearchHit]:
        hits: List[SearchHit] = []
        for query in build_queries(self.author_name):
            report.queries.append(query)
            try:
                results = self.search_provider.search(query)
            except Exception as e:
                report.search_errors.append(f"{query}: {e}")
                console.print(f"[yellow]Search failed for {query}: {e}[/yellow]")
            else:
                hits.extend(results)
                console.print(f"[dim]Query {query} → {len(results)} results[/dim]")
            if self.config.search.request_delay:
                self.sleep(self.config.search.request_delay)

        report.raw_results = len(hits)
        return hits

    def _handle_hit(self, hit: SearchHit, report: RunReport) -> None:
        link = unwrap_url(hit.link)
        key = canonicalize(link)

        if key in self._seen:
            report.intra_run_duplicates += 1
            return
        self._seen.add(key)

        title = clean_title(hit.title, self.author_name)
        try:
            existing = self.store.find(key)
            if existing is not None:
                self._handle_known(hit, link, title, existing, report)
            else:
                self._handle_new(hit, link, key, title, report)
        except ArchivistError:
            raise
        except Exception as e:
            self._skip(report, title, link, f"error: {type(e).__name__}: {e}")

    def _handle_known(
        self,
        hit: SearchHit,
        link: str,
        title: str,
        existing: ArticleRecord,
        report: RunReport,
    ) -> None:
        record_key = str(existing.id)
        if record_key in self._touched or not existing.fingerprint:
            report.unchanged += 1
            return

        snippet = collapse_ws(hit.snippet)
        fingerprint = content_fingerprint(title, snippet)
        if fingerprint == existing.fingerprint:
            report.unchanged += 1
            return

        if self.config.verification.enabled:
            verification = self.verifier.verify(link)
            if not verification.fetched:
                self._skip(report, title, link, f"update-unverified: fetch-failed: {verification.error}")
                return
            if not verification.author_ok:
                self._skip(report, title, link, "update-unverified: author-mismatch")
                return

        updated = existing.model_copy(deep=True)
        # Legacy records derive their slug from the title; pin it before retitling
        if not updated.schemas.url_slug:
            updated.schemas.url_slug = existing.url_slug
        updated.title = title
        updated.snippet = snippet
        updated.previous_fingerprint = existing.fingerprint
        updated.fingerprint = fingerprint
        updated.version = existing.version + 1
        updated.last_updated = self._now()
        classification = self.classifier.classify(title, snippet, existing.platform)
        updated.set_classification(classification.type, classification.topics)

        self.store.replace(updated)
        self._touched.add(record_key)
        report.updated_articles.append(updated)
        console.print(f"[cyan]  updated v{updated.version}: {updated.title}[/cyan]")

    def _handle_new(self, hit: SearchHit, link: str, key: str, title: str, report: RunReport) -> None:
        host = extract_host(link)
        if not host or host_matches(host, self._blocked_hosts()):
            self._skip(report, title, link, f"blocked-host: {host}")
            return

        if is_known_non_article_url(link):
            self._skip(report, title, link, "non-article-url")
            return

        verification = self.verifier.verify(link)
        if not verification.fetched:
            self._skip(report, title, link, f"fetch-failed: {verification.error}")
            return

        target_language = self.config.verification.language
        if target_language and verification.lang != target_language:
            self._skip(report, title, link, f"language={verification.lang or 'other'}")
            return

        if self.config.verification.enabled and not verification.author_ok:
            self._skip(report, title, link, "author-mismatch")
            return

        if verification.canonical_href:
            canonical = canonicalize(link, verification.canonical_href)
            if canonical != key and (canonical in self._accepted or canonical in self.store):
                report.canonical_duplicates += 1
                return
            self._seen.add(canonical)
            self._accepted.add(canonical)

        record = self._build_record(hit, link, key, title, verification)
        self.store.add(record)
        self._accepted.add(key)
        self._touched.add(str(record.id))
        report.new_articles.append(record)
        console.print(f"[green]  new: {record.title} ({record.platform})[/green]")

    def _build_record(
        self,
        hit: SearchHit,
        link: str,
        key: str,
        title: str,
        verification: Verification,
    ) -> ArticleRecord:
        snippet = collapse_ws(hit.snippet)
        platform = detect_platform(link)
        classification = self.classifier.classify(title, snippet, platform)
        date = (
            to_iso_date(hit.published)
            or to_iso_date(verification.published)
            or pendulum.now("UTC").to_date_string()
        )

        return ArticleRecord(
            id=self.store.next_id(),
            title=title,
            url=link,
            normalized_url=key,
            platform=platform,
            date=date,
            snippet=snippet,
            fingerprint=content_fingerprint(title, snippet),
            version=1,
            topics=classification.topics,
            type=classification.type,
            schemas=ArticleSchemas(
                url_slug=build_url_slug(platform, title),
                type=classification.type,
                topics=classification.topics,
            ),
            discovered_at=self._now(),
            status="processed",
        )

    def _write_artifacts(self, report: RunReport) -> int:
        bundles = 0
        if self.outbox_dir is not None:
            for record in report.new_articles + report.updated_articles:
                write_outbox(record, self.outbox_dir, self.config.author)
                bundles += 1
        if self.reports_dir is not None:
            md_path, _ = write_report(report, self.reports_dir)
            console.print(f"[green]✓ Report saved: {md_path}[/green]")
        return bundles

    def _print_summary(self, report: RunReport) -> None:
        """Print run summary."""
        total_duration = time.time() - self.total_start_time if self.total_start_time else 0

        table = Table(title="Discovery Summary")
        table.add_column("Stage", style="cyan")
        table.add_column("Status", style="bold")
        table.add_column("Duration", style="yellow")
        table.add_column("Details", style="dim")

        for stage in self.stages:
            status = "[green]✓[/green]" if stage.success else "[red]✗[/red]"
            duration = f"{stage.duration:.1f}s" if stage.duration > 0 else "-"

            details = ""
            if stage.success and stage.stats:
                if stage.name == "search":
                    details = f"{stage.stats.get('queries', 0)} queries, {stage.stats.get('results', 0)} results"
                elif stage.name == "triage":
                    details = (
                        f"{stage.stats.get('new', 0)} new, {stage.stats.get('updated', 0)} updated, "
                        f"{stage.stats.get('skipped', 0)} skipped"
                    )
                elif stage.name == "store":
                    details = f"{stage.stats.get('total', 0)} articles" + ("" if stage.stats.get("saved") else " (unchanged)")
                elif stage.name == "artifacts":
                    details = f"{stage.stats.get('bundles', 0)} bundles"
            elif not stage.success:
                details = stage.error or "Not run"

            table.add_row(stage.name.title(), status, duration, details)

        console.print("\n")
        console.print(table)

        counts = report.summary()
        if report.has_changes:
            console.print(Panel(
                f"[green]✅ Discovery complete[/green]\n\n"
                f"New: {counts['new']} • Updated: {counts['updated']} • Unchanged: {counts['unchanged']}\n"
                f"Skipped for review: {counts['skipped']}\n"
                f"Duration: {total_duration:.1f} seconds",
                style="green"
            ))
        else:
            console.print(Panel(
                f"Nothing new today.\n\n"
                f"Unchanged: {counts['unchanged']} • Skipped for review: {counts['skipped']}\n"
                f"Duration: {total_duration:.1f} seconds",
                style="blue"
            ))
