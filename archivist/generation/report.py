"""Discovery run reports in Markdown and JSON."""

from pathlib import Path
from typing import Tuple

import pendulum

from ..models import RunReport
from .jsonld import write_json, write_text


def report_stamp(report: RunReport) -> str:
    """File-name safe timestamp of the run start."""
    return pendulum.parse(report.started_at).in_timezone("UTC").format("YYYYMMDD-HHmmss")


def format_as_markdown(report: RunReport) -> str:
    """Format a run report as Markdown."""
    started = pendulum.parse(report.started_at).in_timezone("UTC")
    counts = report.summary()
    lines = []

    # Header
    lines.append(f"# Discovery Report - {started.format('YYYY-MM-DD')}")
    lines.append("")
    lines.append(f"*Run started {started.format('MMM DD, YYYY [at] HH:mm')} UTC*")
    lines.append("")

    lines.append(
        f"**{counts['new']} new**, {counts['updated']} updated, {counts['unchanged']} unchanged, "
        f"{counts['skipped']} skipped from {counts['raw_results']} results "
        f"({counts['intra_run_duplicates'] + counts['canonical_duplicates']} duplicate hits)"
    )
    lines.append("")

    if report.new_articles:
        lines.append("## New articles")
        lines.append("")
        for record in report.new_articles:
            lines.append(f"### [{record.title}]({record.url})")
            lines.append(f"*{record.platform} • {record.date} • {record.type}*")
            lines.append("")
            lines.append(f"- Topics: {', '.join(record.topics)}")
            lines.append(f"- Slug: `{record.url_slug}`")
            lines.append("")

    if report.updated_articles:
        lines.append("## Updated articles")
        lines.append("")
        for record in report.updated_articles:
            lines.append(f"- [{record.title}]({record.url}) (v{record.version}, {record.platform})")
        lines.append("")

    if report.skipped:
        lines.append("## Skipped for review")
        lines.append("")
        lines.append("| Title | Host | Reason |")
        lines.append("|---|---|---|")
        for entry in report.skipped:
            title = (entry.title or entry.url).replace("|", "\\|")
            lines.append(f"| [{title}]({entry.url}) | {entry.host} | {entry.reason} |")
        lines.append("")

    if report.search_errors:
        lines.append("## Search errors")
        lines.append("")
        for error in report.search_errors:
            lines.append(f"- {error}")
        lines.append("")

    # Footer
    lines.append("---")
    lines.append("")
    lines.append(f"*Queries: {', '.join(report.queries) or 'none'}*")
    lines.append("")

    return "\n".join(lines)


def write_report(report: RunReport, reports_dir: Path) -> Tuple[Path, Path]:
    """Write ``discovery-<stamp>.md`` and ``.json``."""
    stamp = report_stamp(report)
    md_path = reports_dir / f"discovery-{stamp}.md"
    json_path = reports_dir / f"discovery-{stamp}.json"

    write_text(md_path, format_as_markdown(report))

    data = report.model_dump(exclude={"new_articles", "updated_articles"})
    data["summary"] = report.summary()
    data["new_articles"] = [r.to_store_dict() for r in report.new_articles]
    data["updated_articles"] = [r.to_store_dict() for r in report.updated_articles]
    write_json(json_path, data)

    return md_path, json_path
