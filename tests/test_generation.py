"""Tests for site artifact generation."""

from __future__ import annotations

import json

import pytest

from archivist.config import AuthorConfig
from archivist.generation import (
    MAX_TOPIC_ENTRIES,
    build_article_schema,
    build_bibliography,
    build_topic_index,
    format_as_markdown,
    group_by_topic,
    order_records,
    related_records,
    render_header,
    render_page,
    write_bibliography,
    write_outbox,
    write_related,
    write_topic_indexes,
)
from archivist.models import ArticleRecord, RunReport, SkipEntry


@pytest.fixture
def author() -> AuthorConfig:
    return AuthorConfig(name="Daniel Lehewych", site_url="https://daniellehewych.org/")


def make_record(id_, title, date=None, platform="Medium", topics=None, **extra) -> ArticleRecord:
    return ArticleRecord(
        id=id_,
        title=title,
        url=f"https://medium.com/@dl/{id_}",
        normalized_url=f"https://medium.com/@dl/{id_}",
        platform=platform,
        date=date,
        topics=topics or ["Ethics"],
        type=extra.pop("type", "BlogPosting"),
        **extra,
    )


class TestBibliography:
    """Tests for the master bibliography."""

    def test_order_ascending_with_title_ties(self):
        """Should sort by date, then title."""
        records = [
            make_record(1, "Beta", "2024-02-01"),
            make_record(2, "Alpha", "2024-02-01"),
            make_record(3, "Gamma", "2023-01-01"),
        ]
        assert [r.title for r in order_records(records, "asc")] == ["Gamma", "Alpha", "Beta"]

    def test_order_descending_keeps_title_ties_ascending(self):
        """Should reverse dates only."""
        records = [
            make_record(1, "Beta", "2024-02-01"),
            make_record(2, "Alpha", "2024-02-01"),
            make_record(3, "Gamma", "2023-01-01"),
        ]
        assert [r.title for r in order_records(records, "desc")] == ["Alpha", "Beta", "Gamma"]

    def test_unknown_order(self):
        with pytest.raises(ValueError):
            order_records([], "sideways")

    def test_build_bibliography(self, author):
        """Should build a numbered ItemList with authors."""
        records = [make_record(1, "Later", "2024-05-01"), make_record(2, "Undated")]
        bibliography = build_bibliography(records, author)

        assert bibliography["@type"] == "ItemList"
        assert bibliography["name"] == "Daniel Lehewych - Master Bibliography"
        assert bibliography["numberOfItems"] == 2
        first, second = bibliography["itemListElement"]
        assert first["position"] == 1
        assert first["item"]["name"] == "Undated"
        assert first["item"]["datePublished"] == "1970-01-01T00:00:00Z"
        assert second["item"]["author"]["name"] == "Daniel Lehewych"
        assert second["item"]["@id"] == "https://daniellehewych.org/archive/medium/later"

    def test_write_bibliography(self, author, tmp_path):
        """Should write the master list and each bundle's bib.json."""
        records = [make_record(1, "First", "2024-01-01"), make_record(2, "Second", "2024-02-01")]
        path = write_bibliography(records, tmp_path, tmp_path / "outbox", author, order="desc")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert [e["item"]["name"] for e in data["itemListElement"]] == ["Second", "First"]
        bib = json.loads((tmp_path / "outbox" / "archive" / "medium" / "first" / "bib.json").read_text())
        assert bib["position"] == 2


class TestTopicIndexes:
    """Tests for per-topic indexes."""

    def test_group_by_topic(self):
        records = [
            make_record(1, "A", topics=["Ethics", "Science"]),
            make_record(2, "B", topics=["Science"]),
        ]
        groups = group_by_topic(records)
        assert list(groups) == ["Ethics", "Science"]
        assert [r.title for r in groups["Science"]] == ["A", "B"]

    def test_newest_first_and_capped(self, author):
        """Should list newest first, cap entries and report the full count."""
        records = [make_record(i, f"Post {i:03d}", f"2020-01-{(i % 28) + 1:02d}") for i in range(MAX_TOPIC_ENTRIES + 10)]
        index = build_topic_index("Ethics", records, author)

        assert index["name"] == "Topic: Ethics"
        assert index["numberOfItems"] == MAX_TOPIC_ENTRIES + 10
        assert len(index["itemListElement"]) == MAX_TOPIC_ENTRIES
        dates = [e["item"]["datePublished"] for e in index["itemListElement"]]
        assert dates == sorted(dates, reverse=True)

    def test_write_topic_indexes(self, author, tmp_path):
        records = [make_record(1, "A", "2024-01-01", topics=["AI & Technology"])]
        paths = write_topic_indexes(records, tmp_path, author)
        assert [p.name for p in paths] == ["ai-technology.json"]


class TestRelated:
    """Tests for related-article ranking."""

    def test_ranking(self):
        """Should rank by shared topics, then platform, then recency."""
        target = make_record(1, "Target", topics=["Ethics", "Science"])
        two_shared = make_record(2, "Two", "2020-01-01", topics=["Ethics", "Science"], platform="BigThink")
        same_platform = make_record(3, "Same", "2020-01-01", topics=["Ethics"])
        newer_other = make_record(4, "Newer", "2024-01-01", topics=["Science"], platform="Newsweek")
        unrelated = make_record(5, "None", "2024-06-01", topics=["Longevity"])

        ranked = related_records(target, [target, two_shared, same_platform, newer_other, unrelated])
        assert [r.title for r in ranked] == ["Two", "Same", "Newer"]

    def test_limit(self):
        target = make_record(1, "Target")
        others = [make_record(i, f"Other {i}", f"2024-01-{i:02d}") for i in range(2, 12)]
        assert len(related_records(target, [target] + others)) == 5

    def test_write_related(self, author, tmp_path):
        """Should write per-article files and refresh bundle copies."""
        records = [make_record(1, "One Thing"), make_record(2, "Another Thing")]
        paths = write_related(records, tmp_path, tmp_path / "outbox", author)

        assert [p.name for p in paths] == ["one-thing.json", "another-thing.json"]
        bundle = json.loads((tmp_path / "outbox" / "archive" / "medium" / "one-thing" / "related.json").read_text())
        assert bundle["name"] == "Related Articles by Daniel Lehewych"
        assert bundle["itemListElement"][0]["item"]["name"] == "Another Thing"


class TestArticleSchema:
    """Tests for per-article JSON-LD and bundles."""

    def test_schema_fields(self, author):
        """Should describe the mirror page and point back to the original."""
        record = make_record(
            1,
            "Kant on Lying",
            "2024-03-01",
            topics=["Ethics", "Philosophy"],
            type="ScholarlyArticle",
            snippet="An essay.",
            version=3,
            last_updated="2024-04-01T00:00:00Z",
        )
        schema = build_article_schema(record, author)

        assert schema["@type"] == "ScholarlyArticle"
        assert schema["@id"] == "https://daniellehewych.org/archive/medium/kant-on-lying"
        assert schema["sameAs"] == record.url
        assert schema["datePublished"] == "2024-03-01T00:00:00Z"
        assert schema["publisher"]["name"] == "Medium"
        assert schema["author"]["@id"] == "https://daniellehewych.org/#daniel-lehewych"
        assert schema["keywords"] == "ethics, philosophy"
        assert schema["educationalLevel"] == "Advanced"
        assert schema["version"] == 3
        assert schema["dateModified"] == "2024-04-01T00:00:00Z"
        assert {"@type": "Person", "name": "Kant"} in schema["mentions"]
        disciplines = [a["name"] for a in schema["about"] if a.get("additionalType") == "AcademicDiscipline"]
        assert disciplines == ["Philosophy", "Ethics"]

    def test_unknown_publisher(self, author):
        schema = build_article_schema(make_record(1, "Post", platform="Substack"), author)
        assert schema["publisher"] == {"@type": "Organization", "name": "Substack"}
        assert "version" not in schema

    def test_header_and_page(self, author):
        """Should render noindex, canonical and escaped content."""
        record = make_record(1, "Cats & <Dogs>")
        header = render_header(build_article_schema(record, author))
        assert 'content="noindex, follow"' in header
        assert f'<link rel="canonical" href="{record.url}">' in header
        assert "Cats &amp; &lt;Dogs&gt;" in render_page(record)

    def test_write_outbox_keeps_existing_related(self, author, tmp_path):
        """Should not overwrite a related list built earlier."""
        record = make_record(1, "Post")
        out_dir = write_outbox(record, tmp_path, author)
        (out_dir / "related.json").write_text('{"kept": true}')
        write_outbox(record, tmp_path, author)

        assert json.loads((out_dir / "related.json").read_text()) == {"kept": True}
        meta = json.loads((out_dir / "meta.json").read_text())
        assert meta["urlSlug"] == "/archive/medium/post"


class TestReportMarkdown:
    """Tests for run report formatting."""

    def test_sections(self):
        report = RunReport(
            started_at="2024-05-02T08:00:00Z",
            queries=['"Daniel Lehewych"'],
            search_errors=['"Daniel Lehewych": quota exceeded'],
            raw_results=4,
            new_articles=[make_record(1, "Fresh", "2024-05-01")],
            skipped=[SkipEntry(title="A | B", url="https://x.com/a", host="x.com", reason="author-mismatch")],
        )
        markdown = format_as_markdown(report)

        assert markdown.startswith("# Discovery Report - 2024-05-02")
        assert "## New articles" in markdown
        assert "### [Fresh](https://medium.com/@dl/1)" in markdown
        assert "| [A \\| B](https://x.com/a) | x.com | author-mismatch |" in markdown
        assert "## Search errors" in markdown
        assert "## Updated articles" not in markdown
