"""Tests for content fingerprints and title cleanup."""

from __future__ import annotations

import hashlib

from archivist.discovery import clean_title, collapse_ws, content_fingerprint


class TestContentFingerprint:
    """Tests for content_fingerprint."""

    def test_matches_sha256_of_normalized_text(self):
        """Should hash the lower-cased title and subtitle joined by a newline."""
        expected = hashlib.sha256("my title\nmy subtitle".encode("utf-8")).hexdigest()
        assert content_fingerprint("My Title", "My Subtitle") == expected

    def test_case_insensitive(self):
        """Should ignore letter case."""
        assert content_fingerprint("Title", "Sub") == content_fingerprint("TITLE", "sub")

    def test_stable_across_calls(self):
        """Should be deterministic."""
        assert content_fingerprint("A", "B") == content_fingerprint("A", "B")

    def test_differs_on_content_change(self):
        """Should change when the snippet changes."""
        assert content_fingerprint("A", "B") != content_fingerprint("A", "C")

    def test_ignores_surrounding_whitespace(self):
        """Should trim before hashing."""
        assert content_fingerprint("Title", "Sub ") == content_fingerprint("Title", "Sub")

    def test_missing_subtitle(self):
        """Should treat None like an empty subtitle."""
        assert content_fingerprint("A", None) == content_fingerprint("A")


class TestCleanTitle:
    """Tests for title cleanup."""

    def test_strips_platform_suffixes(self):
        """Should drop publisher suffixes."""
        assert clean_title("On Meaning - Medium") == "On Meaning"
        assert clean_title("Why We Work | Newsweek") == "Why We Work"
        assert clean_title("The Mind - Big Think") == "The Mind"

    def test_strips_byline(self):
        """Should drop a trailing byline for the author."""
        assert clean_title("On Meaning by Daniel Lehewych - Medium", "Daniel Lehewych") == "On Meaning"

    def test_collapses_whitespace(self):
        """Should collapse runs of whitespace."""
        assert collapse_ws("  a \n b\t c ") == "a b c"
        assert clean_title("  On   Meaning ") == "On Meaning"
