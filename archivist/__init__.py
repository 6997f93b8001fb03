"""Archivist - byline discovery and metadata archive builder."""

__version__ = "0.1.0"
