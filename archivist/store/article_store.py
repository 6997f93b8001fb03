"""JSON-file article store."""

import json
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Set

from pydantic import ValidationError

from ..discovery.urls import canonical_key
from ..errors import StoreError
from ..models import ArticleRecord
from .layouts import ArrayLayout, StoreLayout, detect_layout


class ArticleStore:
    """Article records persisted as one JSON document.

    The document is read once by ``load`` and written once by ``save``. The
    shape found on disk (bare array or metadata envelope) is preserved.
    """

    def __init__(self, path: Path) -> None:
        """Initialize article store."""
        self.path = Path(path)
        self.layout: StoreLayout = ArrayLayout()
        self.records: List[ArticleRecord] = []
        self._document: Optional[Any] = None
        self._index: Dict[str, ArticleRecord] = {}
        self._normalized: Set[str] = set()
        self.loaded = False

    def __iter__(self) -> Iterator[ArticleRecord]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def load(self) -> "ArticleStore":
        """Read the store. A missing file is an empty array store.

        Raises:
            StoreError: If the file cannot be read or is not a valid store
        """
        self.layout = ArrayLayout()
        self._document = None
        self.records = []
        self._index = {}
        self._normalized = set()
        self.loaded = True

        if not self.path.exists():
            return self

        try:
            text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StoreError(f"Cannot read article store {self.path}: {e}")

        if not text.strip():
            return self

        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise StoreError(f"Invalid JSON in article store {self.path}: {e}")

        layout = detect_layout(document)
        if layout is None:
            raise StoreError(
                f"Unrecognized article store shape in {self.path}: "
                "expected an array or an object with an 'articles' array"
            )

        self.layout = layout
        self._document = document
        for position, raw in enumerate(layout.extract(document)):
            try:
                record = ArticleRecord.model_validate(raw)
            except ValidationError as e:
                raise StoreError(f"Invalid article at position {position} in {self.path}: {e}")
            if record.normalized_url and record.normalized_url in self._normalized:
                raise StoreError(
                    f"Duplicate normalizedUrl at position {position} in {self.path}: {record.normalized_url}"
                )
            self.records.append(record)
            self._index_record(record)

        return self

    def _index_record(self, record: ArticleRecord) -> None:
        if record.normalized_url:
            self._normalized.add(record.normalized_url)
        for key in self.keys_for(record):
            self._index.setdefault(key, record)

    @staticmethod
    def keys_for(record: ArticleRecord) -> List[str]:
        """Lookup keys for a record: its stored key and the key of its URL."""
        keys = []
        if record.normalized_url:
            keys.append(record.normalized_url)
        if record.url:
            key = canonical_key(record.url)
            if key not in keys:
                keys.append(key)
        return keys

    def find(self, key: str) -> Optional[ArticleRecord]:
        """Record stored under a canonical key."""
        return self._index.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._index

    def next_id(self) -> int:
        """One more than the largest numeric id in the store."""
        highest = 0
        for record in self.records:
            try:
                highest = max(highest, int(record.id))
            except (TypeError, ValueError):
                continue
        return highest + 1

    def add(self, record: ArticleRecord) -> None:
        """Append a new record.

        Raises:
            StoreError: If its normalized URL is already stored
        """
        if record.normalized_url and record.normalized_url in self._normalized:
            raise StoreError(f"Duplicate normalizedUrl: {record.normalized_url}")
        self.records.append(record)
        self._index_record(record)

    def replace(self, record: ArticleRecord) -> None:
        """Swap in an updated copy of a stored record, matched by id."""
        for position, existing in enumerate(self.records):
            if existing.id == record.id:
                self.records[position] = record
                for key, value in list(self._index.items()):
                    if value is existing:
                        self._index[key] = record
                self._index_record(record)
                return
        raise StoreError(f"No stored article with id {record.id}")

    def to_document(self) -> Any:
        """The JSON document ``save`` would write."""
        articles = [record.to_store_dict() for record in self.records]
        return self.layout.build(articles, self._document)

    def save(self) -> None:
        """Atomically write the store.

        Raises:
            StoreError: If the file cannot be written
        """
        document = self.to_document()
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StoreError(f"Cannot write article store {self.path}: {e}")
        self._document = document
