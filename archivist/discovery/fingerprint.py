"""Content fingerprints for change detection."""

import hashlib
from typing import Optional


def content_fingerprint(title: Optional[str], subtitle: Optional[str] = "") -> str:
    """SHA-256 hex digest of the lower-cased, trimmed ``title\\nsubtitle``."""
    normalized = f"{title or ''}\n{subtitle or ''}".lower().strip()
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()
