"""URL canonicalization, unwrapping and host helpers."""

import re
from typing import Iterable, Optional
from urllib.parse import parse_qsl, unquote, urlencode, urljoin, urlsplit, urlunsplit

TRACKING_PARAMS = frozenset(
    {
        "utm_source",
        "utm_medium",
        "utm_campaign",
        "utm_term",
        "utm_content",
        "utm_id",
        "gclid",
        "fbclid",
        "mc_cid",
        "mc_eid",
        "igshid",
        "ref",
        "ref_src",
    }
)

SAFELINKS_HOSTS = ("safelinks.protection.outlook.com", "safelinks.office.net")
URLDEFENSE_HOST = "urldefense.com"

_INDEX_PAGE_RE = re.compile(r"/(?:index|home)\.(?:html?|php)$", re.IGNORECASE)
_URLDEFENSE_RE = re.compile(r"__([^_]+)__")
_NON_ARTICLE_PATH_RE = re.compile(
    r"/(topic|topics|tag|tags|category|categories|author|authors|search|photos|video|index)/"
)

PLATFORM_HOSTS = (
    ("medium.com", "Medium"),
    ("newsweek.com", "Newsweek"),
    ("bigthink.com", "BigThink"),
    ("allwork.space", "Allwork.Space"),
    ("interestingengineering.com", "Interesting Engineering"),
    ("qure.ai", "Qure.ai"),
    ("psychcentral.com", "PsychCentral"),
)


def unwrap_url(url: str) -> str:
    """Extract the destination from known redirect wrappers.

    Handles Microsoft SafeLinks (``url`` query parameter) and Proofpoint
    URLDefense (``__<url>__`` path segment), recursively. Anything else is
    returned unchanged.
    """
    try:
        parts = urlsplit(url)
        host = (parts.hostname or "").lower()
    except ValueError:
        return url

    if host.endswith(SAFELINKS_HOSTS):
        for key, value in parse_qsl(parts.query, keep_blank_values=True):
            if key == "url" and value:
                return unwrap_url(unquote(value))

    if host == URLDEFENSE_HOST:
        match = _URLDEFENSE_RE.search(parts.path)
        if match:
            return unwrap_url(unquote(match.group(1)))

    return url


def canonicalize(url: str, canonical_href: Optional[str] = None, strip_www: bool = True) -> str:
    """Normalize a URL into its deduplication key.

    Malformed input is returned unchanged so one bad URL cannot abort a run.
    """
    try:
        # Relative canonical links resolve against the page URL
        raw = urljoin(url, canonical_href) if canonical_href else url
        parts = urlsplit(raw)
        # Accessing .port validates the netloc
        parts.port
    except (ValueError, TypeError):
        return url

    if not parts.scheme or not parts.netloc:
        return url

    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key not in TRACKING_PARAMS
    ]

    path = parts.path
    if path != "/" and path.endswith("/"):
        path = path[:-1]
    path = _INDEX_PAGE_RE.sub("", path)
    if not path:
        path = "/"

    netloc = parts.netloc.lower()
    if strip_www and netloc.startswith("www."):
        netloc = netloc[4:]

    return urlunsplit((parts.scheme.lower(), netloc, path, urlencode(query), ""))


def canonical_key(url: str) -> str:
    """Unwrap then canonicalize."""
    return canonicalize(unwrap_url(url))


def extract_host(url: str) -> str:
    """Lower-cased host without ``www.``; empty string when unparseable."""
    try:
        host = urlsplit(url).hostname or ""
    except ValueError:
        return ""
    host = host.lower()
    if host.startswith("www."):
        host = host[4:]
    return host


def host_matches(host: str, blocked: Iterable[str]) -> bool:
    """True if host equals or is a subdomain of any blocked host."""
    host = (host or "").lower()
    return any(host == b or host.endswith("." + b) for b in blocked)


def is_known_non_article_url(url: str) -> bool:
    """Index, tag and author pages that are almost never articles."""
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    host = (parts.hostname or "").lower()
    if host.startswith("www."):
        host = host[4:]
    path = parts.path.lower()

    if _NON_ARTICLE_PATH_RE.search(path):
        return True

    if "medium.com" in host and path.startswith("/tag/"):
        return True
    if "bigthink.com" in host and re.match(r"^/topics?/", path):
        return True

    return False


def detect_platform(url: str) -> str:
    """Publisher name from the URL host."""
    host = extract_host(url)
    if not host:
        return "Web"
    for needle, name in PLATFORM_HOSTS:
        if needle in host:
            return name
    label = host.split(".")[0]
    return " ".join(word[:1].upper() + word[1:] for word in label.split("-") if word) or "Web"
