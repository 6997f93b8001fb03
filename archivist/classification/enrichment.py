"""Display metadata derived from a classification.

Nothing here feeds back into the primary type and topics; the generators use
it to decorate JSON-LD with ``about``, ``genre``, ``educationalLevel`` and
``mentions``.
"""

import re
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, Field

from .classifier import Classification

TOPIC_DISCIPLINES: Dict[str, Tuple[str, ...]] = {
    "Philosophy": ("Philosophy",),
    "Ethics": ("Philosophy", "Ethics"),
    "Consciousness": ("Philosophy of Mind", "Cognitive Science"),
    "Free Will": ("Philosophy of Mind", "Metaphysics"),
    "AI & Technology": ("Computer Science",),
    "AI Ethics": ("Computer Science", "Applied Ethics"),
    "Digital Culture": ("Media Studies",),
    "Healthcare": ("Medicine", "Public Health"),
    "Fitness & Nutrition": ("Exercise Science", "Nutrition Science"),
    "Mental Health": ("Psychiatry", "Clinical Psychology"),
    "Longevity": ("Gerontology",),
    "Politics & Society": ("Political Science", "Sociology"),
    "Economics": ("Economics",),
    "Education": ("Education",),
    "Work & Career": ("Organizational Behavior",),
    "Writing & Creativity": ("Literature",),
    "Psychology": ("Psychology",),
    "Religion & Spirituality": ("Religious Studies", "Theology"),
    "Science": ("Philosophy of Science",),
    "Climate & Environment": ("Environmental Science",),
}

TYPE_GENRES: Dict[str, str] = {
    "Interview": "Interview",
    "ScholarlyArticle": "Academic Essay",
    "OpinionNewsArticle": "Opinion",
    "HowTo": "Guide",
    "AnalysisNewsArticle": "Analysis",
    "Review": "Review",
    "BlogPosting": "Essay",
}

ADVANCED_TOPICS = frozenset({"Philosophy", "Consciousness", "Free Will", "AI Ethics"})

PHILOSOPHERS: Tuple[str, ...] = (
    "Aristotle",
    "Plato",
    "Socrates",
    "Kant",
    "Hegel",
    "Nietzsche",
    "Kierkegaard",
    "Heidegger",
    "Husserl",
    "Sartre",
    "Camus",
    "Wittgenstein",
    "Descartes",
    "Spinoza",
    "Hume",
    "Locke",
    "Mill",
    "Bentham",
    "Rawls",
    "Marx",
    "Foucault",
    "Derrida",
    "Dennett",
    "Chalmers",
    "Nagel",
    "Singer",
)

_PHILOSOPHER_RE = re.compile(r"\b(" + "|".join(PHILOSOPHERS) + r")\b")
_INTERVIEW_SUBJECT_RE = re.compile(
    r"(?i:interview with|in conversation with|conversation with|talks with|speaks with)\s+"
    r"((?:[A-Z][\w.'-]*\s?){1,4})"
)


class Enrichment(BaseModel):
    """Derived display metadata."""

    disciplines: List[str] = Field(default_factory=list, description="Academic disciplines")
    genre: str = Field("Essay", description="Human-readable genre")
    educational_level: str = Field("General", description="Intended audience level")
    mentions: List[str] = Field(default_factory=list, description="Philosophers named in the text")
    interview_subject: Optional[str] = Field(None, description="Person interviewed, if any")


def disciplines_for(topics: List[str]) -> List[str]:
    """Disciplines for topics, de-duplicated in topic order."""
    result: List[str] = []
    for topic in topics:
        for discipline in TOPIC_DISCIPLINES.get(topic, ()):
            if discipline not in result:
                result.append(discipline)
    return result


def educational_level(classification: Classification) -> str:
    if classification.type == "ScholarlyArticle":
        return "Advanced"
    if ADVANCED_TOPICS.intersection(classification.topics):
        return "Intermediate"
    return "General"


def find_philosophers(text: str) -> List[str]:
    found: List[str] = []
    for match in _PHILOSOPHER_RE.finditer(text or ""):
        if match.group(1) not in found:
            found.append(match.group(1))
    return found


def find_interview_subject(text: str) -> Optional[str]:
    match = _INTERVIEW_SUBJECT_RE.search(text or "")
    if not match:
        return None
    return match.group(1).strip() or None


def enrich(title: str, description: str, classification: Classification) -> Enrichment:
    """Derive display metadata for an already classified article."""
    text = f"{title or ''} {description or ''}"
    subject = None
    if classification.type == "Interview":
        subject = find_interview_subject(text)

    return Enrichment(
        disciplines=disciplines_for(classification.topics),
        genre=TYPE_GENRES.get(classification.type, "Essay"),
        educational_level=educational_level(classification),
        mentions=find_philosophers(text),
        interview_subject=subject,
    )
