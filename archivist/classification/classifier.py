"""Regex classifier assigning a type and topics to an article."""

from typing import List

from pydantic import BaseModel, Field

from .rules import DEFAULT_RULES, RuleSet, all_matches, first_match


class Classification(BaseModel):
    """Primary classification of an article."""

    type: str = Field(..., description="Single genre label")
    topics: List[str] = Field(..., description="Topic labels, never empty")


class Classifier:
    """Classify articles with an immutable rule set."""

    def __init__(self, rules: RuleSet = DEFAULT_RULES) -> None:
        self.rules = rules

    def classify(self, title: str, description: str = "", platform: str = "") -> Classification:
        """Classify an article.

        Args:
            title: Cleaned article title
            description: Snippet or subtitle
            platform: Publisher name, used for seeds and overrides

        Returns:
            Classification with a type and at least one topic
        """
        return Classification(
            type=self.detect_type(title, description, platform),
            topics=self.detect_topics(title, description, platform),
        )

    def detect_topics(self, title: str, description: str = "", platform: str = "") -> List[str]:
        """Platform seeds first, then every matching topic in table order."""
        description = description or ""
        text = f"{title or ''} {description}".lower()

        seeds = list(self.rules.topics_for_platform(platform))
        lowered_description = description.lower()
        for marker, marker_platform in self.rules.platform_markers:
            if marker in lowered_description:
                seeds.extend(self.rules.topics_for_platform(marker_platform))

        topics: List[str] = []
        for label in seeds + all_matches(self.rules.topic_rules, text):
            if label not in topics:
                topics.append(label)

        return topics or [self.rules.default_topic]

    def detect_type(self, title: str, description: str = "", platform: str = "") -> str:
        """Platform override, else the first matching type rule."""
        override = self.rules.type_for_platform(platform)
        if override:
            return override

        text = title or ""
        if self.rules.type_uses_description and description:
            text = f"{text} {description}"

        return first_match(self.rules.type_rules, text) or self.rules.default_type
