"""Rule tables for topic and type classification."""

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class Rule:
    """A label assigned when its pattern matches."""

    label: str
    pattern: "re.Pattern[str]"

    def matches(self, text: str) -> bool:
        return bool(self.pattern.search(text))


def rule(label: str, pattern: str) -> Rule:
    return Rule(label=label, pattern=re.compile(pattern, re.IGNORECASE))


def first_match(rules: Iterable[Rule], text: str) -> Optional[str]:
    """Label of the first matching rule; order encodes priority."""
    for r in rules:
        if r.matches(text):
            return r.label
    return None


def all_matches(rules: Iterable[Rule], text: str) -> List[str]:
    """Labels of every matching rule, in table order."""
    return [r.label for r in rules if r.matches(text)]


TOPIC_RULES: Tuple[Rule, ...] = (
    rule("Philosophy", r"philosoph|metaphysic|epistemolog|ontolog|phenomenolog|existential"),
    rule(
        "Ethics",
        r"\b(?:ethics|ethical|moral\w*|virtues?|good|evil|justice|deontolog\w*|consequential\w*)\b",
    ),
    rule("Consciousness", r"consciousness|\bminds?\b|awareness|subjective|qualia|cogniti|sentien"),
    rule("Free Will", r"free will|determinism|\bagency\b|\bchoices?\b|volition|compatibil"),
    rule(
        "AI & Technology",
        r"artificial intelligence|\bai\b|machine learning|\bml\b|\bllms?\b|\bagi\b"
        r"|algorithm|technolog|digital|computer",
    ),
    rule("AI Ethics", r"\bai ethics|machine ethics|robot rights|algorithmic bias|\bai safety"),
    rule("Digital Culture", r"digital|internet|online|social media|cyber|virtual|metaverse"),
    rule("Healthcare", r"health|medical|medicine|doctor|patient|treatment|therapy|disease|clinical"),
    rule(
        "Fitness & Nutrition",
        r"fitness|exercise|workout|nutrition|\bdiet|supplement|muscle|training|protein",
    ),
    rule("Mental Health", r"mental health|depression|anxiety|therapy|wellbeing|well-being|mindfulness"),
    rule("Longevity", r"longevity|\baging\b|lifespan|anti-aging|healthspan"),
    rule("Politics & Society", r"politic|democra|society|social|governance|policy|government|civic"),
    rule("Economics", r"economic|market|finance|money|business|capitalism|\btrade|\bgdp\b|inflation"),
    rule(
        "Education",
        r"education|learning|teaching|school|academic|university|knowledge|pedagog",
    ),
    rule(
        "Work & Career",
        r"work|career|\bjobs?\b|employment|workplace|remote|office|professional|labor|\bquit|resign",
    ),
    rule(
        "Writing & Creativity",
        r"writing|writer|creativ|\bauthors?\b|literature|\bstory|narrative|fiction",
    ),
    rule("Psychology", r"psycholog|mental|emotion|feeling|therapy|trauma|behavioral|cognitive"),
    rule(
        "Religion & Spirituality",
        r"\bgods?\b|divine|theolog|religio|\bfaith|buddhis|christian|sacred|spiritual",
    ),
    rule("Science", r"science|scientific|research|\bstudy|\bstudies|experiment|\bdata\b|evidence|empirical"),
    rule("Climate & Environment", r"climate|environment|sustainab|carbon|renewable|ecolog"),
)

TYPE_RULES: Tuple[Rule, ...] = (
    rule(
        "Interview",
        r"\binterview|in conversation with|conversation with|\bq\s?&\s?a\b|talks with|speaks with",
    ),
    rule(
        "ScholarlyArticle",
        r"phenomenology|epistemology|metaphysics|ontology|dialectic|philosophical|examine"
        r"|analysis of|critique|dissertation",
    ),
    rule(
        "OpinionNewsArticle",
        r"\b(?:opinion|should|must|need to|why we|it's time|we need|believe|argue|contend)\b",
    ),
    rule(
        "HowTo",
        r"how to|guide to|tips for|steps to|ways to|tutorial|strategies|method|technique|here's how",
    ),
    rule(
        "AnalysisNewsArticle",
        r"analysis|analyzing|trend|future of|landscape|forecast|examining|impact of|data shows",
    ),
    rule(
        "Review",
        r"review|reviewing|assessment of|evaluation|critique of|book review|product review",
    ),
)


@dataclass(frozen=True)
class RuleSet:
    """Immutable classification configuration.

    Attributes:
        topic_rules: Topic table; every match contributes a label.
        type_rules: Type table; the first match wins.
        default_type: Type when no rule matches.
        default_topic: Topic when nothing matches.
        platform_topics: Topics seeded for a publisher.
        platform_types: Publisher-wide type overrides.
        type_uses_description: Also run type rules over the description.
    """

    topic_rules: Tuple[Rule, ...] = TOPIC_RULES
    type_rules: Tuple[Rule, ...] = TYPE_RULES
    default_type: str = "BlogPosting"
    default_topic: str = "General"
    platform_topics: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
        ("Newsweek", ("Politics & Society",)),
        ("Allwork.Space", ("Work & Career", "Digital Culture")),
    )
    platform_types: Tuple[Tuple[str, str], ...] = (("Newsweek", "OpinionNewsArticle"),)
    type_uses_description: bool = False
    # Hosts mentioned in a description that imply a platform's topic seeds
    platform_markers: Tuple[Tuple[str, str], ...] = (("allwork.space", "Allwork.Space"),)

    def topics_for_platform(self, platform: str) -> Tuple[str, ...]:
        return dict(self.platform_topics).get(platform, ())

    def type_for_platform(self, platform: str) -> Optional[str]:
        return dict(self.platform_types).get(platform)

    @property
    def topic_labels(self) -> List[str]:
        return [r.label for r in self.topic_rules]


DEFAULT_RULES = RuleSet()

