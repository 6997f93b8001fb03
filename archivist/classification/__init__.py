"""Topic and type classification."""

from .classifier import Classification, Classifier
from .enrichment import Enrichment, enrich
from .rules import DEFAULT_RULES, Rule, RuleSet, TOPIC_RULES, TYPE_RULES, all_matches, first_match, rule

__all__ = [
    "Classification",
    "Classifier",
    "DEFAULT_RULES",
    "Enrichment",
    "Rule",
    "RuleSet",
    "TOPIC_RULES",
    "TYPE_RULES",
    "all_matches",
    "enrich",
    "first_match",
    "rule",
]
