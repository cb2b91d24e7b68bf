"""Classification - Rule-based label selection for QA issues."""

from ticketbridge.classification.classifier import Classifier
from ticketbridge.classification.rules import (
    CATEGORY_ALIASES,
    DEFAULT_RULE_TABLE,
    FALLBACK_LABEL,
    CategoryRules,
    LabelRule,
    RuleTable,
)

__all__ = [
    "CATEGORY_ALIASES",
    "DEFAULT_RULE_TABLE",
    "FALLBACK_LABEL",
    "CategoryRules",
    "Classifier",
    "LabelRule",
    "RuleTable",
]
