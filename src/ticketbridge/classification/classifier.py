"""Classifier - Maps a category and free text to tracker labels."""

from __future__ import annotations

import logging

from ticketbridge.classification.rules import DEFAULT_RULE_TABLE, FALLBACK_LABEL, RuleTable

logger = logging.getLogger("ticketbridge.classification")


class Classifier:
    """Rule-based label selection.

    Every rule of the item's category is evaluated against the lower-cased
    title and description; all matching rules contribute their label.
    Unknown categories fail open to a single generic label so that
    classification never blocks ticket creation.
    """

    def __init__(
        self,
        rule_table: RuleTable = DEFAULT_RULE_TABLE,
        fallback_label: str = FALLBACK_LABEL,
    ) -> None:
        """Initialize the Classifier.

        Args:
            rule_table: Category rules to evaluate.
            fallback_label: Label returned for unknown categories.
        """
        self.rule_table = rule_table
        self.fallback_label = fallback_label

    def classify(self, raw_category: str | None, title: str, description: str = "") -> list[str]:
        """Select labels for an issue.

        Args:
            raw_category: Category value as shown on the board.
            title: Issue title.
            description: Issue description text.

        Returns:
            Matched labels in rule-table order, the category defaults when
            nothing matched, or the fallback label for unknown categories.
        """
        category = self.rule_table.normalize(raw_category)
        config = self.rule_table.get(category) if category else None
        if config is None:
            logger.warning(
                "Unknown type of issue %r (normalized: %r), using fallback label",
                raw_category,
                category,
            )
            return [self.fallback_label]

        text = f"{title} {description or ''}".lower()
        matched: list[str] = []
        for rule in config.rules:
            if rule.label not in matched and rule.matches(text):
                matched.append(rule.label)

        if matched:
            logger.debug("Category %s matched labels %s", category, matched)
            return matched

        return list(config.defaults)
