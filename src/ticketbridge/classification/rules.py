"""Label rule table: category -> ordered keyword rules + default labels."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

FALLBACK_LABEL = "Productloc-bug"


@dataclass(frozen=True)
class LabelRule:
    """A case-insensitive regex that contributes one label when it matches."""

    pattern: str
    label: str
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "regex", re.compile(self.pattern, re.IGNORECASE))

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


@dataclass(frozen=True)
class CategoryRules:
    """Ordered rules and default labels for one category."""

    rules: tuple[LabelRule, ...]
    defaults: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.rules:
            raise ValueError("CategoryRules requires at least one rule")
        if not self.defaults:
            raise ValueError("CategoryRules requires at least one default label")


class RuleTable:
    """Immutable mapping of canonical category name to :class:`CategoryRules`.

    Category lookups go through an alias table so board values like
    "Format issues" or "ICU Issue" resolve to their canonical category.
    """

    def __init__(
        self,
        categories: Mapping[str, CategoryRules],
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        if not categories:
            raise ValueError("RuleTable requires at least one category")
        self._categories = MappingProxyType(dict(categories))

        alias_map = {name.lower(): name for name in self._categories}
        for alias, canonical in (aliases or {}).items():
            if canonical not in self._categories:
                raise ValueError(f"Alias {alias!r} points to unknown category {canonical!r}")
            alias_map[alias.strip().lower()] = canonical
        self._aliases = MappingProxyType(alias_map)

    @property
    def categories(self) -> Iterable[str]:
        return self._categories.keys()

    def normalize(self, raw_category: str | None) -> str | None:
        """Resolve a board category value to its canonical name, or None."""
        if not raw_category:
            return None
        return self._aliases.get(raw_category.strip().lower())

    def get(self, category: str) -> CategoryRules | None:
        return self._categories.get(category)


def _rules(*pairs: tuple[str, str]) -> tuple[LabelRule, ...]:
    return tuple(LabelRule(pattern, label) for pattern, label in pairs)


DEFAULT_CATEGORIES: dict[str, CategoryRules] = {
    "UI issue": CategoryRules(
        rules=_rules(
            (
                r"cut off|truncat|overlap|hidden|cropped|clipped|not visible|can't see"
                r"|missing text|text missing",
                "Productloc-UX-space",
            ),
            (
                r"align|layout|line break|design|position|margin|padding|wrap|responsive",
                "Productloc-UX-design",
            ),
            (r"image|icon|logo|screenshot|picture|graphic|banner", "Productloc-UX-image"),
            (r"not work|broken|crash|error|fail|bug|click|tap|button", "Productloc-bug"),
        ),
        defaults=("Productloc-UX-design",),
    ),
    "Format Issue": CategoryRules(
        rules=_rules(
            (
                r"currency|€|\$|£|¥|symbol|price|cost|amounts?|thousand|decimal|separator",
                "Productloc-format-currency",
            ),
            (
                r"\baddress\b|street|city|region|country|postal|zip|state|province",
                "Productloc-format-address",
            ),
            (
                r"\bdate\b|\btime\b|\bhour\b|\bminute\b|\bAM\b|\bPM\b|24h|12h|timezone|GMT|UTC",
                "Productloc-format-time",
            ),
            (
                r"spacing|punctuation|quote|ellips|comma|period|colon|semicolon|dash|hyphen",
                "Productloc-format-text",
            ),
            (
                r"parameter|variable|placeholder|\{|\}|%s|%d|token|dynamic",
                "Productloc-format-parameters",
            ),
        ),
        defaults=("Productloc-format-text",),
    ),
    "Text in English": CategoryRules(
        rules=_rules(
            (r"hardcoded|hardcode|hard coded|in code|not translat", "Productloc-hardcoded"),
            (r"image|icon|banner|graphic", "Productloc-UX-image"),
        ),
        defaults=("Productloc-missing-translation",),
    ),
    "ICU": CategoryRules(
        rules=_rules(
            (
                r"plural|gender|select|singular|count|number|one|other|few|many",
                "Productloc-format-text",
            ),
            (
                r"parameter|variable|placeholder|\{|\}|token|position|order",
                "Productloc-format-parameters",
            ),
        ),
        defaults=("Productloc-format-text", "Productloc-format-parameters"),
    ),
    "Screenshot has different content": CategoryRules(
        rules=_rules(
            (r"image|screenshot|picture|visual", "Productloc-UX-image"),
            (r"wrong|incorrect|mismatch|different|outdated", "Productloc-bug"),
            (r"translation|translated|translat", "Productloc-incorrect-translation"),
        ),
        defaults=("Productloc-UX-image",),
    ),
    "Smartling has different content": CategoryRules(
        rules=_rules(
            (r"missing|not there|doesn't exist|empty", "Productloc-missing-translation"),
            (r"wrong|incorrect|bad translation", "Productloc-incorrect-translation"),
            (r"sync|update|pull|push|deploy", "Productloc-bug"),
        ),
        defaults=("Productloc-bug",),
    ),
    "GA issue": CategoryRules(
        rules=_rules(
            (r"missing|not translat|english", "Productloc-missing-translation"),
            (
                r"wrong translat|incorrect translat|bad translat",
                "Productloc-incorrect-translation",
            ),
            (r"hardcode|hard code", "Productloc-hardcoded"),
            (r"format|currency|date|time|address", "Productloc-format-text"),
        ),
        defaults=("Productloc-bug",),
    ),
    "General flow": CategoryRules(
        rules=_rules(
            (r"design|UX|user experience|confusing|unclear", "Productloc-UX-design"),
            (r"space|cut|truncat|hidden|overlap", "Productloc-UX-space"),
            (r"format|text|punctuation", "Productloc-format-text"),
        ),
        defaults=("Productloc-bug",),
    ),
    "KB article": CategoryRules(
        rules=_rules(
            (r"missing|not translat|english|untranslat", "Productloc-missing-translation"),
            (r"wrong|incorrect|error|mistranslat", "Productloc-incorrect-translation"),
            (r"format|spacing|bullet|list|markup|punctuation", "Productloc-format-text"),
            (r"image|screenshot|picture", "Productloc-UX-image"),
            (r"link|broken|not work|404", "Productloc-bug"),
        ),
        defaults=("Productloc-missing-translation",),
    ),
}

# Board values seen in the wild; canonical names resolve case-insensitively
CATEGORY_ALIASES: dict[str, str] = {
    "ui issues": "UI issue",
    "format issues": "Format Issue",
    "icu issue": "ICU",
    "icu issues": "ICU",
    "ga issues": "GA issue",
    "kb articles": "KB article",
}

DEFAULT_RULE_TABLE = RuleTable(DEFAULT_CATEGORIES, CATEGORY_ALIASES)
