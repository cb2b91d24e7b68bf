"""Text cleanup rules used to build ticket summaries and descriptions.

Each rule is a pure function over strings so it can be tested on its own.
"""

from __future__ import annotations

import html
import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ticketbridge.mapping.models import UpdateBody

if TYPE_CHECKING:
    from ticketbridge.board import Update

QA_MARKER_RE = re.compile(r"\s*-?\s*\bLQA\b\s*-?\s*", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")

_LINE_BREAK_RE = re.compile(r"<br\s*/?>|</p>|</div>|</li>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")
_URL_RE = re.compile(r"https?://[^\s<>\"']+", re.IGNORECASE)
_DESCRIPTION_RE = re.compile(
    r"Description:\s*(.+?)(?=Screenshot:|Thanks|$)", re.IGNORECASE | re.DOTALL
)

# First-person sentence starts and their impersonal replacement.
# Order matters: the first matching rule wins.
IMPERSONAL_RULES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(pattern, re.IGNORECASE), replacement)
    for pattern, replacement in (
        (r"^I\s+can'?t\s+", "Cannot "),
        (r"^I\s+cannot\s+", "Cannot "),
        (r"^I\s+am\s+not\s+able\s+to\s+", "Unable to "),
        (r"^I\s+am\s+unable\s+to\s+", "Unable to "),
        (r"^I\s+can\s+not\s+", "Cannot "),
        (r"^I\s+see\s+", ""),
        (r"^I\s+found\s+", ""),
        (r"^I\s+noticed\s+", ""),
        (r"^I\s+have\s+", ""),
        (r"^I\s+got\s+", ""),
        (r"^I\s+get\s+", ""),
        (r"^I\s+am\s+seeing\s+", ""),
        (r"^I\s+am\s+getting\s+", ""),
        (r"^We\s+see\s+", ""),
        (r"^We\s+found\s+", ""),
        (r"^We\s+noticed\s+", ""),
        (r"^We\s+have\s+", ""),
        (r"^We\s+can'?t\s+", "Cannot "),
        (r"^We\s+cannot\s+", "Cannot "),
        (r"^I\s+am\s+", ""),
        (r"^I\s+", ""),
    )
)


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_qa_marker(text: str) -> str:
    """Remove the ``LQA`` marker and its separators from an item name."""
    return collapse_whitespace(QA_MARKER_RE.sub(" ", text or ""))


def make_impersonal(text: str) -> str:
    """Rewrite a first-person sentence start into impersonal form.

    At most one rule is applied; the result has its first letter
    capitalized. Text matching no rule is only capitalized.
    """
    result = (text or "").strip()
    for pattern, replacement in IMPERSONAL_RULES:
        if pattern.search(result):
            result = pattern.sub(replacement, result, count=1)
            break
    if result:
        result = result[0].upper() + result[1:]
    return result


def strip_markup(markup: str) -> str:
    """Convert update markup to plain text, keeping line breaks."""
    text = _LINE_BREAK_RE.sub("\n", markup or "")
    text = _TAG_RE.sub("", text)
    return html.unescape(text).strip()


def find_first_url(text: str) -> str | None:
    match = _URL_RE.search(text or "")
    return match.group(0) if match else None


def parse_update_body(markup: str) -> UpdateBody:
    """Split an update into description text and screenshot URL.

    The description is the text following a ``Description:`` marker up to
    ``Screenshot:``, ``Thanks`` or the end. Without the marker, the whole
    plain text minus the screenshot URL is used. Missing parts are empty
    strings.
    """
    text = strip_markup(markup)
    if not text:
        return UpdateBody(text="", description="", screenshot="")

    screenshot = find_first_url(text) or ""

    match = _DESCRIPTION_RE.search(text)
    if match:
        description = match.group(1).strip()
    else:
        description = text.replace(screenshot, "") if screenshot else text
        description = re.sub(r"Screenshot:\s*", "", description, flags=re.IGNORECASE).strip()

    return UpdateBody(text=text, description=description, screenshot=screenshot)


def select_earliest_update(updates: Iterable[Update]) -> Update | None:
    """Pick the earliest update by creation time.

    Sorting is stable, so equal timestamps keep their original order.
    Updates without a timestamp sort last.
    """
    ordered = sorted(
        updates,
        key=lambda u: (u.created_at is None, u.created_at.timestamp() if u.created_at else 0.0),
    )
    return ordered[0] if ordered else None
