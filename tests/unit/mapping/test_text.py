"""Unit tests for summary and description text rules."""

from datetime import datetime, timezone

import pytest

from ticketbridge.board import Update
from ticketbridge.mapping import (
    extract_project_key,
    make_impersonal,
    parse_update_body,
    select_earliest_update,
    strip_markup,
    strip_qa_marker,
)


@pytest.mark.unit
class TestExtractProjectKey:
    """Tests for extract_project_key."""

    @pytest.mark.parametrize(
        ("url", "expected"),
        [
            ("https://acme.atlassian.net/browse/DOM2-6747", "DOM2"),
            ("https://acme.atlassian.net/browse/dom2-6747", "DOM2"),
            (
                "https://acme.atlassian.net/jira/software/c/projects/X/boards/1"
                "?selectedIssue=ABC-12",
                "ABC",
            ),
            ("https://acme.atlassian.net/issues/?filter=1&selectedIssue=PAY-3&x=1", "PAY"),
            ("Tracked in LOC-42 on the board", "LOC"),
        ],
    )
    def test_patterns(self, url: str, expected: str) -> None:
        assert extract_project_key(url) == expected

    def test_selected_issue_after_negative_filter(self) -> None:
        url = "https://acme.atlassian.net/issues/?filter=-1&selectedIssue=DOM2-6333"
        assert extract_project_key(url) == "DOM2"

    def test_selected_issue_wins_over_browse(self) -> None:
        url = "https://acme.atlassian.net/browse/AAA-1?selectedIssue=BBB-2"
        assert extract_project_key(url) == "BBB"

    @pytest.mark.parametrize(
        "url", [None, "", "https://acme.atlassian.net/jira/software/projects"]
    )
    def test_no_key(self, url: str | None) -> None:
        assert extract_project_key(url) is None


@pytest.mark.unit
class TestStripQaMarker:
    """Tests for strip_qa_marker."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("LQA - Button text cut off", "Button text cut off"),
            ("Checkout LQA", "Checkout"),
            ("Checkout - LQA - Mobile", "Checkout Mobile"),
            ("lqa-Price wrong", "Price wrong"),
            ("No marker here", "No marker here"),
            ("  extra   spaces  ", "extra spaces"),
        ],
    )
    def test_strip(self, raw: str, expected: str) -> None:
        assert strip_qa_marker(raw) == expected

    def test_marker_inside_word_kept(self) -> None:
        assert strip_qa_marker("SLQA report") == "SLQA report"


@pytest.mark.unit
class TestMakeImpersonal:
    """Tests for make_impersonal."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("I can't log in", "Cannot log in"),
            ("I cant log in", "Cannot log in"),
            ("I cannot save", "Cannot save"),
            ("I am not able to pay", "Unable to pay"),
            ("I am unable to pay", "Unable to pay"),
            ("I see the wrong price", "The wrong price"),
            ("We found a typo", "A typo"),
            ("We can't scroll", "Cannot scroll"),
            ("I am seeing English text", "English text"),
            ("I am confused by the menu", "Confused by the menu"),
            ("I think it is broken", "Think it is broken"),
            ("button is cut off", "Button is cut off"),
        ],
    )
    def test_rewrite(self, raw: str, expected: str) -> None:
        assert make_impersonal(raw) == expected

    def test_only_first_rule_applies(self) -> None:
        """After "I see " is removed the remaining "I " is left alone."""
        assert make_impersonal("I see I have errors") == "I have errors"

    def test_empty(self) -> None:
        assert make_impersonal("") == ""


@pytest.mark.unit
class TestParseUpdateBody:
    """Tests for parse_update_body and strip_markup."""

    def test_strip_markup(self) -> None:
        markup = "<p>Line one</p><p>Line &amp; two<br>three</p>"
        assert strip_markup(markup) == "Line one\nLine & two\nthree"

    def test_description_marker(self) -> None:
        body = parse_update_body(
            "<p>Description: Price shows $ instead of €</p>"
            "<p>Screenshot: https://files.example.com/shot.png</p><p>Thanks!</p>"
        )
        assert body.description == "Price shows $ instead of €"
        assert body.screenshot == "https://files.example.com/shot.png"

    def test_description_until_thanks(self) -> None:
        body = parse_update_body("Description: Wrong date format Thanks a lot")
        assert body.description == "Wrong date format"
        assert body.screenshot == ""

    def test_without_marker_uses_text_minus_url(self) -> None:
        body = parse_update_body(
            "<p>The title is truncated</p><p>Screenshot: https://x.example.com/a.png</p>"
        )
        assert body.description == "The title is truncated"
        assert body.screenshot == "https://x.example.com/a.png"

    def test_empty(self) -> None:
        body = parse_update_body("")
        assert body.text == ""
        assert body.description == ""
        assert body.screenshot == ""


@pytest.mark.unit
class TestSelectEarliestUpdate:
    """Tests for select_earliest_update."""

    def test_picks_oldest(self) -> None:
        newer = Update(id="2", body="newer", created_at=datetime(2025, 2, 1, tzinfo=timezone.utc))
        older = Update(id="1", body="older", created_at=datetime(2025, 1, 1, tzinfo=timezone.utc))

        assert select_earliest_update([newer, older]) is older

    def test_ties_keep_order(self) -> None:
        ts = datetime(2025, 1, 1, tzinfo=timezone.utc)
        first = Update(id="a", body="a", created_at=ts)
        second = Update(id="b", body="b", created_at=ts)

        assert select_earliest_update([first, second]) is first

    def test_missing_timestamp_sorts_last(self) -> None:
        undated = Update(id="x", body="x")
        dated = Update(id="y", body="y", created_at=datetime(2030, 1, 1, tzinfo=timezone.utc))

        assert select_earliest_update([undated, dated]) is dated

    def test_no_updates(self) -> None:
        assert select_earliest_update([]) is None
