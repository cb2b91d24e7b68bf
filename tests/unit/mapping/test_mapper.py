"""Unit tests for PayloadMapper."""

import pytest

from ticketbridge.mapping import MappingError, PayloadMapper, TicketPayload, to_adf


@pytest.fixture
def mapper() -> PayloadMapper:
    return PayloadMapper()


@pytest.mark.unit
class TestBuildPayload:
    """Tests for build_payload."""

    def test_full_payload(self, mapper: PayloadMapper, make_item, make_parent) -> None:
        """Project, summary, description and labels come from item and parent."""
        payload = mapper.build_payload(make_item(), make_parent())

        assert payload.project_key == "DOM2"
        assert payload.summary == "[LOC] Checkout LQA - Button text cut off"
        assert payload.issue_type == "Bug"
        assert payload.labels == ("Productloc-UX-space", "Productloc-bug")
        assert payload.description == (
            "Hi!\n\n"
            "We are done with the LQA for Checkout. We have found this issue:\n\n"
            "Issue: Button text cut off\n"
            "Affected languages: German, French\n\n"
            "Screenshot:\n"
            "No screenshot available\n\n"
            "Thanks!"
        )

    def test_description_from_earliest_update(
        self, mapper: PayloadMapper, make_item, make_parent
    ) -> None:
        item = make_item(
            update="<p>Description: The Pay button label overflows</p>"
            "<p>Screenshot: https://files.example.com/1.png</p>"
        )

        payload = mapper.build_payload(item, make_parent())

        assert "Issue: The Pay button label overflows\n" in payload.description
        assert "Screenshot:\nhttps://files.example.com/1.png\n" in payload.description

    def test_plain_http_screenshot(self, mapper: PayloadMapper, make_item, make_parent) -> None:
        item = make_item(update="Description: text cut off\nScreenshot: http://x/s.png")

        payload = mapper.build_payload(item, make_parent(link="https://host/browse/DOM2-6298"))

        assert payload.project_key == "DOM2"
        assert "Issue: text cut off\n" in payload.description
        assert "Screenshot:\nhttp://x/s.png\n" in payload.description

    def test_default_languages(self, mapper: PayloadMapper, make_item, make_parent) -> None:
        payload = mapper.build_payload(make_item(languages=""), make_parent())
        assert "Affected languages: All languages\n" in payload.description

    def test_missing_parent_link_raises(
        self, mapper: PayloadMapper, make_item, make_parent
    ) -> None:
        with pytest.raises(MappingError, match="project key not found"):
            mapper.build_payload(make_item(), make_parent(link=None))

    def test_link_without_key_raises(self, mapper: PayloadMapper, make_item, make_parent) -> None:
        parent = make_parent(link="https://acme.atlassian.net/jira/software/projects")
        with pytest.raises(MappingError):
            mapper.build_payload(make_item(), parent)

    def test_empty_item_name_raises(self, mapper: PayloadMapper, make_item, make_parent) -> None:
        with pytest.raises(MappingError, match="no name"):
            mapper.build_payload(make_item(name="LQA"), make_parent())

    def test_unnamed_parent(self, mapper: PayloadMapper, make_item, make_parent) -> None:
        payload = mapper.build_payload(make_item(), make_parent(name="LQA"))
        assert payload.summary == "[LOC] Unknown LQA - Button text cut off"

    def test_impersonal_summary(self, mapper: PayloadMapper, make_item, make_parent) -> None:
        item = make_item(name="LQA - I can't open the menu")

        plain = mapper.build_payload(item, make_parent())
        rewritten = mapper.build_payload(item, make_parent(), impersonal=True)

        assert plain.summary.endswith("- I can't open the menu")
        assert rewritten.summary.endswith("- Cannot open the menu")

    def test_unknown_category_uses_fallback(
        self, mapper: PayloadMapper, make_item, make_parent
    ) -> None:
        payload = mapper.build_payload(make_item(type_of_issue="Other"), make_parent())
        assert payload.labels == ("Productloc-bug",)


@pytest.mark.unit
class TestReporterId:
    """Tests for reporter_id."""

    def test_first_person(self, mapper: PayloadMapper, make_parent) -> None:
        assert mapper.reporter_id(make_parent(person_id="77")) == "77"

    def test_no_people_column(self, mapper: PayloadMapper, make_parent) -> None:
        assert mapper.reporter_id(make_parent()) is None


@pytest.mark.unit
class TestBuildDraft:
    """Tests for build_draft."""

    def test_draft_with_payload(self, mapper: PayloadMapper, make_item, make_parent) -> None:
        draft = mapper.build_draft(
            make_item(name="LQA - I see truncated text"),
            make_parent(),
            reporter_email="dana@acme.com",
        )

        assert draft.payload is not None
        assert draft.mapping_error is None
        assert draft.project_key == "DOM2"
        assert draft.summary == "[LOC] Checkout LQA - Truncated text"
        assert draft.priority == "High"
        assert draft.type_of_issue == "UI issue"
        assert draft.raw_update_body == "No updates found"
        assert draft.reporter_email == "dana@acme.com"

    def test_draft_without_parent(self, mapper: PayloadMapper, make_item) -> None:
        """A missing parent is reported on the draft, not raised."""
        draft = mapper.build_draft(make_item(parent_id=None), None)

        assert draft.payload is None
        assert draft.project_key == "No Jira link found"
        assert draft.summary == "[LOC] Unknown LQA - Button text cut off"
        assert draft.mapping_error

    def test_draft_with_unparseable_link(
        self, mapper: PayloadMapper, make_item, make_parent
    ) -> None:
        url = "https://acme.atlassian.net/jira/software/projects"
        draft = mapper.build_draft(make_item(), make_parent(link=url))

        assert draft.payload is None
        assert draft.project_key == f"Not found in: {url}"

    def test_fallback_summary_is_impersonal(
        self, mapper: PayloadMapper, make_item, make_parent
    ) -> None:
        url = "https://acme.atlassian.net/jira/software/projects"
        draft = mapper.build_draft(make_item(name="LQA - I can't pay"), make_parent(link=url))

        assert draft.payload is None
        assert draft.summary == "[LOC] Checkout LQA - Cannot pay"

    def test_draft_defaults(self, mapper: PayloadMapper, make_item, make_parent) -> None:
        draft = mapper.build_draft(make_item(type_of_issue="", priority=""), make_parent())

        assert draft.type_of_issue == "Bug"
        assert draft.priority == "Medium"


@pytest.mark.unit
class TestTicketPayload:
    """Tests for TicketPayload validation and rendering."""

    def test_invalid_project_key(self) -> None:
        with pytest.raises(MappingError):
            TicketPayload(project_key="dom-2", summary="s", description="d")

    def test_empty_summary(self) -> None:
        with pytest.raises(MappingError):
            TicketPayload(project_key="DOM2", summary="  ", description="d")

    def test_to_fields(self) -> None:
        payload = TicketPayload(
            project_key="DOM2", summary="s", description="a\nb", labels=("L",)
        )

        fields = payload.to_fields()

        assert fields["project"] == {"key": "DOM2"}
        assert fields["issuetype"] == {"name": "Bug"}
        assert fields["labels"] == ["L"]
        assert fields["description"]["type"] == "doc"

    def test_to_request(self) -> None:
        payload = TicketPayload(project_key="DOM2", summary="s", description="d")

        request = payload.to_request(item_id="101", board_id="555", reporter_email="a@b.c")

        assert request == {
            "projectKey": "DOM2",
            "summary": "s",
            "description": "d",
            "issueType": "Bug",
            "labels": [],
            "reporterEmail": "a@b.c",
            "subitemId": "101",
            "boardId": "555",
        }

    def test_adf_paragraphs_and_breaks(self) -> None:
        doc = to_adf("one\ntwo\n\nthree")

        assert doc["content"] == [
            {
                "type": "paragraph",
                "content": [
                    {"type": "text", "text": "one"},
                    {"type": "hardBreak"},
                    {"type": "text", "text": "two"},
                ],
            },
            {"type": "paragraph", "content": [{"type": "text", "text": "three"}]},
        ]
