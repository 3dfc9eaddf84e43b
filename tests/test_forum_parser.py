"""Unit tests for the forum announcement extractor."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

import pytest

from tibiakit.adapters.parsers import parse_forum_announcement
from tibiakit.core.builders import ForumAnnouncementBuilder
from tibiakit.core.domain.enums import Vocation
from tibiakit.core.domain.results import BuildFailure, Found, Malformed, NotFound
from tibiakit.core.errors import RecordValidationError

_AUTHOR_LINK = (
    '<a href="https://www.tibia.com/community/?subtopic=characters&amp;name=Galarzaa+Fidera">'
    "Galarzaa&#160;Fidera</a><br/>"
)


@pytest.fixture
def announcement_page(resource: Callable[[str], str]) -> str:
    return resource("forum_announcement.html")


def _replace_author(page: str, block: str) -> str:
    start = page.index(_AUTHOR_LINK)
    end = page.index("</div>", start)
    return page[:start] + block + page[end:]


class TestParseForumAnnouncement:
    def test_announcement(self, announcement_page: str) -> None:
        result = parse_forum_announcement(announcement_page)
        assert isinstance(result, Found)
        announcement = result.value
        assert announcement.announcement_id == 8
        assert announcement.title == "Board Rules"
        assert (announcement.section, announcement.section_id) == ("Community Boards", 2)
        assert (announcement.board, announcement.board_id) == ("Auditorium (English Only)", 25)
        assert announcement.content == "<p>Please read the <b>rules</b> before posting.</p>"
        assert announcement.start_date == datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)
        assert announcement.end_date == datetime(2024, 2, 1, 9, 0, tzinfo=timezone.utc)

    def test_author(self, announcement_page: str) -> None:
        author = parse_forum_announcement(announcement_page).value.author
        assert author.name == "Galarzaa Fidera"
        assert author.position == "Community Manager"
        assert author.world == "Gladera"
        assert author.vocation is Vocation.ROYAL_PALADIN
        assert (author.level, author.posts) == (285, 1203)
        assert author.is_available

    def test_author_without_position(self, announcement_page: str) -> None:
        page = announcement_page.replace("Community Manager<br/>", "")
        assert parse_forum_announcement(page).value.author.position is None

    @pytest.mark.parametrize("state", ["deleted", "traded"])
    def test_unavailable_author(self, announcement_page: str, state: str) -> None:
        page = _replace_author(announcement_page, f"Old&#160;Character ({state})")
        author = parse_forum_announcement(page).value.author
        assert author.name == "Old Character"
        assert author.is_available is False
        assert (author.is_deleted, author.is_traded) == (state == "deleted", state == "traded")
        assert author.level is None

    def test_is_deterministic(self, announcement_page: str) -> None:
        assert parse_forum_announcement(announcement_page) == parse_forum_announcement(announcement_page)

    def test_internal_error_page_is_not_found(self) -> None:
        page = "<html><body><p>An internal error has occurred. Please try again later!</p></body></html>"
        assert isinstance(parse_forum_announcement(page), NotFound)

    def test_unrelated_page_is_malformed(self) -> None:
        result = parse_forum_announcement("<html><body>Maintenance</body></html>")
        assert isinstance(result, Malformed)
        assert "breadcrumbs" in result.reason

    def test_missing_board_link_is_malformed(self, announcement_page: str) -> None:
        page = announcement_page.replace("boardid=25", "board=25")
        assert isinstance(parse_forum_announcement(page), Malformed)

    def test_missing_display_period_is_malformed(self, announcement_page: str) -> None:
        page = announcement_page.replace("is displayed from", "was shown since")
        result = parse_forum_announcement(page)
        assert isinstance(result, Malformed)
        assert "display period" in result.reason

    def test_unknown_author_vocation_is_malformed(self, announcement_page: str) -> None:
        page = announcement_page.replace("Vocation: Royal Paladin", "Vocation: Bard")
        assert isinstance(parse_forum_announcement(page), Malformed)

    def test_inverted_display_period_is_a_defect(self, announcement_page: str) -> None:
        page = announcement_page.replace("Feb&#160;01&#160;2024", "Dec&#160;01&#160;2023")
        with pytest.raises(RecordValidationError) as excinfo:
            parse_forum_announcement(page)
        assert excinfo.value.record_type == "ForumAnnouncement"


class TestForumAnnouncementBuilder:
    def test_every_field_is_required(self) -> None:
        builder = ForumAnnouncementBuilder().announcement_id(8).title("Board Rules")
        outcome = builder.finalize()
        assert isinstance(outcome, BuildFailure)
        assert outcome.missing_fields == (
            "board",
            "board_id",
            "section",
            "section_id",
            "author",
            "content",
            "start_date",
            "end_date",
        )

    def test_build(self) -> None:
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        announcement = (
            ForumAnnouncementBuilder()
            .announcement_id(8)
            .title("Board Rules")
            .board("Auditorium (English Only)", 25)
            .section("Community Boards", 2)
            .author("Galarzaa Fidera", level=285)
            .content("")
            .start_date(start)
            .end_date(start)
            .build()
        )
        assert announcement.author.level == 285
        assert announcement.content == ""

    def test_invalid_author_fails_like_build(self) -> None:
        with pytest.raises(RecordValidationError) as excinfo:
            ForumAnnouncementBuilder().author("Galarzaa Fidera", level=0)
        assert excinfo.value.record_type == "ForumAnnouncement"
