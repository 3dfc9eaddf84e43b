"""Forum pages: announcements."""

from __future__ import annotations

import re
from typing import Any

from bs4 import Tag

from tibiakit.adapters.parsers.html import (
    clean_text,
    make_soup,
    parse_enum,
    parse_integer,
    parse_tibia_datetime,
)
from tibiakit.core.builders.forum import ForumAnnouncementBuilder
from tibiakit.core.domain.enums import Vocation
from tibiakit.core.domain.forum import ForumAnnouncement
from tibiakit.core.domain.results import extractor
from tibiakit.core.errors import MalformedInputError

_INTERNAL_ERROR = "An internal error has occurred"
_SECTION_ID = re.compile(r"sectionid=(\d+)", re.IGNORECASE)
_BOARD_ID = re.compile(r"boardid=(\d+)", re.IGNORECASE)
_ANNOUNCEMENT_ID = re.compile(r"announcementid=(\d+)", re.IGNORECASE)
_DATETIME = r"[A-Z][a-z]{2} \d{1,2} \d{4}, [\d:]+ CES?T"
_DISPLAY_PERIOD = re.compile(rf"displayed from (?P<start>{_DATETIME}) to (?P<end>{_DATETIME})")
_UNAVAILABLE_AUTHOR = re.compile(r"^(?P<name>.+?)\s*\((?P<state>deleted|traded)\)$")


@extractor
def parse_forum_announcement(content: str) -> ForumAnnouncement | None:
    """Extract a `ForumAnnouncement`; `None` when no announcement has that id."""

    soup = make_soup(content)
    breadcrumbs = soup.select_one("div.ForumBreadCrumbs")
    if breadcrumbs is None:
        if _INTERNAL_ERROR in content:
            return None
        raise MalformedInputError("no forum breadcrumbs")

    builder = ForumAnnouncementBuilder()
    _parse_breadcrumbs(builder, breadcrumbs)

    post = soup.select_one("div.ForumPost")
    if post is None:
        raise MalformedInputError("no announcement post")

    permalink = post.find("a", href=_ANNOUNCEMENT_ID)
    if permalink is None:
        raise MalformedInputError("announcement has no permalink")
    builder.announcement_id(int(_ANNOUNCEMENT_ID.search(str(permalink["href"])).group(1)))

    heading = post.select_one("div.PostHeading")
    body = post.select_one("div.PostText")
    if heading is None or body is None:
        raise MalformedInputError("announcement has no heading or text")
    builder.title(clean_text(heading))
    builder.content(body.decode_contents().strip())

    details = post.select_one("div.PostDetails")
    period = _DISPLAY_PERIOD.search(clean_text(details)) if details is not None else None
    if period is None:
        raise MalformedInputError("announcement has no display period")
    builder.start_date(parse_tibia_datetime(period.group("start")))
    builder.end_date(parse_tibia_datetime(period.group("end")))

    author = post.select_one("div.PostCharacterText")
    if author is None:
        raise MalformedInputError("announcement has no author")
    _parse_author(builder, author)
    return builder.build()


def _parse_breadcrumbs(builder: ForumAnnouncementBuilder, breadcrumbs: Tag) -> None:
    section = breadcrumbs.find("a", href=_SECTION_ID)
    board = breadcrumbs.find("a", href=_BOARD_ID)
    if section is None or board is None:
        raise MalformedInputError("breadcrumbs lack the section or the board")
    builder.section(clean_text(section), int(_SECTION_ID.search(str(section["href"])).group(1)))
    builder.board(clean_text(board), int(_BOARD_ID.search(str(board["href"])).group(1)))


def _parse_author(builder: ForumAnnouncementBuilder, block: Tag) -> None:
    link = block.find("a")
    if link is None:
        match = _UNAVAILABLE_AUTHOR.match(clean_text(block))
        if match is None:
            raise MalformedInputError("unexpected author block")
        state = match.group("state")
        builder.author(match.group("name"), is_deleted=state == "deleted", is_traded=state == "traded")
        return

    name = clean_text(link)
    values: dict[str, Any] = {}
    for line in block.stripped_strings:
        text = clean_text(line)
        if text == name:
            continue
        if text.startswith("Inhabitant of "):
            values["world"] = text.removeprefix("Inhabitant of ")
        elif text.startswith("Vocation:"):
            values["vocation"] = parse_enum(Vocation, text.removeprefix("Vocation:").strip(), label="vocation")
        elif text.startswith("Level:"):
            values["level"] = parse_integer(text)
        elif text.startswith("Posts:"):
            values["posts"] = parse_integer(text)
        elif "position" not in values:
            values["position"] = text
    builder.author(name, **values)
