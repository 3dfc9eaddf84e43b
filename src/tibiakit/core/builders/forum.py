from __future__ import annotations

from datetime import datetime
from typing import Self

from tibiakit.core.builders.base import StagedBuilder
from tibiakit.core.domain.enums import Vocation
from tibiakit.core.domain.forum import ForumAnnouncement, ForumAuthor


class ForumAnnouncementBuilder(StagedBuilder[ForumAnnouncement]):
    record_type = ForumAnnouncement

    def announcement_id(self, announcement_id: int) -> Self:
        return self._set("announcement_id", announcement_id)

    def title(self, title: str) -> Self:
        return self._set("title", title)

    def board(self, board: str, board_id: int) -> Self:
        self._set("board", board)
        return self._set("board_id", board_id)

    def section(self, section: str, section_id: int) -> Self:
        self._set("section", section)
        return self._set("section_id", section_id)

    def author(
        self,
        name: str,
        *,
        level: int | None = None,
        world: str | None = None,
        vocation: Vocation | None = None,
        position: str | None = None,
        posts: int | None = None,
        is_deleted: bool = False,
        is_traded: bool = False,
    ) -> Self:
        return self._set(
            "author",
            self._entry(
                ForumAuthor,
                name=name,
                level=level,
                world=world,
                vocation=vocation,
                position=position,
                posts=posts,
                is_deleted=is_deleted,
                is_traded=is_traded,
            ),
        )

    def content(self, content: str) -> Self:
        return self._set("content", content)

    def start_date(self, start_date: datetime) -> Self:
        return self._set("start_date", start_date)

    def end_date(self, end_date: datetime) -> Self:
        return self._set("end_date", end_date)
