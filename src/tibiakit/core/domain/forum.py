"""Forum records."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, model_validator

from tibiakit.core.domain.base import TibiaModel
from tibiakit.core.domain.enums import Vocation


class ForumAuthor(TibiaModel):
    """The character behind a post.

    Deleted or traded characters only keep their name; every other field is
    `None` for them.
    """

    name: str = Field(..., min_length=1)
    level: int | None = Field(default=None, ge=1)
    world: str | None = None
    vocation: Vocation | None = None
    position: str | None = Field(default=None, description="Special position, e.g. CipSoft Member.")
    posts: int | None = Field(default=None, ge=0)
    is_deleted: bool = False
    is_traded: bool = False

    @property
    def is_available(self) -> bool:
        return not (self.is_deleted or self.is_traded)


class ForumAnnouncement(TibiaModel):
    """An announcement in the forums."""

    announcement_id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1)
    board: str = Field(..., min_length=1)
    board_id: int = Field(..., ge=1)
    section: str = Field(..., min_length=1)
    section_id: int = Field(..., ge=1)
    author: ForumAuthor
    content: str = Field(..., description="HTML body of the announcement.")
    start_date: datetime
    end_date: datetime

    @model_validator(mode="after")
    def _check_dates(self) -> "ForumAnnouncement":
        if self.end_date < self.start_date:
            raise ValueError("announcement ends before it starts")
        return self
