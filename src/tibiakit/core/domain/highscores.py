"""Highscores records."""

from __future__ import annotations

from pydantic import Field

from tibiakit.core.domain.enums import (
    HighscoresBattlEyeType,
    HighscoresCategory,
    HighscoresProfession,
    HighscoresPvpType,
    Vocation,
)
from tibiakit.core.domain.base import TibiaModel
from tibiakit.core.domain.pagination import Paginated


class HighscoresEntry(TibiaModel):
    rank: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    vocation: Vocation
    world: str = Field(..., min_length=1)
    level: int = Field(..., ge=1)
    value: int = Field(..., ge=0)


class Highscores(Paginated):
    """A single page of a highscores listing."""

    world: str | None = Field(default=None, description="World filter. None means all worlds.")
    category: HighscoresCategory
    vocation: HighscoresProfession = HighscoresProfession.ALL
    battleye_type: HighscoresBattlEyeType = HighscoresBattlEyeType.ANY_WORLD
    pvp_types: tuple[HighscoresPvpType, ...] = ()
    last_update_minutes: int = Field(
        default=0,
        ge=0,
        description="Minutes since the highscores were last updated, as printed by the site.",
    )
    entries: tuple[HighscoresEntry, ...] = ()
