from __future__ import annotations

from typing import Self

from tibiakit.core.builders.base import StagedBuilder
from tibiakit.core.domain.enums import (
    HighscoresBattlEyeType,
    HighscoresCategory,
    HighscoresProfession,
    HighscoresPvpType,
    Vocation,
)
from tibiakit.core.domain.highscores import Highscores, HighscoresEntry


class HighscoresBuilder(StagedBuilder[Highscores]):
    record_type = Highscores

    def world(self, world: str | None) -> Self:
        return self._set("world", world)

    def category(self, category: HighscoresCategory) -> Self:
        return self._set("category", category)

    def vocation(self, vocation: HighscoresProfession) -> Self:
        return self._set("vocation", vocation)

    def battleye_type(self, battleye_type: HighscoresBattlEyeType) -> Self:
        return self._set("battleye_type", battleye_type)

    def pvp_types(self, pvp_types: list[HighscoresPvpType]) -> Self:
        return self._set("pvp_types", sorted(set(pvp_types), key=lambda t: t.value))

    def last_update_minutes(self, minutes: int) -> Self:
        return self._set("last_update_minutes", minutes)

    def current_page(self, current_page: int) -> Self:
        return self._set("current_page", current_page)

    def total_pages(self, total_pages: int) -> Self:
        return self._set("total_pages", total_pages)

    def results_count(self, results_count: int) -> Self:
        return self._set("results_count", results_count)

    def add_entry(self, *, rank: int, name: str, vocation: Vocation, world: str, level: int, value: int) -> Self:
        return self._append(
            "entries",
            self._entry(HighscoresEntry, rank=rank, name=name, vocation=vocation, world=world, level=level, value=value),
        )
