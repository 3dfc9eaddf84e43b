"""Unit tests for the highscores extractor."""

from __future__ import annotations

from typing import Callable

import pytest

from tibiakit.adapters.parsers import parse_highscores
from tibiakit.core.domain.enums import (
    HighscoresBattlEyeType,
    HighscoresCategory,
    HighscoresProfession,
    HighscoresPvpType,
    Vocation,
)
from tibiakit.core.domain.results import Found, Malformed


@pytest.fixture
def highscores_page(resource: Callable[[str], str]) -> str:
    return resource("highscores.html")


class TestParseHighscores:
    def test_filters_from_form(self, highscores_page: str) -> None:
        result = parse_highscores(highscores_page)
        assert isinstance(result, Found)
        highscores = result.value
        assert highscores.world == "Gladera"
        assert highscores.category is HighscoresCategory.EXPERIENCE
        assert highscores.vocation is HighscoresProfession.PALADINS
        assert highscores.battleye_type is HighscoresBattlEyeType.INITIALLY_PROTECTED
        assert highscores.pvp_types == (HighscoresPvpType.OPEN_PVP, HighscoresPvpType.OPTIONAL_PVP)
        assert highscores.last_update_minutes == 7

    def test_pagination(self, highscores_page: str) -> None:
        highscores = parse_highscores(highscores_page).value
        assert (highscores.current_page, highscores.total_pages, highscores.results_count) == (1, 20, 1000)

    def test_entries(self, highscores_page: str) -> None:
        entries = parse_highscores(highscores_page).value.entries
        assert [(e.rank, e.name, e.vocation, e.world, e.level, e.value) for e in entries] == [
            (1, "Galarzaa Fidera", Vocation.ROYAL_PALADIN, "Gladera", 1005, 17_059_569_800),
            (2, "Tschas", Vocation.ELITE_KNIGHT, "Gladera", 998, 16_800_000_000),
        ]

    def test_all_worlds(self, highscores_page: str) -> None:
        page = highscores_page.replace(
            '<option value="Gladera" selected="selected">', '<option value="Gladera">'
        )
        assert parse_highscores(page).value.world is None

    def test_without_navigation_is_a_single_page(self, highscores_page: str) -> None:
        start = highscores_page.index('<div class="PageNavigation">')
        end = highscores_page.index("</div>", start) + len("</div>")
        highscores = parse_highscores(highscores_page[:start] + highscores_page[end:]).value
        assert (highscores.current_page, highscores.total_pages, highscores.results_count) == (1, 1, 2)

    def test_is_deterministic(self, highscores_page: str) -> None:
        assert parse_highscores(highscores_page) == parse_highscores(highscores_page)

    def test_missing_table_is_malformed(self) -> None:
        assert isinstance(parse_highscores("<html><body></body></html>"), Malformed)

    def test_unknown_category_is_malformed(self, highscores_page: str) -> None:
        page = highscores_page.replace('<option value="6" selected="selected">', '<option value="99" selected="selected">')
        result = parse_highscores(page)
        assert isinstance(result, Malformed)
        assert "category" in result.reason

    def test_missing_last_update_is_malformed(self, highscores_page: str) -> None:
        page = highscores_page.replace("Last Update: 7 minutes ago", "")
        result = parse_highscores(page)
        assert isinstance(result, Malformed)
        assert "Last Update" in result.reason
