"""Unit tests for the world overview and world page extractors."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Callable

import pytest

from tibiakit.adapters.parsers import parse_world, parse_world_overview
from tibiakit.adapters.parsers.world import parse_battleye
from tibiakit.core.domain.enums import BattlEyeType, PvpType, TransferType, Vocation, WorldLocation
from tibiakit.core.domain.results import Found, Malformed, NotFound


class TestParseBattlEye:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Protected by BattlEye since its release.", (BattlEyeType.GREEN, None)),
            ("Protected by BattlEye since Aug 29 2017.", (BattlEyeType.YELLOW, date(2017, 8, 29))),
            ("Not protected by BattlEye.", (BattlEyeType.UNPROTECTED, None)),
            ("", (BattlEyeType.UNPROTECTED, None)),
        ],
    )
    def test_status_texts(self, text: str, expected: tuple) -> None:
        assert parse_battleye(text) == expected


class TestParseWorldOverview:
    def test_record_and_worlds(self, resource: Callable[[str], str]) -> None:
        result = parse_world_overview(resource("world_overview.html"))
        assert isinstance(result, Found)
        overview = result.value
        assert overview.record_count == 64028
        assert overview.record_date == datetime(2024, 10, 5, 17, 55, tzinfo=timezone.utc)
        assert [world.name for world in overview.worlds] == ["Antica", "Gladera", "Zuna"]
        assert overview.total_online == 1536

    def test_world_rows(self, resource: Callable[[str], str]) -> None:
        antica, gladera, zuna = parse_world_overview(resource("world_overview.html")).value.worlds

        assert antica.online_count == 1024
        assert antica.location is WorldLocation.EUROPE
        assert antica.pvp_type is PvpType.OPEN_PVP
        assert antica.battleye_type is BattlEyeType.GREEN
        assert antica.transfer_type is TransferType.REGULAR
        assert antica.is_premium_only is False

        assert gladera.battleye_type is BattlEyeType.YELLOW
        assert gladera.battleye_date == date(2017, 8, 29)
        assert gladera.is_premium_only is True
        assert gladera.transfer_type is TransferType.LOCKED

        assert zuna.is_online is False
        assert zuna.online_count == 0
        assert zuna.pvp_type is PvpType.HARDCORE_PVP
        assert zuna.battleye_type is BattlEyeType.UNPROTECTED
        assert zuna.transfer_type is TransferType.BLOCKED
        assert zuna.is_experimental is True

    def test_missing_record_is_malformed(self, resource: Callable[[str], str]) -> None:
        page = resource("world_overview.html").replace("Overall Maximum:", "Maximum:")
        assert isinstance(parse_world_overview(page), Malformed)

    def test_missing_worlds_table_is_malformed(self, resource: Callable[[str], str]) -> None:
        page = resource("world_overview.html").replace("Regular Worlds", "Something Else")
        result = parse_world_overview(page)
        assert isinstance(result, Malformed)
        assert "worlds" in result.reason


class TestParseWorld:
    def test_information(self, resource: Callable[[str], str]) -> None:
        result = parse_world(resource("world.html"))
        assert isinstance(result, Found)
        world = result.value
        assert world.name == "Gladera"
        assert world.is_online is True
        assert world.online_count == 512
        assert world.record_count == 1946
        assert world.record_date == datetime(2022, 1, 15, 19, 10, tzinfo=timezone.utc)
        assert world.creation_date == "2017-04"
        assert world.location is WorldLocation.NORTH_AMERICA
        assert world.pvp_type is PvpType.OPTIONAL_PVP
        assert world.is_premium_only is True
        assert world.transfer_type is TransferType.LOCKED
        assert world.world_quest_titles == ("Rise of Devovorga", "Bewitched")
        assert world.battleye_type is BattlEyeType.YELLOW
        assert world.battleye_date == date(2017, 8, 29)
        assert world.is_experimental is False

    def test_online_players(self, resource: Callable[[str], str]) -> None:
        players = parse_world(resource("world.html")).value.online_players
        assert [(p.name, p.level, p.vocation) for p in players] == [
            ("Galarzaa Fidera", 285, Vocation.ROYAL_PALADIN),
            ("Tschas", 412, Vocation.ELITE_KNIGHT),
        ]

    def test_is_deterministic(self, resource: Callable[[str], str]) -> None:
        page = resource("world.html")
        assert parse_world(page) == parse_world(page)

    def test_unknown_world_is_not_found(self, resource: Callable[[str], str]) -> None:
        assert isinstance(parse_world(resource("world_not_found.html")), NotFound)

    def test_missing_information_table_is_malformed(self, resource: Callable[[str], str]) -> None:
        page = resource("world.html").replace("World Information", "Information")
        assert isinstance(parse_world(page), Malformed)

    def test_missing_world_selector_is_malformed(self, resource: Callable[[str], str]) -> None:
        page = resource("world.html").replace('name="world"', 'name="other"')
        result = parse_world(page)
        assert isinstance(result, Malformed)
        assert "world name" in result.reason

    def test_no_quest_titles(self, resource: Callable[[str], str]) -> None:
        page = resource("world.html").replace(
            '<a href="#">Rise of Devovorga</a>, <a href="#">Bewitched</a>',
            "This game world currently has no title.",
        )
        assert parse_world(page).value.world_quest_titles == ()
