"""Unit tests for the guild extractors."""

from __future__ import annotations

from datetime import date
from typing import Callable

import pytest

from tibiakit.adapters.parsers import parse_guild, parse_world_guilds
from tibiakit.core.domain.enums import Vocation
from tibiakit.core.domain.results import Found, Malformed, NotFound
from tibiakit.core.errors import RecordValidationError


@pytest.fixture
def guild_page(resource: Callable[[str], str]) -> str:
    return resource("guild.html")


@pytest.fixture
def world_guilds_page(resource: Callable[[str], str]) -> str:
    return resource("world_guilds.html")


# ---------------------------------------------------------------------------
# Guild page
# ---------------------------------------------------------------------------


class TestParseGuild:
    def test_information(self, guild_page: str) -> None:
        result = parse_guild(guild_page)
        assert isinstance(result, Found)
        guild = result.value
        assert guild.name == "Redd Alliance"
        assert guild.logo_url == "https://static.tibia.com/images/guildlogos/Redd_Alliance.gif"
        assert guild.description == "Bienvenidos a Redd Alliance. Hablamos español e inglés."
        assert guild.world == "Gladera"
        assert guild.founded == date(2008, 4, 30)
        assert guild.is_active is True
        assert guild.application_open is True
        assert guild.homepage == "https://redd.example.com"
        assert guild.disband_date is None

    def test_guildhall(self, guild_page: str) -> None:
        guildhall = parse_guild(guild_page).value.guildhall
        assert guildhall is not None
        assert guildhall.name == "Sky Lane, Guild 1"
        assert guildhall.paid_until == date(2023, 8, 12)

    def test_members(self, guild_page: str) -> None:
        guild = parse_guild(guild_page).value
        assert [(m.rank, m.name, m.title) for m in guild.members] == [
            ("Leader", "Galarzaa Fidera", "Gallant Guardian"),
            ("Vice Leader", "Tschas", None),
            ("Vice Leader", "Nezune", "Healer"),
            ("Member", "Dark Knight", None),
        ]
        leader = guild.members[0]
        assert leader.vocation is Vocation.ROYAL_PALADIN
        assert leader.level == 285
        assert leader.joined_on == date(2017, 7, 20)
        assert guild.ranks == ("Leader", "Vice Leader", "Member")
        assert guild.online_count == 2

    def test_invites(self, guild_page: str) -> None:
        invites = parse_guild(guild_page).value.invites
        assert [(i.name, i.invited_on) for i in invites] == [("Hyrule Mage", date(2023, 7, 8))]

    def test_guild_in_formation_closed_for_applications(self, guild_page: str) -> None:
        page = guild_page.replace(
            "It is currently active and opened for applications.",
            "It is currently in course of formation. It will be disbanded on Aug&#160;20&#160;2023 "
            "if there are still less than four vice leaders by then.",
        )
        guild = parse_guild(page).value
        assert guild.is_active is False
        assert guild.application_open is False
        assert guild.disband_date == date(2023, 8, 20)
        assert guild.disband_condition == "if there are still less than four vice leaders by then"

    def test_without_optional_blocks(self, guild_page: str) -> None:
        page = (
            guild_page.replace("Bienvenidos a Redd Alliance.<br/>Hablamos espa&ntilde;ol e ingl&eacute;s.", "")
            .replace("Invited Characters", "Other")
            .replace("Their home on Gladera", "Nothing")
        )
        guild = parse_guild(page).value
        assert guild.description is None
        assert guild.guildhall is None
        assert guild.invites == ()

    def test_is_deterministic(self, guild_page: str) -> None:
        assert parse_guild(guild_page) == parse_guild(guild_page)

    def test_internal_error_page_is_not_found(self) -> None:
        page = "<html><body><p>An internal error has occurred. Please try again later!</p></body></html>"
        assert isinstance(parse_guild(page), NotFound)

    def test_unrelated_page_is_malformed(self) -> None:
        result = parse_guild("<html><body>Maintenance</body></html>")
        assert isinstance(result, Malformed)
        assert "Guild Information" in result.reason

    def test_missing_foundation_notice_is_malformed(self, guild_page: str) -> None:
        page = guild_page.replace("The guild was founded on", "The guild lives on")
        assert isinstance(parse_guild(page), Malformed)

    def test_member_before_any_rank_is_malformed(self, guild_page: str) -> None:
        page = guild_page.replace("<td>Leader</td>", "<td></td>")
        result = parse_guild(page)
        assert isinstance(result, Malformed)
        assert "rank" in result.reason

    def test_member_at_level_zero_is_a_defect(self, guild_page: str) -> None:
        page = guild_page.replace("<td>48</td>", "<td>0</td>")
        with pytest.raises(RecordValidationError) as excinfo:
            parse_guild(page)
        assert excinfo.value.record_type == "Guild"


# ---------------------------------------------------------------------------
# World guild list
# ---------------------------------------------------------------------------


class TestParseWorldGuilds:
    def test_entries(self, world_guilds_page: str) -> None:
        result = parse_world_guilds(world_guilds_page)
        assert isinstance(result, Found)
        section = result.value
        assert section.world == "Gladera"
        assert [(e.name, e.description, e.is_active) for e in section.entries] == [
            ("Redd Alliance", "Bienvenidos a Redd Alliance.", True),
            ("Quiet Ones", None, True),
            ("New Dawn", "Recruiting everyone.", False),
        ]
        assert section.entries[0].logo_url.endswith("/guildlogos/Redd_Alliance.gif")

    def test_active_and_in_formation(self, world_guilds_page: str) -> None:
        section = parse_world_guilds(world_guilds_page).value
        assert [e.name for e in section.active_guilds] == ["Redd Alliance", "Quiet Ones"]
        assert [e.name for e in section.in_formation_guilds] == ["New Dawn"]

    def test_without_guilds_in_formation(self, world_guilds_page: str) -> None:
        page = world_guilds_page.replace("Guilds in Course of Formation on Gladera", "Other")
        assert len(parse_world_guilds(page).value.entries) == 2

    def test_unknown_world_is_not_found(self, world_guilds_page: str) -> None:
        page = world_guilds_page.replace("Active Guilds on Gladera", "No guilds")
        assert isinstance(parse_world_guilds(page), NotFound)

    def test_unrelated_page_is_malformed(self) -> None:
        assert isinstance(parse_world_guilds("<html><body>Maintenance</body></html>"), Malformed)

    def test_entry_without_name_is_malformed(self, world_guilds_page: str) -> None:
        page = world_guilds_page.replace("<b>Quiet Ones</b>", "Quiet Ones")
        assert isinstance(parse_world_guilds(page), Malformed)
