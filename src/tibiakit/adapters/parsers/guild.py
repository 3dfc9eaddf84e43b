"""Guild pages: a guild's information page and a world's guild list."""

from __future__ import annotations

import re

from bs4 import Tag

from tibiakit.adapters.parsers.html import (
    cells,
    clean_text,
    get_containing,
    make_soup,
    parse_enum,
    parse_integer,
    parse_tables_map,
    parse_tibia_date,
    rows,
)
from tibiakit.core.builders.guild import GuildBuilder, GuildsSectionBuilder
from tibiakit.core.domain.enums import Vocation
from tibiakit.core.domain.guild import Guild, GuildsSection
from tibiakit.core.domain.results import extractor
from tibiakit.core.errors import MalformedInputError

_INTERNAL_ERROR = "An internal error has occurred"
_FOUNDED = re.compile(
    r"^(?P<description>.*?)\s*The guild was founded on (?P<world>[\w ]+?) on (?P<date>[A-Z][a-z]{2} \d{1,2} \d{4})\.\s*"
    r"It is currently (?P<status>active|in course of formation)",
    re.DOTALL,
)
_APPLICATIONS = re.compile(r"opened for applications")
_GUILDHALL = re.compile(r"Their home on [\w ]+? is (?P<name>.+?)\. The rent is paid until (?P<date>[A-Z][a-z]{2} \d{1,2} \d{4})")
_DISBAND = re.compile(r"It will be disbanded on (?P<date>[A-Z][a-z]{2} \d{1,2} \d{4}),? (?P<condition>if [^.]+)\.")
_MEMBER_NAME = re.compile(r"^(?P<name>.+?)(?: \((?P<title>.+)\))?$")
_WORLD_CAPTION = re.compile(r"^Active Guilds on (?P<world>.+)$")


@extractor
def parse_guild(content: str) -> Guild | None:
    """Extract a `Guild`; `None` when no guild has that name."""

    soup = make_soup(content)
    tables = parse_tables_map(soup)
    information = tables.get("Guild Information")
    if information is None:
        if _INTERNAL_ERROR in content:
            return None
        raise MalformedInputError("no 'Guild Information' table")

    builder = GuildBuilder()
    _parse_header(builder, information)
    _parse_information(builder, information)

    members = tables.get("Guild Members")
    if members is not None:
        _parse_members(builder, members)

    invites = tables.get("Invited Characters")
    if invites is not None:
        _parse_invites(builder, invites)

    return builder.build()


def _parse_header(builder: GuildBuilder, information: Tag) -> None:
    heading = information.find("h1")
    if heading is None:
        raise MalformedInputError("guild page has no name heading")
    builder.name(clean_text(heading))

    logo = information.select_one("#GuildLogoContainer img[src]")
    if logo is None:
        raise MalformedInputError("guild page has no logo")
    builder.logo_url(str(logo["src"]))


def _parse_information(builder: GuildBuilder, information: Tag) -> None:
    container = information.select_one("#GuildInformationContainer")
    if container is None:
        raise MalformedInputError("guild page has no information block")
    text = clean_text(container)

    founded = _FOUNDED.search(text)
    if founded is None:
        raise MalformedInputError("guild page has no foundation notice")
    builder.description(founded.group("description") or None)
    builder.world(founded.group("world"))
    builder.founded(parse_tibia_date(founded.group("date")))
    builder.is_active(founded.group("status") == "active")
    builder.application_open(_APPLICATIONS.search(text) is not None)

    homepage = container.find("a", href=True)
    builder.homepage(str(homepage["href"]) if homepage is not None else None)

    guildhall = _GUILDHALL.search(text)
    if guildhall:
        builder.guildhall(guildhall.group("name"), parse_tibia_date(guildhall.group("date")))

    disband = _DISBAND.search(text)
    if disband:
        builder.disband(parse_tibia_date(disband.group("date")), disband.group("condition"))


def _parse_members(builder: GuildBuilder, table: Tag) -> None:
    rank = ""
    # The first row holds the column headers.
    for row in rows(table)[1:]:
        columns = cells(row)
        if len(columns) != 6:
            continue
        # A blank rank cell continues the rank of the row above.
        rank = clean_text(columns[0]) or rank
        if not rank:
            raise MalformedInputError("guild member listed before any rank")
        match = _MEMBER_NAME.match(clean_text(columns[1]))
        if match is None:
            raise MalformedInputError("guild member without a name")
        builder.add_member(
            rank=rank,
            name=match.group("name"),
            title=match.group("title"),
            vocation=parse_enum(Vocation, clean_text(columns[2]), label="vocation"),
            level=parse_integer(clean_text(columns[3])),
            joined_on=parse_tibia_date(clean_text(columns[4])),
            is_online=clean_text(columns[5]).lower() == "online",
        )


def _parse_invites(builder: GuildBuilder, table: Tag) -> None:
    for row in rows(table)[1:]:
        columns = cells(row)
        if len(columns) != 2:
            continue
        builder.add_invite(clean_text(columns[0]), parse_tibia_date(clean_text(columns[1])))


@extractor
def parse_world_guilds(content: str) -> GuildsSection | None:
    """Extract a world's `GuildsSection`; `None` when the world does not exist."""

    soup = make_soup(content)
    tables = parse_tables_map(soup)
    builder = GuildsSectionBuilder()
    active: Tag | None = None
    for caption, table in tables.items():
        match = _WORLD_CAPTION.match(caption)
        if match:
            builder.world(match.group("world"))
            active = table
            break
    if active is None:
        if get_containing(tables, "World Selection") is not None:
            return None
        raise MalformedInputError("no 'Active Guilds' table")

    _parse_guild_rows(builder, active, is_active=True)
    formation = get_containing(tables, "Guilds in Course of Formation")
    if formation is not None:
        _parse_guild_rows(builder, formation, is_active=False)
    return builder.build()


def _parse_guild_rows(builder: GuildsSectionBuilder, table: Tag, *, is_active: bool) -> None:
    for row in rows(table)[1:]:
        columns = cells(row)
        if len(columns) != 3:
            continue
        logo = columns[0].find("img", src=True)
        name = columns[1].find("b")
        if logo is None or name is None:
            raise MalformedInputError("guild list entry without a logo or a name")
        guild_name = clean_text(name)
        description = clean_text(columns[1])[len(guild_name):].strip()
        builder.add_entry(
            name=guild_name,
            description=description or None,
            logo_url=str(logo["src"]),
            is_active=is_active,
        )
