"""Character information page."""

from __future__ import annotations

import re

from bs4 import Tag

from tibiakit.adapters.parsers.html import (
    cells,
    clean_text,
    get_containing,
    key_value_rows,
    make_soup,
    parse_enum,
    parse_integer,
    parse_tables_map,
    parse_tibia_datetime,
    require_row,
    rows,
)
from tibiakit.core.builders.character import CharacterBuilder
from tibiakit.core.domain.character import Character
from tibiakit.core.domain.enums import AccountStatus, Sex, Vocation
from tibiakit.core.domain.results import extractor
from tibiakit.core.errors import MalformedInputError

_TITLE = re.compile(r"^(?P<title>.*?)\s*\((?P<count>\d+) titles? unlocked\)$")
_GUILD = re.compile(r"^(?P<rank>.+?) of the (?P<name>.+)$")
_DEATH = re.compile(r"^(?P<kind>Died|Killed) at Level (?P<level>\d+) by (?P<killers>.+?)\.?$")
_KILLER_SEPARATOR = re.compile(r",\s*|\s+and\s+")
_LIST_NUMBER = re.compile(r"^\d+\.\s*")
_DELETION = re.compile(r",?\s*will be deleted at (?P<date>.+)$")


@extractor
def parse_character(content: str) -> Character | None:
    """Extract a `Character`; `None` when the name is not registered."""

    soup = make_soup(content)
    tables = parse_tables_map(soup)
    if get_containing(tables, "Could not find character") is not None:
        return None

    information = tables.get("Character Information")
    if information is None:
        raise MalformedInputError("no 'Character Information' table")

    builder = CharacterBuilder()
    _parse_information(builder, key_value_rows(information))

    deaths = tables.get("Character Deaths")
    if deaths is not None:
        _parse_deaths(builder, deaths)

    characters = tables.get("Characters")
    if characters is not None:
        _parse_other_characters(builder, characters)

    return builder.build()


def _parse_information(builder: CharacterBuilder, values: dict[str, Tag]) -> None:
    name = clean_text(require_row(values, "Name"))
    if "(traded)" in name:
        builder.traded(True)
        name = name.replace("(traded)", "").strip()
    deletion = _DELETION.search(name)
    if deletion:
        builder.deletion_date(parse_tibia_datetime(deletion.group("date")))
        name = name[: deletion.start()].strip()
    builder.name(name)

    if "Former Names" in values:
        builder.former_names([n.strip() for n in clean_text(values["Former Names"]).split(",") if n.strip()])

    if "Title" in values:
        title_text = clean_text(values["Title"])
        match = _TITLE.match(title_text)
        if match is None:
            raise MalformedInputError(f"unexpected title format {title_text!r}")
        title = match.group("title")
        builder.title(None if title == "None" else title)
        builder.unlocked_titles(int(match.group("count")))

    builder.sex(parse_enum(Sex, clean_text(require_row(values, "Sex")).lower(), label="sex"))
    builder.vocation(parse_enum(Vocation, clean_text(require_row(values, "Vocation")), label="vocation"))
    builder.level(parse_integer(clean_text(require_row(values, "Level"))))
    builder.achievement_points(parse_integer(clean_text(require_row(values, "Achievement Points"))))
    builder.world(clean_text(require_row(values, "World")))
    builder.residence(clean_text(require_row(values, "Residence")))

    if "Former World" in values:
        builder.former_world(clean_text(values["Former World"]))
    if "Married To" in values:
        builder.married_to(clean_text(values["Married To"]))
    if "Guild Membership" in values:
        membership = clean_text(values["Guild Membership"])
        match = _GUILD.match(membership)
        if match is None:
            raise MalformedInputError(f"unexpected guild membership {membership!r}")
        builder.guild_membership(match.group("name"), match.group("rank"))
    if "Comment" in values:
        builder.comment(clean_text(values["Comment"]))

    last_login = clean_text(require_row(values, "Last Login"))
    builder.last_login(None if "never logged in" in last_login else parse_tibia_datetime(last_login))

    builder.account_status(
        parse_enum(AccountStatus, clean_text(require_row(values, "Account Status")), label="account status")
    )


def _parse_deaths(builder: CharacterBuilder, table: Tag) -> None:
    for row in rows(table):
        columns = cells(row)
        if len(columns) < 2:
            continue
        description = clean_text(columns[1])
        match = _DEATH.match(description)
        if match is None:
            raise MalformedInputError(f"unrecognized death entry {description!r}")
        killers = [k.strip() for k in _KILLER_SEPARATOR.split(match.group("killers")) if k.strip()]
        builder.add_death(
            parse_tibia_datetime(clean_text(columns[0])),
            int(match.group("level")),
            killers,
            # Player killers are linked to their character page.
            by_player=columns[1].find("a") is not None,
        )


def _parse_other_characters(builder: CharacterBuilder, table: Tag) -> None:
    for row in rows(table):
        columns = cells(row)
        if len(columns) < 2:
            continue
        name = _LIST_NUMBER.sub("", clean_text(columns[0]))
        if name == "Name":
            continue
        status = clean_text(columns[2]).lower() if len(columns) > 2 else ""
        builder.add_other_character(
            name,
            clean_text(columns[1]),
            is_online="online" in status,
            is_deleted="deleted" in status,
        )
