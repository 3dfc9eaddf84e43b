"""World overview and world information pages."""

from __future__ import annotations

import re
from datetime import date

from bs4 import Tag

from tibiakit.adapters.parsers.html import (
    cells,
    clean_text,
    form_data,
    key_value_rows,
    make_soup,
    parse_enum,
    parse_integer,
    parse_month_year,
    parse_tables_map,
    parse_tibia_date,
    parse_tibia_datetime,
    require_row,
    rows,
)
from tibiakit.core.builders.world import WorldBuilder, WorldOverviewBuilder
from tibiakit.core.domain.enums import BattlEyeType, PvpType, TransferType, Vocation, WorldLocation
from tibiakit.core.domain.results import extractor
from tibiakit.core.domain.world import World, WorldEntry, WorldOverview
from tibiakit.core.errors import MalformedInputError

_OVERALL_MAXIMUM = re.compile(r"Overall Maximum:\s*(?P<count>[\d,]+) players \(on (?P<date>[^)]+)\)")
_ONLINE_RECORD = re.compile(r"(?P<count>[\d,]+) players \(on (?P<date>[^)]+)\)")
_NO_TITLES = "no title"


def parse_battleye(text: str) -> tuple[BattlEyeType, date | None]:
    """Read a BattlEye status such as `Protected by BattlEye since Aug 29 2017.`"""

    if "BattlEye" not in text or text.lower().startswith("not"):
        return BattlEyeType.UNPROTECTED, None
    if "since its release" in text:
        return BattlEyeType.GREEN, None
    return BattlEyeType.YELLOW, parse_tibia_date(text)


def _battleye_text(cell: Tag) -> str:
    indicator = cell.find(attrs={"title": True})
    if indicator is not None:
        return clean_text(str(indicator["title"]))
    return clean_text(cell)


def _transfer_type(text: str) -> TransferType:
    lowered = text.lower()
    if "blocked" in lowered:
        return TransferType.BLOCKED
    if "locked" in lowered:
        return TransferType.LOCKED
    return TransferType.REGULAR


@extractor
def parse_world_overview(content: str) -> WorldOverview | None:
    """Extract the list of worlds. The overview always exists, so never `None`."""

    soup = make_soup(content)
    maximum = _OVERALL_MAXIMUM.search(clean_text(soup))
    if maximum is None:
        raise MalformedInputError("no overall maximum record")

    world_tables = [table for caption, table in parse_tables_map(soup).items() if caption.endswith("Worlds")]
    if not world_tables:
        raise MalformedInputError("no worlds table")

    builder = (
        WorldOverviewBuilder()
        .record_count(parse_integer(maximum.group("count")))
        .record_date(parse_tibia_datetime(maximum.group("date")))
    )
    for table in world_tables:
        for row in rows(table):
            columns = cells(row)
            if len(columns) < 6 or clean_text(columns[0]) == "World":
                continue
            builder.add_world(_parse_world_row(columns))
    return builder.build()


def _parse_world_row(columns: list[Tag]) -> WorldEntry:
    online_text = clean_text(columns[1])
    is_online = online_text.lower() != "offline"
    battleye_type, battleye_date = parse_battleye(_battleye_text(columns[4]))
    additional = clean_text(columns[5]).lower()
    return WorldEntry(
        name=clean_text(columns[0]),
        is_online=is_online,
        online_count=parse_integer(online_text) if is_online else 0,
        location=parse_enum(WorldLocation, clean_text(columns[2]), label="location"),
        pvp_type=parse_enum(PvpType, clean_text(columns[3]), label="PvP type"),
        battleye_type=battleye_type,
        battleye_date=battleye_date,
        transfer_type=_transfer_type(additional),
        is_premium_only="premium" in additional,
        is_experimental="experimental" in additional,
    )


@extractor
def parse_world(content: str) -> World | None:
    """Extract a `World`; `None` when no world has that name."""

    soup = make_soup(content)
    if "World with this name doesn't exist!" in clean_text(soup):
        return None

    tables = parse_tables_map(soup)
    information = tables.get("World Information")
    if information is None:
        raise MalformedInputError("no 'World Information' table")

    builder = WorldBuilder()
    selector = soup.find("select", attrs={"name": "world"})
    form = selector.find_parent("form") if selector is not None else None
    name = form_data(form).get("world") if form is not None else None
    if not name:
        raise MalformedInputError("world name not found in the world selection form")
    builder.name(name)

    values = key_value_rows(information)
    status = clean_text(require_row(values, "Status"))
    builder.is_online(status.lower() == "online")
    builder.online_count(parse_integer(clean_text(values["Players Online"])) if "Players Online" in values else 0)

    record_text = clean_text(require_row(values, "Online Record"))
    record = _ONLINE_RECORD.search(record_text)
    if record is None:
        raise MalformedInputError(f"unexpected online record {record_text!r}")
    builder.record_count(parse_integer(record.group("count")))
    builder.record_date(parse_tibia_datetime(record.group("date")))

    builder.creation_date(parse_month_year(clean_text(require_row(values, "Creation Date"))))
    builder.location(parse_enum(WorldLocation, clean_text(require_row(values, "Location")), label="location"))
    builder.pvp_type(parse_enum(PvpType, clean_text(require_row(values, "PvP Type")), label="PvP type"))
    if "Premium Type" in values:
        builder.is_premium_only("premium" in clean_text(values["Premium Type"]).lower())
    if "Transfer Type" in values:
        builder.transfer_type(_transfer_type(clean_text(values["Transfer Type"])))
    if "World Quest Titles" in values:
        titles = clean_text(values["World Quest Titles"])
        if _NO_TITLES not in titles:
            builder.world_quest_titles([t.strip() for t in titles.split(",") if t.strip()])
    if "BattlEye Status" in values:
        builder.battleye(*parse_battleye(clean_text(values["BattlEye Status"])))
    if "Game World Type" in values:
        builder.is_experimental("experimental" in clean_text(values["Game World Type"]).lower())

    players = tables.get("Players Online")
    if players is not None:
        for row in rows(players):
            columns = cells(row)
            if len(columns) < 3 or clean_text(columns[0]) == "Name":
                continue
            builder.add_online_player(
                clean_text(columns[0]),
                parse_integer(clean_text(columns[1])),
                parse_enum(Vocation, clean_text(columns[2]), label="vocation"),
            )
    return builder.build()
