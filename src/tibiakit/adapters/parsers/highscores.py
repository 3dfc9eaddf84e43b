"""Highscores page."""

from __future__ import annotations

import re

from tibiakit.adapters.parsers.html import (
    cells,
    clean_text,
    find_pagination_block,
    form_data,
    make_soup,
    parse_enum,
    parse_integer,
    parse_pagination,
    parse_tables_map,
    rows,
)
from tibiakit.core.builders.highscores import HighscoresBuilder
from tibiakit.core.domain.enums import (
    HighscoresBattlEyeType,
    HighscoresCategory,
    HighscoresProfession,
    HighscoresPvpType,
    Vocation,
)
from tibiakit.core.domain.highscores import Highscores
from tibiakit.core.domain.results import extractor
from tibiakit.core.errors import MalformedInputError

_LAST_UPDATE = re.compile(r"Last Update:\s*(?P<minutes>\d+) minutes?")


def _int_value(value: str | None, label: str) -> int:
    if value is None or not value.lstrip("-").isdigit():
        raise MalformedInputError(f"invalid {label} value {value!r} in the highscores form")
    return int(value)


@extractor
def parse_highscores(content: str) -> Highscores | None:
    """Extract one page of a highscores listing."""

    soup = make_soup(content)
    table = parse_tables_map(soup).get("Highscores")
    if table is None:
        raise MalformedInputError("no 'Highscores' table")

    builder = HighscoresBuilder()
    form = soup.find("form")
    if form is not None:
        data = form_data(form)
        builder.world(data.get("world") or None)
        builder.category(
            parse_enum(HighscoresCategory, _int_value(data.get("category"), "category"), label="category")
        )
        builder.vocation(
            parse_enum(HighscoresProfession, _int_value(data.get("profession", "0"), "profession"), label="profession")
        )
        builder.battleye_type(
            parse_enum(
                HighscoresBattlEyeType,
                _int_value(data.get("beprotection", "-1"), "beprotection"),
                label="BattlEye type",
            )
        )
        builder.pvp_types(
            [
                parse_enum(HighscoresPvpType, _int_value(value, "worldtypes"), label="PvP type")
                for value in data.get_all("worldtypes[]")
            ]
        )

    last_update = _LAST_UPDATE.search(clean_text(soup))
    if last_update is None:
        raise MalformedInputError("no 'Last Update' notice")
    builder.last_update_minutes(int(last_update.group("minutes")))

    for row in rows(table):
        columns = cells(row)
        if len(columns) != 6 or clean_text(columns[0]) == "Rank":
            continue
        builder.add_entry(
            rank=parse_integer(clean_text(columns[0])),
            name=clean_text(columns[1]),
            vocation=parse_enum(Vocation, clean_text(columns[2]), label="vocation"),
            world=clean_text(columns[3]),
            level=parse_integer(clean_text(columns[4])),
            value=parse_integer(clean_text(columns[5])),
        )

    navigation = find_pagination_block(soup)
    if navigation is not None:
        current_page, total_pages, results_count = parse_pagination(navigation)
    else:
        entries = builder.get("entries", [])
        current_page, total_pages, results_count = 1, 1, len(entries)
    builder.current_page(current_page).total_pages(total_pages).results_count(results_count)
    return builder.build()
