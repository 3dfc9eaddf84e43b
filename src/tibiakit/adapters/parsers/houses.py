"""House pages: the houses section (house search results) and a house's own page."""

from __future__ import annotations

import re
from datetime import timedelta
from enum import Enum
from typing import TypeVar

from bs4 import Tag

from tibiakit.adapters.parsers.html import (
    cells,
    clean_text,
    form_data,
    get_containing,
    make_soup,
    parse_enum,
    parse_integer,
    parse_tables_map,
    parse_thousand_suffix,
    parse_tibia_datetime,
    rows,
)
from tibiakit.core.builders.house import HouseBuilder, HousesSectionBuilder
from tibiakit.core.domain.enums import HouseOrder, HouseStatus, HouseType
from tibiakit.core.domain.house import House, HousesSection
from tibiakit.core.domain.results import extractor
from tibiakit.core.errors import MalformedInputError

E = TypeVar("E", bound=Enum)

_AUCTION_INFO = re.compile(r"\((?P<bid>[\d,]+) gold; (?P<amount>\d+) (?P<unit>day|hour)s? left\)")

_DATETIME = r"[A-Z][a-z]{2} \d{1,2} \d{4}, [\d:]+ CES?T"
_HOUSE_IMAGE = re.compile(r"/houses/house_(?P<id>\d+)\.\w+$")
_BEDS = re.compile(r"This (?P<type>house|guildhall) can have up to (?P<beds>\d+) beds?")
_SIZE = re.compile(r"has a size of (?P<size>\d+) square meters")
_RENT = re.compile(r"The monthly rent is (?P<rent>[\d,]+k*) gold and will be debited to the bank account on (?P<world>[\w ]+?)\.")
_RENTED = re.compile(rf"has been rented by (?P<owner>.+?)\. (?:He|She) has paid the rent until (?P<date>{_DATETIME})")
_MOVE_OUT = re.compile(
    rf"will move out on (?P<date>{_DATETIME})(?: \(time of daily server save\))?"
    r"(?: and will pass the (?:house|guildhall) to (?P<transferee>.+?) for (?P<price>[\d,]+) gold coins)?"
)
_TRANSFER_ACCEPTED = re.compile(r"has accepted this transfer offer")
_AUCTION_END = re.compile(rf"The auction will end at (?P<date>{_DATETIME})")
_HIGHEST_BID = re.compile(r"The highest bid so far is (?P<bid>[\d,]+) gold and has been submitted by (?P<bidder>.+?)\.")
_HOUSE_TYPES = {"house": HouseType.HOUSE, "guildhall": HouseType.GUILDHALL}


def _optional_enum(enum_type: type[E], value: str | None, label: str) -> E | None:
    if not value:
        return None
    return parse_enum(enum_type, value, label=label)


@extractor
def parse_houses_section(content: str) -> HousesSection | None:
    """Extract a `HousesSection`; `None` when the search returned no listing."""

    soup = make_soup(content)
    tables = parse_tables_map(soup)
    search = tables.get("House Search")
    if search is None:
        raise MalformedInputError("no 'House Search' table")

    form = search.find_parent("form")
    if form is None:
        raise MalformedInputError("could not find the house search form")
    data = form_data(form)

    builder = HousesSectionBuilder()
    for field in ("world", "town", "type"):
        if not data.get(field):
            raise MalformedInputError(f"could not find {field} value in the house search form")
    builder.world(data.get("world")).town(data.get("town"))
    builder.house_type(parse_enum(HouseType, data.get("type"), label="house type"))
    builder.status(_optional_enum(HouseStatus, data.get("state"), "house status"))
    builder.order(_optional_enum(HouseOrder, data.get("order"), "house order"))

    available = get_containing(tables, "Available")
    if available is None:
        return None

    # The first row holds the column headers.
    for row in rows(available)[1:]:
        columns = cells(row)
        if len(columns) != 5:
            break
        _add_entry(builder, columns)
    return builder.build()


def _add_entry(builder: HousesSectionBuilder, columns: list[Tag]) -> None:
    status_text = clean_text(columns[3])
    time_left: timedelta | None = None
    highest_bid: int | None = None
    auction = _AUCTION_INFO.search(status_text)
    if auction:
        highest_bid = parse_integer(auction.group("bid"))
        amount = int(auction.group("amount"))
        time_left = timedelta(days=amount) if auction.group("unit") == "day" else timedelta(hours=amount)

    house_id = columns[4].find("input", attrs={"name": "houseid"})
    if house_id is None or not house_id.get("value"):
        raise MalformedInputError("could not find the view button of a house")

    builder.add_entry(
        house_id=parse_integer(str(house_id["value"])),
        name=clean_text(columns[0]),
        size=parse_integer(clean_text(columns[1]).replace("sqm", "")),
        rent=parse_thousand_suffix(clean_text(columns[2]).replace("gold", "")),
        status=HouseStatus.AUCTIONED if "auctioned" in status_text else HouseStatus.RENTED,
        time_left=time_left,
        highest_bid=highest_bid,
    )


@extractor
def parse_house(content: str) -> House | None:
    """Extract a `House`; `None` when the house id does not exist in that world."""

    soup = make_soup(content)
    image = soup.find("img", src=_HOUSE_IMAGE)
    if image is None:
        if get_containing(parse_tables_map(soup), "House Search") is not None:
            return None
        raise MalformedInputError("no house image")

    image_cell = image.find_parent("td")
    description = image_cell.find_next_sibling("td") if image_cell is not None else None
    name = description.find("b") if description is not None else None
    if description is None or name is None:
        raise MalformedInputError("no house description")

    builder = HouseBuilder()
    image_url = str(image["src"])
    builder.image_url(image_url).house_id(int(_HOUSE_IMAGE.search(image_url).group("id")))
    builder.name(clean_text(name))

    text = clean_text(description)
    beds = _BEDS.search(text)
    size = _SIZE.search(text)
    rent = _RENT.search(text)
    if beds is None or size is None or rent is None:
        raise MalformedInputError("house description lacks its beds, size or rent")
    builder.house_type(_HOUSE_TYPES[beds.group("type")]).beds(int(beds.group("beds")))
    builder.size(int(size.group("size")))
    builder.rent(parse_thousand_suffix(rent.group("rent"))).world(rent.group("world"))

    if "is currently being auctioned" in text:
        _parse_auction_status(builder, text)
    else:
        _parse_rental_status(builder, text)
    return builder.build()


def _parse_rental_status(builder: HouseBuilder, text: str) -> None:
    rented = _RENTED.search(text)
    if rented is None:
        raise MalformedInputError("house is neither rented nor auctioned")
    builder.rented_by(rented.group("owner"), parse_tibia_datetime(rented.group("date")))

    move_out = _MOVE_OUT.search(text)
    if move_out:
        price = move_out.group("price")
        builder.transfer(
            parse_tibia_datetime(move_out.group("date")),
            transferee=move_out.group("transferee"),
            price=parse_integer(price) if price else None,
            accepted=_TRANSFER_ACCEPTED.search(text) is not None,
        )


def _parse_auction_status(builder: HouseBuilder, text: str) -> None:
    # The end date is missing until the first bid starts the auction.
    end = _AUCTION_END.search(text)
    builder.auctioned(parse_tibia_datetime(end.group("date")) if end else None)

    bid = _HIGHEST_BID.search(text)
    if bid:
        builder.highest_bid(parse_integer(bid.group("bid")), bid.group("bidder"))
