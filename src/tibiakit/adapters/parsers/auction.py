"""Character bazaar pages: auction details and bazaar listings.

Why one module:
- The bazaar listing is a sequence of auction headers, parsed exactly like the
  header of a details page.
- Item, mount and outfit icons look the same in the details page and in the
  fragments served by the pagination endpoint (see `ajax`).
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Callable

from bs4 import Tag

from tibiakit.adapters.parsers.html import (
    clean_text,
    find_pagination_block,
    form_data,
    get_containing,
    key_value_rows,
    make_soup,
    parse_enum,
    parse_integer,
    parse_pagination,
    parse_tables_map,
    parse_tibia_datetime,
    require_row,
)
from tibiakit.core.builders.bazaar import AuctionBuilder, AuctionDetailsBuilder, CharacterBazaarBuilder
from tibiakit.core.domain.bazaar import (
    Auction,
    AuctionDetails,
    AuctionSkills,
    CharacterBazaar,
    ItemEntry,
    MountEntry,
    OutfitEntry,
)
from tibiakit.core.domain.enums import (
    AuctionBattlEyeFilter,
    AuctionOrderBy,
    AuctionOrderDirection,
    AuctionPagesType,
    AuctionPvpTypeFilter,
    AuctionSearchType,
    AuctionSkillFilter,
    AuctionStatus,
    AuctionVocationFilter,
    BazaarType,
    BidType,
    Sex,
    Vocation,
)
from tibiakit.core.urls import BAZAAR_FILTER_PARAMS
from tibiakit.core.domain.results import extractor
from tibiakit.core.errors import MalformedInputError

_HEADER = re.compile(
    r"Level: (?P<level>\d+) \| Vocation: (?P<vocation>[A-Za-z ]+) \| (?P<sex>Male|Female) \| World: (?P<world>\w+)",
    re.IGNORECASE,
)
_AUCTION_ID = re.compile(r"auctionid=(\d+)", re.IGNORECASE)
_OUTFIT_IMAGE = re.compile(r"/outfits/(?P<id>\d+)_(?P<addons>\d+)\.gif")
_ITEM_IMAGE = re.compile(r"/objects/(?P<id>\d+)\.gif")
_MOUNT_IMAGE = re.compile(r"/mounts/(?P<id>\d+)\.gif")
_ITEM_TITLE = re.compile(r"^(?:(?P<count>\d+)x )?(?P<name>[^\n]+?)\s*(?:\n(?P<description>.*))?$", re.DOTALL)
_INTERNAL_ERROR = "An internal error has occurred"

_STATUSES = (
    ("currently processed", AuctionStatus.CURRENTLY_PROCESSED),
    ("will be transferred", AuctionStatus.WILL_BE_TRANSFERRED),
    ("cancelled", AuctionStatus.CANCELLED),
    ("finished", AuctionStatus.FINISHED),
)

# Enum-valued filters; the rest are integers except `world` and `search_string`.
_FILTER_ENUMS: dict[str, type[Enum]] = {
    "pvp_type": AuctionPvpTypeFilter,
    "battleye": AuctionBattlEyeFilter,
    "vocation": AuctionVocationFilter,
    "skill": AuctionSkillFilter,
    "order_by": AuctionOrderBy,
    "order_direction": AuctionOrderDirection,
    "search_type": AuctionSearchType,
}
_FILTER_TEXTS = frozenset({"world", "search_string"})

_SECTION_IDS: dict[AuctionPagesType, str] = {
    AuctionPagesType.ITEMS: "ItemSummary",
    AuctionPagesType.ITEMS_STORE: "StoreItemSummary",
    AuctionPagesType.MOUNTS: "Mounts",
    AuctionPagesType.MOUNTS_STORE: "StoreMounts",
    AuctionPagesType.OUTFITS: "Outfits",
    AuctionPagesType.OUTFITS_STORE: "StoreOutfits",
}

_SKILLS = {
    "Axe Fighting": "axe_fighting",
    "Club Fighting": "club_fighting",
    "Distance Fighting": "distance_fighting",
    "Fishing": "fishing",
    "Fist Fighting": "fist_fighting",
    "Magic Level": "magic_level",
    "Shielding": "shielding",
    "Sword Fighting": "sword_fighting",
}

# Label in the general section -> AuctionDetailsBuilder setter.
_GENERAL_NUMBERS = {
    "Hit Points": "hit_points",
    "Mana": "mana",
    "Capacity": "capacity",
    "Speed": "speed",
    "Blessings": "blessings_count",
    "Mounts": "mounts_count",
    "Outfits": "outfits_count",
    "Titles": "titles_count",
    "Experience": "experience",
    "Gold": "gold",
    "Achievement Points": "achievement_points",
    "Available Charm Points": "available_charm_points",
    "Spent Charm Points": "spent_charm_points",
    "Daily Reward Streak": "daily_reward_streak",
    "Hunting Task Points": "hunting_task_points",
    "Permanent Hunting Task Slots": "permanent_hunting_task_slots",
    "Permanent Prey Slots": "permanent_prey_slots",
    "Prey Wildcards": "prey_wildcards",
    "Hirelings": "hirelings",
    "Hireling Jobs": "hireling_jobs",
    "Hireling Outfits": "hireling_outfits",
}


def _icons(root: Tag) -> list[tuple[str, str]]:
    """`(title, image_src)` of each non-empty icon under `root`."""

    found = []
    for icon in root.select("div.CVIcon"):
        image = icon.find("img", src=True)
        if image is None:
            continue
        title = str(icon.get("title") or "").strip()
        if not title:
            raise MalformedInputError("icon without a title")
        found.append((title, str(image["src"])))
    return found


def parse_item_icons(root: Tag) -> list[ItemEntry]:
    entries = []
    for title, src in _icons(root):
        image = _ITEM_IMAGE.search(src)
        text = _ITEM_TITLE.match(title)
        if image is None or text is None:
            raise MalformedInputError(f"unrecognized item icon {title!r}")
        description = (text.group("description") or "").strip() or None
        entries.append(
            ItemEntry(
                item_id=int(image.group("id")),
                name=text.group("name"),
                count=int(text.group("count") or 1),
                description=description,
            )
        )
    return entries


def parse_mount_icons(root: Tag) -> list[MountEntry]:
    entries = []
    for title, src in _icons(root):
        image = _MOUNT_IMAGE.search(src)
        if image is None:
            raise MalformedInputError(f"unrecognized mount icon {title!r}")
        entries.append(MountEntry(mount_id=int(image.group("id")), name=title))
    return entries


def parse_outfit_icons(root: Tag) -> list[OutfitEntry]:
    entries = []
    for title, src in _icons(root):
        image = _OUTFIT_IMAGE.search(src)
        if image is None:
            raise MalformedInputError(f"unrecognized outfit icon {title!r}")
        entries.append(
            OutfitEntry(outfit_id=int(image.group("id")), name=title, addons=int(image.group("addons")))
        )
    return entries


ENTRY_PARSERS: dict[AuctionPagesType, Callable[[Tag], list]] = {
    AuctionPagesType.ITEMS: parse_item_icons,
    AuctionPagesType.ITEMS_STORE: parse_item_icons,
    AuctionPagesType.MOUNTS: parse_mount_icons,
    AuctionPagesType.MOUNTS_STORE: parse_mount_icons,
    AuctionPagesType.OUTFITS: parse_outfit_icons,
    AuctionPagesType.OUTFITS_STORE: parse_outfit_icons,
}


@extractor
def parse_auction(content: str, *, skip_details: bool = False) -> Auction | None:
    """Extract an `Auction`; `None` when the auction does not exist.

    With `skip_details` only the header is parsed, and `details` is `None`.
    """

    soup = make_soup(content)
    block = soup.select_one("div.Auction")
    if block is None:
        if _INTERNAL_ERROR in clean_text(soup):
            return None
        raise MalformedInputError("no auction block")

    builder = _parse_auction_header(block)
    if builder.get("auction_id") is None:
        auction_input = soup.find("input", attrs={"name": "auctionid"})
        if auction_input is None or not auction_input.get("value"):
            raise MalformedInputError("could not find the auction id")
        builder.auction_id(parse_integer(str(auction_input["value"])))

    if not skip_details:
        builder.details(_parse_details(soup))
    return builder.build()


def _short_auction_data(block: Tag) -> dict[str, Tag]:
    values: dict[str, Tag] = {}
    for label in block.select(".ShortAuctionDataLabel"):
        value = label.find_next_sibling(class_="ShortAuctionDataValue")
        if value is not None:
            values[clean_text(label).rstrip(":")] = value
    return values


def _parse_auction_header(block: Tag) -> AuctionBuilder:
    builder = AuctionBuilder()

    name_block = block.select_one(".AuctionCharacterName")
    if name_block is None:
        raise MalformedInputError("auction without a character name")
    builder.name(clean_text(name_block))
    link = name_block.find("a", href=True)
    if link is not None:
        auction_id = _AUCTION_ID.search(str(link["href"]))
        if auction_id:
            builder.auction_id(int(auction_id.group(1)))

    header = block.select_one(".AuctionHeader")
    header_text = clean_text(header) if header is not None else ""
    match = _HEADER.search(header_text)
    if match is None:
        raise MalformedInputError(f"unrecognized auction header {header_text!r}")
    builder.level(int(match.group("level")))
    builder.vocation(parse_enum(Vocation, match.group("vocation").strip(), label="vocation"))
    builder.sex(parse_enum(Sex, match.group("sex").lower(), label="sex"))
    builder.world(match.group("world"))

    outfit = block.select_one("img.AuctionOutfitImage")
    outfit_match = _OUTFIT_IMAGE.search(str(outfit.get("src", ""))) if outfit is not None else None
    if outfit_match is None:
        raise MalformedInputError("could not find the auction outfit")
    builder.outfit_id(int(outfit_match.group("id")))

    items_box = block.select_one(".AuctionItemsViewBox")
    if items_box is not None:
        for item in parse_item_icons(items_box):
            builder.add_displayed_item(item)

    for argument in block.select(".SpecialCharacterFeatures .Entry"):
        builder.add_sales_argument(clean_text(argument))

    data = _short_auction_data(block)
    builder.start_date(parse_tibia_datetime(clean_text(require_row(data, "Auction Start"))))
    builder.end_date(parse_tibia_datetime(clean_text(require_row(data, "Auction End"))))
    for bid_type in BidType:
        if bid_type.value in data:
            builder.bid(parse_integer(clean_text(data[bid_type.value])), bid_type)
            break
    else:
        raise MalformedInputError("auction without a bid")

    info = block.select_one(".AuctionInfo")
    info_text = clean_text(info).lower() if info is not None else ""
    builder.status(next((status for text, status in _STATUSES if text in info_text), AuctionStatus.IN_PROGRESS))
    return builder


def _first_number(cell: Tag) -> int:
    # Blessings read as "3/7", skills may carry a progress bar after the level.
    text = clean_text(cell).split("/")[0].strip()
    return parse_integer(text.split(" ")[0] if text else text)


def _parse_details(soup: Tag) -> AuctionDetails:
    general = soup.select_one("#General")
    if general is None:
        raise MalformedInputError("no general details section")
    values: dict[str, Tag] = {}
    for table in general.find_all("table"):
        values.update(key_value_rows(table))

    builder = AuctionDetailsBuilder()
    for label, setter in _GENERAL_NUMBERS.items():
        getattr(builder, setter)(_first_number(require_row(values, label)))

    builder.skills(AuctionSkills(**{field: _first_number(require_row(values, label)) for label, field in _SKILLS.items()}))
    builder.creation_date(parse_tibia_datetime(clean_text(require_row(values, "Creation Date"))))

    transfer = clean_text(require_row(values, "Regular World Transfer"))
    builder.regular_world_transfers_available(
        parse_tibia_datetime(transfer) if re.search(r"\d{4}", transfer) else None
    )
    builder.charm_expansion(clean_text(require_row(values, "Charm Expansion")).lower() == "yes")

    for kind, section_id in _SECTION_IDS.items():
        section = soup.find(id=section_id)
        if section is None:
            raise MalformedInputError(f"no {section_id} section")
        navigation = find_pagination_block(section)
        if navigation is None:
            raise MalformedInputError(f"no pagination in the {section_id} section")
        current_page, total_pages, results_count = parse_pagination(navigation)
        entries = ENTRY_PARSERS[kind](section)
        if len(entries) > results_count:
            raise MalformedInputError(f"{section_id} lists more entries than its results count")
        builder.collection(
            kind,
            current_page=current_page,
            total_pages=total_pages,
            results_count=results_count,
            entries=entries,
        )
    return builder.build()


@extractor
def parse_character_bazaar(content: str) -> CharacterBazaar | None:
    """Extract one page of the current auctions or of the auction history."""

    soup = make_soup(content)
    tables = parse_tables_map(soup)
    if get_containing(tables, "Auction History") is not None:
        bazaar_type = BazaarType.HISTORY
    elif get_containing(tables, "Current Auctions") is not None:
        bazaar_type = BazaarType.CURRENT
    else:
        raise MalformedInputError("no auctions table")

    navigation = find_pagination_block(soup)
    if navigation is None:
        raise MalformedInputError("no pagination block")
    current_page, total_pages, results_count = parse_pagination(navigation)

    builder = (
        CharacterBazaarBuilder()
        .bazaar_type(bazaar_type)
        .current_page(current_page)
        .total_pages(total_pages)
        .results_count(results_count)
    )
    filters = get_containing(tables, "Filter")
    if filters is not None:
        builder.filters(**_parse_filters(filters))
    for block in soup.select("div.Auction"):
        auction = _parse_auction_header(block)
        if auction.get("auction_id") is None:
            raise MalformedInputError("bazaar entry without an auction link")
        builder.add_entry(auction.build())
    return builder.build()


def _parse_filters(table: Tag) -> dict[str, Any]:
    form = table.find_parent("form")
    if form is None:
        raise MalformedInputError("could not find the auction filter form")
    data = form_data(form)

    values: dict[str, Any] = {}
    for field, param in BAZAAR_FILTER_PARAMS.items():
        raw = (data.get(param) or "").strip()
        if not raw:
            continue
        if field in _FILTER_TEXTS:
            values[field] = raw
        elif field in _FILTER_ENUMS:
            values[field] = parse_enum(_FILTER_ENUMS[field], parse_integer(raw), label=field.replace("_", " "))
        else:
            values[field] = parse_integer(raw)
    return values
