"""URL builders for every page the client reads."""

from __future__ import annotations

from enum import Enum
from typing import Iterable
from urllib.parse import urlencode

from tibiakit.core.config import DEFAULT_BASE_URL
from tibiakit.core.domain.bazaar import BazaarFilters
from tibiakit.core.domain.enums import (
    AuctionPagesType,
    BazaarType,
    HighscoresBattlEyeType,
    HighscoresCategory,
    HighscoresProfession,
    HighscoresPvpType,
    HouseOrder,
    HouseStatus,
    HouseType,
)


def _url(base_url: str, path: str, params: list[tuple[str, str | int]]) -> str:
    query = urlencode(params)
    return f"{base_url.rstrip('/')}{path}?{query}"


def get_character_url(name: str, *, base_url: str = DEFAULT_BASE_URL) -> str:
    return _url(base_url, "/community/", [("subtopic", "characters"), ("name", name.strip())])


def get_world_overview_url(*, base_url: str = DEFAULT_BASE_URL) -> str:
    return _url(base_url, "/community/", [("subtopic", "worlds")])


def get_world_url(name: str, *, base_url: str = DEFAULT_BASE_URL) -> str:
    return _url(base_url, "/community/", [("subtopic", "worlds"), ("world", name.strip().title())])


def get_houses_section_url(
    world: str,
    town: str,
    *,
    house_type: HouseType | None = None,
    status: HouseStatus | None = None,
    order: HouseOrder | None = None,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    params: list[tuple[str, str | int]] = [
        ("subtopic", "houses"),
        ("world", world),
        ("town", town),
        ("type", (house_type or HouseType.HOUSE).value),
    ]
    if status is not None:
        params.append(("state", status.value))
    if order is not None:
        params.append(("order", order.value))
    return _url(base_url, "/community/", params)


def get_house_url(world: str, house_id: int, *, base_url: str = DEFAULT_BASE_URL) -> str:
    return _url(
        base_url,
        "/community/",
        [("subtopic", "houses"), ("page", "view"), ("world", world), ("houseid", house_id)],
    )


def get_guild_url(name: str, *, base_url: str = DEFAULT_BASE_URL) -> str:
    return _url(base_url, "/community/", [("subtopic", "guilds"), ("page", "view"), ("GuildName", name.strip())])


def get_world_guilds_url(world: str, *, base_url: str = DEFAULT_BASE_URL) -> str:
    return _url(base_url, "/community/", [("subtopic", "guilds"), ("world", world.strip().title())])


def get_highscores_url(
    world: str | None = None,
    category: HighscoresCategory = HighscoresCategory.EXPERIENCE,
    vocation: HighscoresProfession = HighscoresProfession.ALL,
    page: int = 1,
    battleye_type: HighscoresBattlEyeType = HighscoresBattlEyeType.ANY_WORLD,
    pvp_types: Iterable[HighscoresPvpType] | None = None,
    *,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    params: list[tuple[str, str | int]] = [
        ("subtopic", "highscores"),
        ("world", world or ""),
        ("category", category.value),
        ("profession", vocation.value),
        ("currentpage", page),
        ("beprotection", battleye_type.value),
    ]
    for pvp_type in sorted(set(pvp_types or ()), key=lambda t: t.value):
        params.append(("worldtypes[]", pvp_type.value))
    return _url(base_url, "/community/", params)


BAZAAR_FILTER_PARAMS: dict[str, str] = {
    "world": "filter_world",
    "pvp_type": "filter_worldpvptype",
    "battleye": "filter_worldbattleyestate",
    "vocation": "filter_profession",
    "minimum_level": "filter_levelrangefrom",
    "maximum_level": "filter_levelrangeto",
    "skill": "filter_skillid",
    "minimum_skill_level": "filter_skillrangefrom",
    "maximum_skill_level": "filter_skillrangeto",
    "order_by": "order_column",
    "order_direction": "order_direction",
    "search_string": "searchstring",
    "search_type": "searchtype",
}
"""`BazaarFilters` field to query parameter, in the order the site's form submits them."""


def get_bazaar_url(
    bazaar_type: BazaarType = BazaarType.CURRENT,
    page: int = 1,
    filters: BazaarFilters | None = None,
    *,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    params: list[tuple[str, str | int]] = [("subtopic", bazaar_type.value)]
    if filters is not None:
        for field, param in BAZAAR_FILTER_PARAMS.items():
            value = getattr(filters, field)
            if value is not None:
                params.append((param, value.value if isinstance(value, Enum) else value))
    params.append(("currentpage", page))
    return _url(base_url, "/charactertrade/", params)


def get_auction_url(auction_id: int, *, base_url: str = DEFAULT_BASE_URL) -> str:
    return _url(
        base_url,
        "/charactertrade/",
        [("subtopic", "currentcharactertrades"), ("page", "details"), ("auctionid", auction_id)],
    )


def get_auction_ajax_pagination_url(
    auction_id: int,
    kind: AuctionPagesType,
    page: int,
    *,
    base_url: str = DEFAULT_BASE_URL,
) -> str:
    """URL of the JSON endpoint serving one page of an auction sub-collection."""

    return _url(
        base_url,
        "/websiteservices/handle_charactertrades.php",
        [("auctionid", auction_id), ("type", kind.value), ("currentpage", page)],
    )


def get_forum_announcement_url(announcement_id: int, *, base_url: str = DEFAULT_BASE_URL) -> str:
    return _url(base_url, "/forum/", [("action", "announcement"), ("announcementid", announcement_id)])
