"""Fetch orchestration.

This module ties the fetch capability, the extractors, the pagination walker
and the envelope assembler together. The CLI delegates every network call to
`TibiaClient`, which keeps printing and exit codes out of the core flow and
makes the client reusable from other entry points (scripts, services, tests).
"""

from __future__ import annotations

import asyncio
import functools
import logging
import time
from typing import Iterable, TypeVar

from tibiakit.adapters.http_client import HttpxPageFetcher
from tibiakit.adapters.parsers import (
    PAGE_EXTRACTORS,
    parse_auction,
    parse_character,
    parse_character_bazaar,
    parse_forum_announcement,
    parse_guild,
    parse_highscores,
    parse_house,
    parse_houses_section,
    parse_world,
    parse_world_guilds,
    parse_world_overview,
)
from tibiakit.core import urls
from tibiakit.core.config import AppSettings
from tibiakit.core.domain.bazaar import Auction, AuctionDetails, BazaarFilters, CharacterBazaar
from tibiakit.core.domain.character import Character
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
from tibiakit.core.domain.forum import ForumAnnouncement
from tibiakit.core.domain.guild import Guild, GuildsSection
from tibiakit.core.domain.highscores import Highscores
from tibiakit.core.domain.house import House, HousesSection
from tibiakit.core.domain.pagination import PaginatedCollection
from tibiakit.core.domain.response import TibiaResponse
from tibiakit.core.domain.results import ExtractionResult, Found, Malformed
from tibiakit.core.domain.world import World, WorldOverview
from tibiakit.core.errors import MalformedInputError, RecordValidationError
from tibiakit.core.interfaces.extractor import Extractor
from tibiakit.core.interfaces.fetcher import PageFetcher, RawResponse
from tibiakit.core.services.envelope import assemble_response
from tibiakit.core.services.pagination import PaginationResult, Timing, fetch_remaining_pages

logger = logging.getLogger(__name__)

T = TypeVar("T")

AJAX_HEADERS: tuple[tuple[str, str], ...] = (("x-requested-with", "XMLHttpRequest"),)

# Which sub-collections each auction flag walks, in walking order.
_ITEM_KINDS = (AuctionPagesType.ITEMS, AuctionPagesType.ITEMS_STORE)
_MOUNT_KINDS = (AuctionPagesType.MOUNTS, AuctionPagesType.MOUNTS_STORE)
_OUTFIT_KINDS = (AuctionPagesType.OUTFITS, AuctionPagesType.OUTFITS_STORE)


def _unwrap(result: ExtractionResult[T], url: str) -> T | None:
    if isinstance(result, Found):
        return result.value
    if isinstance(result, Malformed):
        raise MalformedInputError(f"{url}: {result.reason}")
    return None


class TibiaClient:
    """Async client returning every record wrapped in a `TibiaResponse`.

    - `data` is `None` when the site reports that the entity does not exist.
    - Unrecognized pages raise `MalformedInputError` and fetch failures raise
      `TransportError`, including fetch failures in a sub-collection walk.
    - A sub-collection page that cannot be extracted raises `PaginationError`.
    """

    def __init__(self, fetcher: PageFetcher | None = None, settings: AppSettings | None = None) -> None:
        self.settings = settings or AppSettings()
        self._owned_fetcher: HttpxPageFetcher | None = None
        if fetcher is None:
            self._owned_fetcher = HttpxPageFetcher(self.settings)
            fetcher = self._owned_fetcher
        self.fetcher = fetcher

    async def __aenter__(self) -> "TibiaClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owned_fetcher is not None:
            await self._owned_fetcher.aclose()

    async def _fetch_and_parse(
        self,
        url: str,
        extract: Extractor[T],
    ) -> TibiaResponse[T]:
        raw = await self.fetcher.fetch(url)
        start = time.perf_counter()
        try:
            result = extract(raw.body)
        except RecordValidationError:
            logger.exception("%s | PARSE | extractor produced an invalid record", url)
            raise
        parsing_time = time.perf_counter() - start
        logger.info("%s | PARSE | %dms", url, int(parsing_time * 1000))
        return assemble_response(raw, parsing_time, _unwrap(result, url))

    async def fetch_character(self, name: str) -> TibiaResponse[Character]:
        return await self._fetch_and_parse(
            urls.get_character_url(name, base_url=self.settings.base_url),
            parse_character,
        )

    async def fetch_world_overview(self) -> TibiaResponse[WorldOverview]:
        return await self._fetch_and_parse(
            urls.get_world_overview_url(base_url=self.settings.base_url),
            parse_world_overview,
        )

    async def fetch_world(self, name: str) -> TibiaResponse[World]:
        return await self._fetch_and_parse(
            urls.get_world_url(name, base_url=self.settings.base_url),
            parse_world,
        )

    async def fetch_houses_section(
        self,
        world: str,
        town: str,
        *,
        house_type: HouseType = HouseType.HOUSE,
        status: HouseStatus | None = None,
        order: HouseOrder | None = None,
    ) -> TibiaResponse[HousesSection]:
        url = urls.get_houses_section_url(
            world,
            town,
            house_type=house_type,
            status=status,
            order=order,
            base_url=self.settings.base_url,
        )
        return await self._fetch_and_parse(url, parse_houses_section)

    async def fetch_house(self, world: str, house_id: int) -> TibiaResponse[House]:
        return await self._fetch_and_parse(
            urls.get_house_url(world, house_id, base_url=self.settings.base_url),
            parse_house,
        )

    async def fetch_guild(self, name: str) -> TibiaResponse[Guild]:
        return await self._fetch_and_parse(
            urls.get_guild_url(name, base_url=self.settings.base_url),
            parse_guild,
        )

    async def fetch_world_guilds(self, world: str) -> TibiaResponse[GuildsSection]:
        return await self._fetch_and_parse(
            urls.get_world_guilds_url(world, base_url=self.settings.base_url),
            parse_world_guilds,
        )

    async def fetch_highscores_page(
        self,
        world: str | None = None,
        category: HighscoresCategory = HighscoresCategory.EXPERIENCE,
        vocation: HighscoresProfession = HighscoresProfession.ALL,
        page: int = 1,
        battleye_type: HighscoresBattlEyeType = HighscoresBattlEyeType.ANY_WORLD,
        pvp_types: Iterable[HighscoresPvpType] | None = None,
    ) -> TibiaResponse[Highscores]:
        url = urls.get_highscores_url(
            world,
            category,
            vocation,
            page,
            battleye_type,
            pvp_types,
            base_url=self.settings.base_url,
        )
        return await self._fetch_and_parse(url, parse_highscores)

    async def fetch_bazaar(
        self,
        bazaar_type: BazaarType = BazaarType.CURRENT,
        page: int = 1,
        filters: BazaarFilters | None = None,
    ) -> TibiaResponse[CharacterBazaar]:
        return await self._fetch_and_parse(
            urls.get_bazaar_url(bazaar_type, page, filters, base_url=self.settings.base_url),
            parse_character_bazaar,
        )

    async def fetch_auction(
        self,
        auction_id: int,
        *,
        skip_details: bool = False,
        fetch_items: bool = False,
        fetch_mounts: bool = False,
        fetch_outfits: bool = False,
    ) -> TibiaResponse[Auction]:
        """Fetch an auction, optionally completing its paginated sub-collections.

        Each `fetch_*` flag walks both the regular and the store collection of
        its kind. The returned envelope's timing includes every page fetched.
        """

        response = await self._fetch_and_parse(
            urls.get_auction_url(auction_id, base_url=self.settings.base_url),
            functools.partial(parse_auction, skip_details=skip_details),
        )
        auction = response.data
        if auction is None or auction.details is None:
            return response

        kinds: list[AuctionPagesType] = []
        if fetch_items:
            kinds.extend(_ITEM_KINDS)
        if fetch_mounts:
            kinds.extend(_MOUNT_KINDS)
        if fetch_outfits:
            kinds.extend(_OUTFIT_KINDS)
        if not kinds:
            return response

        details = auction.details
        if self.settings.concurrent_subcollections:
            results = await self._walk_concurrently(auction_id, details, kinds)
        else:
            results = []
            for kind in kinds:
                results.append(await self._walk_collection(auction_id, kind, details.collection(kind)))

        timing = Timing(response.fetching_time, response.parsing_time)
        updates: dict[str, PaginatedCollection] = {}
        for kind, result in zip(kinds, results):
            updates[kind.field_name] = result.collection
            timing = timing + result.timing

        updated = auction.model_copy(update={"details": details.model_copy(update=updates)})
        return response.model_copy(
            update={
                "fetching_time": timing.fetching,
                "parsing_time": timing.parsing,
                "data": updated,
            }
        )

    async def fetch_forum_announcement(self, announcement_id: int) -> TibiaResponse[ForumAnnouncement]:
        return await self._fetch_and_parse(
            urls.get_forum_announcement_url(announcement_id, base_url=self.settings.base_url),
            parse_forum_announcement,
        )

    async def _walk_concurrently(
        self,
        auction_id: int,
        details: AuctionDetails,
        kinds: list[AuctionPagesType],
    ) -> list[PaginationResult]:
        """One task per sub-collection; the first failure cancels the other walks."""

        try:
            async with asyncio.TaskGroup() as group:
                tasks = [
                    group.create_task(self._walk_collection(auction_id, kind, details.collection(kind)))
                    for kind in kinds
                ]
        except ExceptionGroup as failures:
            raise failures.exceptions[0]
        return [task.result() for task in tasks]

    async def _walk_collection(
        self,
        auction_id: int,
        kind: AuctionPagesType,
        collection: PaginatedCollection,
    ) -> PaginationResult:
        async def fetch_page(page: int) -> RawResponse:
            url = urls.get_auction_ajax_pagination_url(auction_id, kind, page, base_url=self.settings.base_url)
            return await self.fetcher.fetch(url, headers=AJAX_HEADERS)

        return await fetch_remaining_pages(
            collection,
            fetch_page=fetch_page,
            extract_page=PAGE_EXTRACTORS[kind],
            label=f"auction {auction_id} {kind.field_name}",
        )
