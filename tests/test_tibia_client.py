"""Unit tests for `TibiaClient` against an in-memory fetcher."""

from __future__ import annotations

import asyncio
from typing import Callable

import pytest

from tibiakit.core import urls
from tibiakit.core.config import AppSettings
from tibiakit.core.domain.bazaar import BazaarFilters
from tibiakit.core.domain.enums import AuctionOrderDirection, AuctionPagesType, BazaarType, HighscoresCategory
from tibiakit.core.errors import MalformedInputError, PaginationError, RecordValidationError, TransportError
from tibiakit.core.services.tibia_client import AJAX_HEADERS, TibiaClient

from conftest import FIXED_TIMESTAMP, FakeFetcher

AUCTION_ID = 12345
AUCTION_URL = urls.get_auction_url(AUCTION_ID)


def _ajax_url(kind: AuctionPagesType, page: int) -> str:
    return urls.get_auction_ajax_pagination_url(AUCTION_ID, kind, page)


class StallingFetcher(FakeFetcher):
    """Never answers `stalled_url`; records whether that request was cancelled."""

    def __init__(self, pages: dict[str, str], *, stalled_url: str) -> None:
        super().__init__(pages)
        self.stalled_url = stalled_url
        self.cancelled = False

    async def fetch(self, url: str, **kwargs: object):
        if url == self.stalled_url:
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        return await super().fetch(url, **kwargs)


@pytest.fixture
def auction_pages(resource: Callable[[str], str]) -> dict[str, str]:
    return {
        AUCTION_URL: resource("auction.html"),
        _ajax_url(AuctionPagesType.ITEMS, 2): resource("auction_items_page_2.json"),
        _ajax_url(AuctionPagesType.ITEMS, 3): resource("auction_items_page_3.json"),
        _ajax_url(AuctionPagesType.OUTFITS, 2): resource("auction_outfits_page_2.json"),
    }


# ---------------------------------------------------------------------------
# Single page records
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestSinglePageRecords:
    async def test_character_envelope(self, resource: Callable[[str], str], settings: AppSettings) -> None:
        url = urls.get_character_url("Galarzaa Fidera")
        fetcher = FakeFetcher(
            {url: resource("character.html")},
            headers={"cf-cache-status": "HIT", "age": "42"},
            default_fetching_time=0.3,
        )
        response = await TibiaClient(fetcher, settings).fetch_character("Galarzaa Fidera")
        assert response.data is not None
        assert response.data.name == "Galarzaa Fidera"
        assert response.timestamp == FIXED_TIMESTAMP
        assert response.is_cached is True
        assert response.cache_age == 42
        assert response.fetching_time == pytest.approx(0.3)
        assert response.parsing_time >= 0
        assert fetcher.calls == [(url, "GET", ())]

    async def test_not_found_is_empty_envelope(self, resource: Callable[[str], str], settings: AppSettings) -> None:
        url = urls.get_character_url("Nobody Here")
        fetcher = FakeFetcher({url: resource("character_not_found.html")})
        response = await TibiaClient(fetcher, settings).fetch_character("Nobody Here")
        assert response.data is None
        assert response.is_cached is False
        assert response.cache_age == 0

    async def test_malformed_page_raises(self, settings: AppSettings) -> None:
        url = urls.get_world_url("Gladera")
        fetcher = FakeFetcher({url: "<html><body>Maintenance</body></html>"})
        with pytest.raises(MalformedInputError) as excinfo:
            await TibiaClient(fetcher, settings).fetch_world("Gladera")
        assert url in str(excinfo.value)

    async def test_transport_error_propagates(self, settings: AppSettings) -> None:
        with pytest.raises(TransportError) as excinfo:
            await TibiaClient(FakeFetcher(), settings).fetch_world_overview()
        assert excinfo.value.status_code == 404

    async def test_invalid_record_propagates(self, resource: Callable[[str], str], settings: AppSettings) -> None:
        url = urls.get_character_url("Galarzaa Fidera")
        page = resource("character.html").replace("<td>285</td>", "<td>0</td>")
        with pytest.raises(RecordValidationError):
            await TibiaClient(FakeFetcher({url: page}), settings).fetch_character("Galarzaa Fidera")

    async def test_world_overview(self, resource: Callable[[str], str], settings: AppSettings) -> None:
        fetcher = FakeFetcher({urls.get_world_overview_url(): resource("world_overview.html")})
        response = await TibiaClient(fetcher, settings).fetch_world_overview()
        assert response.data.total_online == 1536

    async def test_houses(self, resource: Callable[[str], str], settings: AppSettings) -> None:
        fetcher = FakeFetcher({urls.get_houses_section_url("Gladera", "Thais"): resource("houses.html")})
        response = await TibiaClient(fetcher, settings).fetch_houses_section("Gladera", "Thais")
        assert len(response.data.entries) == 3

    async def test_highscores(self, resource: Callable[[str], str], settings: AppSettings) -> None:
        url = urls.get_highscores_url("Gladera", HighscoresCategory.EXPERIENCE)
        fetcher = FakeFetcher({url: resource("highscores.html")})
        response = await TibiaClient(fetcher, settings).fetch_highscores_page("Gladera")
        assert response.data.entries[0].name == "Galarzaa Fidera"

    async def test_bazaar(self, resource: Callable[[str], str], settings: AppSettings) -> None:
        fetcher = FakeFetcher({urls.get_bazaar_url(BazaarType.CURRENT, 1): resource("bazaar.html")})
        response = await TibiaClient(fetcher, settings).fetch_bazaar()
        assert response.data.results_count == 3490

    async def test_filtered_bazaar(self, resource: Callable[[str], str], settings: AppSettings) -> None:
        filters = BazaarFilters(world="Antica", order_direction=AuctionOrderDirection.LOWEST_EARLIEST)
        url = urls.get_bazaar_url(BazaarType.CURRENT, 2, filters)
        fetcher = FakeFetcher({url: resource("bazaar.html")})
        response = await TibiaClient(fetcher, settings).fetch_bazaar(page=2, filters=filters)
        assert fetcher.urls == [url]
        assert response.data.filters.world == "Antica"

    async def test_house(self, resource: Callable[[str], str], settings: AppSettings) -> None:
        fetcher = FakeFetcher({urls.get_house_url("Gladera", 10101): resource("house.html")})
        response = await TibiaClient(fetcher, settings).fetch_house("Gladera", 10101)
        assert response.data.owner == "Galarzaa Fidera"

    async def test_guild(self, resource: Callable[[str], str], settings: AppSettings) -> None:
        fetcher = FakeFetcher({urls.get_guild_url("Redd Alliance"): resource("guild.html")})
        response = await TibiaClient(fetcher, settings).fetch_guild("Redd Alliance")
        assert len(response.data.members) == 4

    async def test_unknown_guild_is_empty_envelope(self, settings: AppSettings) -> None:
        url = urls.get_guild_url("Nobody")
        fetcher = FakeFetcher({url: "<html><body>An internal error has occurred.</body></html>"})
        response = await TibiaClient(fetcher, settings).fetch_guild("Nobody")
        assert response.data is None

    async def test_world_guilds(self, resource: Callable[[str], str], settings: AppSettings) -> None:
        fetcher = FakeFetcher({urls.get_world_guilds_url("Gladera"): resource("world_guilds.html")})
        response = await TibiaClient(fetcher, settings).fetch_world_guilds("Gladera")
        assert [entry.name for entry in response.data.entries] == ["Redd Alliance", "Quiet Ones", "New Dawn"]

    async def test_forum_announcement(self, resource: Callable[[str], str], settings: AppSettings) -> None:
        fetcher = FakeFetcher({urls.get_forum_announcement_url(8): resource("forum_announcement.html")})
        response = await TibiaClient(fetcher, settings).fetch_forum_announcement(8)
        assert response.data.title == "Board Rules"


# ---------------------------------------------------------------------------
# Auctions and sub-collections
# ---------------------------------------------------------------------------


@pytest.mark.asyncio
class TestFetchAuction:
    async def test_without_flags_only_fetches_the_auction(
        self, auction_pages: dict[str, str], settings: AppSettings
    ) -> None:
        fetcher = FakeFetcher(auction_pages)
        response = await TibiaClient(fetcher, settings).fetch_auction(AUCTION_ID)
        assert fetcher.urls == [AUCTION_URL]
        assert response.data.details.items.is_fully_fetched is False
        assert len(response.data.details.items.entries) == 10

    async def test_fetch_items_walks_remaining_pages(
        self, auction_pages: dict[str, str], settings: AppSettings
    ) -> None:
        fetcher = FakeFetcher(auction_pages, fetching_times={AUCTION_URL: 0.5})
        response = await TibiaClient(fetcher, settings).fetch_auction(AUCTION_ID, fetch_items=True)

        assert fetcher.urls == [
            AUCTION_URL,
            _ajax_url(AuctionPagesType.ITEMS, 2),
            _ajax_url(AuctionPagesType.ITEMS, 3),
        ]
        items = response.data.details.items
        assert items.is_fully_fetched is True
        assert items.current_page == 3
        assert [entry.item_id for entry in items.entries] == list(range(1001, 1026))
        assert response.fetching_time == pytest.approx(1.0)
        # Other collections are untouched.
        assert response.data.details.outfits.is_fully_fetched is False

    async def test_pagination_requests_are_ajax(
        self, auction_pages: dict[str, str], settings: AppSettings
    ) -> None:
        fetcher = FakeFetcher(auction_pages)
        await TibiaClient(fetcher, settings).fetch_auction(AUCTION_ID, fetch_items=True)
        assert fetcher.calls[0][2] == ()
        assert all(headers == AJAX_HEADERS for _, _, headers in fetcher.calls[1:])

    async def test_fetch_outfits(self, auction_pages: dict[str, str], settings: AppSettings) -> None:
        fetcher = FakeFetcher(auction_pages)
        response = await TibiaClient(fetcher, settings).fetch_auction(AUCTION_ID, fetch_outfits=True)
        outfits = response.data.details.outfits
        assert [entry.name for entry in outfits.entries] == ["Citizen", "Hunter", "Mage"]
        assert outfits.is_fully_fetched is True
        assert fetcher.urls == [AUCTION_URL, _ajax_url(AuctionPagesType.OUTFITS, 2)]

    async def test_concurrent_walks(self, auction_pages: dict[str, str], settings: AppSettings) -> None:
        concurrent = settings.model_copy(update={"concurrent_subcollections": True})
        fetcher = FakeFetcher(auction_pages)
        response = await TibiaClient(fetcher, concurrent).fetch_auction(
            AUCTION_ID, fetch_items=True, fetch_mounts=True, fetch_outfits=True
        )
        details = response.data.details
        assert len(details.items.entries) == 25
        assert len(details.outfits.entries) == 3
        assert sorted(fetcher.urls[1:]) == sorted(
            [
                _ajax_url(AuctionPagesType.ITEMS, 2),
                _ajax_url(AuctionPagesType.ITEMS, 3),
                _ajax_url(AuctionPagesType.OUTFITS, 2),
            ]
        )
        # Pages of one collection are still fetched in order.
        item_urls = [url for url in fetcher.urls if f"type={AuctionPagesType.ITEMS.value}&" in url]
        assert item_urls == [_ajax_url(AuctionPagesType.ITEMS, 2), _ajax_url(AuctionPagesType.ITEMS, 3)]

    async def test_concurrent_failure_cancels_other_walks(
        self, auction_pages: dict[str, str], settings: AppSettings
    ) -> None:
        concurrent = settings.model_copy(update={"concurrent_subcollections": True})
        del auction_pages[_ajax_url(AuctionPagesType.OUTFITS, 2)]
        fetcher = StallingFetcher(auction_pages, stalled_url=_ajax_url(AuctionPagesType.ITEMS, 2))
        with pytest.raises(TransportError) as excinfo:
            await TibiaClient(fetcher, concurrent).fetch_auction(AUCTION_ID, fetch_items=True, fetch_outfits=True)
        assert excinfo.value.url == _ajax_url(AuctionPagesType.OUTFITS, 2)
        assert fetcher.cancelled is True

    async def test_skip_details_does_not_walk(self, auction_pages: dict[str, str], settings: AppSettings) -> None:
        fetcher = FakeFetcher(auction_pages)
        response = await TibiaClient(fetcher, settings).fetch_auction(
            AUCTION_ID, skip_details=True, fetch_items=True
        )
        assert response.data.details is None
        assert fetcher.urls == [AUCTION_URL]

    async def test_missing_auction_does_not_walk(self, settings: AppSettings) -> None:
        page = "<html><body><p>An internal error has occurred.</p></body></html>"
        fetcher = FakeFetcher({AUCTION_URL: page})
        response = await TibiaClient(fetcher, settings).fetch_auction(AUCTION_ID, fetch_items=True)
        assert response.data is None
        assert fetcher.urls == [AUCTION_URL]

    async def test_failed_page_fetch_raises_transport_error(
        self, auction_pages: dict[str, str], settings: AppSettings
    ) -> None:
        del auction_pages[_ajax_url(AuctionPagesType.ITEMS, 3)]
        fetcher = FakeFetcher(auction_pages)
        with pytest.raises(TransportError) as excinfo:
            await TibiaClient(fetcher, settings).fetch_auction(AUCTION_ID, fetch_items=True)
        assert excinfo.value.status_code == 404
        assert excinfo.value.page == 3
        assert len(excinfo.value.partial.entries) == 20

    async def test_unreadable_page_raises_pagination_error(
        self, auction_pages: dict[str, str], settings: AppSettings
    ) -> None:
        auction_pages[_ajax_url(AuctionPagesType.ITEMS, 3)] = "not json"
        fetcher = FakeFetcher(auction_pages)
        with pytest.raises(PaginationError) as excinfo:
            await TibiaClient(fetcher, settings).fetch_auction(AUCTION_ID, fetch_items=True)
        assert excinfo.value.page == 3
        assert len(excinfo.value.partial.entries) == 20
        assert isinstance(excinfo.value.__cause__, MalformedInputError)
