"""Unit tests for domain record invariants and the per-kind lookup tables."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from tibiakit.adapters.parsers.ajax import PAGE_EXTRACTORS
from tibiakit.adapters.parsers.auction import _SECTION_IDS, ENTRY_PARSERS
from tibiakit.core.builders.bazaar import COLLECTION_TYPES
from tibiakit.core.domain.bazaar import Auction, AuctionDetails, ItemEntry, ItemSummary, MountEntry, Mounts
from tibiakit.core.domain.enums import AuctionPagesType, AuctionStatus, BidType, Sex, Vocation
from tibiakit.core.domain.pagination import CollectionState
from tibiakit.core.domain.response import TibiaResponse

START = datetime(2023, 7, 1, 8, 0, tzinfo=timezone.utc)
END = datetime(2023, 7, 8, 8, 0, tzinfo=timezone.utc)


def _items(count: int) -> tuple[ItemEntry, ...]:
    return tuple(ItemEntry(item_id=index, name=f"item {index}") for index in range(count))


def _auction(**overrides: object) -> Auction:
    values: dict[str, object] = {
        "auction_id": 1,
        "name": "Hyrule Mage",
        "level": 285,
        "world": "Antica",
        "vocation": Vocation.ELDER_DRUID,
        "sex": Sex.FEMALE,
        "outfit_id": 138,
        "start_date": START,
        "end_date": END,
        "bid": 1500,
        "bid_type": BidType.CURRENT,
        "status": AuctionStatus.IN_PROGRESS,
    }
    values.update(overrides)
    return Auction(**values)


# ---------------------------------------------------------------------------
# PaginatedCollection
# ---------------------------------------------------------------------------


class TestPaginatedCollection:
    def test_default_is_unfetched(self) -> None:
        collection = ItemSummary(total_pages=3, results_count=25)
        assert collection.state is CollectionState.UNFETCHED
        assert list(collection.remaining_pages) == [1, 2, 3]

    def test_partially_fetched(self) -> None:
        collection = ItemSummary(current_page=1, total_pages=3, results_count=25, entries=_items(10))
        assert collection.state is CollectionState.PARTIALLY_FETCHED
        assert list(collection.remaining_pages) == [2, 3]

    def test_fully_fetched_has_no_remaining_pages(self) -> None:
        collection = ItemSummary(
            current_page=3,
            total_pages=3,
            results_count=25,
            entries=_items(25),
            is_fully_fetched=True,
        )
        assert collection.state is CollectionState.FULLY_FETCHED
        assert list(collection.remaining_pages) == []

    def test_empty_collection_is_complete(self) -> None:
        collection = Mounts(current_page=1, total_pages=1, results_count=0, is_fully_fetched=True)
        assert collection.state is CollectionState.FULLY_FETCHED

    def test_current_page_cannot_exceed_total(self) -> None:
        with pytest.raises(ValidationError):
            ItemSummary(current_page=4, total_pages=3, results_count=25)

    def test_entries_cannot_exceed_results_count(self) -> None:
        with pytest.raises(ValidationError):
            ItemSummary(current_page=1, total_pages=1, results_count=2, entries=_items(3))

    def test_entries_keep_their_type(self) -> None:
        collection = Mounts(
            current_page=1,
            total_pages=1,
            results_count=1,
            entries=(MountEntry(mount_id=368, name="Widow Queen"),),
        )
        assert collection.entries[0].name == "Widow Queen"


# ---------------------------------------------------------------------------
# Auction
# ---------------------------------------------------------------------------


class TestAuction:
    def test_valid_header_without_details(self) -> None:
        auction = _auction()
        assert auction.details is None
        assert auction.displayed_items == ()

    def test_end_before_start_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _auction(start_date=END, end_date=START)

    def test_winning_bid_requires_a_closed_auction(self) -> None:
        with pytest.raises(ValidationError):
            _auction(bid_type=BidType.WINNING)
        assert _auction(bid_type=BidType.WINNING, status=AuctionStatus.FINISHED).bid_type is BidType.WINNING

    def test_serializes_with_camel_case_keys(self) -> None:
        dumped = _auction().to_json_dict()
        assert dumped["auctionId"] == 1
        assert dumped["bidType"] == "Current Bid"
        assert dumped["startDate"].startswith("2023-07-01T08:00:00")


class TestResponse:
    def test_data_defaults_to_none(self) -> None:
        response: TibiaResponse[Auction] = TibiaResponse(timestamp=START)
        assert response.data is None
        assert response.is_cached is False
        assert response.cache_age == 0

    def test_negative_cache_age_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            TibiaResponse(timestamp=START, cache_age=-1)


# ---------------------------------------------------------------------------
# Exhaustive lookup tables
# ---------------------------------------------------------------------------


class TestAuctionPagesTables:
    def test_every_kind_maps_to_a_details_field(self) -> None:
        fields = {kind.field_name for kind in AuctionPagesType}
        assert len(fields) == len(AuctionPagesType)
        assert fields <= set(AuctionDetails.model_fields)

    @pytest.mark.parametrize(
        "table",
        [COLLECTION_TYPES, ENTRY_PARSERS, PAGE_EXTRACTORS, _SECTION_IDS],
        ids=["collection-types", "entry-parsers", "page-extractors", "section-ids"],
    )
    def test_tables_are_exhaustive(self, table: dict) -> None:
        assert set(table) == set(AuctionPagesType)

    def test_collection_types_match_details_fields(self) -> None:
        for kind, collection_type in COLLECTION_TYPES.items():
            assert AuctionDetails.model_fields[kind.field_name].annotation is collection_type

    def test_endpoint_type_ids(self) -> None:
        assert [kind.value for kind in AuctionPagesType] == [0, 1, 2, 3, 4, 5]
