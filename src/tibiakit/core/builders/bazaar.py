from __future__ import annotations

from datetime import datetime
from typing import Any, Self, Sequence

from tibiakit.core.builders.base import StagedBuilder
from tibiakit.core.domain.bazaar import (
    Auction,
    AuctionDetails,
    AuctionSkills,
    BazaarFilters,
    CharacterBazaar,
    ItemEntry,
    ItemSummary,
    Mounts,
    Outfits,
)
from tibiakit.core.domain.enums import AuctionPagesType, AuctionStatus, BazaarType, BidType, Sex, Vocation
from tibiakit.core.domain.pagination import PaginatedCollection

COLLECTION_TYPES: dict[AuctionPagesType, type[PaginatedCollection]] = {
    AuctionPagesType.ITEMS: ItemSummary,
    AuctionPagesType.ITEMS_STORE: ItemSummary,
    AuctionPagesType.MOUNTS: Mounts,
    AuctionPagesType.MOUNTS_STORE: Mounts,
    AuctionPagesType.OUTFITS: Outfits,
    AuctionPagesType.OUTFITS_STORE: Outfits,
}


class AuctionBuilder(StagedBuilder[Auction]):
    record_type = Auction

    def auction_id(self, auction_id: int) -> Self:
        return self._set("auction_id", auction_id)

    def name(self, name: str) -> Self:
        return self._set("name", name)

    def level(self, level: int) -> Self:
        return self._set("level", level)

    def world(self, world: str) -> Self:
        return self._set("world", world)

    def vocation(self, vocation: Vocation) -> Self:
        return self._set("vocation", vocation)

    def sex(self, sex: Sex) -> Self:
        return self._set("sex", sex)

    def outfit_id(self, outfit_id: int) -> Self:
        return self._set("outfit_id", outfit_id)

    def add_displayed_item(self, item: ItemEntry) -> Self:
        return self._append("displayed_items", item)

    def add_sales_argument(self, argument: str) -> Self:
        return self._append("sales_arguments", argument)

    def start_date(self, start_date: datetime) -> Self:
        return self._set("start_date", start_date)

    def end_date(self, end_date: datetime) -> Self:
        return self._set("end_date", end_date)

    def bid(self, bid: int, bid_type: BidType) -> Self:
        self._set("bid", bid)
        return self._set("bid_type", bid_type)

    def status(self, status: AuctionStatus) -> Self:
        return self._set("status", status)

    def details(self, details: AuctionDetails | None) -> Self:
        return self._set("details", details)


class AuctionDetailsBuilder(StagedBuilder[AuctionDetails]):
    record_type = AuctionDetails

    def hit_points(self, value: int) -> Self:
        return self._set("hit_points", value)

    def mana(self, value: int) -> Self:
        return self._set("mana", value)

    def capacity(self, value: int) -> Self:
        return self._set("capacity", value)

    def speed(self, value: int) -> Self:
        return self._set("speed", value)

    def blessings_count(self, value: int) -> Self:
        return self._set("blessings_count", value)

    def mounts_count(self, value: int) -> Self:
        return self._set("mounts_count", value)

    def outfits_count(self, value: int) -> Self:
        return self._set("outfits_count", value)

    def titles_count(self, value: int) -> Self:
        return self._set("titles_count", value)

    def skills(self, skills: AuctionSkills) -> Self:
        return self._set("skills", skills)

    def creation_date(self, value: datetime) -> Self:
        return self._set("creation_date", value)

    def experience(self, value: int) -> Self:
        return self._set("experience", value)

    def gold(self, value: int) -> Self:
        return self._set("gold", value)

    def achievement_points(self, value: int) -> Self:
        return self._set("achievement_points", value)

    def regular_world_transfers_available(self, value: datetime | None) -> Self:
        return self._set("regular_world_transfers_available", value)

    def charm_expansion(self, value: bool) -> Self:
        return self._set("charm_expansion", value)

    def available_charm_points(self, value: int) -> Self:
        return self._set("available_charm_points", value)

    def spent_charm_points(self, value: int) -> Self:
        return self._set("spent_charm_points", value)

    def daily_reward_streak(self, value: int) -> Self:
        return self._set("daily_reward_streak", value)

    def hunting_task_points(self, value: int) -> Self:
        return self._set("hunting_task_points", value)

    def permanent_hunting_task_slots(self, value: int) -> Self:
        return self._set("permanent_hunting_task_slots", value)

    def permanent_prey_slots(self, value: int) -> Self:
        return self._set("permanent_prey_slots", value)

    def prey_wildcards(self, value: int) -> Self:
        return self._set("prey_wildcards", value)

    def hirelings(self, value: int) -> Self:
        return self._set("hirelings", value)

    def hireling_jobs(self, value: int) -> Self:
        return self._set("hireling_jobs", value)

    def hireling_outfits(self, value: int) -> Self:
        return self._set("hireling_outfits", value)

    def collection(
        self,
        kind: AuctionPagesType,
        *,
        current_page: int,
        total_pages: int,
        results_count: int,
        entries: Sequence[object],
    ) -> Self:
        """Set one of the six paginated sub-collections from its first page.

        A collection whose current page is its last one is already complete.
        """

        collection_type = COLLECTION_TYPES[kind]
        collection = self._entry(
            collection_type,
            current_page=current_page,
            total_pages=total_pages,
            results_count=results_count,
            entries=tuple(entries),
            is_fully_fetched=current_page >= total_pages,
        )
        return self._set(kind.field_name, collection)


class CharacterBazaarBuilder(StagedBuilder[CharacterBazaar]):
    record_type = CharacterBazaar

    def bazaar_type(self, bazaar_type: BazaarType) -> Self:
        return self._set("bazaar_type", bazaar_type)

    def current_page(self, current_page: int) -> Self:
        return self._set("current_page", current_page)

    def total_pages(self, total_pages: int) -> Self:
        return self._set("total_pages", total_pages)

    def results_count(self, results_count: int) -> Self:
        return self._set("results_count", results_count)

    def add_entry(self, auction: Auction) -> Self:
        return self._append("entries", auction)

    def filters(self, **values: Any) -> Self:
        """Filters echoed by the page; an empty set of values still records the form."""

        return self._set("filters", self._entry(BazaarFilters, **values))
