"""Character bazaar records.

An auction's details embed six paginated sub-collections (items, store items,
mounts, store mounts, outfits, store outfits). Only their first page comes with
the auction page; the rest is reachable through the pagination endpoint.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field, model_validator

from tibiakit.core.domain.base import TibiaModel
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
from tibiakit.core.domain.pagination import Paginated, PaginatedCollection


class ItemEntry(TibiaModel):
    item_id: int = Field(..., ge=0)
    name: str = Field(..., min_length=1)
    count: int = Field(default=1, ge=1)
    description: str | None = None


class MountEntry(TibiaModel):
    mount_id: int = Field(..., ge=0)
    name: str = Field(..., min_length=1)


class OutfitEntry(TibiaModel):
    outfit_id: int = Field(..., ge=0)
    name: str = Field(..., min_length=1)
    addons: int = Field(default=0, ge=0, le=3, description="Addon bitmask: 1 = first, 2 = second.")


class ItemSummary(PaginatedCollection[ItemEntry]):
    """Items (or store items) of an auctioned character."""


class Mounts(PaginatedCollection[MountEntry]):
    """Mounts (or store mounts) of an auctioned character."""


class Outfits(PaginatedCollection[OutfitEntry]):
    """Outfits (or store outfits) of an auctioned character."""


class AuctionSkills(TibiaModel):
    axe_fighting: int = Field(..., ge=0)
    club_fighting: int = Field(..., ge=0)
    distance_fighting: int = Field(..., ge=0)
    fishing: int = Field(..., ge=0)
    fist_fighting: int = Field(..., ge=0)
    magic_level: int = Field(..., ge=0)
    shielding: int = Field(..., ge=0)
    sword_fighting: int = Field(..., ge=0)


class AuctionDetails(TibiaModel):
    """An auction's details: everything below the auction header."""

    hit_points: int = Field(..., ge=0)
    mana: int = Field(..., ge=0)
    capacity: int = Field(..., ge=0)
    speed: int = Field(..., ge=0)
    blessings_count: int = Field(..., ge=0)
    mounts_count: int = Field(..., ge=0)
    outfits_count: int = Field(..., ge=0)
    titles_count: int = Field(..., ge=0)
    skills: AuctionSkills
    creation_date: datetime
    experience: int = Field(..., ge=0)
    gold: int = Field(..., ge=0)
    achievement_points: int = Field(..., ge=0)
    regular_world_transfers_available: datetime | None = Field(
        default=None,
        description="When regular world transfers become available again. None if available now.",
    )
    charm_expansion: bool
    available_charm_points: int = Field(..., ge=0)
    spent_charm_points: int = Field(..., ge=0)
    daily_reward_streak: int = Field(..., ge=0)
    hunting_task_points: int = Field(..., ge=0)
    permanent_hunting_task_slots: int = Field(..., ge=0)
    permanent_prey_slots: int = Field(..., ge=0)
    prey_wildcards: int = Field(..., ge=0)
    hirelings: int = Field(..., ge=0)
    hireling_jobs: int = Field(..., ge=0)
    hireling_outfits: int = Field(..., ge=0)
    items: ItemSummary
    store_items: ItemSummary
    mounts: Mounts
    store_mounts: Mounts
    outfits: Outfits
    store_outfits: Outfits

    def collection(self, kind: AuctionPagesType) -> PaginatedCollection:
        """The sub-collection served by the pagination endpoint type `kind`."""

        return getattr(self, kind.field_name)


class Auction(TibiaModel):
    """A character auction.

    `details` is `None` when only the auction header was parsed.
    """

    auction_id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    level: int = Field(..., ge=1)
    world: str = Field(..., min_length=1)
    vocation: Vocation
    sex: Sex
    outfit_id: int = Field(..., ge=0)
    displayed_items: tuple[ItemEntry, ...] = ()
    sales_arguments: tuple[str, ...] = ()
    start_date: datetime
    end_date: datetime
    bid: int = Field(..., ge=0)
    bid_type: BidType
    status: AuctionStatus
    details: AuctionDetails | None = None

    @model_validator(mode="after")
    def _check_consistency(self) -> "Auction":
        if self.end_date < self.start_date:
            raise ValueError("auction ends before it starts")
        if self.bid_type is BidType.WINNING and self.status is AuctionStatus.IN_PROGRESS:
            raise ValueError("an auction in progress cannot have a winning bid")
        return self


class BazaarFilters(TibiaModel):
    """Search and sort options of the character bazaar. `None` means no filter."""

    world: str | None = None
    pvp_type: AuctionPvpTypeFilter | None = None
    battleye: AuctionBattlEyeFilter | None = None
    vocation: AuctionVocationFilter | None = None
    minimum_level: int | None = Field(default=None, ge=1)
    maximum_level: int | None = Field(default=None, ge=1)
    skill: AuctionSkillFilter | None = None
    minimum_skill_level: int | None = Field(default=None, ge=0)
    maximum_skill_level: int | None = Field(default=None, ge=0)
    order_by: AuctionOrderBy | None = None
    order_direction: AuctionOrderDirection | None = None
    search_string: str | None = None
    search_type: AuctionSearchType | None = None

    @model_validator(mode="after")
    def _check_ranges(self) -> "BazaarFilters":
        if None not in (self.minimum_level, self.maximum_level) and self.minimum_level > self.maximum_level:
            raise ValueError("minimum_level is greater than maximum_level")
        if (
            None not in (self.minimum_skill_level, self.maximum_skill_level)
            and self.minimum_skill_level > self.maximum_skill_level
        ):
            raise ValueError("minimum_skill_level is greater than maximum_skill_level")
        return self


class CharacterBazaar(Paginated):
    """A page of the character bazaar (current auctions or auction history)."""

    bazaar_type: BazaarType
    filters: BazaarFilters | None = Field(
        default=None,
        description="Filters echoed by the page's search form; None when the page has no form.",
    )
    entries: tuple[Auction, ...] = ()
