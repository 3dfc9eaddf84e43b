"""House records: the houses section listing and a house's own page."""

from __future__ import annotations

from datetime import datetime, timedelta

from pydantic import Field, model_validator

from tibiakit.core.domain.base import TibiaModel
from tibiakit.core.domain.enums import HouseOrder, HouseStatus, HouseType


class HouseEntry(TibiaModel):
    """A house or guildhall as listed in the houses section."""

    house_id: int = Field(..., ge=1)
    name: str = Field(..., min_length=1)
    size: int = Field(..., ge=0, description="Size in square meters.")
    rent: int = Field(..., ge=0, description="Monthly rent in gold.")
    status: HouseStatus
    time_left: timedelta | None = None
    highest_bid: int | None = Field(default=None, ge=0)


class HousesSection(TibiaModel):
    """Results of a house search for a world and town."""

    world: str = Field(..., min_length=1)
    town: str = Field(..., min_length=1)
    status: HouseStatus | None = Field(default=None, description="Status filter. None means any.")
    house_type: HouseType
    order: HouseOrder | None = None
    entries: tuple[HouseEntry, ...] = ()


class House(TibiaModel):
    """A house or guildhall, as shown in its own page.

    Rented houses carry an owner and, when the owner is leaving, the transfer
    details. Auctioned houses carry the auction's end and its highest bid.
    """

    house_id: int = Field(..., ge=1)
    world: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    image_url: str = Field(..., min_length=1)
    house_type: HouseType
    beds: int = Field(..., ge=0)
    size: int = Field(..., ge=0, description="Size in square meters.")
    rent: int = Field(..., ge=0, description="Monthly rent in gold.")
    status: HouseStatus
    owner: str | None = None
    paid_until: datetime | None = None
    transfer_date: datetime | None = Field(default=None, description="When the owner moves out.")
    transferee: str | None = None
    transfer_price: int | None = Field(default=None, ge=0)
    transfer_accepted: bool = False
    auction_end: datetime | None = None
    highest_bid: int | None = Field(default=None, ge=0)
    highest_bidder: str | None = None

    @model_validator(mode="after")
    def _check_status(self) -> "House":
        if self.status is HouseStatus.RENTED and self.owner is None:
            raise ValueError("a rented house has an owner")
        if self.status is HouseStatus.AUCTIONED and self.owner is not None:
            raise ValueError("an auctioned house has no owner")
        if (self.highest_bid is None) != (self.highest_bidder is None):
            raise ValueError("highest_bid and highest_bidder go together")
        return self

    @property
    def is_being_transferred(self) -> bool:
        return self.transfer_date is not None
