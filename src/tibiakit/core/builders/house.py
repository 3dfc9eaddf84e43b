from __future__ import annotations

from datetime import datetime, timedelta
from typing import Self

from tibiakit.core.builders.base import StagedBuilder
from tibiakit.core.domain.enums import HouseOrder, HouseStatus, HouseType
from tibiakit.core.domain.house import House, HouseEntry, HousesSection


class HousesSectionBuilder(StagedBuilder[HousesSection]):
    record_type = HousesSection

    def world(self, world: str) -> Self:
        return self._set("world", world)

    def town(self, town: str) -> Self:
        return self._set("town", town)

    def status(self, status: HouseStatus | None) -> Self:
        return self._set("status", status)

    def house_type(self, house_type: HouseType) -> Self:
        return self._set("house_type", house_type)

    def order(self, order: HouseOrder | None) -> Self:
        return self._set("order", order)

    def add_entry(
        self,
        *,
        house_id: int,
        name: str,
        size: int,
        rent: int,
        status: HouseStatus,
        time_left: timedelta | None = None,
        highest_bid: int | None = None,
    ) -> Self:
        return self._append(
            "entries",
            self._entry(
                HouseEntry,
                house_id=house_id,
                name=name,
                size=size,
                rent=rent,
                status=status,
                time_left=time_left,
                highest_bid=highest_bid,
            ),
        )


class HouseBuilder(StagedBuilder[House]):
    record_type = House

    def house_id(self, house_id: int) -> Self:
        return self._set("house_id", house_id)

    def world(self, world: str) -> Self:
        return self._set("world", world)

    def name(self, name: str) -> Self:
        return self._set("name", name)

    def image_url(self, image_url: str) -> Self:
        return self._set("image_url", image_url)

    def house_type(self, house_type: HouseType) -> Self:
        return self._set("house_type", house_type)

    def beds(self, beds: int) -> Self:
        return self._set("beds", beds)

    def size(self, size: int) -> Self:
        return self._set("size", size)

    def rent(self, rent: int) -> Self:
        return self._set("rent", rent)

    def status(self, status: HouseStatus) -> Self:
        return self._set("status", status)

    def rented_by(self, owner: str, paid_until: datetime) -> Self:
        self._set("status", HouseStatus.RENTED)
        self._set("owner", owner)
        return self._set("paid_until", paid_until)

    def transfer(
        self,
        transfer_date: datetime,
        *,
        transferee: str | None = None,
        price: int | None = None,
        accepted: bool = False,
    ) -> Self:
        self._set("transfer_date", transfer_date)
        self._set("transferee", transferee)
        self._set("transfer_price", price)
        return self._set("transfer_accepted", accepted)

    def auctioned(self, auction_end: datetime | None) -> Self:
        self._set("status", HouseStatus.AUCTIONED)
        return self._set("auction_end", auction_end)

    def highest_bid(self, bid: int, bidder: str) -> Self:
        self._set("highest_bid", bid)
        return self._set("highest_bidder", bidder)
