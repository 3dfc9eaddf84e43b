from __future__ import annotations

from datetime import date, datetime
from typing import Self

from tibiakit.core.builders.base import StagedBuilder
from tibiakit.core.domain.enums import BattlEyeType, PvpType, TransferType, Vocation, WorldLocation
from tibiakit.core.domain.world import OnlineCharacter, World, WorldEntry, WorldOverview


class WorldOverviewBuilder(StagedBuilder[WorldOverview]):
    record_type = WorldOverview

    def record_count(self, record_count: int) -> Self:
        return self._set("record_count", record_count)

    def record_date(self, record_date: datetime) -> Self:
        return self._set("record_date", record_date)

    def add_world(self, world: WorldEntry) -> Self:
        return self._append("worlds", world)


class WorldBuilder(StagedBuilder[World]):
    record_type = World

    def name(self, name: str) -> Self:
        return self._set("name", name)

    def is_online(self, is_online: bool) -> Self:
        return self._set("is_online", is_online)

    def online_count(self, online_count: int) -> Self:
        return self._set("online_count", online_count)

    def record_count(self, record_count: int) -> Self:
        return self._set("record_count", record_count)

    def record_date(self, record_date: datetime) -> Self:
        return self._set("record_date", record_date)

    def creation_date(self, creation_date: str) -> Self:
        return self._set("creation_date", creation_date)

    def location(self, location: WorldLocation) -> Self:
        return self._set("location", location)

    def pvp_type(self, pvp_type: PvpType) -> Self:
        return self._set("pvp_type", pvp_type)

    def is_premium_only(self, is_premium_only: bool) -> Self:
        return self._set("is_premium_only", is_premium_only)

    def transfer_type(self, transfer_type: TransferType) -> Self:
        return self._set("transfer_type", transfer_type)

    def world_quest_titles(self, titles: list[str]) -> Self:
        return self._set("world_quest_titles", list(titles))

    def battleye(self, battleye_type: BattlEyeType, battleye_date: date | None = None) -> Self:
        self._set("battleye_type", battleye_type)
        return self._set("battleye_date", battleye_date)

    def is_experimental(self, is_experimental: bool) -> Self:
        return self._set("is_experimental", is_experimental)

    def add_online_player(self, name: str, level: int, vocation: Vocation) -> Self:
        return self._append("online_players", self._entry(OnlineCharacter, name=name, level=level, vocation=vocation))
