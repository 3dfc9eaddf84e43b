"""Game world records."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import Field, model_validator

from tibiakit.core.domain.base import TibiaModel
from tibiakit.core.domain.enums import BattlEyeType, PvpType, TransferType, Vocation, WorldLocation


class WorldEntry(TibiaModel):
    """A world as listed in the world overview."""

    name: str = Field(..., min_length=1)
    is_online: bool
    online_count: int = Field(..., ge=0)
    location: WorldLocation
    pvp_type: PvpType
    battleye_type: BattlEyeType = BattlEyeType.UNPROTECTED
    battleye_date: date | None = None
    transfer_type: TransferType = TransferType.REGULAR
    is_premium_only: bool = False
    is_experimental: bool = False


class WorldOverview(TibiaModel):
    """The list of game worlds and the overall online record."""

    record_count: int = Field(..., ge=0)
    record_date: datetime
    worlds: tuple[WorldEntry, ...] = ()

    @property
    def total_online(self) -> int:
        return sum(world.online_count for world in self.worlds)


class OnlineCharacter(TibiaModel):
    name: str = Field(..., min_length=1)
    level: int = Field(..., ge=1)
    vocation: Vocation


class World(TibiaModel):
    """A game world, as shown in its own page."""

    name: str = Field(..., min_length=1)
    is_online: bool
    online_count: int = Field(..., ge=0)
    record_count: int = Field(..., ge=0)
    record_date: datetime
    creation_date: str = Field(..., pattern=r"^\d{4}-\d{2}$", description="Creation month, as YYYY-MM.")
    location: WorldLocation
    pvp_type: PvpType
    is_premium_only: bool = False
    transfer_type: TransferType = TransferType.REGULAR
    world_quest_titles: tuple[str, ...] = ()
    battleye_type: BattlEyeType = BattlEyeType.UNPROTECTED
    battleye_date: date | None = None
    is_experimental: bool = False
    online_players: tuple[OnlineCharacter, ...] = ()

    @model_validator(mode="after")
    def _check_battleye(self) -> "World":
        if self.battleye_type is BattlEyeType.YELLOW and self.battleye_date is None:
            raise ValueError("worlds protected at a later date must have a BattlEye date")
        return self
