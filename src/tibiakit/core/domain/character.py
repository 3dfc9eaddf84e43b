"""Character records."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from tibiakit.core.domain.base import TibiaModel
from tibiakit.core.domain.enums import AccountStatus, Sex, Vocation


class GuildMembership(TibiaModel):
    name: str = Field(..., min_length=1)
    rank: str = Field(..., min_length=1)


class Death(TibiaModel):
    """A death of the character, as listed in its death list."""

    time: datetime
    level: int = Field(..., ge=1)
    killers: tuple[str, ...] = Field(..., min_length=1)
    by_player: bool = Field(
        default=False,
        description="Whether the death was caused by other players (killed vs died).",
    )


class OtherCharacter(TibiaModel):
    """Another character on the same account."""

    name: str = Field(..., min_length=1)
    world: str = Field(..., min_length=1)
    is_online: bool = False
    is_deleted: bool = False


class Character(TibiaModel):
    """A character, as shown in the character information page."""

    name: str = Field(..., min_length=1, max_length=64)
    traded: bool = Field(default=False, description="The character was recently traded.")
    deletion_date: datetime | None = Field(
        default=None,
        description="Date when the character will be deleted, if scheduled.",
    )
    former_names: tuple[str, ...] = ()
    title: str | None = None
    unlocked_titles: int = Field(default=0, ge=0)
    sex: Sex
    vocation: Vocation
    level: int = Field(..., ge=1)
    achievement_points: int = Field(..., ge=0)
    world: str = Field(..., min_length=1)
    former_world: str | None = None
    residence: str = Field(..., min_length=1)
    married_to: str | None = None
    guild_membership: GuildMembership | None = None
    last_login: datetime | None = Field(
        default=None,
        description="Last login time. None when the character never logged in.",
    )
    comment: str | None = None
    account_status: AccountStatus
    deaths: tuple[Death, ...] = ()
    other_characters: tuple[OtherCharacter, ...] = ()

    @property
    def is_scheduled_for_deletion(self) -> bool:
        return self.deletion_date is not None
