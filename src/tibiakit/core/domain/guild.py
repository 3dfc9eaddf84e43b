"""Guild records: a guild's page and a world's guild list."""

from __future__ import annotations

from datetime import date

from pydantic import Field, model_validator

from tibiakit.core.domain.base import TibiaModel
from tibiakit.core.domain.enums import Vocation


class GuildMember(TibiaModel):
    rank: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    title: str | None = None
    vocation: Vocation
    level: int = Field(..., ge=1)
    joined_on: date
    is_online: bool = False


class GuildInvite(TibiaModel):
    name: str = Field(..., min_length=1)
    invited_on: date


class GuildHall(TibiaModel):
    name: str = Field(..., min_length=1)
    paid_until: date


class Guild(TibiaModel):
    """A guild, as shown in its information page."""

    name: str = Field(..., min_length=1)
    logo_url: str = Field(..., min_length=1)
    description: str | None = None
    world: str = Field(..., min_length=1)
    founded: date
    is_active: bool
    application_open: bool = False
    homepage: str | None = None
    guildhall: GuildHall | None = None
    disband_date: date | None = None
    disband_condition: str | None = None
    members: tuple[GuildMember, ...] = ()
    invites: tuple[GuildInvite, ...] = ()

    @model_validator(mode="after")
    def _check_disband(self) -> "Guild":
        if (self.disband_date is None) != (self.disband_condition is None):
            raise ValueError("disband_date and disband_condition go together")
        return self

    @property
    def ranks(self) -> tuple[str, ...]:
        """Rank names in the order the member list shows them."""

        return tuple(dict.fromkeys(member.rank for member in self.members))

    @property
    def online_count(self) -> int:
        return sum(member.is_online for member in self.members)


class GuildEntry(TibiaModel):
    """A guild as listed in a world's guild list."""

    name: str = Field(..., min_length=1)
    description: str | None = None
    logo_url: str = Field(..., min_length=1)
    is_active: bool


class GuildsSection(TibiaModel):
    """Guilds of a world: active ones first, then those in course of formation."""

    world: str = Field(..., min_length=1)
    entries: tuple[GuildEntry, ...] = ()

    @property
    def active_guilds(self) -> tuple[GuildEntry, ...]:
        return tuple(entry for entry in self.entries if entry.is_active)

    @property
    def in_formation_guilds(self) -> tuple[GuildEntry, ...]:
        return tuple(entry for entry in self.entries if not entry.is_active)
