from __future__ import annotations

from datetime import date
from typing import Self

from tibiakit.core.builders.base import StagedBuilder
from tibiakit.core.domain.enums import Vocation
from tibiakit.core.domain.guild import Guild, GuildEntry, GuildHall, GuildInvite, GuildMember, GuildsSection


class GuildBuilder(StagedBuilder[Guild]):
    record_type = Guild

    def name(self, name: str) -> Self:
        return self._set("name", name)

    def logo_url(self, logo_url: str) -> Self:
        return self._set("logo_url", logo_url)

    def description(self, description: str | None) -> Self:
        return self._set("description", description)

    def world(self, world: str) -> Self:
        return self._set("world", world)

    def founded(self, founded: date) -> Self:
        return self._set("founded", founded)

    def is_active(self, is_active: bool) -> Self:
        return self._set("is_active", is_active)

    def application_open(self, application_open: bool) -> Self:
        return self._set("application_open", application_open)

    def homepage(self, homepage: str | None) -> Self:
        return self._set("homepage", homepage)

    def guildhall(self, name: str, paid_until: date) -> Self:
        return self._set("guildhall", self._entry(GuildHall, name=name, paid_until=paid_until))

    def disband(self, disband_date: date, condition: str) -> Self:
        self._set("disband_date", disband_date)
        return self._set("disband_condition", condition)

    def add_member(
        self,
        *,
        rank: str,
        name: str,
        vocation: Vocation,
        level: int,
        joined_on: date,
        title: str | None = None,
        is_online: bool = False,
    ) -> Self:
        return self._append(
            "members",
            self._entry(
                GuildMember,
                rank=rank,
                name=name,
                title=title,
                vocation=vocation,
                level=level,
                joined_on=joined_on,
                is_online=is_online,
            ),
        )

    def add_invite(self, name: str, invited_on: date) -> Self:
        return self._append("invites", self._entry(GuildInvite, name=name, invited_on=invited_on))


class GuildsSectionBuilder(StagedBuilder[GuildsSection]):
    record_type = GuildsSection

    def world(self, world: str) -> Self:
        return self._set("world", world)

    def add_entry(self, *, name: str, logo_url: str, is_active: bool, description: str | None = None) -> Self:
        return self._append(
            "entries",
            self._entry(GuildEntry, name=name, description=description, logo_url=logo_url, is_active=is_active),
        )
