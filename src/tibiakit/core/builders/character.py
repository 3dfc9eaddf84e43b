from __future__ import annotations

from datetime import datetime
from typing import Self

from tibiakit.core.builders.base import StagedBuilder
from tibiakit.core.domain.character import Character, Death, GuildMembership, OtherCharacter
from tibiakit.core.domain.enums import AccountStatus, Sex, Vocation


class CharacterBuilder(StagedBuilder[Character]):
    record_type = Character

    def name(self, name: str) -> Self:
        return self._set("name", name)

    def traded(self, traded: bool) -> Self:
        return self._set("traded", traded)

    def deletion_date(self, deletion_date: datetime | None) -> Self:
        return self._set("deletion_date", deletion_date)

    def former_names(self, former_names: list[str]) -> Self:
        return self._set("former_names", list(former_names))

    def title(self, title: str | None) -> Self:
        return self._set("title", title)

    def unlocked_titles(self, unlocked_titles: int) -> Self:
        return self._set("unlocked_titles", unlocked_titles)

    def sex(self, sex: Sex) -> Self:
        return self._set("sex", sex)

    def vocation(self, vocation: Vocation) -> Self:
        return self._set("vocation", vocation)

    def level(self, level: int) -> Self:
        return self._set("level", level)

    def achievement_points(self, achievement_points: int) -> Self:
        return self._set("achievement_points", achievement_points)

    def world(self, world: str) -> Self:
        return self._set("world", world)

    def former_world(self, former_world: str | None) -> Self:
        return self._set("former_world", former_world)

    def residence(self, residence: str) -> Self:
        return self._set("residence", residence)

    def married_to(self, married_to: str | None) -> Self:
        return self._set("married_to", married_to)

    def guild_membership(self, name: str, rank: str) -> Self:
        return self._set("guild_membership", self._entry(GuildMembership, name=name, rank=rank))

    def last_login(self, last_login: datetime | None) -> Self:
        return self._set("last_login", last_login)

    def comment(self, comment: str | None) -> Self:
        return self._set("comment", comment)

    def account_status(self, account_status: AccountStatus) -> Self:
        return self._set("account_status", account_status)

    def add_death(self, time: datetime, level: int, killers: list[str], *, by_player: bool = False) -> Self:
        return self._append(
            "deaths",
            self._entry(Death, time=time, level=level, killers=tuple(killers), by_player=by_player),
        )

    def add_other_character(
        self,
        name: str,
        world: str,
        *,
        is_online: bool = False,
        is_deleted: bool = False,
    ) -> Self:
        return self._append(
            "other_characters",
            self._entry(OtherCharacter, name=name, world=world, is_online=is_online, is_deleted=is_deleted),
        )
