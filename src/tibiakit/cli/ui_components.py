"""CLI UI components (Rich).

Why separate components:
- Keeps command logic apart from visual details.
- Lets several commands reuse the same tables and panels.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tibiakit.core.domain.bazaar import Auction, CharacterBazaar
from tibiakit.core.domain.character import Character
from tibiakit.core.domain.enums import AuctionPagesType, HouseStatus
from tibiakit.core.domain.forum import ForumAnnouncement
from tibiakit.core.domain.guild import Guild, GuildsSection
from tibiakit.core.domain.highscores import Highscores
from tibiakit.core.domain.house import House, HousesSection
from tibiakit.core.domain.response import TibiaResponse
from tibiakit.core.domain.world import World, WorldOverview


def print_banner(console: Console) -> None:
    """Print the welcome banner.

    Why here:
    - Avoids circular imports (main <-> doctor).
    - Lets non-interactive modes (JSON/pipelines) skip it.
    """

    title = Text("tibiakit", style="bold cyan")
    subtitle = Text("Tibia.com pages as typed records", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _fmt(value: object) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M UTC")
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


def _key_value_table(title: str, rows: Iterable[tuple[str, object]]) -> Table:
    table = Table(title=title, show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for label, value in rows:
        table.add_row(label, _fmt(value))
    return table


def build_metadata_table(response: TibiaResponse) -> Table:
    """Envelope metadata: when, how fast, and whether it came from the cache."""

    return _key_value_table(
        "Response",
        [
            ("Timestamp", response.timestamp),
            ("Cached", response.is_cached),
            ("Cache age", f"{response.cache_age}s"),
            ("Fetching", f"{response.fetching_time * 1000:.0f}ms"),
            ("Parsing", f"{response.parsing_time * 1000:.0f}ms"),
        ],
    )


def build_character_table(character: Character) -> Table:
    guild = character.guild_membership
    table = _key_value_table(
        character.name,
        [
            ("Title", character.title),
            ("Sex", character.sex),
            ("Vocation", character.vocation),
            ("Level", character.level),
            ("Achievement points", character.achievement_points),
            ("World", character.world),
            ("Residence", character.residence),
            ("Guild", f"{guild.rank} of {guild.name}" if guild else None),
            ("Last login", character.last_login),
            ("Account", character.account_status),
            ("Deaths", len(character.deaths)),
            ("Other characters", len(character.other_characters)),
        ],
    )
    if character.is_scheduled_for_deletion:
        table.caption = f"Scheduled for deletion on {_fmt(character.deletion_date)}"
    return table


def build_worlds_table(overview: WorldOverview) -> Table:
    table = Table(title=f"Worlds ({overview.total_online} players online)")
    table.add_column("World", style="cyan", no_wrap=True)
    table.add_column("Online", justify="right")
    table.add_column("Location")
    table.add_column("PvP")
    table.add_column("BattlEye")
    for world in overview.worlds:
        table.add_row(
            world.name,
            str(world.online_count) if world.is_online else "offline",
            world.location.value,
            world.pvp_type.value,
            world.battleye_type.value,
        )
    table.caption = f"Record: {overview.record_count} players on {_fmt(overview.record_date)}"
    return table


def build_world_table(world: World) -> Table:
    return _key_value_table(
        world.name,
        [
            ("Online", world.is_online),
            ("Players online", world.online_count),
            ("Record", f"{world.record_count} ({_fmt(world.record_date)})"),
            ("Created", world.creation_date),
            ("Location", world.location),
            ("PvP type", world.pvp_type),
            ("BattlEye", world.battleye_type),
            ("Transfer type", world.transfer_type),
            ("Premium only", world.is_premium_only),
            ("Quest titles", ", ".join(world.world_quest_titles) or None),
        ],
    )


def build_houses_table(section: HousesSection) -> Table:
    table = Table(title=f"{section.house_type.value.title()} in {section.town}, {section.world}")
    table.add_column("Id", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Size", justify="right")
    table.add_column("Rent", justify="right")
    table.add_column("Status")
    for entry in section.entries:
        status = entry.status.value
        if entry.highest_bid is not None:
            status += f" ({entry.highest_bid} gold)"
        table.add_row(str(entry.house_id), entry.name, str(entry.size), str(entry.rent), status)
    return table


def build_house_table(house: House) -> Table:
    rows: list[tuple[str, object]] = [
        ("Id", house.house_id),
        ("World", house.world),
        ("Type", house.house_type),
        ("Beds", house.beds),
        ("Size", f"{house.size} sqm"),
        ("Rent", f"{house.rent} gold"),
        ("Status", house.status),
    ]
    if house.status is HouseStatus.RENTED:
        rows += [("Owner", house.owner), ("Paid until", house.paid_until)]
        if house.is_being_transferred:
            rows += [
                ("Moving out", house.transfer_date),
                ("Transfer to", house.transferee),
                ("Transfer price", house.transfer_price),
                ("Accepted", house.transfer_accepted),
            ]
    else:
        rows += [("Auction end", house.auction_end), ("Highest bid", house.highest_bid), ("Bidder", house.highest_bidder)]
    return _key_value_table(house.name, rows)


def build_highscores_table(highscores: Highscores) -> Table:
    table = Table(title=f"Highscores: {highscores.category.name.replace('_', ' ').title()}")
    table.add_column("Rank", justify="right")
    table.add_column("Name", style="cyan")
    table.add_column("Vocation")
    table.add_column("World")
    table.add_column("Level", justify="right")
    table.add_column("Points", justify="right")
    for entry in highscores.entries:
        table.add_row(
            str(entry.rank),
            entry.name,
            entry.vocation.value,
            entry.world,
            str(entry.level),
            str(entry.value),
        )
    table.caption = f"Page {highscores.current_page} of {highscores.total_pages} ({highscores.results_count} results)"
    return table


def build_bazaar_table(bazaar: CharacterBazaar) -> Table:
    table = Table(title="Character Bazaar")
    table.add_column("Id", justify="right", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Level", justify="right")
    table.add_column("World")
    table.add_column("Bid", justify="right")
    table.add_column("Ends")
    for auction in bazaar.entries:
        table.add_row(
            str(auction.auction_id),
            auction.name,
            str(auction.level),
            auction.world,
            f"{auction.bid} ({auction.bid_type.value})",
            _fmt(auction.end_date),
        )
    table.caption = f"Page {bazaar.current_page} of {bazaar.total_pages} ({bazaar.results_count} results)"
    return table


def build_auction_table(auction: Auction) -> Table:
    rows: list[tuple[str, object]] = [
        ("Auction", auction.auction_id),
        ("Level", auction.level),
        ("Vocation", auction.vocation),
        ("World", auction.world),
        ("Bid", f"{auction.bid} ({auction.bid_type.value})"),
        ("Status", auction.status),
        ("Ends", auction.end_date),
    ]
    if auction.details is not None:
        for kind in AuctionPagesType:
            collection = auction.details.collection(kind)
            label = kind.field_name.replace("_", " ").capitalize()
            rows.append(
                (label, f"{len(collection.entries)}/{collection.results_count} ({collection.state.value})")
            )
    return _key_value_table(auction.name, rows)


def build_guild_table(guild: Guild) -> Table:
    table = Table(title=f"{guild.name} ({guild.world})")
    table.add_column("Rank", style="cyan")
    table.add_column("Name")
    table.add_column("Vocation")
    table.add_column("Level", justify="right")
    table.add_column("Joined")
    table.add_column("Status")
    previous_rank = None
    for member in guild.members:
        name = f"{member.name} ({member.title})" if member.title else member.name
        table.add_row(
            member.rank if member.rank != previous_rank else "",
            name,
            member.vocation.value,
            str(member.level),
            member.joined_on.isoformat(),
            "online" if member.is_online else "",
        )
        previous_rank = member.rank
    status = "active" if guild.is_active else "in course of formation"
    table.caption = (
        f"Founded {guild.founded.isoformat()}, {status}. "
        f"{len(guild.members)} members ({guild.online_count} online), {len(guild.invites)} invited."
    )
    return table


def build_world_guilds_table(section: GuildsSection) -> Table:
    table = Table(title=f"Guilds on {section.world}")
    table.add_column("Name", style="cyan")
    table.add_column("Status")
    table.add_column("Description", overflow="fold")
    for entry in section.entries:
        table.add_row(entry.name, "active" if entry.is_active else "in formation", entry.description or "")
    return table


def build_announcement_table(announcement: ForumAnnouncement) -> Table:
    author = announcement.author
    return _key_value_table(
        announcement.title,
        [
            ("Id", announcement.announcement_id),
            ("Board", f"{announcement.board} ({announcement.section})"),
            ("Author", author.name if author.is_available else f"{author.name} (unavailable)"),
            ("From", announcement.start_date),
            ("To", announcement.end_date),
        ],
    )
