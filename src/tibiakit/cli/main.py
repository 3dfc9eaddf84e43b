"""Typer application.

Commands only parse options, call `TibiaClient` and render the envelope; the
fetch/extract/paginate flow lives in `core.services.tibia_client`.

Exit codes:
- 0: record found.
- 1: the site reports that the entity does not exist.
- 2: unrecognized page, invalid record or aborted pagination.
- 3: network or HTTP failure.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional

import typer
from pydantic import ValidationError
from rich.console import Console, RenderableType

from tibiakit.adapters.json_exporter import dump_response_json, export_response_json
from tibiakit.cli import doctor
from tibiakit.cli.ui_components import (
    build_announcement_table,
    build_auction_table,
    build_bazaar_table,
    build_character_table,
    build_guild_table,
    build_highscores_table,
    build_house_table,
    build_houses_table,
    build_metadata_table,
    build_world_guilds_table,
    build_world_table,
    build_worlds_table,
)
from tibiakit.core.config import AppSettings
from tibiakit.core.domain.bazaar import BazaarFilters
from tibiakit.core.domain.enums import (
    AuctionOrderBy,
    AuctionOrderDirection,
    AuctionSearchType,
    AuctionVocationFilter,
    BazaarType,
    HighscoresBattlEyeType,
    HighscoresCategory,
    HighscoresProfession,
    HighscoresPvpType,
    HouseOrder,
    HouseStatus,
    HouseType,
)
from tibiakit.core.domain.response import TibiaResponse
from tibiakit.core.errors import (
    MalformedInputError,
    PaginationError,
    RecordValidationError,
    TransportError,
)
from tibiakit.core.logging_config import configure_logging
from tibiakit.core.services.tibia_client import TibiaClient

EXIT_NOT_FOUND = 1
EXIT_INTERNAL_ERROR = 2
EXIT_TRANSPORT_ERROR = 3

app = typer.Typer(no_args_is_help=True, help="Read Tibia.com pages as typed records.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

JsonOption = typer.Option(False, "--json", help="Print the response envelope as JSON.")
OutputOption = typer.Option(None, "--output", "-o", help="Also export the envelope to this JSON file.")


def build_client(settings: AppSettings) -> TibiaClient:
    return TibiaClient(settings=settings)


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable DEBUG logging."),
) -> None:
    settings = AppSettings()
    try:
        configure_logging("DEBUG" if verbose else settings.log_level, console=_err_console)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    ctx.obj = settings


def _fetch(ctx: typer.Context, call: Callable[[TibiaClient], Awaitable[TibiaResponse]]) -> TibiaResponse:
    settings: AppSettings = ctx.obj or AppSettings()

    async def _run() -> TibiaResponse:
        async with build_client(settings) as client:
            return await call(client)

    try:
        return asyncio.run(_run())
    except TransportError as exc:
        _err_console.print(f"[red]Network error:[/red] {exc}")
        if exc.page is not None:
            _err_console.print(f"[dim]Sub-collection walk stopped before page {exc.page}.[/dim]")
        raise typer.Exit(code=EXIT_TRANSPORT_ERROR) from exc
    except PaginationError as exc:
        _err_console.print(f"[red]Pagination aborted:[/red] {exc}")
        raise typer.Exit(code=EXIT_INTERNAL_ERROR) from exc
    except (MalformedInputError, RecordValidationError) as exc:
        _err_console.print(f"[red]Unexpected page content:[/red] {exc}")
        raise typer.Exit(code=EXIT_INTERNAL_ERROR) from exc


def _emit(
    response: TibiaResponse,
    *,
    as_json: bool,
    output: Optional[Path],
    render: Callable[[Any], RenderableType],
    what: str,
) -> None:
    if output is not None:
        path = export_response_json(response, output)
        _err_console.print(f"[green]Saved JSON to:[/green] {path}")
    if as_json:
        typer.echo(dump_response_json(response))
    if response.data is None:
        _err_console.print(f"[yellow]{what} not found.[/yellow]")
        raise typer.Exit(code=EXIT_NOT_FOUND)
    if not as_json:
        _console.print(render(response.data))
        _console.print(build_metadata_table(response))


@app.command()
def character(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Character name."),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Show a character's information page."""

    response = _fetch(ctx, lambda client: client.fetch_character(name))
    _emit(response, as_json=as_json, output=output, render=build_character_table, what=f"Character {name!r}")


@app.command()
def worlds(
    ctx: typer.Context,
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """List every game world."""

    response = _fetch(ctx, lambda client: client.fetch_world_overview())
    _emit(response, as_json=as_json, output=output, render=build_worlds_table, what="World overview")


@app.command()
def world(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="World name."),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Show a game world's information page."""

    response = _fetch(ctx, lambda client: client.fetch_world(name))
    _emit(response, as_json=as_json, output=output, render=build_world_table, what=f"World {name!r}")


@app.command()
def houses(
    ctx: typer.Context,
    world_name: str = typer.Argument(..., metavar="WORLD", help="World name."),
    town: str = typer.Argument(..., help="Town name."),
    house_type: HouseType = typer.Option(HouseType.HOUSE, "--type", help="Houses or guildhalls."),
    status: Optional[HouseStatus] = typer.Option(None, "--status", help="Only rented or auctioned houses."),
    order: Optional[HouseOrder] = typer.Option(None, "--order", help="Sort field."),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Search the houses of a town."""

    response = _fetch(
        ctx,
        lambda client: client.fetch_houses_section(
            world_name, town, house_type=house_type, status=status, order=order
        ),
    )
    _emit(response, as_json=as_json, output=output, render=build_houses_table, what="House listing")


@app.command()
def house(
    ctx: typer.Context,
    world_name: str = typer.Argument(..., metavar="WORLD", help="World name."),
    house_id: int = typer.Argument(..., help="House id."),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Show a house or guildhall's page."""

    response = _fetch(ctx, lambda client: client.fetch_house(world_name, house_id))
    _emit(response, as_json=as_json, output=output, render=build_house_table, what=f"House {house_id}")


@app.command()
def guild(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Guild name."),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Show a guild's information page and member list."""

    response = _fetch(ctx, lambda client: client.fetch_guild(name))
    _emit(response, as_json=as_json, output=output, render=build_guild_table, what=f"Guild {name!r}")


@app.command()
def guilds(
    ctx: typer.Context,
    world_name: str = typer.Argument(..., metavar="WORLD", help="World name."),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """List the guilds of a world."""

    response = _fetch(ctx, lambda client: client.fetch_world_guilds(world_name))
    _emit(response, as_json=as_json, output=output, render=build_world_guilds_table, what=f"World {world_name!r}")


@app.command()
def highscores(
    ctx: typer.Context,
    world_name: Optional[str] = typer.Option(None, "--world", help="World name. All worlds when omitted."),
    category: str = typer.Option("experience", "--category", help="Category name, e.g. experience, magic_level."),
    vocation: str = typer.Option("all", "--vocation", help="Profession filter, e.g. all, knights, druids."),
    page: int = typer.Option(1, "--page", min=1),
    battleye: str = typer.Option("any_world", "--battleye", help="BattlEye filter, e.g. protected."),
    pvp_types: List[str] = typer.Option([], "--pvp-type", help="World PvP type filter; repeatable."),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Show one page of the highscores."""

    try:
        parsed_category = HighscoresCategory[category.upper()]
        parsed_vocation = HighscoresProfession[vocation.upper()]
        parsed_battleye = HighscoresBattlEyeType[battleye.upper()]
        parsed_pvp_types = [HighscoresPvpType[value.upper()] for value in pvp_types]
    except KeyError as exc:
        raise typer.BadParameter(f"unknown value {exc.args[0].lower()!r}") from exc

    response = _fetch(
        ctx,
        lambda client: client.fetch_highscores_page(
            world_name,
            parsed_category,
            parsed_vocation,
            page,
            parsed_battleye,
            parsed_pvp_types,
        ),
    )
    _emit(response, as_json=as_json, output=output, render=build_highscores_table, what="Highscores")


def _enum_option(enum_type: type, value: Optional[str]) -> Any:
    if value is None:
        return None
    try:
        return enum_type[value.upper()]
    except KeyError as exc:
        raise typer.BadParameter(f"unknown value {value.lower()!r}") from exc


@app.command()
def bazaar(
    ctx: typer.Context,
    history: bool = typer.Option(False, "--history", help="Show the auction history instead of current auctions."),
    page: int = typer.Option(1, "--page", min=1),
    world_name: Optional[str] = typer.Option(None, "--world", help="Only auctions on this world."),
    vocation: Optional[str] = typer.Option(None, "--vocation", help="Vocation filter, e.g. knight, druid, none."),
    min_level: Optional[int] = typer.Option(None, "--min-level", min=1),
    max_level: Optional[int] = typer.Option(None, "--max-level", min=1),
    order_by: Optional[str] = typer.Option(None, "--order-by", help="Sort field, e.g. bid, end_date, level."),
    order_direction: Optional[str] = typer.Option(
        None, "--order-direction", help="highest_latest or lowest_earliest."
    ),
    search: Optional[str] = typer.Option(None, "--search", help="Item or character name to search for."),
    search_type: Optional[str] = typer.Option(
        None, "--search-type", help="item_default, item_wildcard or character_name."
    ),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Show one page of the character bazaar."""

    bazaar_type = BazaarType.HISTORY if history else BazaarType.CURRENT
    values = {
        "world": world_name,
        "vocation": _enum_option(AuctionVocationFilter, vocation),
        "minimum_level": min_level,
        "maximum_level": max_level,
        "order_by": _enum_option(AuctionOrderBy, order_by),
        "order_direction": _enum_option(AuctionOrderDirection, order_direction),
        "search_string": search,
        "search_type": _enum_option(AuctionSearchType, search_type),
    }
    filters: BazaarFilters | None = None
    if any(value is not None for value in values.values()):
        try:
            filters = BazaarFilters(**values)
        except ValidationError as exc:
            raise typer.BadParameter("; ".join(error["msg"] for error in exc.errors())) from exc

    response = _fetch(ctx, lambda client: client.fetch_bazaar(bazaar_type, page, filters))
    _emit(response, as_json=as_json, output=output, render=build_bazaar_table, what="Bazaar page")


@app.command()
def auction(
    ctx: typer.Context,
    auction_id: int = typer.Argument(..., help="Auction id."),
    items: bool = typer.Option(False, "--items", help="Fetch every page of items and store items."),
    mounts: bool = typer.Option(False, "--mounts", help="Fetch every page of mounts and store mounts."),
    outfits: bool = typer.Option(False, "--outfits", help="Fetch every page of outfits and store outfits."),
    skip_details: bool = typer.Option(False, "--skip-details", help="Only parse the auction header."),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Show a character auction."""

    response = _fetch(
        ctx,
        lambda client: client.fetch_auction(
            auction_id,
            skip_details=skip_details,
            fetch_items=items,
            fetch_mounts=mounts,
            fetch_outfits=outfits,
        ),
    )
    _emit(response, as_json=as_json, output=output, render=build_auction_table, what=f"Auction {auction_id}")


@app.command()
def announcement(
    ctx: typer.Context,
    announcement_id: int = typer.Argument(..., help="Announcement id."),
    as_json: bool = JsonOption,
    output: Optional[Path] = OutputOption,
) -> None:
    """Show a forum announcement."""

    response = _fetch(ctx, lambda client: client.fetch_forum_announcement(announcement_id))
    _emit(
        response,
        as_json=as_json,
        output=output,
        render=build_announcement_table,
        what=f"Announcement {announcement_id}",
    )


def run() -> None:
    app()
