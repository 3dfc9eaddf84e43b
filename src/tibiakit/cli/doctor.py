"""`tibiakit doctor`: check settings and reachability, or write the user .env."""

from __future__ import annotations

import asyncio
import logging

import httpx
import typer
from rich.console import Console
from rich.table import Table

from tibiakit.adapters.http_client import build_async_client
from tibiakit.cli.ui_components import print_banner
from tibiakit.core.config import AppSettings, get_user_env_file, read_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Check settings and reachability of the configured site.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(settings.base_url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, f"{exc.__class__.__name__}: {exc}"


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the connectivity check."),
) -> None:
    """Print effective settings and check that the base URL answers."""

    settings = AppSettings()
    print_banner(_console)

    table = Table(title="tibiakit Doctor")
    table.add_column("Check", style="cyan", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    env_file = get_user_env_file()
    stored = sorted(key for key in read_env_file(env_file) if key.startswith("TIBIAKIT_"))
    if stored:
        table.add_row("User config", "OK", f"{env_file} ({', '.join(stored)})")
    else:
        table.add_row("User config", "OPTIONAL", str(env_file))
    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("HTTP timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    level_ok = isinstance(logging.getLevelName(settings.log_level.upper()), int)
    table.add_row("Log level", "OK" if level_ok else "FAIL", settings.log_level)
    table.add_row(
        "Sub-collections",
        "OK",
        "concurrent" if settings.concurrent_subcollections else "sequential",
    )

    # Reachability; --offline skips it.
    ok_http = True
    if offline:
        table.add_row("HTTP connectivity", "SKIPPED", "--offline")
    else:
        ok_http, detail_http = asyncio.run(_check_http(settings))
        table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not level_ok:
        _console.print("\n[yellow]Note:[/yellow] Set TIBIAKIT_LOG_LEVEL to DEBUG, INFO, WARNING or ERROR.")
    if not ok_http:
        _console.print(
            "\n[yellow]Note:[/yellow] Check your network or point TIBIAKIT_BASE_URL to a reachable mirror."
        )


@app.command()
def configure() -> None:
    """Prompt for the common settings and save them to the user .env."""

    settings = AppSettings()
    base_url = typer.prompt("Base URL", default=settings.base_url, show_default=True).strip()
    timeout = typer.prompt("HTTP timeout (seconds)", default=settings.http_timeout_seconds, type=float)
    log_level = typer.prompt("Log level", default=settings.log_level, show_default=True).strip().upper()

    if not base_url.startswith(("http://", "https://")):
        raise typer.BadParameter("base URL must start with http:// or https://")
    if timeout <= 0:
        raise typer.BadParameter("timeout must be positive")
    if not isinstance(logging.getLevelName(log_level), int):
        raise typer.BadParameter(f"unknown log level {log_level!r}")

    env_path = write_user_env_vars(
        {
            "TIBIAKIT_BASE_URL": base_url,
            "TIBIAKIT_HTTP_TIMEOUT_SECONDS": f"{timeout:g}",
            "TIBIAKIT_LOG_LEVEL": log_level,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
