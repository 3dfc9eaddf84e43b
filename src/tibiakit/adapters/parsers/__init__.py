"""Extractors: pure functions from page content to `Found | NotFound | Malformed`."""

from tibiakit.adapters.parsers.ajax import PAGE_EXTRACTORS
from tibiakit.adapters.parsers.auction import parse_auction, parse_character_bazaar
from tibiakit.adapters.parsers.character import parse_character
from tibiakit.adapters.parsers.forum import parse_forum_announcement
from tibiakit.adapters.parsers.guild import parse_guild, parse_world_guilds
from tibiakit.adapters.parsers.highscores import parse_highscores
from tibiakit.adapters.parsers.houses import parse_house, parse_houses_section
from tibiakit.adapters.parsers.world import parse_world, parse_world_overview

__all__ = [
    "PAGE_EXTRACTORS",
    "parse_auction",
    "parse_character",
    "parse_character_bazaar",
    "parse_forum_announcement",
    "parse_guild",
    "parse_highscores",
    "parse_house",
    "parse_houses_section",
    "parse_world",
    "parse_world_guilds",
    "parse_world_overview",
]
