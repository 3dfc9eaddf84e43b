"""Staged builders, one per domain record."""

from tibiakit.core.builders.base import StagedBuilder
from tibiakit.core.builders.bazaar import AuctionBuilder, AuctionDetailsBuilder, CharacterBazaarBuilder
from tibiakit.core.builders.character import CharacterBuilder
from tibiakit.core.builders.forum import ForumAnnouncementBuilder
from tibiakit.core.builders.guild import GuildBuilder, GuildsSectionBuilder
from tibiakit.core.builders.highscores import HighscoresBuilder
from tibiakit.core.builders.house import HouseBuilder, HousesSectionBuilder
from tibiakit.core.builders.world import WorldBuilder, WorldOverviewBuilder

__all__ = [
    "AuctionBuilder",
    "AuctionDetailsBuilder",
    "CharacterBazaarBuilder",
    "CharacterBuilder",
    "ForumAnnouncementBuilder",
    "GuildBuilder",
    "GuildsSectionBuilder",
    "HighscoresBuilder",
    "HouseBuilder",
    "HousesSectionBuilder",
    "StagedBuilder",
    "WorldBuilder",
    "WorldOverviewBuilder",
]
