"""Enumerations shared by the domain models.

Values are the literal strings (or ids) Tibia.com prints or expects, so a
parser can call `Enum(value)` directly and a URL builder can use `.value`.
"""

from __future__ import annotations

from enum import Enum


class Sex(str, Enum):
    MALE = "male"
    FEMALE = "female"


class Vocation(str, Enum):
    NONE = "None"
    KNIGHT = "Knight"
    ELITE_KNIGHT = "Elite Knight"
    SORCERER = "Sorcerer"
    MASTER_SORCERER = "Master Sorcerer"
    DRUID = "Druid"
    ELDER_DRUID = "Elder Druid"
    PALADIN = "Paladin"
    ROYAL_PALADIN = "Royal Paladin"
    MONK = "Monk"
    EXALTED_MONK = "Exalted Monk"


class AccountStatus(str, Enum):
    FREE_ACCOUNT = "Free Account"
    PREMIUM_ACCOUNT = "Premium Account"


class PvpType(str, Enum):
    OPEN_PVP = "Open PvP"
    OPTIONAL_PVP = "Optional PvP"
    HARDCORE_PVP = "Hardcore PvP"
    RETRO_OPEN_PVP = "Retro Open PvP"
    RETRO_HARDCORE_PVP = "Retro Hardcore PvP"


class WorldLocation(str, Enum):
    EUROPE = "Europe"
    NORTH_AMERICA = "North America"
    SOUTH_AMERICA = "South America"
    OCEANIA = "Oceania"


class TransferType(str, Enum):
    REGULAR = "regular"
    BLOCKED = "blocked"
    LOCKED = "locked"


class BattlEyeType(str, Enum):
    """BattlEye protection of a world."""

    GREEN = "green"
    """Protected by BattlEye since the beginning."""
    YELLOW = "yellow"
    """Protected by BattlEye at a later date."""
    UNPROTECTED = "unprotected"
    """Not protected by BattlEye."""


class HouseType(str, Enum):
    HOUSE = "houses"
    GUILDHALL = "guildhalls"


class HouseStatus(str, Enum):
    RENTED = "rented"
    AUCTIONED = "auctioned"


class HouseOrder(str, Enum):
    """Possible fields to order houses or guildhalls by."""

    NAME = "name"
    SIZE = "size"
    RENT = "rent"
    BID = "bid"
    AUCTION_END = "end"


class HighscoresCategory(int, Enum):
    ACHIEVEMENTS = 1
    AXE_FIGHTING = 2
    CHARM_POINTS = 3
    CLUB_FIGHTING = 4
    DISTANCE_FIGHTING = 5
    EXPERIENCE = 6
    FISHING = 7
    FIST_FIGHTING = 8
    GOSHNARS_TAINT = 9
    LOYALTY_POINTS = 10
    MAGIC_LEVEL = 11
    SHIELDING = 12
    SWORD_FIGHTING = 13
    DROME_SCORE = 14
    BOSS_POINTS = 15


class HighscoresProfession(int, Enum):
    ALL = 0
    NONE = 1
    KNIGHTS = 2
    PALADINS = 3
    SORCERERS = 4
    DRUIDS = 5
    MONKS = 6


class HighscoresBattlEyeType(int, Enum):
    ANY_WORLD = -1
    UNPROTECTED = 0
    PROTECTED = 1
    INITIALLY_PROTECTED = 2


class HighscoresPvpType(int, Enum):
    OPEN_PVP = 0
    OPTIONAL_PVP = 1
    HARDCORE_PVP = 2
    RETRO_OPEN_PVP = 3
    RETRO_HARDCORE_PVP = 4


class BazaarType(str, Enum):
    CURRENT = "currentcharactertrades"
    HISTORY = "pastcharactertrades"


class BidType(str, Enum):
    MINIMUM = "Minimum Bid"
    CURRENT = "Current Bid"
    WINNING = "Winning Bid"


class AuctionStatus(str, Enum):
    IN_PROGRESS = "in progress"
    CURRENTLY_PROCESSED = "currently processed"
    WILL_BE_TRANSFERRED = "will be transferred"
    CANCELLED = "cancelled"
    FINISHED = "finished"


class AuctionPagesType(int, Enum):
    """Paginated sub-collections of an auction, by pagination endpoint type id.

    The mapping from each member to its `AuctionDetails` field and to its entry
    extractor is an explicit table (see `field_name` and
    `adapters.parsers.ajax.PAGE_EXTRACTORS`), checked for exhaustiveness in tests.
    """

    ITEMS = 0
    ITEMS_STORE = 1
    MOUNTS = 2
    MOUNTS_STORE = 3
    OUTFITS = 4
    OUTFITS_STORE = 5

    @property
    def field_name(self) -> str:
        """Name of the `AuctionDetails` field holding this collection."""

        return _DETAILS_FIELDS[self]


_DETAILS_FIELDS: dict[AuctionPagesType, str] = {
    AuctionPagesType.ITEMS: "items",
    AuctionPagesType.ITEMS_STORE: "store_items",
    AuctionPagesType.MOUNTS: "mounts",
    AuctionPagesType.MOUNTS_STORE: "store_mounts",
    AuctionPagesType.OUTFITS: "outfits",
    AuctionPagesType.OUTFITS_STORE: "store_outfits",
}


class AuctionOrderDirection(int, Enum):
    """Sort direction of the bazaar's results."""

    HIGHEST_LATEST = 0
    """Highest values or latest dates first."""
    LOWEST_EARLIEST = 1
    """Lowest values or earliest dates first."""


class AuctionOrderBy(int, Enum):
    """Fields the bazaar can sort auctions by."""

    MAGIC_LEVEL = 1
    SHIELDING = 6
    DISTANCE_FIGHTING = 7
    SWORD_FIGHTING = 8
    CLUB_FIGHTING = 9
    AXE_FIGHTING = 10
    FIST_FIGHTING = 11
    FISHING = 13
    BID = 100
    END_DATE = 101
    LEVEL = 102
    START_DATE = 103


class AuctionSkillFilter(int, Enum):
    MAGIC_LEVEL = 1
    SHIELDING = 6
    DISTANCE_FIGHTING = 7
    SWORD_FIGHTING = 8
    CLUB_FIGHTING = 9
    AXE_FIGHTING = 10
    FIST_FIGHTING = 11
    FISHING = 13


class AuctionVocationFilter(int, Enum):
    NONE = 1
    DRUID = 2
    KNIGHT = 3
    PALADIN = 4
    SORCERER = 5
    MONK = 6


class AuctionBattlEyeFilter(int, Enum):
    INITIALLY_PROTECTED = 1
    PROTECTED = 2
    NOT_PROTECTED = 3


class AuctionPvpTypeFilter(int, Enum):
    OPEN_PVP = 0
    OPTIONAL_PVP = 1
    HARDCORE_PVP = 2
    RETRO_OPEN_PVP = 3
    RETRO_HARDCORE_PVP = 4


class AuctionSearchType(int, Enum):
    """How the bazaar's search string is matched."""

    ITEM_DEFAULT = 0
    ITEM_WILDCARD = 1
    CHARACTER_NAME = 2
