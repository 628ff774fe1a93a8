"""
Constants and enumerations for Dungeon Fighter.

Defines the balance numbers driving HP and damage formulas, plus the
enumerations shared by the parser, the combat engine and the presentation
layer (turn sides, command types, combat actions and animation cues).
"""

import re
from enum import Enum

# Player hit points: 100 at level 1, +8 for every level above the first.
PLAYER_BASE_HP = 100
PLAYER_HP_PER_LEVEL = 8

# Enemy hit points: 35 + 14 per stage.
ENEMY_BASE_HP = 35
ENEMY_HP_PER_STAGE = 14

# Player damage is rolled in [9 + level, 15 + level].
PLAYER_DAMAGE_MIN = 9
PLAYER_DAMAGE_MAX = 15

# Enemy damage is rolled in [6 + stage, 12 + stage].
ENEMY_DAMAGE_MIN = 6
ENEMY_DAMAGE_MAX = 12

# A blocked hit keeps 35% of its base damage, rounded down.
BLOCK_PERCENT = 35

DEFAULT_PLAYER_NAME = "Traveler"

USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_]{3,24}$")


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name


class TurnSide(NiceEnum):
    """Whose half of the round is being resolved."""

    PLAYER = "PLAYER"
    ENEMY = "ENEMY"

    @property
    def color(self) -> str:
        """Returns the color string associated with this side."""
        return {
            TurnSide.PLAYER: "bold blue",
            TurnSide.ENEMY: "bold red",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies the side color formatting to a message."""
        return f"[{self.color}]{message}[/]"


class CueKind(NiceEnum):
    """Discrete animation cues pushed to the presentation layer."""

    HIT = "hit"
    BLOCK = "block"

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this cue."""
        return {
            CueKind.HIT: "💥",
            CueKind.BLOCK: "🛡",
        }.get(self, "❔")


class CommandType(NiceEnum):
    """The kinds of command the parser can produce."""

    EMPTY = "EMPTY"
    HELP = "HELP"
    STATUS = "STATUS"
    REGISTER = "REGISTER"
    LOGIN = "LOGIN"
    COMBAT = "COMBAT"
    UNKNOWN = "UNKNOWN"


class CombatAction(NiceEnum):
    """Actions available to the player during combat."""

    HIT = "HIT"
    BLOCK = "BLOCK"


# Keywords offered by the terminal completer.
COMMAND_KEYWORDS = ["HELP", "STATUS", "REGISTER", "LOGIN", "HIT", "ENEMY", "BLOCK"]
