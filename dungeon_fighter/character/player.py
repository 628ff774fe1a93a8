"""
Player module.

The player is created once per session and lives as long as the terminal:
logins re-sync its level and stage, victories advance them, defeats only
restore its hit points.
"""

from typing import Any

from pydantic import Field

from dungeon_fighter.character.combatant import Combatant
from dungeon_fighter.core.constants import (
    DEFAULT_PLAYER_NAME,
    PLAYER_BASE_HP,
    PLAYER_HP_PER_LEVEL,
)
from dungeon_fighter.core.utils import coerce_int


def player_max_hp(level: int) -> int:
    """
    Computes the maximum hit points for a player level.

    Args:
        level (int): The player level.

    Returns:
        int: 100 at level 1, plus 8 per additional level.

    """
    return PLAYER_BASE_HP + (max(1, level) - 1) * PLAYER_HP_PER_LEVEL


class Player(Combatant):
    """The character controlled by the user."""

    name: str = Field(
        default=DEFAULT_PLAYER_NAME,
        description="Display name of the player.",
    )
    level: int = Field(
        default=1,
        description="Power counter, never decreases.",
    )
    stage: int = Field(
        default=1,
        description="Deepest dungeon stage reached.",
    )
    is_blocking: bool = Field(
        default=False,
        description="Whether the next enemy hit is reduced.",
    )

    def model_post_init(self, _: Any) -> None:
        self.level = max(1, coerce_int(self.level))
        self.stage = max(1, coerce_int(self.stage))
        super().model_post_init(_)

    @property
    def max_hp(self) -> int:
        return player_max_hp(self.level)

    def increase_level(self, new_level: Any) -> None:
        """
        Raises the level, never lowering it.

        The maximum hit points follow the level; current hit points are only
        clamped, never raised, by this call.

        Args:
            new_level (Any): The requested level. Non-numeric values count
                as 1.

        """
        self.level = max(self.level, coerce_int(new_level))
        self._clamp_hp()

    def set_stage(self, new_stage: Any) -> None:
        """
        Moves the player to a stage, at least stage 1.

        Args:
            new_stage (Any): The requested stage. Non-numeric values count
                as 1.

        """
        self.stage = max(1, coerce_int(new_stage))
