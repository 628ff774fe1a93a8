"""
Enemy module.

One enemy guards each stage. It is spawned at full health when the stage
begins and replaced by a new one once beaten.
"""

from typing import Any

from pydantic import Field

from dungeon_fighter.character.combatant import Combatant
from dungeon_fighter.core.constants import ENEMY_BASE_HP, ENEMY_HP_PER_STAGE
from dungeon_fighter.core.utils import coerce_int


def enemy_max_hp(stage: int) -> int:
    """Maximum hit points of the enemy guarding a stage."""
    return ENEMY_BASE_HP + stage * ENEMY_HP_PER_STAGE


class Enemy(Combatant):
    """The foe of a single dungeon stage."""

    stage: int = Field(
        default=1,
        description="The stage this enemy was spawned for.",
    )

    def model_post_init(self, _: Any) -> None:
        self.stage = max(1, coerce_int(self.stage))
        super().model_post_init(_)

    @property
    def name(self) -> str:
        return f"DUNGEON FOE {self.stage}"

    @property
    def max_hp(self) -> int:
        return enemy_max_hp(self.stage)
