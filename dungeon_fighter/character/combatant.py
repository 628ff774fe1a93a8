"""
Combatant base module.

Holds the hit point bookkeeping shared by the player and the enemies: taking
damage, full heals and the ratios the presentation layer draws bars from.
"""

from abc import abstractmethod
from typing import Any

from pydantic import BaseModel, Field

from dungeon_fighter.core.utils import coerce_int, hp_percent


class Combatant(BaseModel):
    """
    Anything with hit points that can be hit.

    Subclasses define max_hp. The current hp is always kept within
    [0, max_hp]; when omitted at construction it starts full.
    """

    hp: int | None = Field(
        default=None,
        description="Current hit points, full when omitted.",
    )

    @property
    @abstractmethod
    def max_hp(self) -> int:
        """
        Abstract maximum hit points, derived from level or stage.

        Returns:
            int: The upper bound of hp.
        """

    def model_post_init(self, _: Any) -> None:
        """Starts at full health and clamps explicit hit points."""
        if self.hp is None:
            self.hp = self.max_hp
        self._clamp_hp()

    def _clamp_hp(self) -> None:
        self.hp = max(0, min(coerce_int(self.hp, 0), self.max_hp))

    @property
    def current_hp(self) -> int:
        """Current hit points as a plain int."""
        return self.hp or 0

    def is_alive(self) -> bool:
        """Checks if the combatant has hit points left."""
        return self.current_hp > 0

    @property
    def hp_percent(self) -> float:
        """HP bar fill ratio in [0, 100]."""
        return hp_percent(self.current_hp, self.max_hp)

    def take_damage(self, amount: Any) -> int:
        """
        Removes hit points, never going below zero.

        Args:
            amount (Any): The damage to apply. Non-numeric values count as
                zero and negative values do not heal.

        Returns:
            int: The hit points actually lost.

        """
        before = self.current_hp
        damage = max(0, coerce_int(amount, 0))
        self.hp = max(0, before - damage)
        return before - self.current_hp

    def heal_full(self) -> None:
        """Restores hit points to the maximum."""
        self.hp = self.max_hp
