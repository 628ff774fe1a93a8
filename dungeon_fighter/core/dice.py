"""
Dice module for Dungeon Fighter.

Every damage roll in the game is a uniform pick from an inclusive integer
range. The engine receives a roller object instead of calling the random
module directly, so tests can force exact values.
"""

import random
from collections import deque
from collections.abc import Iterable
from typing import Protocol

from dungeon_fighter.core.logging import get_logger

logger = get_logger(__name__)


class DiceRoller(Protocol):
    """Anything able to pick an integer uniformly in [low, high]."""

    def roll(self, low: int, high: int) -> int:
        """Returns an integer between low and high, both inclusive."""
        ...


class RandomRoller:
    """Uniform roller backed by a private random.Random instance."""

    def __init__(self, seed: int | None = None) -> None:
        """
        Initialize the roller.

        Args:
            seed (int | None): Optional seed for reproducible games.

        """
        self._rng = random.Random(seed)

    def roll(self, low: int, high: int) -> int:
        """
        Rolls an integer uniformly in [low, high].

        Args:
            low (int): The lower bound, inclusive.
            high (int): The upper bound, inclusive.

        Returns:
            int: The rolled value.

        Raises:
            ValueError: If low is greater than high.

        """
        if low > high:
            raise ValueError(f"Invalid roll range: [{low}, {high}]")
        value = self._rng.randint(low, high)
        logger.debug("Rolled %d in [%d, %d]", value, low, high)
        return value


class ScriptedRoller:
    """
    Roller returning a fixed sequence of values.

    Each value must lie inside the range it is rolled for, otherwise the
    script does not describe a legal game and a ValueError is raised.
    """

    def __init__(self, values: Iterable[int]) -> None:
        self._values: deque[int] = deque(values)

    def push(self, *values: int) -> None:
        """Appends more values to the script."""
        self._values.extend(values)

    @property
    def remaining(self) -> int:
        """Number of values not consumed yet."""
        return len(self._values)

    def roll(self, low: int, high: int) -> int:
        if not self._values:
            raise ValueError(f"No scripted roll left for range [{low}, {high}]")
        value = self._values.popleft()
        if not low <= value <= high:
            raise ValueError(f"Scripted roll {value} outside range [{low}, {high}]")
        return value
