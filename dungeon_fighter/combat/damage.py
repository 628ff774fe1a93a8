"""
Damage module for Dungeon Fighter.

Damage formulas for both sides of a round. Rolls are uniform and inclusive
of both bounds; the roller is passed in so callers control randomness.
"""

from dungeon_fighter.core.constants import (
    BLOCK_PERCENT,
    ENEMY_DAMAGE_MAX,
    ENEMY_DAMAGE_MIN,
    PLAYER_DAMAGE_MAX,
    PLAYER_DAMAGE_MIN,
)
from dungeon_fighter.core.dice import DiceRoller


def player_damage_range(level: int) -> tuple[int, int]:
    """Inclusive damage bounds of a player attack at a level."""
    return PLAYER_DAMAGE_MIN + level, PLAYER_DAMAGE_MAX + level


def enemy_damage_range(stage: int) -> tuple[int, int]:
    """Inclusive base damage bounds of an enemy attack at a stage."""
    return ENEMY_DAMAGE_MIN + stage, ENEMY_DAMAGE_MAX + stage


def roll_player_damage(roller: DiceRoller, level: int) -> int:
    """
    Rolls the damage of a player attack.

    Args:
        roller (DiceRoller): The source of randomness.
        level (int): The player level.

    Returns:
        int: A value in [9 + level, 15 + level].

    """
    return roller.roll(*player_damage_range(level))


def roll_enemy_damage(roller: DiceRoller, stage: int) -> int:
    """
    Rolls the base damage of an enemy attack, before blocking.

    Args:
        roller (DiceRoller): The source of randomness.
        stage (int): The stage being fought.

    Returns:
        int: A value in [6 + stage, 12 + stage].

    """
    return roller.roll(*enemy_damage_range(stage))


def blocked_damage(base: int) -> int:
    """
    Reduces a hit by an active block.

    Integer arithmetic keeps floor(base * 0.35) exact for every base.

    Args:
        base (int): The rolled damage.

    Returns:
        int: The damage that gets through the block.

    """
    return max(0, base) * BLOCK_PERCENT // 100
