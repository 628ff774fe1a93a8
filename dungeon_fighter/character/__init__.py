"""
Combatant models for Dungeon Fighter: the player and the stage enemies.
"""

from .combatant import Combatant
from .enemy import Enemy, enemy_max_hp
from .player import Player, player_max_hp

__all__ = [
    "Combatant",
    "Enemy",
    "Player",
    "enemy_max_hp",
    "player_max_hp",
]
