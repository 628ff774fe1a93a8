"""
Dungeon Fighter package.

A terminal-styled, turn-based combat minigame driven by typed commands,
with account registration, login and level persistence.
"""

__version__ = "0.1.0"
