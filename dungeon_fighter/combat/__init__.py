"""
Combat system module for Dungeon Fighter.

This module handles damage rolls, turn resolution, stage progression and the
soft reset applied when the player is defeated.
"""
