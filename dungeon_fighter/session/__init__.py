"""
Session module for Dungeon Fighter.

Holds the per-terminal session state and the controller dispatching parsed
commands to the account gateway or the combat engine.
"""
