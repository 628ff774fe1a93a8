"""
Command parsing for the Dungeon Fighter terminal.
"""

from .parser import Command, CommandParser

__all__ = [
    "Command",
    "CommandParser",
]
