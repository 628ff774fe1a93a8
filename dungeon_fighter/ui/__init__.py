"""
User interface module for Dungeon Fighter.

This module provides the presentation port consumed by the combat engine and
the rich/prompt_toolkit terminal built on top of it.
"""
