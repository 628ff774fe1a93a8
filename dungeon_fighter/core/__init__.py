"""
Core module for Dungeon Fighter.

This module contains the fundamental pieces shared by every other component:
balance constants and enumerations, the dice roller, the error taxonomy,
configuration, logging and console helpers.
"""

from .config import FighterConfig
from .constants import (
    CombatAction,
    CommandType,
    CueKind,
    TurnSide,
)
from .dice import DiceRoller, RandomRoller, ScriptedRoller
from .error_handling import (
    AuthError,
    ErrorSeverity,
    FighterError,
    PersistenceError,
    ProtocolError,
    RemoteError,
    ValidationError,
)
from .logging import get_logger, setup_logging
from .utils import ccapture, coerce_int, cprint, crule, hp_percent, make_bar

__all__ = [
    # Import from config.py
    "FighterConfig",
    # Import from constants.py
    "CombatAction",
    "CommandType",
    "CueKind",
    "TurnSide",
    # Import from dice.py
    "DiceRoller",
    "RandomRoller",
    "ScriptedRoller",
    # Import from error_handling.py
    "AuthError",
    "ErrorSeverity",
    "FighterError",
    "PersistenceError",
    "ProtocolError",
    "RemoteError",
    "ValidationError",
    # Import from logging.py
    "get_logger",
    "setup_logging",
    # Import from utils.py
    "ccapture",
    "coerce_int",
    "cprint",
    "crule",
    "hp_percent",
    "make_bar",
]
