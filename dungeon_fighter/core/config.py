"""
Configuration module for Dungeon Fighter.

Settings come from three layers, later ones winning: the defaults declared
on FighterConfig, environment variables (optionally from a .env file), and
the command-line flags parsed in main.py.
"""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

from dungeon_fighter.core.constants import DEFAULT_PLAYER_NAME

ENV_PREFIX = "DUNGEON_FIGHTER_"


def default_database_url() -> str:
    """Returns the SQLite URL of the account store in ./data."""
    return f"sqlite:///{Path.cwd() / 'data' / 'dungeon.sqlite'}"


class FighterConfig(BaseModel):
    """Runtime settings for a terminal session."""

    database_url: str = Field(
        default_factory=default_database_url,
        description="SQLAlchemy URL of the account store.",
    )
    player_name: str = Field(
        default=DEFAULT_PLAYER_NAME,
        description="Display name of the local player.",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the damage rolls, random when unset.",
    )
    log_level: str = Field(
        default="WARNING",
        description="Name of the logging level.",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper() or "WARNING"

    @field_validator("player_name")
    @classmethod
    def _non_empty_name(cls, value: str) -> str:
        return value.strip() or DEFAULT_PLAYER_NAME

    @classmethod
    def from_env(cls, env_file: str | Path | None = None, **overrides: Any) -> "FighterConfig":
        """
        Builds a configuration from the environment.

        Args:
            env_file (str | Path | None): Optional .env file to load first.
                When None, python-dotenv searches for one.
            **overrides: Values taking precedence over the environment.
                Entries set to None are ignored.

        Returns:
            FighterConfig: The resulting configuration.

        """
        load_dotenv(env_file)
        values: dict[str, Any] = {}
        for name in cls.model_fields:
            raw = os.getenv(ENV_PREFIX + name.upper())
            if raw is not None and raw != "":
                values[name] = raw
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
