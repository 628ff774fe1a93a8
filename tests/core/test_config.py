"""
Tests for configuration loading and the command-line parser.
"""

import pytest
from pydantic import ValidationError

from dungeon_fighter.core.config import FighterConfig
from dungeon_fighter.main import build_parser, load_config

ENV_VARS = (
    "DUNGEON_FIGHTER_DATABASE_URL",
    "DUNGEON_FIGHTER_PLAYER_NAME",
    "DUNGEON_FIGHTER_SEED",
    "DUNGEON_FIGHTER_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def no_env_file(tmp_path):
    return tmp_path / "missing.env"


def test_defaults(no_env_file):
    config = FighterConfig.from_env(no_env_file)
    assert config.player_name == "Traveler"
    assert config.seed is None
    assert config.log_level == "WARNING"
    assert config.database_url.startswith("sqlite:///")
    assert config.database_url.endswith("dungeon.sqlite")


def test_environment_variables(monkeypatch, no_env_file):
    monkeypatch.setenv("DUNGEON_FIGHTER_PLAYER_NAME", "Bell")
    monkeypatch.setenv("DUNGEON_FIGHTER_SEED", "42")
    monkeypatch.setenv("DUNGEON_FIGHTER_LOG_LEVEL", "debug")
    config = FighterConfig.from_env(no_env_file)
    assert config.player_name == "Bell"
    assert config.seed == 42
    assert config.log_level == "DEBUG"


def test_overrides_beat_environment(monkeypatch, no_env_file):
    monkeypatch.setenv("DUNGEON_FIGHTER_DATABASE_URL", "sqlite:///from_env.sqlite")
    config = FighterConfig.from_env(no_env_file, database_url="sqlite://", player_name=None)
    assert config.database_url == "sqlite://"
    assert config.player_name == "Traveler"


def test_env_file_is_loaded(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("DUNGEON_FIGHTER_PLAYER_NAME=Ais\n")
    # Registered with monkeypatch so the value exported by load_dotenv is removed afterwards.
    monkeypatch.setenv("DUNGEON_FIGHTER_PLAYER_NAME", "unset")
    monkeypatch.delenv("DUNGEON_FIGHTER_PLAYER_NAME")
    config = FighterConfig.from_env(env_file)
    assert config.player_name == "Ais"


def test_blank_name_falls_back_to_default():
    assert FighterConfig(player_name="   ").player_name == "Traveler"


def test_bad_seed_is_rejected(monkeypatch, no_env_file):
    monkeypatch.setenv("DUNGEON_FIGHTER_SEED", "lucky")
    with pytest.raises(ValidationError):
        FighterConfig.from_env(no_env_file)


def test_cli_flags_map_to_config_fields():
    args = build_parser().parse_args(["--db", "sqlite://", "--name", "Bell", "--seed", "3", "--log-level", "info"])
    config = FighterConfig(**{k: v for k, v in vars(args).items() if v is not None})
    assert config.database_url == "sqlite://"
    assert config.player_name == "Bell"
    assert config.seed == 3
    assert config.log_level == "INFO"


def test_load_config_combines_env_and_flags(monkeypatch):
    monkeypatch.setenv("DUNGEON_FIGHTER_PLAYER_NAME", "Bell")
    config = load_config(["--seed", "9"])
    assert config.player_name == "Bell"
    assert config.seed == 9


def test_invalid_env_setting_is_a_usage_error(monkeypatch, capsys):
    monkeypatch.setenv("DUNGEON_FIGHTER_SEED", "abc")
    with pytest.raises(SystemExit) as excinfo:
        load_config([])
    assert excinfo.value.code == 2
    err = capsys.readouterr().err
    assert "invalid configuration" in err
    assert "seed" in err
