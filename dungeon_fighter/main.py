"""
Main entry point for Dungeon Fighter.

Wires the pieces together: configuration, logging, the account store, the
shared session, the combat engine, the session controller and the terminal
loop.

Usage:
    dungeon-fighter [--db URL] [--name NAME] [--seed N] [--log-level LEVEL]
"""

import argparse
import asyncio
from collections.abc import Sequence

from pydantic import ValidationError

from dungeon_fighter.auth.account_service import AccountService
from dungeon_fighter.auth.results import AuthGateway
from dungeon_fighter.character.player import Player
from dungeon_fighter.combat.combat_engine import CombatEngine
from dungeon_fighter.core.config import FighterConfig
from dungeon_fighter.core.dice import RandomRoller
from dungeon_fighter.core.logging import setup_logging
from dungeon_fighter.session.game_session import GameSession
from dungeon_fighter.session.session_controller import SessionController
from dungeon_fighter.ui.cli_interface import RichPresenter, TerminalApp


def build_parser() -> argparse.ArgumentParser:
    """Builds the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="dungeon-fighter",
        description="Turn-based dungeon combat in your terminal.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Settings can also come from the environment (or a .env file):
  DUNGEON_FIGHTER_DATABASE_URL, DUNGEON_FIGHTER_PLAYER_NAME,
  DUNGEON_FIGHTER_SEED, DUNGEON_FIGHTER_LOG_LEVEL
        """,
    )
    parser.add_argument("--db", dest="database_url", help="SQLAlchemy URL of the account store")
    parser.add_argument("--name", dest="player_name", help="Name of your fighter")
    parser.add_argument("--seed", type=int, help="Seed the damage rolls")
    parser.add_argument("--log-level", dest="log_level", help="Logging level (default WARNING)")
    return parser


def build_app(config: FighterConfig, gateway: AuthGateway) -> TerminalApp:
    """
    Assembles a terminal application from a configuration.

    Args:
        config (FighterConfig): The settings to use.
        gateway (AuthGateway): The account capability.

    Returns:
        TerminalApp: The ready to run application.

    """
    session = GameSession()
    presenter = RichPresenter()
    engine = CombatEngine(
        session,
        player=Player(name=config.player_name),
        gateway=gateway,
        presenter=presenter,
        roller=RandomRoller(config.seed),
    )
    controller = SessionController(session, engine, gateway)
    return TerminalApp(controller, presenter)


def load_config(argv: Sequence[str] | None = None) -> FighterConfig:
    """
    Builds the configuration from the environment and the command line.

    Invalid settings are reported like bad flags: usage plus the error on
    stderr and exit status 2.

    Args:
        argv (Sequence[str] | None): Command-line arguments, sys.argv when None.

    Returns:
        FighterConfig: The validated configuration.

    """
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return FighterConfig.from_env(**vars(args))
    except ValidationError as error:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in item['loc'])}: {item['msg']}" for item in error.errors()
        )
        parser.error(f"invalid configuration ({problems})")


async def run(config: FighterConfig) -> None:
    """Opens the account store and runs the terminal until it exits."""
    service = await AccountService.from_url(config.database_url)
    try:
        await build_app(config, service).run()
    finally:
        await service.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Runs the game. Returns the process exit code."""
    config = load_config(argv)
    setup_logging(config.log_level)
    asyncio.run(run(config))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
