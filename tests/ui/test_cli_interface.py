"""
Tests for the terminal loop and the rich presenter.
"""

import pytest

from dungeon_fighter.combat.combat_engine import CombatEngine
from dungeon_fighter.core.constants import CueKind, TurnSide
from dungeon_fighter.core.dice import ScriptedRoller
from dungeon_fighter.session.game_session import GameSession
from dungeon_fighter.session.session_controller import SessionController
from dungeon_fighter.ui.cli_interface import RichPresenter, TerminalApp
from dungeon_fighter.ui.presentation import AnimationCue


@pytest.fixture
def rich_presenter():
    return RichPresenter(bar_length=10)


@pytest.fixture
def app(gateway, rich_presenter):
    session = GameSession()
    engine = CombatEngine(session, gateway=gateway, presenter=rich_presenter, roller=ScriptedRoller([12, 9]))
    return TerminalApp(SessionController(session, engine, gateway), rich_presenter)


@pytest.mark.asyncio
async def test_blank_line_prints_nothing(app):
    assert await app.handle_line("  ") == []


@pytest.mark.asyncio
async def test_command_is_echoed_before_answer(app):
    lines = await app.handle_line("  hit enemy ")
    assert lines == ["> hit enemy", "You deal 12. Enemy deals 9."]


@pytest.mark.asyncio
async def test_multiline_answer_is_split(app):
    lines = await app.handle_line("HELP")
    assert lines[0] == "> HELP"
    assert lines[1] == "Available commands:"
    assert lines[-1] == "BLOCK"


@pytest.mark.asyncio
async def test_auth_failure_becomes_error_line(app):
    lines = await app.handle_line("LOGIN nobody pw")
    assert lines == ["> LOGIN nobody pw", "ERROR: Invalid credentials."]


def test_presenter_without_snapshot_draws_nothing(rich_presenter):
    assert rich_presenter.build_table() is None
    rich_presenter.draw()


@pytest.mark.asyncio
async def test_table_reflects_latest_snapshot(app, rich_presenter):
    await app.handle_line("HIT ENEMY")
    table = rich_presenter.build_table()
    assert table.row_count == 2
    assert table.caption == "Enemy dealt 9."
    assert "PLAYER" in str(table.title)
    assert list(table.columns[0].cells) == ["LVL 1", "DUNGEON FOE 1"]


def test_cues_are_shown_once(rich_presenter):
    CombatEngine(GameSession(), presenter=rich_presenter)
    rich_presenter.animate(AnimationCue(kind=CueKind.HIT, side=TurnSide.ENEMY))
    effects = list(rich_presenter.build_table().columns[3].cells)
    assert effects == ["", CueKind.HIT.emoji]

    rich_presenter.draw()
    assert rich_presenter.cues == []


@pytest.mark.asyncio
async def test_unexpected_errors_become_error_lines(gateway):
    session = GameSession()
    # An empty script makes the first roll fail.
    engine = CombatEngine(session, gateway=gateway, roller=ScriptedRoller([]))
    app = TerminalApp(SessionController(session, engine, gateway))
    lines = await app.handle_line("HIT ENEMY")
    assert lines[0] == "> HIT ENEMY"
    assert lines[1].startswith("ERROR: ValueError: ")
    # The loop keeps serving commands afterwards.
    assert (await app.handle_line("STATUS"))[1].startswith("Player: Traveler")
