"""
Tests for the presentation port.
"""

import pytest
from pydantic import ValidationError

from dungeon_fighter.core.constants import CueKind, TurnSide
from dungeon_fighter.ui.presentation import AnimationCue, NullPresenter, RenderSnapshot, SafePresenter


def make_snapshot(**kwargs):
    values = dict(
        player_hp_percent=80.0,
        enemy_hp_percent=50.0,
        player_level=2,
        enemy_name="DUNGEON FOE 2",
        turn=TurnSide.PLAYER,
    )
    values.update(kwargs)
    return RenderSnapshot(**values)


def test_snapshot_status_is_optional():
    assert make_snapshot().status is None


@pytest.mark.parametrize("percent", [-1, 100.5])
def test_snapshot_percent_bounds(percent):
    with pytest.raises(ValidationError):
        make_snapshot(player_hp_percent=percent)


def test_cue_str():
    assert str(AnimationCue(kind=CueKind.BLOCK, side=TurnSide.PLAYER)) == "block@player"


def test_null_presenter_accepts_everything():
    presenter = NullPresenter()
    presenter.render(make_snapshot())
    presenter.animate(AnimationCue(kind=CueKind.HIT, side=TurnSide.ENEMY))


def test_safe_presenter_forwards(presenter):
    safe = SafePresenter(presenter)
    snapshot = make_snapshot(status="ready")
    safe.render(snapshot)
    safe.animate(AnimationCue(kind=CueKind.HIT, side=TurnSide.ENEMY))
    assert presenter.snapshots == [snapshot]
    assert presenter.cues[0].side == TurnSide.ENEMY


def test_safe_presenter_swallows_display_errors():
    class Broken:
        def render(self, snapshot):
            raise ValueError("no terminal")

        def animate(self, cue):
            raise ValueError("no terminal")

    safe = SafePresenter(Broken())
    safe.render(make_snapshot())
    safe.animate(AnimationCue(kind=CueKind.HIT, side=TurnSide.PLAYER))


def test_safe_presenter_defaults_to_null():
    assert isinstance(SafePresenter().inner, NullPresenter)
