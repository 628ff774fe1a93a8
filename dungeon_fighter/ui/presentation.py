"""
Presentation port for Dungeon Fighter.

The combat engine never touches rendering internals. After every mutation
it pushes a RenderSnapshot, and it emits AnimationCue objects for hits and
blocks. A Presenter consumes both; it returns nothing and its failures are
contained by SafePresenter so that a broken display cannot break a fight.
"""

from typing import Protocol

from catchery import log_warning
from pydantic import BaseModel, Field

from dungeon_fighter.core.constants import CueKind, TurnSide


class RenderSnapshot(BaseModel):
    """Everything the display needs to redraw the battle."""

    player_hp_percent: float = Field(ge=0, le=100, description="Player HP bar fill.")
    enemy_hp_percent: float = Field(ge=0, le=100, description="Enemy HP bar fill.")
    player_level: int = Field(description="Player level shown next to the bar.")
    enemy_name: str = Field(description="Display name of the current enemy.")
    turn: TurnSide = Field(description="Whose half of the round is shown.")
    status: str | None = Field(default=None, description="Optional one-line status.")


class AnimationCue(BaseModel):
    """A one-shot animation on one side of the screen."""

    kind: CueKind = Field(description="Hit or block.")
    side: TurnSide = Field(description="Which combatant is animated.")

    def __str__(self) -> str:
        return f"{self.kind.value}@{self.side.value.lower()}"


class Presenter(Protocol):
    """Sink for snapshots and cues."""

    def render(self, snapshot: RenderSnapshot) -> None:
        ...

    def animate(self, cue: AnimationCue) -> None:
        ...


class NullPresenter:
    """Presenter that discards everything."""

    def render(self, snapshot: RenderSnapshot) -> None:
        pass

    def animate(self, cue: AnimationCue) -> None:
        pass


class SafePresenter:
    """
    Wraps a presenter so that its exceptions never reach the caller.

    Failures are logged as warnings and the update is dropped.
    """

    def __init__(self, inner: Presenter | None = None) -> None:
        self.inner: Presenter = inner if inner is not None else NullPresenter()

    def render(self, snapshot: RenderSnapshot) -> None:
        try:
            self.inner.render(snapshot)
        except Exception as exc:
            log_warning(
                f"Presenter failed to render: {exc!s}",
                {"presenter": type(self.inner).__name__, "context": "render"},
            )

    def animate(self, cue: AnimationCue) -> None:
        try:
            self.inner.animate(cue)
        except Exception as exc:
            log_warning(
                f"Presenter failed to animate {cue}: {exc!s}",
                {"presenter": type(self.inner).__name__, "context": "animate"},
            )
