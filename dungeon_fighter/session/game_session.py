"""
Game session state.

One GameSession exists per terminal. It is created by the caller and handed
to both the combat engine and the session controller, which are the only
code allowed to change it.
"""

from pydantic import BaseModel, Field

from dungeon_fighter.core.constants import TurnSide


class GameSession(BaseModel):
    """Who is logged in and whose turn is displayed."""

    current_user: str | None = Field(
        default=None,
        description="Account name once a login or registration succeeded.",
    )
    turn: TurnSide = Field(
        default=TurnSide.PLAYER,
        description="Turn label shown by the display, never gates input.",
    )
    status: str | None = Field(
        default=None,
        description="Last status line pushed to the display.",
    )

    @property
    def is_logged_in(self) -> bool:
        return self.current_user is not None
