"""
Command parser module for Dungeon Fighter.

Turns one raw terminal line into a typed Command. Keywords are matched
case-insensitively while credentials keep their original spelling. The
parser never rejects input: anything it does not recognise becomes an
UNKNOWN command and missing credentials are left for the caller to report.
"""

from pydantic import BaseModel, Field

from dungeon_fighter.core.constants import CombatAction, CommandType


class Command(BaseModel):
    """A single parsed terminal command."""

    type: CommandType = Field(
        description="The kind of command.",
    )
    username: str | None = Field(
        default=None,
        description="Account name for REGISTER and LOGIN.",
    )
    password: str | None = Field(
        default=None,
        description="Password for REGISTER and LOGIN.",
    )
    action: CombatAction | None = Field(
        default=None,
        description="The combat action for COMBAT commands.",
    )

    @property
    def has_credentials(self) -> bool:
        """Whether both username and password were given."""
        return bool(self.username) and bool(self.password)

    def __str__(self) -> str:
        if self.type == CommandType.COMBAT:
            return f"COMBAT({self.action})"
        if self.type in (CommandType.REGISTER, CommandType.LOGIN):
            # Never echo the password.
            return f"{self.type}({self.username})"
        return str(self.type)


class CommandParser:
    """Parser for the Dungeon Fighter command language."""

    @staticmethod
    def parse(line: str | None) -> Command:
        """
        Parses a raw input line.

        Args:
            line (str | None): The text typed by the user.

        Returns:
            Command: The parsed command, EMPTY for blank input and UNKNOWN
            for anything unrecognised.

        """
        cleaned = (line or "").strip()
        if not cleaned:
            return Command(type=CommandType.EMPTY)

        tokens = cleaned.split()
        keywords = [token.upper() for token in tokens]
        first = keywords[0]
        second = keywords[1] if len(keywords) > 1 else None

        if first == "HELP":
            return Command(type=CommandType.HELP)
        if first == "STATUS":
            return Command(type=CommandType.STATUS)

        if first in ("REGISTER", "LOGIN"):
            return Command(
                type=CommandType(first),
                username=tokens[1] if len(tokens) > 1 else None,
                password=tokens[2] if len(tokens) > 2 else None,
            )

        if first == "HIT" and second == "ENEMY":
            return Command(type=CommandType.COMBAT, action=CombatAction.HIT)
        if first == "BLOCK":
            return Command(type=CommandType.COMBAT, action=CombatAction.BLOCK)

        return Command(type=CommandType.UNKNOWN)
