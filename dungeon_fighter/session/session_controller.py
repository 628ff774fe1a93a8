"""
Session controller module for Dungeon Fighter.

Entry point for every line typed in the terminal. The controller parses the
line, answers the informational commands itself, forwards REGISTER and
LOGIN to the auth gateway and hands combat actions to the engine. It always
returns text for the terminal to print; the only thing it raises is an
AuthError when the gateway refuses (or cannot process) a register/login.
"""

from collections.abc import Awaitable

from dungeon_fighter.auth.results import AccountInfo, AuthGateway, AuthResult
from dungeon_fighter.combat.combat_engine import CombatEngine
from dungeon_fighter.commands.parser import Command, CommandParser
from dungeon_fighter.core.constants import CommandType
from dungeon_fighter.core.error_handling import AuthError, ProtocolError, ValidationError
from dungeon_fighter.core.logging import get_logger
from dungeon_fighter.session.game_session import GameSession

logger = get_logger(__name__)

HELP_LINES = [
    "Available commands:",
    "HELP",
    "STATUS",
    "REGISTER <username> <password>",
    "LOGIN <username> <password>",
    "HIT ENEMY",
    "BLOCK",
]

UNKNOWN_COMMAND_TEXT = "Unknown command. Type HELP."


class SessionController:
    """Dispatches parsed commands for one terminal session."""

    def __init__(
        self,
        session: GameSession,
        engine: CombatEngine,
        gateway: AuthGateway,
        parser: CommandParser | None = None,
    ) -> None:
        """
        Initialize the controller.

        Args:
            session (GameSession): The shared session state.
            engine (CombatEngine): The engine owning the combatants.
            gateway (AuthGateway): The account capability.
            parser (CommandParser | None): The command parser.

        """
        self.session: GameSession = session
        self.engine: CombatEngine = engine
        self.gateway: AuthGateway = gateway
        self.parser: CommandParser = parser if parser is not None else CommandParser()

    async def execute(self, line: str | None) -> str:
        """
        Runs one line of input.

        Args:
            line (str | None): The raw text typed by the user.

        Returns:
            str: The text to display, empty for blank input.

        Raises:
            AuthError: When a register or login attempt fails.

        """
        command = self.parser.parse(line)
        logger.debug("Executing %s", command)
        try:
            return await self.dispatch(command)
        except (ValidationError, ProtocolError) as error:
            # Local problems are answered with usage text.
            return error.message

    async def dispatch(self, command: Command) -> str:
        """
        Runs an already parsed command.

        Args:
            command (Command): The command to run.

        Returns:
            str: The text to display.

        Raises:
            ValidationError: When REGISTER or LOGIN lacks an argument.
            ProtocolError: For unknown commands.
            AuthError: When a register or login attempt fails.

        """
        if command.type == CommandType.EMPTY:
            return ""
        if command.type == CommandType.HELP:
            return self.help_text()
        if command.type == CommandType.STATUS:
            return self.status_text()
        if command.type in (CommandType.REGISTER, CommandType.LOGIN):
            self.validate_credentials(command)
            if command.type == CommandType.REGISTER:
                return await self.register(command.username or "", command.password or "")
            return await self.login(command.username or "", command.password or "")
        if command.type == CommandType.COMBAT:
            return await self.engine.process_combat(command.action)
        raise ProtocolError(UNKNOWN_COMMAND_TEXT, {"command": str(command.type)})

    # ==========================================================================
    # INFORMATION
    # ==========================================================================

    def help_text(self) -> str:
        """Lists the available commands, one per line."""
        return "\n".join(HELP_LINES)

    def status_text(self) -> str:
        """One-line summary of the session, the player and the enemy."""
        player = self.engine.player
        enemy = self.engine.enemy
        auth = f"Logged as {self.session.current_user}" if self.session.is_logged_in else "Not logged in"
        return " | ".join(
            [
                f"Player: {player.name}",
                auth,
                f"HP: {player.current_hp}/{player.max_hp}",
                f"Level: {player.level}",
                f"Dungeon stage: {player.stage}",
                f"Enemy HP: {enemy.current_hp}/{enemy.max_hp}",
            ]
        )

    # ==========================================================================
    # ACCOUNTS
    # ==========================================================================

    @staticmethod
    def validate_credentials(command: Command) -> None:
        """
        Checks that a REGISTER or LOGIN command carries both arguments.

        Args:
            command (Command): The parsed command.

        Raises:
            ValidationError: With the usage text when an argument is missing.

        """
        if not command.has_credentials:
            raise ValidationError(
                f"Usage: {command.type} <username> <password>",
                {"command": str(command.type)},
            )

    async def register(self, username: str, password: str) -> str:
        """
        Creates an account and logs it in.

        Args:
            username (str): Requested account name.
            password (str): Plain password.

        Returns:
            str: The confirmation text.

        Raises:
            AuthError: When the gateway refuses the registration.

        """
        result = await self._call_gateway("register", self.gateway.register(username, password))
        user = self._accept(result, "register")
        self.engine.load_progress(user.level, "Registration successful. Enter combat commands.")
        return f"Registered and logged in as {user.username}."

    async def login(self, username: str, password: str) -> str:
        """
        Logs into an existing account and loads its level.

        Args:
            username (str): Account name.
            password (str): Plain password.

        Returns:
            str: The confirmation text.

        Raises:
            AuthError: When the credentials are refused.

        """
        result = await self._call_gateway("login", self.gateway.login(username, password))
        user = self._accept(result, "login")
        self.engine.load_progress(user.level, f"Welcome back, {user.username}.")
        return f"Login successful. Loaded level {user.level}."

    @staticmethod
    async def _call_gateway(operation: str, call: Awaitable[AuthResult]) -> AuthResult:
        """Awaits a gateway call, reporting raised errors as transport failures."""
        try:
            return await call
        except Exception as exc:
            logger.warning("%s could not reach the account service: %s", operation, exc)
            return AuthResult.transport_error(f"{exc.__class__.__name__}: {exc}")

    def _accept(self, result: AuthResult, operation: str) -> AccountInfo:
        """Turns a gateway result into the account, or raises AuthError."""
        user = result.user
        if not result.ok or user is None:
            failure = result.reason()
            logger.info("%s failed: %s", operation, failure)
            raise AuthError(failure, {"operation": operation})
        self.session.current_user = user.username
        return user
