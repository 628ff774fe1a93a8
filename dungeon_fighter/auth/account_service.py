"""
Account service module.

In-process implementation of the auth gateway on top of an async SQLAlchemy
engine (SQLite through aiosqlite by default). Every public call returns an
AuthResult:

- rule violations (bad input, duplicate username, wrong password, unknown
  account) come back as REJECTED failures with a 4xx status;
- store problems (database errors, unreachable files) come back as
  TRANSPORT failures with status 500.

Queries go through AsyncSession and password hashing runs in a worker
thread, so the event loop keeps running while an account call is pending.
"""

import asyncio
from collections.abc import Awaitable
from pathlib import Path

from catchery import log_warning
from sqlalchemy import select
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from dungeon_fighter.auth.models import Account, Base
from dungeon_fighter.auth.passwords import DEFAULT_ITERATIONS, hash_password, verify_password
from dungeon_fighter.auth.results import AuthResult
from dungeon_fighter.core.constants import USERNAME_PATTERN
from dungeon_fighter.core.logging import get_logger
from dungeon_fighter.core.utils import coerce_int

logger = get_logger(__name__)


class AccountRejected(Exception):
    """Raised internally when a request breaks an account rule."""

    def __init__(self, message: str, status: int = 400) -> None:
        self.message = message
        self.status = status
        super().__init__(message)


def async_database_url(url: str) -> str:
    """
    Selects the async driver for plain SQLite URLs.

    Args:
        url (str): SQLAlchemy database URL, e.g. ``sqlite:///data/dungeon.sqlite``.

    Returns:
        str: The same URL using ``sqlite+aiosqlite``; other URLs are returned
        unchanged and must already name an async driver.

    """
    parsed = make_url(url)
    if parsed.drivername == "sqlite":
        parsed = parsed.set(drivername="sqlite+aiosqlite")
    return parsed.render_as_string(hide_password=False)


class AccountService:
    """Registers accounts, checks credentials and stores levels."""

    def __init__(self, engine: AsyncEngine, hash_iterations: int = DEFAULT_ITERATIONS) -> None:
        """
        Initialize the service.

        Args:
            engine (AsyncEngine): The engine of the account store.
            hash_iterations (int): PBKDF2 work factor for new passwords.

        """
        self.engine: AsyncEngine = engine
        self.hash_iterations: int = hash_iterations
        self._sessions = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    @classmethod
    async def from_url(cls, url: str, **kwargs: int) -> "AccountService":
        """
        Opens (and creates if needed) the account store at a URL.

        For file-based SQLite URLs the parent directory is created.

        Args:
            url (str): SQLAlchemy database URL.
            **kwargs: Forwarded to the constructor.

        Returns:
            AccountService: A service with its tables created.

        """
        parsed = make_url(async_database_url(url))
        if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
            Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)
        service = cls(create_async_engine(parsed), **kwargs)
        await service.create_tables()
        return service

    async def create_tables(self) -> None:
        """Creates the accounts table if it does not exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        """Releases the connections of the engine."""
        await self.engine.dispose()

    # ==========================================================================
    # GATEWAY OPERATIONS
    # ==========================================================================

    async def register(self, username: str, password: str) -> AuthResult:
        """
        Creates a level 1 account.

        Args:
            username (str): Requested account name.
            password (str): Plain password.

        Returns:
            AuthResult: The new account, or a failure.

        """
        return await self._call("register", username, self._register(username, password))

    async def login(self, username: str, password: str) -> AuthResult:
        """
        Checks credentials.

        Args:
            username (str): Account name.
            password (str): Plain password.

        Returns:
            AuthResult: The account with its saved level, or a failure.

        """
        return await self._call("login", username, self._login(username, password))

    async def update_level(self, username: str, level: int) -> AuthResult:
        """
        Stores the level of an existing account.

        Args:
            username (str): Account name.
            level (int): The level to save.

        Returns:
            AuthResult: The updated account, or a failure.

        """
        return await self._call("update_level", username, self._update_level(username, level))

    # ==========================================================================
    # IMPLEMENTATION
    # ==========================================================================

    async def _call(self, operation: str, username: str | None, call: Awaitable[AuthResult]) -> AuthResult:
        try:
            return await call
        except AccountRejected as rejection:
            logger.debug("%s rejected for %r: %s", operation, username, rejection.message)
            return AuthResult.rejected(rejection.message, rejection.status)
        except (SQLAlchemyError, OSError) as exc:
            log_warning(
                f"Account store failure during {operation}",
                {
                    "operation": operation,
                    "username": username,
                    "error": str(exc),
                    "context": "account_store",
                },
            )
            return AuthResult.transport_error(f"Account store unavailable: {exc.__class__.__name__}")

    @staticmethod
    async def _find(session: AsyncSession, username: str) -> Account | None:
        result = await session.scalars(select(Account).where(Account.username == username).limit(1))
        return result.first()

    async def _register(self, username: str | None, password: str | None) -> AuthResult:
        username = (username or "").strip()
        password = password or ""
        if not username or not password:
            raise AccountRejected("Username and password are required.", 400)
        if not USERNAME_PATTERN.match(username):
            raise AccountRejected("Username must be 3-24 chars: letters, numbers, underscore.", 400)

        async with self._sessions() as session:
            if await self._find(session, username) is not None:
                raise AccountRejected("Username already exists.", 409)
            password_hash = await asyncio.to_thread(hash_password, password, self.hash_iterations)
            session.add(Account(username=username, password_hash=password_hash, level=1))
            try:
                await session.commit()
            except IntegrityError:
                # Lost a race against another registration of the same name.
                await session.rollback()
                raise AccountRejected("Username already exists.", 409)

        logger.info("Registered account %r", username)
        return AuthResult.success(username, 1)

    async def _login(self, username: str | None, password: str | None) -> AuthResult:
        username = (username or "").strip()
        password = password or ""
        if not username or not password:
            raise AccountRejected("Username and password are required.", 400)

        async with self._sessions() as session:
            account = await self._find(session, username)
            if account is None:
                raise AccountRejected("Invalid credentials.", 401)
            if not await asyncio.to_thread(verify_password, password, account.password_hash):
                raise AccountRejected("Invalid credentials.", 401)
            return AuthResult.success(account.username, account.level)

    async def _update_level(self, username: str | None, level: int) -> AuthResult:
        username = (username or "").strip()
        level = coerce_int(level)
        if not username:
            raise AccountRejected("Username is required.", 400)
        if level < 1:
            raise AccountRejected("Level must be at least 1.", 400)

        async with self._sessions() as session:
            account = await self._find(session, username)
            if account is None:
                raise AccountRejected("User not found.", 404)
            account.level = level
            await session.commit()

        logger.debug("Saved level %d for %r", level, username)
        return AuthResult.success(username, level)
