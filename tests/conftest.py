"""
Shared fixtures: an in-memory auth gateway, an in-memory SQLite account
store and a presenter recording everything the engine pushes.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from dungeon_fighter.auth.account_service import AccountService
from dungeon_fighter.auth.results import AuthResult
from dungeon_fighter.ui.presentation import AnimationCue, RenderSnapshot


class FakeGateway:
    """Dictionary backed gateway with switches to simulate failures."""

    def __init__(self) -> None:
        self.accounts: dict[str, tuple[str, int]] = {}
        self.calls: list[tuple[str, tuple]] = []
        self.update_failure: AuthResult | None = None
        self.update_raises: Exception | None = None
        self.login_raises: Exception | None = None

    async def register(self, username: str, password: str) -> AuthResult:
        self.calls.append(("register", (username, password)))
        if username in self.accounts:
            return AuthResult.rejected("Username already exists.", 409)
        self.accounts[username] = (password, 1)
        return AuthResult.success(username, 1)

    async def login(self, username: str, password: str) -> AuthResult:
        self.calls.append(("login", (username, password)))
        if self.login_raises is not None:
            raise self.login_raises
        stored = self.accounts.get(username)
        if stored is None or stored[0] != password:
            return AuthResult.rejected("Invalid credentials.", 401)
        return AuthResult.success(username, stored[1])

    async def update_level(self, username: str, level: int) -> AuthResult:
        self.calls.append(("update_level", (username, level)))
        if self.update_raises is not None:
            raise self.update_raises
        if self.update_failure is not None:
            return self.update_failure
        if username not in self.accounts:
            return AuthResult.rejected("User not found.", 404)
        self.accounts[username] = (self.accounts[username][0], level)
        return AuthResult.success(username, level)


class RecordingPresenter:
    """Keeps every snapshot and cue it receives."""

    def __init__(self) -> None:
        self.snapshots: list[RenderSnapshot] = []
        self.cues: list[AnimationCue] = []

    def render(self, snapshot: RenderSnapshot) -> None:
        self.snapshots.append(snapshot)

    def animate(self, cue: AnimationCue) -> None:
        self.cues.append(cue)

    @property
    def last(self) -> RenderSnapshot:
        return self.snapshots[-1]


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest_asyncio.fixture
async def account_store():
    # One shared connection keeps the in-memory database alive across sessions.
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    service = AccountService(engine, hash_iterations=1_000)
    await service.create_tables()
    yield service
    await service.close()
