"""
Tests for the SQLAlchemy backed account service.
"""

import asyncio

import pytest
from sqlalchemy import select

from dungeon_fighter.auth.account_service import AccountService, async_database_url
from dungeon_fighter.auth.models import Account, Base
from dungeon_fighter.auth.results import FailureKind


@pytest.fixture
def service(account_store):
    return account_store


@pytest.mark.asyncio
async def test_register_creates_level_one_account(service):
    result = await service.register("alice", "secret123")
    assert result.ok
    assert result.user.username == "alice"
    assert result.user.level == 1


@pytest.mark.asyncio
async def test_password_is_not_stored_in_clear(service):
    await service.register("alice", "secret123")
    async with service._sessions() as session:
        account = (await session.scalars(select(Account))).one()
    assert "secret123" not in account.password_hash
    assert account.password_hash.startswith("pbkdf2_sha256$1000$")


@pytest.mark.asyncio
async def test_duplicate_username_is_a_conflict(service):
    await service.register("alice", "secret123")
    result = await service.register("alice", "another")
    assert not result.ok
    assert result.failure.message == "Username already exists."
    assert result.failure.status == 409
    assert result.failure.kind == FailureKind.REJECTED


@pytest.mark.asyncio
@pytest.mark.parametrize("username", ["ab", "a" * 25, "bad name", "dash-ed", "émile"])
async def test_username_pattern(service, username):
    result = await service.register(username, "pw")
    assert result.failure.message == "Username must be 3-24 chars: letters, numbers, underscore."
    assert result.failure.status == 400


@pytest.mark.asyncio
@pytest.mark.parametrize("username, password", [("", "pw"), ("alice", ""), ("   ", "pw"), (None, None)])
async def test_register_requires_both_fields(service, username, password):
    result = await service.register(username, password)
    assert result.failure.message == "Username and password are required."
    assert result.failure.status == 400


@pytest.mark.asyncio
async def test_login(service):
    await service.register("bob_99", "hunter2")
    result = await service.login("bob_99", "hunter2")
    assert result.ok
    assert result.user.level == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("username, password", [("bob_99", "wrong"), ("nobody", "hunter2")])
async def test_login_failures_share_one_message(service, username, password):
    await service.register("bob_99", "hunter2")
    result = await service.login(username, password)
    assert result.failure.message == "Invalid credentials."
    assert result.failure.status == 401


@pytest.mark.asyncio
async def test_login_requires_both_fields(service):
    result = await service.login("bob_99", "")
    assert result.failure.status == 400


@pytest.mark.asyncio
async def test_update_level_is_returned_by_login(service):
    await service.register("carol", "pw1")
    saved = await service.update_level("carol", 6)
    assert saved.ok
    assert saved.user.level == 6
    assert (await service.login("carol", "pw1")).user.level == 6


@pytest.mark.asyncio
async def test_update_level_unknown_user(service):
    result = await service.update_level("ghost", 3)
    assert result.failure.message == "User not found."
    assert result.failure.status == 404


@pytest.mark.asyncio
@pytest.mark.parametrize("level", [0, -2])
async def test_update_level_rejects_levels_below_one(service, level):
    await service.register("carol", "pw1")
    result = await service.update_level("carol", level)
    assert result.failure.message == "Level must be at least 1."
    assert result.failure.status == 400


@pytest.mark.asyncio
async def test_update_level_requires_username(service):
    result = await service.update_level("", 3)
    assert result.failure.message == "Username is required."


@pytest.mark.asyncio
async def test_store_failure_is_a_transport_error(service):
    async with service.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    result = await service.login("alice", "secret123")
    assert not result.ok
    assert result.failure.kind == FailureKind.TRANSPORT
    assert result.failure.status == 500
    assert result.failure.message.startswith("Account store unavailable")


@pytest.mark.asyncio
async def test_from_url_creates_parent_directory(tmp_path):
    target = tmp_path / "nested" / "dir" / "accounts.sqlite"
    service = await AccountService.from_url(f"sqlite:///{target}", hash_iterations=1_000)
    try:
        assert target.parent.is_dir()
        assert (await service.register("alice", "pw")).ok
        assert target.is_file()
    finally:
        await service.close()


@pytest.mark.parametrize(
    "url, expected",
    [
        ("sqlite:///data/dungeon.sqlite", "sqlite+aiosqlite:///data/dungeon.sqlite"),
        ("sqlite://", "sqlite+aiosqlite://"),
        ("sqlite+aiosqlite:///x.db", "sqlite+aiosqlite:///x.db"),
        ("postgresql+asyncpg://u:p@db/game", "postgresql+asyncpg://u:p@db/game"),
    ],
)
def test_async_database_url(url, expected):
    assert async_database_url(url) == expected


@pytest.mark.asyncio
async def test_hashing_does_not_block_the_event_loop(account_store):
    slow = AccountService(account_store.engine, hash_iterations=200_000)
    ticks = 0

    async def ticker():
        nonlocal ticks
        while True:
            await asyncio.sleep(0.001)
            ticks += 1

    task = asyncio.create_task(ticker())
    try:
        assert (await slow.register("alice", "secret123")).ok
        assert (await slow.login("alice", "secret123")).ok
    finally:
        task.cancel()
    assert ticks > 0
