from datetime import timedelta

import pytest

from src.adapter.repositories.user_repository import UserRepository
from src.app.repositories.user_repository import DuplicateIdentityError
from src.domain.base import utc_now
from src.domain.entities import User
from tests.fixtures.api_helpers import load_user

TOKEN = "a" * 64


async def add_user(db_session, username="alice", **fields) -> User:
    user = User(
        username=username,
        email=f"{username}@x.com",
        password_hash="old-digest",
        **fields,
    )
    user = await UserRepository(db_session).create(user)
    await db_session.commit()
    return user


@pytest.mark.asyncio
async def test_reset_token_is_consumed_once(db_session):
    user = await add_user(
        db_session, reset_token=TOKEN, reset_token_expires_at=utc_now() + timedelta(hours=1)
    )
    repo = UserRepository(db_session)

    first = await repo.consume_reset_token(user.id, TOKEN, "new-digest", utc_now())
    await db_session.commit()
    second = await repo.consume_reset_token(user.id, TOKEN, "other-digest", utc_now())
    await db_session.commit()

    assert first is True
    assert second is False
    stored = await load_user(db_session, "alice")
    assert stored.password_hash == "new-digest"
    assert stored.reset_token is None


@pytest.mark.asyncio
async def test_expired_reset_token_is_not_consumed(db_session):
    expires_at = utc_now() + timedelta(minutes=5)
    user = await add_user(db_session, reset_token=TOKEN, reset_token_expires_at=expires_at)
    repo = UserRepository(db_session)

    consumed = await repo.consume_reset_token(
        user.id, TOKEN, "new-digest", expires_at + timedelta(seconds=1)
    )

    assert consumed is False
    stored = await load_user(db_session, "alice")
    assert stored.password_hash == "old-digest"
    assert stored.reset_token == TOKEN


@pytest.mark.asyncio
async def test_wrong_reset_token_is_not_consumed(db_session):
    user = await add_user(
        db_session, reset_token=TOKEN, reset_token_expires_at=utc_now() + timedelta(hours=1)
    )

    consumed = await UserRepository(db_session).consume_reset_token(
        user.id, "b" * 64, "new-digest", utc_now()
    )

    assert consumed is False


@pytest.mark.asyncio
async def test_two_factor_code_completes_once(db_session):
    user = await add_user(
        db_session,
        two_factor_enabled=True,
        two_factor_temp_code="123456",
        two_factor_temp_expires_at=utc_now() + timedelta(minutes=10),
    )
    repo = UserRepository(db_session)

    first = await repo.complete_two_factor(user.id, "123456", ["h1"], utc_now())
    await db_session.commit()
    second = await repo.complete_two_factor(user.id, "123456", ["h2"], utc_now())
    await db_session.commit()

    assert first is True
    assert second is False
    stored = await load_user(db_session, "alice")
    assert stored.two_factor_verified is True
    assert stored.backup_codes == ["h1"]
    assert stored.two_factor_temp_code is None


@pytest.mark.asyncio
async def test_expired_two_factor_code_does_not_complete(db_session):
    expires_at = utc_now() + timedelta(minutes=1)
    user = await add_user(
        db_session,
        two_factor_enabled=True,
        two_factor_temp_code="123456",
        two_factor_temp_expires_at=expires_at,
    )

    completed = await UserRepository(db_session).complete_two_factor(
        user.id, "123456", ["h1"], expires_at + timedelta(seconds=1)
    )

    assert completed is False
    stored = await load_user(db_session, "alice")
    assert stored.two_factor_verified is False
    assert stored.two_factor_temp_code == "123456"


@pytest.mark.asyncio
async def test_withdraw_restores_previous_code(db_session):
    old_expiry = utc_now() + timedelta(minutes=3)
    user = await add_user(
        db_session,
        two_factor_enabled=True,
        two_factor_temp_code="999999",
        two_factor_temp_expires_at=utc_now() + timedelta(minutes=10),
    )

    withdrawn = await UserRepository(db_session).withdraw_two_factor_code(
        user.id, "999999", True, "111111", old_expiry
    )
    await db_session.commit()

    assert withdrawn is True
    stored = await load_user(db_session, "alice")
    assert stored.two_factor_enabled is True
    assert stored.two_factor_temp_code == "111111"
    assert stored.two_factor_temp_expires_at == old_expiry


@pytest.mark.asyncio
async def test_withdraw_leaves_newer_code_alone(db_session):
    user = await add_user(
        db_session,
        two_factor_enabled=True,
        two_factor_temp_code="222222",
        two_factor_temp_expires_at=utc_now() + timedelta(minutes=10),
    )

    withdrawn = await UserRepository(db_session).withdraw_two_factor_code(
        user.id, "999999", False, None, None
    )

    assert withdrawn is False
    stored = await load_user(db_session, "alice")
    assert stored.two_factor_temp_code == "222222"


@pytest.mark.asyncio
async def test_create_with_taken_username_raises_duplicate(db_session):
    await add_user(db_session, "alice")
    clash = User(username="alice", email="other@x.com", password_hash="digest")

    with pytest.raises(DuplicateIdentityError):
        await UserRepository(db_session).create(clash)


@pytest.mark.asyncio
async def test_update_to_taken_email_raises_duplicate(db_session):
    await add_user(db_session, "alice")
    bob = await add_user(db_session, "bob")
    bob.email = "alice@x.com"

    with pytest.raises(DuplicateIdentityError):
        await UserRepository(db_session).update(bob)
