from datetime import timedelta
from uuid import uuid4

import pytest

from src.app.services.tokens import hash_secret
from src.app.use_cases.two_factor import (
    DisableTwoFactorUseCase,
    EnableTwoFactorUseCase,
    VerifyTwoFactorUseCase,
)
from src.domain.base import utc_now
from src.domain.entities import User
from tests.fixtures.fake_email_sender import RecordingEmailSender


def make_user(**overrides):
    data = {
        "id": uuid4(),
        "username": "alice",
        "email": "alice@x.com",
        "password_hash": "hashed:pw123456",
    }
    data.update(overrides)
    return User(**data)


def pending_user(code="123456", expires_in=timedelta(minutes=5)):
    return make_user(
        two_factor_enabled=True,
        two_factor_temp_code=code,
        two_factor_temp_expires_at=utc_now() + expires_in,
    )


@pytest.mark.asyncio
async def test_enable_sends_six_digit_code(mock_uow, email_sender):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user

    result = await EnableTwoFactorUseCase(mock_uow, email_sender).execute(user.id)

    assert result.is_ok()
    assert result.value.status == "pending"
    assert user.two_factor_enabled is True
    assert user.two_factor_verified is False
    code = user.two_factor_temp_code
    assert len(code) == 6 and code.isdigit()
    lifetime = user.two_factor_temp_expires_at - utc_now()
    assert timedelta(minutes=9) < lifetime <= timedelta(minutes=10)
    assert code in email_sender.last_to("alice@x.com").text
    mock_uow.commit.assert_called_once()
    mock_uow.rollback.assert_not_called()


@pytest.mark.asyncio
async def test_enable_while_pending_replaces_code(mock_uow, email_sender):
    user = pending_user(code="000000")
    mock_uow.users.get_by_id.return_value = user
    use_case = EnableTwoFactorUseCase(mock_uow, email_sender)

    codes = set()
    for _ in range(5):
        await use_case.execute(user.id)
        codes.add(user.two_factor_temp_code)

    # One in a million chance per call of drawing the same code again
    assert len(codes) > 1
    assert len(email_sender.outbox) == 5


@pytest.mark.asyncio
async def test_enable_when_verified_is_rejected(mock_uow, email_sender):
    user = make_user(two_factor_enabled=True, two_factor_verified=True)
    mock_uow.users.get_by_id.return_value = user

    result = await EnableTwoFactorUseCase(mock_uow, email_sender).execute(user.id)

    assert result.is_err()
    assert result.error.code == "TWO_FACTOR_ALREADY_ENABLED"
    assert email_sender.outbox == []
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_enable_commits_before_sending(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user
    commits_at_send = []

    class CountingSender(RecordingEmailSender):
        async def send(self, message):
            commits_at_send.append(mock_uow.commit.await_count)
            return await super().send(message)

    await EnableTwoFactorUseCase(mock_uow, CountingSender()).execute(user.id)

    assert commits_at_send == [1]


@pytest.mark.asyncio
async def test_enable_dispatch_failure_withdraws_code(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user

    result = await EnableTwoFactorUseCase(
        mock_uow, RecordingEmailSender(fail=True)
    ).execute(user.id)

    assert result.is_err()
    assert result.error.code == "EMAIL_DISPATCH_FAILED"
    assert result.error.public is True
    mock_uow.users.withdraw_two_factor_code.assert_awaited_once_with(
        user.id, user.two_factor_temp_code, False, None, None
    )
    assert mock_uow.commit.await_count == 2


@pytest.mark.asyncio
async def test_enable_dispatch_failure_restores_pending_code(mock_uow):
    user = pending_user(code="654321")
    old_expiry = user.two_factor_temp_expires_at
    mock_uow.users.get_by_id.return_value = user

    await EnableTwoFactorUseCase(
        mock_uow, RecordingEmailSender(fail=True)
    ).execute(user.id)

    args = mock_uow.users.withdraw_two_factor_code.call_args.args
    assert args[2:] == (True, "654321", old_expiry)


@pytest.mark.asyncio
async def test_verify_issues_hashed_backup_codes(mock_uow):
    user = pending_user()
    mock_uow.users.get_by_id.return_value = user

    result = await VerifyTwoFactorUseCase(mock_uow).execute(user.id, "123456")

    assert result.is_ok()
    assert result.value.status == "verified"
    codes = result.value.backup_codes
    assert len(codes) == 10
    assert len(set(codes)) == 10
    for code in codes:
        assert len(code) == 8
        assert code.isalnum() and code == code.upper()

    args = mock_uow.users.complete_two_factor.call_args.args
    assert args[0] == user.id
    assert args[1] == "123456"
    assert args[2] == [hash_secret(c) for c in codes]
    audit = mock_uow.audit_events.create.call_args.args[0]
    assert audit.action == "two_factor_verified"
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_verify_backup_code_payload_uses_camel_case(mock_uow):
    user = pending_user()
    mock_uow.users.get_by_id.return_value = user

    result = await VerifyTwoFactorUseCase(mock_uow).execute(user.id, "123456")

    assert "backupCodes" in result.value.model_dump(by_alias=True)


@pytest.mark.asyncio
async def test_verify_without_challenge(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user

    result = await VerifyTwoFactorUseCase(mock_uow).execute(user.id, "123456")

    assert result.is_err()
    assert result.error.code == "NO_VERIFICATION_IN_PROGRESS"


@pytest.mark.asyncio
async def test_verify_expired_code_is_cleared(mock_uow):
    user = pending_user(expires_in=-timedelta(seconds=1))
    mock_uow.users.get_by_id.return_value = user

    result = await VerifyTwoFactorUseCase(mock_uow).execute(user.id, "123456")

    assert result.is_err()
    assert result.error.code == "CODE_EXPIRED"
    assert user.two_factor_temp_code is None
    assert user.two_factor_temp_expires_at is None
    mock_uow.users.complete_two_factor.assert_not_called()


@pytest.mark.asyncio
async def test_verify_wrong_code(mock_uow):
    user = pending_user()
    mock_uow.users.get_by_id.return_value = user

    for wrong in ("654321", "12345", "1234567", " 123456"):
        result = await VerifyTwoFactorUseCase(mock_uow).execute(user.id, wrong)
        assert result.is_err()
        assert result.error.code == "INVALID_CODE"

    assert user.two_factor_temp_code == "123456"
    mock_uow.users.complete_two_factor.assert_not_called()


@pytest.mark.asyncio
async def test_verify_lost_race(mock_uow):
    user = pending_user()
    mock_uow.users.get_by_id.return_value = user
    mock_uow.users.complete_two_factor.return_value = False

    result = await VerifyTwoFactorUseCase(mock_uow).execute(user.id, "123456")

    assert result.is_err()
    assert result.error.code == "NO_VERIFICATION_IN_PROGRESS"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_disable_clears_everything(mock_uow):
    user = make_user(
        two_factor_enabled=True,
        two_factor_verified=True,
        backup_codes=["x"],
        two_factor_temp_code="123456",
        two_factor_temp_expires_at=utc_now(),
    )
    mock_uow.users.get_by_id.return_value = user

    result = await DisableTwoFactorUseCase(mock_uow).execute(user.id)

    assert result.is_ok()
    assert result.value.status == "disabled"
    assert user.two_factor_enabled is False
    assert user.two_factor_verified is False
    assert user.backup_codes is None
    assert user.two_factor_temp_code is None
    assert user.two_factor_temp_expires_at is None
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_disable_is_idempotent(mock_uow):
    user = make_user()
    mock_uow.users.get_by_id.return_value = user
    use_case = DisableTwoFactorUseCase(mock_uow)

    first = await use_case.execute(user.id)
    second = await use_case.execute(user.id)

    assert first.is_ok() and second.is_ok()
    assert user.two_factor_enabled is False
