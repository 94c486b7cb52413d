import pytest
from unittest.mock import AsyncMock, MagicMock

from tests.fixtures.fake_email_sender import RecordingEmailSender


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_id = AsyncMock(return_value=None)
    uow.users.get_by_username = AsyncMock(return_value=None)
    uow.users.get_by_email = AsyncMock(return_value=None)
    uow.users.get_by_reset_token = AsyncMock(return_value=None)
    uow.users.list_by_business_id = AsyncMock(return_value=[])
    uow.users.create = AsyncMock(side_effect=lambda user: user)
    uow.users.update = AsyncMock(side_effect=lambda user: user)
    uow.users.delete = AsyncMock(return_value=True)
    uow.users.consume_reset_token = AsyncMock(return_value=True)
    uow.users.complete_two_factor = AsyncMock(return_value=True)
    uow.users.withdraw_two_factor_code = AsyncMock(return_value=True)

    uow.sessions = MagicMock()
    uow.sessions.get_by_token_hash = AsyncMock(return_value=None)
    uow.sessions.create = AsyncMock(side_effect=lambda session: session)
    uow.sessions.delete_by_token_hash = AsyncMock(return_value=True)
    uow.sessions.delete_all_by_user_id = AsyncMock(return_value=0)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock(side_effect=lambda event: event)
    uow.audit_events.get_by_business_paginated = AsyncMock(return_value=([], None))
    return uow


@pytest.fixture
def hasher():
    """Deterministic stand-in for the bcrypt hasher"""
    hasher = MagicMock()
    hasher.hash = MagicMock(side_effect=lambda password: f"hashed:{password}")
    hasher.verify = MagicMock(
        side_effect=lambda password, digest: digest == f"hashed:{password}"
    )
    hasher.needs_rehash = MagicMock(return_value=False)
    hasher.verify_dummy = MagicMock()
    return hasher


@pytest.fixture
def email_sender():
    return RecordingEmailSender()
