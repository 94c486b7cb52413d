from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.fixtures.api_helpers import join_business, login, make_business_admin, register


@pytest.mark.asyncio
async def test_admin_reads_business_audit_trail(client: AsyncClient, db_session):
    business_id = uuid4()
    await register(client, "worker")
    await register(client, "boss")
    await join_business(db_session, "worker", business_id)
    await make_business_admin(db_session, "boss", business_id)

    await login(client, "worker", "wrong-password")
    await login(client, "worker")
    await login(client, "boss")

    response = await client.get("/api/audit/auth-events")

    assert response.status_code == 200
    data = response.json()
    actions = [e["action"] for e in data["events"]]
    assert actions[0] == "login"
    assert "login_failed" in actions
    # Registration happened before either user joined the business
    assert "register" not in actions
    assert data["nextCursor"] is None
    failed = next(e for e in data["events"] if e["action"] == "login_failed")
    assert failed["username"] == "worker"
    assert failed["metadata"]["reason"] == "bad_password"


@pytest.mark.asyncio
async def test_audit_trail_pagination(client: AsyncClient, db_session):
    business_id = uuid4()
    await register(client, "boss")
    await make_business_admin(db_session, "boss", business_id)
    for _ in range(3):
        await login(client, "boss")

    first = await client.get("/api/audit/auth-events", params={"limit": 2})
    assert first.status_code == 200
    assert len(first.json()["events"]) == 2
    cursor = first.json()["nextCursor"]
    assert cursor is not None

    second = await client.get(
        "/api/audit/auth-events", params={"limit": 2, "cursor": cursor}
    )
    assert second.status_code == 200
    assert len(second.json()["events"]) == 1


@pytest.mark.asyncio
async def test_audit_trail_forbidden_for_plain_users(client: AsyncClient):
    await register(client, "alice")

    response = await client.get("/api/audit/auth-events")

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_audit_trail_limit_is_bounded(client: AsyncClient):
    await register(client, "alice")

    response = await client.get("/api/audit/auth-events", params={"limit": 500})

    assert response.status_code == 422
