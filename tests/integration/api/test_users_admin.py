from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import AuditEvent, Session, UserRole
from tests.fixtures.api_helpers import (
    join_business,
    load_user,
    login,
    make_business_admin,
    register,
)


@pytest.fixture
def business_id():
    return uuid4()


async def setup_business(client: AsyncClient, db_session, business_id):
    """boss (admin) and worker share a business; outsider does not"""
    await register(client, "worker")
    await register(client, "outsider")
    await register(client, "boss")
    await join_business(db_session, "worker", business_id)
    await make_business_admin(db_session, "boss", business_id)
    await join_business(db_session, "outsider", uuid4())
    worker = await load_user(db_session, "worker")
    outsider = await load_user(db_session, "outsider")
    boss = await load_user(db_session, "boss")
    return boss.id, worker.id, outsider.id


@pytest.mark.asyncio
async def test_list_business_users(client: AsyncClient, db_session, business_id):
    await setup_business(client, db_session, business_id)

    response = await client.get("/api/users")

    assert response.status_code == 200
    usernames = sorted(u["username"] for u in response.json()["users"])
    assert usernames == ["boss", "worker"]
    for user in response.json()["users"]:
        assert "passwordHash" not in user


@pytest.mark.asyncio
async def test_non_admin_is_forbidden(client: AsyncClient, db_session, business_id):
    await setup_business(client, db_session, business_id)
    await login(client, "worker")

    response = await client.get("/api/users")

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_admin_endpoints_require_session(client: AsyncClient):
    assert (await client.get("/api/users")).status_code == 401


@pytest.mark.asyncio
async def test_change_role(client: AsyncClient, db_session, business_id):
    _, worker_id, _ = await setup_business(client, db_session, business_id)

    response = await client.patch(f"/api/users/{worker_id}/role", json={"role": "admin"})

    assert response.status_code == 200
    assert response.json()["role"] == "admin"
    worker = await load_user(db_session, "worker")
    assert worker.role == UserRole.admin

    events = (await db_session.exec(select(AuditEvent).where(AuditEvent.action == "role_changed"))).all()
    assert len(events) == 1
    assert events[0].event_metadata["target_user_id"] == str(worker_id)


@pytest.mark.asyncio
async def test_role_change_is_visible_to_target_immediately(client: AsyncClient, db_session, business_id):
    _, worker_id, _ = await setup_business(client, db_session, business_id)
    await client.patch(f"/api/users/{worker_id}/role", json={"role": "admin"})

    await login(client, "worker")

    assert (await client.get("/api/user")).json()["role"] == "admin"
    assert (await client.get("/api/users")).status_code == 200


@pytest.mark.asyncio
async def test_change_own_role_rejected(client: AsyncClient, db_session, business_id):
    boss_id, _, _ = await setup_business(client, db_session, business_id)

    response = await client.patch(f"/api/users/{boss_id}/role", json={"role": "user"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CANNOT_MODIFY_SELF"


@pytest.mark.asyncio
async def test_change_role_outside_business(client: AsyncClient, db_session, business_id):
    _, _, outsider_id = await setup_business(client, db_session, business_id)

    response = await client.patch(f"/api/users/{outsider_id}/role", json={"role": "admin"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "USER_NOT_FOUND"


@pytest.mark.asyncio
async def test_change_role_invalid_role(client: AsyncClient, db_session, business_id):
    _, worker_id, _ = await setup_business(client, db_session, business_id)

    response = await client.patch(f"/api/users/{worker_id}/role", json={"role": "owner"})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_remove_user_revokes_sessions(client: AsyncClient, db_session, business_id):
    _, worker_id, _ = await setup_business(client, db_session, business_id)

    response = await client.delete(f"/api/users/{worker_id}")

    assert response.status_code == 200
    assert response.json()["userId"] == str(worker_id)
    assert await load_user(db_session, "worker") is None
    stmt = select(Session).where(Session.user_id == worker_id)
    assert (await db_session.exec(stmt)).all() == []


@pytest.mark.asyncio
async def test_remove_self_rejected(client: AsyncClient, db_session, business_id):
    boss_id, _, _ = await setup_business(client, db_session, business_id)

    response = await client.delete(f"/api/users/{boss_id}")

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "CANNOT_MODIFY_SELF"
