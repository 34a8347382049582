import asyncio

import pytest
from httpx import AsyncClient
from jose import jwt
from sqlmodel import select

from src.domain.entities import Session


async def _generate(client: AsyncClient, user_id: str = "u1") -> dict:
    response = await client.post("/auth/generate", json={"user_id": user_id})
    assert response.status_code == 200
    return response.json()


def _session_id(access_token: str) -> str:
    return jwt.get_unverified_claims(access_token)["jti"]


@pytest.mark.asyncio
async def test_successful_token_refresh(client: AsyncClient, db_session):
    """
    Given a freshly issued pair
    When I submit it to /auth/refresh
    Then I receive a new pair with a different refresh token
    And the old session is revoked
    """
    pair = await _generate(client)

    response = await client.post("/auth/refresh", json=pair)

    assert response.status_code == 200
    data = response.json()
    assert data["refresh_token"] != pair["refresh_token"]
    assert data["access_token"] != pair["access_token"]

    old = await db_session.get(Session, _session_id(pair["access_token"]))
    assert old.is_revoked is True


@pytest.mark.asyncio
async def test_token_reuse_detection(client: AsyncClient):
    """Second use of the same pair is rejected"""
    pair = await _generate(client)

    first = await client.post("/auth/refresh", json=pair)
    second = await client.post("/auth/refresh", json=pair)

    assert first.status_code == 200
    assert second.status_code == 401
    assert second.json()["error"] == {"code": "UNAUTHORIZED", "message": "Unauthorized"}


@pytest.mark.asyncio
async def test_refresh_scenario_with_address_change(
    client: AsyncClient, roaming_client: AsyncClient, app, notifier
):
    """
    Issue from 1.2.3.4, rotate, replay, then rotate from 9.9.9.9:
    the last refresh succeeds and schedules a notification
    """
    pair1 = await _generate(client)

    response = await client.post("/auth/refresh", json=pair1)
    assert response.status_code == 200
    pair2 = response.json()

    replay = await client.post("/auth/refresh", json=pair1)
    assert replay.status_code == 401

    response = await roaming_client.post("/auth/refresh", json=pair2)
    assert response.status_code == 200
    pair3 = response.json()
    assert jwt.get_unverified_claims(pair3["access_token"])["ip_address"] == "9.9.9.9"

    await app.state.dispatcher.drain(timeout=1)
    assert len(notifier.sent) == 1
    assert notifier.sent[0][0] == "owner@example.com"


@pytest.mark.asyncio
async def test_refresh_with_revoked_session(client: AsyncClient, db_session):
    pair = await _generate(client)

    session = await db_session.get(Session, _session_id(pair["access_token"]))
    session.is_revoked = True
    db_session.add(session)
    await db_session.commit()

    response = await client.post("/auth/refresh", json=pair)

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_refresh_with_expired_session(client: AsyncClient, db_session):
    pair = await _generate(client)

    session = await db_session.get(Session, _session_id(pair["access_token"]))
    session.expires_at = session.expires_at - 2 * 24 * 3600
    db_session.add(session)
    await db_session.commit()

    response = await client.post("/auth/refresh", json=pair)

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_refresh_wrong_refresh_token(client: AsyncClient, db_session):
    pair = await _generate(client)

    response = await client.post(
        "/auth/refresh",
        json={"access_token": pair["access_token"], "refresh_token": "not-it"},
    )

    assert response.status_code == 401
    result = await db_session.exec(select(Session))
    assert result.one().is_revoked is False


@pytest.mark.asyncio
async def test_refresh_forged_access_token(client: AsyncClient):
    pair = await _generate(client)
    forged = jwt.encode(
        jwt.get_unverified_claims(pair["access_token"]), "guessed", algorithm="HS512"
    )

    response = await client.post(
        "/auth/refresh",
        json={"access_token": forged, "refresh_token": pair["refresh_token"]},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_refresh_empty_tokens(client: AsyncClient):
    response = await client.post(
        "/auth/refresh", json={"access_token": "", "refresh_token": ""}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_refresh_missing_refresh_token(client: AsyncClient):
    response = await client.post("/auth/refresh", json={"access_token": "a"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_concurrent_refresh_rotates_once(client: AsyncClient, db_session):
    """
    Given a freshly issued pair
    When it is submitted to /auth/refresh twice at the same time
    Then exactly one request rotates the session
    And only one replacement session is stored
    """
    pair = await _generate(client)

    first, second = await asyncio.gather(
        client.post("/auth/refresh", json=pair),
        client.post("/auth/refresh", json=pair),
    )

    assert sorted([first.status_code, second.status_code]) == [200, 401]

    result = await db_session.exec(select(Session))
    sessions = result.all()
    assert len(sessions) == 2
    old = next(s for s in sessions if s.id == _session_id(pair["access_token"]))
    assert old.is_revoked is True


@pytest.mark.asyncio
async def test_refresh_timeout(client: AsyncClient, app):
    """A use case exceeding the request timeout is cancelled and reported as 500"""
    from src.depends import get_refresh_use_case

    class SlowUseCase:
        async def execute(self, *args):
            await asyncio.sleep(10)

    app.state.request_timeout = 0.05
    app.dependency_overrides[get_refresh_use_case] = lambda: SlowUseCase()

    response = await client.post(
        "/auth/refresh", json={"access_token": "a", "refresh_token": "b"}
    )

    assert response.status_code == 500
    assert response.json()["error"]["message"] == "Internal server error"
