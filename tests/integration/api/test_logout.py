import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_logout_revokes_refresh_token(client: AsyncClient, db_session, test_data):
    """Logout clears the stored token so it can no longer be refreshed"""
    credentials = test_data.get_copy("editor")
    await client.post("/api/auth/register", json=credentials)
    tokens = (await client.post("/api/auth/login", json=credentials)).json()

    response = await client.post("/api/auth/logout", json={"email": "a@x.com"})

    assert response.status_code == 200
    assert response.json() == {"message": "User logged out successfully."}

    from src.domain.entities import User
    from sqlmodel import select

    result = await db_session.exec(select(User).where(User.email == "a@x.com"))
    assert result.one().refresh_token is None

    refresh = await client.post(
        "/api/auth/refresh", json={"refreshToken": tokens["refreshToken"]}
    )
    assert refresh.status_code == 403
    assert refresh.json()["error"]["code"] == "TOKEN_MISMATCH"


@pytest.mark.asyncio
async def test_logout_is_idempotent(client: AsyncClient, test_data):
    credentials = test_data.get_copy("editor")
    await client.post("/api/auth/register", json=credentials)
    await client.post("/api/auth/login", json=credentials)

    first = await client.post("/api/auth/logout", json={"email": "a@x.com"})
    second = await client.post("/api/auth/logout", json={"email": "a@x.com"})

    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()


@pytest.mark.asyncio
async def test_logout_unknown_email(client: AsyncClient):
    """Unknown email gets the same response as a known one"""
    response = await client.post("/api/auth/logout", json={"email": "ghost@x.com"})

    assert response.status_code == 200
    assert response.json()["message"] == "User logged out successfully."


@pytest.mark.asyncio
async def test_logout_without_body(client: AsyncClient):
    response = await client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json()["message"] == "User logged out successfully."


@pytest.mark.asyncio
async def test_logout_does_not_invalidate_access_token(client: AsyncClient, test_data):
    """Access tokens are stateless and stay valid until they expire"""
    credentials = test_data.get_copy("editor")
    await client.post("/api/auth/register", json=credentials)
    tokens = (await client.post("/api/auth/login", json=credentials)).json()

    await client.post("/api/auth/logout", json={"email": "a@x.com"})

    response = await client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {tokens['accessToken']}"}
    )
    assert response.status_code == 200
