import pytest

from tests.utils.cookies import bearer, refresh_cookie, refresh_token_from


@pytest.mark.asyncio
async def test_login_sets_refresh_cookie(client, alice):
    response = await client.post(
        "/auth/login",
        json={"login_or_email": alice["email"], "password": alice["password"]},
    )

    assert response.status_code == 200
    assert response.json()["access_token"]
    set_cookie = response.headers["set-cookie"]
    assert "HttpOnly" in set_cookie
    assert "Secure" in set_cookie
    assert "samesite=strict" in set_cookie.lower()
    assert refresh_token_from(response)


@pytest.mark.asyncio
async def test_login_wrong_password(client, alice):
    response = await client.post(
        "/auth/login",
        json={"login_or_email": alice["login"], "password": "wrong-pass"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"
    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_login_rate_limited_after_repeated_failures(client, alice):
    payload = {"login_or_email": alice["login"], "password": "wrong-pass"}

    statuses = [(await client.post("/auth/login", json=payload)).status_code for _ in range(6)]

    assert statuses == [401, 401, 401, 401, 401, 429]


@pytest.mark.asyncio
async def test_refresh_rotates_and_rejects_replay(client, alice, login):
    tokens = await login(alice)

    first = await client.post("/auth/refresh-token", headers=refresh_cookie(tokens.refresh_token))
    assert first.status_code == 200
    rotated = refresh_token_from(first)
    assert rotated and rotated != tokens.refresh_token

    replay = await client.post("/auth/refresh-token", headers=refresh_cookie(tokens.refresh_token))
    assert replay.status_code == 401
    assert replay.json()["error"]["code"] == "UNAUTHORIZED"

    second = await client.post("/auth/refresh-token", headers=refresh_cookie(rotated))
    assert second.status_code == 200


@pytest.mark.asyncio
async def test_refresh_without_cookie(client):
    response = await client.post("/auth/refresh-token")

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Refresh token not found"


@pytest.mark.asyncio
async def test_refresh_with_garbage_cookie(client):
    response = await client.post("/auth/refresh-token", headers=refresh_cookie("garbage"))

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_ends_session(client, alice, login):
    tokens = await login(alice)

    response = await client.post("/auth/logout", headers=refresh_cookie(tokens.refresh_token))
    assert response.status_code == 204
    assert refresh_token_from(response) is None

    again = await client.post("/auth/logout", headers=refresh_cookie(tokens.refresh_token))
    assert again.status_code == 401

    refresh = await client.post("/auth/refresh-token", headers=refresh_cookie(tokens.refresh_token))
    assert refresh.status_code == 401


@pytest.mark.asyncio
async def test_logout_with_rotated_token(client, alice, login):
    tokens = await login(alice)
    await client.post("/auth/refresh-token", headers=refresh_cookie(tokens.refresh_token))

    response = await client.post("/auth/logout", headers=refresh_cookie(tokens.refresh_token))

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_with_bearer(client, alice, login):
    tokens = await login(alice)

    response = await client.get("/auth/me", headers=bearer(tokens.access_token))

    assert response.status_code == 200
    assert response.json() == {
        "user_id": alice["id"],
        "login": alice["login"],
        "email": alice["email"],
    }


@pytest.mark.asyncio
async def test_me_prefers_valid_bearer_over_bad_cookie(client, alice, login):
    tokens = await login(alice)

    response = await client.get(
        "/auth/me",
        headers={**bearer(tokens.access_token), **refresh_cookie("garbage")},
    )

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_me_falls_back_to_cookie(client, alice, login):
    tokens = await login(alice)

    response = await client.get(
        "/auth/me",
        headers={**bearer("not-a-jwt"), **refresh_cookie(tokens.refresh_token)},
    )

    assert response.status_code == 200
    assert response.json()["login"] == alice["login"]


@pytest.mark.asyncio
async def test_me_without_credentials(client):
    response = await client.get("/auth/me")

    assert response.status_code == 401
    assert response.json()["error"]["message"] == "Authentication required"


@pytest.mark.asyncio
async def test_deleted_user_fails_both_paths(client, alice, login, admin_headers):
    tokens = await login(alice)
    deleted = await client.delete(f"/sa/users/{alice['id']}", headers=admin_headers)
    assert deleted.status_code == 204

    response = await client.get(
        "/auth/me",
        headers={**bearer(tokens.access_token), **refresh_cookie(tokens.refresh_token)},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logged_out_refresh_token_is_rejected_as_bearer(client, alice, login):
    tokens = await login(alice)
    logout = await client.post("/auth/logout", headers=refresh_cookie(tokens.refresh_token))
    assert logout.status_code == 204

    me = await client.get("/auth/me", headers=bearer(tokens.refresh_token))
    devices = await client.get("/security/devices", headers=bearer(tokens.refresh_token))

    assert me.status_code == 401
    assert devices.status_code == 401
