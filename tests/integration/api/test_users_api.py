import pytest

from tests.utils.json_compare import SECRET_KEYS, public_fields


@pytest.mark.asyncio
async def test_create_user(client, test_data, admin_headers):
    payload = test_data.user("alice")

    response = await client.post("/sa/users", json=payload, headers=admin_headers)

    assert response.status_code == 201
    body = response.json()
    assert public_fields(body) == public_fields(payload)
    assert not SECRET_KEYS & body.keys()


@pytest.mark.asyncio
async def test_create_user_requires_admin_key(client, test_data):
    response = await client.post("/sa/users", json=test_data.user("alice"))

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_create_user_with_wrong_admin_key(client, test_data):
    response = await client.post(
        "/sa/users",
        json=test_data.user("alice"),
        headers={"X-Admin-API-Key": "wrong"},
    )

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "INVALID_API_KEY"


@pytest.mark.asyncio
async def test_create_duplicate_user(client, alice, test_data, admin_headers):
    payload = {**test_data.user("bob"), "login": alice["login"]}

    response = await client.post("/sa/users", json=payload, headers=admin_headers)

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "USER_ALREADY_EXISTS"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override",
    [
        {"login": "ab"},
        {"login": "has space"},
        {"email": "not-an-email"},
        {"password": "short"},
    ],
)
async def test_create_user_validation(client, test_data, admin_headers, override):
    payload = {**test_data.user("alice"), **override}

    response = await client.post("/sa/users", json=payload, headers=admin_headers)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_delete_user(client, alice, admin_headers):
    response = await client.delete(f"/sa/users/{alice['id']}", headers=admin_headers)
    assert response.status_code == 204

    again = await client.delete(f"/sa/users/{alice['id']}", headers=admin_headers)
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_deleted_user_cannot_login(client, alice, admin_headers):
    await client.delete(f"/sa/users/{alice['id']}", headers=admin_headers)

    response = await client.post(
        "/auth/login",
        json={"login_or_email": alice["login"], "password": alice["password"]},
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_health_check(client):
    response = await client.get("/health")

    assert response.status_code == 200
