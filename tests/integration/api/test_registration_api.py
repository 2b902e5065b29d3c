import pytest

from tests.utils.cookies import refresh_cookie


def credentials(user):
    return {"login_or_email": user["login"], "password": user["password"]}


@pytest.mark.asyncio
async def test_registration_requires_confirmation_before_login(client, test_data, outbox):
    carol = test_data.user("carol")

    response = await client.post("/auth/registration", json=carol)
    assert response.status_code == 204

    before = await client.post("/auth/login", json=credentials(carol))
    assert before.status_code == 401

    code = outbox.last_code("confirmation", carol["email"])
    confirmed = await client.post("/auth/registration-confirmation", json={"code": code})
    assert confirmed.status_code == 204

    after = await client.post("/auth/login", json=credentials(carol))
    assert after.status_code == 200


@pytest.mark.asyncio
async def test_confirmation_code_is_single_use(client, test_data, outbox):
    carol = test_data.user("carol")
    await client.post("/auth/registration", json=carol)
    code = outbox.last_code("confirmation", carol["email"])

    first = await client.post("/auth/registration-confirmation", json={"code": code})
    again = await client.post("/auth/registration-confirmation", json={"code": code})

    assert first.status_code == 204
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "INVALID_CONFIRMATION_CODE"


@pytest.mark.asyncio
async def test_registration_rejects_taken_login_and_email(client, alice, test_data):
    carol = test_data.user("carol")

    taken_login = await client.post(
        "/auth/registration", json={**carol, "login": alice["login"]}
    )
    taken_email = await client.post(
        "/auth/registration", json={**carol, "email": alice["email"]}
    )

    assert taken_login.status_code == 400
    assert taken_login.json()["error"]["message"] == "Login already exists"
    assert taken_email.status_code == 400
    assert taken_email.json()["error"]["message"] == "Email already exists"


@pytest.mark.asyncio
async def test_registration_validates_input(client):
    response = await client.post(
        "/auth/registration",
        json={"login": "x", "email": "not-an-email", "password": "123"},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_resending_invalidates_previous_code(client, test_data, outbox):
    carol = test_data.user("carol")
    await client.post("/auth/registration", json=carol)
    first_code = outbox.last_code("confirmation", carol["email"])

    resent = await client.post(
        "/auth/registration-email-resending", json={"email": carol["email"]}
    )
    assert resent.status_code == 204
    second_code = outbox.last_code("confirmation", carol["email"])
    assert second_code != first_code

    stale = await client.post("/auth/registration-confirmation", json={"code": first_code})
    fresh = await client.post("/auth/registration-confirmation", json={"code": second_code})
    assert stale.status_code == 400
    assert fresh.status_code == 204


@pytest.mark.asyncio
async def test_resending_to_confirmed_user_fails(client, alice):
    response = await client.post(
        "/auth/registration-email-resending", json={"email": alice["email"]}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_EMAIL"


@pytest.mark.asyncio
async def test_password_recovery_for_unknown_email_sends_nothing(client, outbox):
    response = await client.post(
        "/auth/password-recovery", json={"email": "ghost@example.com"}
    )

    assert response.status_code == 204
    assert outbox.sent == []


@pytest.mark.asyncio
async def test_new_password_replaces_password_and_ends_sessions(client, alice, login, outbox):
    tokens = await login(alice)

    response = await client.post("/auth/password-recovery", json={"email": alice["email"]})
    assert response.status_code == 204
    code = outbox.last_code("recovery", alice["email"])

    changed = await client.post(
        "/auth/new-password", json={"recovery_code": code, "new_password": "n3w-secret"}
    )
    assert changed.status_code == 204

    old = await client.post("/auth/login", json=credentials(alice))
    new = await client.post(
        "/auth/login", json={"login_or_email": alice["login"], "password": "n3w-secret"}
    )
    assert old.status_code == 401
    assert new.status_code == 200

    refresh = await client.post(
        "/auth/refresh-token", headers=refresh_cookie(tokens.refresh_token)
    )
    assert refresh.status_code == 401

    reused = await client.post(
        "/auth/new-password", json={"recovery_code": code, "new_password": "other-pw1"}
    )
    assert reused.status_code == 400
    assert reused.json()["error"]["code"] == "INVALID_RECOVERY_CODE"
