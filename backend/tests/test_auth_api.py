import smtplib

import pytest

from app.config import settings
from app.exceptions import TransportError
from app.services.credential_store import CredentialStore
from app.services.email_service import EmailService

PASSWORD = "Abcd1234!"

REGISTRATION = {
    "email": "a@example.com",
    "fullName": "Alice Example",
    "password": PASSWORD,
    "confirmPassword": PASSWORD,
}


async def test_register_confirm_login_and_create_category(client, mailer, auth_headers):
    response = await client.post("/api/auth/register", json=REGISTRATION)
    assert response.status_code == 200, response.text
    assert len(mailer.sent) == 1
    assert mailer.sent[0].to == "a@example.com"

    params = mailer.confirmation_params()
    response = await client.get("/api/auth/confirm-email", params=params)
    assert response.status_code == 200, response.text

    response = await client.post("/api/auth/login", json={"email": "a@example.com", "password": PASSWORD})
    assert response.status_code == 200, response.text
    headers = {"Authorization": f"Bearer {response.json()['token']}"}

    response = await client.post("/api/product-categories", json={"name": "Tools"}, headers=headers)
    assert response.status_code == 201, response.text
    assert response.json()["owner_id"] == params["userId"]
    assert response.headers["location"].endswith(f"/api/product-categories/{response.json()['id']}")

    other = await auth_headers(email="b@example.com")
    response = await client.get("/api/product-categories", headers=other)
    assert response.status_code == 200
    assert response.json() == []


async def test_registered_user_is_unconfirmed(client, session_factory):
    await client.post("/api/auth/register", json=REGISTRATION)

    async with session_factory() as session:
        user = await CredentialStore(session).find_by_email("a@example.com")

    assert user is not None
    assert user.email_confirmed is False
    assert user.full_name == "Alice Example"


async def test_register_rejects_mismatched_confirmation(client, mailer):
    response = await client.post("/api/auth/register", json={**REGISTRATION, "confirmPassword": "Other123!"})

    assert response.status_code == 422
    assert mailer.sent == []


async def test_register_rejects_weak_password_with_field_errors(client):
    weak = {**REGISTRATION, "password": "weakpass", "confirmPassword": "weakpass"}

    response = await client.post("/api/auth/register", json=weak)

    assert response.status_code == 400
    assert "password" in response.json()["errors"]


async def test_register_rejects_duplicate_email(client):
    await client.post("/api/auth/register", json=REGISTRATION)

    response = await client.post("/api/auth/register", json={**REGISTRATION, "email": "A@Example.com"})

    assert response.status_code == 400
    assert "email" in response.json()["errors"]


async def test_mail_failure_keeps_registration(client, mailer, session_factory):
    mailer.fail_with = TransportError()

    response = await client.post("/api/auth/register", json=REGISTRATION)

    assert response.status_code == 502
    async with session_factory() as session:
        assert await CredentialStore(session).find_by_email("a@example.com") is not None


async def test_smtp_errors_become_transport_errors(monkeypatch):
    def refuse(self, to_email, message):
        raise smtplib.SMTPConnectError(421, "unavailable")

    monkeypatch.setattr(settings, "smtp_host", "smtp.example.com")
    monkeypatch.setattr(EmailService, "_deliver", refuse)

    with pytest.raises(TransportError):
        await EmailService(settings).send_email("a@example.com", "Hi", "<p>Hi</p>")


async def test_unconfirmed_login_is_refused_with_distinct_error(client, make_user):
    await make_user(email="a@example.com", confirmed=False)

    unconfirmed = await client.post("/api/auth/login", json={"email": "a@example.com", "password": PASSWORD})
    await make_user(email="b@example.com")
    wrong_password = await client.post("/api/auth/login", json={"email": "b@example.com", "password": "Wrong123!"})

    assert unconfirmed.status_code == 401
    assert wrong_password.status_code == 401
    assert unconfirmed.json()["detail"] != wrong_password.json()["detail"]


async def test_unknown_email_and_wrong_password_look_the_same(client, make_user):
    await make_user(email="a@example.com")

    unknown = await client.post("/api/auth/login", json={"email": "nobody@example.com", "password": PASSWORD})
    wrong = await client.post("/api/auth/login", json={"email": "a@example.com", "password": "Wrong123!"})

    assert unknown.status_code == wrong.status_code == 401
    assert unknown.json() == wrong.json()


async def test_login_email_is_case_insensitive(client, make_user):
    await make_user(email="a@example.com")

    response = await client.post("/api/auth/login", json={"email": "A@EXAMPLE.com", "password": PASSWORD})

    assert response.status_code == 200


async def test_confirmation_link_works_once(client, mailer):
    await client.post("/api/auth/register", json=REGISTRATION)
    params = mailer.confirmation_params()

    first = await client.get("/api/auth/confirm-email", params=params)
    second = await client.get("/api/auth/confirm-email", params=params)

    assert first.status_code == 200
    assert second.status_code == 400


async def test_confirmation_for_unknown_user_is_not_found(client, mailer):
    await client.post("/api/auth/register", json=REGISTRATION)
    params = {**mailer.confirmation_params(), "userId": "missing"}

    response = await client.get("/api/auth/confirm-email", params=params)

    assert response.status_code == 404


async def test_confirmation_with_bad_token_fails(client, mailer):
    await client.post("/api/auth/register", json=REGISTRATION)
    params = {**mailer.confirmation_params(), "token": "bm9wZQ"}

    response = await client.get("/api/auth/confirm-email", params=params)

    assert response.status_code == 400


async def test_logout_requires_a_session(client, auth_headers):
    assert (await client.post("/api/auth/logout")).status_code == 401

    headers = await auth_headers()
    response = await client.post("/api/auth/logout", headers=headers)

    assert response.status_code == 200


async def test_token_keeps_working_after_logout(client, auth_headers):
    headers = await auth_headers()

    await client.post("/api/auth/logout", headers=headers)
    response = await client.get("/api/product-categories", headers=headers)

    assert response.status_code == 200
