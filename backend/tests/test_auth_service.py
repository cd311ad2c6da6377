import base64
from datetime import datetime, timedelta
from types import SimpleNamespace

import jwt
import pytest

from app.config import settings
from app.exceptions import TokenError
from app.services import auth_service


@pytest.fixture
def user():
    return SimpleNamespace(id="user-a", username="a@example.com", email="a@example.com")


def test_password_hash_round_trip():
    hashed = auth_service.get_password_hash("Abcd1234!")

    assert hashed != "Abcd1234!"
    assert auth_service.verify_password("Abcd1234!", hashed)
    assert not auth_service.verify_password("abcd1234!", hashed)


def test_token_carries_identity_and_roles(user):
    token = auth_service.create_access_token(user, ["Admin", "User"])

    claims = auth_service.decode_access_token(token)

    assert claims["sub"] == "user-a"
    assert claims["name"] == "a@example.com"
    assert claims["email"] == "a@example.com"
    assert claims["role"] == ["Admin", "User"]
    assert claims["iss"] == settings.jwt_issuer
    assert claims["aud"] == settings.jwt_audience


def test_each_token_gets_a_fresh_jti(user):
    first = auth_service.decode_access_token(auth_service.create_access_token(user, []))
    second = auth_service.decode_access_token(auth_service.create_access_token(user, []))

    assert first["jti"] != second["jti"]


def test_expiry_follows_configured_days(user):
    claims = auth_service.decode_access_token(auth_service.create_access_token(user, []))

    lifetime = claims["exp"] - claims["iat"]
    assert lifetime == settings.access_token_expire_days * 24 * 3600


@pytest.mark.parametrize("position", [0, 15, -1])
def test_tampered_signature_is_rejected(user, position):
    token = auth_service.create_access_token(user, ["User"])
    header, payload, signature = token.split(".")
    raw = bytearray(base64.urlsafe_b64decode(signature + "=" * (-len(signature) % 4)))
    raw[position] ^= 0x01
    forged = base64.urlsafe_b64encode(bytes(raw)).decode("ascii").rstrip("=")
    tampered = ".".join([header, payload, forged])

    with pytest.raises(TokenError):
        auth_service.decode_access_token(tampered)


def test_expired_token_is_rejected(user):
    token = auth_service.create_access_token(user, [], expires_delta=timedelta(seconds=-1))

    with pytest.raises(TokenError):
        auth_service.decode_access_token(token)


def _forge(**overrides):
    now = datetime.utcnow()
    claims = {
        "sub": "user-a",
        "email": "a@example.com",
        "jti": "x",
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + timedelta(hours=1),
    }
    claims.update(overrides)
    key = claims.pop("_key", settings.secret_key)
    return jwt.encode(claims, key, algorithm="HS256")


@pytest.mark.parametrize(
    "overrides",
    [
        {"iss": "someone-else"},
        {"aud": "another-app"},
        {"_key": "a-completely-different-signing-key-123456"},
    ],
    ids=["issuer", "audience", "key"],
)
def test_foreign_tokens_are_rejected(overrides):
    with pytest.raises(TokenError):
        auth_service.decode_access_token(_forge(**overrides))


def test_token_without_subject_is_rejected():
    token = _forge()
    claims = jwt.decode(token, options={"verify_signature": False})
    del claims["sub"]
    stripped = jwt.encode(claims, settings.secret_key, algorithm="HS256")

    with pytest.raises(TokenError):
        auth_service.decode_access_token(stripped)


def test_garbage_is_rejected():
    with pytest.raises(TokenError):
        auth_service.decode_access_token("not-a-token")
