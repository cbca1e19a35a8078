"""Password hashing, token issuing and AuthService."""

from datetime import timedelta
from unittest.mock import MagicMock

import jwt
import pytest

from app.core.config import settings
from app.core.exceptions import ConflictError, InvalidArgumentError
from app.core.security import TokenService, create_jwt_token, hash_password, verify_password
from app.repositories.UserRepository import UserRepository
from app.services.AuthService import AuthService


def _user(user_id="u-1"):
    user = MagicMock()
    user.user_id = user_id
    user.email = "alice@example.com"
    user.username = "alice"
    return user


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------


def test_hash_and_verify_password():
    hashed = hash_password("secret123")

    assert hashed != "secret123"
    assert verify_password("secret123", hashed)
    assert not verify_password("wrong", hashed)


def test_verify_password_with_garbage_hash():
    assert verify_password("secret123", "not-a-bcrypt-hash") is False


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


def test_issue_and_validate_token():
    service = TokenService()
    claims = service.validate_token(service.issue_token(_user()))

    assert claims["sub"] == "u-1"
    assert claims["email"] == "alice@example.com"
    assert claims["iss"] == settings.TOKEN_ISSUER
    assert claims["aud"] == settings.TOKEN_AUDIENCE
    assert "jti" in claims


def test_tokens_are_unique_per_issue():
    service = TokenService()
    assert service.issue_token(_user()) != service.issue_token(_user())


def test_expired_token_is_rejected():
    service = TokenService(expires_delta=timedelta(seconds=-5))
    assert service.validate_token(service.issue_token(_user())) is None


def test_token_signed_with_other_key_is_rejected():
    forged = jwt.encode(
        {"sub": "u-1", "iss": settings.TOKEN_ISSUER, "aud": settings.TOKEN_AUDIENCE},
        "another-key",
        algorithm="HS256",
    )
    assert TokenService().validate_token(forged) is None


def test_token_for_other_audience_is_rejected():
    token = jwt.encode(
        {"sub": "u-1", "iss": settings.TOKEN_ISSUER, "aud": "someone-else"},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )
    assert TokenService().validate_token(token) is None


def test_token_without_subject_is_rejected():
    assert TokenService().validate_token(create_jwt_token({"email": "x@example.com"})) is None


@pytest.mark.parametrize("token", ["", None, "not.a.jwt"])
def test_malformed_token_is_rejected(token):
    assert TokenService().validate_token(token) is None


# ---------------------------------------------------------------------------
# AuthService
# ---------------------------------------------------------------------------


@pytest.fixture()
def auth(session):
    return AuthService(UserRepository(session), TokenService())


@pytest.mark.asyncio
async def test_register_and_login(auth, db_manager):
    user, token = await auth.register(" carol ", "Carol@Example.com", "secret123")

    assert user.username == "carol"
    assert user.email == "carol@example.com"
    assert (await auth.validate(token))["sub"] == user.user_id

    result = await auth.login("CAROL@example.com", "secret123")
    assert result is not None
    assert result[0].user_id == user.user_id


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(auth, users):
    with pytest.raises(ConflictError):
        await auth.register("alice2", "ALICE@example.com", "secret123")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "username, email, password",
    [("", "d@example.com", "secret123"), ("dave", " ", "secret123"), ("dave", "d@example.com", "short")],
)
async def test_register_rejects_bad_input(auth, db_manager, username, email, password):
    with pytest.raises(InvalidArgumentError):
        await auth.register(username, email, password)


@pytest.mark.asyncio
async def test_login_with_bad_credentials(auth, db_manager):
    await auth.register("carol", "carol@example.com", "secret123")

    assert await auth.login("carol@example.com", "wrong-pass") is None
    assert await auth.login("nobody@example.com", "secret123") is None
    assert await auth.login("", "") is None


@pytest.mark.asyncio
async def test_validate_rejects_token_of_deleted_user(auth, session):
    user, token = await auth.register("carol", "carol@example.com", "secret123")
    assert await auth.validate(token) is not None

    assert await UserRepository(session).delete(user.user_id) is True

    assert await auth.validate(token) is None
    assert await auth.validate("garbage") is None
