"""Security utilities for password hashing and for issuing and validating JWT tokens."""

import logging
import uuid
from typing import Optional
from datetime import datetime, timedelta
import bcrypt
import jwt
from .config import settings
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession
from app.models.user import User
from app.core.database import aget_db
from app.repositories.UserRepository import UserRepository

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash a password with bcrypt (only the first 72 bytes are significant)."""
    password_bytes = password.encode("utf-8")[:72]
    return bcrypt.hashpw(password_bytes, bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8")[:72], password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def create_jwt_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Creates a JWT (JSON Web Token) with the provided data and expiration time.

    Args:
        data (dict): The payload data to be encoded in the JWT.
        expires_delta (timedelta, optional): The time until the token expires.
            Defaults to ACCESS_TOKEN_EXPIRE_MINUTES.

    Returns:
        str: The encoded JWT string.

    Example:
        >>> token = create_jwt_token({"sub": "3f0c..."})

    Note:
        The token includes the standard claims exp, iat, iss and aud.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = data.copy()
    now = datetime.utcnow()
    to_encode.update({
        "exp": now + expires_delta,
        "iat": now,
        "iss": settings.TOKEN_ISSUER,
        "aud": settings.TOKEN_AUDIENCE,
    })
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_jwt_token(token: str) -> dict:
    """Decodes and validates a JWT token.

    Signature, expiry, issuer and audience are all checked.

    Args:
        token (str): The JWT token string to decode.

    Returns:
        dict: The decoded token payload containing the claims.

    Raises:
        jwt.InvalidTokenError: If the token is invalid, expired, or improperly formatted.
    """
    try:
        return jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM],
            audience=settings.TOKEN_AUDIENCE,
            issuer=settings.TOKEN_ISSUER,
        )
    except jwt.InvalidTokenError as e:
        logger.info(f"JWT decode rejected token: {e}")
        raise


class TokenService:
    """Issues opaque bearer tokens for users and validates them back into claims."""

    def __init__(self, expires_delta: Optional[timedelta] = None):
        self.expires_delta = expires_delta

    def issue_token(self, user: User) -> str:
        payload = {
            "sub": str(user.user_id),
            "email": user.email,
            "username": user.username,
            "jti": str(uuid.uuid4()),
        }
        return create_jwt_token(payload, expires_delta=self.expires_delta)

    def validate_token(self, token: str) -> Optional[dict]:
        """Return the claims of a valid token, or None."""
        if not token:
            return None
        try:
            claims = decode_jwt_token(token)
        except jwt.InvalidTokenError:
            return None
        return claims if claims.get("sub") else None


token_service = TokenService()


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(aget_db)
) -> User:
    """
    Dependency to get current authenticated user from the bearer token
    (or the auth_token cookie). Raises 401 if not authenticated.
    """
    token = credentials.credentials if credentials else request.cookies.get("auth_token")

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    claims = token_service.validate_token(token)
    if claims is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user = await UserRepository(db).get_by_id(claims["sub"])
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )

    return user
