"""Auth service - registration, login and token validation."""

import logging
from typing import Optional, Tuple

from app.core.exceptions import ConflictError, InvalidArgumentError
from app.core.security import TokenService, hash_password, verify_password
from app.models.user import User
from app.repositories.UserRepository import UserRepository
from app.utils.validations import require_text

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class AuthService:
    def __init__(self, user_repository: UserRepository, token_service: TokenService):
        self.user_repository = user_repository
        self.token_service = token_service

    async def register(self, username: str, email: str, password: str) -> Tuple[User, str]:
        """
        Create an account and issue its first token.

        Raises:
            InvalidArgumentError: On blank username/email or a short password
            ConflictError: If the email is already registered (case-insensitive)
        """
        username = require_text(username, "Username")
        email = require_text(email, "Email")
        if not password or len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidArgumentError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

        if await self.user_repository.get_by_email(email):
            logger.warning("Registration rejected: email already registered")
            raise ConflictError("User already exists")

        user = User(username=username, email=email, password_hash=hash_password(password))
        user = await self.user_repository.create(user)
        logger.info(f"User {user.user_id} registered")
        return user, self.token_service.issue_token(user)

    async def login(self, email: str, password: str) -> Optional[Tuple[User, str]]:
        """Return the user and a fresh token, or None on bad credentials."""
        if not email or not password:
            return None

        user = await self.user_repository.get_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Login failed")
            return None

        return user, self.token_service.issue_token(user)

    async def validate(self, token: str) -> Optional[dict]:
        """Claims of a valid token whose user still exists, else None."""
        claims = self.token_service.validate_token(token)
        if claims is None or not await self.user_repository.exists(claims["sub"]):
            return None
        return claims
