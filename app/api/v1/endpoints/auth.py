from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from app.core.config import settings
from app.core.database import aget_db
from app.core.limiter import limiter
from app.core.security import get_current_user, token_service
from app.models.user import User
from app.repositories.UserRepository import UserRepository
from app.schemas.authSchema import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    TokenValidationResponse,
    UserResponse,
    ValidateTokenRequest,
)
from app.services.AuthService import AuthService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["auth"]
)


def get_auth_service(db: AsyncSession = Depends(aget_db)) -> AuthService:
    return AuthService(UserRepository(db), token_service)


def _auth_response(user: User, token: str) -> AuthResponse:
    return AuthResponse(token=token, user_id=user.user_id, email=user.email, username=user.username)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def register(
    request: Request,
    payload: RegisterRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Create a new account and return a bearer token.
    Emails are unique regardless of case.
    """
    user, token = await auth_service.register(payload.username, payload.email, payload.password)
    return _auth_response(user, token)


@router.post("/login", response_model=AuthResponse)
@limiter.limit(settings.AUTH_RATE_LIMIT)
async def login(
    request: Request,
    payload: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """Login using email and password."""
    result = await auth_service.login(payload.email, payload.password)
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )
    user, token = result
    return _auth_response(user, token)


@router.post("/validate", response_model=TokenValidationResponse)
async def validate_token(
    payload: ValidateTokenRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    claims = await auth_service.validate(payload.token)
    if claims is None:
        return TokenValidationResponse(valid=False)
    return TokenValidationResponse(valid=True, user_id=claims["sub"])


@router.get("/me", response_model=UserResponse)
async def get_me(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(aget_db)
):
    task_count = await UserRepository(db).get_task_count(current_user.user_id)
    return UserResponse(
        user_id=current_user.user_id,
        username=current_user.username,
        email=current_user.email,
        task_count=task_count,
    )
