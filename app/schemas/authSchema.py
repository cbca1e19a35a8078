from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    """Request schema for creating an account."""
    username: str = Field(..., max_length=100)
    email: EmailStr
    password: str = Field(..., max_length=128)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class ValidateTokenRequest(BaseModel):
    token: str


class AuthResponse(BaseModel):
    token: str
    user_id: str
    email: str
    username: str


class TokenValidationResponse(BaseModel):
    valid: bool
    user_id: Optional[str] = None


class UserResponse(BaseModel):
    user_id: str
    username: str
    email: str
    task_count: int = 0

    class Config:
        from_attributes = True
