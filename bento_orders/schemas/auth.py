"""Authentication-related request and response schemas."""

from datetime import date

from pydantic import BaseModel, ConfigDict


class LoginRequest(BaseModel):
    """Payload for user login."""

    email: str
    password: str


class TokenResponse(BaseModel):
    """JWT response payload."""

    access_token: str
    token_type: str = "bearer"


class AuthUserResponse(BaseModel):
    """User response for auth endpoints."""

    id: int
    email: str
    full_name: str
    role: str
    is_active: bool
    left_date: date | None = None

    model_config = ConfigDict(from_attributes=True)
