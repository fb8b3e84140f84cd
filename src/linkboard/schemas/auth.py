"""Authentication-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str = Field(..., min_length=3, max_length=20, description="Public handle")
    email: str = Field(..., max_length=254, description="Login email address")
    password: str = Field(..., min_length=8, description="Plaintext password")


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: str = Field(..., description="Login email address")
    password: str = Field(..., description="Plaintext password")


class RefreshRequest(BaseModel):
    """Refresh token presented for rotation or logout."""

    refresh_token: str = Field(..., min_length=1, description="Single-use refresh token")


class UserResponse(BaseModel):
    """Public account information."""

    id: int
    username: str
    email: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """Credential pair returned by refresh."""

    access_token: str = Field(..., description="Short-lived JWT access token")
    refresh_token: str = Field(..., description="Single-use JWT refresh token")
    token_type: str = Field("bearer", description="Token type")


class AuthResponse(TokenResponse):
    """Response returned after registration or login."""

    user: UserResponse


class MessageResponse(BaseModel):
    message: str
