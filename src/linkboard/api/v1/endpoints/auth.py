# src/linkboard/api/v1/endpoints/auth.py
"""Authentication endpoints for the Linkboard API."""

from __future__ import annotations

from fastapi import APIRouter, status

from linkboard.api.v1.dependencies import CurrentUserDep, SessionServiceDep
from linkboard.models import User
from linkboard.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from linkboard.services.session_service import AuthResult

router = APIRouter(prefix="/auth", tags=["authentication"])


def _auth_response(result: AuthResult) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(result.user),
        access_token=result.access_token,
        refresh_token=result.refresh_token,
    )


@router.post(
    "/register",
    summary="Create an account",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
)
def register_user(payload: RegisterRequest, sessions: SessionServiceDep) -> AuthResponse:
    """Register a new account and return its first credential pair."""
    result = sessions.register(payload.username, payload.email, payload.password)
    return _auth_response(result)


@router.post("/login", summary="Authenticate with email and password", response_model=AuthResponse)
def login_user(payload: LoginRequest, sessions: SessionServiceDep) -> AuthResponse:
    """Check credentials and open a new refresh session."""
    result = sessions.login(payload.email, payload.password)
    return _auth_response(result)


@router.post("/refresh", summary="Rotate a refresh token", response_model=TokenResponse)
def refresh_tokens(payload: RefreshRequest, sessions: SessionServiceDep) -> TokenResponse:
    """Exchange a refresh token for a new pair; the presented token is spent."""
    pair = sessions.refresh(payload.refresh_token)
    return TokenResponse(access_token=pair.access_token, refresh_token=pair.refresh_token)


@router.post("/logout", summary="Revoke a refresh token", response_model=MessageResponse)
def logout(payload: RefreshRequest, sessions: SessionServiceDep) -> MessageResponse:
    sessions.logout(payload.refresh_token)
    return MessageResponse(message="Successfully logged out")


@router.get("/me", summary="Current account", response_model=UserResponse)
def read_me(current_user: CurrentUserDep) -> User:
    return current_user
