"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from linkboard.core.settings import settings
from linkboard.db.session import get_db
from linkboard.models import User
from linkboard.services.comment_service import CommentService
from linkboard.services.notification_service import NotificationService
from linkboard.services.score_service import ScoreService
from linkboard.services.session_service import SessionService
from linkboard.services.tokens import TokenCodec

# HTTP Bearer scheme for JWT authentication; missing headers are reported by us as 401.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_token_codec() -> TokenCodec:
    """Return a token codec bound to the application settings."""
    return TokenCodec(settings)


TokenCodecDep = Annotated[TokenCodec, Depends(get_token_codec)]


def get_session_service(db: SessionDep, codec: TokenCodecDep) -> SessionService:
    return SessionService(db, codec, bcrypt_rounds=settings.bcrypt_rounds)


def get_score_service(db: SessionDep) -> ScoreService:
    return ScoreService(db)


def get_comment_service(db: SessionDep) -> CommentService:
    return CommentService(db)


def get_notification_service(db: SessionDep) -> NotificationService:
    return NotificationService(db)


SessionServiceDep = Annotated[SessionService, Depends(get_session_service)]
ScoreServiceDep = Annotated[ScoreService, Depends(get_score_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    sessions: SessionServiceDep,
) -> User:
    """Get the current authenticated user from the bearer access token.

    Raises:
        HTTPException: If the header is missing. Invalid or expired tokens
            surface as AuthenticationError and are mapped by the app.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return sessions.authenticate(credentials.credentials)


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]
