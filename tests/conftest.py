# tests/conftest.py
"""Shared fixtures for the Linkboard test suite."""

import os

# Settings are read at import time, so the environment must be set first.
os.environ.setdefault("ACCESS_TOKEN_SECRET", "test-access-secret")
os.environ.setdefault("REFRESH_TOKEN_SECRET", "test-refresh-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from linkboard.core.security import hash_password
from linkboard.core.settings import Settings, settings
from linkboard.db.session import Base, build_engine, get_db
from linkboard.main import app as fastapi_app
from linkboard.models import Comment, Post, User
from linkboard.services.session_service import SessionService
from linkboard.services.tokens import TokenCodec

TEST_PASSWORD = "Str0ng!Passw0rd"


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Fresh in-memory database per test."""
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture
def db_session(engine: Engine) -> Generator[Session, None, None]:
    """Session shared by the test body and every request handler."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    yield session
    session.close()


@pytest.fixture
def file_sessionmaker(tmp_path) -> Generator[sessionmaker, None, None]:
    """Session factory over an on-disk database, for multi-connection tests."""
    file_engine = build_engine(f"sqlite:///{tmp_path / 'linkboard.db'}")
    Base.metadata.create_all(bind=file_engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=file_engine)
    file_engine.dispose()


@pytest.fixture
def app(db_session: Session):
    """Application with the database dependency bound to ``db_session``."""

    def override_get_db() -> Generator[Session, None, None]:
        yield db_session

    fastapi_app.dependency_overrides[get_db] = override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def test_settings() -> Settings:
    return settings.model_copy()


@pytest.fixture
def codec(test_settings: Settings) -> TokenCodec:
    return TokenCodec(test_settings)


@pytest.fixture
def session_service(db_session: Session, codec: TokenCodec) -> SessionService:
    return SessionService(db_session, codec, bcrypt_rounds=4)


def make_user(db: Session, username: str, email: str | None = None) -> User:
    """Insert and commit a user whose password is ``TEST_PASSWORD``."""
    user = User(
        username=username,
        email=email or f"{username}@example.com",
        password_hash=hash_password(TEST_PASSWORD, rounds=4),
    )
    db.add(user)
    db.commit()
    return user


@pytest.fixture
def user_factory(db_session: Session):
    """Return a callable creating committed users by username."""

    def factory(username: str) -> User:
        return make_user(db_session, username)

    return factory


@pytest.fixture
def test_user(db_session: Session) -> User:
    return make_user(db_session, "alice")


@pytest.fixture
def other_user(db_session: Session) -> User:
    return make_user(db_session, "bob")


@pytest.fixture
def auth_token(test_user: User, codec: TokenCodec) -> dict[str, str]:
    """Authorization headers for ``test_user``."""
    return {"Authorization": f"Bearer {codec.issue_access(test_user.id).token}"}


@pytest.fixture
def other_auth_token(other_user: User, codec: TokenCodec) -> dict[str, str]:
    return {"Authorization": f"Bearer {codec.issue_access(other_user.id).token}"}


@pytest.fixture
def test_post(db_session: Session, test_user: User) -> Post:
    post = Post(
        title="A link worth reading",
        url="https://example.com/article",
        kind="link",
        author_id=test_user.id,
    )
    db_session.add(post)
    db_session.commit()
    return post


@pytest.fixture
def test_comment(db_session: Session, test_post: Post, test_user: User) -> Comment:
    comment = Comment(post_id=test_post.id, author_id=test_user.id, content="First!")
    db_session.add(comment)
    test_post.comment_count = 1
    db_session.commit()
    return comment
