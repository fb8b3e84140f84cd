# tests/test_migrations.py
"""The Alembic history must produce the same tables as the ORM models."""

from sqlalchemy import create_engine, inspect

from linkboard.db.session import Base
from linkboard.scripts.migrate import run_upgrade_head


def test_upgrade_head_creates_model_tables(tmp_path, monkeypatch) -> None:
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    monkeypatch.setenv("ALEMBIC_URL", url)

    run_upgrade_head()

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        tables = set(inspector.get_table_names())
        assert set(Base.metadata.tables) <= tables
        assert "alembic_version" in tables

        columns = {column["name"] for column in inspector.get_columns("refresh_session")}
        assert {"token", "expires_at", "consumed", "consumed_at"} <= columns
    finally:
        engine.dispose()


def test_upgrade_head_adds_notification_inbox(tmp_path, monkeypatch) -> None:
    url = f"sqlite:///{tmp_path / 'inbox.db'}"
    monkeypatch.setenv("ALEMBIC_URL", url)

    run_upgrade_head()

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        columns = {column["name"] for column in inspector.get_columns("notification")}
        assert {"recipient_id", "sender_id", "kind", "post_id", "comment_id", "is_read"} <= columns
        indexes = {index["name"] for index in inspector.get_indexes("notification")}
        assert "ix_notification_recipient_unread" in indexes
    finally:
        engine.dispose()
