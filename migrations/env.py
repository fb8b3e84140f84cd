"""Alembic environment for the Linkboard schema.

The target URL comes from ``ALEMBIC_URL`` when set, then from the URL the
caller placed on the config, then from ``DATABASE_URL`` via the settings.
SQLite targets use batch mode because SQLite cannot alter constraints in place.
"""
from __future__ import annotations

import os
import sys
from logging.config import fileConfig
from pathlib import Path
from typing import Any

from alembic import context
from sqlalchemy import engine_from_config, pool

# Lets a plain `alembic upgrade head` from a source checkout find the package.
SRC_ROOT = Path(__file__).resolve().parents[1] / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

import linkboard.models  # noqa: E402,F401
from linkboard.core.settings import settings  # noqa: E402
from linkboard.db.session import Base  # noqa: E402

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def resolve_url() -> str:
    """Pick the database URL migrations run against."""
    override = os.getenv("ALEMBIC_URL")
    if override:
        return override
    return config.get_main_option("sqlalchemy.url") or settings.database_url_sync


config.set_main_option("sqlalchemy.url", resolve_url())
target_metadata = Base.metadata


def include_object(obj: Any, name: str | None, type_: str, reflected: bool, compare_to: Any) -> bool:
    """Keep the alembic_version bookkeeping table out of autogenerate diffs."""
    return not (type_ == "table" and name == "alembic_version")


def _common_options(is_sqlite: bool) -> dict[str, Any]:
    return {
        "target_metadata": target_metadata,
        "include_object": include_object,
        "render_as_batch": is_sqlite,
        "compare_type": True,
    }


def run_migrations_offline() -> None:
    """Emit SQL for the linkboard tables without connecting."""
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_common_options(bool(url and url.startswith("sqlite"))),
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply revisions over a live connection to the linkboard database."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            **_common_options(connection.dialect.name == "sqlite"),
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
