# src/linkboard/db/time.py
"""Time utilities for database models."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Return the current UTC time as a naive datetime.

    Timestamps are stored without zone information and are always UTC, so
    SQL comparisons against ``expires_at`` behave the same on every backend.
    """
    return datetime.now(UTC).replace(tzinfo=None)
