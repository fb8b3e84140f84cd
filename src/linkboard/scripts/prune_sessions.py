"""
Sweep job deleting refresh sessions that expired long ago.

Consumed and expired sessions are kept so that a replayed token is still
recognised as spent. Once a session is past its expiry by the retention
window it can no longer be presented successfully anyway, so it is safe to
delete. Run this from cron; the request path never deletes sessions.
"""

from __future__ import annotations

import argparse
from datetime import timedelta

from sqlalchemy.orm import Session

from linkboard.db.session import SessionLocal
from linkboard.db.time import utcnow
from linkboard.repositories.session_repo import SessionRepository

DEFAULT_RETENTION_DAYS = 30


def prune_expired_sessions(db: Session, retention_days: int = DEFAULT_RETENTION_DAYS) -> int:
    """Delete sessions whose expiry is older than ``retention_days``.

    Args:
        db: Database session; committed on success.
        retention_days: Days past expiry a session is kept.

    Returns:
        Number of deleted sessions.
    """
    if retention_days < 0:
        raise ValueError("retention_days must be non-negative")
    cutoff = utcnow() - timedelta(days=retention_days)
    deleted = SessionRepository(db).purge_expired(cutoff)
    db.commit()
    return deleted


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument(
        "--days",
        type=int,
        default=DEFAULT_RETENTION_DAYS,
        help="keep sessions for this many days past expiry (default: %(default)s)",
    )
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        deleted = prune_expired_sessions(db, args.days)
    finally:
        db.close()
    print(f"Pruned {deleted} refresh session(s) expired more than {args.days} day(s) ago")


if __name__ == "__main__":
    main()
