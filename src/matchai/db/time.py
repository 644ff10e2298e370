# src/matchai/db/time.py
"""Clock helper for server-assigned timestamps on matches and messages."""

from datetime import UTC, datetime


def utcnow() -> datetime:
    """Aware UTC now; used as the column default for ``timestamp`` fields."""
    return datetime.now(UTC)
