"""strategy_engine.core.time

The only time helper surface in the codebase.
"""

from __future__ import annotations

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return an aware UTC datetime."""

    return datetime.now(tz=UTC)

