# app/clock.py
from __future__ import annotations

from datetime import datetime, timezone


def utcnow() -> datetime:
    # Naive UTC datetime (no tzinfo). Works cleanly with SQLite.
    return datetime.now(timezone.utc).replace(tzinfo=None)
