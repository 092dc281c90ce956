# app/database.py
from __future__ import annotations

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from app.config import DATABASE_URL


def _connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        # Concurrent writers wait on the lock instead of failing right away
        return {"check_same_thread": False, "timeout": 30}
    return {}


engine = create_engine(
    DATABASE_URL,
    connect_args=_connect_args(DATABASE_URL),
    future=True,
)

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)

class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass

def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
