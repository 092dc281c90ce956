# app/content/sessions.py
from __future__ import annotations

import logging
import secrets
import string
from datetime import datetime, timedelta
from typing import Optional

from fastapi import Response
from sqlalchemy import delete
from sqlalchemy.orm import Session

from app.clock import utcnow
from app.config import IS_PRODUCTION, SESSION_COOKIE_NAME, SESSION_DAYS
from app.models.session import SessionToken
from app.models.user import User

logger = logging.getLogger(__name__)

TOKEN_LENGTH = 64
_TOKEN_ALPHABET = string.ascii_letters + string.digits

SESSION_TTL = timedelta(days=SESSION_DAYS)


def generate_token() -> str:
    return "".join(secrets.choice(_TOKEN_ALPHABET) for _ in range(TOKEN_LENGTH))


def create_session(db: Session, user_id: str, now: Optional[datetime] = None) -> str:
    """Store a new session for user_id and return its opaque token."""
    now = now or utcnow()
    token = generate_token()

    db.add(
        SessionToken(
            user_id=user_id,
            token=token,
            created_at=now,
            expires_at=now + SESSION_TTL,
        )
    )
    db.commit()
    logger.info("session created user_id=%s", user_id)
    return token


def resolve_session(db: Session, token: Optional[str], now: Optional[datetime] = None) -> Optional[User]:
    """
    Return the user owning token, or None.

    Expiry is enforced here, at read time: a session past its expires_at is
    deleted on the first lookup that sees it. Valid through expires_at inclusive.
    """
    if not token:
        return None

    sess = db.query(SessionToken).filter(SessionToken.token == token).first()
    if not sess:
        return None

    now = now or utcnow()
    if sess.expires_at < now:
        user_id = sess.user_id
        db.execute(delete(SessionToken).where(SessionToken.id == sess.id))
        db.commit()
        logger.info("expired session purged user_id=%s", user_id)
        return None

    return sess.user


def delete_session(db: Session, token: Optional[str]) -> int:
    """Remove every session carrying token. Safe to call repeatedly."""
    if not token:
        return 0
    result = db.execute(delete(SessionToken).where(SessionToken.token == token))
    db.commit()
    return int(result.rowcount or 0)


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=token,
        max_age=int(SESSION_TTL.total_seconds()),
        path="/",
        secure=IS_PRODUCTION,
        httponly=True,
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=SESSION_COOKIE_NAME,
        path="/",
        secure=IS_PRODUCTION,
        httponly=True,
        samesite="lax",
    )
