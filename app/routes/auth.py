# app/routes/auth.py
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Response
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from app.config import SESSION_COOKIE_NAME
from app.content.credentials import authenticate, register_user
from app.content.sessions import (
    clear_session_cookie,
    create_session,
    delete_session,
    resolve_session,
    set_session_cookie,
)
from app.database import get_db
from app.errors import Unauthenticated
from app.models.user import User

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=8, max_length=128)


class LoginRequest(BaseModel):
    email: str
    password: str


def user_to_dict(user: User) -> dict:
    return {
        "id": user.id,
        "email": user.email,
        "attemptUsed": bool(user.attempt_used),
        "createdAt": user.created_at.isoformat() if user.created_at else None,
    }


def get_current_user(
    session_token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    db: Session = Depends(get_db),
) -> Optional[User]:
    """The user behind the session cookie, or None. Never raises."""
    return resolve_session(db, session_token)


def require_user(current_user: Optional[User] = Depends(get_current_user)) -> User:
    if current_user is None:
        raise Unauthenticated()
    return current_user


@router.post("/register")
def register(payload: RegisterRequest, response: Response, db: Session = Depends(get_db)) -> dict:
    user = register_user(db, payload.email, payload.password)
    token = create_session(db, user.id)
    set_session_cookie(response, token)
    return {}


@router.post("/login")
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)) -> dict:
    user = authenticate(db, payload.email, payload.password)
    token = create_session(db, user.id)
    set_session_cookie(response, token)
    logger.info("login user_id=%s", user.id)
    return {}


@router.post("/logout")
def logout(
    response: Response,
    session_token: Optional[str] = Cookie(default=None, alias=SESSION_COOKIE_NAME),
    db: Session = Depends(get_db),
) -> dict:
    delete_session(db, session_token)
    clear_session_cookie(response)
    return {"success": True}


@router.get("/me")
def me(current_user: Optional[User] = Depends(get_current_user)) -> dict:
    return {"user": user_to_dict(current_user) if current_user else None}
