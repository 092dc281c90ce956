# app/content/credentials.py
from __future__ import annotations

import logging

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import PASSWORD_HASH_ROUNDS
from app.errors import DuplicateEmail, InvalidCredentials
from app.models.user import User

logger = logging.getLogger(__name__)

# Pi-friendly hashing (no native deps), fixed cost factor
pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=PASSWORD_HASH_ROUNDS,
)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def register_user(db: Session, email: str, password: str) -> User:
    email = normalize_email(email)

    existing = db.query(User).filter(User.email == email).first()
    if existing:
        raise DuplicateEmail("User with this email already exists")

    user = User(email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise DuplicateEmail("User with this email already exists")

    db.refresh(user)
    logger.info("user registered user_id=%s", user.id)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Return the user for a matching email/password pair.
    Unknown email and wrong password raise the same error.
    """
    user = db.query(User).filter(User.email == normalize_email(email)).first()
    if user is None:
        pwd_context.dummy_verify()
        raise InvalidCredentials()

    if not verify_password(password, user.password_hash):
        raise InvalidCredentials()

    return user
