from __future__ import annotations

import pytest

from app.content.credentials import authenticate, hash_password, register_user, verify_password
from app.errors import DuplicateEmail, InvalidCredentials
from app.models.user import User


def test_hash_password__salted_and_verifiable():
    a = hash_password("correct-horse")
    b = hash_password("correct-horse")

    assert a != b
    assert "correct-horse" not in a
    assert verify_password("correct-horse", a)
    assert not verify_password("wrong-horse", a)


def test_register_then_authenticate__same_credentials__succeeds(db_session):
    user = register_user(db_session, "new@example.com", "s3cret-pass")

    assert user.attempt_used is False
    assert authenticate(db_session, "new@example.com", "s3cret-pass").id == user.id


def test_register__normalizes_email(db_session):
    user = register_user(db_session, "  Mixed@Example.COM ", "s3cret-pass")

    assert user.email == "mixed@example.com"
    assert authenticate(db_session, "MIXED@example.com", "s3cret-pass").id == user.id


def test_register__duplicate_email__raises(db_session):
    register_user(db_session, "dup@example.com", "s3cret-pass")

    with pytest.raises(DuplicateEmail):
        register_user(db_session, "dup@example.com", "other-pass")
    assert db_session.query(User).count() == 1


def test_authenticate__wrong_password_and_unknown_email__are_indistinguishable(db_session):
    register_user(db_session, "known@example.com", "s3cret-pass")

    with pytest.raises(InvalidCredentials) as wrong_pw:
        authenticate(db_session, "known@example.com", "not-it")
    with pytest.raises(InvalidCredentials) as unknown:
        authenticate(db_session, "ghost@example.com", "s3cret-pass")

    assert str(wrong_pw.value) == str(unknown.value)
    assert wrong_pw.value.status_code == unknown.value.status_code == 401
