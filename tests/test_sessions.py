from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import delete, event

from app.content.sessions import (
    SESSION_TTL,
    TOKEN_LENGTH,
    create_session,
    delete_session,
    generate_token,
    resolve_session,
)
from app.models.session import SessionToken


NOW = datetime(2026, 3, 1, 9, 30, 0)


def test_generate_token__is_long_alphanumeric_and_unique():
    tokens = {generate_token() for _ in range(50)}
    assert len(tokens) == 50
    for t in tokens:
        assert len(t) == TOKEN_LENGTH >= 64
        assert t.isalnum()


def test_create_session__stores_row_expiring_in_seven_days(db_session, make_user):
    user = make_user()
    token = create_session(db_session, user.id, now=NOW)

    row = db_session.query(SessionToken).filter_by(token=token).one()
    assert row.user_id == user.id
    assert row.created_at == NOW
    assert row.expires_at == NOW + timedelta(days=7)
    assert SESSION_TTL == timedelta(days=7)


def test_resolve_session__valid_token__returns_user(db_session, make_user):
    user = make_user()
    token = create_session(db_session, user.id, now=NOW)

    resolved = resolve_session(db_session, token, now=NOW + timedelta(days=3))
    assert resolved is not None
    assert resolved.id == user.id


def test_resolve_session__exactly_at_expiry__still_valid(db_session, make_user):
    user = make_user()
    token = create_session(db_session, user.id, now=NOW)

    assert resolve_session(db_session, token, now=NOW + timedelta(days=7)) is not None
    assert db_session.query(SessionToken).filter_by(token=token).count() == 1


def test_resolve_session__one_second_after_expiry__returns_none_and_deletes_row(db_session, make_user):
    user = make_user()
    token = create_session(db_session, user.id, now=NOW)

    later = NOW + timedelta(days=7, seconds=1)
    assert resolve_session(db_session, token, now=later) is None
    assert db_session.query(SessionToken).filter_by(token=token).count() == 0


def test_resolve_session__unknown_or_empty_token__returns_none(db_session, make_user):
    make_user()
    assert resolve_session(db_session, "nope") is None
    assert resolve_session(db_session, "") is None
    assert resolve_session(db_session, None) is None


def test_delete_session__is_idempotent(db_session, make_user):
    user = make_user()
    token = create_session(db_session, user.id)

    assert delete_session(db_session, token) == 1
    assert delete_session(db_session, token) == 0
    assert delete_session(db_session, None) == 0
    assert resolve_session(db_session, token) is None


def test_user_may_hold_several_sessions(db_session, make_user):
    user = make_user()
    first = create_session(db_session, user.id)
    second = create_session(db_session, user.id)
    assert first != second

    delete_session(db_session, first)

    assert resolve_session(db_session, first) is None
    assert resolve_session(db_session, second).id == user.id


def test_resolve_session__expired_row_already_purged_elsewhere__returns_none(
    db_session, session_factory, make_user
):
    user = make_user()
    token = create_session(db_session, user.id, now=NOW)
    other = session_factory()

    def purge_first(state):
        # A concurrent request removes the same expired row just before our delete runs
        if state.is_delete:
            other.execute(delete(SessionToken).where(SessionToken.token == token))
            other.commit()

    event.listen(db_session, "do_orm_execute", purge_first)
    try:
        assert resolve_session(db_session, token, now=NOW + timedelta(days=8)) is None
    finally:
        event.remove(db_session, "do_orm_execute", purge_first)
        other.close()

    assert db_session.query(SessionToken).filter_by(token=token).count() == 0
