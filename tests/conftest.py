from __future__ import annotations

import os

# Keep the app off the real data/ directory and away from OpenAI.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["OPENAI_API_KEY"] = ""

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.content.credentials import hash_password
from app.content.provider import get_provider
from app.database import Base, get_db
from app.main import app
from app.models.generated_content import GeneratedContent
from app.models.user import User


class FakeProvider:
    def __init__(self, reply: str = "# Ten Tips for Better Sleep\n\nSleep is important."):
        self.reply = reply
        self.error: Exception | None = None
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(eng)
    yield eng
    Base.metadata.drop_all(eng)
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    s = session_factory()
    yield s
    s.close()


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def make_client(session_factory, provider):
    def _override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_provider] = lambda: provider

    clients: list[TestClient] = []

    def _make() -> TestClient:
        c = TestClient(app)
        clients.append(c)
        return c

    yield _make

    for c in clients:
        c.close()
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def make_user(db_session):
    def _make(email: str = "writer@example.com", password: str = "correct-horse", attempt_used: bool = False) -> User:
        user = User(email=email, password_hash=hash_password(password), attempt_used=attempt_used)
        db_session.add(user)
        db_session.commit()
        return user

    return _make


@pytest.fixture
def add_content(db_session):
    base = datetime(2026, 1, 1, 12, 0, 0)

    def _add(user: User, n: int = 1, content_type: str = "blog", start: int = 0) -> list[GeneratedContent]:
        items = []
        for i in range(start, start + n):
            item = GeneratedContent(
                user_id=user.id,
                title=f"{content_type} #{i}",
                content=f"body {i}",
                content_type=content_type,
                template="Custom",
                prompt=f"prompt {i}",
                created_at=base + timedelta(minutes=i),
                updated_at=base + timedelta(minutes=i),
            )
            db_session.add(item)
            items.append(item)
        db_session.commit()
        return items

    return _add


def register(client: TestClient, email: str = "writer@example.com", password: str = "correct-horse"):
    return client.post("/auth/register", json={"email": email, "password": password})
