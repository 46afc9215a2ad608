"""Shared test fixtures and utilities."""

from datetime import datetime, timedelta
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from analytics.config import CloudflareConfig
from analytics.vectorize import VectorMatch, VectorRecord
from api.db.database import Base
from api.dependencies import get_ai_client, get_db, get_vector_index
from api.feedback.models import Feedback
from api.main import app

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


class FakeAI:
    """Stands in for WorkersAIClient and records every call."""

    def __init__(self, summary: str = "  Login crashes, slow sync and billing errors.  \n"):
        self.summary = summary
        self.embedded: list[str] = []
        self.prompts: list[tuple[str, int]] = []

    async def embed(self, text: str) -> list[float]:
        self.embedded.append(text)
        return [float(len(text)), 0.5, 0.25]

    async def generate(self, prompt: str, max_tokens: int) -> str:
        self.prompts.append((prompt, max_tokens))
        return self.summary


class FakeIndex:
    """Stands in for VectorizeClient. Returns preset matches and records upserts."""

    def __init__(self, matches: Optional[list[VectorMatch]] = None):
        self.matches = matches or []
        self.queries: list[tuple[list[float], int]] = []
        self.upserts: list[list[VectorRecord]] = []

    async def query(self, vector: list[float], top_k: int) -> list[VectorMatch]:
        self.queries.append((vector, top_k))
        return self.matches[:top_k]

    async def upsert(self, records: list[VectorRecord]) -> str:
        self.upserts.append(list(records))
        return f"mutation-{len(self.upserts)}"


@pytest.fixture
def cloudflare_config() -> CloudflareConfig:
    """Client configuration pointing at a fake account."""
    return CloudflareConfig(
        account_id="test-account",
        api_token="test-token",
        base_url="https://api.example.test/client/v4/",
    )


@pytest.fixture
def db_session() -> Session:
    """In-memory SQLite session with the feedback table created."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    session = TestingSession()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def make_feedback(db_session: Session) -> Callable[..., Feedback]:
    """Factory that inserts feedback records.

    Each call without an explicit ``created_at`` is one minute newer than
    the previous one, so insertion order equals creation order.
    """
    counter = {"n": 0}

    def _make(
        content: str = "The app crashes when I open settings",
        source: str = "support",
        sentiment: Optional[str] = None,
        category: Optional[str] = None,
        id: Optional[str] = None,
        created_at: Optional[datetime] = None,
    ) -> Feedback:
        counter["n"] += 1
        feedback = Feedback(
            id=id or f"fb-{counter['n']:03d}",
            source=source,
            content=content,
            sentiment=sentiment,
            category=category,
            created_at=created_at or BASE_TIME + timedelta(minutes=counter["n"]),
            analyzed_at=BASE_TIME if sentiment or category else None,
        )
        db_session.add(feedback)
        db_session.commit()
        return feedback

    return _make


@pytest.fixture
def fake_ai() -> FakeAI:
    return FakeAI()


@pytest.fixture
def fake_index() -> FakeIndex:
    return FakeIndex()


@pytest.fixture
def client(db_session: Session, fake_ai: FakeAI, fake_index: FakeIndex) -> TestClient:
    """TestClient wired to the in-memory store and fake AI collaborators."""
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_ai_client] = lambda: fake_ai
    app.dependency_overrides[get_vector_index] = lambda: fake_index

    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()
