# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator, Iterator
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["OPENAI_API_KEY"] = ""

from matchai.api.dependencies import get_ai_service_dep
from matchai.core.security import create_access_token, hash_password
from matchai.db.session import Base
from matchai.db.session import get_db as app_get_session
from matchai.main import app as fastapi_app
from matchai.models import Match, User
from matchai.schemas.ai import (
    Compatibility,
    ConversationStarters,
    OptimalTime,
    OptimalTimes,
    ProfileInputs,
    ProfileSuggestion,
    VideoDateTips,
)
from matchai.services.ai import OpenAIMatchmakingAI

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct horse battery staple"
# Argon2id is deliberately slow; hash once for every fixture user.
TEST_PASSWORD_HASH = hash_password(TEST_PASSWORD)


class FakeMatchmakingAI:
    """Deterministic stand-in for the LLM collaborator."""

    def __init__(self, score: int = 87) -> None:
        self.score = score
        self.calls: list[tuple[str, tuple[Any, ...]]] = []

    async def generate_profile(self, inputs: ProfileInputs) -> ProfileSuggestion:
        self.calls.append(("generate_profile", (inputs,)))
        return ProfileSuggestion(bio="Trail runner who bakes bread.", interests=inputs.interests)

    async def generate_conversation_starters(
        self, my_interests: list[str], their_interests: list[str], their_name: str
    ) -> ConversationStarters:
        self.calls.append(("generate_conversation_starters", (my_interests, their_interests, their_name)))
        return ConversationStarters(starters=[f"Hi {their_name}!"])

    async def generate_video_date_tips(self, user: User, other: User) -> VideoDateTips:
        self.calls.append(("generate_video_date_tips", (user.id, other.id)))
        return VideoDateTips(tips=[f"Ask {other.profile_name} about hiking"])

    async def suggest_optimal_times(self) -> OptimalTimes:
        self.calls.append(("suggest_optimal_times", ()))
        return OptimalTimes(times=[OptimalTime(day="Monday", time="8:00 PM", confidence=0.5)])

    async def score_compatibility(self, user: User, other: User) -> Compatibility:
        self.calls.append(("score_compatibility", (user.id, other.id)))
        return Compatibility(score=self.score, reasons=["Both love the outdoors"])


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture(autouse=True)
def offline_ai(app: FastAPI) -> Iterator[OpenAIMatchmakingAI]:
    """Serve the fallback payloads unless a test installs ``fake_ai``."""
    service = OpenAIMatchmakingAI(api_key=None)
    app.dependency_overrides[get_ai_service_dep] = lambda: service
    try:
        yield service
    finally:
        app.dependency_overrides.pop(get_ai_service_dep, None)


@pytest.fixture()
def fake_ai(app: FastAPI, offline_ai: OpenAIMatchmakingAI) -> FakeMatchmakingAI:
    service = FakeMatchmakingAI()
    app.dependency_overrides[get_ai_service_dep] = lambda: service
    return service


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


def make_user(db_session: Session, username: str, **overrides: Any) -> User:
    fields: dict[str, Any] = {
        "username": username,
        "password_hash": TEST_PASSWORD_HASH,
        "profile_name": username.title(),
        "age": 29,
        "gender": "female",
        "location": "Lisbon",
        "bio": None,
        "looking_for": "long-term",
        "interests": ["hiking", "jazz"],
    }
    fields.update(overrides)
    user = User(**fields)
    db_session.add(user)
    db_session.flush()
    db_session.refresh(user)
    return user


def auth_headers(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def test_user(db_session: Session) -> User:
    """Create and return a persisted test user."""
    return make_user(db_session, "alice")


@pytest.fixture()
def other_user(db_session: Session) -> User:
    """Create and return a second persisted user."""
    return make_user(
        db_session,
        "bruno",
        gender="male",
        age=31,
        interests=["jazz", "cooking"],
    )


@pytest.fixture()
def third_user(db_session: Session) -> User:
    """A user with no relation to the other fixtures."""
    return make_user(db_session, "chiara", location="Porto", interests=["surfing"])


@pytest.fixture()
def auth_token(test_user: User) -> dict[str, str]:
    """Return authorization headers for the primary test user."""
    return auth_headers(test_user)


@pytest.fixture()
def other_auth_token(other_user: User) -> dict[str, str]:
    """Return authorization headers for the secondary test user."""
    return auth_headers(other_user)


@pytest.fixture()
def third_auth_token(third_user: User) -> dict[str, str]:
    return auth_headers(third_user)


@pytest.fixture()
def test_match(db_session: Session, test_user: User, other_user: User) -> Match:
    """A pending match initiated by ``test_user`` towards ``other_user``."""
    match = Match(user_id_1=test_user.id, user_id_2=other_user.id, status="pending")
    db_session.add(match)
    db_session.flush()
    db_session.refresh(match)
    return match


@pytest.fixture()
def user_factory(db_session: Session):
    """Create extra users: ``user_factory("dana", age=40)``."""

    def _create(username: str, **overrides: Any) -> User:
        return make_user(db_session, username, **overrides)

    return _create


@pytest.fixture()
def headers_for():
    """Build bearer headers for any persisted user."""
    return auth_headers


@pytest.fixture()
def test_password() -> str:
    """Plain-text password shared by every fixture user."""
    return TEST_PASSWORD
