"""Pytest configuration and fixtures for tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from google.genai import errors as genai_errors
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db, get_session_factory
from app.dependencies import get_owner_llm_provider
from app.llm.base import ChatMessage, LLMModel, LLMProvider, ModelCandidate

OWNER = "agent-1"


def unavailable(model: str = "model") -> genai_errors.ClientError:
    """The error Gemini raises for an unknown model id."""
    return genai_errors.ClientError(
        404,
        {"error": {"code": 404, "message": f"models/{model} is not found", "status": "NOT_FOUND"}},
    )


def quota_exceeded() -> genai_errors.ClientError:
    return genai_errors.ClientError(
        429,
        {"error": {"code": 429, "message": "Quota exceeded", "status": "RESOURCE_EXHAUSTED"}},
    )


class FakeModel(LLMModel):
    def __init__(
        self,
        provider: FakeProvider,
        candidate: ModelCandidate,
        system_instruction: str | None,
    ) -> None:
        self.provider = provider
        self.candidate = candidate
        self.system_instruction = system_instruction

    async def _respond(self, kind: str, payload) -> str:
        self.provider.calls.append(
            {
                "model": self.candidate.name,
                "kind": kind,
                "payload": payload,
                "system_instruction": self.system_instruction,
            }
        )
        outcome = self.provider.outcomes.get(self.candidate.name, self.provider.default)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    async def generate(self, prompt: str) -> str:
        return await self._respond("generate", prompt)

    async def generate_with_audio(self, audio: bytes, mime_type: str, instruction: str) -> str:
        return await self._respond("audio", (audio, mime_type, instruction))

    async def chat(self, history: list[ChatMessage], message: str) -> str:
        return await self._respond("chat", (history, message))


class FakeProvider(LLMProvider):
    """Scripted provider: ``outcomes`` maps model name to a reply or an error."""

    def __init__(
        self,
        names: tuple[str, ...] = ("model-a", "model-b", "model-c"),
        outcomes: dict | None = None,
        default: str | BaseException = "",
        available: list[str] | None = None,
        list_error: BaseException | None = None,
    ) -> None:
        self._candidates = [ModelCandidate(name=n, api_version="v1beta") for n in names]
        self.outcomes = dict(outcomes or {})
        self.default = default
        self.available = available or []
        self.list_error = list_error
        self.calls: list[dict] = []
        self.list_calls = 0

    @property
    def provider_name(self) -> str:
        return "fake"

    @property
    def candidates(self) -> list[ModelCandidate]:
        return list(self._candidates)

    @property
    def error_types(self) -> tuple[type[BaseException], ...]:
        return (genai_errors.APIError,)

    def open_model(self, candidate: ModelCandidate, system_instruction: str | None = None) -> FakeModel:
        return FakeModel(self, candidate, system_instruction)

    def is_model_unavailable(self, error: BaseException) -> bool:
        return isinstance(error, genai_errors.ClientError) and error.code in (400, 404)

    async def list_available_models(self) -> list[str]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return list(self.available)


@pytest.fixture
def engine():
    """Create an in-memory SQLite database shared across threads."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    # Import all models so they're registered
    import app.models  # noqa: F401

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine) -> Session:
    """Provide a fresh database session for each test."""
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def fake_llm() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def client(db: Session, fake_llm: FakeProvider):
    """API client bound to the test database and the scripted provider."""
    from app.main import app

    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_session_factory] = lambda: sessionmaker(bind=db.get_bind())
    app.dependency_overrides[get_owner_llm_provider] = lambda: fake_llm
    try:
        yield TestClient(app, headers={"X-User-Id": OWNER})
    finally:
        app.dependency_overrides.clear()
