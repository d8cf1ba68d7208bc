from __future__ import annotations

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.errors import TranscriptionFailed, UpstreamFailed
from app.core.settings import Settings, get_settings
from app.db import init_db
from app.dependencies import (
    get_gemini_service,
    get_transcription_service,
)
from app.db.session import get_db_session
from app.main import create_app


class FakeGeminiService:
    def __init__(self, fail: bool = False):
        self.fail = fail
        self.generate_calls: list[dict] = []
        self.chat_calls: list[dict] = []

    async def generate(self, parts, max_output_tokens=None):
        self.generate_calls.append(
            {"parts": list(parts), "max_output_tokens": max_output_tokens}
        )
        if self.fail:
            raise UpstreamFailed()
        return f"echo:{parts[0].text}" if hasattr(parts[0], "text") else "echo:image"

    async def send_chat(self, history, message, max_output_tokens):
        self.chat_calls.append(
            {
                "history": history,
                "message": message,
                "max_output_tokens": max_output_tokens,
            }
        )
        if self.fail:
            raise UpstreamFailed()
        return f"reply:{message}"


class FakeTranscriptionService:
    def __init__(self, transcript: str = "", fail: bool = False):
        self.transcript = transcript
        self.fail = fail
        self.calls: list[bytes] = []

    async def transcribe(self, audio: bytes) -> str:
        self.calls.append(audio)
        if self.fail:
            raise TranscriptionFailed()
        return self.transcript


@pytest.fixture
def settings() -> Settings:
    return Settings(JWT_SECRET="test-secret")


@pytest.fixture
def gemini() -> FakeGeminiService:
    return FakeGeminiService()


@pytest.fixture
def transcriber() -> FakeTranscriptionService:
    return FakeTranscriptionService(transcript="I goes to school")


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    engine.dispose()


@pytest.fixture
def app(settings, gemini, transcriber, session_factory):
    app = create_app()

    def _db_session():
        with session_factory() as db:
            yield db

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_gemini_service] = lambda: gemini
    app.dependency_overrides[get_transcription_service] = lambda: transcriber
    app.dependency_overrides[get_db_session] = _db_session
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
