# tests/conftest.py
"""
Pytest configuration and shared fixtures.
"""

import asyncio
import json
import os

import pytest

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./unused.db")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from app.db.init_db import init_db  # noqa: E402
from app.db.session import build_engine, build_session_factory  # noqa: E402
from app.dependencies import get_db, get_llm_service, get_model_config, get_session_factory  # noqa: E402
from app.main import app  # noqa: E402
from app.schemas.model import ModelConfig  # noqa: E402
from app.services.llm.base import BaseLLMService, GenerationError  # noqa: E402
from app.services.transcript import TranscriptService  # noqa: E402


class FakeLLMService(BaseLLMService):
    """Scripted gateway: yields preset fragments, optionally failing after ``fail_after`` of them."""

    def __init__(self, fragments=(), fail_after=None, error="model exploded"):
        self.fragments = list(fragments)
        self.fail_after = fail_after
        self.error = error
        self.prompts = []

    async def generate_stream(self, prompt, config):
        self.validate(prompt, config)
        self.prompts.append(prompt)
        for index, fragment in enumerate(self.fragments):
            if index == self.fail_after:
                raise GenerationError(self.error)
            yield fragment
        if self.fail_after is not None and self.fail_after >= len(self.fragments):
            raise GenerationError(self.error)


def parse_events(body: str) -> list:
    """Split an event-stream body into decoded payloads ('[DONE]' kept as a string)."""
    events = []
    for block in body.split("\n\n"):
        if not block:
            continue
        assert block.startswith("data: "), block
        data = block[len("data: "):]
        events.append(data if data == "[DONE]" else json.loads(data))
    return events


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def engine(tmp_path):
    """Throwaway SQLite database with the schema created."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'chats.db'}", poolclass=NullPool)
    asyncio.run(init_db(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
def store(session_factory):
    """Call a TranscriptService method synchronously, each call in its own session."""
    def call(method, *args):
        async def run():
            async with session_factory() as db:
                return await getattr(TranscriptService(db), method)(*args)
        return asyncio.run(run())
    return call


# =============================================================================
# Model Fixtures
# =============================================================================

@pytest.fixture
def model_config():
    return ModelConfig(model="test-model", baseUrl="http://llm.test", apiKey="test-key")


@pytest.fixture
def fake_llm():
    return FakeLLMService(["Hello", " there", "!"])


# =============================================================================
# Server Fixtures
# =============================================================================

@pytest.fixture
def client(session_factory, fake_llm, model_config):
    """FastAPI test client wired to the throwaway database and the fake gateway."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_llm_service] = lambda: fake_llm
    app.dependency_overrides[get_model_config] = lambda: model_config

    yield TestClient(app)

    app.dependency_overrides.clear()
