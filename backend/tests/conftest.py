import asyncio
import json
from typing import Any, List

import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models import FakeListChatModel
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from flavorwheel.config import Settings
from flavorwheel.database import get_db, init_db
from flavorwheel.llm import ModelConfig, ModelFactory, ProviderCredentials
from flavorwheel.main import app
from flavorwheel.services.ai.base import get_model_factory


class SlowChatModel(FakeListChatModel):
    """Fake chat model that takes ``delay`` seconds to answer."""

    delay: float = 1.0

    async def _agenerate(self, messages, stop=None, run_manager=None, **kwargs):
        await asyncio.sleep(self.delay)
        return await super()._agenerate(messages, stop=stop, run_manager=run_manager, **kwargs)


class FailingChatModel(FakeListChatModel):
    """Fake chat model whose provider call always fails."""

    async def _agenerate(self, messages, stop=None, run_manager=None, **kwargs):
        raise RuntimeError("503 Service Unavailable")


class FakeModelFactory(ModelFactory):
    """Model factory handing out one prepared chat model."""

    def __init__(self, llm):
        super().__init__(
            ProviderCredentials(
                anthropic_api_key="test-key",
                openai_api_key="test-key",
                google_api_key="test-key",
                openrouter_api_key="test-key",
            )
        )
        self.llm = llm
        self.requested: List[ModelConfig] = []

    def create_model(self, config: ModelConfig):
        self.requested.append(config)
        return self.llm


def fake_llm(*responses: str) -> FakeListChatModel:
    return FakeListChatModel(responses=list(responses))


@pytest.fixture
def ai_settings() -> Settings:
    return Settings(
        ai_extraction_enabled=True,
        ai_extraction_timeout_seconds=5,
        ai_taxonomy_timeout_seconds=5,
        llm_provider="anthropic",
        llm_model="claude-3-haiku-20240307",
    )


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def _make_client(session_factory, factory: ModelFactory) -> TestClient:
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_model_factory] = lambda: factory
    return TestClient(app)


@pytest.fixture
def client(session_factory):
    """API client with no AI credentials: extraction uses keywords."""
    yield _make_client(session_factory, ModelFactory(ProviderCredentials()))
    app.dependency_overrides.clear()


@pytest.fixture
def make_ai_client(session_factory):
    """Build an API client whose model factory returns ``llm``."""

    def _make(llm):
        return _make_client(session_factory, FakeModelFactory(llm))

    yield _make
    app.dependency_overrides.clear()


def run(coro) -> Any:
    return asyncio.run(coro)


def descriptor_json(*items: dict) -> str:
    return json.dumps({"descriptors": list(items)})
