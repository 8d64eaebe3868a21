"""
Pytest configuration for the ragsync test suite.

Points the service at an in-memory SQLite store and an in-process Qdrant
index, and swaps the LLM provider for a deterministic fake so no network
is needed.
"""
import hashlib
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["QDRANT_URL"] = ":memory:"
os.environ["OPENAI_API_KEY"] = "test-key"
os.environ["OPENAI_EMBEDDING_MODEL"] = "thenlper/gte-large"
os.environ["SYNC_ON_STARTUP"] = "true"

import pytest

from ragsync.config.constants import embedding_dimension
from ragsync.core import index
from ragsync.db.documents import Base, SessionLocal, engine
from ragsync.db.vector_store import VectorStore
from ragsync.services.llm_service import llm_service

DIMENSION = embedding_dimension("thenlper/gte-large")


def fake_embedding(text):
    """Bag-of-words vector: texts sharing words end up close together."""
    vector = [0.0] * DIMENSION
    vector[-1] = 0.1
    for word in text.lower().split():
        word = word.strip(".,?!")
        bucket = int(hashlib.md5(word.encode()).hexdigest(), 16) % (DIMENSION - 1)
        vector[bucket] += 1.0
    return vector


class FakeLLM:
    def __init__(self):
        self.embedded = []
        self.chats = []

    async def generate_embedding(self, text):
        self.embedded.append(text)
        return fake_embedding(text)

    async def chat_completion(self, query, context):
        self.chats.append((query, context))
        return f"answer to: {query}"


@pytest.fixture
def fake_llm(monkeypatch):
    fake = FakeLLM()
    monkeypatch.setattr(llm_service, "generate_embedding", fake.generate_embedding)
    monkeypatch.setattr(llm_service, "chat_completion", fake.chat_completion)
    return fake


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def vector_store():
    store = VectorStore(url=":memory:", collection_name="test-collection")
    yield store
    index.reset_collection()


@pytest.fixture
def embed():
    return fake_embedding


@pytest.fixture
def provider(monkeypatch):
    """Real LLMService methods over a stubbed OpenAI client."""
    from types import SimpleNamespace
    from unittest.mock import AsyncMock, MagicMock

    async def create_embedding(model, input):
        return SimpleNamespace(data=[SimpleNamespace(embedding=fake_embedding(input))])

    client = MagicMock()
    client.embeddings.create = AsyncMock(side_effect=create_embedding)
    client.chat.completions.create = AsyncMock(return_value=SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content="stub answer"))]
    ))
    monkeypatch.setattr(llm_service, "client", client)
    return client
