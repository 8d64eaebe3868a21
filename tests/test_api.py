import pytest
from fastapi.testclient import TestClient

from ragsync.config.settings import settings
from ragsync.core import index
from ragsync.db import documents as document_store
from ragsync.main import app
from ragsync.services.llm_service import llm_service


@pytest.fixture
def client(fake_llm, db_session):
    with TestClient(app) as client:
        yield client


def _create(client, content):
    response = client.post("/documents", json={"content": content})
    assert response.status_code == 201
    return response.json()


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_startup_and_readiness_after_sync(client):
    assert client.get("/health/startup").status_code == 200
    response = client.get("/health/ready")
    assert response.status_code == 200
    assert response.json()["ready"] is True


def test_query_api_validation(client):
    response = client.post("/rag/query", json={})
    assert response.status_code == 422  # Missing query field

    response = client.post("/rag/query", json={"query": "cats", "top_k": 0})
    assert response.status_code == 422


def test_document_crud_is_mirrored_into_index(client, embed):
    doc = _create(client, "Cats purr when they are happy.")
    other = _create(client, "Dogs bark at the mail carrier.")
    collection = index.get_collection()
    assert sorted(collection.get_all()) == sorted([doc["id"], other["id"]])

    response = client.put(f"/documents/{doc['id']}", json={"content": "Owls hunt at night."})
    assert response.status_code == 200
    assert response.json()["content"] == "Owls hunt at night."
    assert collection.count() == 2
    assert collection.query(embed("owls"), 1) == ["Owls hunt at night."]

    response = client.delete(f"/documents/{other['id']}")
    assert response.status_code == 204
    assert collection.get_all() == [doc["id"]]

    listed = client.get("/documents").json()
    assert [d["id"] for d in listed] == [doc["id"]]


def test_unknown_document_returns_404(client):
    assert client.get("/documents/missing").status_code == 404
    assert client.put("/documents/missing", json={"content": "x"}).status_code == 404
    assert client.delete("/documents/missing").status_code == 404


def test_query_returns_answer_and_context(client):
    _create(client, "Cats purr when they are happy.")
    _create(client, "Dogs bark at the mail carrier.")
    _create(client, "Parrots can imitate human speech.")

    response = client.post("/rag/query", json={"query": "Do cats purr?"})

    assert response.status_code == 200
    body = response.json()
    assert body["answer"] == "answer to: Do cats purr?"
    assert len(body["documents"]) == 2  # RAG_TOP_K
    assert body["documents"][0] == "Cats purr when they are happy."

    response = client.post("/rag/query", json={"query": "Do cats purr?", "top_k": 1})
    assert response.json()["documents"] == ["Cats purr when they are happy."]


def test_query_surfaces_provider_failure(client, monkeypatch):
    async def broken(text):
        raise RuntimeError("provider down")

    monkeypatch.setattr(llm_service, "generate_embedding", broken)

    response = client.post("/rag/query", json={"query": "cats"})
    assert response.status_code == 500
    assert "provider down" in response.json()["detail"]


def test_admin_sync_and_stats(client):
    _create(client, "one")
    _create(client, "two")
    # Lose a point so the resync has something to repair
    collection = index.get_collection()
    collection.delete(collection.get_all()[:1])

    response = client.post("/admin/sync")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "documents": 2}

    stats = client.get("/admin/stats").json()
    assert stats["vector_db"]["documents_count"] == 2
    assert stats["vector_db"]["status"] == "green"
    assert stats["llm"]["embedding_model"] == "thenlper/gte-large"


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"


@pytest.fixture
def provider_client(provider, db_session):
    with TestClient(app) as client:
        yield client


def test_blank_content_is_rejected_before_the_store(provider_client):
    response = provider_client.post("/documents", json={"content": "   \n\t"})
    assert response.status_code == 422
    assert provider_client.get("/documents").json() == []

    doc = _create(provider_client, "  Cats purr when they are happy.  ")
    assert doc["content"] == "Cats purr when they are happy."

    response = provider_client.put(f"/documents/{doc['id']}", json={"content": " "})
    assert response.status_code == 422

    response = provider_client.post("/admin/sync")
    assert response.status_code == 200
    assert response.json()["documents"] == 1
    assert index.get_collection().get_all() == [doc["id"]]


@pytest.fixture
def unsynced_client(fake_llm, db_session, monkeypatch):
    monkeypatch.setattr(settings, "SYNC_ON_STARTUP", False)
    with TestClient(app) as client:
        yield client


def test_startup_without_sync_leaves_index_uninitialized(unsynced_client):
    assert unsynced_client.get("/health/startup").status_code == 200

    response = unsynced_client.get("/health/ready")
    assert response.status_code == 503
    assert response.json()["checks"]["vector_db"]["status"] == "unhealthy"

    stats = unsynced_client.get("/admin/stats").json()
    assert stats["vector_db"]["initialized"] is False
    assert stats["vector_db"]["documents_count"] is None


def test_writes_are_refused_until_index_is_initialized(unsynced_client, db_session):
    stored = document_store.create_document(db_session, "Cats purr when they are happy.")

    response = unsynced_client.post("/documents", json={"content": "Dogs bark."})
    assert response.status_code == 503
    response = unsynced_client.put(f"/documents/{stored.id}", json={"content": "Owls hunt."})
    assert response.status_code == 503
    response = unsynced_client.delete(f"/documents/{stored.id}")
    assert response.status_code == 503

    listed = unsynced_client.get("/documents").json()
    assert [(d["id"], d["content"]) for d in listed] == [(stored.id, "Cats purr when they are happy.")]


def test_admin_sync_initializes_index(unsynced_client, db_session):
    stored = document_store.create_document(db_session, "Cats purr when they are happy.")

    response = unsynced_client.post("/admin/sync")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "documents": 1}
    assert index.get_collection().get_all() == [stored.id]
    assert unsynced_client.get("/health/ready").status_code == 200

    assert unsynced_client.post("/documents", json={"content": "Dogs bark."}).status_code == 201
    assert index.get_collection().count() == 2


def test_readiness_reports_missing_api_key(client, monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "")

    response = client.get("/health/ready")
    assert response.status_code == 503
    assert response.json()["checks"]["llm_service"]["status"] == "unhealthy"
