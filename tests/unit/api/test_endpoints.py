from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from ragserver.api.main import app
from ragserver.core.dependencies import get_rag_service
from ragserver.core.exceptions import EmbeddingServiceError
from ragserver.embedding.mock import MockEmbeddingClient
from ragserver.services.rag_service import RAGService
from ragserver.vectorstore.memory import InMemoryVectorStore


@pytest.fixture
def api_client(monkeypatch) -> tuple[TestClient, RAGService]:
    """App wired to the mock embedder and in-memory store; no network."""

    embedding_client = MockEmbeddingClient(dimension=16)
    vectorstore = InMemoryVectorStore(auto_create=False)
    service = RAGService(
        embedding_client=embedding_client,
        vectorstore=vectorstore,
        default_top_k=3,
    )
    app.dependency_overrides[get_rag_service] = lambda: service

    monkeypatch.setattr("ragserver.api.main.get_embedding_client_instance", lambda: embedding_client)
    monkeypatch.setattr("ragserver.api.main.get_vectorstore_instance", lambda: vectorstore)
    with TestClient(app) as client:
        yield client, service
    app.dependency_overrides.pop(get_rag_service, None)


def _create_index(client: TestClient, name: str = "papers") -> None:
    response = client.post("/create_index", json={"index_name": name, "dimension": 16})
    assert response.status_code == 201


def test_health(api_client) -> None:
    client, _ = api_client

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.headers["X-Request-ID"]


def test_create_index_returns_created(api_client) -> None:
    client, _ = api_client

    response = client.post(
        "/create_index",
        json={"index_name": "papers", "dimension": 16, "metric": "dotproduct"},
    )

    assert response.status_code == 201
    assert response.json() == {
        "index_name": "papers",
        "dimension": 16,
        "metric": "dotproduct",
        "status": "created",
    }

    duplicate = client.post("/create_index", json={"index_name": "papers", "dimension": 16})
    assert duplicate.status_code == 409
    assert duplicate.json()["error"]["code"] == "IndexAlreadyExistsError"


def test_create_index_rejects_unknown_metric(api_client) -> None:
    client, _ = api_client

    response = client.post(
        "/create_index",
        json={"index_name": "papers", "dimension": 16, "metric": "manhattan"},
    )

    assert response.status_code == 422


def test_embed_then_query(api_client) -> None:
    client, service = api_client
    _create_index(client)

    embedded = client.post(
        "/embed",
        json={
            "query_id": "doc-1",
            "index_name": "papers",
            "content": "Attention is all you need.",
            "author": "Vaswani",
        },
    )
    client.post(
        "/embed",
        json={"query_id": "doc-2", "index_name": "papers", "content": "Something else entirely."},
    )

    assert embedded.status_code == 200
    assert embedded.json() == {"query_id": "doc-1", "status": "success", "records": 1}
    assert service.vectorstore.count("papers") == 2

    response = client.post(
        "/query",
        json={"index_name": "papers", "query_text": "Attention is all you need.", "top_k": 1},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["results"][0]["id"] == "doc-1"
    assert body["results"][0]["metadata"] == {
        "query_id": "doc-1",
        "author": "Vaswani",
        "text": "Attention is all you need.",
    }


def test_query_accepts_get_with_json_body(api_client) -> None:
    client, _ = api_client
    _create_index(client)
    client.post("/embed", json={"query_id": "a", "index_name": "papers", "content": "alpha"})

    response = client.request(
        "GET",
        "/query",
        json={"index_name": "papers", "query_text": "alpha", "score_threshold": 0.99},
    )

    assert response.status_code == 200
    assert [r["id"] for r in response.json()["results"]] == ["a"]


def test_query_unknown_index_is_404(api_client) -> None:
    client, _ = api_client

    response = client.post("/query", json={"index_name": "nope", "query_text": "x"})

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "IndexNotFoundError"


def test_invalid_embed_request_makes_no_outbound_call(api_client) -> None:
    client, service = api_client

    response = client.post("/embed", json={"query_id": "a", "index_name": "papers"})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "ValidationError"
    assert not service.embedding_client.calls


def test_malformed_json_is_rejected(api_client) -> None:
    client, service = api_client

    response = client.post(
        "/query",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422
    assert not service.embedding_client.calls


def test_zero_top_k_is_rejected(api_client) -> None:
    client, _ = api_client

    response = client.post("/query", json={"index_name": "papers", "query_text": "x", "top_k": 0})

    assert response.status_code == 422


def test_create_index_rejects_names_pinecone_would_refuse(api_client) -> None:
    client, service = api_client

    response = client.post("/create_index", json={"index_name": "My_Index", "dimension": 16})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "ValidationError"
    assert service.vectorstore.count("My_Index") == 0


def test_query_embedding_failure_is_502_without_search(api_client) -> None:
    client, _ = api_client
    embedding_client = AsyncMock()
    embedding_client.embed.side_effect = EmbeddingServiceError("Embedding service returned 500")
    vectorstore = AsyncMock()
    app.dependency_overrides[get_rag_service] = lambda: RAGService(
        embedding_client=embedding_client,
        vectorstore=vectorstore,
    )

    response = client.post("/query", json={"index_name": "papers", "query_text": "x"})

    assert response.status_code == 502
    assert response.json()["error"]["code"] == "EmbeddingServiceError"
    embedding_client.embed.assert_awaited_once_with("x")
    vectorstore.query.assert_not_awaited()
