import pytest

from fastapi import FastAPI, Query
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from ragserver.api.error_handlers import DEFAULT_ERROR_CODE, register_exception_handlers, resolve_status
from ragserver.api.request_context import RequestContextMiddleware
from ragserver.core.exceptions import (
    ConfigurationError,
    DimensionMismatchError,
    EmbeddingServiceError,
    EmbeddingTimeoutError,
    IndexAlreadyExistsError,
    IndexNotFoundError,
    ValidationError,
    VectorStoreError,
    VectorStoreTimeoutError,
)


@pytest.fixture
def app() -> FastAPI:
    fastapi_app = FastAPI()
    fastapi_app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(fastapi_app)

    @fastapi_app.get("/missing-index")
    async def missing_index_endpoint():
        raise IndexNotFoundError("papers")

    @fastapi_app.get("/embedding-down")
    async def embedding_down_endpoint():
        raise EmbeddingServiceError("Embedding service returned 500")

    @fastapi_app.get("/auth")
    async def auth_endpoint():
        raise VectorStoreError("bad key", code="VectorStoreAuthError")

    @fastapi_app.get("/boom")
    async def boom_endpoint():
        raise RuntimeError("force fallback")

    @fastapi_app.get("/query-validation")
    async def query_validation_endpoint(q: str = Query(..., min_length=1)):
        return {"q": q}

    class Item(BaseModel):
        name: str

    @fastapi_app.post("/body-validation")
    async def body_validation_endpoint(item: Item):
        return item

    return fastapi_app


@pytest.mark.parametrize(
    ("exc", "expected"),
    [
        (ValidationError("bad"), (400, "ValidationError")),
        (IndexNotFoundError("idx"), (404, "IndexNotFoundError")),
        (IndexAlreadyExistsError("idx"), (409, "IndexAlreadyExistsError")),
        (EmbeddingServiceError("down"), (502, "EmbeddingServiceError")),
        (EmbeddingTimeoutError("slow"), (504, "EmbeddingTimeoutError")),
        (VectorStoreTimeoutError("slow"), (504, "VectorStoreTimeoutError")),
        (DimensionMismatchError("3 != 4"), (503, "DimensionMismatchError")),
        (VectorStoreError("down"), (503, "VectorStoreError")),
        (ConfigurationError("no key"), (500, "ConfigurationError")),
        (RuntimeError("?"), (500, DEFAULT_ERROR_CODE)),
    ],
)
def test_resolve_status(exc, expected) -> None:
    assert resolve_status(exc) == expected


@pytest.mark.asyncio
async def test_index_not_found_is_404_not_5xx(app: FastAPI) -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/missing-index", headers={"X-Request-ID": "req-1"})

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "IndexNotFoundError"
    assert body["error"]["details"] == {"index_name": "papers"}
    assert body["meta"]["requestId"] == "req-1"
    assert response.headers["X-Request-ID"] == "req-1"


@pytest.mark.asyncio
async def test_embedding_failure_is_bad_gateway(app: FastAPI) -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/embedding-down")

    assert response.status_code == 502
    assert response.json()["error"]["message"] == "Embedding service returned 500"


@pytest.mark.asyncio
async def test_store_error_keeps_own_code(app: FastAPI) -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/auth")

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "VectorStoreAuthError"


@pytest.mark.asyncio
async def test_unexpected_error_envelope(app: FastAPI) -> None:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/boom")

    assert response.status_code == 500
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == DEFAULT_ERROR_CODE
    assert "force fallback" not in body["error"]["message"]


@pytest.mark.asyncio
async def test_unknown_route_uses_error_body(app: FastAPI) -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/nowhere")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "HTTP.404"


@pytest.mark.asyncio
async def test_query_validation_error_envelope(app: FastAPI) -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/query-validation", params={"q": ""})

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == "ValidationError"
    assert "String should have at least" in body["error"]["message"]
    assert body["error"].get("details")


@pytest.mark.asyncio
async def test_body_validation_error_envelope(app: FastAPI) -> None:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/body-validation", json={})

    assert response.status_code == 422
    body = response.json()
    assert body["error"]["code"] == "ValidationError"
    assert "Field required" in body["error"]["message"]
    assert "meta" in body
