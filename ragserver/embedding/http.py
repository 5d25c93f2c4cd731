"""
HTTP Embedding Client

Talks to a remote embedding inference server: `POST /embed` with
`{"input": text}` and a JSON array of floats as the response body.
"""

from __future__ import annotations

from typing import Any

import httpx

from ragserver.core.exceptions import EmbeddingServiceError, EmbeddingTimeoutError
from ragserver.core.logging import get_logger, measure_latency
from ragserver.core.retry import RetryPolicy
from ragserver.embedding.protocol import EmbeddingClientProtocol

logger = get_logger(__name__)

EMBED_PATH = "/embed"


class HTTPEmbeddingClient(EmbeddingClientProtocol):
    """httpx-based client for the embedding inference service."""

    def __init__(
        self,
        *,
        base_url: str,
        timeout: float = 30.0,
        retry_policy: RetryPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_policy = retry_policy or RetryPolicy.no_retry()
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )
        logger.info(
            "http_embedding_client_initialized",
            base_url=self.base_url,
            timeout=timeout,
            max_attempts=self.retry_policy.max_attempts,
        )

    async def embed(self, text: str) -> list[float]:
        return await self.retry_policy.run("embedding.embed", lambda: self._embed_once(text))

    @measure_latency("embedding.embed")
    async def _embed_once(self, text: str) -> list[float]:
        try:
            resp = await self._client.post(EMBED_PATH, json={"input": text})
        except httpx.TimeoutException as exc:
            logger.error("embedding_request_timeout", base_url=self.base_url, timeout=self.timeout)
            raise EmbeddingTimeoutError(
                f"Embedding service timed out after {self.timeout}s"
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("embedding_request_failed", base_url=self.base_url, error=str(exc))
            raise EmbeddingServiceError(
                f"Embedding service request failed: {exc}",
                transient=True,
            ) from exc

        if resp.status_code >= 400:
            logger.error(
                "embedding_response_error",
                status_code=resp.status_code,
                body=resp.text[:500],
            )
            raise EmbeddingServiceError(
                f"Embedding service returned {resp.status_code}",
                transient=resp.status_code >= 500,
                details={"status_code": resp.status_code, "body": resp.text[:500]},
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise EmbeddingServiceError("Embedding service returned a non-JSON body") from exc

        vector = self._parse_vector(data)
        logger.debug("text_embedded", text_length=len(text), embedding_dim=len(vector))
        return vector

    @staticmethod
    def _parse_vector(data: Any) -> list[float]:
        """Accept `[f, ...]`, or a single-item batch `[[f, ...]]`."""

        if isinstance(data, list) and len(data) == 1 and isinstance(data[0], list):
            data = data[0]

        if not isinstance(data, list) or not data:
            raise EmbeddingServiceError(
                "Embedding service returned a malformed body: expected a non-empty array of numbers"
            )

        vector: list[float] = []
        for value in data:
            # bool is an int subclass but never a valid component
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise EmbeddingServiceError(
                    f"Embedding service returned a non-numeric component: {value!r}"
                )
            vector.append(float(value))
        return vector

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HTTPEmbeddingClient":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: ANN001
        await self._client.__aexit__(exc_type, exc, tb)
