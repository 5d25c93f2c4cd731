"""
Query API Routes
"""

from fastapi import APIRouter, Depends

from ragserver.api.swagger_responses import error_responses
from ragserver.core.dependencies import get_rag_service
from ragserver.schemas.query import QueryRequest, QueryResponse
from ragserver.services.rag_service import RAGService


router = APIRouter(tags=["query"])


@router.api_route(
    "/query",
    methods=["POST", "GET"],
    response_model=QueryResponse,
    summary="Search an index for text similar to query_text",
    responses=error_responses(400, 404, 422, 500, 502, 503, 504),
)
async def query(
    data: QueryRequest,
    service: RAGService = Depends(get_rag_service),
) -> QueryResponse:
    """
    Ranked similarity search.

    **Request:**
    ```json
    {"index_name": "papers", "query_text": "transformers", "top_k": 3, "score_threshold": 0.5}
    ```

    **Response (200):**
    ```json
    {
      "index_name": "papers",
      "results": [
        {"id": "doc-42", "score": 0.91, "metadata": {"text": "...", "author": "Vaswani et al."}}
      ],
      "count": 1
    }
    ```

    Results are ordered by descending score, hold at most `top_k` entries
    (default from configuration) and none scores below `score_threshold`.
    An unknown index answers 404.
    """
    return await service.query(data)
