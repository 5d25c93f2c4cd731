"""
Embed API Routes
"""

from fastapi import APIRouter, Depends, status

from ragserver.api.swagger_responses import error_responses
from ragserver.core.dependencies import get_rag_service
from ragserver.schemas.embed import EmbedRequest, EmbedResponse
from ragserver.services.rag_service import RAGService


router = APIRouter(tags=["embed"])


@router.post(
    "/embed",
    response_model=EmbedResponse,
    status_code=status.HTTP_200_OK,
    summary="Embed a text chunk and store it in an index",
    responses=error_responses(400, 404, 422, 500, 502, 503, 504),
)
async def embed(
    data: EmbedRequest,
    service: RAGService = Depends(get_rag_service),
) -> EmbedResponse:
    """
    Embed `content` and upsert it into `index_name` under `query_id`.

    **Request:**
    ```json
    {
      "query_id": "doc-42",
      "index_name": "papers",
      "content": "Attention is all you need.",
      "author": "Vaswani et al.",
      "page": 1
    }
    ```

    **Response (200):**
    ```json
    {"query_id": "doc-42", "status": "success", "records": 1}
    ```

    Re-sending the same `query_id` overwrites the stored record.
    """
    return await service.embed(data)
