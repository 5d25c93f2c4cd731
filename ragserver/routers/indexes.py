"""
Index management API Routes
"""

from fastapi import APIRouter, Depends, status

from ragserver.api.swagger_responses import error_responses
from ragserver.core.dependencies import get_rag_service
from ragserver.schemas.index import CreateIndexRequest, CreateIndexResponse
from ragserver.services.rag_service import RAGService


router = APIRouter(tags=["indexes"])


@router.post(
    "/create_index",
    response_model=CreateIndexResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a serverless index",
    responses=error_responses(409, 422, 500, 503, 504),
)
async def create_index(
    data: CreateIndexRequest,
    service: RAGService = Depends(get_rag_service),
) -> CreateIndexResponse:
    """
    Create `index_name` with the given dimension and metric
    (cosine, euclidean or dotproduct; cosine by default).
    The call returns without waiting for the index to become ready.
    """
    return await service.create_index(data)
