"""
Shared OpenAPI response declarations

Used in the `responses=` argument of route decorators so Swagger shows
the common error body for each status a route can return.
"""

from typing import Any, Dict

from ragserver.schemas.response import ErrorResponse


ERROR_EXAMPLES: Dict[int, tuple[str, str, str]] = {
    400: ("Invalid request", "ValidationError", "content has no text to embed"),
    404: ("Index not found", "IndexNotFoundError", "Index not found: papers"),
    409: ("Index already exists", "IndexAlreadyExistsError", "Index already exists: papers"),
    422: ("Field validation failed", "ValidationError", "body.content: String should have at least 1 character"),
    500: ("Internal server error", "INTERNAL.UNEXPECTED", "Unexpected server error."),
    502: ("Embedding service failure", "EmbeddingServiceError", "Embedding service returned 500"),
    503: ("Vector store failure", "VectorStoreError", "Pinecone query on 'papers' failed with status 500"),
    504: ("Upstream timeout", "EmbeddingTimeoutError", "Embedding service timed out after 30.0s"),
}


def error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Build the `responses` mapping for the given error status codes

    Args:
        status_codes: HTTP status codes the route may answer with

    Returns:
        Mapping passed to FastAPI's `responses` parameter
    """
    responses: Dict[int, Dict[str, Any]] = {}
    for status_code in status_codes:
        description, code, message = ERROR_EXAMPLES.get(
            status_code, ("Error", f"HTTP.{status_code}", "Error")
        )
        responses[status_code] = {
            "model": ErrorResponse,
            "description": description,
            "content": {
                "application/json": {
                    "example": {
                        "success": False,
                        "error": {
                            "code": code,
                            "message": message,
                            "details": None,
                            "hint": None,
                        },
                        "meta": {
                            "requestId": "req-uuid-xxx",
                            "timestamp": "2024-12-16T10:35:00Z",
                        },
                    }
                }
            },
        }
    return responses
