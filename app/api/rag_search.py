"""rag-search function: similarity search over a user's indexed content."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.api.function_helpers import error_response, read_json_body, require_fields
from app.core.logging import get_logger
from app.core.rag_indexing import search_documents
from app.core.schemas_rag import RagMatch, RagSearchRequest

logger = get_logger(__name__)

router = APIRouter()


@router.post("/rag-search")
async def rag_search(request: Request) -> JSONResponse:
    """
    Search indexed documents.

    Body: {userId, query, kinds?, startTs?, endTs?, topK?=8}

    Returns:
        List of matches ordered by score
    """
    try:
        body = await read_json_body(request)
        require_fields(body, "userId", "query")

        matches = await search_documents(RagSearchRequest.model_validate(body))
        content = [RagMatch.model_validate(m).model_dump(mode="json") for m in matches]
        return JSONResponse(content=content)

    except Exception as e:
        logger.exception(f"RAG search error: {e}")
        return error_response(e)
