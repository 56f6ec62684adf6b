"""rag-index function: embed user content and store it for retrieval."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.api.function_helpers import error_response, read_json_body, require_fields
from app.core.logging import get_logger
from app.core.rag_indexing import index_document
from app.core.schemas_rag import RagIndexRequest

logger = get_logger(__name__)

router = APIRouter()


@router.post("/rag-index")
async def rag_index(request: Request) -> JSONResponse:
    """
    Index one document.

    Body: {userId, kind, refId?, title?, content, metadata?}

    Returns:
        {"ok": true, "id": <rag_docs id>}, or 500 {"error": ...}
    """
    try:
        body = await read_json_body(request)
        require_fields(body, "userId", "kind", "content")

        doc_id = await index_document(RagIndexRequest.model_validate(body))
        return JSONResponse(content={"ok": True, "id": doc_id})

    except Exception as e:
        logger.exception(f"RAG index error: {e}")
        return error_response(e)
