"""compress-snippets function: shrink search results for prompt context."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.api.function_helpers import error_response, read_json_body
from app.core.logging import get_logger
from app.core.snippet_compression import DEFAULT_MAX_TOKENS, compress_snippets

logger = get_logger(__name__)

router = APIRouter()


@router.post("/compress-snippets")
async def compress_snippets_route(request: Request) -> JSONResponse:
    """
    Compress snippets.

    Body: {snippets: [{id, content}], maxTokens?=150}

    Returns:
        {"items": [{id, text}]}
    """
    try:
        body = await read_json_body(request)
        snippets = body.get("snippets")
        if not isinstance(snippets, list):
            raise ValueError("Missing or invalid snippets array")

        items = await compress_snippets(snippets, body.get("maxTokens") or DEFAULT_MAX_TOKENS)
        logger.info(f"Compressed {len(items)} snippets")
        return JSONResponse(content={"items": items})

    except Exception as e:
        logger.exception(f"Compress snippets error: {e}")
        return error_response(e)
