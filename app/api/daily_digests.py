"""daily-digests function: nightly area digests and stable facts."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.api.function_helpers import error_response
from app.core.daily_digests import run_daily_digests
from app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/daily-digests")
async def daily_digests() -> JSONResponse:
    """
    Digest yesterday's documents for every active user.

    Returns:
        {"success": true, "digestsCreated", "factsExtracted", "usersProcessed"},
        or 500 {"error": ..., "success": false}
    """
    try:
        return JSONResponse(content=await run_daily_digests())
    except Exception as e:
        logger.exception(f"Daily digest error: {e}")
        return error_response(e, success=False)
