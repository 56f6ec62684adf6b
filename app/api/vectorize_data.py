"""vectorize-data function: bulk (re)indexing of contacts and front-end records."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.api.function_helpers import FunctionError, error_response, read_json_body, require_fields
from app.core.logging import get_logger
from app.core.rag_indexing import vectorize_contacts, vectorize_records

logger = get_logger(__name__)

router = APIRouter()


@router.post("/vectorize-data")
async def vectorize_data(request: Request) -> JSONResponse:
    """
    Vectorize a user's data.

    Body:
        {userId, action: "vectorize_contacts"}
        {userId, action: "vectorize_data", dataType, data: [...]}

    Returns:
        {"type", "processed", "total"}
    """
    try:
        body = await read_json_body(request)
        action = body.get("action")

        if action == "vectorize_contacts":
            require_fields(body, "userId")
            result = await vectorize_contacts(body["userId"])
            return JSONResponse(content=result)

        if action == "vectorize_data" and isinstance(body.get("data"), list) and body.get("dataType"):
            require_fields(body, "userId")
            logger.info(f"Vectorizing {body['dataType']} data with {len(body['data'])} items")
            result = await vectorize_records(body["userId"], body["dataType"], body["data"])
            return JSONResponse(content=result)

        raise FunctionError("Invalid action", status_code=400)

    except FunctionError as e:
        return error_response(e)
    except Exception as e:
        logger.exception(f"Vectorization error: {e}")
        return error_response(e)
