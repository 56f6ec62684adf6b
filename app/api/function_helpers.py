"""Shared helpers for the /functions/v1 routes.

Function routes keep the wire contract of serverless handlers:
camelCase JSON bodies in, and {"error": message} bodies out on failure.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


class FunctionError(Exception):
    """An error the function reports with a specific HTTP status."""

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


async def read_json_body(request: Request) -> dict[str, Any]:
    """Decode the request body as a JSON object."""
    body = await request.json()
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body


def require_fields(body: dict[str, Any], *fields: str) -> None:
    """Raise ValueError naming all required fields if any of them is empty."""
    if any(not body.get(field) for field in fields):
        raise ValueError(f"Missing required fields: {', '.join(fields)}")


def error_response(error: Exception | str, status_code: int = 500, **extra: Any) -> JSONResponse:
    """JSON error body in the {"error": message} shape."""
    if isinstance(error, FunctionError):
        message, status_code = error.message, error.status_code
    else:
        message = str(error)
    return JSONResponse(content={"error": message, **extra}, status_code=status_code)
