"""Caller-side gateway to the LifeOS function routes.

Resolves the signed-in user from the Supabase session, attaches their id to
the payload and POSTs it to the named function. Errors returned by a
function are logged and raised as EdgeFunctionError.
"""

import asyncio
import logging
from typing import Any

import httpx

from app.core.config import get_settings
from app.core.logging import get_logger, log_with_context
from app.db.supabase_client import get_session_access_token, get_session_user_id

logger = get_logger(__name__)


class NotAuthenticatedError(Exception):
    """No user session is available."""


class EdgeFunctionError(Exception):
    """A function responded with an error status."""

    def __init__(self, function_name: str, status_code: int, message: str):
        super().__init__(f"{function_name} failed ({status_code}): {message}")
        self.function_name = function_name
        self.status_code = status_code
        self.message = message


async def get_current_user_id() -> str | None:
    """Id of the signed-in user, or None when there is no session or no anon key."""
    try:
        return await asyncio.to_thread(get_session_user_id)
    except RuntimeError as e:
        logger.warning(f"No session client available: {e}")
        return None


def _build_headers() -> dict[str, str]:
    settings = get_settings()
    headers: dict[str, str] = {}
    if settings.SUPABASE_ANON_KEY:
        headers["apikey"] = settings.SUPABASE_ANON_KEY
        token = get_session_access_token() or settings.SUPABASE_ANON_KEY
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("error"):
        return str(body["error"])
    return response.text


async def invoke_function(function_name: str, body: dict[str, Any]) -> Any:
    """
    POST a JSON body to a function and return its decoded JSON response.

    Raises:
        EdgeFunctionError: If the function returns an error status
        httpx.HTTPError: On transport failures
    """
    settings = get_settings()
    url = f"{settings.functions_base_url}/{function_name}"
    headers = await asyncio.to_thread(_build_headers)

    async with httpx.AsyncClient(timeout=settings.FUNCTIONS_TIMEOUT) as client:
        response = await client.post(url, json=body, headers=headers)

    if response.is_error:
        message = _error_message(response)
        log_with_context(
            logger,
            logging.ERROR,
            f"Error calling {function_name}",
            function_name=function_name,
            status=response.status_code,
            error=message,
        )
        raise EdgeFunctionError(function_name, response.status_code, message)

    return response.json()


async def call_edge_function(function_name: str, payload: dict[str, Any]) -> Any:
    """
    Call a function on behalf of the signed-in user.

    The payload is sent as {"userId": <current user>, **payload}.

    Raises:
        NotAuthenticatedError: If nobody is signed in
        EdgeFunctionError: If the function returns an error status
    """
    user_id = await get_current_user_id()
    if not user_id:
        raise NotAuthenticatedError("User not authenticated")

    return await invoke_function(function_name, {"userId": user_id, **payload})
