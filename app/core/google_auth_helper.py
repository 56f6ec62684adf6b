"""Server-side Google OAuth token exchange."""

import logging

import httpx

from app.core.config import get_settings

logger = logging.getLogger(__name__)

GOOGLE_TOKEN_URL = "https://oauth2.googleapis.com/token"


async def exchange_refresh_for_access(refresh_token: str | None = None) -> str:
    """
    Exchange a refresh token for a fresh Google access token.

    Args:
        refresh_token: Refresh token to exchange; defaults to the configured
            GOOGLE_REFRESH_TOKEN of the calendar owner

    Returns:
        Valid Google access token

    Raises:
        ValueError: If Google OAuth is not configured
        httpx.HTTPStatusError: If token exchange fails
    """
    settings = get_settings()

    if not settings.GOOGLE_CLIENT_ID or not settings.GOOGLE_CLIENT_SECRET:
        raise ValueError("Google OAuth not configured")

    refresh_token = refresh_token or settings.GOOGLE_REFRESH_TOKEN
    if not refresh_token:
        raise ValueError("GOOGLE_REFRESH_TOKEN not configured")

    async with httpx.AsyncClient(timeout=10) as client:
        response = await client.post(
            GOOGLE_TOKEN_URL,
            data={
                "client_id": settings.GOOGLE_CLIENT_ID,
                "client_secret": settings.GOOGLE_CLIENT_SECRET,
                "refresh_token": refresh_token,
                "grant_type": "refresh_token",
            },
        )
        response.raise_for_status()
        data = response.json()

        return data["access_token"]
