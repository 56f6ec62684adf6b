"""Google Calendar API service.

Calls Google Calendar API v3 via httpx with a Bearer token obtained from the
configured refresh token.
"""

import logging
from typing import Any

import httpx

from app.core.google_auth_helper import exchange_refresh_for_access

logger = logging.getLogger(__name__)

CALENDAR_API_URL = "https://www.googleapis.com/calendar/v3"


class CalendarApiError(Exception):
    """Google Calendar rejected the request."""


def build_event_body(
    title: str,
    start_iso: str,
    end_iso: str,
    attendees: list[str] | None = None,
    description: str | None = None,
    location: str | None = None,
) -> dict[str, Any]:
    """Build the events.insert request body."""
    return {
        "summary": title,
        "description": description or "",
        "location": location or "",
        "start": {"dateTime": start_iso},
        "end": {"dateTime": end_iso},
        "attendees": [{"email": email} for email in attendees or []],
    }


async def create_calendar_event(
    title: str,
    start_iso: str,
    end_iso: str,
    attendees: list[str] | None = None,
    description: str | None = None,
    location: str | None = None,
    timeout: int = 15,
) -> dict[str, Any]:
    """
    Create an event on the owner's primary calendar.

    Args:
        title: Event title
        start_iso: ISO datetime with offset (e.g. "2025-09-22T09:00:00+02:00")
        end_iso: ISO datetime with offset
        attendees: Optional attendee email addresses
        description: Optional event description
        location: Optional event location
        timeout: Request timeout in seconds

    Returns:
        The created Google Calendar event

    Raises:
        CalendarApiError: If the Calendar API returns an error
    """
    access_token = await exchange_refresh_for_access()
    event_body = build_event_body(title, start_iso, end_iso, attendees, description, location)

    async with httpx.AsyncClient(timeout=timeout) as client:
        response = await client.post(
            f"{CALENDAR_API_URL}/calendars/primary/events",
            headers={"Authorization": f"Bearer {access_token}"},
            json=event_body,
        )

    data = response.json()
    if response.is_error:
        message = (data.get("error") or {}).get("message") or "Unknown error"
        logger.error(f"Calendar API error {response.status_code}: {message}")
        raise CalendarApiError(f"Calendar API error: {message}")

    logger.info(f"Calendar event created: id={data.get('id')}, title='{title}'")
    return data
