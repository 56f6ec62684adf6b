"""tool-calendar-create function: create a Google Calendar event."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from app.api.function_helpers import error_response, read_json_body
from app.core.google_calendar_service import create_calendar_event
from app.core.logging import get_logger
from app.core.schemas_tools import CalendarEventCreate
from app.db.conversations import log_tool_action

logger = get_logger(__name__)

router = APIRouter()


@router.post("/tool-calendar-create")
async def tool_calendar_create(request: Request) -> JSONResponse:
    """
    Create an event on the primary calendar.

    Body: {userId, title, startIso, endIso, attendees?, description?, location?}

    Returns:
        {"ok": true, "id", "htmlLink"}, or 500 {"error": ..., "ok": false}
    """
    try:
        event = CalendarEventCreate.model_validate(await read_json_body(request))
        logger.info(
            f"Creating calendar event: user={event.user_id}, title='{event.title}', "
            f"start={event.start_iso}, end={event.end_iso}"
        )

        created = await create_calendar_event(
            title=event.title,
            start_iso=event.start_iso,
            end_iso=event.end_iso,
            attendees=event.attendees,
            description=event.description,
            location=event.location,
        )

        log_tool_action(
            event.user_id,
            title="Calendar Event Created",
            text=f"Created calendar event: {event.title}",
            metadata={
                "kind": "calendar_event",
                "eventId": created.get("id"),
                "title": event.title,
                "startIso": event.start_iso,
                "endIso": event.end_iso,
            },
        )

        return JSONResponse(
            content={"ok": True, "id": created.get("id"), "htmlLink": created.get("htmlLink")}
        )

    except Exception as e:
        logger.exception(f"Error in tool-calendar-create: {e}")
        return error_response(e, ok=False)
