"""Typed client facade over the LifeOS tool functions.

Usage:

    from app.services.lifeos_api import api

    await api.tools.calendar.create(
        title="Deep work",
        start_iso="2025-09-22T09:00:00+02:00",
        end_iso="2025-09-22T09:30:00+02:00",
        attendees=["name@email.com"],
    )
    contacts = await api.tools.contacts.find("john")
"""

from typing import Any, Optional

from app.services.edge_gateway import call_edge_function

CALENDAR_CREATE_FUNCTION = "tool-calendar-create"
CONTACTS_FUNCTION = "tool-contacts"


def _compact(payload: dict[str, Any]) -> dict[str, Any]:
    """Drop unset optional fields."""
    return {k: v for k, v in payload.items() if v is not None}


class CalendarTools:
    async def create(
        self,
        title: str,
        start_iso: str,
        end_iso: str,
        attendees: Optional[list[str]] = None,
        description: Optional[str] = None,
        location: Optional[str] = None,
    ) -> dict[str, Any]:
        """Create a calendar event. Returns {"ok", "id", "htmlLink"}."""
        return await call_edge_function(
            CALENDAR_CREATE_FUNCTION,
            _compact(
                {
                    "title": title,
                    "startIso": start_iso,
                    "endIso": end_iso,
                    "attendees": attendees,
                    "description": description,
                    "location": location,
                }
            ),
        )


class ContactTools:
    async def find(self, q: Optional[str] = None) -> dict[str, Any]:
        """Search contacts. Returns {"contacts": [...]}."""
        return await call_edge_function(CONTACTS_FUNCTION, _compact({"action": "find", "q": q}))

    async def get(self, id: str) -> dict[str, Any]:
        """Fetch one contact by id."""
        return await call_edge_function(CONTACTS_FUNCTION, {"action": "get", "id": id})

    async def upsert(
        self,
        name: str,
        id: Optional[str] = None,
        phone: Optional[str] = None,
        email: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> dict[str, Any]:
        """Create a contact, or update it when `id` is given. Returns {"id": ...}."""
        return await call_edge_function(
            CONTACTS_FUNCTION,
            _compact(
                {
                    "action": "upsert",
                    "id": id,
                    "name": name,
                    "phone": phone,
                    "email": email,
                    "notes": notes,
                }
            ),
        )


class Tools:
    def __init__(self) -> None:
        self.calendar = CalendarTools()
        self.contacts = ContactTools()


class LifeOSApi:
    def __init__(self) -> None:
        self.tools = Tools()


api = LifeOSApi()
