"""Follow-up cadence for contacts.

A contact is due once its next_touch date has arrived. Marking a message as
sent resets the clock; snoozing or skipping only pushes next_touch out.
"""

from datetime import date, timedelta
from typing import Any
from uuid import UUID

from app.core.config import get_settings
from app.core.logging import get_logger
from app.core.schemas_contacts import InteractionChannel, InteractionCreate
from app.db import contacts as contacts_db
from app.db import interactions as interactions_db
from app.db.users import get_user_by_id

logger = get_logger(__name__)

FOLLOW_UP_DAYS = 7
DEFAULT_SNOOZE_DAYS = 7


def _today() -> date:
    return date.today()


def _set_touch(user_id: str, contact_id: UUID | str, **fields: date) -> dict[str, Any]:
    patch = {k: v.isoformat() for k, v in fields.items()}
    contact = contacts_db.update_contact(user_id, contact_id, patch)
    if contact is None:
        raise LookupError("Contact not found")
    return contact


def get_due_contacts(user_id: str, limit: int | None = None) -> list[dict[str, Any]]:
    """
    Contacts whose next touch is due today or earlier.

    Args:
        user_id: Owner of the contacts
        limit: Max contacts; defaults to the user's daily_capacity, or
            DEFAULT_DAILY_CAPACITY when the user row is missing

    Returns:
        Due contacts, most overdue first
    """
    if limit is None:
        user = get_user_by_id(user_id)
        limit = user.daily_capacity if user else get_settings().DEFAULT_DAILY_CAPACITY
    if limit <= 0:
        return []
    return contacts_db.list_due_contacts(user_id, _today(), limit)


def mark_sent(
    user_id: str,
    contact_id: UUID | str,
    channel: InteractionChannel | None = None,
    message_body: str | None = None,
) -> dict[str, Any]:
    """
    Record that the user reached out today.

    Sets last_touch to today and schedules the next touch a week out. When a
    channel is given an outbound interaction is logged as well.

    Raises:
        LookupError: Contact does not exist for this user
    """
    today = _today()
    contact = _set_touch(
        user_id, contact_id, last_touch=today, next_touch=today + timedelta(days=FOLLOW_UP_DAYS)
    )

    if channel is not None:
        interactions_db.log_interaction(
            user_id,
            InteractionCreate(
                contact_id=contact["id"],
                channel=channel,
                date=today,
                message_body=message_body,
            ),
        )

    logger.info(f"Marked contact {contact_id} as contacted")
    return contact


def snooze_contact(
    user_id: str, contact_id: UUID | str, days: int = DEFAULT_SNOOZE_DAYS
) -> dict[str, Any]:
    """Push the next touch `days` days from today."""
    return _set_touch(user_id, contact_id, next_touch=_today() + timedelta(days=days))


def skip_contact(user_id: str, contact_id: UUID | str) -> dict[str, Any]:
    """Move the next touch to tomorrow."""
    return _set_touch(user_id, contact_id, next_touch=_today() + timedelta(days=1))
