"""API endpoints for contact follow-up cadence."""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Query

from app.core import contact_cadence
from app.core.logging import get_logger
from app.core.schemas_contacts import Contact, ContactCadenceRequest, Interaction
from app.db.interactions import list_interactions

logger = get_logger(__name__)

router = APIRouter()


@router.get("/due")
async def list_due_contacts(
    user_id: str = Query(..., description="Owner of the contacts"),
    limit: int | None = Query(None, ge=1, le=100, description="Override the user's daily capacity"),
) -> list[Contact]:
    """
    Contacts whose next touch is due today or earlier.

    Raises:
        HTTPException 500: If database error
    """
    try:
        rows = contact_cadence.get_due_contacts(user_id, limit=limit)
        return [Contact.model_validate(r) for r in rows]
    except Exception:
        logger.exception(f"Failed to list due contacts for user {user_id}")
        raise HTTPException(status_code=500, detail="Failed to retrieve due contacts")


def _run_cadence(action, *args, **kwargs) -> Contact:
    try:
        return Contact.model_validate(action(*args, **kwargs))
    except LookupError:
        raise HTTPException(status_code=404, detail="Contact not found")
    except Exception:
        logger.exception(f"Contact cadence update failed: {action.__name__}")
        raise HTTPException(status_code=500, detail="Failed to update contact")


@router.post("/{contact_id}/mark-sent")
async def mark_contact_sent(contact_id: UUID, body: ContactCadenceRequest) -> Contact:
    """Record outreach today; next touch in a week."""
    return _run_cadence(
        contact_cadence.mark_sent,
        body.user_id,
        contact_id,
        channel=body.channel,
        message_body=body.message_body,
    )


@router.post("/{contact_id}/snooze")
async def snooze_contact(contact_id: UUID, body: ContactCadenceRequest) -> Contact:
    """Push the next touch out by `days` (default 7)."""
    return _run_cadence(contact_cadence.snooze_contact, body.user_id, contact_id, days=body.days)


@router.post("/{contact_id}/skip")
async def skip_contact(contact_id: UUID, body: ContactCadenceRequest) -> Contact:
    """Move the next touch to tomorrow."""
    return _run_cadence(contact_cadence.skip_contact, body.user_id, contact_id)


@router.get("/{contact_id}/interactions")
async def get_contact_interactions(
    contact_id: UUID,
    user_id: str = Query(..., description="Owner of the contact"),
    limit: int = Query(50, ge=1, le=200),
) -> list[Interaction]:
    """Interaction history for a contact, most recent first."""
    try:
        rows = list_interactions(user_id, contact_id, limit=limit)
        return [Interaction.model_validate(r) for r in rows]
    except Exception:
        logger.exception(f"Failed to list interactions for contact {contact_id}")
        raise HTTPException(status_code=500, detail="Failed to retrieve interactions")
