"""Database operations for contacts."""

from datetime import UTC, date, datetime
from typing import Any
from uuid import UUID

from app.db.supabase_client import get_supabase

SUMMARY_COLUMNS = "id, name, phone, email"

# Characters that would break a PostgREST or=() filter expression
_FILTER_RESERVED = str.maketrans("", "", ",()")


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def find_contacts(user_id: str, q: str | None = None) -> list[dict[str, Any]]:
    """
    Search a user's contacts.

    Args:
        user_id: Owner of the contacts
        q: Optional search term, matched case-insensitively against
            name, email and phone

    Returns:
        List of contact summaries (id, name, phone, email)
    """
    query = get_supabase().table("contacts").select(SUMMARY_COLUMNS).eq("user_id", user_id)

    term = (q or "").translate(_FILTER_RESERVED).strip()
    if term:
        query = query.or_(f"name.ilike.%{term}%,email.ilike.%{term}%,phone.ilike.%{term}%")

    response = query.execute()
    return response.data or []


def get_contact(user_id: str, contact_id: UUID | str) -> dict[str, Any] | None:
    """Get a single contact owned by the user, or None."""
    response = (
        get_supabase()
        .table("contacts")
        .select("*")
        .eq("user_id", user_id)
        .eq("id", str(contact_id))
        .limit(1)
        .execute()
    )
    if response.data:
        return response.data[0]
    return None


def list_contacts(user_id: str) -> list[dict[str, Any]]:
    """List all contacts of a user, newest first."""
    response = (
        get_supabase()
        .table("contacts")
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .execute()
    )
    return response.data or []


def insert_contact(user_id: str, fields: dict[str, Any]) -> dict[str, Any]:
    """
    Insert a new contact.

    Raises:
        RuntimeError: If the insert returned no row
    """
    now = _now_iso()
    row = {**fields, "user_id": user_id, "created_at": now, "updated_at": now}
    response = get_supabase().table("contacts").insert(row).execute()
    if not response.data:
        raise RuntimeError("Failed to create contact")
    return response.data[0]


def update_contact(
    user_id: str, contact_id: UUID | str, fields: dict[str, Any]
) -> dict[str, Any] | None:
    """Update a contact owned by the user. Returns the updated row or None if not found."""
    patch = {**fields, "updated_at": _now_iso()}
    response = (
        get_supabase()
        .table("contacts")
        .update(patch)
        .eq("id", str(contact_id))
        .eq("user_id", user_id)
        .execute()
    )
    if response.data:
        return response.data[0]
    return None


def list_due_contacts(user_id: str, on_date: date, limit: int) -> list[dict[str, Any]]:
    """Contacts whose next_touch falls on or before on_date, soonest first."""
    response = (
        get_supabase()
        .table("contacts")
        .select("*")
        .eq("user_id", user_id)
        .lte("next_touch", on_date.isoformat())
        .order("next_touch")
        .limit(limit)
        .execute()
    )
    return response.data or []
