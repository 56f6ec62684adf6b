"""Database operations for contact interactions."""

from typing import Any
from uuid import UUID

from app.core.schemas_contacts import InteractionCreate
from app.db.supabase_client import get_supabase


def log_interaction(user_id: str, data: InteractionCreate) -> dict[str, Any]:
    """Record an interaction with a contact."""
    row = {"user_id": user_id, **data.model_dump(mode="json", exclude_none=True)}
    response = get_supabase().table("interactions").insert(row).execute()
    if not response.data:
        raise RuntimeError("Failed to log interaction")
    return response.data[0]


def list_interactions(
    user_id: str, contact_id: UUID | str, limit: int = 50
) -> list[dict[str, Any]]:
    """List a contact's interactions, most recent first."""
    response = (
        get_supabase()
        .table("interactions")
        .select("*")
        .eq("user_id", user_id)
        .eq("contact_id", str(contact_id))
        .order("date", desc=True)
        .limit(limit)
        .execute()
    )
    return response.data or []
