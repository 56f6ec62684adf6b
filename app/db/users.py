"""Database operations for users."""

from typing import Optional

from app.core.schemas_auth import User
from app.db.supabase_client import get_supabase as get_client


def get_user_by_id(user_id: str) -> Optional[User]:
    """Get a user by ID."""
    client = get_client()
    result = client.table("users").select("*").eq("id", user_id).execute()
    if result.data:
        return User(**result.data[0])
    return None
