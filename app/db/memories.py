"""Database operations for stable user facts (memories table)."""

from datetime import UTC, datetime

from app.db.supabase_client import get_supabase


def upsert_memory(user_id: str, key: str, value: str, confidence: float = 0.8) -> None:
    """Insert or refresh the fact stored under (user_id, key)."""
    row = {
        "user_id": user_id,
        "key": key,
        "value": value,
        "confidence": confidence,
        "last_seen_at": datetime.now(UTC).isoformat(),
    }
    get_supabase().table("memories").upsert(row, on_conflict="user_id,key").execute()
