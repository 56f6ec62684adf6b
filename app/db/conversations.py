"""Conversation log entries written by the tool functions."""

from datetime import UTC, datetime
from typing import Any

from app.core.logging import get_logger
from app.db.supabase_client import get_supabase

logger = get_logger(__name__)


def log_tool_action(user_id: str, title: str, text: str, metadata: dict[str, Any]) -> bool:
    """
    Append a tool message to the user's conversations.

    Failures are logged and reported as False; the calling tool has already
    done its work by the time this runs.
    """
    message = {
        "role": "tool",
        "text": text,
        "metadata": metadata,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    try:
        get_supabase().table("conversations").insert(
            {"user_id": user_id, "title": title, "messages": [message]}
        ).execute()
        return True
    except Exception as e:
        logger.error(f"Failed to log to conversations: {e}")
        return False
