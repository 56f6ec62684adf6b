"""Keyword-based intent detection for assistant utterances.

Decides whether the user wants something done (action), wants something
looked up in their own history (recall), or both (mixed). For mixed requests
`post_action` says whether the action should run after the recall.
"""

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Literal, Optional

Intent = Literal["action", "recall", "mixed"]

ACTION_KEYWORDS = (
    "schedule", "create", "add", "send", "calculate", "delete", "remove",
    "update", "edit", "modify", "book", "reserve", "order", "buy",
    "call", "email", "message", "contact", "remind", "set", "plan",
)

RECALL_KEYWORDS = (
    "summarize", "summary", "what did i", "recall", "remember", "ideas",
    "show me", "find", "search", "when did", "how many", "list",
    "tell me about", "what are", "what were", "review", "history",
)

MIXED_INDICATORS = ("then", "after", "also", "and then", "next", "followed by")

_QUESTION_RE = re.compile(
    r"^(what|who|when|where|why|how|can you|could you|do you|did i|have i)", re.IGNORECASE
)


@dataclass
class IntentResult:
    intent: Intent
    confidence: float
    post_action: Optional[bool] = None


@dataclass
class DateHints:
    start_date: Optional[date] = None
    end_date: Optional[date] = None


def _count_matches(text: str, keywords: tuple[str, ...]) -> int:
    return sum(1 for keyword in keywords if keyword in text)


def detect_intent(user_text: str) -> IntentResult:
    """
    Classify an utterance.

    Matching is substring-based on the lowercased text, so "contacts"
    counts as "contact". Confidence grows with keyword density.
    """
    text = user_text.strip()
    if not text:
        return IntentResult(intent="action", confidence=0.5)

    normalized = text.lower()
    action_matches = _count_matches(normalized, ACTION_KEYWORDS)
    recall_matches = _count_matches(normalized, RECALL_KEYWORDS)
    mixed = any(indicator in normalized for indicator in MIXED_INDICATORS)

    word_count = len(text.split())
    action_density = action_matches / word_count
    recall_density = recall_matches / word_count

    if mixed or (action_matches > 0 and recall_matches > 0):
        return IntentResult(
            intent="mixed",
            confidence=min(0.9, 0.6 + (action_matches + recall_matches) * 0.1),
            post_action=action_matches >= recall_matches,
        )

    if action_matches > recall_matches:
        return IntentResult(intent="action", confidence=min(0.95, 0.7 + action_density * 2))

    if recall_matches > action_matches:
        return IntentResult(intent="recall", confidence=min(0.95, 0.7 + recall_density * 2))

    # No keywords at all
    if _QUESTION_RE.match(text):
        return IntentResult(intent="recall", confidence=0.6)
    return IntentResult(intent="action", confidence=0.5)


def extract_date_hints(user_text: str, today: date | None = None) -> DateHints:
    """
    Pull a date range out of relative phrases.

    Weeks start on Sunday. Only the first matching phrase counts, checked in
    the order today, yesterday, this week, last week, this month.
    """
    today = today or date.today()
    normalized = user_text.lower().strip()
    days_since_sunday = (today.weekday() + 1) % 7

    if "today" in normalized:
        return DateHints(start_date=today, end_date=today)
    if "yesterday" in normalized:
        yesterday = today - timedelta(days=1)
        return DateHints(start_date=yesterday, end_date=yesterday)
    if "this week" in normalized:
        return DateHints(start_date=today - timedelta(days=days_since_sunday), end_date=today)
    if "last week" in normalized:
        week_start = today - timedelta(days=days_since_sunday + 7)
        return DateHints(start_date=week_start, end_date=week_start + timedelta(days=6))
    if "this month" in normalized:
        return DateHints(start_date=today.replace(day=1), end_date=today)
    return DateHints()
