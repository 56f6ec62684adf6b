"""Assemble chat messages for the assistant within a token budget.

Action requests go straight to the model. Recall and mixed requests first
search the user's indexed content (rag-search), compress the hits
(compress-snippets) and pack as many as fit into an assistant message ahead
of the user's text.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from app.core.intent_router import Intent, detect_intent, extract_date_hints
from app.core.logging import get_logger
from app.services.edge_gateway import invoke_function

logger = get_logger(__name__)

# Token budgets per message section
SYSTEM_BUDGET = 1500
USER_BUDGET = 800
MEMORY_BUDGET = 1200

SEARCH_TOP_K = 12
COMPRESSED_MAX_TOKENS = 150
# Per-result fallback when compression is unavailable
FALLBACK_SNIPPET_CHARS = 600

_INTENT_GUIDANCE = {
    "recall": "Focus on retrieving and summarizing relevant information from the user's data.",
    "action": "Focus on executing the requested action or providing direct assistance.",
    "mixed": "Provide relevant context first, then offer to take action if needed.",
}

Message = dict[str, str]


@dataclass
class SearchHints:
    kinds: list[str] = field(default_factory=list)
    start_date: Optional[str] = None
    end_date: Optional[str] = None


def estimate_tokens(text: str) -> int:
    """Rough token count: one token per four characters."""
    return math.ceil(len(text) / 4)


def truncate_to_tokens(text: str, max_tokens: int) -> str:
    """Cut text to roughly max_tokens (with a 10% margin) and mark the cut with '...'."""
    estimated = estimate_tokens(text)
    if estimated <= max_tokens:
        return text

    target_length = math.floor(len(text) * (max_tokens / estimated) * 0.9)
    if target_length < len(text):
        return text[:target_length] + "..."
    return text


async def _search_and_compress(
    user_id: str, query: str, hints: Optional[SearchHints]
) -> list[str]:
    hints = hints or SearchHints()
    try:
        results = await invoke_function(
            "rag-search",
            {
                "userId": user_id,
                "query": query,
                "kinds": hints.kinds or None,
                "startTs": hints.start_date,
                "endTs": hints.end_date,
                "topK": SEARCH_TOP_K,
            },
        )
        snippets = [
            {"id": i, "content": f"{r.get('title') or ''}\n{r['content']}".strip()}
            for i, r in enumerate(results or [])
        ]
    except Exception as e:
        logger.error(f"RAG search error: {e}")
        return []

    if not snippets:
        return []

    try:
        compressed = await invoke_function(
            "compress-snippets", {"snippets": snippets, "maxTokens": COMPRESSED_MAX_TOKENS}
        )
    except Exception as e:
        logger.error(f"Compression error: {e}")
        return [r["content"][:FALLBACK_SNIPPET_CHARS] + "..." for r in results]

    return [item["text"] for item in compressed.get("items", [])]


def _pack_memories(memories: list[str]) -> str:
    packed: list[str] = []
    used = 0
    for memory in memories:
        tokens = estimate_tokens(memory)
        if used + tokens > MEMORY_BUDGET:
            break
        packed.append(memory)
        used += tokens
    return "\n\n".join(packed).strip()


async def build_messages(
    user_id: str,
    user_text: str,
    intent: Intent,
    hints: Optional[SearchHints] = None,
) -> list[Message]:
    """
    Build system, optional memory and user messages for one request.

    A failed search means no memories and a failed compression falls back
    to truncated results. System and user messages are always returned.
    """
    system = (
        "You are a helpful AI assistant that can access the user's personal data and memories.\n"
        f"Current context: {intent} intent detected.\n"
        f"{_INTENT_GUIDANCE.get(intent, '')}\n\n"
        "Keep responses concise and helpful."
    )
    messages: list[Message] = [
        {"role": "system", "content": truncate_to_tokens(system, SYSTEM_BUDGET)}
    ]

    if intent != "action":
        memories = await _search_and_compress(user_id, user_text, hints)
        memory_content = _pack_memories(memories)
        if memory_content:
            messages.append(
                {"role": "assistant", "content": f"Here's what I found in your data:\n\n{memory_content}"}
            )

    messages.append({"role": "user", "content": truncate_to_tokens(user_text, USER_BUDGET)})
    return messages


async def assemble_context(
    user_id: str, user_text: str, kinds: Optional[list[str]] = None
) -> dict[str, Any]:
    """Detect intent and date range of an utterance, then build its messages."""
    result = detect_intent(user_text)
    dates = extract_date_hints(user_text)
    hints = SearchHints(
        kinds=kinds or [],
        start_date=dates.start_date.isoformat() if dates.start_date else None,
        end_date=dates.end_date.isoformat() if dates.end_date else None,
    )
    messages = await build_messages(user_id, user_text, result.intent, hints)
    return {"intent": result.intent, "post_action": result.post_action, "messages": messages}
