"""Nightly per-area digests of what a user wrote the day before.

For every user with fresh rag_docs, each life area's documents from
yesterday are summarized into one `<area>_digest` document, embedded and
upserted on (user, kind, digest date). The combined digests are then mined
for stable facts, stored in the memories table.
"""

import logging
from datetime import UTC, date, datetime, time, timedelta
from typing import Any

from app.core.llm import chat_complete_async
from app.core.logging import get_logger, log_with_context
from app.core.rag_indexing import upsert_embedded_doc
from app.db import memories as memories_db
from app.db import rag_docs as rag_db

logger = get_logger(__name__)

DIGEST_AREAS = ("Physical", "Mental", "Emotional", "Spiritual", "Social", "Professional", "Financial")

# Used when summarization fails
FALLBACK_CHARS = 500

DIGEST_PROMPT = (
    "Create a concise daily digest paragraph for the {area} area. Summarize the key themes, "
    "insights, and activities from the user's entries. Focus on patterns, progress, and "
    "significant events. Keep it under 200 words."
)

FACTS_PROMPT = """Extract stable, factual information about the user that could be useful for future reference. Focus on:
- Regular habits and routines (wake time, workout days, etc.)
- Preferences and patterns
- Consistent goals or values
- Personal constraints or requirements

Return only clear, objective facts in the format: "key: value"
Each fact should be on a new line. Only include facts that seem stable/consistent."""


def _day_bounds(day: date) -> tuple[str, str]:
    start = datetime.combine(day, time.min, tzinfo=UTC)
    end = datetime.combine(day, time.max, tzinfo=UTC)
    return start.isoformat(), end.isoformat()


async def build_area_digest(user_id: str, area: str, day: date) -> str | None:
    """
    Summarize one area's documents from `day`.

    Returns:
        Digest text; None when the area has no documents or they can't be read
    """
    start_iso, end_iso = _day_bounds(day)
    try:
        docs = rag_db.list_area_docs(user_id, area, start_iso, end_iso)
    except Exception as e:
        logger.error(f"Error fetching RAG docs for {area} digest: {e}")
        return None

    if not docs:
        return None

    combined = "\n\n".join(
        f"{doc['title']}: {doc['content']}" if doc.get("title") else doc["content"] for doc in docs
    )

    try:
        return await chat_complete_async(
            [
                {"role": "system", "content": DIGEST_PROMPT.format(area=area)},
                {"role": "user", "content": combined},
            ],
            max_tokens=250,
            temperature=0.3,
        )
    except Exception as e:
        logger.warning(f"Digest summary failed for {area}, using truncated content: {e}")
        return combined[:FALLBACK_CHARS] + "..."


def parse_facts(text: str) -> list[tuple[str, str]]:
    """Parse `key: value` lines; keys are lowercased, list bullets dropped."""
    facts = []
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        key = key.strip().lstrip("-*• ").strip().lower()
        value = value.strip()
        if sep and key and value:
            facts.append((key, value))
    return facts


async def extract_stable_facts(user_id: str, content: str) -> int:
    """
    Store stable facts found in a day's digests.

    Best effort: failures are logged and 0 is returned.
    """
    try:
        facts_text = await chat_complete_async(
            [
                {"role": "system", "content": FACTS_PROMPT},
                {"role": "user", "content": content},
            ],
            max_tokens=300,
            temperature=0.1,
        )
        facts = parse_facts(facts_text)
        for key, value in facts:
            memories_db.upsert_memory(user_id, key, value)
        return len(facts)
    except Exception as e:
        logger.error(f"Error extracting stable facts: {e}")
        return 0


async def run_daily_digests(today: date | None = None) -> dict[str, Any]:
    """
    Build yesterday's digests for every recently active user.

    Raises:
        Exception: If listing users, embedding or storing a digest fails
    """
    today = today or datetime.now(UTC).date()
    day = today - timedelta(days=1)
    since_iso, _ = _day_bounds(day)

    user_ids = rag_db.list_user_ids_since(since_iso)
    logger.info(f"Processing digests for {len(user_ids)} users")

    digests_created = 0
    facts_extracted = 0

    for user_id in user_ids:
        day_content = []

        for area in DIGEST_AREAS:
            digest = await build_area_digest(user_id, area, day)
            if not digest:
                continue

            kind = f"{area.lower()}_digest"
            await upsert_embedded_doc(
                user_id,
                kind,
                day.isoformat(),
                digest,
                {"area": area, "digest_date": day.isoformat()},
                title=f"Daily {area} Digest - {day.isoformat()}",
            )
            log_with_context(logger, logging.DEBUG, "Stored digest", user_id=user_id, kind=kind)
            digests_created += 1
            day_content.append(f"{area}: {digest}")

        if day_content:
            await extract_stable_facts(user_id, "\n\n".join(day_content))
            facts_extracted += 1

    logger.info(
        f"Daily digest processing complete: {digests_created} digests, "
        f"facts extracted for {facts_extracted} users"
    )
    return {
        "success": True,
        "digestsCreated": digests_created,
        "factsExtracted": facts_extracted,
        "usersProcessed": len(user_ids),
    }
