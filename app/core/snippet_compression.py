"""Compress retrieved snippets into dense bullets before they enter a prompt."""

import asyncio
from typing import Any

from app.core.llm import chat_complete_async
from app.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_TOKENS = 150

COMPRESS_PROMPT = (
    "Compress to ≤{max_tokens} tokens, dense bullets, preserve dates/names, "
    "remove fluff. Return plain text.\n\n{content}"
)


async def compress_text(content: str, max_tokens: int = DEFAULT_MAX_TOKENS) -> str:
    """Compress one text with the chat model."""
    logger.debug(f"Compressing text with max tokens: {max_tokens}")
    prompt = COMPRESS_PROMPT.format(max_tokens=max_tokens, content=content)
    return await chat_complete_async(
        [{"role": "user", "content": prompt}],
        max_tokens=max_tokens + 50,
        temperature=0.3,
    )


async def _compress_one(snippet: dict[str, Any], max_tokens: int) -> dict[str, Any]:
    try:
        text = await compress_text(snippet["content"], max_tokens)
    except Exception as e:
        logger.error(f"Error compressing snippet {snippet['id']}: {e}")
        text = f"Error: {e}"
    return {"id": snippet["id"], "text": text}


async def compress_snippets(
    snippets: list[dict[str, Any]], max_tokens: int = DEFAULT_MAX_TOKENS
) -> list[dict[str, Any]]:
    """
    Compress snippets concurrently, keeping their order and ids.

    A snippet whose compression fails gets `Error: <message>` as its text.

    Raises:
        ValueError: If a snippet lacks id or content
    """
    for snippet in snippets:
        if snippet.get("id") is None or not snippet.get("content"):
            raise ValueError("Each snippet must have id and content")

    logger.info(f"Processing {len(snippets)} snippets with max tokens: {max_tokens}")
    items = await asyncio.gather(*(_compress_one(s, max_tokens) for s in snippets))
    return list(items)
