"""OpenAI chat completions used for compression and summaries."""

import asyncio

from openai import OpenAI

from app.core.config import get_settings


def _get_client() -> OpenAI:
    return OpenAI(api_key=get_settings().OPENAI_API_KEY)


def chat_complete(
    messages: list[dict[str, str]],
    max_tokens: int,
    temperature: float = 0.3,
    model: str | None = None,
) -> str:
    """
    Run one chat completion and return the stripped text.

    Raises:
        openai.OpenAIError: If the API call fails
    """
    response = _get_client().chat.completions.create(
        model=model or get_settings().OPENAI_MODEL,
        messages=messages,
        max_tokens=max_tokens,
        temperature=temperature,
    )
    return (response.choices[0].message.content or "").strip()


async def chat_complete_async(
    messages: list[dict[str, str]],
    max_tokens: int,
    temperature: float = 0.3,
    model: str | None = None,
) -> str:
    """Async wrapper around chat_complete using thread pool."""
    return await asyncio.to_thread(chat_complete, messages, max_tokens, temperature, model)
