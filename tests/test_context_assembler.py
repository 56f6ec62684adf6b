"""Tests for token-budgeted message assembly."""

from datetime import date
from unittest.mock import AsyncMock, patch

import pytest

from app.core.intent_router import DateHints
from app.services.context_assembler import (
    SearchHints,
    assemble_context,
    build_messages,
    estimate_tokens,
    truncate_to_tokens,
)
from app.services.edge_gateway import EdgeFunctionError


def test_estimate_tokens_rounds_up():
    assert estimate_tokens("hello") == 2
    assert estimate_tokens("hello world") == 3
    assert estimate_tokens("a" * 400) == 100


def test_truncate_keeps_short_text():
    assert truncate_to_tokens("short", 10) == "short"


@pytest.mark.asyncio
async def test_action_intent_skips_search():
    with patch("app.services.context_assembler.invoke_function", new_callable=AsyncMock) as mock_invoke:
        messages = await build_messages("user-1", "Create a new task", "action")

    assert [m["role"] for m in messages] == ["system", "user"]
    assert messages[1]["content"] == "Create a new task"
    mock_invoke.assert_not_called()


@pytest.mark.asyncio
async def test_long_user_text_truncated_to_budget():
    with patch("app.services.context_assembler.invoke_function", new_callable=AsyncMock):
        messages = await build_messages("user-1", "a" * 4000, "action")

    user_message = messages[-1]["content"]
    assert estimate_tokens(user_message) <= 800
    assert user_message.endswith("...")


@pytest.mark.asyncio
async def test_recall_includes_compressed_memories():
    search_results = [{"title": "Meeting Notes", "content": "Had a productive meeting about project X"}]
    compressed = {"items": [{"id": 0, "text": "- Meeting about project X, productive"}]}

    with patch("app.services.context_assembler.invoke_function", new_callable=AsyncMock) as mock_invoke:
        mock_invoke.side_effect = [search_results, compressed]

        messages = await build_messages("user-1", "What did I discuss in my last meeting?", "recall")

    assert [m["role"] for m in messages] == ["system", "assistant", "user"]
    assert "project X, productive" in messages[1]["content"]

    search_call, compress_call = mock_invoke.call_args_list
    assert search_call[0][0] == "rag-search"
    assert search_call[0][1]["topK"] == 12
    assert compress_call[0][0] == "compress-snippets"
    assert compress_call[0][1]["snippets"] == [
        {"id": 0, "content": "Meeting Notes\nHad a productive meeting about project X"}
    ]


@pytest.mark.asyncio
async def test_memories_packed_within_budget():
    results = [{"title": f"Item {i}", "content": "content"} for i in range(10)]
    compressed = {"items": [{"id": i, "text": "a" * 500} for i in range(10)]}

    with patch("app.services.context_assembler.invoke_function", new_callable=AsyncMock) as mock_invoke:
        mock_invoke.side_effect = [results, compressed]

        messages = await build_messages("user-1", "Summarize everything", "recall")

    memory = next(m for m in messages if m["role"] == "assistant")
    assert estimate_tokens(memory["content"]) <= 1200
    assert memory["content"].count("a" * 500) == 9


@pytest.mark.asyncio
async def test_search_failure_still_returns_system_and_user():
    with patch("app.services.context_assembler.invoke_function", new_callable=AsyncMock) as mock_invoke:
        mock_invoke.side_effect = EdgeFunctionError("rag-search", 500, "Search failed")

        messages = await build_messages("user-1", "What did I do yesterday?", "recall")

    assert [m["role"] for m in messages] == ["system", "user"]


@pytest.mark.asyncio
async def test_compression_failure_falls_back_to_truncated_results():
    results = [{"title": "Long", "content": "x" * 1000}]

    with patch("app.services.context_assembler.invoke_function", new_callable=AsyncMock) as mock_invoke:
        mock_invoke.side_effect = [results, EdgeFunctionError("compress-snippets", 500, "boom")]

        messages = await build_messages("user-1", "Find my notes", "mixed")

    assert messages[1]["role"] == "assistant"
    assert ("x" * 600 + "...") in messages[1]["content"]


@pytest.mark.asyncio
async def test_hints_passed_to_search():
    with patch("app.services.context_assembler.invoke_function", new_callable=AsyncMock) as mock_invoke:
        mock_invoke.return_value = []

        await build_messages(
            "user-1",
            "Show me my journal entries",
            "recall",
            SearchHints(kinds=["journal"], start_date="2024-01-01", end_date="2024-01-31"),
        )

    mock_invoke.assert_called_once()
    body = mock_invoke.call_args[0][1]
    assert body["kinds"] == ["journal"]
    assert body["startTs"] == "2024-01-01"
    assert body["endTs"] == "2024-01-31"


@pytest.mark.asyncio
async def test_assemble_context_uses_detected_intent_and_dates():
    with patch("app.services.context_assembler.invoke_function", new_callable=AsyncMock) as mock_invoke:
        with patch("app.services.context_assembler.extract_date_hints") as mock_hints:
            mock_hints.return_value = DateHints(start_date=date(2025, 9, 23), end_date=date(2025, 9, 23))
            mock_invoke.return_value = []

            result = await assemble_context("user-1", "Summarize yesterday")

    assert result["intent"] == "recall"
    body = mock_invoke.call_args[0][1]
    assert body["startTs"] == "2025-09-23"
    assert body["kinds"] is None
