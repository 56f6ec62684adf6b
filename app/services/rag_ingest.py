"""Caller-side helper that sends user content to the rag-index function."""

import logging
from typing import Any, Optional

from app.core.logging import get_logger, log_with_context
from app.core.schemas_rag import RagKind
from app.core.text_normalize import compact_content
from app.services.edge_gateway import invoke_function

logger = get_logger(__name__)

RAG_INDEX_FUNCTION = "rag-index"


async def index_for_rag(
    user_id: str,
    kind: RagKind | str,
    ref_id: str,
    content: str,
    title: Optional[str] = None,
    metadata: Optional[dict[str, Any]] = None,
) -> Optional[int]:
    """
    Index a piece of user content for retrieval.

    HTML is stripped and whitespace collapsed first; empty content is not
    sent. Indexing is best effort: failures are logged, never raised.

    Args:
        user_id: Owner of the content
        kind: journal, reading_note, reflection, goal_digest or contact_note
        ref_id: Id of the source record
        content: Raw content, may contain HTML
        title: Optional title
        metadata: Optional extra fields (area, tags, ...)

    Returns:
        Id of the indexed document, or None if skipped or failed
    """
    try:
        kind_value = RagKind(kind).value
        compact = compact_content(content)

        if not compact:
            logger.info("Skipping RAG indexing: empty content")
            return None

        result = await invoke_function(
            RAG_INDEX_FUNCTION,
            {
                "userId": user_id,
                "kind": kind_value,
                "refId": ref_id,
                "title": title or None,
                "content": compact,
                "metadata": metadata or {},
            },
        )
        log_with_context(
            logger, logging.INFO, "Indexed content for RAG", user_id=user_id, kind=kind_value, ref_id=ref_id
        )
        return result.get("id") if isinstance(result, dict) else None

    except Exception as e:
        logger.error(f"RAG indexing error: {e}")
        return None
