"""Server-side RAG indexing and search.

Each indexed document is a rag_docs row: compact text, metadata and an
embedding of that text. Single documents are always inserted; bulk
vectorization upserts on (user, kind, ref_id) so re-running it refreshes
rather than duplicates.
"""

from datetime import date
from typing import Any

from app.core.embeddings import embed_text_async
from app.core.logging import get_logger
from app.core.rag_text_builders import RECORD_BUILDERS, build_contact_text, build_record_text
from app.core.schemas_rag import RagIndexRequest, RagKind, RagSearchRequest
from app.db import contacts as contacts_db
from app.db import rag_docs as rag_db

logger = get_logger(__name__)

# Bulk record types stored under an ingestion kind; others keep their own name
RECORD_KINDS = {
    "journal": RagKind.JOURNAL.value,
    "reading_note": RagKind.READING_NOTE.value,
    "weekly_review": RagKind.REFLECTION.value,
    "goal": RagKind.GOAL_DIGEST.value,
}


async def index_document(request: RagIndexRequest) -> int:
    """
    Embed a document and store it.

    Returns:
        Id of the new rag_docs row

    Raises:
        Exception: If embedding or insert fails
    """
    logger.info(
        f"Processing RAG index request: user={request.user_id}, kind={request.kind}, "
        f"ref={request.ref_id}, title={request.title}"
    )

    embedding = await embed_text_async(request.content)
    logger.debug(f"Generated embedding with dimensions: {len(embedding)}")

    doc_id = rag_db.insert_rag_doc(
        user_id=request.user_id,
        kind=request.kind,
        content=request.content,
        embedding=embedding,
        ref_id=request.ref_id,
        title=request.title,
        metadata=request.metadata,
    )
    logger.info(f"Indexed document id={doc_id}")
    return doc_id


async def search_documents(request: RagSearchRequest) -> list[dict[str, Any]]:
    """Embed the query and return the closest documents of the user."""
    logger.info(
        f"Processing RAG search request: user={request.user_id}, kinds={request.kinds}, "
        f"top_k={request.top_k}"
    )

    query_embedding = await embed_text_async(request.query)
    matches = rag_db.match_rag_docs(
        user_id=request.user_id,
        query_embedding=query_embedding,
        kinds=request.kinds,
        start_ts=request.start_ts,
        end_ts=request.end_ts,
        k=request.top_k,
    )

    logger.info(f"Found {len(matches)} matching documents")
    return matches


async def upsert_embedded_doc(
    user_id: str,
    kind: str,
    ref_id: str,
    content: str,
    metadata: dict[str, Any],
    title: str | None = None,
) -> None:
    """Embed content and update the (user, kind, ref_id) document, or insert it."""
    embedding = await embed_text_async(content)
    existing_id = rag_db.find_rag_doc_id(user_id, kind, ref_id)
    if existing_id is not None:
        rag_db.update_rag_doc(
            existing_id,
            {"content": content, "embedding": embedding, "metadata": metadata, "title": title},
        )
    else:
        rag_db.insert_rag_doc(
            user_id=user_id,
            kind=kind,
            content=content,
            embedding=embedding,
            ref_id=ref_id,
            title=title,
            metadata=metadata,
        )


async def vectorize_contacts(user_id: str) -> dict[str, Any]:
    """
    Embed every contact of a user as a contact_note document.

    Contacts without any text are skipped; per-contact failures are logged.
    """
    contacts = contacts_db.list_contacts(user_id)
    processed = 0

    for contact in contacts:
        content = build_contact_text(contact)
        if not content:
            continue

        metadata = {
            "name": contact.get("name"),
            "segment": contact.get("segment"),
            "company": contact.get("company"),
            "last_touch": contact.get("last_touch"),
            "next_touch": contact.get("next_touch"),
        }
        try:
            await upsert_embedded_doc(
                user_id,
                RagKind.CONTACT_NOTE.value,
                str(contact["id"]),
                content,
                metadata,
                title=contact.get("name"),
            )
            processed += 1
            logger.debug(f"Processed contact {processed}/{len(contacts)}: {contact.get('name')}")
        except Exception as e:
            logger.error(f"Error processing contact {contact.get('id')}: {e}")

    logger.info(f"Vectorized {processed}/{len(contacts)} contacts for user {user_id}")
    return {"type": "contacts", "processed": processed, "total": len(contacts)}


async def vectorize_records(
    user_id: str, data_type: str, items: list[dict[str, Any]]
) -> dict[str, Any]:
    """
    Embed a batch of front-end records of one type.

    Raises:
        ValueError: Unsupported data_type (nothing is processed)
    """
    if data_type not in RECORD_BUILDERS:
        raise ValueError(f"Unsupported data type: {data_type}")

    kind = RECORD_KINDS.get(data_type, data_type)
    processed = 0

    for item in items:
        try:
            content = build_record_text(data_type, item)
            if not content:
                continue

            metadata = {
                **item,
                "date": item.get("date") or item.get("createdAt") or date.today().isoformat(),
            }
            await upsert_embedded_doc(user_id, kind, str(item.get("id")), content, metadata)
            processed += 1
        except Exception as e:
            logger.error(f"Error processing {data_type} item {item.get('id')}: {e}")

    logger.info(f"Vectorized {processed}/{len(items)} {data_type} items for user {user_id}")
    return {"type": data_type, "processed": processed, "total": len(items)}
