"""Database operations for the rag_docs vector table.

Rows hold compact text, metadata and a pgvector embedding. Similarity search
runs in the database through the match_rag_docs() RPC.
"""

from typing import Any

from app.db.supabase_client import get_supabase


def insert_rag_doc(
    user_id: str,
    kind: str,
    content: str,
    embedding: list[float],
    ref_id: str | None = None,
    title: str | None = None,
    metadata: dict[str, Any] | None = None,
) -> int:
    """
    Insert an embedded document.

    Returns:
        The new row id

    Raises:
        RuntimeError: If the insert returned no row
    """
    row = {
        "user_id": user_id,
        "kind": kind,
        "ref_id": ref_id,
        "title": title,
        "content": content,
        "metadata": metadata or {},
        "embedding": embedding,
    }
    response = get_supabase().table("rag_docs").insert(row).execute()
    if not response.data:
        raise RuntimeError("Failed to insert rag document")
    return response.data[0]["id"]


def find_rag_doc_id(user_id: str, kind: str, ref_id: str) -> int | None:
    """Id of the document already indexed for (user, kind, ref_id), if any."""
    response = (
        get_supabase()
        .table("rag_docs")
        .select("id")
        .eq("user_id", user_id)
        .eq("kind", kind)
        .eq("ref_id", ref_id)
        .limit(1)
        .execute()
    )
    if response.data:
        return response.data[0]["id"]
    return None


def update_rag_doc(doc_id: int, fields: dict[str, Any]) -> None:
    """Overwrite content, metadata or embedding of an existing document."""
    get_supabase().table("rag_docs").update(fields).eq("id", doc_id).execute()


def match_rag_docs(
    user_id: str,
    query_embedding: list[float],
    kinds: list[str] | None = None,
    start_ts: str | None = None,
    end_ts: str | None = None,
    k: int = 8,
) -> list[dict[str, Any]]:
    """Vector search over a user's documents, optionally filtered by kind and time."""
    response = get_supabase().rpc(
        "match_rag_docs",
        {
            "query_embedding": query_embedding,
            "user_id": user_id,
            "kinds": kinds,
            "start_ts": start_ts,
            "end_ts": end_ts,
            "k": k,
        },
    ).execute()
    return response.data or []


def list_user_ids_since(since_iso: str) -> list[str]:
    """Distinct owners of documents created at or after since_iso."""
    response = get_supabase().table("rag_docs").select("user_id").gte("created_at", since_iso).execute()
    return list(dict.fromkeys(row["user_id"] for row in response.data or []))


def list_area_docs(user_id: str, area: str, start_iso: str, end_iso: str) -> list[dict[str, Any]]:
    """Documents of one life area (metadata.area or matching kind) created in [start, end]."""
    response = (
        get_supabase()
        .table("rag_docs")
        .select("title, content, metadata")
        .eq("user_id", user_id)
        .gte("created_at", start_iso)
        .lte("created_at", end_iso)
        .or_(f"metadata->>area.eq.{area},kind.eq.{area.lower()}")
        .execute()
    )
    return response.data or []
