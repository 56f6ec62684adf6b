"""Pydantic schemas for RAG indexing and search."""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RagKind(str, Enum):
    """Kinds of user content that the ingestion helper indexes."""
    JOURNAL = "journal"
    READING_NOTE = "reading_note"
    REFLECTION = "reflection"
    GOAL_DIGEST = "goal_digest"
    CONTACT_NOTE = "contact_note"


class RagIndexRequest(BaseModel):
    """Body of the rag-index function (camelCase on the wire)."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    kind: str
    ref_id: Optional[str] = Field(default=None, alias="refId")
    title: Optional[str] = None
    content: str
    metadata: Optional[dict[str, Any]] = None


class RagSearchRequest(BaseModel):
    """Body of the rag-search function."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    query: str
    kinds: Optional[list[str]] = None
    start_ts: Optional[str] = Field(default=None, alias="startTs")
    end_ts: Optional[str] = Field(default=None, alias="endTs")
    top_k: int = Field(default=8, alias="topK", ge=1, le=100)


class RagMatch(BaseModel):
    """A match_rag_docs result row."""
    id: int
    kind: str
    title: Optional[str] = None
    content: str
    metadata: Optional[dict[str, Any]] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    score: float

    @field_validator("metadata", mode="before")
    @classmethod
    def null_metadata_to_empty(cls, v: Any) -> Any:
        """rag_docs.metadata is nullable."""
        return {} if v is None else v
