"""API routers: v1 endpoints and the /functions/v1 tool functions."""

from fastapi import APIRouter

from app.api import (
    assistant,
    compress_snippets,
    contacts,
    daily_digests,
    rag_index,
    rag_search,
    tool_calendar_create,
    tool_contacts,
    vectorize_data,
    voice_speak,
)

router = APIRouter()

# Contact follow-up cadence
router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])

# Assistant intent routing
router.include_router(assistant.router, prefix="/assistant", tags=["assistant"])

functions_router = APIRouter()

# RAG ingestion and retrieval
functions_router.include_router(rag_index.router, tags=["rag"])
functions_router.include_router(rag_search.router, tags=["rag"])
functions_router.include_router(vectorize_data.router, tags=["rag"])
functions_router.include_router(compress_snippets.router, tags=["rag"])
functions_router.include_router(daily_digests.router, tags=["rag"])

# Assistant tools
functions_router.include_router(tool_contacts.router, tags=["tools"])
functions_router.include_router(tool_calendar_create.router, tags=["tools"])

# Voice
functions_router.include_router(voice_speak.router, tags=["voice"])
