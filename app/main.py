"""FastAPI application entry point."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api import functions_router
from app.api import router as api_router
from app.api.function_helpers import CORS_ALLOW_HEADERS

app = FastAPI(
    title="LifeOS API",
    description="Journaling, contacts, calendar, RAG indexing and voice functions for LifeOS",
    version="0.1.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=CORS_ALLOW_HEADERS,
)


@app.get("/health")
async def health_check() -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse(content={"status": "ok"}, status_code=200)


# Include v1 API router
app.include_router(api_router, prefix="/v1", tags=["v1"])

# Tool and RAG functions, addressed by name like serverless functions
app.include_router(functions_router, prefix="/functions/v1", tags=["functions"])
