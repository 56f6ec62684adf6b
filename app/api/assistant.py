"""API endpoints for assistant request routing."""

from datetime import date
from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field

from app.core.intent_router import detect_intent, extract_date_hints

router = APIRouter()


class IntentRequest(BaseModel):
    text: str = Field(..., max_length=4000)


class IntentResponse(BaseModel):
    intent: str
    confidence: float
    post_action: Optional[bool] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@router.post("/intent", response_model=IntentResponse)
async def route_intent(request: IntentRequest) -> IntentResponse:
    """Classify an utterance as action, recall or mixed, with any date range it mentions."""
    result = detect_intent(request.text)
    hints = extract_date_hints(request.text)
    return IntentResponse(
        intent=result.intent,
        confidence=result.confidence,
        post_action=result.post_action,
        start_date=hints.start_date,
        end_date=hints.end_date,
    )
