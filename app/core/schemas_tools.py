"""Pydantic schemas for the calendar and voice tool functions."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CalendarEventCreate(BaseModel):
    """Body of the tool-calendar-create function."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    title: str
    start_iso: str = Field(..., alias="startIso")
    end_iso: str = Field(..., alias="endIso")
    attendees: list[str] = Field(default_factory=list)
    description: Optional[str] = None
    location: Optional[str] = None


class SpeakRequest(BaseModel):
    """Body of the voice-speak function."""
    text: Optional[str] = None
    voice_id: Optional[str] = None
