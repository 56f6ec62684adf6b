"""Pydantic schemas for contacts and interactions."""

from datetime import date, datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ContactSegment(str, Enum):
    """Relationship tier that drives how often a contact is surfaced."""
    TOP5 = "TOP5"
    WEEKLY15 = "WEEKLY15"
    MONTHLY100 = "MONTHLY100"


class InteractionChannel(str, Enum):
    WHATSAPP = "whatsapp"
    SMS = "sms"
    EMAIL = "email"
    LINKEDIN = "linkedin"


class InteractionDirection(str, Enum):
    OUT = "out"
    IN = "in"


# ============================================================================
# Contact Schemas
# ============================================================================


class Contact(BaseModel):
    """A contacts row."""
    id: UUID
    user_id: Optional[str] = None
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    company: Optional[str] = None
    segment: Optional[ContactSegment] = None
    current_situation: Optional[str] = None
    working_on: Optional[str] = None
    how_to_add_value: Optional[str] = None
    notes: Optional[str] = None
    last_touch: Optional[date] = None
    next_touch: Optional[date] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ContactSummary(BaseModel):
    """Projection returned by contact search."""
    id: UUID
    name: str
    phone: Optional[str] = None
    email: Optional[str] = None


class ContactUpsert(BaseModel):
    """Fields accepted by the contacts tool upsert action."""
    id: Optional[UUID] = None
    name: str = Field(..., min_length=1)
    phone: Optional[str] = None
    email: Optional[str] = None
    notes: Optional[str] = None


# ============================================================================
# Interaction Schemas
# ============================================================================


class InteractionCreate(BaseModel):
    """Schema for logging an interaction with a contact."""
    contact_id: UUID
    channel: InteractionChannel
    direction: InteractionDirection = InteractionDirection.OUT
    date: date
    message_body: Optional[str] = None
    outcome: Optional[str] = None
    follow_up_due_at: Optional[datetime] = None


class Interaction(InteractionCreate):
    """An interactions row."""
    id: UUID
    user_id: str
    ai_summary: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


class ContactCadenceRequest(BaseModel):
    """Body of the contact cadence endpoints."""
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(..., alias="userId")
    channel: Optional[InteractionChannel] = None
    message_body: Optional[str] = Field(default=None, alias="messageBody")
    days: int = Field(default=7, ge=1, le=365)
