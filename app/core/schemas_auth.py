"""Pydantic schemas for LifeOS users."""

from datetime import datetime

from pydantic import BaseModel, Field


class UserBase(BaseModel):
    """Base user fields."""
    name: str
    timezone: str = "UTC"
    daily_capacity: int = Field(default=8, ge=0, description="Max contacts surfaced per day")


class User(UserBase):
    """Full user row."""
    id: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
