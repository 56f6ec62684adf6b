"""Pydantic schemas for LifeOS personal records.

These mirror what the front end keeps per user (journal, reading, reviews,
goals, finance and physical logs). Field names are camelCase on the wire and
snake_case in Python.
"""

from datetime import date, datetime
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("date", "week_start", mode="before", check_fields=False)
    @classmethod
    def keep_date_part(cls, v: Any) -> Any:
        """Accept full ISO timestamps and keep their date part."""
        if isinstance(v, str) and "T" in v:
            return datetime.fromisoformat(v).date()
        if isinstance(v, datetime):
            return v.date()
        return v


class ReadingStatus(str, Enum):
    QUEUED = "queued"
    READING = "reading"
    COMPLETED = "completed"


class JournalEntry(_Record):
    id: str
    created_at: datetime
    area: Optional[str] = None
    title: Optional[str] = None
    content: str
    tags: list[str] = Field(default_factory=list)


class ReadingItem(_Record):
    id: str
    title: str
    author: Optional[str] = None
    category: Optional[str] = None
    source: str = ""
    status: ReadingStatus = ReadingStatus.QUEUED
    progress_pct: int = Field(default=0, ge=0, le=100)
    pdf_url: Optional[str] = None


class ReadingNote(_Record):
    id: str
    item_id: str
    created_at: datetime
    content: str


class WeeklyReview(_Record):
    id: str
    week_start: date
    summary: str
    commitments: dict[str, str] = Field(default_factory=dict)


class DailyGoal(_Record):
    id: str
    date: date
    title: str
    done: bool = False


class Transaction(_Record):
    id: str
    date: date
    amount: float
    category: Optional[str] = None
    note: Optional[str] = None


class Envelope(_Record):
    id: str
    name: str
    goal_amount: float
    balance: float = 0.0


# ============================================================================
# Physical log
# ============================================================================


class SleepEntry(_Record):
    hours: Optional[float] = None
    quality: Optional[int] = Field(default=None, ge=1, le=5)
    notes: Optional[str] = None


class ExerciseSet(_Record):
    reps: int
    weight: Optional[float] = None  # kg


class Exercise(_Record):
    id: str
    name: str
    sets: list[ExerciseSet] = Field(default_factory=list)


class WorkoutEntry(_Record):
    type: Optional[str] = None
    duration: Optional[int] = None  # minutes
    intensity: Optional[int] = Field(default=None, ge=1, le=5)
    exercises: list[Exercise] = Field(default_factory=list)
    notes: Optional[str] = None


class WeightEntry(_Record):
    value: float  # kg
    notes: Optional[str] = None


class EnergyEntry(_Record):
    level: int = Field(..., ge=1, le=5)
    notes: Optional[str] = None


class CaffeineEntry(_Record):
    cups: Optional[int] = None
    notes: Optional[str] = None


class Meal(_Record):
    id: str
    time: str  # "08:30"
    type: Literal["breakfast", "lunch", "dinner", "snack"]
    description: str
    calories: Optional[int] = None


class PhysicalLog(_Record):
    id: str
    date: date
    sleep: Optional[SleepEntry] = None
    workout: Optional[WorkoutEntry] = None
    weight: Optional[WeightEntry] = None
    energy: Optional[EnergyEntry] = None
    caffeine: Optional[CaffeineEntry] = None
    meals: list[Meal] = Field(default_factory=list)
    total_calories: Optional[int] = None
    notes: Optional[str] = None
