"""Searchable text for each kind of LifeOS record.

Bulk vectorization turns records into one line of text per item before
embedding. Each builder extracts the most meaningful fields of its type.
"""

from typing import Any, Callable

from pydantic import BaseModel

from app.core.schemas_lifeos import (
    DailyGoal,
    Envelope,
    JournalEntry,
    PhysicalLog,
    ReadingItem,
    ReadingNote,
    Transaction,
    WeeklyReview,
)
from app.core.text_normalize import compact_content


def _join(*parts: Any) -> str:
    """Join the truthy parts."""
    return "".join(str(p) for p in parts if p)


def _journal(e: JournalEntry) -> str:
    return _join(
        "Journal entry from ", e.created_at.date().isoformat(), ": ",
        e.title and f"{e.title}. ",
        compact_content(e.content),
        e.area and f" Area: {e.area}.",
        e.tags and f" Tags: {', '.join(e.tags)}.",
    )


def _reading(r: ReadingItem) -> str:
    return _join(
        "Book: ", r.title,
        r.author and f" by {r.author}",
        ". ",
        r.category and f"Category: {r.category}. ",
        f"Status: {r.status.value}. Progress: {r.progress_pct}%.",
    )


def _reading_note(n: ReadingNote) -> str:
    return _join("Reading note from ", n.created_at.date().isoformat(), ": ", compact_content(n.content))


def _weekly_review(w: WeeklyReview) -> str:
    commitments = "; ".join(f"{k}: {v}" for k, v in w.commitments.items())
    return _join(
        "Weekly review for week of ", w.week_start.isoformat(), ": ",
        compact_content(w.summary),
        commitments and f" Commitments: {commitments}.",
    )


def _goal(g: DailyGoal) -> str:
    status = "done" if g.done else "open"
    return f"Goal for {g.date.isoformat()}: {g.title}. Status: {status}."


def _transaction(t: Transaction) -> str:
    return _join(
        "Transaction on ", t.date.isoformat(), ": ",
        f"Amount: ${t.amount:.2f}.",
        t.category and f" Category: {t.category}.",
        t.note and f" Note: {t.note}.",
    )


def _envelope(e: Envelope) -> str:
    return f"Envelope {e.name}: balance ${e.balance:.2f} of ${e.goal_amount:.2f} goal."


def _physical(p: PhysicalLog) -> str:
    parts = [f"Physical log from {p.date.isoformat()}:"]
    if p.weight:
        parts.append(f"Weight: {p.weight.value}kg.")
    if p.sleep and p.sleep.hours is not None:
        parts.append(f"Sleep: {p.sleep.hours}h.")
    if p.workout:
        workout = p.workout.type or "workout"
        if p.workout.duration:
            workout += f" {p.workout.duration}min"
        parts.append(f"Exercise: {workout}.")
    if p.energy:
        parts.append(f"Energy: {p.energy.level}/5.")
    if p.total_calories:
        parts.append(f"Calories: {p.total_calories}.")
    if p.notes:
        parts.append(compact_content(p.notes))
    return " ".join(parts)


# dataType -> (record model, text builder)
RECORD_BUILDERS: dict[str, tuple[type[BaseModel], Callable[[Any], str]]] = {
    "journal": (JournalEntry, _journal),
    "reading": (ReadingItem, _reading),
    "reading_note": (ReadingNote, _reading_note),
    "weekly_review": (WeeklyReview, _weekly_review),
    "goal": (DailyGoal, _goal),
    "transaction": (Transaction, _transaction),
    "envelope": (Envelope, _envelope),
    "physical": (PhysicalLog, _physical),
}


def build_record_text(data_type: str, item: dict[str, Any]) -> str:
    """
    Build the text to embed for one record.

    Args:
        data_type: Record type (journal, reading, goal, ...)
        item: Raw record as sent by the front end

    Returns:
        Searchable text

    Raises:
        ValueError: Unknown data_type
        pydantic.ValidationError: Item does not match the record schema
    """
    entry = RECORD_BUILDERS.get(data_type)
    if not entry:
        raise ValueError(f"Unsupported data type: {data_type}")
    model, builder = entry
    return builder(model.model_validate(item)).strip()


def build_contact_text(contact: dict[str, Any]) -> str:
    """Searchable text for a contacts row."""
    fields = (
        "name",
        "email",
        "phone",
        "company",
        "current_situation",
        "working_on",
        "how_to_add_value",
        "notes",
    )
    return " ".join(str(contact[f]) for f in fields if contact.get(f)).strip()
