from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Any, List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# A new reminder is due one day after it is created.
NEW_REMINDER_DELAY = timedelta(hours=24)


# PUBLIC_INTERFACE
class ToDo(BaseModel):
    """
    A single to-do item.

    Fields:
    - id: UUID assigned at construction; frozen afterwards
    - title: Short text the user identifies the to-do by
    - is_complete: Completion flag
    - due_date: Deadline; any value is accepted, including past dates
    - notes: Optional free text with longer details

    Two to-dos are equal when their ids are equal, whatever their other
    fields hold, and hash consistently with that rule.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4, frozen=True, description="Unique identifier")
    title: str = Field(..., description="Short title for the to-do")
    is_complete: bool = Field(default=False, description="Completion status flag")
    due_date: datetime = Field(..., description="Deadline of the to-do")
    notes: Optional[str] = Field(default=None, description="Optional free-text notes")

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ToDo):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"ToDo(id={self.id!s}, title={self.title!r}, is_complete={self.is_complete})"


# PUBLIC_INTERFACE
def default_due_date(now: Optional[datetime] = None) -> datetime:
    """Return the due date given to a freshly created reminder."""
    return (now or datetime.now()) + NEW_REMINDER_DELAY


# PUBLIC_INTERFACE
def sample_todos(now: Optional[datetime] = None) -> List[ToDo]:
    """
    Return the built-in to-dos shown when nothing has been saved yet.

    Every call builds new records with new ids. All of them are incomplete and
    share one due date (`now`, defaulting to the current time).
    """
    due = now or datetime.now()
    samples = [
        ("Renew the ID", "The ID expires next month. I need to buy a form and submit it as soon as I could."),
        ("Call my brother", "Discuss the latest Apple announcements"),
        ("Read The Swift Programming Language Book", None),
        ("Watch Ted Lasso", "Watch season 1 and season 2 before season 3 is out"),
        ("Finish that app", "Just ship it. No more refinements."),
        ("Work at Apple", "If they can ship those bugs that affects millions, why can't I"),
        ("Visit all 27 Egypt's governorates", None),
    ]
    todos = [ToDo(title=title, is_complete=False, due_date=due, notes=notes) for title, notes in samples]
    logger.debug("Built %d sample to-dos", len(todos))
    return todos
