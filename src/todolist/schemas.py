from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .archive import find_unencodable
from .models import ToDo, default_due_date

# Shared type for incoming due_date which can be a date, datetime, or ISO8601 string
DueDateInput = Union[date, datetime, str]

TITLE_MAX_LENGTH = 200


def _parse_due_date(value: Optional[DueDateInput]) -> Optional[datetime]:
    """
    Normalize due_date input into a datetime (naive or aware).
    - If value is a string, parse it as an ISO datetime; a bare date becomes 00:00.
    - If value is a date (not datetime), convert to datetime at 00:00.
    - If value is a datetime, return as-is.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, 0, 0, 0)

    if isinstance(value, str):
        s = value.strip()
        try:
            return datetime.fromisoformat(s)
        except ValueError:
            try:
                d = date.fromisoformat(s)
                return datetime(d.year, d.month, d.day, 0, 0, 0)
            except ValueError as e:
                raise ValueError(
                    "Invalid due_date format. Use ISO8601 date or datetime string (e.g., '2025-01-31' or '2025-01-31T13:45:00')."
                ) from e

    raise ValueError("Invalid type for due_date; expected date, datetime, or ISO8601 string.")


def _check_savable(field: str, v: str) -> str:
    bad = find_unencodable(v)
    if bad is not None:
        raise ValueError(f"{field} contains a character that cannot be saved: {bad!r}")
    return v


def _clean_title(v: str) -> str:
    s = _check_savable("title", v.strip())
    if not (1 <= len(s) <= TITLE_MAX_LENGTH):
        raise ValueError(f"title length must be between 1 and {TITLE_MAX_LENGTH} characters")
    return s


# PUBLIC_INTERFACE
class ToDoCreate(BaseModel):
    """
    Schema for a new to-do, or for the full replacement of an existing one.

    A to-do can only be saved with a non-blank title. Without a due_date the
    to-do is due 24 hours from now.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "is_complete": False,
                "due_date": "2025-02-01T09:00:00",
                "notes": "Milk, chocolate and bananas",
            }
        }
    )

    title: str = Field(..., description="Short title for the to-do")
    is_complete: bool = Field(default=False, description="Completion status flag")
    due_date: datetime = Field(
        default_factory=default_due_date,
        description="Deadline. Accepts ISO8601 date or datetime; dates are set to 00:00",
    )
    notes: Optional[str] = Field(default=None, description="Optional free-text notes")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """Strip whitespace and enforce 1..200 length."""
        return _clean_title(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Optional[DueDateInput]) -> Optional[datetime]:
        """Normalize due_date from str/date/datetime to datetime."""
        return _parse_due_date(v)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v: Optional[str]) -> Optional[str]:
        """Reject notes holding characters the archive cannot store."""
        return v if v is None else _check_savable("notes", v)

    def to_todo(self, todo_id: Optional[UUID] = None) -> ToDo:
        """Build the record, keeping `todo_id` when one is given."""
        fields = self.model_dump()
        if todo_id is not None:
            fields["id"] = todo_id
        return ToDo(**fields)


# PUBLIC_INTERFACE
class ToDoUpdate(BaseModel):
    """
    Schema for editing an existing to-do.
    All fields are optional; only provided fields are changed. An explicit
    null for notes clears them.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries and supplies",
                "is_complete": True,
                "due_date": "2025-02-02T09:30:00",
            }
        }
    )

    title: Optional[str] = Field(default=None, description="Short title for the to-do")
    is_complete: Optional[bool] = Field(default=None, description="Completion status flag")
    due_date: Optional[datetime] = Field(
        default=None,
        description="Deadline. Accepts ISO8601 date or datetime; dates are set to 00:00",
    )
    notes: Optional[str] = Field(default=None, description="Optional free-text notes")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: Optional[str]) -> Optional[str]:
        """If title is provided, strip whitespace and enforce 1..200 length."""
        if v is None:
            return v
        return _clean_title(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Optional[DueDateInput]) -> Optional[datetime]:
        return _parse_due_date(v)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v: Optional[str]) -> Optional[str]:
        return v if v is None else _check_savable("notes", v)

    def apply_to(self, todo: ToDo) -> ToDo:
        """Return a copy of `todo` (same id) with the provided fields changed."""
        changes = {}
        if self.title is not None:
            changes["title"] = self.title
        if self.is_complete is not None:
            changes["is_complete"] = self.is_complete
        if self.due_date is not None:
            changes["due_date"] = self.due_date
        if "notes" in self.model_fields_set:
            # Respect explicit nulling of notes
            changes["notes"] = self.notes
        return todo.model_copy(update=changes)


# PUBLIC_INTERFACE
class ToDoOut(BaseModel):
    """
    Schema returned by the API for a to-do.
    """

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "3f2b8c1e-8d4a-4a57-9d0e-1c2b3a4d5e6f",
                "title": "Buy groceries",
                "is_complete": False,
                "due_date": "2025-02-01T09:00:00",
                "notes": "Milk, chocolate and bananas",
            }
        },
    )

    id: UUID = Field(..., description="Unique identifier of the to-do")
    title: str = Field(..., description="Short title for the to-do")
    is_complete: bool = Field(..., description="Completion status flag")
    due_date: datetime = Field(..., description="Deadline as an ISO8601 datetime")
    notes: Optional[str] = Field(default=None, description="Optional free-text notes")
