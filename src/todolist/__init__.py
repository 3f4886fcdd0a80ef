"""
Single-user to-do list.

The package exposes the record type and the store; the FastAPI application
lives in `todolist.main` (`uvicorn todolist.main:app`).
"""

from .models import ToDo, default_due_date, sample_todos
from .store import ToDoStore

__all__ = ["ToDo", "ToDoStore", "default_due_date", "sample_todos"]
__version__ = "0.1.0"
