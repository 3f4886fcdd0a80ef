from __future__ import annotations

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..store import ToDoStore
from .todos import get_store

router = APIRouter(
    prefix="/api/v1/lifecycle",
    tags=["lifecycle"],
)


class SaveResult(BaseModel):
    saved: bool = Field(..., description="Whether the archive file was written")


# PUBLIC_INTERFACE
@router.post(
    "/suspend",
    response_model=SaveResult,
    summary="Suspend",
    description="Signal that the client is about to go to the background. Saves every to-do.",
)
def suspend(store: ToDoStore = Depends(get_store)) -> SaveResult:
    """
    Checkpoint the store. A failed write is reported as saved=false, never as an error.
    """
    return SaveResult(saved=store.save())
