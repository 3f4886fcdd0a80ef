from __future__ import annotations

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ..models import ToDo
from ..schemas import ToDoCreate, ToDoOut, ToDoUpdate
from ..store import ToDoStore

router = APIRouter(
    prefix="/api/v1/todos",
    tags=["todos"],
)


# PUBLIC_INTERFACE
def get_store(request: Request) -> ToDoStore:
    """
    Dependency returning the store owned by the running application.
    """
    return request.app.state.store


def _get_or_404(store: ToDoStore, todo_id: UUID) -> ToDo:
    todo = store.get(todo_id)
    if todo is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="ToDo not found")
    return todo


# PUBLIC_INTERFACE
@router.get(
    "/",
    response_model=List[ToDoOut],
    summary="List ToDos",
    description="Return every to-do in display order.",
)
def list_todos(store: ToDoStore = Depends(get_store)) -> List[ToDoOut]:
    """
    List all to-dos.
    """
    return [ToDoOut.model_validate(todo) for todo in store.all_todos]


# PUBLIC_INTERFACE
@router.post(
    "/",
    response_model=ToDoOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create ToDo",
    description="Create a new to-do at the end of the list and return it.",
    responses={
        201: {"description": "ToDo created successfully"},
        422: {"description": "Validation error"},
    },
)
def create_todo(payload: ToDoCreate, store: ToDoStore = Depends(get_store)) -> ToDoOut:
    """
    Create a new to-do.
    """
    todo = payload.to_todo()
    store.add_new(todo)
    return ToDoOut.model_validate(todo)


# PUBLIC_INTERFACE
@router.get(
    "/{todo_id}",
    response_model=ToDoOut,
    summary="Get ToDo",
    description="Get a single to-do by ID.",
    responses={
        200: {"description": "ToDo found"},
        404: {"description": "ToDo not found"},
    },
)
def get_todo(todo_id: UUID, store: ToDoStore = Depends(get_store)) -> ToDoOut:
    """
    Retrieve a single to-do by its ID.
    """
    return ToDoOut.model_validate(_get_or_404(store, todo_id))


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=ToDoOut,
    summary="Save ToDo",
    description=(
        "Save the to-do edited in a detail screen. An existing to-do with this ID is replaced "
        "in place; otherwise the to-do is created at the end of the list."
    ),
    responses={
        200: {"description": "Existing ToDo replaced"},
        201: {"description": "ToDo created"},
    },
)
def put_todo(
    todo_id: UUID,
    payload: ToDoCreate,
    response: Response,
    store: ToDoStore = Depends(get_store),
) -> ToDoOut:
    """
    Replace-or-append semantics: the response status tells an edit (200) from a creation (201).
    """
    todo = payload.to_todo(todo_id)
    replaced = store.replace_or_append(todo)
    response.status_code = status.HTTP_200_OK if replaced else status.HTTP_201_CREATED
    return ToDoOut.model_validate(todo)


# PUBLIC_INTERFACE
@router.patch(
    "/{todo_id}",
    response_model=ToDoOut,
    summary="Update ToDo",
    description="Partially update fields of a to-do.",
    responses={
        200: {"description": "ToDo updated"},
        404: {"description": "ToDo not found"},
    },
)
def patch_todo(todo_id: UUID, payload: ToDoUpdate, store: ToDoStore = Depends(get_store)) -> ToDoOut:
    """
    Partial update of a to-do.
    """
    updated = payload.apply_to(_get_or_404(store, todo_id))
    store.replace_or_append(updated)
    return ToDoOut.model_validate(updated)


# PUBLIC_INTERFACE
@router.post(
    "/{todo_id}/toggle",
    response_model=ToDoOut,
    summary="Toggle ToDo",
    description="Flip the completion flag of a to-do, as the list's checkmark button does.",
    responses={
        200: {"description": "ToDo toggled"},
        404: {"description": "ToDo not found"},
    },
)
def toggle_todo(todo_id: UUID, store: ToDoStore = Depends(get_store)) -> ToDoOut:
    existing = _get_or_404(store, todo_id)
    toggled = existing.model_copy(update={"is_complete": not existing.is_complete})
    store.replace_or_append(toggled)
    return ToDoOut.model_validate(toggled)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete ToDo",
    description="Delete a to-do by ID.",
    responses={
        204: {"description": "ToDo deleted"},
        404: {"description": "ToDo not found"},
    },
)
def delete_todo(todo_id: UUID, store: ToDoStore = Depends(get_store)) -> None:
    """
    Delete a to-do. Returns 204 on success, 404 if not found.
    """
    store.remove(_get_or_404(store, todo_id))
    return None
