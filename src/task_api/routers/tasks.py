from __future__ import annotations

import re
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status

from ..errors import TaskNotFoundError
from ..repositories import TaskStore, get_store
from ..schemas import TaskCreate, TaskOut, TaskUpdate

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
)

_ERROR_BODY = {
    "content": {"application/json": {"example": {"error": "Task not found"}}},
}


def _get_store(store: TaskStore = Depends(get_store)) -> TaskStore:
    """
    Dependency wrapper for the store to keep signatures clean.
    """
    return store


_TASK_ID = re.compile(r"-?[0-9]+")


def _parse_task_id(raw: str) -> int:
    """Ids that are not plain ASCII integers cannot name a task."""
    if not _TASK_ID.fullmatch(raw):
        raise TaskNotFoundError()
    return int(raw)


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TaskOut],
    summary="List Tasks",
    description="Return every task in creation order.",
)
def list_tasks(store: TaskStore = Depends(_get_store)) -> List[TaskOut]:
    return [TaskOut(**t) for t in store.list()]  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.get(
    "/{task_id}",
    response_model=TaskOut,
    summary="Get Task",
    description="Get a single task by ID.",
    responses={
        200: {"description": "Task found"},
        404: {"description": "Task not found", **_ERROR_BODY},
    },
)
def get_task(task_id: str, store: TaskStore = Depends(_get_store)) -> TaskOut:
    """
    Retrieve a single task by its ID.
    """
    return TaskOut(**store.get(_parse_task_id(task_id)))  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Task",
    description=(
        "Create a new task and return the created resource.\n\n"
        "- title is required\n"
        "- startDate requires dueDate and must not be after it\n"
        "- dueDate may be given on its own"
    ),
    responses={
        201: {"description": "Task created successfully"},
        400: {"description": "Validation error"},
    },
)
def create_task(
    payload: Optional[TaskCreate] = Body(default=None),
    store: TaskStore = Depends(_get_store),
) -> TaskOut:
    # A request without a body carries no title
    created = store.create(payload if payload is not None else TaskCreate())
    return TaskOut(**created)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.put(
    "/{task_id}",
    response_model=TaskOut,
    summary="Update Task",
    description=(
        "Update the fields sent in the body; omitted fields keep their stored value. "
        "Date rules are checked against the resulting startDate/dueDate. Setting "
        "isCompleted stamps or clears completedAt."
    ),
    responses={
        200: {"description": "Task updated"},
        400: {"description": "Validation error"},
        404: {"description": "Task not found", **_ERROR_BODY},
    },
)
def update_task(
    task_id: str,
    payload: Optional[TaskUpdate] = Body(default=None),
    store: TaskStore = Depends(_get_store),
) -> TaskOut:
    """
    Partial update of a task. A missing body is an empty patch.
    """
    updated = store.update(_parse_task_id(task_id), payload if payload is not None else TaskUpdate())
    return TaskOut(**updated)  # type: ignore[arg-type]


# PUBLIC_INTERFACE
@router.delete(
    "/{task_id}",
    response_model=TaskOut,
    summary="Delete Task",
    description="Delete a task by ID and return the removed record.",
    responses={
        200: {"description": "Task deleted"},
        404: {"description": "Task not found", **_ERROR_BODY},
    },
)
def delete_task(task_id: str, store: TaskStore = Depends(_get_store)) -> TaskOut:
    removed = store.delete(_parse_task_id(task_id))
    return TaskOut(**removed)  # type: ignore[arg-type]
