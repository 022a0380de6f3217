from __future__ import annotations

from datetime import datetime
from typing import Optional, TypedDict


class PriorityFlags(TypedDict):
    """Priority markers of a task. Reserved: always initialized to all-false."""

    low: bool
    medium: bool
    high: bool


# PUBLIC_INTERFACE
class TaskEntity(TypedDict):
    """
    A lightweight domain model representing a Task record held by the store.

    Fields:
    - task_id: Unique integer identifier, never reused
    - title: Short title (non-empty, trimmed on input via schemas)
    - desc: Description, "" when not given
    - created_at: UTC creation timestamp, immutable
    - updated_at: UTC timestamp of the last successful mutation
    - completed_at: UTC completion timestamp, present iff is_completed
    - is_completed: Boolean completion flag
    - is_deleted: Reserved soft-delete marker, never toggled
    - parent_task_id: Reserved, never set
    - priority: Reserved priority flags
    - category: Free-form category, "" when not given
    - start_date: Optional start timestamp
    - due_date: Optional due timestamp
    """

    task_id: int
    title: str
    desc: str
    created_at: datetime
    updated_at: datetime
    completed_at: Optional[datetime]
    is_completed: bool
    is_deleted: bool
    parent_task_id: Optional[int]
    priority: PriorityFlags
    category: str
    start_date: Optional[datetime]
    due_date: Optional[datetime]


def default_priority() -> PriorityFlags:
    return {"low": False, "medium": False, "high": False}
