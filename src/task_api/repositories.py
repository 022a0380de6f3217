from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from functools import lru_cache
from threading import RLock
from typing import Callable, Dict, List, Optional

from .errors import TaskNotFoundError, TaskValidationError
from .models import TaskEntity, default_priority
from .schemas import TaskCreate, TaskUpdate
from .settings import get_settings

logger = logging.getLogger(__name__)

TITLE_REQUIRED = "Title is required"
START_AFTER_DUE = "Start date cannot be after due date"
DUE_REQUIRED = "Due date is required when start date is provided"

# Sample records the service ships with when SEED_SAMPLE_TASKS is enabled
SAMPLE_TASKS = (
    TaskCreate(
        title="Buy nasi tomato",
        desc="Sedap gila nasi tomato ni, kena beli",
        category="Groceries",
    ),
    TaskCreate(
        title="Learn Express.js",
        desc="Learn how to build web applications using Express.js",
        category="Growth",
    ),
)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def validate_dates(start_date: Optional[datetime], due_date: Optional[datetime]) -> None:
    """
    Enforce the scheduling rules shared by create and update.

    Raises:
        TaskValidationError: if start_date is after due_date, or start_date is
        given without a due_date. A due_date on its own is allowed.
    """
    if start_date is not None and due_date is not None and start_date > due_date:
        raise TaskValidationError(START_AFTER_DUE)
    if start_date is not None and due_date is None:
        raise TaskValidationError(DUE_REQUIRED)


def _snapshot(entity: TaskEntity) -> TaskEntity:
    copied = entity.copy()
    copied["priority"] = entity["priority"].copy()
    return copied


# PUBLIC_INTERFACE
class TaskStore(ABC):
    """Abstract contract for task storage."""

    @abstractmethod
    def list(self) -> List[TaskEntity]:
        """Return all tasks in insertion order."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored tasks."""

    @abstractmethod
    def get(self, task_id: int) -> TaskEntity:
        """Return a task by id. Raises TaskNotFoundError if missing."""

    @abstractmethod
    def create(self, data: TaskCreate) -> TaskEntity:
        """Validate, store and return a new task."""

    @abstractmethod
    def update(self, task_id: int, data: TaskUpdate) -> TaskEntity:
        """Apply a partial update and return the updated task."""

    @abstractmethod
    def delete(self, task_id: int) -> TaskEntity:
        """Remove a task and return it. Raises TaskNotFoundError if missing."""


class InMemoryTaskStore(TaskStore):
    """
    Thread-safe in-memory task store.

    Records live in an insertion-ordered dict keyed by task id. Ids come from a
    store-wide counter and are never reused, including after deletion. All
    returned records are copies.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._lock = RLock()
        self._items: Dict[int, TaskEntity] = {}
        self._next_id = 1
        self._clock = clock or utc_now

    def _now(self) -> datetime:
        return self._clock()

    def _allocate_id(self) -> int:
        with self._lock:
            i = self._next_id
            self._next_id += 1
            return i

    def _require(self, task_id: int) -> TaskEntity:
        item = self._items.get(task_id)
        if item is None:
            logger.debug("Task %s not found", task_id)
            raise TaskNotFoundError()
        return item

    def list(self) -> List[TaskEntity]:
        with self._lock:
            return [_snapshot(t) for t in self._items.values()]

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def get(self, task_id: int) -> TaskEntity:
        with self._lock:
            return _snapshot(self._require(task_id))

    def create(self, data: TaskCreate) -> TaskEntity:
        if not data.title:
            logger.debug("Rejected task create: %s", TITLE_REQUIRED)
            raise TaskValidationError(TITLE_REQUIRED)
        try:
            validate_dates(data.start_date, data.due_date)
        except TaskValidationError as e:
            logger.debug("Rejected task create: %s", e.message)
            raise

        with self._lock:
            now = self._now()
            entity: TaskEntity = {
                "task_id": self._allocate_id(),
                "title": data.title,
                "desc": data.desc or "",
                "created_at": now,
                "updated_at": now,
                "completed_at": None,
                "is_completed": False,
                "is_deleted": False,
                "parent_task_id": None,
                "priority": default_priority(),
                "category": data.category or "",
                "start_date": data.start_date,
                "due_date": data.due_date,
            }
            self._items[entity["task_id"]] = entity
            logger.info("Created task %s", entity["task_id"])
            return _snapshot(entity)

    def update(self, task_id: int, data: TaskUpdate) -> TaskEntity:
        with self._lock:
            existing = self._require(task_id)
            try:
                updated = self._overlay(existing, data)
            except TaskValidationError as e:
                logger.debug("Rejected update of task %s: %s", task_id, e.message)
                raise

            now = self._now()
            updated["updated_at"] = max(now, existing["updated_at"])
            if updated["is_completed"] and updated["completed_at"] is None:
                updated["completed_at"] = now
            elif not updated["is_completed"] and updated["completed_at"] is not None:
                updated["completed_at"] = None

            self._items[task_id] = updated
            logger.info("Updated task %s", task_id)
            return _snapshot(updated)

    def _overlay(self, existing: TaskEntity, data: TaskUpdate) -> TaskEntity:
        """
        Build the proposed end state of a task from the fields the client sent.

        Only title, desc, category, is_completed, start_date and due_date are
        patchable. Date rules are checked against the merged values, so a patch
        carrying one date is validated together with the other stored date.
        """
        sent = data.model_fields_set
        updated = _snapshot(existing)

        if "title" in sent:
            if not data.title:
                raise TaskValidationError(TITLE_REQUIRED)
            updated["title"] = data.title
        if "desc" in sent:
            updated["desc"] = data.desc or ""
        if "category" in sent:
            updated["category"] = data.category or ""
        if data.is_completed is not None:
            updated["is_completed"] = data.is_completed
        if "start_date" in sent:
            updated["start_date"] = data.start_date
        if "due_date" in sent:
            updated["due_date"] = data.due_date

        validate_dates(updated["start_date"], updated["due_date"])
        return updated

    def delete(self, task_id: int) -> TaskEntity:
        with self._lock:
            self._require(task_id)
            removed = self._items.pop(task_id)
            logger.info("Deleted task %s", task_id)
            return _snapshot(removed)


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_store() -> TaskStore:
    """
    Return the process-wide task store.
    Seeds the sample tasks when SEED_SAMPLE_TASKS is enabled.
    """
    store = InMemoryTaskStore()
    if get_settings().seed_sample_tasks:
        for sample in SAMPLE_TASKS:
            store.create(sample)
        logger.info("Seeded %d sample tasks", len(SAMPLE_TASKS))
    return store
