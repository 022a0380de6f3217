from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

# Incoming timestamps can be a date, datetime, or ISO8601 string
TimestampInput = Union[date, datetime, str]


def _as_utc(value: datetime, field_name: str = "timestamp") -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    try:
        return value.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"Invalid {field_name}; value is out of range once converted to UTC.") from e


def parse_timestamp(value: Optional[TimestampInput], field_name: str = "timestamp") -> Optional[datetime]:
    """
    Normalize timestamp input into an aware UTC datetime.
    - None and "" mean absent.
    - Strings are parsed as ISO8601 datetimes ('Z' suffix allowed); a bare date is set to 00:00.
    - Naive values are taken to be UTC.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        return _as_utc(value, field_name)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    if isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        if s.endswith(("Z", "z")):
            s = s[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(s)
        except ValueError:
            try:
                d = date.fromisoformat(s)
            except ValueError as e:
                raise ValueError(
                    f"Invalid {field_name} format. Use ISO8601 date or datetime string "
                    "(e.g., '2026-02-20' or '2026-02-20T10:00:00Z')."
                ) from e
            return datetime(d.year, d.month, d.day, tzinfo=timezone.utc)
        return _as_utc(parsed, field_name)

    raise ValueError(f"Invalid type for {field_name}; expected date, datetime, or ISO8601 string.")


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class _TaskInput(_CamelModel):
    @field_validator("title", check_fields=False)
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        """Strip surrounding whitespace; emptiness is judged by the store."""
        return v.strip() if v is not None else v

    @field_validator("start_date", "due_date", mode="before", check_fields=False)
    @classmethod
    def parse_dates(cls, v: Optional[TimestampInput], info: ValidationInfo) -> Optional[datetime]:
        return parse_timestamp(v, to_camel(info.field_name))


# PUBLIC_INTERFACE
class TaskCreate(_TaskInput):
    """
    Schema for creating a new Task.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries",
                "desc": "Milk, eggs, bread",
                "category": "Groceries",
                "startDate": "2026-02-20T10:00:00Z",
                "dueDate": "2026-02-22T10:00:00Z",
            }
        }
    )

    title: Optional[str] = Field(default=None, description="Short title for the task (required)")
    desc: Optional[str] = Field(default=None, description="Optional detailed description")
    category: Optional[str] = Field(default=None, description="Optional category label")
    start_date: Optional[datetime] = Field(
        default=None,
        description="Start date/time. Requires dueDate and must not be after it",
    )
    due_date: Optional[datetime] = Field(default=None, description="Due date/time")


# PUBLIC_INTERFACE
class TaskUpdate(_TaskInput):
    """
    Schema for updating an existing Task.
    All fields are optional; only fields sent by the client are applied.
    Unknown fields are ignored.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Buy groceries and supplies",
                "isCompleted": True,
                "dueDate": "2026-02-23T10:00:00Z",
            }
        }
    )

    title: Optional[str] = Field(default=None, description="Short title for the task")
    desc: Optional[str] = Field(default=None, description="Detailed description")
    category: Optional[str] = Field(default=None, description="Category label")
    is_completed: Optional[bool] = Field(default=None, description="Completion status flag")
    start_date: Optional[datetime] = Field(default=None, description="Start date/time; null clears it")
    due_date: Optional[datetime] = Field(default=None, description="Due date/time; null clears it")


class PriorityOut(BaseModel):
    low: bool = False
    medium: bool = False
    high: bool = False


# PUBLIC_INTERFACE
class TaskOut(_CamelModel):
    """
    Schema returned by the API for a Task.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "taskId": 3,
                "title": "Buy groceries",
                "desc": "Milk, eggs, bread",
                "createdAt": "2026-02-18T09:15:30.123456Z",
                "updatedAt": "2026-02-18T09:15:30.123456Z",
                "completedAt": None,
                "isCompleted": False,
                "isDeleted": False,
                "parentTaskId": None,
                "priority": {"low": False, "medium": False, "high": False},
                "category": "Groceries",
                "startDate": None,
                "dueDate": "2026-02-21T10:00:00Z",
            }
        }
    )

    task_id: int = Field(..., description="Unique identifier of the task")
    title: str = Field(..., description="Short title for the task")
    desc: str = Field(default="", description="Detailed description")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last update timestamp")
    completed_at: Optional[datetime] = Field(default=None, description="Completion timestamp")
    is_completed: bool = Field(default=False, description="Completion status flag")
    is_deleted: bool = Field(default=False, description="Reserved soft-delete marker")
    parent_task_id: Optional[int] = Field(default=None, description="Reserved parent task reference")
    priority: PriorityOut = Field(default_factory=PriorityOut, description="Reserved priority flags")
    category: str = Field(default="", description="Category label")
    start_date: Optional[datetime] = Field(default=None, description="Start date/time")
    due_date: Optional[datetime] = Field(default=None, description="Due date/time")
