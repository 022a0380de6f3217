from __future__ import annotations


class TaskStoreError(Exception):
    """Base class for errors raised by task store operations."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# PUBLIC_INTERFACE
class TaskValidationError(TaskStoreError):
    """Client supplied invalid or incomplete task data."""

    status_code = 400


# PUBLIC_INTERFACE
class TaskNotFoundError(TaskStoreError):
    """The referenced task id does not exist."""

    status_code = 404

    def __init__(self, message: str = "Task not found") -> None:
        super().__init__(message)
