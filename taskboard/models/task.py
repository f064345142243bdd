"""Task models."""

from enum import Enum
from typing import Any, Optional
from datetime import date, datetime
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)

from taskboard.utils.dates import coerce_task_date
from taskboard.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

# Sector choices offered by the dashboard filters and task form
SECTORS = ("Marketing", "Design", "Web", "Tráfego", "Copy")


class TaskPriority(str, Enum):
    """Task priority (closed set)."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def _missing_(cls, value: object) -> Optional["TaskPriority"]:
        # Rows written by the first version of the dashboard use Portuguese labels
        legacy = {"Baixa": cls.LOW, "Média": cls.MEDIUM, "Alta": cls.HIGH}
        return legacy.get(value)


class TaskStatus(str, Enum):
    """Task status (closed set)."""
    PENDING = "Pending"
    COMPLETED = "Completed"

    @classmethod
    def _missing_(cls, value: object) -> Optional["TaskStatus"]:
        legacy = {"Pendente": cls.PENDING, "Concluída": cls.COMPLETED}
        return legacy.get(value)

    def toggled(self) -> "TaskStatus":
        """Return the opposite status."""
        if self is TaskStatus.COMPLETED:
            return TaskStatus.PENDING
        return TaskStatus.COMPLETED


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _enum_from_label(enum_cls: type[Enum], value: Any) -> Any:
    """Resolve a label (current or legacy) to its enum member; unknown labels raise ValueError."""
    if isinstance(value, str) and not isinstance(value, enum_cls):
        return enum_cls(value)
    return value


class Task(BaseModel):
    """
    A task row as stored in the ``tasks`` table.

    ``assignee_name`` is a free-text label (column ``name``), not a reference to
    a registered user. ``creator_id`` (column ``user_id``) is the identity that
    created the task and never changes afterwards.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Task ID, assigned by the store")
    title: str = Field(..., description="Task title")
    description: Optional[str] = Field(None, description="Task description")
    client: Optional[str] = Field(None, description="Client name")
    sector: Optional[str] = Field(None, description="Sector name")
    assignee_name: Optional[str] = Field(None, alias="name", description="Responsible person's name")
    start_date: Optional[date] = Field(None, description="Start date")
    due_date: Optional[date] = Field(None, description="Due date")
    priority: Optional[TaskPriority] = Field(None, description="Priority: Low, Medium, High")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="Status: Pending, Completed")
    link: Optional[str] = Field(None, description="Related link")
    observation: Optional[str] = Field(None, description="Free-form notes")
    created_by: Optional[str] = Field(None, description="Creating user ID")
    creator_id: Optional[str] = Field(None, alias="user_id", description="Creating user ID (immutable)")
    completed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("start_date", "due_date", mode="before")
    @classmethod
    def _lenient_dates(cls, value: Any) -> Optional[date]:
        return coerce_task_date(value)

    @field_validator("completed_at", "created_at", "updated_at", mode="wrap")
    @classmethod
    def _lenient_timestamps(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Optional[datetime]:
        try:
            return handler(_blank_to_none(value))
        except ValidationError:
            logger.debug("Treating malformed timestamp as absent", raw_value=repr(value)[:64])
            return None

    @field_validator("priority", mode="before")
    @classmethod
    def _lenient_priority(cls, value: Any) -> Optional[TaskPriority]:
        value = _blank_to_none(value)
        if value is None or isinstance(value, TaskPriority):
            return value
        try:
            return TaskPriority(value)
        except ValueError:
            logger.warning("Unknown task priority treated as absent", raw_value=str(value)[:32])
            return None

    @field_validator("status", mode="before")
    @classmethod
    def _lenient_status(cls, value: Any) -> TaskStatus:
        # Nullable column; a missing status means the task was never completed
        value = _blank_to_none(value)
        if value is None:
            return TaskStatus.PENDING
        try:
            return TaskStatus(value)
        except ValueError:
            logger.warning("Unknown task status treated as pending", raw_value=str(value)[:32])
            return TaskStatus.PENDING

    @property
    def is_completed(self) -> bool:
        return self.status is TaskStatus.COMPLETED

    @classmethod
    def from_row(cls, row: dict) -> "Task":
        """Build a Task from a Supabase ``tasks`` row."""
        return cls.model_validate(row)


class TaskCreate(BaseModel):
    """Payload for creating a task. Creator fields come from the session, never from here."""
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=1, description="Task title")
    description: Optional[str] = None
    client: Optional[str] = None
    sector: Optional[str] = None
    assignee_name: str = Field(..., min_length=1, alias="name", description="Responsible person's name")
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    priority: Optional[TaskPriority] = None
    status: TaskStatus = TaskStatus.PENDING
    link: Optional[str] = None
    observation: Optional[str] = None

    @field_validator("start_date", "due_date", mode="before")
    @classmethod
    def _lenient_dates(cls, value: Any) -> Optional[date]:
        return coerce_task_date(value)

    @field_validator("link", "description", "client", "sector", "observation", mode="before")
    @classmethod
    def _blank_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _priority_label(cls, value: Any) -> Any:
        return _enum_from_label(TaskPriority, _blank_to_none(value))

    @field_validator("status", mode="before")
    @classmethod
    def _status_label(cls, value: Any) -> Any:
        return _enum_from_label(TaskStatus, value)

    def to_row(self) -> dict:
        """Serialize to ``tasks`` column names."""
        return self.model_dump(mode="json", by_alias=True)


class TaskUpdate(BaseModel):
    """Partial task edit. Only fields explicitly set are written."""
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    client: Optional[str] = None
    sector: Optional[str] = None
    assignee_name: Optional[str] = Field(None, alias="name")
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    link: Optional[str] = None
    observation: Optional[str] = None

    @field_validator("start_date", "due_date", mode="before")
    @classmethod
    def _lenient_dates(cls, value: Any) -> Optional[date]:
        return coerce_task_date(value)

    @field_validator("title", "assignee_name", mode="before")
    @classmethod
    def _required_when_given(cls, value: Any) -> Any:
        # Omitting the field leaves it unchanged; an explicit null or blank would clear it
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("must not be empty")
        return value

    @field_validator("link", "description", "client", "sector", "observation", mode="before")
    @classmethod
    def _blank_optional(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("priority", mode="before")
    @classmethod
    def _priority_label(cls, value: Any) -> Any:
        return _enum_from_label(TaskPriority, value)

    @field_validator("status", mode="before")
    @classmethod
    def _status_label(cls, value: Any) -> Any:
        return _enum_from_label(TaskStatus, value)

    def to_row(self) -> dict:
        """Serialize only the explicitly set fields to ``tasks`` column names."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
