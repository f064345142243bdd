"""Dashboard filter models."""

from typing import Any, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from taskboard.models.task import TaskPriority, SECTORS


class FilterCriteria(BaseModel):
    """
    Exact-match constraints applied to the task collection.

    ``None`` means "no constraint". Blank strings (the "all" option of a
    filter drop-down) are normalized to ``None``.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sector: Optional[str] = None
    priority: Optional[TaskPriority] = None
    assignee_name: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("assignee_name", "assigneeName", "assignee", "user"),
        description="Matches Task.assignee_name, not a user ID"
    )
    client: Optional[str] = None

    @field_validator("sector", "assignee_name", "client", mode="before")
    @classmethod
    def _blank_means_unconstrained(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("priority", mode="before")
    @classmethod
    def _priority_label(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, TaskPriority):
            return TaskPriority(value) if value.strip() else None
        return value

    def is_empty(self) -> bool:
        return all(
            value is None
            for value in (self.sector, self.priority, self.assignee_name, self.client)
        )


class FilterOptions(BaseModel):
    """Values offered by the dashboard filter drop-downs."""
    sectors: list[str] = Field(default_factory=lambda: list(SECTORS))
    priorities: list[TaskPriority] = Field(default_factory=lambda: list(TaskPriority))
    assignee_names: list[str] = Field(default_factory=list)
    clients: list[str] = Field(default_factory=list)
