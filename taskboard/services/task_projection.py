"""Task projection pipeline - filtered, week-windowed and per-day views of the task collection."""

from enum import Enum
from datetime import date
from typing import Iterable, Optional
from pydantic import BaseModel, Field

from taskboard.models.filters import FilterCriteria
from taskboard.models.task import Task, TaskStatus
from taskboard.models.week_window import WeekWindow
from taskboard.services.task_filters import apply_filters
from taskboard.services.week_window import contains, window_days


class ViewKind(str, Enum):
    """Dashboard view consuming a projection."""
    CALENDAR = "calendar"
    GRID = "grid"


class TaskProjection(BaseModel):
    """Result of projecting a task collection onto criteria and a week window."""
    window: WeekWindow
    view_kind: ViewKind
    filtered: list[Task] = Field(default_factory=list, description="Tasks matching the criteria")
    windowed: list[Task] = Field(default_factory=list, description="Filtered tasks due inside the window")
    by_day: dict[date, list[Task]] = Field(
        default_factory=dict,
        description="Window day -> tasks due that day; all 7 days present"
    )


def project(
    tasks: Iterable[Task],
    criteria: FilterCriteria,
    window: WeekWindow,
    view_kind: ViewKind = ViewKind.GRID,
) -> TaskProjection:
    """
    Derive the filtered, windowed and per-day task lists.

    Tasks without a due date only ever appear in ``filtered``. The calendar
    view hides completed tasks from ``by_day``; they stay in ``filtered`` and
    ``windowed`` for every view. All lists keep the input order.
    """
    filtered = apply_filters(tasks, criteria)
    windowed = [
        task for task in filtered
        if task.due_date is not None and contains(window, task.due_date)
    ]

    by_day: dict[date, list[Task]] = {day: [] for day in window_days(window)}
    hide_completed = view_kind == ViewKind.CALENDAR
    for task in windowed:
        if hide_completed and task.status is TaskStatus.COMPLETED:
            continue
        by_day[task.due_date].append(task)

    return TaskProjection(
        window=window,
        view_kind=view_kind,
        filtered=filtered,
        windowed=windowed,
        by_day=by_day,
    )


def is_overdue(task: Task, today: Optional[date] = None) -> bool:
    """A pending task whose due date is strictly before ``today``."""
    if task.due_date is None or task.status is not TaskStatus.PENDING:
        return False
    if today is None:
        today = date.today()
    return task.due_date < today
