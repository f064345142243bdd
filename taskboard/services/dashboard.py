"""Dashboard assembly - combines the task store with the projection pipeline."""

from datetime import date, timedelta
from typing import Iterable, Optional
from pydantic import BaseModel, Field

from taskboard.models.filters import FilterCriteria, FilterOptions
from taskboard.models.task import Task
from taskboard.models.week_window import WeekWindow
from taskboard.services.task_filters import filter_options
from taskboard.services.task_projection import TaskProjection, ViewKind, is_overdue, project
from taskboard.services.task_store import list_tasks
from taskboard.services.week_window import initial_window
from taskboard.utils.dashboard_config import DashboardConfig
from taskboard.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)


class Dashboard(BaseModel):
    """Everything the dashboard page renders for one criteria/window combination."""
    today: date
    projection: TaskProjection
    overdue_task_ids: list[str] = Field(default_factory=list)
    pending_counts: dict[date, int] = Field(
        default_factory=dict,
        description="Window day -> number of pending tasks due that day"
    )
    options: FilterOptions = Field(default_factory=FilterOptions)


def build_dashboard(
    tasks: Iterable[Task],
    criteria: Optional[FilterCriteria] = None,
    window: Optional[WeekWindow] = None,
    view_kind: ViewKind = ViewKind.CALENDAR,
    today: Optional[date] = None,
) -> Dashboard:
    """Project ``tasks`` and derive the overdue flags, day badges and filter options."""
    tasks = list(tasks)
    today = today or date.today()
    criteria = criteria or FilterCriteria()
    window = window or initial_window(today)

    projection = project(tasks, criteria, window, view_kind)
    pending_counts = {
        day: sum(1 for task in day_tasks if not task.is_completed)
        for day, day_tasks in projection.by_day.items()
    }

    return Dashboard(
        today=today,
        projection=projection,
        overdue_task_ids=[task.id for task in projection.filtered if is_overdue(task, today)],
        pending_counts=pending_counts,
        # Options always list the unfiltered collection
        options=filter_options(tasks),
    )


def listing_start(window: WeekWindow, today: date) -> Optional[date]:
    """
    Earliest due date the store must return for ``window`` to be complete.

    The lookback normally bounds the listing; a window reaching further back
    extends it. ``None`` means no lower bound.
    """
    lookback = DashboardConfig.TASK_LIST_LOOKBACK_DAYS
    if lookback <= 0:
        return None
    return min(window.start, today - timedelta(days=lookback))


async def load_dashboard(
    criteria: Optional[FilterCriteria] = None,
    window: Optional[WeekWindow] = None,
    view_kind: ViewKind = ViewKind.CALENDAR,
    today: Optional[date] = None,
) -> Dashboard:
    """Fetch tasks from the store and build the dashboard."""
    today = today or date.today()
    window = window or initial_window(today)
    date_from = listing_start(window, today)

    with log_timing("load_dashboard", logger=logger, view_kind=view_kind.value):
        tasks = await list_tasks(date_from=date_from, include_undated=True)
        dashboard = build_dashboard(tasks, criteria, window, view_kind, today)

    logger.info(
        "Dashboard built",
        task_count=len(tasks),
        filtered_count=len(dashboard.projection.filtered),
        windowed_count=len(dashboard.projection.windowed),
        overdue_count=len(dashboard.overdue_task_ids),
        window_start=dashboard.projection.window.start.isoformat()
    )
    return dashboard
