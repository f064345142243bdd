"""Dashboard configuration read from environment variables."""

import os
import calendar


def _weekday_from_name(value: str) -> int:
    """Map a weekday name ("monday", "Sun", ...) to its ``date.weekday()`` index."""
    value = (value or "").strip().lower()
    for index, day_name in enumerate(calendar.day_name):
        if day_name.lower() == value or day_name.lower()[:3] == value:
            return index
    return calendar.MONDAY


class DashboardConfig:
    """Week window and task listing settings."""

    WEEK_START_DAY = _weekday_from_name(os.environ.get("WEEK_START_DAY", "monday"))
    TASK_LIST_LOOKBACK_DAYS = int(os.environ.get("TASK_LIST_LOOKBACK_DAYS", "7"))
    TASKS_TABLE = os.environ.get("TASKS_TABLE", "tasks")
