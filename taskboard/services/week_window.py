"""Week window calculator - 7-day calendar windows and week navigation."""

from datetime import date, timedelta
from typing import Any, Optional

from taskboard.models.week_window import WeekWindow, WEEK_LENGTH_DAYS
from taskboard.utils.dashboard_config import DashboardConfig
from taskboard.utils.dates import coerce_task_date
from taskboard.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def _anchor_or_today(anchor: Any) -> date:
    """Resolve an anchor date, falling back to today when it is missing or unparseable."""
    resolved = coerce_task_date(anchor)
    if resolved is None:
        if anchor is not None:
            logger.warning("Invalid week anchor, falling back to today", raw_value=repr(anchor)[:64])
        return date.today()
    return resolved


def week_start_for(day: date, first_weekday: Optional[int] = None) -> date:
    """Round ``day`` down to the most recent ``first_weekday`` (0 = Monday)."""
    if first_weekday is None:
        first_weekday = DashboardConfig.WEEK_START_DAY
    return day - timedelta(days=(day.weekday() - first_weekday) % WEEK_LENGTH_DAYS)


def initial_window(today: Any = None, first_weekday: Optional[int] = None) -> WeekWindow:
    """Window containing ``today``, aligned to the configured first weekday."""
    return WeekWindow.starting(week_start_for(_anchor_or_today(today), first_weekday))


def window_from_anchor(anchor: Any) -> WeekWindow:
    """Window starting exactly at ``anchor``; no weekday alignment is applied."""
    return WeekWindow.starting(_anchor_or_today(anchor))


def shift_window(current: WeekWindow, weeks: int) -> WeekWindow:
    """
    Move ``current`` by a whole number of weeks.

    Both bounds move by exactly 7 calendar days per week. The start is not
    re-aligned, so a window built from a mid-week anchor stays mid-week.
    """
    offset = timedelta(days=WEEK_LENGTH_DAYS * weeks)
    return WeekWindow(start=current.start + offset, end=current.end + offset)


def next_week(current: WeekWindow) -> WeekWindow:
    return shift_window(current, 1)


def previous_week(current: WeekWindow) -> WeekWindow:
    return shift_window(current, -1)


def contains(window: WeekWindow, value: Any) -> bool:
    """True iff ``value`` falls within the window, bounds included. Malformed dates are never contained."""
    day = coerce_task_date(value)
    if day is None:
        return False
    return window.start <= day <= window.end


def window_days(window: WeekWindow) -> list[date]:
    """The seven days of ``window`` in order."""
    return [window.start + timedelta(days=offset) for offset in range(WEEK_LENGTH_DAYS)]
