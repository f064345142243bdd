"""Date-only parsing helpers for task fields."""

from datetime import date, datetime
from typing import Any, Optional

from taskboard.utils.errors import InvalidDateError
from taskboard.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def parse_task_date(value: Any) -> date:
    """
    Parse a task date with date-only semantics.

    Accepts ``date``, ``datetime`` (time of day dropped) and ISO strings such as
    ``2024-03-15`` or ``2024-03-15T10:30:00Z``. Timestamps keep their own
    calendar date; no timezone conversion happens.

    Raises InvalidDateError for anything else.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise InvalidDateError(f"Invalid date: {value!r}")

    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as e:
        raise InvalidDateError(f"Invalid date: {value!r}") from e


def coerce_task_date(value: Any) -> Optional[date]:
    """Parse a task date, treating missing or malformed values as absent."""
    if value is None:
        return None
    try:
        return parse_task_date(value)
    except InvalidDateError:
        logger.debug("Treating malformed date as absent", raw_value=repr(value)[:64])
        return None
