"""Filter predicate engine - exact-match task filtering for the dashboard."""

from typing import Iterable

from taskboard.models.filters import FilterCriteria, FilterOptions
from taskboard.models.task import Task

# criteria field -> task field
_CRITERIA_FIELDS = (
    ("sector", "sector"),
    ("priority", "priority"),
    ("assignee_name", "assignee_name"),
    ("client", "client"),
)


def matches(task: Task, criteria: FilterCriteria) -> bool:
    """
    Decide whether ``task`` satisfies every non-empty criterion.

    Comparison is exact, case-sensitive equality. A task whose field is
    missing never matches a criterion set on that field. With no criteria
    set, every task matches.
    """
    for criteria_field, task_field in _CRITERIA_FIELDS:
        expected = getattr(criteria, criteria_field)
        if expected is None:
            continue
        if getattr(task, task_field) != expected:
            return False
    return True


def apply_filters(tasks: Iterable[Task], criteria: FilterCriteria) -> list[Task]:
    """Order-preserving filter of ``tasks`` by ``criteria``."""
    if criteria.is_empty():
        return list(tasks)
    return [task for task in tasks if matches(task, criteria)]


def _distinct_labels(values: Iterable) -> list[str]:
    seen: dict[str, None] = {}
    for value in values:
        if value is None or not value.strip():
            continue
        seen.setdefault(value, None)
    return list(seen)


def filter_options(tasks: Iterable[Task]) -> FilterOptions:
    """Distinct assignee names and clients present in ``tasks``, in first-seen order."""
    tasks = list(tasks)
    return FilterOptions(
        assignee_names=_distinct_labels(task.assignee_name for task in tasks),
        clients=_distinct_labels(task.client for task in tasks),
    )
