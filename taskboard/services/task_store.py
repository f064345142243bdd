"""Task store - Supabase persistence for dashboard tasks."""

from typing import Any, Optional
from datetime import date, datetime, timedelta, timezone
from pydantic import ValidationError

from taskboard.models.identity import Identity
from taskboard.models.task import Task, TaskCreate, TaskStatus, TaskUpdate
from taskboard.services.supabase_client import SupabaseClient, tasks_table
from taskboard.utils.dashboard_config import DashboardConfig
from taskboard.utils.dates import coerce_task_date
from taskboard.utils.errors import SupabaseError, TaskNotFoundError
from taskboard.utils.logging import (
    get_structured_logger,
    mask_user_id,
    sanitize_text,
    timed,
)

logger = get_structured_logger(__name__)

# Columns that belong to the creator or the store and are never written by an edit
_PROTECTED_COLUMNS = ("id", "user_id", "created_by", "created_at", "completed_at")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _status_fields(current: Optional[Task], status: TaskStatus) -> dict:
    """
    Column values for moving a task to ``status``.

    Completing stamps ``completed_at`` (an already completed task keeps its
    original stamp); returning to pending clears it.
    """
    if status is TaskStatus.COMPLETED:
        if current is not None and current.is_completed and current.completed_at:
            completed_at = current.completed_at.isoformat()
        else:
            completed_at = _now_iso()
        return {"status": status.value, "completed_at": completed_at}
    return {"status": TaskStatus.PENDING.value, "completed_at": None}


def _rows_to_tasks(rows: list[dict]) -> list[Task]:
    """Convert rows, skipping (and logging) rows too broken to represent a task."""
    tasks = []
    for row in rows:
        try:
            tasks.append(Task.from_row(row))
        except ValidationError as e:
            logger.warning(
                "Skipping malformed task row",
                task_id=str(row.get("id")) if isinstance(row, dict) else None,
                error_count=e.error_count()
            )
    return tasks


def _single_row(result: Any, task_id: str) -> Task:
    if not result.data:
        raise TaskNotFoundError(f"Task not found: {task_id}")
    return Task.from_row(result.data[0])


@timed("task_store.list_tasks")
async def list_tasks(
    assignee_id: Optional[str] = None,
    client: Optional[str] = None,
    date_from: Any = None,
    date_to: Any = None,
    include_undated: bool = True,
) -> list[Task]:
    """
    List tasks ordered by due date (ascending, undated last).

    ``assignee_id`` filters on the ``user_id`` column. Without a date range the
    listing starts ``TASK_LIST_LOOKBACK_DAYS`` ago. A range with no upper
    bound keeps undated tasks unless ``include_undated`` is False; a closed
    range never does.
    """
    date_from = coerce_task_date(date_from)
    date_to = coerce_task_date(date_to)
    if date_from is None and date_to is None:
        lookback = DashboardConfig.TASK_LIST_LOOKBACK_DAYS
        if lookback > 0:
            date_from = date.today() - timedelta(days=lookback)

    async with SupabaseClient("list_tasks") as supabase:
        try:
            query = tasks_table(supabase).select("*")

            if date_to is None:
                if date_from is not None and include_undated:
                    query = query.or_(f"due_date.gte.{date_from.isoformat()},due_date.is.null")
                elif date_from is not None:
                    query = query.gte("due_date", date_from.isoformat())
            else:
                if date_from is not None:
                    query = query.gte("due_date", date_from.isoformat())
                query = query.lte("due_date", date_to.isoformat())

            if assignee_id:
                query = query.eq("user_id", assignee_id)
            if client:
                query = query.eq("client", client)

            result = query.order("due_date", desc=False, nullsfirst=False).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to list tasks: {e}")

    tasks = _rows_to_tasks(result.data or [])
    logger.info(
        "Listed tasks",
        task_count=len(tasks),
        has_assignee_filter=bool(assignee_id),
        has_client_filter=bool(client),
        date_from=date_from.isoformat() if date_from else None,
        date_to=date_to.isoformat() if date_to else None
    )
    return tasks


async def get_task(task_id: str) -> Task:
    """Fetch a single task by ID."""
    async with SupabaseClient("get_task") as supabase:
        try:
            result = tasks_table(supabase).select("*").eq("id", task_id).execute()
            return _single_row(result, task_id)
        except SupabaseError:
            raise
        except Exception as e:
            raise SupabaseError(f"Failed to get task: {e}")


async def create_task(payload: TaskCreate, identity: Identity) -> Task:
    """Create a task stamped with the creating identity."""
    row = payload.to_row()
    row["user_id"] = identity.user_id
    row["created_by"] = identity.user_id
    row.update(_status_fields(None, payload.status))

    async with SupabaseClient("create_task") as supabase:
        try:
            result = tasks_table(supabase).insert(row).execute()
            if not result.data:
                raise SupabaseError("Failed to create task: no data returned")
            task = Task.from_row(result.data[0])
        except SupabaseError:
            raise
        except Exception as e:
            raise SupabaseError(f"Failed to create task: {e}")

    logger.info(
        "Task created",
        task_id=task.id,
        creator_id=mask_user_id(identity.user_id),
        title_preview=sanitize_text(task.title, max_length=80),
        task_status=task.status.value
    )
    return task


async def _write_task(task_id: str, updates: dict) -> Task:
    updates["updated_at"] = _now_iso()
    async with SupabaseClient("update_task") as supabase:
        try:
            result = tasks_table(supabase).update(updates).eq("id", task_id).execute()
            return _single_row(result, task_id)
        except SupabaseError:
            raise
        except Exception as e:
            raise SupabaseError(f"Failed to update task: {e}")


async def update_task(task_id: str, payload: TaskUpdate) -> Task:
    """Apply an edit. Creator fields are never written; status changes keep ``completed_at`` consistent."""
    updates = payload.to_row()
    for column in _PROTECTED_COLUMNS:
        updates.pop(column, None)

    status = updates.pop("status", None)
    if status is not None:
        current = await get_task(task_id)
        updates.update(_status_fields(current, TaskStatus(status)))

    task = await _write_task(task_id, updates)
    logger.info("Task updated", task_id=task_id, updated_fields=sorted(updates))
    return task


async def _apply_status(current: Task, status: TaskStatus) -> Task:
    if current.status is status and (current.completed_at is not None) == current.is_completed:
        return current

    task = await _write_task(current.id, _status_fields(current, status))
    logger.info(
        "Task status changed",
        task_id=current.id,
        previous_status=current.status.value,
        task_status=task.status.value
    )
    return task


async def set_status(task_id: str, status: TaskStatus) -> Task:
    """Move a task to ``status``; a no-op when it is already there."""
    return await _apply_status(await get_task(task_id), TaskStatus(status))


async def toggle_status(task_id: str) -> Task:
    """Flip a task between Pending and Completed."""
    current = await get_task(task_id)
    return await _apply_status(current, current.status.toggled())


async def delete_task(task_id: str) -> None:
    """Delete a task permanently. Raises TaskNotFoundError when nothing was deleted."""
    async with SupabaseClient("delete_task") as supabase:
        try:
            result = tasks_table(supabase).delete().eq("id", task_id).execute()
        except Exception as e:
            raise SupabaseError(f"Failed to delete task: {e}")

    if not result.data:
        raise TaskNotFoundError(f"Task not found: {task_id}")
    logger.info("Task deleted", task_id=task_id)
