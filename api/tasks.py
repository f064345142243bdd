"""Tasks endpoint for Vercel: dashboard projection (GET) and task CRUD (POST/PATCH/DELETE)."""

import json
import asyncio
from typing import Any, Optional

from taskboard.models.filters import FilterCriteria
from taskboard.models.task import TaskCreate, TaskUpdate
from taskboard.services.auth import bearer_token, require_identity
from taskboard.services.dashboard import load_dashboard
from taskboard.services.task_projection import ViewKind
from taskboard.services.task_store import create_task, delete_task, toggle_status, update_task
from taskboard.services.week_window import initial_window, window_from_anchor
from taskboard.utils.errors import AuthenticationError, SupabaseError, TaskNotFoundError
from taskboard.utils.logging import correlation_context, get_structured_logger
from taskboard.utils.logging_config import LoggingConfig

logger = get_structured_logger(__name__)

_logging_configured = False


def _configure_logging() -> None:
    global _logging_configured
    if not _logging_configured:
        LoggingConfig.setup_logging()
        _logging_configured = True


def _header(request: dict, name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    headers = request.get("headers") or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def _json_body(request: dict) -> dict:
    raw_body = request.get("body") or ""
    if isinstance(raw_body, dict):
        return raw_body
    try:
        body = json.loads(raw_body) if raw_body else {}
    except json.JSONDecodeError:
        raise ValueError("Request body is not valid JSON")
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body


def _response(status_code: int, payload: Any) -> dict:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(payload)
    }


def _task_id(query: dict, body: dict) -> str:
    task_id = query.get("id") or body.get("id")
    if not task_id:
        raise ValueError("Task id is required")
    return str(task_id)


async def _get_dashboard(query: dict) -> dict:
    criteria = FilterCriteria(
        sector=query.get("sector"),
        priority=query.get("priority"),
        assignee_name=query.get("assignee"),
        client=query.get("client"),
    )
    view_kind = ViewKind(query.get("view") or ViewKind.CALENDAR.value)
    week_start = query.get("week_start")
    window = window_from_anchor(week_start) if week_start else initial_window()

    dashboard = await load_dashboard(criteria, window, view_kind)
    return dashboard.model_dump(mode="json")


async def _dispatch(request: dict) -> tuple[int, Any]:
    method = (request.get("method") or "GET").upper()
    query = request.get("query") or {}

    identity = await require_identity(bearer_token(_header(request, "Authorization")))

    if method == "GET":
        return 200, await _get_dashboard(query)

    if method == "POST":
        payload = TaskCreate.model_validate(_json_body(request))
        task = await create_task(payload, identity)
        return 201, task.model_dump(mode="json")

    if method == "PATCH":
        body = _json_body(request)
        task_id = _task_id(query, body)
        if query.get("action") == "toggle":
            task = await toggle_status(task_id)
        else:
            body.pop("id", None)
            task = await update_task(task_id, TaskUpdate.model_validate(body))
        return 200, task.model_dump(mode="json")

    if method == "DELETE":
        task_id = _task_id(query, {})
        await delete_task(task_id)
        return 200, {"ok": True, "id": task_id}

    return 405, {"error": f"method {method} not allowed"}


def handler(request):
    """Handle a tasks request; the bearer token identifies the user."""
    _configure_logging()
    with correlation_context(_header(request, LoggingConfig.LOG_CORRELATION_ID_HEADER)) as correlation_id:
        try:
            status_code, payload = asyncio.run(_dispatch(request))
            return _response(status_code, payload)
        except AuthenticationError as e:
            return _response(401, {"error": str(e)})
        except TaskNotFoundError as e:
            return _response(404, {"error": str(e)})
        except SupabaseError as e:
            logger.error("Task store error", error=str(e))
            return _response(502, {"error": "task store unavailable"})
        except ValueError as e:
            # pydantic ValidationError and malformed query values
            return _response(422, {"error": str(e)})
        except Exception as e:
            logger.error("Error handling tasks request", exc_info=True, error=str(e))
            return _response(500, {"error": "internal server error", "correlation_id": correlation_id})
