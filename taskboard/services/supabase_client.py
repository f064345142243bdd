"""Supabase client access for the task store and session checks."""

import os
from typing import Optional
from supabase import create_client, Client
from supabase.client import ClientOptions
from taskboard.utils.dashboard_config import DashboardConfig
from taskboard.utils.errors import SupabaseError, TaskNotFoundError
from taskboard.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

_client: Optional[Client] = None


def _credentials() -> tuple[str, str]:
    """
    Resolve the project URL and API key from the environment.

    The service role key is preferred. The anon key is accepted so the backend
    can run against a project where row level security scopes the tasks table.
    """
    url = os.environ.get("SUPABASE_URL")
    key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
    if not key and os.environ.get("SUPABASE_ANON_KEY"):
        key = os.environ["SUPABASE_ANON_KEY"]
        logger.warning("Using SUPABASE_ANON_KEY; task access is limited by row level security")

    if not url or not key:
        raise SupabaseError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY (or SUPABASE_ANON_KEY) must be set")
    return url, key


def get_supabase_client() -> Client:
    """Get or create the shared Supabase client."""
    global _client

    if _client is None:
        url, key = _credentials()
        # Serverless handlers never keep a user session on the shared client
        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )
        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", supabase_url=url)

    return _client


def tasks_table(client: Client):
    """Query builder for the configured tasks table."""
    return client.table(DashboardConfig.TASKS_TABLE)


class SupabaseClient:
    """Async context manager handing out the shared client for one store operation."""

    def __init__(self, operation: str = "supabase"):
        self.operation = operation
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            if issubclass(exc_type, TaskNotFoundError):
                logger.debug("Task lookup missed", operation=self.operation, error=str(exc_val))
            else:
                logger.error(
                    "Supabase operation error",
                    operation=self.operation,
                    error=str(exc_val),
                    error_type=exc_type.__name__
                )
        return False
