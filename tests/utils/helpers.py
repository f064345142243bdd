"""Test helper functions."""

import json
from typing import Any, Dict, Optional
from unittest.mock import MagicMock

# Query-builder methods the task store chains before ``execute()``
_CHAIN_METHODS = ("select", "eq", "gte", "lte", "or_", "order", "insert", "update", "delete", "limit")


def make_query(data: Optional[list] = None) -> MagicMock:
    """Mock a postgrest query chain whose ``execute()`` returns ``data``."""
    query = MagicMock()
    for method in _CHAIN_METHODS:
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=data if data is not None else [])
    return query


def make_supabase(*queries: MagicMock) -> MagicMock:
    """Mock Supabase client; successive ``table()`` calls return ``queries`` in order."""
    client = MagicMock()
    client.table.side_effect = list(queries)
    return client


def patch_supabase(mock_client_class: MagicMock, client: MagicMock) -> None:
    """Wire a patched ``SupabaseClient`` class to yield ``client``."""
    mock_client_class.return_value.__aenter__.return_value = client
    mock_client_class.return_value.__aexit__.return_value = False


def create_vercel_request(
    method: str = "GET",
    path: str = "/api/tasks",
    body: Any = None,
    headers: Dict[str, str] = None,
    query: Dict[str, str] = None,
) -> Dict[str, Any]:
    """Create a Vercel request object for testing."""
    if headers is None:
        headers = {
            "content-type": "application/json",
            "authorization": "Bearer test-access-token",
        }

    return {
        "method": method,
        "path": path,
        "headers": headers,
        "body": json.dumps(body) if isinstance(body, dict) else body,
        "query": query or {}
    }
