"""Shared pytest fixtures and configuration."""

import os
import pytest
from datetime import date
from unittest.mock import MagicMock
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-key")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("WEEK_START_DAY", "monday")
os.environ.setdefault("TASK_LIST_LOOKBACK_DAYS", "7")

from taskboard.models.filters import FilterCriteria
from taskboard.models.identity import Identity
from taskboard.models.task import TaskPriority, TaskStatus
from taskboard.models.week_window import WeekWindow
from tests.utils.factories import make_task


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client for testing."""
    client = MagicMock()
    client.table = MagicMock(return_value=MagicMock())
    return client


@pytest.fixture
def march_window():
    """Monday 2024-03-11 through Sunday 2024-03-17."""
    return WeekWindow(start=date(2024, 3, 11), end=date(2024, 3, 17))


@pytest.fixture
def no_criteria():
    return FilterCriteria()


@pytest.fixture
def identity():
    return Identity(
        user_id="5f0c3a5e-8d4b-4c1f-9a57-2b6f1e9d0c11",
        email="ana@example.com",
        display_name="Ana Souza"
    )


@pytest.fixture
def sample_tasks():
    """Five tasks, two of them in the Design sector."""
    return [
        make_task(id="t1", title="Landing page", sector="Design", client="Acme",
                  assignee_name="Ana", priority=TaskPriority.HIGH, due_date=date(2024, 3, 11)),
        make_task(id="t2", title="Ad campaign", sector="Marketing", client="Acme",
                  assignee_name="Bruno", priority=TaskPriority.MEDIUM, due_date=date(2024, 3, 15)),
        make_task(id="t3", title="Logo refresh", sector="Design", client="Globex",
                  assignee_name="Carla", priority=TaskPriority.LOW, due_date=None),
        make_task(id="t4", title="Blog copy", sector="Copy", client="Globex",
                  assignee_name="Ana", priority=TaskPriority.LOW, due_date=date(2024, 3, 15),
                  status=TaskStatus.COMPLETED, completed_at="2024-03-14T10:00:00+00:00"),
        make_task(id="t5", title="Site deploy", sector="Web", client="Initech",
                  assignee_name=None, priority=None, due_date=date(2024, 3, 20)),
    ]


@pytest.fixture
def freeze_time_fixture():
    """Freeze "today" to Tuesday 2024-03-12."""
    with freeze_time("2024-03-12 12:00:00") as frozen_time:
        yield frozen_time
