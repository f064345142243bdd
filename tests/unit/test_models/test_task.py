"""Tests for Task models."""

import pytest
from datetime import date, datetime, timezone
from pydantic import ValidationError
from taskboard.models.task import Task, TaskCreate, TaskPriority, TaskStatus, TaskUpdate
from tests.utils.factories import create_task_row


@pytest.mark.unit
def test_task_from_row_maps_column_names():
    """Test that stored column names map onto task fields."""
    row = create_task_row(name="Ana", user_id="user-1", due_date=date(2024, 3, 15))

    task = Task.from_row(row)

    assert task.assignee_name == "Ana"
    assert task.creator_id == "user-1"
    assert task.due_date == date(2024, 3, 15)
    assert task.status is TaskStatus.PENDING


@pytest.mark.unit
def test_task_defaults():
    """Test minimal task creation."""
    task = Task(id="t1", title="Write brief")

    assert task.status is TaskStatus.PENDING
    assert task.priority is None
    assert task.due_date is None
    assert task.assignee_name is None
    assert not task.is_completed


@pytest.mark.unit
def test_task_malformed_due_date_is_absent():
    """Test that an unparseable due date becomes None instead of failing."""
    task = Task.from_row(create_task_row(due_date="not-a-date"))

    assert task.due_date is None


@pytest.mark.unit
def test_task_timestamp_due_date_keeps_calendar_day():
    """Test that a timestamp due date is reduced to its date."""
    task = Task.from_row(create_task_row(due_date="2024-03-15T23:30:00Z"))

    assert task.due_date == date(2024, 3, 15)


@pytest.mark.unit
def test_task_null_status_defaults_to_pending():
    """Test that a null status column reads as Pending."""
    task = Task.from_row(create_task_row(status=None))

    assert task.status is TaskStatus.PENDING


@pytest.mark.unit
def test_task_accepts_legacy_labels():
    """Test that Portuguese labels from older rows map to enum members."""
    task = Task.from_row(create_task_row(priority="Alta", status="Concluída",
                                         completed_at="2024-03-14T10:00:00+00:00"))

    assert task.priority is TaskPriority.HIGH
    assert task.status is TaskStatus.COMPLETED


@pytest.mark.unit
def test_task_unknown_priority_is_absent():
    """Test that an unknown priority label does not fail the row."""
    task = Task.from_row(create_task_row(priority="Urgent"))

    assert task.priority is None


@pytest.mark.unit
def test_task_requires_id_and_title():
    """Test that id and title are required."""
    with pytest.raises(ValidationError):
        Task(title="No id")
    with pytest.raises(ValidationError):
        Task(id="t1")


@pytest.mark.unit
def test_status_toggled():
    assert TaskStatus.PENDING.toggled() is TaskStatus.COMPLETED
    assert TaskStatus.COMPLETED.toggled() is TaskStatus.PENDING


@pytest.mark.unit
def test_task_create_to_row_uses_column_names():
    """Test create payload serialization."""
    payload = TaskCreate(
        title="Landing page",
        assignee_name="Ana",
        sector="Design",
        priority="High",
        due_date="2024-03-15",
        link=""
    )

    row = payload.to_row()

    assert row["name"] == "Ana"
    assert row["priority"] == "High"
    assert row["status"] == "Pending"
    assert row["due_date"] == "2024-03-15"
    assert row["link"] is None
    assert "user_id" not in row
    assert "created_by" not in row


@pytest.mark.unit
def test_task_create_requires_title_and_assignee():
    """Test required create fields."""
    with pytest.raises(ValidationError):
        TaskCreate(title="", name="Ana")
    with pytest.raises(ValidationError):
        TaskCreate(title="Landing page")


@pytest.mark.unit
def test_task_create_rejects_unknown_priority():
    with pytest.raises(ValidationError):
        TaskCreate(title="Landing page", name="Ana", priority="Urgent")


@pytest.mark.unit
def test_task_update_only_serializes_set_fields():
    """Test that partial updates only carry explicitly set fields."""
    payload = TaskUpdate(title="New title", due_date=None)

    assert payload.to_row() == {"title": "New title", "due_date": None}


@pytest.mark.unit
def test_task_update_ignores_creator_fields():
    """Test that creator fields sent by a client are dropped."""
    payload = TaskUpdate.model_validate({"title": "New title", "user_id": "intruder", "created_by": "intruder"})

    row = payload.to_row()

    assert "user_id" not in row
    assert "created_by" not in row


@pytest.mark.unit
@pytest.mark.parametrize("body", [
    {"title": None},
    {"title": "   "},
    {"name": None},
    {"name": ""},
])
def test_task_update_rejects_clearing_required_fields(body):
    """Test that an edit cannot null out the title or the assignee."""
    with pytest.raises(ValidationError):
        TaskUpdate.model_validate(body)


@pytest.mark.unit
def test_task_update_blank_optional_text_is_none():
    """Test that edits normalize blank text the same way creates do."""
    payload = TaskUpdate.model_validate({"description": "", "client": " ", "sector": "", "observation": "", "link": ""})

    assert payload.to_row() == {
        "description": None,
        "client": None,
        "sector": None,
        "observation": None,
        "link": None,
    }


@pytest.mark.unit
def test_task_timestamps_are_datetimes():
    task = Task.from_row(create_task_row(status="Completed", completed_at="2024-03-10T08:00:00+00:00"))

    assert task.completed_at == datetime(2024, 3, 10, 8, 0, tzinfo=timezone.utc)
    assert task.created_at == datetime(2024, 3, 1, 9, 0, tzinfo=timezone.utc)


@pytest.mark.unit
def test_task_malformed_timestamp_is_absent():
    task = Task.from_row(create_task_row(updated_at="yesterday", completed_at=""))

    assert task.updated_at is None
    assert task.completed_at is None
