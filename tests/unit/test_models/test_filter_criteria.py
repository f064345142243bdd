"""Tests for FilterCriteria and FilterOptions models."""

import pytest
from pydantic import ValidationError
from taskboard.models.filters import FilterCriteria, FilterOptions
from taskboard.models.task import SECTORS, TaskPriority


@pytest.mark.unit
def test_blank_criteria_mean_no_constraint():
    """Test that blank form values normalize to None."""
    criteria = FilterCriteria(sector="", priority="", assignee_name="  ", client="")

    assert criteria.sector is None
    assert criteria.priority is None
    assert criteria.assignee_name is None
    assert criteria.client is None
    assert criteria.is_empty()


@pytest.mark.unit
def test_criteria_accept_form_field_names():
    """Test that the assignee criterion accepts the form's field names."""
    assert FilterCriteria.model_validate({"user": "Ana"}).assignee_name == "Ana"
    assert FilterCriteria.model_validate({"assigneeName": "Ana"}).assignee_name == "Ana"
    assert FilterCriteria.model_validate({"assignee": "Ana"}).assignee_name == "Ana"


@pytest.mark.unit
def test_criteria_priority_labels():
    assert FilterCriteria(priority="High").priority is TaskPriority.HIGH
    assert FilterCriteria(priority="Média").priority is TaskPriority.MEDIUM
    with pytest.raises(ValidationError):
        FilterCriteria(priority="Urgent")


@pytest.mark.unit
def test_criteria_are_immutable():
    criteria = FilterCriteria(sector="Design")
    with pytest.raises(ValidationError):
        criteria.sector = "Web"


@pytest.mark.unit
def test_filter_options_defaults():
    options = FilterOptions()

    assert options.sectors == list(SECTORS)
    assert options.priorities == [TaskPriority.LOW, TaskPriority.MEDIUM, TaskPriority.HIGH]
    assert options.assignee_names == []
