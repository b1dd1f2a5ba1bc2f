from __future__ import annotations

import pytest

from vhi_dashboard.activities.model import ACTIVITY_TABLES, CERTIFICATIONS, LEAVES, TRAININGS
from vhi_dashboard.activities.service import ActivityService
from vhi_dashboard.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def services(fakes):
    return {kind: ActivityService(repo) for kind, repo in fakes.activities.items()}


def test_all_four_tables_share_one_service(services):
    assert set(services) == {"leaves", "trainings", "learnings", "certifications"}
    assert services["leaves"].spec is LEAVES
    assert set(ACTIVITY_TABLES) == set(services)


def test_leave_create_normalizes_values(services, fakes):
    record = services["leaves"].create({"date": "2025-03-05", "resource": " Alice ", "type": "Sick", "hours": "8"})

    assert record.as_dict() == {"id": 1, "date": "2025-03-05", "resource": "Alice", "type": "Sick", "hours": 8}
    assert fakes.activities["leaves"].by_id[1].values["hours"] == 8


def test_required_fields_and_types(services):
    leaves = services["leaves"]

    with pytest.raises(ValidationError, match="Leave type"):
        leaves.create({"date": "2025-03-05", "resource": "Alice", "hours": 8})
    with pytest.raises(ValidationError):
        leaves.create({"date": "05/03/2025", "resource": "Alice", "type": "Sick", "hours": 8})
    with pytest.raises(ValidationError):
        leaves.create({"date": "2025-03-05", "resource": "Alice", "type": "Sick", "hours": "eight"})
    with pytest.raises(ValidationError):
        leaves.create({"date": "2025-03-05", "resource": "Alice", "type": "Sick", "hours": -1})


def test_training_dates_must_be_ordered(services):
    data = {
        "emp_id": "A1",
        "resource_name": "Alice",
        "platform": "Udemy",
        "start_date": "2025-03-10",
        "end_date": "2025-03-01",
    }
    with pytest.raises(ValidationError, match="End date"):
        services["trainings"].create(data)

    data["end_date"] = ""
    record = services["trainings"].create(data)
    assert record.values["end_date"] is None
    assert record.values["hours"] is None
    assert TRAININGS.date_range == ("start_date", "end_date")


def test_camel_case_emp_id_is_accepted(services):
    record = services["certifications"].create(
        {"empId": "A1", "resourceName": "Alice", "certification_name": "AWS SAA", "date": "2025-02-01"}
    )

    assert record.values["emp_id"] == "A1"
    assert record.values["resource_name"] == "Alice"
    assert CERTIFICATIONS.date_column == "date"


def test_list_filters_by_year_and_month(services):
    learnings = services["learnings"]
    for day in ("2025-03-01", "2025-04-01", "2024-03-01"):
        learnings.create({"emp_id": "A1", "resource_name": "Alice", "platform": "Coursera", "date": day})

    march_2025 = learnings.list(learnings.parse_filter({"year": "2025", "month": "3"}))
    every_march = learnings.list(learnings.parse_filter({"month": "03"}))

    assert [r.values["date"] for r in march_2025] == ["2025-03-01"]
    assert len(every_march) == 2
    assert len(learnings.list(learnings.parse_filter({}))) == 3


def test_leaves_filter_on_resource_column(services):
    leaves = services["leaves"]
    leaves.create({"date": "2025-03-05", "resource": "Alice", "type": "Sick", "hours": 8})
    leaves.create({"date": "2025-03-06", "resource": "Bob", "type": "Casual", "hours": 4})

    only_bob = leaves.list(leaves.parse_filter({"resource": "Bob"}))

    assert [r.values["resource"] for r in only_bob] == ["Bob"]


def test_update_and_delete(services):
    leaves = services["leaves"]
    record = leaves.create({"date": "2025-03-05", "resource": "Alice", "type": "Sick", "hours": 8})

    updated = leaves.update(record.id, {"date": "2025-03-05", "resource": "Alice", "type": "Sick", "hours": 4})
    assert updated.values["hours"] == 4

    leaves.delete(record.id)
    with pytest.raises(NotFoundError):
        leaves.delete(record.id)
    with pytest.raises(NotFoundError):
        leaves.update(record.id, {"date": "2025-03-05", "resource": "Alice", "type": "Sick", "hours": 4})
