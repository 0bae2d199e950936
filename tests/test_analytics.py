"""
Tests for dashboard analytics.
"""

from datetime import datetime, timedelta, timezone

import pytest

from analytics.routes import get_stats, get_trends, get_popular_services
from analytics.service import _month_of
from conftest import make_request, read_json


def _days_ago(days):
    return (datetime.now(timezone.utc) - timedelta(days=days)).isoformat()


@pytest.mark.asyncio
async def test_stats_totals_and_breakdowns(fake_db, users):
    fake_db.tables["projects"] = [
        {"id": "p1", "stage": "Completed"},
        {"id": "p2", "stage": "Completed"},
        {"id": "p3", "stage": "Ongoing"},
        {"id": "p4", "stage": None},
    ]
    fake_db.tables["consultations"] = [
        {"id": "c1", "status": "NEW", "created_at": _days_ago(2)},
        {"id": "c2", "status": "NEW", "created_at": _days_ago(45)},
        {"id": "c3", "status": "CONTACTED", "created_at": _days_ago(10)},
    ]
    fake_db.tables["appointments"] = [
        {"id": "a1", "status": "PENDING", "created_at": _days_ago(90)},
    ]

    response = await get_stats(make_request("GET", "/analytics/stats", token="staff-token"))

    assert response.status_code == 200
    assert read_json(response)["data"] == {
        "overview": {"totalProjects": 4, "totalConsultations": 3, "totalAppointments": 1},
        "projects": {"byStage": {"Completed": 2, "Ongoing": 1}},
        "consultations": {"byStatus": {"NEW": 2, "CONTACTED": 1}, "last30Days": 2},
        "appointments": {"byStatus": {"PENDING": 1}, "last30Days": 0},
    }

    count_only = [q for q in fake_db.queries if ("select", ("id",), {"count": "exact", "head": True}) in q.calls]
    assert len(count_only) == 5


@pytest.mark.asyncio
async def test_stats_requires_staff(fake_db, users):
    response = await get_stats(make_request("GET", "/analytics/stats", token="user-token"))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_stats_failure_is_500(fake_db, users):
    fake_db.failing_tables.add("appointments")

    response = await get_stats(make_request("GET", "/analytics/stats", token="admin-token"))

    assert response.status_code == 500
    assert read_json(response)["error"]["message"] == "Failed to fetch analytics"


@pytest.mark.asyncio
async def test_trends_group_by_month(fake_db, users):
    fake_db.tables["consultations"] = [
        {"id": "c1", "created_at": "2024-01-31T23:30:00+00:00"},
        {"id": "c2", "created_at": "2024-02-01T08:00:00Z"},
        {"id": "c3", "created_at": "2024-02-14T08:00:00+00:00"},
    ]
    fake_db.tables["appointments"] = [
        {"id": "a1", "created_at": "2024-03-05T12:00:00+00:00"},
    ]

    response = await get_trends(make_request("GET", "/analytics/trends", token="admin-token"))

    data = read_json(response)["data"]
    assert list(data) == ["2024-01", "2024-02", "2024-03"]
    assert data["2024-02"] == {"consultations": 2, "appointments": 0}
    assert data["2024-03"] == {"consultations": 0, "appointments": 1}


@pytest.mark.asyncio
async def test_popular_services_combines_both_sources(fake_db, users):
    fake_db.tables["consultations"] = [
        {"service": "Roofing"}, {"service": "Roofing"}, {"service": "Tiling"}, {"service": None},
    ]
    fake_db.tables["appointments"] = [{"service": "Tiling"}, {"service": "Tiling"}, {"service": "Paint"}]

    response = await get_popular_services(
        make_request("GET", "/analytics/popular-services", token="staff-token")
    )

    assert read_json(response)["data"] == [
        {"service": "Tiling", "count": 3},
        {"service": "Roofing", "count": 2},
        {"service": "Paint", "count": 1},
    ]


@pytest.mark.asyncio
async def test_popular_services_is_capped_at_ten(fake_db, users):
    fake_db.tables["consultations"] = [{"service": f"S{i}"} for i in range(15)]

    response = await get_popular_services(
        make_request("GET", "/analytics/popular-services", token="staff-token")
    )

    assert len(read_json(response)["data"]) == 10


def test_month_of_normalizes_to_utc():
    assert _month_of("2024-03-01T02:00:00+05:00") == "2024-02"
    assert _month_of("2024-03-01T02:00:00Z") == "2024-03"
    assert _month_of("2024-07") == "2024-07"
