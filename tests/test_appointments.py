"""
Tests for appointment requests.
"""

import pytest

from appointments.routes import (
    create_appointment,
    list_my_appointments,
    list_appointments,
    update_appointment_status,
)
from conftest import make_request, read_json

APPOINTMENT_ID = "0a9b8c7d-6e5f-4a3b-9c1d-2e3f4a5b6c7d"


@pytest.mark.asyncio
async def test_create_requires_sign_in(fake_db):
    response = await create_appointment(
        make_request("POST", "/appointments", body={"service": "Roofing", "preferred_date": "2024-05-01"})
    )

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_appointment(fake_db, users):
    response = await create_appointment(make_request(
        "POST", "/appointments", token="user-token",
        body={"service": "Roofing", "preferred_date": "2024-05-01", "location": "Lahore"},
    ))

    assert response.status_code == 201
    body = read_json(response)["data"]
    assert body["message"] == "Appointment requested"
    assert body["data"]["user_id"] == users["user"]
    assert body["data"]["location"] == "Lahore"


@pytest.mark.asyncio
async def test_invalid_status_is_rejected(fake_db, users):
    fake_db.tables["appointments"] = [{"id": APPOINTMENT_ID, "status": "PENDING"}]
    req = make_request(
        "PATCH", f"/appointments/{APPOINTMENT_ID}", body={"status": "NEW"},
        token="staff-token", route_params={"id": APPOINTMENT_ID},
    )

    response = await update_appointment_status(req)

    assert response.status_code == 400
    assert read_json(response)["error"]["code"] == "VALIDATION_ERROR"
    assert read_json(response)["error"]["message"].startswith("status: ")
    assert fake_db.tables["appointments"][0]["status"] == "PENDING"


@pytest.mark.asyncio
async def test_staff_confirms_appointment(fake_db, users):
    fake_db.tables["appointments"] = [{"id": APPOINTMENT_ID, "status": "PENDING"}]
    req = make_request(
        "PATCH", f"/appointments/{APPOINTMENT_ID}", body={"status": "CONFIRMED"},
        token="admin-token", route_params={"id": APPOINTMENT_ID},
    )

    response = await update_appointment_status(req)

    assert response.status_code == 200
    assert read_json(response)["data"]["status"] == "CONFIRMED"


@pytest.mark.asyncio
async def test_user_sees_only_own_appointments(fake_db, users):
    fake_db.tables["appointments"] = [
        {"id": "a", "user_id": users["user"], "preferred_date": "2024-05-01"},
        {"id": "b", "user_id": users["admin"], "preferred_date": "2024-05-02"},
    ]

    response = await list_my_appointments(make_request("GET", "/appointments/my", token="user-token"))

    assert [row["id"] for row in read_json(response)["data"]] == ["a"]


@pytest.mark.asyncio
async def test_staff_list_filters_single_status(fake_db, users):
    fake_db.tables["appointments"] = [
        {"id": "a", "status": "PENDING"},
        {"id": "b", "status": "CONFIRMED"},
    ]

    response = await list_appointments(
        make_request("GET", "/appointments", token="staff-token", params={"status": "CONFIRMED"})
    )

    assert [row["id"] for row in read_json(response)["data"]] == ["b"]
    query = fake_db.queries_for("appointments")[-1]
    assert ("select", ("*, profiles(full_name)",), {"count": None, "head": None}) in query.calls


@pytest.mark.asyncio
async def test_user_cannot_list_all_appointments(fake_db, users):
    response = await list_appointments(make_request("GET", "/appointments", token="user-token"))

    assert response.status_code == 403
