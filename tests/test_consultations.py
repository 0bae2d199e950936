"""
Tests for consultation requests and their staff workflow.
"""

import pytest

from consultations.routes import (
    submit_consultation,
    list_consultations,
    update_consultation_status,
    list_my_consultations,
)
from conftest import make_request, read_json

CONSULTATION_ID = "6f1c2b7a-3d4e-4f5a-8b9c-0d1e2f3a4b5c"

VALID_REQUEST = {
    "name": "Sara Khan",
    "email": "sara@example.com",
    "phone": "+92 300 0000000",
    "service": "Renovation",
    "message": "Kitchen remodel",
}


def _seed(fake_db, **overrides):
    row = {"id": CONSULTATION_ID, "status": "NEW", "created_at": "2024-03-02T10:00:00+00:00", **VALID_REQUEST}
    row.update(overrides)
    fake_db.tables.setdefault("consultations", []).append(row)
    return row


@pytest.mark.asyncio
async def test_anonymous_submission(fake_db):
    response = await submit_consultation(make_request("POST", "/consultations", body=VALID_REQUEST))

    assert response.status_code == 201
    body = read_json(response)["data"]
    assert body["message"] == "Consultation request submitted"
    assert body["data"]["name"] == "Sara Khan"
    assert "user_id" not in fake_db.tables["consultations"][0]


@pytest.mark.asyncio
async def test_signed_in_submission_is_linked_to_user(fake_db, users):
    response = await submit_consultation(
        make_request("POST", "/consultations", body=VALID_REQUEST, token="user-token")
    )

    assert response.status_code == 201
    assert fake_db.tables["consultations"][0]["user_id"] == users["user"]


@pytest.mark.asyncio
async def test_submission_with_bad_token_is_still_accepted(fake_db):
    response = await submit_consultation(
        make_request("POST", "/consultations", body=VALID_REQUEST, token="expired")
    )

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_submission_requires_contact_fields(fake_db):
    response = await submit_consultation(
        make_request("POST", "/consultations", body={"name": "Sara", "email": "bad"})
    )

    assert response.status_code == 400
    message = read_json(response)["error"]["message"]
    assert "email" in message and "phone" in message


@pytest.mark.asyncio
async def test_user_cannot_change_status(fake_db, users):
    _seed(fake_db)
    req = make_request(
        "PATCH", f"/consultations/{CONSULTATION_ID}", body={"status": "CONTACTED"},
        token="user-token", route_params={"id": CONSULTATION_ID},
    )

    response = await update_consultation_status(req)

    assert response.status_code == 403
    assert read_json(response)["error"]["code"] == "FORBIDDEN"
    assert fake_db.tables["consultations"][0]["status"] == "NEW"


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["staff-token", "admin-token"])
async def test_staff_and_admin_can_change_status(fake_db, users, token):
    _seed(fake_db)
    req = make_request(
        "PATCH", f"/consultations/{CONSULTATION_ID}", body={"status": "CONTACTED"},
        token=token, route_params={"id": CONSULTATION_ID},
    )

    response = await update_consultation_status(req)

    assert response.status_code == 200
    assert read_json(response)["data"]["status"] == "CONTACTED"


@pytest.mark.asyncio
async def test_status_can_move_backwards(fake_db, users):
    _seed(fake_db, status="COMPLETED")
    req = make_request(
        "PATCH", f"/consultations/{CONSULTATION_ID}", body={"status": "NEW"},
        token="staff-token", route_params={"id": CONSULTATION_ID},
    )

    response = await update_consultation_status(req)

    assert read_json(response)["data"]["status"] == "NEW"


@pytest.mark.asyncio
async def test_unknown_status_is_rejected(fake_db, users):
    _seed(fake_db)
    req = make_request(
        "PATCH", f"/consultations/{CONSULTATION_ID}", body={"status": "ARCHIVED"},
        token="staff-token", route_params={"id": CONSULTATION_ID},
    )

    response = await update_consultation_status(req)

    assert response.status_code == 400
    assert read_json(response)["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_missing_consultation_is_404(fake_db, users):
    req = make_request(
        "PATCH", f"/consultations/{CONSULTATION_ID}", body={"status": "CONTACTED"},
        token="staff-token", route_params={"id": CONSULTATION_ID},
    )

    response = await update_consultation_status(req)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_staff_list_filters_by_several_statuses(fake_db, users):
    _seed(fake_db, id="a", status="NEW")
    _seed(fake_db, id="b", status="CONTACTED")
    _seed(fake_db, id="c", status="COMPLETED")

    response = await list_consultations(
        make_request("GET", "/consultations", token="staff-token", params={"status": "NEW,CONTACTED"})
    )

    assert response.status_code == 200
    assert sorted(row["id"] for row in read_json(response)["data"]) == ["a", "b"]
    query = fake_db.queries_for("consultations")[-1]
    assert ("in_", ("status", ["NEW", "CONTACTED"]), {}) in query.calls


@pytest.mark.asyncio
async def test_staff_list_sanitizes_search_and_applies_dates(fake_db, users):
    _seed(fake_db, id="a", created_at="2024-01-15T00:00:00+00:00")
    _seed(fake_db, id="b", created_at="2024-03-15T00:00:00+00:00")

    response = await list_consultations(make_request(
        "GET", "/consultations", token="admin-token",
        params={"search": "O'Neil%", "from_date": "2024-02-01", "to_date": "2024-12-31"},
    ))

    assert [row["id"] for row in read_json(response)["data"]] == ["b"]
    query = fake_db.queries_for("consultations")[-1]
    or_filter = next(args[0] for name, args, _ in query.calls if name == "or_")
    assert or_filter == "name.ilike.%O''Neil%,email.ilike.%O''Neil%,phone.ilike.%O''Neil%"


@pytest.mark.asyncio
async def test_user_cannot_list_all_consultations(fake_db, users):
    response = await list_consultations(make_request("GET", "/consultations", token="user-token"))

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_my_consultations_only_returns_own(fake_db, users):
    _seed(fake_db, id="mine", user_id=users["user"])
    _seed(fake_db, id="theirs", user_id=users["staff"])

    response = await list_my_consultations(make_request("GET", "/consultations/my", token="user-token"))

    assert [row["id"] for row in read_json(response)["data"]] == ["mine"]
