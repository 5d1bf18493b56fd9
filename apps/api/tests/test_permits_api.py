from datetime import date

import pytest
from sqlalchemy import select

from izin_api.core.config import settings
from izin_api.models.notification_log import NotificationLog

from factories import permit_json

DECISION = {"status": "Disetujui", "approval_date": "2024-01-14", "approval_time": "10:00"}


@pytest.fixture
def create(client, auth_headers):
    def _create(**overrides) -> dict:
        res = client.post("/permits", json=permit_json(**overrides), headers=auth_headers("Karyawan"))
        assert res.status_code == 200, res.text
        return res.json()

    return _create


def test_create_permit(client, auth_headers):
    res = client.post("/permits", json=permit_json(), headers=auth_headers("Karyawan"))

    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "Pending"
    assert body["approval_date"] is None
    assert body["approval_time"] is None
    assert body["departure_date"] == "2024-01-15"
    assert body["remarks"] == "Perjalanan dinas resmi"


def test_create_permit_requires_auth(client, users):
    assert client.post("/permits", json=permit_json()).status_code == 401


def test_create_permit_invalid_range(client, auth_headers):
    res = client.post(
        "/permits",
        json=permit_json(departure_date=date(2024, 1, 16), return_date=date(2024, 1, 15)),
        headers=auth_headers("Karyawan"),
    )

    assert res.status_code == 422
    assert res.json()["code"] == "INVALID_DATE_RANGE"


@pytest.mark.parametrize("field,value", [("departure_time", "24:00"), ("return_time", "8:00"), ("plate_number", "")])
def test_create_permit_validates_fields(client, auth_headers, field, value):
    payload = permit_json()
    payload[field] = value

    res = client.post("/permits", json=payload, headers=auth_headers("Karyawan"))
    assert res.status_code == 422


def test_list_permits(client, auth_headers, create):
    first = create(nik="123")
    second = create(nik="456")

    res = client.get("/permits", headers=auth_headers("Karyawan"))

    assert res.status_code == 200
    assert [p["id"] for p in res.json()] == [second["id"], first["id"]]


def test_list_permits_filters(client, auth_headers, create):
    first = create(nik="123")
    create(nik="456")
    client.patch(f"/permits/{first['id']}/status", json=DECISION, headers=auth_headers("HR"))

    by_status = client.get("/permits", params={"status": "Disetujui"}, headers=auth_headers("HR")).json()
    assert [p["id"] for p in by_status] == [first["id"]]

    by_nik = client.get("/permits", params={"nik": "456"}, headers=auth_headers("HR")).json()
    assert [p["nik"] for p in by_nik] == ["456"]

    assert client.get("/permits", params={"status": "Unknown"}, headers=auth_headers("HR")).status_code == 422


def test_list_by_date_range(client, auth_headers, create):
    inside = create(departure_date=date(2024, 1, 15), return_date=date(2024, 1, 15))
    create(departure_date=date(2024, 1, 20), return_date=date(2024, 1, 20))

    res = client.get(
        "/permits/by-date-range",
        params={"start_date": "2024-01-15", "end_date": "2024-01-16"},
        headers=auth_headers("HR"),
    )

    assert res.status_code == 200
    assert [p["id"] for p in res.json()] == [inside["id"]]


def test_list_by_date_range_today(client, auth_headers, create):
    today = date.today()
    todays = create(departure_date=today, return_date=today, departure_time="00:00", return_time="23:59")
    create(departure_date=date(2024, 1, 15), return_date=date(2024, 1, 15))

    res = client.get("/permits/by-date-range", params={"filter_type": "today"}, headers=auth_headers("HR"))

    assert res.status_code == 200
    assert [p["id"] for p in res.json()] == [todays["id"]]


def test_list_by_date_range_invalid(client, auth_headers, users):
    missing = client.get("/permits/by-date-range", headers=auth_headers("HR"))
    assert missing.status_code == 422
    assert missing.json()["code"] == "INVALID_DATE_RANGE"

    reversed_range = client.get(
        "/permits/by-date-range",
        params={"start_date": "2024-01-16", "end_date": "2024-01-15"},
        headers=auth_headers("HR"),
    )
    assert reversed_range.status_code == 422
    assert reversed_range.json()["code"] == "INVALID_DATE_RANGE"


def test_stats(client, auth_headers, create):
    approved = create()
    rejected = create()
    create()
    client.patch(f"/permits/{approved['id']}/status", json=DECISION, headers=auth_headers("HR"))
    client.patch(
        f"/permits/{rejected['id']}/status",
        json={**DECISION, "status": "Ditolak"},
        headers=auth_headers("Admin"),
    )

    res = client.get("/permits/stats", headers=auth_headers("Karyawan"))

    assert res.status_code == 200
    assert res.json() == {"pending": 1, "approved": 1, "rejected": 1, "total": 3}


def test_get_permit(client, auth_headers, create):
    permit = create()

    res = client.get(f"/permits/{permit['id']}", headers=auth_headers("Karyawan"))
    assert res.status_code == 200
    assert res.json() == permit

    missing = client.get("/permits/9999", headers=auth_headers("Karyawan"))
    assert missing.status_code == 404
    assert missing.json()["code"] == "NOT_FOUND"


def test_decide_permit_notifies_requester(client, session, auth_headers, users, create, monkeypatch):
    monkeypatch.setattr(settings, "push_enabled", True)
    users["Karyawan"].fcm_token = "device-001"
    session.commit()
    permit = create(nik="001")

    res = client.patch(f"/permits/{permit['id']}/status", json=DECISION, headers=auth_headers("HR"))

    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "Disetujui"
    assert body["approval_date"] == "2024-01-14"
    assert body["approval_time"] == "10:00"

    session.expire_all()
    [log] = session.scalars(select(NotificationLog)).all()
    assert log.status == "sent"
    assert log.user_id == users["Karyawan"].id


def test_decide_permit_forbidden_for_employee(client, auth_headers, create):
    permit = create()

    res = client.patch(f"/permits/{permit['id']}/status", json=DECISION, headers=auth_headers("Karyawan"))

    assert res.status_code == 403
    assert res.json()["code"] == "INSUFFICIENT_PERMISSIONS"
    assert client.get(f"/permits/{permit['id']}", headers=auth_headers("HR")).json()["status"] == "Pending"


def test_decide_permit_twice(client, auth_headers, create):
    permit = create()
    client.patch(f"/permits/{permit['id']}/status", json=DECISION, headers=auth_headers("HR"))

    res = client.patch(
        f"/permits/{permit['id']}/status",
        json={**DECISION, "status": "Ditolak"},
        headers=auth_headers("Admin"),
    )

    assert res.status_code == 409
    assert res.json()["code"] == "NOT_PENDING"
    assert client.get(f"/permits/{permit['id']}", headers=auth_headers("HR")).json()["status"] == "Disetujui"


def test_decide_unknown_permit(client, auth_headers, users):
    res = client.patch("/permits/9999/status", json=DECISION, headers=auth_headers("HR"))
    assert res.status_code == 404


def test_decide_rejects_pending_status(client, auth_headers, create):
    permit = create()
    res = client.patch(
        f"/permits/{permit['id']}/status",
        json={**DECISION, "status": "Pending"},
        headers=auth_headers("HR"),
    )
    assert res.status_code == 422


def test_list_by_date_range_unknown_filter_type(client, auth_headers, users):
    res = client.get("/permits/by-date-range", params={"filter_type": "last_year"}, headers=auth_headers("HR"))
    assert res.status_code == 422


def test_get_missing_permit_returns_not_found(client, auth_headers, users):
    res = client.get("/permits/9999", headers=auth_headers("HR"))

    assert res.status_code == 404
    assert res.json() == {"detail": "Permit request not found", "code": "NOT_FOUND"}
