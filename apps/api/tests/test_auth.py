import pytest
from sqlalchemy import select

from izin_api.core.errors import InvalidCredentials
from izin_api.core.security import verify_token
from izin_api.core.seed import seed_users
from izin_api.models.user import User
from izin_api.services.auth_service import authenticate


def test_authenticate_returns_user_and_verifiable_token(session, users):
    user, token = authenticate(session, "001", "password")

    assert user.id == users["Karyawan"].id
    assert user.role == "Karyawan"
    claims = verify_token(token)
    assert claims is not None
    assert claims.user_id == user.id
    assert claims.nik == "001"
    assert claims.role == "Karyawan"


def test_authenticate_updates_device_token(session, users):
    user, _ = authenticate(session, "001", "password", fcm_token="fcm-token-123")

    assert user.fcm_token == "fcm-token-123"
    stored = session.scalar(select(User).where(User.nik == "001"))
    assert stored.fcm_token == "fcm-token-123"


def test_authenticate_empty_device_token_keeps_existing(session, users):
    users["Karyawan"].fcm_token = "existing"
    session.commit()

    user, _ = authenticate(session, "001", "password", fcm_token="")
    assert user.fcm_token == "existing"


@pytest.mark.parametrize(
    "nik,password",
    [
        ("999", "password"),
        ("001", "wrong"),
        ("", "password"),
        ("001", ""),
    ],
)
def test_authenticate_rejects_bad_credentials(session, users, nik, password):
    with pytest.raises(InvalidCredentials):
        authenticate(session, nik, password)


def test_seed_users_creates_demo_accounts_once(session):
    seed_users(session)
    seed_users(session)

    rows = session.scalars(select(User).order_by(User.nik)).all()
    assert [(u.nik, u.role) for u in rows] == [("001", "Karyawan"), ("002", "HR"), ("003", "Admin")]

    user, _ = authenticate(session, "001", "password")
    assert user.name == "Ahmad Pratama"


def test_login_endpoint(client, users):
    res = client.post("/auth/login", json={"nik": "002", "password": "password"})

    assert res.status_code == 200
    body = res.json()
    assert body["user"]["nik"] == "002"
    assert body["user"]["role"] == "HR"
    assert "password" not in body["user"]
    assert verify_token(body["token"]).role == "HR"


def test_login_endpoint_invalid_credentials(client, users):
    res = client.post("/auth/login", json={"nik": "001", "password": "nope"})

    assert res.status_code == 401
    assert res.json() == {"detail": "Invalid credentials", "code": "INVALID_CREDENTIALS"}


def test_login_endpoint_requires_fields(client, users):
    res = client.post("/auth/login", json={"nik": "", "password": "password"})
    assert res.status_code == 422


def test_me_requires_token(client, users):
    assert client.get("/me").status_code == 401


def test_me_rejects_invalid_token(client, users):
    res = client.get("/me", headers={"Authorization": "Bearer garbage"})

    assert res.status_code == 401
    assert res.json()["code"] == "TOKEN_INVALID_OR_EXPIRED"


def test_me_returns_profile(client, auth_headers):
    res = client.get("/me", headers=auth_headers("Admin"))

    assert res.status_code == 200
    assert res.json()["nik"] == "003"
    assert res.json()["role"] == "Admin"


def test_token_for_deleted_user_rejected(client, session, users, auth_headers):
    headers = auth_headers("HR")
    session.delete(users["HR"])
    session.commit()

    assert client.get("/me", headers=headers).status_code == 401


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "ok"
