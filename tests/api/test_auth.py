from __future__ import annotations

from fastapi.testclient import TestClient as FastAPITestClient

from app import auth, repository
from app.main import app
from app.models import UserRole


def test_login_happy_path(client, _create_user) -> None:
    _create_user("reader@example.com", "reader-pass", UserRole.USER)

    response = client.post(
        "/api/auth/login",
        json={"email": "Reader@Example.com", "password": "reader-pass"},
    )

    assert response.status_code == 200
    assert response.json()["access_token"]
    assert response.json()["token_type"] == "bearer"


def test_login_rejects_wrong_password(client, _create_user) -> None:
    _create_user("reader@example.com", "reader-pass", UserRole.USER)

    response = client.post(
        "/api/auth/login", json={"email": "reader@example.com", "password": "nope"}
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid email or password."}


def test_password_hashing_uses_bcrypt() -> None:
    hashed = auth.hash_password("sample-pass")
    assert hashed.startswith("$2")
    assert auth.verify_password("sample-pass", hashed)
    assert not auth.verify_password("wrong-pass", hashed)


def test_register_returns_token_and_me(client, _auth_headers) -> None:
    response = client.post(
        "/api/auth/register",
        json={"name": "New Person", "email": "new@example.com", "password": "long-enough"},
    )
    assert response.status_code == 201
    headers = _auth_headers(response.json()["access_token"])

    me = client.get("/api/auth/me", headers=headers)

    assert me.status_code == 200
    body = me.json()
    assert body["email"] == "new@example.com"
    assert body["role"] == "User"
    assert "hashed_password" not in body
    assert "password" not in body


def test_register_duplicate_email_conflicts(client, _create_user) -> None:
    _create_user("taken@example.com", "taken-pass")

    response = client.post(
        "/api/auth/register",
        json={"name": "Other", "email": "TAKEN@example.com", "password": "long-enough"},
    )

    assert response.status_code == 409


def test_register_short_password_is_bad_request(client) -> None:
    response = client.post(
        "/api/auth/register",
        json={"name": "Short", "email": "short@example.com", "password": "x"},
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request."
    assert response.json()["details"]


def test_me_requires_bearer_token(client) -> None:
    assert client.get("/api/auth/me").status_code == 401
    assert client.get("/api/auth/me", headers={"Authorization": "Basic abc"}).status_code == 401
    assert (
        client.get("/api/auth/me", headers={"Authorization": "Bearer unknown"}).status_code
        == 401
    )


def test_logout_revokes_token(client, user_headers) -> None:
    response = client.post("/api/auth/logout", headers=user_headers)

    assert response.status_code == 204
    assert client.get("/api/auth/me", headers=user_headers).status_code == 401


def test_token_survives_app_restart(db_path, _create_user) -> None:
    _create_user("admin@example.com", "admin-pass", UserRole.ADMIN)

    with FastAPITestClient(app) as first_client:
        login_response = first_client.post(
            "/api/auth/login",
            json={"email": "admin@example.com", "password": "admin-pass"},
        )
        token = login_response.json()["access_token"]

    with FastAPITestClient(app) as second_client:
        response = second_client.post(
            "/api/departments",
            headers={"Authorization": f"Bearer {token}"},
            json={"name": "Finance"},
        )
        assert response.status_code == 201


def test_inactive_user_token_is_rejected(
    client, database, _create_user, _login, _auth_headers
) -> None:
    user_id = _create_user("reader@example.com", "reader-pass")
    headers = _auth_headers(_login("reader@example.com", "reader-pass"))
    with database.session() as session:
        repository.update_user(session, user_id, is_active=False)

    assert client.get("/api/auth/me", headers=headers).status_code == 401
