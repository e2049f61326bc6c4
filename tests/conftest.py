from __future__ import annotations

from collections.abc import Callable, Generator

import pytest
from fastapi.testclient import TestClient as FastAPITestClient
from sqlalchemy.orm import Session

from app import auth, repository, startup
from app.dependencies import Database
from app.main import app
from app.models import UserRole


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("NOMIRATE_DB_PATH", str(db_file))
    monkeypatch.setenv("NOMIRATE_UPLOAD_DIR", str(tmp_path / "uploads"))
    monkeypatch.delenv("NOMIRATE_ADMIN_EMAIL", raising=False)
    monkeypatch.delenv("NOMIRATE_ADMIN_PASSWORD", raising=False)
    monkeypatch.delenv("NOMIRATE_UPLOAD_MAX_BYTES", raising=False)
    monkeypatch.delenv("NOMIRATE_DEFAULT_PAGE_SIZE", raising=False)
    return db_file


@pytest.fixture
def database(db_path) -> Generator[Database, None, None]:
    database = startup.init_database(str(db_path))
    yield database
    database.dispose()


@pytest.fixture
def session(database: Database) -> Generator[Session, None, None]:
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_path) -> Generator[FastAPITestClient, None, None]:
    with FastAPITestClient(app) as test_client:
        yield test_client


@pytest.fixture
def _create_user(database: Database) -> Callable[..., int]:
    def _factory(
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
        name: str = "Test User",
    ) -> int:
        with database.session() as session:
            user = repository.create_user(
                session,
                name=name,
                email=email,
                hashed_password=auth.hash_password(password),
                role=role,
            )
        return user.id

    return _factory


@pytest.fixture
def _login(client: FastAPITestClient) -> Callable[[str, str], str]:
    def _factory(email: str, password: str) -> str:
        response = client.post(
            "/api/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200
        return response.json()["access_token"]

    return _factory


@pytest.fixture
def _auth_headers() -> Callable[[str], dict[str, str]]:
    def _factory(token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    return _factory


@pytest.fixture
def admin_headers(_create_user, _login, _auth_headers) -> dict[str, str]:
    _create_user("admin@example.com", "admin-pass", UserRole.ADMIN, name="Admin")
    return _auth_headers(_login("admin@example.com", "admin-pass"))


@pytest.fixture
def user_headers(_create_user, _login, _auth_headers) -> dict[str, str]:
    _create_user("user@example.com", "user-pass", UserRole.USER, name="Reader")
    return _auth_headers(_login("user@example.com", "user-pass"))
