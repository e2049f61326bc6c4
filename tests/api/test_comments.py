from __future__ import annotations

import pytest

from app.models import UserRole


@pytest.fixture
def institution_id(client, admin_headers) -> int:
    response = client.post("/api/institutions", headers=admin_headers, json={"name": "Water Board"})
    return response.json()["id"]


def test_user_can_comment_and_author_comes_from_token(client, user_headers, institution_id) -> None:
    response = client.post(
        "/api/comments",
        headers=user_headers,
        json={"content": "Great work", "institution_id": institution_id, "user_id": 999},
    )

    assert response.status_code == 201
    comment = response.json()
    assert comment["author_name"] == "Reader"
    assert comment["user_id"] != 999
    assert comment["nominee_id"] is None

    listed = client.get("/api/comments", params={"institution_id": institution_id}).json()
    assert listed["count"] == 1


@pytest.mark.parametrize(
    "subject",
    [{}, {"nominee_id": 1, "institution_id": 1}],
)
def test_comment_requires_exactly_one_subject(client, user_headers, subject) -> None:
    response = client.post(
        "/api/comments", headers=user_headers, json={"content": "Hello", **subject}
    )

    assert response.status_code == 400


def test_comment_requires_authentication(client, institution_id) -> None:
    response = client.post(
        "/api/comments", json={"content": "Hello", "institution_id": institution_id}
    )

    assert response.status_code == 401


def test_only_author_or_admin_can_change_comment(
    client, admin_headers, user_headers, _create_user, _login, _auth_headers, institution_id
) -> None:
    comment = client.post(
        "/api/comments",
        headers=user_headers,
        json={"content": "First", "institution_id": institution_id},
    ).json()
    _create_user("other@example.com", "other-pass", UserRole.USER, name="Other")
    other_headers = _auth_headers(_login("other@example.com", "other-pass"))

    forbidden = client.patch(
        f"/api/comments/{comment['id']}", headers=other_headers, json={"content": "Hijack"}
    )
    assert forbidden.status_code == 403

    edited = client.patch(
        f"/api/comments/{comment['id']}", headers=user_headers, json={"content": "Edited"}
    )
    assert edited.status_code == 200
    assert edited.json()["content"] == "Edited"
    assert edited.json()["author_name"] == "Reader"

    assert client.delete(f"/api/comments/{comment['id']}", headers=other_headers).status_code == 403
    assert client.delete(f"/api/comments/{comment['id']}", headers=admin_headers).status_code == 204
    assert client.get(f"/api/comments/{comment['id']}").status_code == 404
