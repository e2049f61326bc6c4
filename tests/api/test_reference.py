from __future__ import annotations

import pytest


@pytest.mark.parametrize("collection", ["departments", "impact-areas", "positions"])
def test_named_lookup_crud_flow(client, admin_headers, collection) -> None:
    created = client.post(f"/api/{collection}", headers=admin_headers, json={"name": "  Finance "})
    assert created.status_code == 201
    record = created.json()
    assert record["name"] == "Finance"
    assert record["created_at"]

    fetched = client.get(f"/api/{collection}/{record['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["name"] == "Finance"

    updated = client.patch(
        f"/api/{collection}/{record['id']}", headers=admin_headers, json={"name": "Budget"}
    )
    assert updated.status_code == 200
    assert updated.json()["name"] == "Budget"

    deleted = client.delete(f"/api/{collection}/{record['id']}", headers=admin_headers)
    assert deleted.status_code == 204
    assert client.get(f"/api/{collection}/{record['id']}").status_code == 404
    assert (
        client.delete(f"/api/{collection}/{record['id']}", headers=admin_headers).status_code
        == 404
    )


def test_duplicate_name_conflicts_case_insensitively(client, admin_headers) -> None:
    assert client.post("/api/departments", headers=admin_headers, json={"name": "Finance"}).status_code == 201

    response = client.post("/api/departments", headers=admin_headers, json={"name": "FINANCE"})

    assert response.status_code == 409
    assert "error" in response.json()


def test_writes_require_admin(client, user_headers) -> None:
    assert client.post("/api/departments", json={"name": "Finance"}).status_code == 401
    response = client.post("/api/departments", headers=user_headers, json={"name": "Finance"})
    assert response.status_code == 403
    assert response.json() == {"error": "Admin role required."}


def test_blank_name_is_bad_request(client, admin_headers) -> None:
    response = client.post("/api/positions", headers=admin_headers, json={"name": "   "})

    assert response.status_code == 400


def test_missing_record_returns_error_body(client) -> None:
    response = client.get("/api/districts/999")

    assert response.status_code == 404
    assert response.json() == {"error": "District not found."}


def test_list_envelope_and_filters(client, admin_headers) -> None:
    for name, region in [("North Zone", "North"), ("South Zone", "South"), ("Far North", "North")]:
        response = client.post(
            "/api/districts", headers=admin_headers, json={"name": name, "region": region}
        )
        assert response.status_code == 201

    listed = client.get("/api/districts", params={"limit": 2})
    assert listed.status_code == 200
    body = listed.json()
    assert body["count"] == 3
    assert body["pages"] == 2
    assert body["currentPage"] == 1
    assert [district["name"] for district in body["data"]] == ["North Zone", "South Zone"]

    by_region = client.get("/api/districts", params={"region": "North"}).json()
    assert by_region["count"] == 2

    searched = client.get("/api/districts", params={"search": "far"}).json()
    assert [district["name"] for district in searched["data"]] == ["Far North"]

    nothing = client.get("/api/districts", params={"search": "atlantis"}).json()
    assert nothing == {"data": [], "count": 0, "pages": 0, "currentPage": 1}


def test_list_clamps_invalid_paging(client) -> None:
    body = client.get("/api/positions", params={"page": "-3", "limit": "abc"}).json()

    assert body["currentPage"] == 1


def test_referenced_district_delete_conflicts(client, admin_headers) -> None:
    position = client.post("/api/positions", headers=admin_headers, json={"name": "Chairman"}).json()
    institution = client.post(
        "/api/institutions", headers=admin_headers, json={"name": "Water Board"}
    ).json()
    district = client.post(
        "/api/districts", headers=admin_headers, json={"name": "Central", "region": "Mid"}
    ).json()
    nominee = client.post(
        "/api/nominees",
        headers=admin_headers,
        json={
            "name": "Jane Roe",
            "position_id": position["id"],
            "institution_id": institution["id"],
            "district_id": district["id"],
        },
    )
    assert nominee.status_code == 201

    response = client.delete(f"/api/districts/{district['id']}", headers=admin_headers)

    assert response.status_code == 409
    assert client.get(f"/api/districts/{district['id']}").status_code == 200


def test_district_update(client, admin_headers) -> None:
    district = client.post(
        "/api/districts", headers=admin_headers, json={"name": "Central", "region": "Mid"}
    ).json()
    client.post("/api/districts", headers=admin_headers, json={"name": "Coastal", "region": "West"})

    updated = client.patch(
        f"/api/districts/{district['id']}",
        headers=admin_headers,
        json={"name": " Central Hills ", "region": "Highlands"},
    )
    region_only = client.patch(
        f"/api/districts/{district['id']}", headers=admin_headers, json={"region": "Uplands"}
    )
    clash = client.patch(
        f"/api/districts/{district['id']}", headers=admin_headers, json={"name": "COASTAL"}
    )

    assert updated.status_code == 200
    assert (updated.json()["name"], updated.json()["region"]) == ("Central Hills", "Highlands")
    assert (region_only.json()["name"], region_only.json()["region"]) == (
        "Central Hills",
        "Uplands",
    )
    assert clash.status_code == 409
    assert client.patch(
        "/api/districts/999", headers=admin_headers, json={"region": "Nowhere"}
    ).status_code == 404


@pytest.mark.parametrize("param", ["page", "limit"])
def test_list_survives_huge_paging_values(client, admin_headers, param) -> None:
    client.post("/api/districts", headers=admin_headers, json={"name": "Central", "region": "Mid"})

    response = client.get("/api/districts", params={param: str(10**19)})

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert len(body["data"]) == (0 if param == "page" else 1)
