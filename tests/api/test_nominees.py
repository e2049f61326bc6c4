from __future__ import annotations

import pytest


@pytest.fixture
def nominee_refs(client, admin_headers) -> dict[str, int]:
    position = client.post("/api/positions", headers=admin_headers, json={"name": "Chairman"})
    institution = client.post(
        "/api/institutions", headers=admin_headers, json={"name": "Water Board"}
    )
    district = client.post(
        "/api/districts", headers=admin_headers, json={"name": "Central", "region": "Mid"}
    )
    return {
        "position_id": position.json()["id"],
        "institution_id": institution.json()["id"],
        "district_id": district.json()["id"],
    }


def _create_nominee(client, headers, refs, name="Jane Roe") -> dict:
    response = client.post("/api/nominees", headers=headers, json={"name": name, **refs})
    assert response.status_code == 201
    return response.json()


def test_nominee_defaults_and_list_includes_relations(client, admin_headers, nominee_refs) -> None:
    nominee = _create_nominee(client, admin_headers, nominee_refs)
    assert nominee["status"] is False
    assert nominee["image"] is None

    listed = client.get("/api/nominees").json()

    assert listed["count"] == 1
    row = listed["data"][0]
    assert row["position"]["name"] == "Chairman"
    assert row["institution"]["name"] == "Water Board"
    assert row["district"]["region"] == "Mid"
    assert row["ratings"] == []


def test_nominee_detail_score_is_unweighted_mean(client, admin_headers, nominee_refs) -> None:
    nominee = _create_nominee(client, admin_headers, nominee_refs)
    heavy = client.post(
        "/api/rating-categories", headers=admin_headers, json={"name": "Integrity", "weight": 90}
    ).json()
    light = client.post(
        "/api/rating-categories", headers=admin_headers, json={"name": "Outreach", "weight": 10}
    ).json()
    for category, score in [(heavy, 5), (light, 2)]:
        response = client.post(
            "/api/nominee-ratings",
            headers=admin_headers,
            json={
                "nominee_id": nominee["id"],
                "rating_category_id": category["id"],
                "score": score,
            },
        )
        assert response.status_code == 201
        assert response.json()["category"]["name"] == category["name"]

    detail = client.get(f"/api/nominees/{nominee['id']}").json()

    assert detail["score"] == {"average": 3.5, "count": 2}
    assert sorted(rating["category"]["name"] for rating in detail["ratings"]) == [
        "Integrity",
        "Outreach",
    ]


def test_nominee_without_ratings_has_no_average(client, admin_headers, nominee_refs) -> None:
    nominee = _create_nominee(client, admin_headers, nominee_refs)

    detail = client.get(f"/api/nominees/{nominee['id']}").json()

    assert detail["score"] == {"average": None, "count": 0}


def test_nominee_with_unknown_reference_conflicts(client, admin_headers, nominee_refs) -> None:
    response = client.post(
        "/api/nominees",
        headers=admin_headers,
        json={"name": "Ghost", **{**nominee_refs, "district_id": 999}},
    )

    assert response.status_code == 409


def test_rating_score_out_of_range_is_bad_request(client, admin_headers, nominee_refs) -> None:
    nominee = _create_nominee(client, admin_headers, nominee_refs)
    category = client.post(
        "/api/rating-categories", headers=admin_headers, json={"name": "Integrity"}
    ).json()

    response = client.post(
        "/api/nominee-ratings",
        headers=admin_headers,
        json={"nominee_id": nominee["id"], "rating_category_id": category["id"], "score": 7},
    )

    assert response.status_code == 400


def test_nominee_filters(client, admin_headers, nominee_refs) -> None:
    _create_nominee(client, admin_headers, nominee_refs, name="Jane Roe")
    other = _create_nominee(client, admin_headers, nominee_refs, name="John Doe")
    client.patch(f"/api/nominees/{other['id']}", headers=admin_headers, json={"status": True})

    active = client.get("/api/nominees", params={"status": "true"}).json()
    assert [row["name"] for row in active["data"]] == ["John Doe"]

    by_district = client.get(
        "/api/nominees", params={"district_id": nominee_refs["district_id"]}
    ).json()
    assert by_district["count"] == 2

    ignored = client.get("/api/nominees", params={"district_id": "abc"}).json()
    assert ignored["count"] == 2


def test_institution_detail_includes_score(client, admin_headers) -> None:
    institution = client.post(
        "/api/institutions", headers=admin_headers, json={"name": "Rail Office", "status": True}
    ).json()
    category = client.post(
        "/api/institution-rating-categories", headers=admin_headers, json={"name": "Openness"}
    ).json()
    client.post(
        "/api/institution-ratings",
        headers=admin_headers,
        json={"institution_id": institution["id"], "rating_category_id": category["id"], "score": 4},
    )

    detail = client.get(f"/api/institutions/{institution['id']}").json()

    assert detail["status"] is True
    assert detail["score"] == {"average": 4.0, "count": 1}
    assert detail["ratings"][0]["category"]["name"] == "Openness"


def test_rating_category_in_use_cannot_be_deleted(client, admin_headers, nominee_refs) -> None:
    nominee = _create_nominee(client, admin_headers, nominee_refs)
    category = client.post(
        "/api/rating-categories", headers=admin_headers, json={"name": "Integrity"}
    ).json()
    rating = client.post(
        "/api/nominee-ratings",
        headers=admin_headers,
        json={"nominee_id": nominee["id"], "rating_category_id": category["id"], "score": 3},
    ).json()

    assert (
        client.delete(f"/api/rating-categories/{category['id']}", headers=admin_headers).status_code
        == 409
    )
    assert (
        client.delete(f"/api/nominee-ratings/{rating['id']}", headers=admin_headers).status_code
        == 204
    )
    assert (
        client.delete(f"/api/rating-categories/{category['id']}", headers=admin_headers).status_code
        == 204
    )


@pytest.mark.parametrize("collection", ["rating-categories", "institution-rating-categories"])
def test_rating_category_update_strips_markers(client, admin_headers, collection) -> None:
    category = client.post(
        f"/api/{collection}", headers=admin_headers, json={"name": "Integrity"}
    ).json()

    response = client.patch(
        f"/api/{collection}/{category['id']}",
        headers=admin_headers,
        json={"keyword": "  honest ", "icon": " shield ", "weight": 40},
    )

    assert response.status_code == 200
    updated = response.json()
    assert (updated["name"], updated["keyword"], updated["icon"]) == (
        "Integrity",
        "honest",
        "shield",
    )
    assert updated["weight"] == 40
    assert client.patch(
        f"/api/{collection}/999", headers=admin_headers, json={"weight": 1}
    ).status_code == 404


def test_nominee_rating_update(client, admin_headers, nominee_refs) -> None:
    nominee = _create_nominee(client, admin_headers, nominee_refs)
    first = client.post(
        "/api/rating-categories", headers=admin_headers, json={"name": "Integrity"}
    ).json()
    second = client.post(
        "/api/rating-categories", headers=admin_headers, json={"name": "Outreach"}
    ).json()
    rating = client.post(
        "/api/nominee-ratings",
        headers=admin_headers,
        json={"nominee_id": nominee["id"], "rating_category_id": first["id"], "score": 2},
    ).json()

    response = client.patch(
        f"/api/nominee-ratings/{rating['id']}",
        headers=admin_headers,
        json={"score": 4.5, "rating_category_id": second["id"], "evidence": "Audit"},
    )

    assert response.status_code == 200
    updated = response.json()
    assert updated["score"] == 4.5
    assert updated["evidence"] == "Audit"
    assert updated["category"]["name"] == "Outreach"
    assert client.get(f"/api/nominees/{nominee['id']}").json()["score"] == {
        "average": 4.5,
        "count": 1,
    }


def test_rating_update_rejects_out_of_range_score(client, admin_headers, nominee_refs) -> None:
    nominee = _create_nominee(client, admin_headers, nominee_refs)
    category = client.post(
        "/api/rating-categories", headers=admin_headers, json={"name": "Integrity"}
    ).json()
    rating = client.post(
        "/api/nominee-ratings",
        headers=admin_headers,
        json={"nominee_id": nominee["id"], "rating_category_id": category["id"], "score": 3},
    ).json()

    response = client.patch(
        f"/api/nominee-ratings/{rating['id']}", headers=admin_headers, json={"score": 5.5}
    )

    assert response.status_code == 400
    assert client.get(f"/api/nominee-ratings/{rating['id']}").json()["score"] == 3


def test_institution_rating_update(client, admin_headers) -> None:
    institution = client.post(
        "/api/institutions", headers=admin_headers, json={"name": "Rail Office"}
    ).json()
    category = client.post(
        "/api/institution-rating-categories", headers=admin_headers, json={"name": "Openness"}
    ).json()
    rating = client.post(
        "/api/institution-ratings",
        headers=admin_headers,
        json={"institution_id": institution["id"], "rating_category_id": category["id"], "score": 1},
    ).json()

    updated = client.patch(
        f"/api/institution-ratings/{rating['id']}",
        headers=admin_headers,
        json={"score": 3, "severity": "low"},
    )
    bad = client.patch(
        f"/api/institution-ratings/{rating['id']}", headers=admin_headers, json={"score": -1}
    )
    missing = client.patch(
        "/api/institution-ratings/999", headers=admin_headers, json={"score": 2}
    )

    assert updated.status_code == 200
    assert (updated.json()["score"], updated.json()["severity"]) == (3, "low")
    assert bad.status_code == 400
    assert missing.status_code == 404
