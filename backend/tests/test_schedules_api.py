import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from trip_planner.models.chat_message import ChatMessage

ALICE = {"X-User-Id": "alice"}
BOB = {"X-User-Id": "bob"}
CAROL = {"X-User-Id": "carol"}


@pytest.fixture
def schedule(client: TestClient, members):
    """Create a schedule authored by alice"""
    response = client.post(
        "/api/schedules",
        json={"schedule_name": "Seoul weekend", "start_date": "2025-04-05", "end_date": "2025-04-06"},
        headers=ALICE,
    )
    assert response.status_code == 201
    return response.json()


def _share(client: TestClient, schedule_id: int, user_id: str, permission: str):
    response = client.post(
        f"/api/schedules/{schedule_id}/attendees", json={"user_id": user_id, "permission": permission}, headers=ALICE
    )
    assert response.status_code == 201
    return response.json()


def _update(client: TestClient, schedule_id: int, routes, headers=ALICE, name="Seoul weekend"):
    return client.put(
        f"/api/schedules/{schedule_id}",
        json={"schedule_name": name, "start_date": "2025-04-05", "end_date": "2025-04-06", "routes": routes},
        headers=headers,
    )


def test_health(client: TestClient):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_missing_identity_is_unauthorized(client: TestClient):
    response = client.get("/api/schedules")

    assert response.status_code == 401


def test_create_schedule(schedule):
    assert schedule["schedule_id"] == 1


def test_create_schedule_unknown_member(client: TestClient, members):
    response = client.post(
        "/api/schedules",
        json={"schedule_name": "Trip", "start_date": "2025-01-01", "end_date": "2025-01-02"},
        headers={"X-User-Id": "nobody"},
    )

    assert response.status_code == 404
    assert response.json()["detail"].startswith("MEMBER_NOT_FOUND")


def test_create_schedule_rejects_blank_name(client: TestClient, members):
    response = client.post(
        "/api/schedules",
        json={"schedule_name": "   ", "start_date": "2025-01-01", "end_date": "2025-01-02"},
        headers=ALICE,
    )

    assert response.status_code == 422


def test_create_schedule_rejects_reversed_dates(client: TestClient, members):
    response = client.post(
        "/api/schedules",
        json={"schedule_name": "Trip", "start_date": "2025-01-05", "end_date": "2025-01-01"},
        headers=ALICE,
    )

    assert response.status_code == 422
    assert any("end_date must be >= start_date" in str(err) for err in response.json()["detail"])


def test_list_schedules(client: TestClient, schedule, places):
    _update(client, schedule["schedule_id"], [{"route_order": 1, "place_id": places["tower"].id}])
    _share(client, schedule["schedule_id"], "bob", "READ")

    response = client.get("/api/schedules", headers=BOB)

    assert response.status_code == 200
    data = response.json()
    assert data["total_elements"] == 1
    assert data["total_shared_elements"] == 1
    assert data["page"] == 1
    assert data["size"] == 9
    summary = data["schedules"][0]
    assert summary["schedule_name"] == "Seoul weekend"
    assert summary["role"] == "GUEST"
    assert summary["author"]["nickname"] == "Alice"
    assert summary["thumbnail_url"] == "https://img.example.com/tower.jpg"
    assert summary["since_update"] == "just now"


def test_list_editable_schedules(client: TestClient, schedule):
    _share(client, schedule["schedule_id"], "bob", "CHAT")

    response = client.get("/api/schedules", params={"mode": "EDITABLE"}, headers=BOB)

    assert response.status_code == 200
    assert response.json()["schedules"] == []
    assert response.json()["size"] == 5


def test_list_rejects_page_zero(client: TestClient, members):
    response = client.get("/api/schedules", params={"page": 0}, headers=ALICE)

    assert response.status_code == 422


def test_schedule_detail(client: TestClient, schedule, places):
    schedule_id = schedule["schedule_id"]
    _update(
        client,
        schedule_id,
        [{"route_order": 2, "place_id": places["market"].id}, {"route_order": 1, "place_id": places["palace"].id}],
    )
    _share(client, schedule_id, "bob", "READ")

    response = client.get(f"/api/schedules/{schedule_id}", headers=BOB)

    assert response.status_code == 200
    data = response.json()
    assert [(r["route_order"], r["place_name"]) for r in data["routes"]] == [
        (1, "Deoksugung"),
        (2, "Namdaemun Market"),
    ]
    assert data["attendees"] == [{"user_id": "alice", "role": "AUTHOR"}, {"user_id": "bob", "role": "GUEST"}]
    assert data["places"]["total_elements"] == 3


def test_schedule_detail_forbidden_for_non_attendee(client: TestClient, schedule):
    response = client.get(f"/api/schedules/{schedule['schedule_id']}", headers=CAROL)

    assert response.status_code == 403
    assert response.json()["detail"].startswith("FORBIDDEN_ACCESS_SCHEDULE")


def test_schedule_detail_not_found(client: TestClient, members):
    response = client.get("/api/schedules/77", headers=ALICE)

    assert response.status_code == 404
    assert response.json()["detail"].startswith("SCHEDULE_NOT_FOUND")


def test_update_rejects_duplicate_route_orders(client: TestClient, schedule, places):
    response = _update(
        client,
        schedule["schedule_id"],
        [{"route_order": 1, "place_id": places["tower"].id}, {"route_order": 1, "place_id": places["market"].id}],
    )

    assert response.status_code == 422


def test_update_rejects_non_positive_route_order(client: TestClient, schedule, places):
    response = _update(client, schedule["schedule_id"], [{"route_order": 0, "place_id": places["tower"].id}])

    assert response.status_code == 422


def test_update_unknown_place(client: TestClient, schedule, places):
    response = _update(client, schedule["schedule_id"], [{"route_order": 1, "place_id": 999}])

    assert response.status_code == 404
    assert response.json()["detail"].startswith("PLACE_NOT_FOUND")


def test_update_by_read_only_guest(client: TestClient, schedule, places):
    schedule_id = schedule["schedule_id"]
    _share(client, schedule_id, "bob", "READ")

    response = _update(client, schedule_id, [], headers=BOB, name="Mine now")

    assert response.status_code == 403
    assert response.json()["detail"].startswith("FORBIDDEN_EDIT_SCHEDULE")


def test_update_by_edit_guest(client: TestClient, schedule, places):
    schedule_id = schedule["schedule_id"]
    _share(client, schedule_id, "bob", "EDIT")

    response = _update(client, schedule_id, [{"route_order": 1, "place_id": places["tower"].id}], headers=BOB)

    assert response.status_code == 200
    assert response.json()["schedule_id"] == schedule_id


def test_delete_by_guest_with_all(client: TestClient, schedule):
    schedule_id = schedule["schedule_id"]
    _share(client, schedule_id, "bob", "ALL")

    response = client.delete(f"/api/schedules/{schedule_id}", headers=BOB)

    assert response.status_code == 403
    assert response.json()["detail"].startswith("FORBIDDEN_DELETE_SCHEDULE")


def test_delete_by_author(client: TestClient, session: Session, schedule):
    schedule_id = schedule["schedule_id"]
    session.add(ChatMessage(schedule_id=schedule_id, sender_user_id="alice", message="hi"))
    session.commit()

    response = client.delete(f"/api/schedules/{schedule_id}", headers=ALICE)

    assert response.status_code == 204
    assert client.get(f"/api/schedules/{schedule_id}", headers=ALICE).status_code == 404
    assert client.get("/api/schedules", headers=ALICE).json()["total_elements"] == 0


def test_get_travel_places(client: TestClient, schedule, places):
    response = client.get(f"/api/schedules/{schedule['schedule_id']}/travels", headers=ALICE)

    assert response.status_code == 200
    data = response.json()
    assert [p["place_name"] for p in data["places"]] == ["N Seoul Tower", "Namdaemun Market", "Deoksugung"]
    assert data["places"][0]["district"] == "중구"


def test_search_travel_places(client: TestClient, schedule, places):
    response = client.get(
        f"/api/schedules/{schedule['schedule_id']}/travels/search", params={"keyword": "market"}, headers=ALICE
    )

    assert response.status_code == 200
    assert [p["place_name"] for p in response.json()["places"]] == ["Namdaemun Market"]


def test_search_travel_places_requires_keyword(client: TestClient, schedule):
    response = client.get(f"/api/schedules/{schedule['schedule_id']}/travels/search", headers=ALICE)

    assert response.status_code == 422


def test_get_travel_routes(client: TestClient, schedule, places):
    schedule_id = schedule["schedule_id"]
    _update(client, schedule_id, [{"route_order": n, "place_id": places["palace"].id} for n in range(1, 7)])

    response = client.get(f"/api/schedules/{schedule_id}/routes", params={"page": 2}, headers=ALICE)

    assert response.status_code == 200
    data = response.json()
    assert [r["route_order"] for r in data["routes"]] == [6]
    assert data["routes"][0]["thumbnail_url"] == "https://img.example.com/palace.jpg"
    assert data["total_elements"] == 6
    assert data["total_pages"] == 2


def test_get_travel_routes_forbidden_for_non_attendee(client: TestClient, schedule):
    response = client.get(f"/api/schedules/{schedule['schedule_id']}/routes", headers=CAROL)

    assert response.status_code == 403
