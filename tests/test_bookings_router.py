from datetime import date, timedelta
from uuid import uuid4

import pytest

from helpers import plain_weekday_after
from reservation_service.app.services.inventory_service import build_inventory
from shared.core.auth import create_access_token


@pytest.fixture
def stay():
    check_in = plain_weekday_after(21)
    return {
        "check_in": check_in.isoformat(),
        "check_out": (check_in + timedelta(days=3)).isoformat()
    }


def book(client, headers, num_rooms, stay):
    return client.post("/api/bookings", json={"num_rooms": num_rooms, **stay}, headers=headers)


def test_create_booking_returns_201(client, auth_headers, stay):
    response = book(client, auth_headers(), 2, stay)
    body = response.json()

    assert response.status_code == 201
    assert body["status"] == "Success"
    assert body["message"] == "Created successfully"
    data = body["data"]
    assert data["rooms"] == [101, 102]
    assert data["floors"] == [1]
    assert data["travel_time"] == 1
    assert data["total_price"] == 600.0
    assert data["nights"] == 3
    assert data["status"] == "confirmed"


def test_missing_or_bad_token(client, stay):
    assert book(client, {}, 1, stay).status_code in (401, 403)

    response = book(client, {"Authorization": "Bearer not-a-jwt"}, 1, stay)
    assert response.status_code == 401
    assert response.json()["status_code"] == "200"


@pytest.mark.parametrize("num_rooms", [0, 6])
def test_bad_room_count_is_400(client, auth_headers, stay, num_rooms):
    response = book(client, auth_headers(), num_rooms, stay)
    assert response.status_code == 400
    assert response.json()["status"] == "Failed"
    assert response.json()["status_code"] == "300"


def test_bad_date_range_is_400(client, auth_headers, stay):
    swapped = {"check_in": stay["check_out"], "check_out": stay["check_in"]}
    response = book(client, auth_headers(), 1, swapped)
    assert response.status_code == 400
    assert response.json()["status_code"] == "302"

    past = date.today() - timedelta(days=2)
    response = book(client, auth_headers(), 1, {
        "check_in": past.isoformat(), "check_out": date.today().isoformat()})
    assert response.status_code == 400


@pytest.mark.parametrize("body", [
    {"num_rooms": "many"},
    {"num_rooms": 1, "check_in": "2027-02-30"},
])
def test_malformed_body_is_400(client, auth_headers, stay, body):
    response = client.post("/api/bookings", json={**stay, **body}, headers=auth_headers())
    assert response.status_code == 400
    assert response.json()["status"] == "Failed"
    assert response.json()["status_code"] == "300"


def test_missing_fields_are_400(client, auth_headers, stay):
    response = client.post("/api/bookings", json=stay, headers=auth_headers())
    assert response.status_code == 400
    assert response.json()["status_code"] == "300"

    response = client.post("/api/bookings", json={"num_rooms": 2}, headers=auth_headers())
    assert response.status_code == 400


def test_expired_token(client, stay):
    token = create_access_token({"user_id": "guest-1"}, expires_minutes=-5)
    response = book(client, {"Authorization": f"Bearer {token}"}, 1, stay)
    assert response.status_code == 401
    assert response.json()["status_code"] == "201"
    assert response.headers["www-authenticate"] == "Bearer"


def test_full_hotel_is_409(client, auth_headers, stay, block_rooms):
    check_in = date.fromisoformat(stay["check_in"])
    check_out = date.fromisoformat(stay["check_out"])
    block_rooms([room["room_number"] for room in build_inventory()][:-2], check_in, check_out)

    response = book(client, auth_headers(), 3, stay)
    assert response.status_code == 409
    assert response.json()["status_code"] == "500"

    assert book(client, auth_headers(), 2, stay).json()["data"]["rooms"] == [1006, 1007]


def test_get_list_and_cancel(client, auth_headers, stay):
    headers = auth_headers("guest-7")
    booking_id = book(client, headers, 1, stay).json()["data"]["booking_id"]

    fetched = client.get(f"/api/bookings/{booking_id}", headers=headers).json()["data"]
    assert fetched["user_id"] == "guest-7"
    assert fetched["rooms"] == [101]
    assert fetched["payment_status"] == "pending"

    listed = client.get("/api/bookings", headers=headers).json()["data"]
    assert listed["total"] == 1

    # other guests cannot see it
    assert client.get(f"/api/bookings/{booking_id}", headers=auth_headers("guest-8")).status_code == 404

    cancelled = client.put(f"/api/bookings/{booking_id}/cancel", headers=headers)
    assert cancelled.status_code == 200
    assert cancelled.json()["data"] == {"booking_id": booking_id, "status": "cancelled"}

    again = client.put(f"/api/bookings/{booking_id}/cancel", headers=headers)
    assert again.status_code == 400
    assert again.json()["status_code"] == "502"

    # the room is free again
    assert book(client, auth_headers("guest-9"), 1, stay).json()["data"]["rooms"] == [101]


def test_unknown_booking_is_404(client, auth_headers):
    response = client.get(f"/api/bookings/{uuid4()}", headers=auth_headers())
    assert response.status_code == 404
    assert response.json()["status_code"] == "400"


def test_stats_and_status_lookup(client, auth_headers, stay):
    headers = auth_headers("guest-3")
    book(client, headers, 2, stay)

    stats = client.get("/api/bookings/stats", headers=headers).json()["data"]
    assert stats["total"] == 1
    assert stats["confirmed"] == 1
    assert stats["total_spent"] == 600.0

    lookup = client.get("/api/bookings/status-lookup", headers=headers).json()["data"]
    assert [row["id"] for row in lookup] == ["pending", "confirmed", "cancelled", "completed"]
