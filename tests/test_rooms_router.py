from datetime import date, timedelta

from helpers import plain_weekday_after


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["data"] == {"status": "healthy"}


def test_list_rooms_is_wrapped(client):
    response = client.get("/api/rooms")
    body = response.json()

    assert response.status_code == 200
    assert body["status"] == "Success"
    assert body["status_code"] == "200"
    assert body["data"]["total"] == 97
    first = body["data"]["rooms"][0]
    assert (first["room_number"], first["floor"], first["position"]) == (101, 1, 1)


def test_top_floor_has_seven_suites(client):
    rooms = client.get("/api/rooms/floor/10").json()["data"]["rooms"]
    assert [room["room_number"] for room in rooms] == list(range(1001, 1008))
    assert {room["room_type"] for room in rooms} == {"suite"}


def test_unknown_floor_and_room(client):
    response = client.get("/api/rooms/floor/11")
    assert response.status_code == 404
    assert response.json()["status"] == "Failed"

    assert client.get("/api/rooms/number/111").status_code == 404
    assert client.get("/api/rooms/number/905").json()["data"]["room_type"] == "deluxe"


def test_room_types(client):
    summary = {row["room_type"]: row for row in client.get("/api/rooms/types").json()["data"]}
    assert summary["standard"]["count"] == 70
    assert summary["deluxe"]["count"] == 20
    assert summary["suite"]["count"] == 7
    assert summary["suite"]["avg_price"] == 200.0
    assert summary["standard"]["available"] is None


def test_search_by_type_and_price(client):
    deluxe = client.get("/api/rooms/search", params={"room_type": "deluxe"}).json()["data"]
    assert deluxe["total"] == 20

    cheap = client.get("/api/rooms/search", params={"max_price": 120, "floor": 3}).json()["data"]
    assert cheap["total"] == 10

    blank = client.get("/api/rooms/search", params={"room_type": ""}).json()["data"]
    assert blank["total"] == 97


def test_availability_reflects_bookings(client, block_rooms):
    check_in = plain_weekday_after(10)
    check_out = check_in + timedelta(days=2)
    block_rooms([101, 102, 1007], check_in, check_out)

    data = client.get("/api/rooms/available", params={
        "check_in": check_in.isoformat(), "check_out": check_out.isoformat()
    }).json()["data"]

    assert data["total_free"] == 94
    floors = {row["floor"]: row for row in data["floors"]}
    assert floors[1]["free"] == 8
    assert floors[1]["rooms"][0] == 103
    assert 1007 not in floors[10]["rooms"]


def test_availability_rejects_backwards_range(client):
    check_in = plain_weekday_after(10)
    response = client.get("/api/rooms/available", params={
        "check_in": check_in.isoformat(),
        "check_out": (check_in - timedelta(days=1)).isoformat()
    })
    assert response.status_code == 400
    assert response.json()["status_code"] == "302"


def test_quote_does_not_reserve(client):
    check_in = plain_weekday_after(10)
    params = {
        "num_rooms": 3,
        "check_in": check_in.isoformat(),
        "check_out": (check_in + timedelta(days=1)).isoformat()
    }
    first = client.get("/api/rooms/quote", params=params).json()["data"]
    second = client.get("/api/rooms/quote", params=params).json()["data"]

    assert first == second
    assert first["rooms"] == [101, 102, 103]
    assert first["travel_time"] == 2
    assert first["strategy"] == "same_floor"
    assert first["total_price"] == 300.0


def test_quote_rejects_bad_counts_and_past_dates(client):
    check_in = plain_weekday_after(10)
    params = {
        "num_rooms": 6,
        "check_in": check_in.isoformat(),
        "check_out": (check_in + timedelta(days=1)).isoformat()
    }
    assert client.get("/api/rooms/quote", params=params).status_code == 400

    yesterday = date.today() - timedelta(days=1)
    params.update(num_rooms=1, check_in=yesterday.isoformat(), check_out=date.today().isoformat())
    assert client.get("/api/rooms/quote", params=params).status_code == 400


def test_quote_rejects_stays_a_booking_would_reject(client):
    check_in = plain_weekday_after(10)
    params = {
        "num_rooms": 1,
        "check_in": check_in.isoformat(),
        "check_out": (check_in + timedelta(days=31)).isoformat()
    }
    response = client.get("/api/rooms/quote", params=params)
    assert response.status_code == 400
    assert "30" in response.json()["message"]

    params["check_out"] = (check_in + timedelta(days=30)).isoformat()
    assert client.get("/api/rooms/quote", params=params).json()["data"]["nights"] == 30


def test_bad_query_params_are_400(client):
    response = client.get("/api/rooms/available", params={"check_in": "not-a-date"})
    assert response.status_code == 400
    assert response.json()["status_code"] == "300"


# ----------------- Demo data -----------------
def test_random_occupancy_books_a_third_to_three_fifths(client, auth_headers):
    check_in = plain_weekday_after(10)
    stay = {"check_in": check_in.isoformat(), "check_out": (check_in + timedelta(days=2)).isoformat()}

    response = client.post("/api/rooms/random-occupancy", json=stay, headers=auth_headers())
    assert response.status_code == 200
    data = response.json()["data"]

    assert data["total_rooms"] == 97
    assert 29 <= data["occupied_rooms"] <= 58
    assert data["available_rooms"] == 97 - data["occupied_rooms"]
    assert 30.0 <= data["occupancy_rate"] <= 60.0

    free = client.get("/api/rooms/available", params=stay).json()["data"]
    assert free["total_free"] == data["available_rooms"]


def test_random_occupancy_needs_a_token_and_a_valid_range(client, auth_headers):
    check_in = plain_weekday_after(10)
    stay = {"check_in": check_in.isoformat(), "check_out": check_in.isoformat()}
    assert client.post("/api/rooms/random-occupancy", json=stay).status_code in (401, 403)

    response = client.post("/api/rooms/random-occupancy", json=stay, headers=auth_headers())
    assert response.status_code == 400
    assert response.json()["status_code"] == "302"


def test_reset_all_cancels_active_bookings(client, auth_headers, block_rooms):
    check_in = plain_weekday_after(10)
    check_out = check_in + timedelta(days=2)
    block_rooms(range(101, 111), check_in, check_out)
    block_rooms([201], check_in, check_out, status="completed")

    response = client.post("/api/rooms/reset-all", headers=auth_headers())
    assert response.status_code == 200
    assert response.json()["data"] == {
        "cancelled_bookings": 2, "provisioned_rooms": 0, "total_rooms": 97
    }

    free = client.get("/api/rooms/available", params={
        "check_in": check_in.isoformat(), "check_out": check_out.isoformat()
    }).json()["data"]
    assert free["total_free"] == 97
