"""Integration tests for the rooms API.

Run with: pytest tests/test_api.py -v
"""

from datetime import date, datetime, time, timezone

import pytest
from rest_framework.test import APIClient

from tests.factories import SEAT_CONFIG

ROOM_PAYLOAD = {
    "id": 1,
    "seat_config": SEAT_CONFIG,
    "screen": {"size": 20, "type": "2D"},
    "status": "AVAILABLE",
}


def iso(day: date, hour: int, minute: int = 0) -> str:
    return datetime.combine(day, time(hour, minute), tzinfo=timezone.utc).isoformat()


def rendered(day: date, hour: int, minute: int = 0) -> str:
    return iso(day, hour, minute).replace("+00:00", "Z")


def create_room(api_client: APIClient, **overrides):
    return api_client.post("/api/rooms", {**ROOM_PAYLOAD, **overrides}, format="json")


def schedule(api_client: APIClient, activity: str, day: date, hour: int, duration: int, minute: int = 0):
    return api_client.post(
        f"/api/rooms/1/schedule-{activity}",
        {"start_date": iso(day, hour, minute), "duration": duration},
        format="json",
    )


@pytest.mark.django_db
class TestCreateRoom:
    """Tests for POST /api/rooms"""

    def test_create_room(self, api_client: APIClient):
        """Given a valid payload, returns the created room."""
        response = create_room(api_client)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["id"].startswith("ROOM.")
        assert data["number"] == 1
        assert data["status"] == "AVAILABLE"
        assert data["capacity"] == 26
        assert data["preferential_seats"] == 4
        assert data["screen"] == {"size": 20, "type": "2D"}
        assert data["rows"][1] == {"row_number": 2, "seats": 6, "preferential_seats": ["C", "D"]}
        assert data["bookings"] == []

    def test_status_defaults_to_available(self, api_client: APIClient):
        """Given no status, the room is available."""
        payload = {key: value for key, value in ROOM_PAYLOAD.items() if key != "status"}

        response = api_client.post("/api/rooms", payload, format="json")

        assert response.status_code == 201
        assert response.json()["data"]["status"] == "AVAILABLE"

    def test_duplicate_room(self, api_client: APIClient):
        """Given an existing room number, returns 409."""
        create_room(api_client)

        response = create_room(api_client)

        assert response.status_code == 409
        assert response.json()["errors"][0]["code"] == "RESOURCE_ALREADY_EXISTS"

    def test_invalid_room(self, api_client: APIClient):
        """Given values breaking room rules, returns 422 with every failure."""
        response = create_room(api_client, id=300, screen={"size": 5, "type": "2D"})

        assert response.status_code == 422
        errors = response.json()["errors"]
        assert [e["code"] for e in errors] == ["VALUE_OUT_OF_RANGE", "VALUE_OUT_OF_RANGE"]
        assert errors[0]["message"] == "Value is out of the allowed range"
        assert errors[0]["details"]["field"] == "room_identifier"

    def test_malformed_payload(self, api_client: APIClient):
        """Given a payload of the wrong shape, returns 400."""
        response = api_client.post("/api/rooms", {"id": "one"}, format="json")

        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["code"] == "INVALID_REQUEST"
        assert "screen" in error["details"]


@pytest.mark.django_db
class TestRoomDetail:
    """Tests for GET/DELETE /api/rooms/{id}"""

    def test_get_room(self, api_client: APIClient):
        """Given a room exists, returns it."""
        room_id = create_room(api_client).json()["data"]["id"]

        response = api_client.get("/api/rooms/1")

        assert response.status_code == 200
        assert response.json()["data"]["id"] == room_id

    def test_get_missing_room(self, api_client: APIClient):
        """Given no room, returns 404."""
        response = api_client.get("/api/rooms/42")

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "RESOURCE_NOT_FOUND"

    def test_delete_room(self, api_client: APIClient):
        """Given a room exists, deletes it."""
        create_room(api_client)
        api_client.get("/api/rooms/1")

        assert api_client.delete("/api/rooms/1").status_code == 204
        assert api_client.get("/api/rooms/1").status_code == 404

    def test_delete_missing_room(self, api_client: APIClient):
        """Given no room, returns 404."""
        assert api_client.delete("/api/rooms/42").status_code == 404


@pytest.mark.django_db
class TestCloseRoom:
    """Tests for POST /api/rooms/{id}/close"""

    def test_close_room(self, api_client: APIClient):
        """Given an empty room, closes it."""
        create_room(api_client)

        response = api_client.post("/api/rooms/1/close")

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "CLOSED"
        assert api_client.get("/api/rooms/1").json()["data"]["status"] == "CLOSED"

    def test_close_room_with_bookings(self, api_client: APIClient, future_day):
        """Given a scheduled activity, returns 409."""
        create_room(api_client)
        schedule(api_client, "maintenance", future_day, 12, 60)

        response = api_client.post("/api/rooms/1/close")

        assert response.status_code == 409
        assert response.json()["errors"][0]["code"] == "ROOM_HAS_FUTURE_BOOKINGS"


@pytest.mark.django_db
class TestScheduleActivities:
    """Tests for POST /api/rooms/{id}/schedule-cleaning and schedule-maintenance"""

    def test_schedule_cleaning(self, api_client: APIClient, future_day):
        """Given a free period, books a cleaning."""
        create_room(api_client)

        response = schedule(api_client, "cleaning", future_day, 12, 30)

        assert response.status_code == 201
        [booking] = response.json()["data"]["bookings"]
        assert booking["type"] == "CLEANING"
        assert booking["screening_uid"] is None
        assert booking["start_time"] == rendered(future_day, 12)
        assert booking["end_time"] == rendered(future_day, 12, 30)

    def test_schedule_maintenance(self, api_client: APIClient, future_day):
        """Given a free period, books maintenance."""
        create_room(api_client)

        response = schedule(api_client, "maintenance", future_day, 10, 240)

        assert response.status_code == 201
        assert response.json()["data"]["bookings"][0]["type"] == "MAINTENANCE"

    def test_overlapping_activity(self, api_client: APIClient, future_day):
        """Given a busy period, returns 409."""
        create_room(api_client)
        schedule(api_client, "maintenance", future_day, 12, 60)

        response = schedule(api_client, "cleaning", future_day, 12, 30, minute=30)

        assert response.status_code == 409
        assert response.json()["errors"][0]["code"] == "ROOM_NOT_AVAILABLE_FOR_PERIOD"

    def test_outside_operating_hours(self, api_client: APIClient, future_day):
        """Given a start before opening, returns 422."""
        create_room(api_client)

        response = schedule(api_client, "cleaning", future_day, 9, 30)

        assert response.status_code == 422
        assert response.json()["errors"][0]["code"] == "ROOM_OPERATING_HOURS_VIOLATION"

    def test_past_start(self, api_client: APIClient):
        """Given a start in the past, returns 422."""
        create_room(api_client)

        response = schedule(api_client, "cleaning", date(2020, 1, 1), 12, 30)

        assert response.status_code == 422
        assert response.json()["errors"][0]["code"] == "DATE_CANNOT_BE_PAST"

    def test_unknown_room(self, api_client: APIClient, future_day):
        """Given no room, returns 404."""
        assert schedule(api_client, "cleaning", future_day, 12, 30).status_code == 404

    def test_malformed_body(self, api_client: APIClient):
        """Given an unparseable date, returns 400."""
        create_room(api_client)

        response = api_client.post(
            "/api/rooms/1/schedule-cleaning", {"start_date": "tomorrow", "duration": 30}, format="json"
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["code"] == "INVALID_REQUEST"


@pytest.mark.django_db
class TestRemoveActivities:
    """Tests for DELETE /api/rooms/{id}/cleaning/{uid} and maintenance/{uid}"""

    def booking_uid(self, response) -> str:
        return response.json()["data"]["bookings"][0]["booking_uid"]

    def test_remove_cleaning(self, api_client: APIClient, future_day):
        """Given a future standalone cleaning, removes it."""
        create_room(api_client)
        uid = self.booking_uid(schedule(api_client, "cleaning", future_day, 12, 30))

        response = api_client.delete(f"/api/rooms/1/cleaning/{uid}")

        assert response.status_code == 204
        assert api_client.get("/api/rooms/1").json()["data"]["bookings"] == []

    def test_remove_maintenance(self, api_client: APIClient, future_day):
        """Given future maintenance, removes it."""
        create_room(api_client)
        uid = self.booking_uid(schedule(api_client, "maintenance", future_day, 12, 60))

        assert api_client.delete(f"/api/rooms/1/maintenance/{uid}").status_code == 204

    def test_remove_with_wrong_endpoint(self, api_client: APIClient, future_day):
        """Given maintenance, the cleaning endpoint refuses it."""
        create_room(api_client)
        uid = self.booking_uid(schedule(api_client, "maintenance", future_day, 12, 60))

        response = api_client.delete(f"/api/rooms/1/cleaning/{uid}")

        assert response.status_code == 422
        assert response.json()["errors"][0]["code"] == "BOOKING_TYPE_IS_INVALID_FOR_REMOVAL"

    def test_remove_unknown_booking(self, api_client: APIClient):
        """Given an unknown booking, returns 404."""
        create_room(api_client)

        response = api_client.delete("/api/rooms/1/maintenance/nope")

        assert response.status_code == 404
        assert response.json()["errors"][0]["code"] == "BOOKING_NOT_FOUND_IN_FUTURE_SCHEDULE"


@pytest.mark.django_db
class TestFreeSlots:
    """Tests for GET /api/rooms/{id}/free-slots"""

    def test_free_slots(self, api_client: APIClient, future_day):
        """Given a booking, returns the gaps around it."""
        create_room(api_client)
        schedule(api_client, "maintenance", future_day, 12, 60)

        response = api_client.get("/api/rooms/1/free-slots", {"date": future_day.isoformat(), "min_minutes": 60})

        assert response.status_code == 200
        assert response.json()["data"] == [
            {"start_time": rendered(future_day, 10), "end_time": rendered(future_day, 12), "duration_in_minutes": 120},
            {"start_time": rendered(future_day, 13), "end_time": rendered(future_day, 22), "duration_in_minutes": 540},
        ]

    def test_free_slots_requires_date(self, api_client: APIClient):
        """Given no date, returns 400."""
        create_room(api_client)

        assert api_client.get("/api/rooms/1/free-slots").status_code == 400

    def test_free_slots_unknown_room(self, api_client: APIClient, future_day):
        """Given no room, returns 404."""
        response = api_client.get("/api/rooms/9/free-slots", {"date": future_day.isoformat()})

        assert response.status_code == 404
