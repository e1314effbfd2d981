"""Unit tests for the Room aggregate.

Run with: pytest tests/test_room.py -v
"""

import pytest

from rooms.domain import (
    BookingData,
    BookingType,
    CreateRoomInput,
    HydrateRoomInput,
    Room,
    RoomAdministrativeStatus,
    ScreenInput,
    ScreeningUID,
    TechnicalError,
)
from tests.factories import NOW, SEAT_CONFIG, at, booking_data, make_room, with_bookings


class TestRoomCreate:
    """Tests for Room.create and Room.hydrate."""

    def test_create_valid_room(self, room):
        """A valid configuration yields an available room with an empty schedule."""
        assert room.uid.value.startswith("ROOM.")
        assert room.identifier.value == 1
        assert room.status is RoomAdministrativeStatus.AVAILABLE
        assert room.total_seats_capacity == 26
        assert room.preferential_seats_count == 4
        assert room.screen_size == 20
        assert room.screen_type == "2D"
        assert room.all_bookings() == []

    def test_create_aggregates_failures(self):
        """Status, identifier, screen and layout are validated independently."""
        result = Room.create(
            CreateRoomInput(identifier=0, seat_config=SEAT_CONFIG, screen=ScreenInput(5, "2D"), status="OPEN")
        )

        assert result.codes == ["INVALID_ENUM_VALUE", "VALUE_OUT_OF_RANGE", "VALUE_OUT_OF_RANGE"]

    def test_create_requires_input(self):
        """Missing input fails with MISSING_REQUIRED_DATA."""
        assert Room.create(None).codes == ["MISSING_REQUIRED_DATA"]

    def test_seat_layout_info(self, room):
        """Layout info lists every row with its preferential seats."""
        info = room.seat_layout_info

        assert info["rows"] == 4
        assert info["total_seats"] == 26
        assert info["rows_info"][0] == {"row_number": 1, "seats": 5, "preferential_seats": ["A", "B"]}
        assert info["rows_info"][3] == {"row_number": 4, "seats": 8, "preferential_seats": []}

    def test_seat_queries(self, room):
        """Seat queries delegate to the layout."""
        assert room.has_seat(1, "E")
        assert not room.has_seat(1, "F")
        assert room.is_preferential_seat(1, "A")

    def test_hydrate_from_primitives(self, room):
        """A stored room is rebuilt without validation."""
        hydrated = Room.hydrate(
            HydrateRoomInput(
                room_uid=room.uid.value,
                identifier=1,
                layout=room.layout.to_configuration(),
                screen=ScreenInput(20, "2D"),
                status="CLOSED",
                schedule=[BookingData("b1", None, at(12), at(13), "MAINTENANCE")],
            )
        )

        assert hydrated.uid == room.uid
        assert hydrated.layout == room.layout
        assert hydrated.status is RoomAdministrativeStatus.CLOSED
        assert hydrated.find_booking_by_uid("b1").type is BookingType.MAINTENANCE

    def test_hydrate_missing_data_raises(self):
        """Hydration trusts storage and raises on missing fields."""
        with pytest.raises(TechnicalError):
            Room.hydrate(HydrateRoomInput(None, 1, [], ScreenInput(20, "2D"), "AVAILABLE"))


class TestRoomScreenings:
    """Tests for screenings on a room."""

    def test_total_screening_time(self):
        """Entry, exit and cleaning are added to the film duration."""
        assert Room.calculate_total_screening_time(120) == 180

    def test_add_screening_chains_four_slots(self, room):
        """A screening books entry, show, exit and cleaning back to back."""
        uid = ScreeningUID.create()

        updated = room.add_screening(uid, at(12), 120, now=NOW).value

        bookings = updated.all_bookings()
        assert [(b.type, b.start_time, b.end_time) for b in bookings] == [
            (BookingType.ENTRY_TIME, at(12), at(12, 15)),
            (BookingType.SCREENING, at(12, 15), at(14, 15)),
            (BookingType.EXIT_TIME, at(14, 15), at(14, 30)),
            (BookingType.CLEANING, at(14, 30), at(15)),
        ]
        assert all(b.screening_uid == uid for b in bookings)
        assert updated.find_screening(uid).type is BookingType.SCREENING
        assert room.all_bookings() == []

    def test_add_screening_checks_whole_footprint(self, room):
        """A booking inside the cleaning window blocks the screening."""
        busy = with_bookings(room, booking_data("m", at(14, 45), at(15, 30), "MAINTENANCE"))

        result = busy.add_screening(ScreeningUID.create(), at(12), 120, now=NOW)

        assert result.codes == ["ROOM_NOT_AVAILABLE_FOR_PERIOD"]

    def test_add_screening_rejects_long_film(self, room):
        """Films longer than six hours are rejected."""
        result = room.add_screening(ScreeningUID.create(), at(10), 400, now=NOW)

        assert result.codes == ["INVALID_OPERATION_DURATION"]

    def test_add_screening_requires_inputs(self, room):
        """Missing screening uid, start and duration are reported."""
        assert room.add_screening(None, None, None).codes == ["MISSING_REQUIRED_DATA"] * 3

    def test_add_screening_with_negative_duration(self, room):
        """A negative film duration ends the screening slot before it starts."""
        result = room.add_screening(ScreeningUID.create(), at(12), -30, now=NOW)

        assert result.codes == ["DATE_WITH_INVALID_SEQUENCE"]

    def test_remove_screening(self, room):
        """Removing a screening frees the whole footprint."""
        uid = ScreeningUID.create()
        booked = room.add_screening(uid, at(12), 90, now=NOW).value

        assert booked.remove_screening(uid).value.all_bookings() == []


class TestRoomActivities:
    """Tests for cleaning, maintenance and status changes."""

    def test_schedule_cleaning(self, room):
        """A standalone cleaning has no screening."""
        updated = room.schedule_cleaning(at(11), 30, now=NOW).value

        [booking] = updated.all_bookings()
        assert booking.type is BookingType.CLEANING
        assert booking.screening_uid is None
        assert booking.end_time == at(11, 30)

    def test_schedule_maintenance_conflict(self, room):
        """Maintenance cannot overlap an existing booking."""
        busy = room.schedule_maintenance(at(12), 120, now=NOW).value

        assert busy.schedule_maintenance(at(13), 30, now=NOW).codes == ["ROOM_NOT_AVAILABLE_FOR_PERIOD"]

    def test_remove_booking_by_uid(self, room):
        """A single booking can be removed by uid."""
        busy = room.schedule_maintenance(at(12), 60, now=NOW).value
        [booking] = busy.all_bookings()

        assert busy.remove_booking_by_uid(booking.booking_uid).value.all_bookings() == []
        assert busy.remove_booking_by_uid("nope").codes == ["BOOKING_NOT_FOUND_IN_ROOM"]

    def test_is_period_available(self, room):
        """Availability covers the full screening footprint."""
        busy = with_bookings(room, booking_data("m", at(15), at(16), "MAINTENANCE"))

        assert busy.is_period_available(at(12), 120).is_valid()
        assert busy.is_period_available(at(12), 150).codes == ["ROOM_NOT_AVAILABLE_FOR_PERIOD"]

    def test_free_slots_for_date(self, room):
        """Free slots come from the schedule."""
        busy = with_bookings(room, booking_data("m", at(12), at(13), "MAINTENANCE"))

        slots = busy.free_slots_for_date(at(12).date(), 60)

        assert [(s.start_time, s.end_time) for s in slots] == [(at(10), at(12)), (at(13), at(22))]

    def test_close_empty_room(self, room):
        """An empty room can be closed; the receiver keeps its status."""
        closed = room.change_status("closed").value

        assert closed.status is RoomAdministrativeStatus.CLOSED
        assert room.status is RoomAdministrativeStatus.AVAILABLE

    def test_close_room_with_bookings_fails(self, room):
        """Rooms with bookings cannot be closed."""
        busy = room.schedule_cleaning(at(11), 30, now=NOW).value

        assert busy.change_status(RoomAdministrativeStatus.CLOSED).codes == ["ROOM_HAS_FUTURE_BOOKINGS"]

    def test_same_status_returns_same_room(self, room):
        """Changing to the current status is a no-op."""
        assert room.change_status("AVAILABLE").value is room

    def test_unknown_status_fails(self, room):
        """Unknown statuses fail with INVALID_ENUM_VALUE."""
        assert room.change_status("OPEN").codes == ["INVALID_ENUM_VALUE"]

    def test_closed_room_can_reopen(self):
        """A closed room can be made available again."""
        closed = make_room(status="CLOSED")

        assert closed.change_status("AVAILABLE").value.status is RoomAdministrativeStatus.AVAILABLE
