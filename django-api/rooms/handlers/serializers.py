"""Serializers for request parsing and room responses.

Input serializers only check the shape of the payload. Business rules
(ranges, seat letters, operating hours) are validated by the domain and
reported as domain failures.
"""

from rest_framework import serializers

from rooms.domain import ScreenInput


class SeatRowSerializer(serializers.Serializer):
    row_number = serializers.IntegerField()
    last_column_letter = serializers.CharField(max_length=5)
    preferential_seat_letters = serializers.ListField(
        child=serializers.CharField(max_length=5), required=False, default=list
    )


class ScreenSerializer(serializers.Serializer):
    size = serializers.IntegerField()
    type = serializers.CharField(max_length=10)


class CreateRoomSerializer(serializers.Serializer):
    """Body of POST /api/rooms."""

    id = serializers.IntegerField()
    seat_config = SeatRowSerializer(many=True, allow_empty=True)
    screen = ScreenSerializer()
    status = serializers.CharField(max_length=20, required=False, allow_null=True, default=None)

    def to_arguments(self) -> dict:
        data = self.validated_data
        return {
            "room_id": data["id"],
            "seat_config": [dict(row) for row in data["seat_config"]],
            "screen": ScreenInput(size=data["screen"]["size"], type=data["screen"]["type"]),
            "status": data["status"],
        }


class ScheduleActivitySerializer(serializers.Serializer):
    """Body of the schedule-cleaning and schedule-maintenance endpoints."""

    start_date = serializers.DateTimeField()
    duration = serializers.IntegerField()


class FreeSlotsQuerySerializer(serializers.Serializer):
    date = serializers.DateField()
    min_minutes = serializers.IntegerField(min_value=1, default=30)


class BookingSerializer(serializers.Serializer):
    """Serializer for BookingSlot domain model."""

    booking_uid = serializers.CharField()
    screening_uid = serializers.SerializerMethodField()
    type = serializers.CharField(source="type.value")
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()

    def get_screening_uid(self, booking) -> str | None:
        return booking.screening_uid.value if booking.screening_uid else None


class RoomSerializer(serializers.Serializer):
    """Serializer for Room domain model."""

    id = serializers.CharField(source="uid.value")
    number = serializers.IntegerField(source="identifier.value")
    status = serializers.CharField(source="status.value")
    capacity = serializers.IntegerField(source="total_seats_capacity")
    preferential_seats = serializers.IntegerField(source="preferential_seats_count")
    screen = serializers.SerializerMethodField()
    rows = serializers.SerializerMethodField()
    bookings = BookingSerializer(source="all_bookings", many=True)

    def get_screen(self, room) -> dict:
        return {"size": room.screen_size, "type": room.screen_type}

    def get_rows(self, room) -> list[dict]:
        return room.seat_layout_info["rows_info"]


class FreeSlotSerializer(serializers.Serializer):
    start_time = serializers.DateTimeField()
    end_time = serializers.DateTimeField()
    duration_in_minutes = serializers.IntegerField()
