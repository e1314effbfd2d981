"""Room domain service - validation gateway for room operations.

The domain service:
- Loads rooms through the store (read only)
- Validates requests before delegating to the Room aggregate
- Returns the resulting Room (or failures) without persisting anything

Writes are orchestrated by RoomService.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any

from django.utils import timezone

from rooms.domain import (
    BookingSlot,
    BookingType,
    CreateRoomInput,
    DomainFailure,
    FailureCode,
    Result,
    Room,
    RoomAdministrativeStatus,
    ScreenInput,
    failure,
    success,
)
from rooms.domain.validation import ensure_not_null
from rooms.stores.interfaces import RoomStore

SCHEDULABLE_TYPES = (BookingType.CLEANING, BookingType.MAINTENANCE)
SCREENING_TYPES = (BookingType.SCREENING, BookingType.ENTRY_TIME, BookingType.EXIT_TIME)


class RoomDomainService:
    """Validates room operations against the current room state."""

    def __init__(self, store: RoomStore, clock: Callable[[], datetime] = timezone.now) -> None:
        self._store = store
        self._clock = clock

    def find_by_id(self, room_id: int | None) -> Result[Room]:
        failures = ensure_not_null(id=room_id)
        if failures:
            return failure(failures)

        room = self._store.find_by_id(room_id)
        if room is None:
            return failure(DomainFailure(FailureCode.RESOURCE_NOT_FOUND, {"resource": "ROOM", "id": room_id}))
        return success(room)

    def create(
        self,
        room_id: int,
        seat_config: list[Any],
        screen: ScreenInput,
        status: str | None = None,
    ) -> Result[Room]:
        """Validate a new room. Does not persist it."""
        if room_id is not None and self._store.room_exists(room_id):
            return failure(DomainFailure(FailureCode.RESOURCE_ALREADY_EXISTS, {"resource": "ROOM", "id": room_id}))

        return Room.create(
            CreateRoomInput(
                identifier=room_id,
                seat_config=seat_config,
                screen=screen,
                status=status if status is not None else RoomAdministrativeStatus.AVAILABLE,
            )
        )

    def schedule_activity(
        self,
        room_id: int | None,
        activity_type: str | None,
        start_in: datetime | None,
        duration: int | None,
    ) -> Result[Room]:
        """Validate a cleaning or maintenance booking and return the updated room.

        Screening-related types cannot be scheduled directly; they are created
        as part of a screening.
        """
        failures = ensure_not_null(room_id=room_id, activity_type=activity_type, start_in=start_in, duration=duration)
        if failures:
            return failure(failures)

        now = self._clock()
        if start_in < now:
            return failure(DomainFailure(FailureCode.DATE_CANNOT_BE_PAST, {"field": "startIn"}))

        room_result = self.find_by_id(room_id)
        if room_result.invalid:
            return room_result
        room = room_result.value

        start_in = timezone.localtime(start_in)
        normalized = str(activity_type).strip().upper()

        if normalized == BookingType.CLEANING.value:
            return room.schedule_cleaning(start_in, duration, now=now)
        if normalized == BookingType.MAINTENANCE.value:
            return room.schedule_maintenance(start_in, duration, now=now)
        if normalized in {t.value for t in SCREENING_TYPES}:
            return failure(DomainFailure(FailureCode.BOOKING_TYPE_IS_INVALID_FOR_REMOVAL, {"type": activity_type}))

        return failure(
            DomainFailure(
                FailureCode.BOOKING_WITH_INVALID_ACTIVITY_TYPE,
                {"type": activity_type, "allowed": [t.value for t in SCHEDULABLE_TYPES]},
            )
        )

    def remove_scheduled_activity(self, room_id: int | None, booking_uid: str | None) -> Result[bool]:
        """Check that a booking may be removed. Does not remove it."""
        failures = ensure_not_null(room_id=room_id, booking_uid=booking_uid)
        if failures:
            return failure(failures)

        return (
            self.find_by_id(room_id)
            .flat_map(lambda room: self.check_removal(room, booking_uid))
            .map(lambda _: True)
        )

    def check_removal(self, room: Room, booking_uid: str | None) -> Result[BookingSlot]:
        """Return the booking if it may be removed from an already loaded room."""
        failures = ensure_not_null(booking_uid=booking_uid)
        if failures:
            return failure(failures)

        booking = room.find_booking_by_uid(booking_uid)
        if booking is None:
            return failure(
                DomainFailure(FailureCode.BOOKING_NOT_FOUND_IN_FUTURE_SCHEDULE, {"booking_uid": booking_uid})
            )

        if booking.start_time <= self._clock():
            return failure(
                DomainFailure(FailureCode.BOOKING_ALREADY_STARTED, {"start_date": booking.start_time.isoformat()})
            )

        if booking.type not in SCHEDULABLE_TYPES:
            return failure(
                DomainFailure(
                    FailureCode.BOOKING_TYPE_IS_INVALID_FOR_REMOVAL,
                    {"type": booking.type.value, "allowed": [t.value for t in SCHEDULABLE_TYPES]},
                )
            )

        if booking.type is BookingType.CLEANING and booking.screening_uid is not None:
            return failure(
                DomainFailure(
                    FailureCode.CLEANING_ASSOCIATED_WITH_SCREENING,
                    {"booking_uid": booking_uid, "screening_uid": booking.screening_uid.value},
                )
            )

        return success(booking)
