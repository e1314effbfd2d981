"""Room application service - orchestrates validation and persistence.

Services:
- Depend only on interfaces (stores)
- Ask RoomDomainService whether an operation is valid
- Persist the resulting state through the store
- Return domain models or failures, never HTTP concerns
"""

import logging
from datetime import date, datetime
from typing import Any

from django.utils import timezone

from rooms.domain import (
    BookingType,
    DomainFailure,
    FailureCode,
    FreeSlot,
    Result,
    Room,
    RoomAdministrativeStatus,
    ScreenInput,
    failure,
    success,
)
from rooms.services.room_domain_service import RoomDomainService
from rooms.stores.interfaces import RoomStore

logger = logging.getLogger(__name__)


class RoomService:
    """Service for room management and activity scheduling."""

    def __init__(self, store: RoomStore, domain_service: RoomDomainService | None = None) -> None:
        self._store = store
        self._domain = domain_service or RoomDomainService(store)

    def find_by_id(self, room_id: int) -> Result[Room]:
        return self._domain.find_by_id(room_id)

    def create(
        self,
        room_id: int,
        seat_config: list[Any],
        screen: ScreenInput,
        status: str | None = None,
    ) -> Result[Room]:
        result = self._domain.create(room_id, seat_config, screen, status)
        if result.invalid:
            _log_failure("create room", room_id, result)
            return result

        room = self._store.create(result.value)
        logger.info("Created room %s (%s seats)", room_id, room.total_seats_capacity)
        return success(room)

    def delete(self, room_id: int) -> Result[None]:
        result = self._domain.find_by_id(room_id)
        if result.invalid:
            _log_failure("delete room", room_id, result)
            return result

        self._store.delete(room_id)
        logger.info("Deleted room %s", room_id)
        return success(None)

    def close_room(self, room_id: int) -> Result[Room]:
        result = self._domain.find_by_id(room_id).flat_map(
            lambda room: room.change_status(RoomAdministrativeStatus.CLOSED)
        )
        if result.invalid:
            _log_failure("close room", room_id, result)
            return result

        room = self._store.update(result.value)
        logger.info("Closed room %s", room_id)
        return success(room)

    def schedule_cleaning(self, room_id: int, start_in: datetime, duration: int) -> Result[Room]:
        return self._schedule(room_id, BookingType.CLEANING, start_in, duration)

    def schedule_maintenance(self, room_id: int, start_in: datetime, duration: int) -> Result[Room]:
        return self._schedule(room_id, BookingType.MAINTENANCE, start_in, duration)

    def remove_cleaning(self, room_id: int, booking_uid: str) -> Result[Room]:
        return self._remove(room_id, booking_uid, BookingType.CLEANING)

    def remove_maintenance(self, room_id: int, booking_uid: str) -> Result[Room]:
        return self._remove(room_id, booking_uid, BookingType.MAINTENANCE)

    def free_slots(self, room_id: int, day: date, min_minutes: int) -> Result[list[FreeSlot]]:
        return self._domain.find_by_id(room_id).map(
            lambda room: room.free_slots_for_date(day, min_minutes, timezone.get_current_timezone())
        )

    def _schedule(self, room_id: int, activity: BookingType, start_in: datetime, duration: int) -> Result[Room]:
        result = self._domain.schedule_activity(room_id, activity.value, start_in, duration)
        if result.invalid:
            _log_failure(f"schedule {activity.value.lower()}", room_id, result)
            return result

        booking = next(b for b in result.value.all_bookings() if b.start_time == start_in)
        stored = self._store.add_booking(room_id, booking)
        if stored.invalid:
            _log_failure(f"schedule {activity.value.lower()}", room_id, stored)
            return stored

        logger.info(
            "Scheduled %s %s on room %s from %s to %s",
            activity.value.lower(),
            booking.booking_uid,
            room_id,
            booking.start_time.isoformat(),
            booking.end_time.isoformat(),
        )
        return stored

    def _remove(self, room_id: int, booking_uid: str, activity: BookingType) -> Result[Room]:
        result = self._domain.find_by_id(room_id).flat_map(
            lambda room: self._domain.check_removal(room, booking_uid)
        )
        if result.invalid:
            _log_failure(f"remove {activity.value.lower()}", room_id, result)
            return result

        booking = result.value
        if booking.type is not activity:
            mismatch = failure(
                DomainFailure(
                    FailureCode.BOOKING_TYPE_IS_INVALID_FOR_REMOVAL,
                    {"type": booking.type.value, "allowed": [activity.value]},
                )
            )
            _log_failure(f"remove {activity.value.lower()}", room_id, mismatch)
            return mismatch

        room = self._store.delete_booking(room_id, booking_uid)
        logger.info("Removed %s %s from room %s", activity.value.lower(), booking_uid, room_id)
        return success(room)


def _log_failure(action: str, room_id: Any, result: Result[Any]) -> None:
    logger.warning("Could not %s %s: %s", action, room_id, ", ".join(f.code.value for f in result.failures))
