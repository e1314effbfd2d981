"""Room aggregate.

A Room owns its seat layout, screen and schedule. It is immutable: every
operation returns a new Room (or a failure) and leaves the receiver
untouched. Django ORM models are in rooms/models.py (persistence layer).
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta, timezone, tzinfo
from enum import Enum
from typing import Any, ClassVar, Self

from rooms.domain.booking import BookingData, BookingSlot, BookingType
from rooms.domain.errors import DomainFailure, FailureCode
from rooms.domain.result import Result, combine, failure, success
from rooms.domain.schedule import FreeSlot, RoomSchedule
from rooms.domain.seating import SeatLayout, SeatRow, SeatRowConfiguration
from rooms.domain.validation import ensure_not_null, hydrate_enum, parse_enum, require_fields
from rooms.domain.value_objects import RoomIdentifier, RoomUID, Screen, ScreeningUID


class RoomAdministrativeStatus(Enum):
    AVAILABLE = "AVAILABLE"
    CLOSED = "CLOSED"


@dataclass(frozen=True)
class ScreenInput:
    size: int
    type: str


@dataclass(frozen=True)
class CreateRoomInput:
    identifier: int
    seat_config: list[SeatRowConfiguration | dict[str, Any]]
    screen: ScreenInput
    status: str | RoomAdministrativeStatus


@dataclass(frozen=True)
class HydrateRoomInput:
    room_uid: str
    identifier: int
    layout: list[SeatRowConfiguration | dict[str, Any]]
    screen: ScreenInput
    status: str
    schedule: list[BookingData] = field(default_factory=list)


@dataclass(frozen=True)
class Room:
    """Cinema room and its booking schedule."""

    DEFAULT_ENTRY_TIME_IN_MINUTES: ClassVar[int] = 15
    DEFAULT_EXIT_TIME_IN_MINUTES: ClassVar[int] = 15
    DEFAULT_CLEANING_TIME_IN_MINUTES: ClassVar[int] = 30

    uid: RoomUID
    identifier: RoomIdentifier
    layout: SeatLayout
    screen: Screen
    schedule: RoomSchedule
    status: RoomAdministrativeStatus

    @classmethod
    def create(cls, params: CreateRoomInput | None) -> Result[Self]:
        """Validate raw input and build a room with an empty schedule.

        Identifier, status, screen and layout are validated independently and
        all their failures are reported together.
        """
        failures = ensure_not_null(params=params)
        if failures:
            return failure(failures)

        failures = ensure_not_null(
            identifier=params.identifier,
            seat_config=params.seat_config,
            screen=params.screen,
            status=params.status,
        )
        if failures:
            return failure(failures)

        result = combine(
            {
                "status": parse_enum("room_status", params.status, RoomAdministrativeStatus),
                "identifier": RoomIdentifier.create(params.identifier),
                "screen": Screen.create(params.screen.size, params.screen.type),
                "layout": SeatLayout.create(params.seat_config),
            }
        )
        if result.invalid:
            return result

        values = result.value
        return success(
            cls(
                uid=RoomUID.create(),
                identifier=values["identifier"],
                layout=values["layout"],
                screen=values["screen"],
                schedule=RoomSchedule.create(),
                status=values["status"],
            )
        )

    @classmethod
    def hydrate(cls, params: HydrateRoomInput | None) -> Self:
        """Rebuild a room from trusted storage. Raises TechnicalError on missing data."""
        require_fields(params=params)
        require_fields(
            room_uid=params.room_uid,
            identifier=params.identifier,
            layout=params.layout,
            screen=params.screen,
            status=params.status,
        )

        rows: dict[int, SeatRow] = {}
        for value in params.layout:
            config = SeatRowConfiguration.from_value(value)
            rows[config.row_number] = SeatRow.hydrate(config.last_column_letter, config.preferential_seat_letters)

        return cls(
            uid=RoomUID.hydrate(params.room_uid),
            identifier=RoomIdentifier.hydrate(params.identifier),
            layout=SeatLayout.hydrate(rows),
            screen=Screen.hydrate(params.screen.size, params.screen.type),
            schedule=RoomSchedule.hydrate(params.schedule or []),
            status=hydrate_enum("room_status", params.status, RoomAdministrativeStatus),
        )

    @property
    def screen_size(self) -> int:
        return self.screen.size

    @property
    def screen_type(self) -> str:
        return self.screen.type.value

    @property
    def total_seats_capacity(self) -> int:
        return self.layout.total_capacity

    @property
    def preferential_seats_count(self) -> int:
        return self.layout.preferential_seats_count

    @property
    def seat_layout_info(self) -> dict[str, Any]:
        preferential = self.layout.preferential_seats_by_row
        return {
            "rows": len(self.layout.seat_rows),
            "total_seats": self.layout.total_capacity,
            "preferential_seats": self.layout.preferential_seats_count,
            "rows_info": [
                {
                    "row_number": number,
                    "seats": row.capacity,
                    "preferential_seats": preferential.get(number, []),
                }
                for number, row in self.layout.seat_rows
            ],
        }

    @classmethod
    def calculate_total_screening_time(cls, duration_in_minutes: int) -> int:
        """Minutes a screening occupies the room: entry, film, exit and cleaning."""
        return (
            duration_in_minutes
            + cls.DEFAULT_ENTRY_TIME_IN_MINUTES
            + cls.DEFAULT_EXIT_TIME_IN_MINUTES
            + cls.DEFAULT_CLEANING_TIME_IN_MINUTES
        )

    def change_status(self, status: Any) -> Result[Self]:
        status_result = parse_enum("room_status", status, RoomAdministrativeStatus)
        if status_result.invalid:
            return status_result

        new_status = status_result.value
        # TODO: only block on bookings that have not ended yet once the
        # product team confirms past bookings should not keep a room open.
        if new_status is RoomAdministrativeStatus.CLOSED and not self.schedule.is_empty:
            return failure(
                DomainFailure(FailureCode.ROOM_HAS_FUTURE_BOOKINGS, {"bookings": len(self.schedule.bookings)})
            )

        if new_status is self.status:
            return success(self)
        return success(replace(self, status=new_status))

    def add_screening(
        self,
        screening_uid: ScreeningUID | None,
        start_time: datetime | None,
        duration_in_minutes: int | None,
        now: datetime | None = None,
    ) -> Result[Self]:
        """Book a screening as four chained slots: entry, screening, exit and cleaning.

        The first failing step aborts the whole operation.
        """
        failures = ensure_not_null(
            screening_uid=screening_uid, start_time=start_time, duration_in_minutes=duration_in_minutes
        )
        if failures:
            return failure(failures)

        availability = self.is_period_available(start_time, duration_in_minutes)
        if availability.invalid:
            return availability

        entry_end = self._end_time(start_time, self.DEFAULT_ENTRY_TIME_IN_MINUTES)
        show_end = self._end_time(entry_end, duration_in_minutes)
        exit_end = self._end_time(show_end, self.DEFAULT_EXIT_TIME_IN_MINUTES)
        cleaning_end = self._end_time(exit_end, self.DEFAULT_CLEANING_TIME_IN_MINUTES)

        return (
            self.schedule.add_booking(screening_uid, start_time, entry_end, BookingType.ENTRY_TIME, now)
            .flat_map(lambda s: s.add_booking(screening_uid, entry_end, show_end, BookingType.SCREENING, now))
            .flat_map(lambda s: s.add_booking(screening_uid, show_end, exit_end, BookingType.EXIT_TIME, now))
            .flat_map(lambda s: s.add_booking(screening_uid, exit_end, cleaning_end, BookingType.CLEANING, now))
            .map(lambda s: replace(self, schedule=s))
        )

    def schedule_maintenance(
        self, start_time: datetime | None, duration_in_minutes: int | None, now: datetime | None = None
    ) -> Result[Self]:
        return self._schedule_activity(BookingType.MAINTENANCE, start_time, duration_in_minutes, now)

    def schedule_cleaning(
        self, start_time: datetime | None, duration_in_minutes: int | None, now: datetime | None = None
    ) -> Result[Self]:
        return self._schedule_activity(BookingType.CLEANING, start_time, duration_in_minutes, now)

    def remove_booking_by_uid(self, booking_uid: str | None) -> Result[Self]:
        return self.schedule.remove_booking_by_uid(booking_uid).map(lambda s: replace(self, schedule=s))

    def remove_screening(self, screening_uid: ScreeningUID | None) -> Result[Self]:
        return self.schedule.remove_screening(screening_uid).map(lambda s: replace(self, schedule=s))

    def is_period_available(self, start_time: datetime | None, duration_in_minutes: int | None) -> Result[bool]:
        """Check the full screening footprint starting at ``start_time``."""
        failures = ensure_not_null(start_time=start_time, duration_in_minutes=duration_in_minutes)
        if failures:
            return failure(failures)

        end_time = self._end_time(start_time, self.calculate_total_screening_time(duration_in_minutes))
        return self.schedule.is_available(start_time, end_time)

    def free_slots_for_date(self, day: date, min_minutes: int, tz: tzinfo = timezone.utc) -> list[FreeSlot]:
        return self.schedule.free_slots_for_date(day, min_minutes, tz)

    def all_bookings(self) -> list[BookingSlot]:
        return list(self.schedule.bookings)

    def find_booking_by_uid(self, booking_uid: str) -> BookingSlot | None:
        return self.schedule.find_booking(booking_uid)

    def find_screening(self, screening_uid: ScreeningUID) -> BookingSlot | None:
        return self.schedule.find_screening(screening_uid)

    def has_seat(self, row_number: int, letter: str) -> bool:
        return self.layout.has_seat(row_number, letter)

    def is_preferential_seat(self, row_number: int, letter: str) -> bool:
        return self.layout.is_preferential_seat(row_number, letter)

    def _schedule_activity(
        self,
        type: BookingType,
        start_time: datetime | None,
        duration_in_minutes: int | None,
        now: datetime | None,
    ) -> Result[Self]:
        failures = ensure_not_null(start_time=start_time, duration_in_minutes=duration_in_minutes)
        if failures:
            return failure(failures)

        end_time = self._end_time(start_time, duration_in_minutes)
        return self.schedule.add_booking(None, start_time, end_time, type, now).map(
            lambda s: replace(self, schedule=s)
        )

    @staticmethod
    def _end_time(start_time: datetime, duration_in_minutes: int) -> datetime:
        return start_time + timedelta(minutes=duration_in_minutes)

