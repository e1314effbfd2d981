"""Ordered collection of bookings for one room.

No two bookings may overlap. Intervals are half-open, so a booking may
start exactly when another ends.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import ClassVar, Self

from rooms.domain.booking import SCREENING_LINKED_TYPES, BookingData, BookingSlot, BookingType
from rooms.domain.errors import DomainFailure, FailureCode
from rooms.domain.result import Result, failure, success
from rooms.domain.validation import ensure_not_null, require_fields
from rooms.domain.value_objects import ScreeningUID


@dataclass(frozen=True)
class FreeSlot:
    start_time: datetime
    end_time: datetime

    @property
    def duration_in_minutes(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 60


def _sorted(bookings: Iterable[BookingSlot]) -> tuple[BookingSlot, ...]:
    return tuple(sorted(bookings, key=lambda booking: booking.start_time))


@dataclass(frozen=True)
class RoomSchedule:
    """Immutable, start-ordered list of BookingSlots."""

    OPERATING_START_HOUR: ClassVar[int] = 10
    OPERATING_END_HOUR: ClassVar[int] = 22
    MINUTE_STEP: ClassVar[int] = 5

    bookings: tuple[BookingSlot, ...] = ()

    @classmethod
    def create(cls) -> Self:
        return cls()

    @classmethod
    def hydrate(cls, booking_data: Iterable[BookingData] | None) -> Self:
        require_fields(booking_data=booking_data)
        return cls(
            _sorted(
                BookingSlot.hydrate(data.booking_uid, data.screening_uid, data.start_time, data.end_time, data.type)
                for data in booking_data
            )
        )

    @property
    def is_empty(self) -> bool:
        return not self.bookings

    def is_available(self, start_time: datetime | None, end_time: datetime | None) -> Result[bool]:
        failures = ensure_not_null(start_time=start_time, end_time=end_time)
        if failures:
            return failure(failures)

        return (
            self._validate_time_sequence(start_time, end_time)
            .flat_map(lambda _: self._validate_operating_hours(start_time))
            .flat_map(lambda _: self._validate_minute_interval(start_time))
            .flat_map(lambda _: self._check_overlap(start_time, end_time))
        )

    def add_booking(
        self,
        screening_uid: ScreeningUID | None,
        start_time: datetime | None,
        end_time: datetime | None,
        type: BookingType | None,
        now: datetime | None = None,
    ) -> Result[Self]:
        failures = ensure_not_null(start_time=start_time, end_time=end_time, type=type)
        if failures:
            return failure(failures)

        if type in SCREENING_LINKED_TYPES and screening_uid is None:
            return failure(DomainFailure(FailureCode.MISSING_REQUIRED_DATA, {"field": "screeningUID"}))

        return (
            self.is_available(start_time, end_time)
            .flat_map(lambda _: BookingSlot.create(screening_uid, start_time, end_time, type, now=now))
            .map(lambda booking: RoomSchedule(_sorted((*self.bookings, booking))))
        )

    def remove_booking_by_uid(self, booking_uid: str | None) -> Result[Self]:
        failures = ensure_not_null(booking_uid=booking_uid)
        if failures:
            return failure(failures)

        remaining = tuple(b for b in self.bookings if b.booking_uid != booking_uid)
        if len(remaining) == len(self.bookings):
            return failure(DomainFailure(FailureCode.BOOKING_NOT_FOUND_IN_ROOM, {"booking_uid": booking_uid}))

        return success(RoomSchedule(remaining))

    def remove_screening(self, screening_uid: ScreeningUID | None) -> Result[Self]:
        """Remove every slot linked to the screening: entry, show, exit and cleaning."""
        failures = ensure_not_null(screening_uid=screening_uid)
        if failures:
            return failure(failures)

        remaining = tuple(b for b in self.bookings if not b.is_linked_to(screening_uid))
        if len(remaining) == len(self.bookings):
            return failure(
                DomainFailure(FailureCode.BOOKING_NOT_FOUND_FOR_SCREENING, {"screening_uid": screening_uid.value})
            )

        return success(RoomSchedule(remaining))

    def find_booking(self, booking_uid: str) -> BookingSlot | None:
        return next((b for b in self.bookings if b.booking_uid == booking_uid), None)

    def find_screening(self, screening_uid: ScreeningUID) -> BookingSlot | None:
        linked = [b for b in self.bookings if b.is_linked_to(screening_uid)]
        screening = next((b for b in linked if b.type is BookingType.SCREENING), None)
        return screening or next(iter(linked), None)

    def free_slots_for_date(self, day: date | None, min_minutes: int | None, tz: tzinfo = timezone.utc) -> list[FreeSlot]:
        """Return gaps of at least ``min_minutes`` inside the operating window of ``day``.

        Bookings overlapping the window of ``day`` (wall clock in ``tz``),
        including ones that started on an earlier day, are clipped to the
        window and merged; each gap is snapped inward to the minute step.
        """
        if day is None or min_minutes is None or min_minutes <= 0:
            return []

        day_start = datetime.combine(day, time(self.OPERATING_START_HOUR), tzinfo=tz)
        day_end = datetime.combine(day, time(self.OPERATING_END_HOUR), tzinfo=tz)

        busy: list[list[datetime]] = []
        for booking in self.bookings:
            if not booking.overlaps(day_start, day_end):
                continue
            start = max(booking.start_time, day_start)
            end = min(booking.end_time, day_end)
            if busy and start <= busy[-1][1]:
                busy[-1][1] = max(busy[-1][1], end)
            else:
                busy.append([start, end])

        slots: list[FreeSlot] = []
        previous_end = day_start
        for start, end in busy:
            if previous_end < start:
                self._append_if_long_enough(previous_end, start, min_minutes, slots)
            previous_end = max(previous_end, end)

        if previous_end < day_end:
            self._append_if_long_enough(previous_end, day_end, min_minutes, slots)

        return slots

    def to_data(self) -> list[BookingData]:
        return [booking.to_data() for booking in self.bookings]

    @classmethod
    def _append_if_long_enough(cls, gap_start: datetime, gap_end: datetime, min_minutes: int, slots: list[FreeSlot]) -> None:
        start = cls._round_up(gap_start)
        end = cls._round_down(gap_end)
        if start < end and (end - start).total_seconds() / 60 >= min_minutes:
            slots.append(FreeSlot(start, end))

    @classmethod
    def _round_up(cls, moment: datetime) -> datetime:
        floored = cls._round_down(moment)
        return floored if floored == moment else floored + timedelta(minutes=cls.MINUTE_STEP)

    @classmethod
    def _round_down(cls, moment: datetime) -> datetime:
        return moment.replace(minute=moment.minute - moment.minute % cls.MINUTE_STEP, second=0, microsecond=0)

    @staticmethod
    def _validate_time_sequence(start_time: datetime, end_time: datetime) -> Result[bool]:
        if end_time <= start_time:
            return failure(
                DomainFailure(
                    FailureCode.DATE_WITH_INVALID_SEQUENCE,
                    {"start_date": start_time.isoformat(), "end_date": end_time.isoformat()},
                )
            )
        return success(True)

    def _validate_operating_hours(self, start_time: datetime) -> Result[bool]:
        if not self.OPERATING_START_HOUR <= start_time.hour < self.OPERATING_END_HOUR:
            return failure(
                DomainFailure(
                    FailureCode.ROOM_OPERATING_HOURS_VIOLATION,
                    {"value": start_time.hour, "min": self.OPERATING_START_HOUR, "max": self.OPERATING_END_HOUR},
                )
            )
        return success(True)

    def _validate_minute_interval(self, start_time: datetime) -> Result[bool]:
        if start_time.minute % self.MINUTE_STEP:
            return failure(
                DomainFailure(
                    FailureCode.BOOKING_WITH_INVALID_TIME_INTERVAL,
                    {"date": start_time.isoformat(), "step": self.MINUTE_STEP},
                )
            )
        return success(True)

    def _check_overlap(self, start_time: datetime, end_time: datetime) -> Result[bool]:
        if any(booking.overlaps(start_time, end_time) for booking in self.bookings):
            return failure(
                DomainFailure(
                    FailureCode.ROOM_NOT_AVAILABLE_FOR_PERIOD,
                    {"start_date": start_time.isoformat(), "end_date": end_time.isoformat()},
                )
            )
        return success(True)
