"""A single reserved time interval in a room's schedule.

Bookings are never edited. A change means removing one slot and creating
another. All datetimes are expected to be timezone-aware.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Self
from uuid import uuid4

from rooms.domain.errors import DomainFailure, FailureCode
from rooms.domain.result import Result, failure, success
from rooms.domain.validation import ensure_not_null, hydrate_enum, require_fields
from rooms.domain.value_objects import ScreeningUID


class BookingType(Enum):
    SCREENING = "SCREENING"
    CLEANING = "CLEANING"
    MAINTENANCE = "MAINTENANCE"
    EXIT_TIME = "EXIT_TIME"
    ENTRY_TIME = "ENTRY_TIME"


SCREENING_LINKED_TYPES = frozenset({BookingType.SCREENING, BookingType.ENTRY_TIME, BookingType.EXIT_TIME})

# (min, max) minutes
BOOKING_DURATION_LIMITS: dict[BookingType, tuple[int, int]] = {
    BookingType.SCREENING: (30, 360),
    BookingType.CLEANING: (20, 120),
    BookingType.MAINTENANCE: (0, 3 * 24 * 60),
    BookingType.EXIT_TIME: (15, 30),
    BookingType.ENTRY_TIME: (15, 20),
}


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class BookingData:
    """Primitive projection of a booking, used for storage and hydration."""

    booking_uid: str
    screening_uid: str | None
    start_time: datetime
    end_time: datetime
    type: str


@dataclass(frozen=True, eq=False)
class BookingSlot:
    """Validated booking interval ``[start_time, end_time)`` of a given type."""

    booking_uid: str
    screening_uid: ScreeningUID | None
    start_time: datetime
    end_time: datetime
    type: BookingType

    @property
    def duration_in_minutes(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 60

    @classmethod
    def create(
        cls,
        screening_uid: ScreeningUID | None,
        start_time: datetime | None,
        end_time: datetime | None,
        type: BookingType | None,
        now: datetime | None = None,
    ) -> Result[Self]:
        """Validate and build a new booking with a fresh booking UID.

        Start must be strictly in the future, end strictly after start, and
        the duration within the limits of ``type``. Screening-linked types
        require ``screening_uid``.
        """
        now = now or utc_now()
        failures = cls._validate_basic_requirements(screening_uid, start_time, end_time, type, now)
        if failures:
            return failure(failures)

        failures = cls._validate_duration(start_time, end_time, type)
        if failures:
            return failure(failures)

        return success(cls(str(uuid4()), screening_uid, start_time, end_time, type))

    @classmethod
    def hydrate(
        cls,
        booking_uid: str,
        screening_uid: str | ScreeningUID | None,
        start_time: datetime,
        end_time: datetime,
        type: str | BookingType,
    ) -> Self:
        require_fields(booking_uid=booking_uid, start_time=start_time, end_time=end_time, type=type)

        if isinstance(screening_uid, str):
            screening_uid = ScreeningUID.hydrate(screening_uid) if screening_uid else None

        return cls(
            booking_uid,
            screening_uid,
            start_time,
            end_time,
            hydrate_enum("booking_type", type, BookingType),
        )

    @staticmethod
    def _validate_basic_requirements(
        screening_uid: ScreeningUID | None,
        start_time: datetime | None,
        end_time: datetime | None,
        type: BookingType | None,
        now: datetime,
    ) -> list[DomainFailure]:
        failures = ensure_not_null(start_time=start_time)

        if start_time is not None:
            if start_time <= now:
                failures.append(DomainFailure(FailureCode.DATE_CANNOT_BE_PAST, {"field": "startTime"}))
            elif end_time is None:
                failures.extend(ensure_not_null(end_time=end_time))
            elif end_time <= start_time:
                failures.append(
                    DomainFailure(
                        FailureCode.DATE_WITH_INVALID_SEQUENCE,
                        {"start_date": start_time.isoformat(), "end_date": end_time.isoformat()},
                    )
                )

        if type is None:
            failures.extend(ensure_not_null(type=type))
        elif not isinstance(type, BookingType):
            failures.append(
                DomainFailure(
                    FailureCode.INVALID_ENUM_VALUE,
                    {"field": "type", "value": type, "allowed": [t.value for t in BookingType]},
                )
            )
        elif type in SCREENING_LINKED_TYPES and screening_uid is None:
            failures.extend(ensure_not_null(screeningUID=screening_uid))

        return failures

    @staticmethod
    def _validate_duration(start_time: datetime, end_time: datetime, type: BookingType) -> list[DomainFailure]:
        duration = (end_time - start_time).total_seconds() / 60
        minimum, maximum = BOOKING_DURATION_LIMITS[type]
        if minimum <= duration <= maximum:
            return []
        return [
            DomainFailure(
                FailureCode.INVALID_OPERATION_DURATION,
                {"value": duration, "min": minimum, "max": maximum, "type": type.value},
            )
        ]

    def overlaps(self, start_time: datetime, end_time: datetime) -> bool:
        """Half-open overlap: touching endpoints do not conflict."""
        return start_time < self.end_time and self.start_time < end_time

    def is_linked_to(self, screening_uid: ScreeningUID) -> bool:
        return self.screening_uid is not None and self.screening_uid == screening_uid

    def to_data(self) -> BookingData:
        return BookingData(
            booking_uid=self.booking_uid,
            screening_uid=self.screening_uid.value if self.screening_uid else None,
            start_time=self.start_time,
            end_time=self.end_time,
            type=self.type.value,
        )

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, BookingSlot):
            return NotImplemented
        return self.booking_uid == other.booking_uid

    def __hash__(self) -> int:
        return hash(self.booking_uid)
