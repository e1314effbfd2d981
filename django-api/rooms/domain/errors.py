"""Failure codes and errors for the rooms module."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FailureCode(Enum):
    """Domain failure codes."""

    MISSING_REQUIRED_DATA = "MISSING_REQUIRED_DATA"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    VALUE_NOT_INTEGER = "VALUE_NOT_INTEGER"
    INVALID_ENUM_VALUE = "INVALID_ENUM_VALUE"
    ARRAY_LENGTH_IS_OUT_OF_RANGE = "ARRAY_LENGTH_IS_OUT_OF_RANGE"
    UID_WITH_INVALID_FORMAT = "UID_WITH_INVALID_FORMAT"

    DATE_CANNOT_BE_PAST = "DATE_CANNOT_BE_PAST"
    DATE_WITH_INVALID_SEQUENCE = "DATE_WITH_INVALID_SEQUENCE"

    SEAT_WITH_INVALID_COLUMN_IDENTIFIER = "SEAT_WITH_INVALID_COLUMN_IDENTIFIER"
    SEAT_COLUMN_OUT_OF_RANGE = "SEAT_COLUMN_OUT_OF_RANGE"
    SEAT_WITH_PREFERENTIAL_LIMIT_EXCEEDED = "SEAT_WITH_PREFERENTIAL_LIMIT_EXCEEDED"
    SEAT_PREFERENTIAL_IN_ROW_IS_NOT_FOUND = "SEAT_PREFERENTIAL_IN_ROW_IS_NOT_FOUND"
    SEAT_PREFERENTIAL_IS_DUPLICATED = "SEAT_PREFERENTIAL_IS_DUPLICATED"
    SEAT_ROW_IS_DUPLICATED = "SEAT_ROW_IS_DUPLICATED"
    ROOM_WITH_INVALID_CAPACITY = "ROOM_WITH_INVALID_CAPACITY"
    ROOM_WITH_INVALID_NUMBER_OF_PREFERENTIAL_SEATS = "ROOM_WITH_INVALID_NUMBER_OF_PREFERENTIAL_SEATS"

    INVALID_OPERATION_DURATION = "INVALID_OPERATION_DURATION"
    ROOM_OPERATING_HOURS_VIOLATION = "ROOM_OPERATING_HOURS_VIOLATION"
    BOOKING_WITH_INVALID_TIME_INTERVAL = "BOOKING_WITH_INVALID_TIME_INTERVAL"
    ROOM_NOT_AVAILABLE_FOR_PERIOD = "ROOM_NOT_AVAILABLE_FOR_PERIOD"
    ROOM_HAS_FUTURE_BOOKINGS = "ROOM_HAS_FUTURE_BOOKINGS"
    BOOKING_NOT_FOUND_IN_ROOM = "BOOKING_NOT_FOUND_IN_ROOM"
    BOOKING_NOT_FOUND_FOR_SCREENING = "BOOKING_NOT_FOUND_FOR_SCREENING"
    BOOKING_NOT_FOUND_IN_FUTURE_SCHEDULE = "BOOKING_NOT_FOUND_IN_FUTURE_SCHEDULE"
    BOOKING_ALREADY_STARTED = "BOOKING_ALREADY_STARTED"
    BOOKING_TYPE_IS_INVALID_FOR_REMOVAL = "BOOKING_TYPE_IS_INVALID_FOR_REMOVAL"
    BOOKING_WITH_INVALID_ACTIVITY_TYPE = "BOOKING_WITH_INVALID_ACTIVITY_TYPE"
    CLEANING_ASSOCIATED_WITH_SCREENING = "CLEANING_ASSOCIATED_WITH_SCREENING"

    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    RESOURCE_ALREADY_EXISTS = "RESOURCE_ALREADY_EXISTS"

    INVALID_HYDRATE_DATA = "INVALID_HYDRATE_DATA"
    INVALID_COMBINE_INPUT = "INVALID_COMBINE_INPUT"


MESSAGES: dict[FailureCode, str] = {
    FailureCode.MISSING_REQUIRED_DATA: "Required data is missing",
    FailureCode.VALUE_OUT_OF_RANGE: "Value is out of the allowed range",
    FailureCode.VALUE_NOT_INTEGER: "Value must be an integer",
    FailureCode.INVALID_ENUM_VALUE: "Value is not one of the allowed options",
    FailureCode.ARRAY_LENGTH_IS_OUT_OF_RANGE: "Number of items is out of the allowed range",
    FailureCode.UID_WITH_INVALID_FORMAT: "Identifier has an invalid format",
    FailureCode.DATE_CANNOT_BE_PAST: "Date cannot be in the past",
    FailureCode.DATE_WITH_INVALID_SEQUENCE: "End date must be after start date",
    FailureCode.SEAT_WITH_INVALID_COLUMN_IDENTIFIER: "Seat column must be a letter from A to Z",
    FailureCode.SEAT_COLUMN_OUT_OF_RANGE: "Number of seats in the row is out of range",
    FailureCode.SEAT_WITH_PREFERENTIAL_LIMIT_EXCEEDED: "Too many preferential seats in the row",
    FailureCode.SEAT_PREFERENTIAL_IN_ROW_IS_NOT_FOUND: "Preferential seat does not exist in the row",
    FailureCode.SEAT_PREFERENTIAL_IS_DUPLICATED: "Preferential seat is duplicated",
    FailureCode.SEAT_ROW_IS_DUPLICATED: "Row number is duplicated",
    FailureCode.ROOM_WITH_INVALID_CAPACITY: "Room capacity is out of range",
    FailureCode.ROOM_WITH_INVALID_NUMBER_OF_PREFERENTIAL_SEATS: "Room has an invalid number of preferential seats",
    FailureCode.INVALID_OPERATION_DURATION: "Booking duration is out of range for its type",
    FailureCode.ROOM_OPERATING_HOURS_VIOLATION: "Booking must start within operating hours",
    FailureCode.BOOKING_WITH_INVALID_TIME_INTERVAL: "Booking must start on a five-minute mark",
    FailureCode.ROOM_NOT_AVAILABLE_FOR_PERIOD: "Room is not available for the requested period",
    FailureCode.ROOM_HAS_FUTURE_BOOKINGS: "Room has scheduled bookings",
    FailureCode.BOOKING_NOT_FOUND_IN_ROOM: "Booking not found in room",
    FailureCode.BOOKING_NOT_FOUND_FOR_SCREENING: "No booking found for screening",
    FailureCode.BOOKING_NOT_FOUND_IN_FUTURE_SCHEDULE: "Booking not found in the room schedule",
    FailureCode.BOOKING_ALREADY_STARTED: "Booking has already started",
    FailureCode.BOOKING_TYPE_IS_INVALID_FOR_REMOVAL: "Booking type is not allowed for this operation",
    FailureCode.BOOKING_WITH_INVALID_ACTIVITY_TYPE: "Activity type is invalid",
    FailureCode.CLEANING_ASSOCIATED_WITH_SCREENING: "Cleaning belongs to a screening and cannot be removed alone",
    FailureCode.RESOURCE_NOT_FOUND: "Resource not found",
    FailureCode.RESOURCE_ALREADY_EXISTS: "Resource already exists",
    FailureCode.INVALID_HYDRATE_DATA: "Stored data is invalid",
    FailureCode.INVALID_COMBINE_INPUT: "Invalid input for result combination",
}


@dataclass(frozen=True)
class DomainFailure:
    """A recoverable validation failure with code and structured details."""

    code: FailureCode
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> str:
        return MESSAGES.get(self.code, self.code.value)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


@dataclass(eq=False)
class TechnicalError(Exception):
    """Raised on programmer or data-integrity errors, never for validation."""

    code: FailureCode
    details: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"{self.code.value}: {self.details}" if self.details else self.code.value
