"""Static seat geometry of a room: rows, columns and preferential seats.

A row is described by the letter of its last column; a row ending in ``E``
has seats A to E. Preferential seats are reserved for customers with
priority access and must exist in their row.
"""

import math
import string
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar, Self

from rooms.domain.errors import DomainFailure, FailureCode, TechnicalError
from rooms.domain.result import Result, failure, success
from rooms.domain.validation import ensure_not_null, require_fields

SEAT_COLUMN_LETTERS: dict[str, int] = {letter: position for position, letter in enumerate(string.ascii_uppercase, 1)}


@dataclass(frozen=True)
class SeatRowConfiguration:
    """Raw row description as received from callers or storage."""

    row_number: int
    last_column_letter: str
    preferential_seat_letters: tuple[str, ...] = ()

    @classmethod
    def from_value(cls, value: "SeatRowConfiguration | Mapping[str, Any]") -> Self:
        if isinstance(value, SeatRowConfiguration):
            return value
        if not isinstance(value, Mapping):
            raise TechnicalError(FailureCode.INVALID_HYDRATE_DATA, {"field": "seat_row", "value": repr(value)})
        return cls(
            row_number=value.get("row_number"),
            last_column_letter=value.get("last_column_letter"),
            preferential_seat_letters=tuple(value.get("preferential_seat_letters") or ()),
        )


@dataclass(frozen=True)
class SeatRow:
    """One row of seats."""

    MINIMUM_SEATS_PER_ROW: ClassVar[int] = 4
    MAXIMUM_SEATS_PER_ROW: ClassVar[int] = 26
    MAXIMUM_PREFERENTIAL_SEATS_PER_ROW: ClassVar[int] = 4

    last_column_letter: str
    preferential_seat_letters: tuple[str, ...] = ()

    @property
    def capacity(self) -> int:
        return SEAT_COLUMN_LETTERS.get(self.last_column_letter, 0)

    @classmethod
    def create(
        cls,
        row_number: int,
        last_column_letter: str,
        preferential_seat_letters: Iterable[str] | None = (),
    ) -> Result[Self]:
        failures = ensure_not_null(row_number=row_number, last_column_letter=last_column_letter)
        if failures:
            return failure(failures)

        normalized_last_column = str(last_column_letter).strip().upper()
        capacity_result = cls._validate_last_column_letter(row_number, normalized_last_column)
        if capacity_result.invalid:
            return capacity_result

        preferential_result = cls._validate_preferential_seat_letters(
            row_number, list(preferential_seat_letters or ()), capacity_result.value
        )
        if preferential_result.invalid:
            return preferential_result

        return success(cls(normalized_last_column, tuple(preferential_result.value)))

    @classmethod
    def hydrate(cls, last_column_letter: str, preferential_seat_letters: Iterable[str] | None = None) -> Self:
        require_fields(last_column_letter=last_column_letter)
        preferential = tuple(letter.upper() for letter in preferential_seat_letters or ())
        return cls(last_column_letter.upper(), preferential)

    @classmethod
    def _validate_last_column_letter(cls, row_number: int, letter: str) -> Result[int]:
        if letter not in SEAT_COLUMN_LETTERS:
            return failure(
                DomainFailure(
                    FailureCode.SEAT_WITH_INVALID_COLUMN_IDENTIFIER,
                    {"row": row_number, "value": letter},
                )
            )

        seats = SEAT_COLUMN_LETTERS[letter]
        if not cls.MINIMUM_SEATS_PER_ROW <= seats <= cls.MAXIMUM_SEATS_PER_ROW:
            return failure(
                DomainFailure(
                    FailureCode.SEAT_COLUMN_OUT_OF_RANGE,
                    {
                        "row": row_number,
                        "value": seats,
                        "min": cls.MINIMUM_SEATS_PER_ROW,
                        "max": cls.MAXIMUM_SEATS_PER_ROW,
                    },
                )
            )

        return success(seats)

    @classmethod
    def _validate_preferential_seat_letters(
        cls, row_number: int, letters: list[str], seats_in_row: int
    ) -> Result[list[str]]:
        if len(letters) > cls.MAXIMUM_PREFERENTIAL_SEATS_PER_ROW:
            return failure(
                DomainFailure(
                    FailureCode.SEAT_WITH_PREFERENTIAL_LIMIT_EXCEEDED,
                    {"row": row_number, "count": len(letters), "max": cls.MAXIMUM_PREFERENTIAL_SEATS_PER_ROW},
                )
            )

        failures: list[DomainFailure] = []
        validated: list[str] = []

        for letter in letters:
            normalized = str(letter).strip().upper()
            position = SEAT_COLUMN_LETTERS.get(normalized)

            if position is None or position > seats_in_row:
                failures.append(
                    DomainFailure(
                        FailureCode.SEAT_PREFERENTIAL_IN_ROW_IS_NOT_FOUND,
                        {"row": row_number, "seat": f"{row_number}{normalized}"},
                    )
                )
                continue

            if normalized in validated:
                failures.append(
                    DomainFailure(
                        FailureCode.SEAT_PREFERENTIAL_IS_DUPLICATED,
                        {"row": row_number, "seat": f"{row_number}{normalized}"},
                    )
                )
                continue

            validated.append(normalized)

        return failure(failures) if failures else success(validated)

    def columns(self) -> list[str]:
        return [letter for letter, position in SEAT_COLUMN_LETTERS.items() if position <= self.capacity]

    def has_seat(self, letter: str) -> bool:
        position = SEAT_COLUMN_LETTERS.get(letter.upper())
        return position is not None and position <= self.capacity

    def is_preferential_seat(self, letter: str) -> bool:
        return letter.upper() in self.preferential_seat_letters


@dataclass(frozen=True)
class SeatLayout:
    """Ordered map of row number to SeatRow, with derived totals."""

    MINIMUM_ROW_COUNT: ClassVar[int] = 4
    MAXIMUM_ROW_COUNT: ClassVar[int] = 20
    MINIMUM_ROOM_CAPACITY: ClassVar[int] = 20
    MAXIMUM_ROOM_CAPACITY: ClassVar[int] = 250
    MINIMUM_PREFERENTIAL_PERCENTAGE: ClassVar[int] = 5
    MAXIMUM_PREFERENTIAL_PERCENTAGE: ClassVar[int] = 20

    seat_rows: tuple[tuple[int, SeatRow], ...]

    @property
    def rows(self) -> dict[int, SeatRow]:
        return dict(self.seat_rows)

    @property
    def total_capacity(self) -> int:
        return sum(row.capacity for _, row in self.seat_rows)

    @property
    def preferential_seats_by_row(self) -> dict[int, list[str]]:
        return {
            number: list(row.preferential_seat_letters)
            for number, row in self.seat_rows
            if row.preferential_seat_letters
        }

    @property
    def preferential_seats_count(self) -> int:
        return sum(len(row.preferential_seat_letters) for _, row in self.seat_rows)

    @classmethod
    def create(cls, row_configurations: Iterable[Any] | None) -> Result[Self]:
        failures = ensure_not_null(row_configurations=row_configurations)
        if failures:
            return failure(failures)

        values = list(row_configurations)
        failures = [
            DomainFailure(FailureCode.MISSING_REQUIRED_DATA, {"field": "row_configurations", "index": index})
            for index, value in enumerate(values)
            if not isinstance(value, (SeatRowConfiguration, Mapping))
        ]
        if failures:
            return failure(failures)

        configurations = [SeatRowConfiguration.from_value(value) for value in values]
        if not configurations:
            return failure(DomainFailure(FailureCode.MISSING_REQUIRED_DATA, {"field": "row_configurations"}))

        if not cls.MINIMUM_ROW_COUNT <= len(configurations) <= cls.MAXIMUM_ROW_COUNT:
            return failure(
                DomainFailure(
                    FailureCode.ARRAY_LENGTH_IS_OUT_OF_RANGE,
                    {
                        "field": "row_configurations",
                        "count": len(configurations),
                        "min": cls.MINIMUM_ROW_COUNT,
                        "max": cls.MAXIMUM_ROW_COUNT,
                    },
                )
            )

        rows: list[tuple[int, SeatRow]] = []
        seen: set[int] = set()
        for config in configurations:
            if config.row_number in seen:
                failures.append(DomainFailure(FailureCode.SEAT_ROW_IS_DUPLICATED, {"row": config.row_number}))
                continue
            if config.row_number is not None:
                seen.add(config.row_number)

            result = SeatRow.create(config.row_number, config.last_column_letter, config.preferential_seat_letters)
            if result.invalid:
                failures.extend(result.failures)
            else:
                rows.append((config.row_number, result.value))

        if failures:
            return failure(failures)

        layout = cls(tuple(sorted(rows, key=lambda item: item[0])))
        failures.extend(layout._validate_totals())
        return failure(failures) if failures else success(layout)

    @classmethod
    def hydrate(cls, seat_rows: Mapping[int, SeatRow]) -> Self:
        require_fields(seat_rows=seat_rows)
        return cls(tuple(sorted(seat_rows.items(), key=lambda item: item[0])))

    def _validate_totals(self) -> list[DomainFailure]:
        failures: list[DomainFailure] = []
        capacity = self.total_capacity

        if not self.MINIMUM_ROOM_CAPACITY <= capacity <= self.MAXIMUM_ROOM_CAPACITY:
            failures.append(
                DomainFailure(
                    FailureCode.ROOM_WITH_INVALID_CAPACITY,
                    {"value": capacity, "min": self.MINIMUM_ROOM_CAPACITY, "max": self.MAXIMUM_ROOM_CAPACITY},
                )
            )

        minimum = math.ceil(capacity * self.MINIMUM_PREFERENTIAL_PERCENTAGE / 100)
        maximum = math.floor(capacity * self.MAXIMUM_PREFERENTIAL_PERCENTAGE / 100)
        if not minimum <= self.preferential_seats_count <= maximum:
            failures.append(
                DomainFailure(
                    FailureCode.ROOM_WITH_INVALID_NUMBER_OF_PREFERENTIAL_SEATS,
                    {"value": self.preferential_seats_count, "min": minimum, "max": maximum},
                )
            )

        return failures

    def row(self, row_number: int) -> SeatRow | None:
        return self.rows.get(row_number)

    def has_seat(self, row_number: int, letter: str) -> bool:
        row = self.row(row_number)
        return row is not None and row.has_seat(letter)

    def is_preferential_seat(self, row_number: int, letter: str) -> bool:
        row = self.row(row_number)
        return row is not None and row.is_preferential_seat(letter)

    def to_configuration(self) -> list[dict[str, Any]]:
        return [
            {
                "row_number": number,
                "last_column_letter": row.last_column_letter,
                "preferential_seat_letters": list(row.preferential_seat_letters),
            }
            for number, row in self.seat_rows
        ]
