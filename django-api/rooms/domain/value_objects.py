"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Self
from uuid import UUID, uuid4

from rooms.domain.errors import DomainFailure, FailureCode, TechnicalError
from rooms.domain.result import Result, failure, success
from rooms.domain.validation import check_range, ensure_not_null, is_integer, parse_enum, require_fields


@dataclass(frozen=True)
class UID:
    """Prefixed unique identifier, rendered as ``PREFIX.uuid``."""

    PREFIX: ClassVar[str] = ""
    SEPARATOR: ClassVar[str] = "."

    uuid: str

    @property
    def value(self) -> str:
        return f"{self.PREFIX}{self.SEPARATOR}{self.uuid}"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def create(cls) -> Self:
        return cls(uuid=str(uuid4()))

    @classmethod
    def hydrate(cls, value: str) -> Self:
        if not value or not value.strip():
            raise TechnicalError(FailureCode.MISSING_REQUIRED_DATA, {"field": "uid"})
        return cls(uuid=cls._uuid_part(value))

    @classmethod
    def parse(cls, value: str | None) -> Result[Self]:
        if value is None or not str(value).strip():
            return failure(DomainFailure(FailureCode.MISSING_REQUIRED_DATA, {"field": "uid"}))

        prefix = cls.PREFIX + cls.SEPARATOR
        if not value.startswith(prefix):
            return failure(
                DomainFailure(FailureCode.UID_WITH_INVALID_FORMAT, {"value": value, "prefix": prefix})
            )

        uuid_part = value[len(prefix):]
        try:
            UUID(uuid_part)
        except ValueError:
            return failure(DomainFailure(FailureCode.UID_WITH_INVALID_FORMAT, {"value": value}))

        return success(cls(uuid=uuid_part))

    @classmethod
    def _uuid_part(cls, value: str) -> str:
        prefix = cls.PREFIX + cls.SEPARATOR
        return value[len(prefix):] if value.startswith(prefix) else value


@dataclass(frozen=True)
class RoomUID(UID):
    """Unique identifier for a Room."""

    PREFIX: ClassVar[str] = "ROOM"


@dataclass(frozen=True)
class ScreeningUID(UID):
    """Unique identifier for a Screening, owned by the screening module."""

    PREFIX: ClassVar[str] = "SCNG"


@dataclass(frozen=True)
class RoomIdentifier:
    """The room number shown to customers."""

    MIN_VALUE: ClassVar[int] = 1
    MAX_VALUE: ClassVar[int] = 100

    value: int

    @classmethod
    def create(cls, value: Any) -> Result[Self]:
        failures = ensure_not_null(room_identifier=value)
        if failures:
            return failure(failures)

        if not is_integer(value):
            return failure(
                DomainFailure(FailureCode.VALUE_NOT_INTEGER, {"field": "room_identifier", "value": value})
            )

        failures = check_range("room_identifier", value, cls.MIN_VALUE, cls.MAX_VALUE)
        return failure(failures) if failures else success(cls(value=value))

    @classmethod
    def hydrate(cls, value: int) -> Self:
        require_fields(room_identifier=value)
        return cls(value=value)


class ScreenType(Enum):
    TWO_D = "2D"
    THREE_D = "3D"
    TWO_D_THREE_D = "2D_3D"


@dataclass(frozen=True)
class Screen:
    """Projection screen: size in metres and supported formats."""

    MIN_SIZE_IN_METERS: ClassVar[int] = 10
    MAX_SIZE_IN_METERS: ClassVar[int] = 50

    size: int
    type: ScreenType

    @classmethod
    def create(cls, size: Any, type: Any) -> Result[Self]:
        failures = ensure_not_null(size=size, type=type)
        if failures:
            return failure(failures)

        if not is_integer(size):
            failures.append(DomainFailure(FailureCode.VALUE_NOT_INTEGER, {"field": "size", "value": size}))
        else:
            failures.extend(check_range("size", size, cls.MIN_SIZE_IN_METERS, cls.MAX_SIZE_IN_METERS))

        type_result = parse_enum("screen_type", type, ScreenType)
        if type_result.invalid:
            failures.extend(type_result.failures)

        return failure(failures) if failures else success(cls(size=size, type=type_result.value))

    @classmethod
    def hydrate(cls, size: int, type: str) -> Self:
        require_fields(size=size, type=type)
        return cls(size=size, type=ScreenType(type.strip().upper()))
