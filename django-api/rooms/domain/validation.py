"""Small validation helpers shared by the value objects."""

from enum import Enum
from typing import Any, TypeVar

from rooms.domain.errors import DomainFailure, FailureCode, TechnicalError
from rooms.domain.result import Result, failure, success

E = TypeVar("E", bound=Enum)


def ensure_not_null(**fields: Any) -> list[DomainFailure]:
    """Return one MISSING_REQUIRED_DATA failure per field that is None."""
    return [
        DomainFailure(FailureCode.MISSING_REQUIRED_DATA, {"field": name})
        for name, value in fields.items()
        if value is None
    ]


def require_fields(**fields: Any) -> None:
    """Hydration guard: raise when trusted data is missing a field."""
    missing = [name for name, value in fields.items() if value is None]
    if missing:
        raise TechnicalError(FailureCode.MISSING_REQUIRED_DATA, {"fields": missing})


def is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_range(field: str, value: int | float, minimum: int | float, maximum: int | float) -> list[DomainFailure]:
    if minimum <= value <= maximum:
        return []
    return [
        DomainFailure(
            FailureCode.VALUE_OUT_OF_RANGE,
            {"field": field, "value": value, "min": minimum, "max": maximum},
        )
    ]


def parse_enum(field: str, value: Any, enum_cls: type[E]) -> Result[E]:
    """Parse a raw value into ``enum_cls``, ignoring case and surrounding spaces."""
    if isinstance(value, enum_cls):
        return success(value)

    allowed = [member.value for member in enum_cls]
    if isinstance(value, str):
        normalized = value.strip().upper()
        for member in enum_cls:
            if str(member.value).upper() == normalized:
                return success(member)

    return failure(
        DomainFailure(
            FailureCode.INVALID_ENUM_VALUE,
            {"field": field, "value": value, "allowed": allowed},
        )
    )


def hydrate_enum(field: str, value: Any, enum_cls: type[E]) -> E:
    result = parse_enum(field, value, enum_cls)
    if result.invalid:
        raise TechnicalError(FailureCode.INVALID_HYDRATE_DATA, {"field": field, "value": value})
    return result.value
