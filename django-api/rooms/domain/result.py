"""Success/failure union used by every domain operation.

Validation never raises. Operations return ``Success(value)`` or
``Failure(failures)``; callers branch on ``result.invalid``.
"""

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from rooms.domain.errors import DomainFailure, FailureCode, TechnicalError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def invalid(self) -> bool:
        return False

    @property
    def failures(self) -> tuple[DomainFailure, ...]:
        return ()

    def is_valid(self) -> bool:
        return True

    def is_invalid(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        return Success(fn(self.value))

    def flat_map(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        return fn(self.value)

    def fold(self, on_success: Callable[[T], U], on_failure: Callable[[tuple[DomainFailure, ...]], U]) -> U:
        return on_success(self.value)

    def tap(self, fn: Callable[[T], Any]) -> "Result[T]":
        fn(self.value)
        return self


@dataclass(frozen=True)
class Failure:
    """Failed outcome carrying one or more failures."""

    failures: tuple[DomainFailure, ...]

    @property
    def invalid(self) -> bool:
        return True

    @property
    def value(self) -> Any:
        raise TechnicalError(
            FailureCode.MISSING_REQUIRED_DATA,
            {"reason": "value accessed on a failed result", "codes": self.codes},
        )

    @property
    def codes(self) -> list[str]:
        return [f.code.value for f in self.failures]

    def is_valid(self) -> bool:
        return False

    def is_invalid(self) -> bool:
        return True

    def map(self, fn: Callable[[Any], U]) -> "Result[U]":
        return self

    def flat_map(self, fn: Callable[[Any], "Result[U]"]) -> "Result[U]":
        return self

    def fold(self, on_success: Callable[[Any], U], on_failure: Callable[[tuple[DomainFailure, ...]], U]) -> U:
        return on_failure(self.failures)

    def tap(self, fn: Callable[[Any], Any]) -> "Result[Any]":
        return self


Result = Success[T] | Failure


def success(value: T) -> Success[T]:
    return Success(value)


def failure(errors: DomainFailure | Iterable[DomainFailure]) -> Failure:
    if isinstance(errors, DomainFailure):
        return Failure((errors,))
    return Failure(tuple(errors))


def combine(results: Mapping[str, Result[Any]] | Sequence[Result[Any]]) -> Result[Any]:
    """Merge independent results, collecting every failure in input order.

    A mapping yields a dict of values, a sequence yields a list.
    """
    failures: list[DomainFailure] = []

    if isinstance(results, Mapping):
        values: dict[str, Any] = {}
        for key, result in results.items():
            if result.invalid:
                failures.extend(result.failures)
            else:
                values[key] = result.value
        return failure(failures) if failures else success(values)

    if isinstance(results, Sequence) and not isinstance(results, (str, bytes)):
        items: list[Any] = []
        for result in results:
            if result.invalid:
                failures.extend(result.failures)
            else:
                items.append(result.value)
        return failure(failures) if failures else success(items)

    raise TechnicalError(FailureCode.INVALID_COMBINE_INPUT, {"type": type(results).__name__})
