"""Settlement outcome of a Deferred."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from monadkit.kernel.errors import AbsentValueError

T = TypeVar("T")
U = TypeVar("U")

_MISSING: Any = object()


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """
    How a Deferred settled.

    Kinds:
    - value: Settled with a value; continuations run
    - absent: Settled with no value; continuations are skipped
    - failure: The producer or a continuation raised; continuations are skipped
      and the exception is re-raised to whoever reads the value
    """

    kind: Literal["value", "absent", "failure"]
    value: T | None = None
    reason: Any | None = None

    @staticmethod
    def Value(value: Any) -> Outcome[Any]:
        return Outcome(kind="value", value=value)

    @staticmethod
    def Absent(reason: Any = None) -> Outcome[Any]:
        return Outcome(kind="absent", reason=reason)

    @staticmethod
    def Failure(error: BaseException) -> Outcome[Any]:
        return Outcome(kind="failure", reason=error)

    @property
    def ok(self) -> bool:
        return self.kind == "value"

    def map(self, fn: Callable[[T], U]) -> Outcome[U]:
        """Apply fn to the value, leaving absent and failure untouched."""
        if not self.ok:
            return self  # type: ignore[return-value]
        return Outcome.Value(fn(self.value))  # type: ignore[arg-type]

    def unwrap(self, default: Any = _MISSING) -> T:
        """Return the value, re-raise a failure, or handle absence.

        An absent outcome returns default when one is given and raises
        AbsentValueError otherwise.
        """
        if self.kind == "failure":
            raise self.reason
        if self.kind == "absent":
            if default is _MISSING:
                raise AbsentValueError("Deferred settled without a value", self.reason)
            return default
        return self.value  # type: ignore[return-value]
