"""Identity container - exactly one value, no effects."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from monadkit.kernel.capability import Monad
from monadkit.kernel.errors import CapabilityError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Identity(Monad[T]):
    """A box around a single value."""

    value: T

    @classmethod
    def unit(cls, value: Any) -> Identity[Any]:
        return cls(value)

    def map(self, fn: Callable[[T], U]) -> Identity[U]:
        return Identity(fn(self.value))

    def flat_map(self, fn: Callable[[T], Identity[U]]) -> Identity[U]:
        result = fn(self.value)
        if not isinstance(result, Identity):
            raise CapabilityError(
                f"Identity.flat_map expected an Identity, got {type(result).__name__}",
                result,
                "Identity",
            )
        return result
