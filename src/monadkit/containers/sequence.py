"""Sequence container - ordered zero or more values."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Any, TypeVar

from monadkit.kernel.capability import Monad
from monadkit.kernel.errors import CapabilityError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, init=False)
class Sequence(Monad[T]):
    """An immutable ordered collection.

    Accepts any iterable; items are stored as a tuple so the container
    can never be mutated after construction.
    """

    items: tuple[T, ...]

    def __init__(self, values: Iterable[T] = ()) -> None:
        object.__setattr__(self, "items", tuple(values))

    @classmethod
    def of(cls, *items: Any) -> Sequence[Any]:
        return cls(items)

    @classmethod
    def empty(cls) -> Sequence[Any]:
        return cls(())

    @classmethod
    def unit(cls, value: Any) -> Sequence[Any]:
        return cls((value,))

    def map(self, fn: Callable[[T], U]) -> Sequence[U]:
        return Sequence(fn(item) for item in self.items)

    def flat_map(self, fn: Callable[[T], Sequence[U]]) -> Sequence[U]:
        """Concatenate fn(item) for every item, in item order.

        Exactly one level is flattened: items of the sub-sequences are
        kept as they are, even if they are sequences themselves.
        """
        flattened: list[U] = []
        for item in self.items:
            sub = fn(item)
            if not isinstance(sub, Sequence):
                raise CapabilityError(
                    f"Sequence.flat_map expected a Sequence, got {type(sub).__name__}",
                    sub,
                    "Sequence",
                )
            flattened.extend(sub.items)
        return Sequence(flattened)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int | slice) -> Any:
        if isinstance(index, slice):
            return Sequence(self.items[index])
        return self.items[index]

    def __repr__(self) -> str:
        return f"Sequence({list(self.items)!r})"
