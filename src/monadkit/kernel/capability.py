"""Capability protocols for containers - pure abstractions.

A container is usable by the combinator layer when it exposes the operations
of the protocols below. Reference containers declare conformance by
subclassing; external containers may conform structurally.

Laws every conforming container must satisfy:

    Functor identity:     c.map(identity) == c
    Functor composition:  c.map(f).map(g) == c.map(lambda x: g(f(x)))
    Left identity:        Kind.unit(x).flat_map(f) == f(x)
    Right identity:       c.flat_map(Kind.unit) == c
    Associativity:        c.flat_map(f).flat_map(g) == c.flat_map(lambda x: f(x).flat_map(g))
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T", covariant=True)
U = TypeVar("U")


@runtime_checkable
class Mappable(Protocol[T]):
    """Container exposing a structure-preserving map."""

    def map(self, fn: Callable[[Any], U]) -> Mappable[U]:
        """Apply fn to every contained value.

        The result is always the same container kind as the receiver.
        """
        ...


@runtime_checkable
class FlatMappable(Mappable[T], Protocol[T]):
    """Mappable container that can also flatten one level of nesting."""

    def flat_map(self, fn: Callable[[Any], FlatMappable[U]]) -> FlatMappable[U]:
        """Apply a container-returning fn and flatten the result."""
        ...


@runtime_checkable
class Pointed(Protocol[T]):
    """Container kind that can wrap a raw value."""

    @classmethod
    def unit(cls, value: Any) -> Pointed[Any]:
        """Wrap value into the kind's minimal single-value form."""
        ...


@runtime_checkable
class Monad(FlatMappable[T], Pointed[T], Protocol[T]):
    """FlatMappable container kind that is also Pointed."""


def binding_operation(capability: type) -> Callable[[Any, Callable[[Any], Any]], Any]:
    """Return the operation that binds a continuation for a capability.

    Mappable binds with ``map``; FlatMappable (and Monad) bind with ``flat_map``.
    """
    if capability is Mappable:
        return lambda container, fn: container.map(fn)
    if capability in (FlatMappable, Monad):
        return lambda container, fn: container.flat_map(fn)
    raise ValueError(f"No binding operation for capability: {getattr(capability, '__name__', capability)!r}")
