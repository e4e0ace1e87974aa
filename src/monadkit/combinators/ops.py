"""Generic combinators: curry, lift, fmap, flat_map, join, compose, pipe, tap."""

from __future__ import annotations

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from monadkit.kernel.capability import FlatMappable, Mappable
from monadkit.kernel.errors import ArityError, CapabilityError
from monadkit.kernel.trace import Trace

logger = logging.getLogger(__name__)

T = TypeVar("T")

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


def identity(x: T) -> T:
    return x


def arity_of(fn: Callable[..., Any]) -> int:
    """Count the positional parameters of fn that have no default."""
    signature = inspect.signature(fn)
    return sum(
        1
        for p in signature.parameters.values()
        if p.kind in _POSITIONAL and p.default is inspect.Parameter.empty
    )


class Curried:
    """A fixed-arity function that accepts its arguments across several calls.

    Each call appends its arguments to those already collected. Once the
    arity is reached the wrapped function is invoked; before that a new
    Curried holding the extended argument list is returned, so partial
    applications can be reused.
    """

    def __init__(self, fn: Callable[..., Any], arity: int, args: tuple[Any, ...] = ()) -> None:
        self.fn = fn
        self.arity = arity
        self.args = args
        functools.update_wrapper(self, fn, updated=())

    def __call__(self, *args: Any) -> Any:
        collected = self.args + args
        if len(collected) > self.arity:
            raise ArityError(
                f"{self.__name__} takes {self.arity} argument(s) but {len(collected)} were given",
                self.arity,
                len(collected),
            )
        if len(collected) == self.arity:
            return self.fn(*collected)
        return Curried(self.fn, self.arity, collected)

    def __repr__(self) -> str:
        return f"Curried({self.__name__}, arity={self.arity}, args={self.args!r})"


def curry(fn: Callable[..., Any], arity: int | None = None) -> Curried:
    """Wrap fn for partial application.

    Args:
        fn: The function to wrap
        arity: Number of arguments to collect; defaults to the count of fn's
            positional parameters without defaults

    Returns:
        Curried wrapper. curry(add)(3)(4) == curry(add)(3, 4) == add(3, 4)
    """
    if arity is None:
        arity = arity_of(fn)
    if arity < 0:
        raise ValueError("arity must not be negative")
    return Curried(fn, arity)


@curry
def lift(kind: type, value: Any) -> Any:
    """Wrap value into kind's minimal single-value form via kind.unit."""
    unit = getattr(kind, "unit", None)
    if not callable(unit):
        raise CapabilityError.missing(kind, "Pointed")
    return unit(value)


@curry
def fmap(fn: Callable[[Any], Any], container: Any) -> Any:
    """Map fn over any Mappable container; fmap(fn) is a reusable mapper."""
    if not isinstance(container, Mappable):
        raise CapabilityError.missing(container, "Mappable")
    return container.map(fn)


@curry
def flat_map(fn: Callable[[Any], Any], container: Any) -> Any:
    """Flat-map fn over any FlatMappable container."""
    if not isinstance(container, FlatMappable):
        raise CapabilityError.missing(container, "FlatMappable")
    return container.flat_map(fn)


def join(container: Any) -> Any:
    """Flatten one level of container-of-container nesting."""
    return flat_map(identity, container)


def compose(*fns: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Right-to-left function composition; compose() is identity."""
    def composed(x: Any) -> Any:
        for fn in reversed(fns):
            x = fn(x)
        return x

    return composed


def pipe(*fns: Callable[[Any], Any]) -> Callable[[Any], Any]:
    """Left-to-right function composition; pipe() is identity."""
    return compose(*reversed(fns))


def tap(label: str, trace: Trace | None = None) -> Callable[[T], T]:
    """Return a pass-through function that observes the values it receives.

    Every value is logged at debug level and, when a trace is given,
    recorded as a "tap" event.
    """
    def observe(value: T) -> T:
        logger.debug("%s: %r", label, value)
        if trace is not None:
            trace.record("tap", info={"label": label, "value": value})
        return value

    return observe
