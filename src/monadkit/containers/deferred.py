"""Deferred container - a value realized by an asynchronous completion.

A Deferred wraps an async producer. The producer runs at most once per
completed settlement, the first time the Deferred (or anything chained from
it) is settled; every later settlement, and every continuation attached via
map/flat_map, sees the same cached Outcome. A settlement cancelled before it
completes caches nothing and is started again by the next settle().

Failure semantics:
    An exception raised by the producer or by a continuation settles the
    chain as Outcome.Failure. Continuations are skipped for absent and
    failed outcomes, which pass through unchanged. Awaiting the Deferred
    re-raises the original exception object.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Generator
from typing import Any, TypeVar

from monadkit.containers.outcome import _MISSING, Outcome
from monadkit.kernel.capability import Monad
from monadkit.kernel.errors import CapabilityError

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

Settler = Callable[[], Awaitable[Outcome[Any]]]


class Deferred(Monad[T]):
    """A zero-or-one value available after an asynchronous completion event."""

    __slots__ = ("_settler", "_outcome", "_pending")

    def __init__(self, producer: Callable[[], Awaitable[T]]) -> None:
        async def settler() -> Outcome[T]:
            return Outcome.Value(await producer())

        self._init(settler)

    def _init(self, settler: Settler) -> None:
        self._settler = settler
        self._outcome: Outcome[Any] | None = None
        self._pending: asyncio.Future[Outcome[Any]] | None = None

    @classmethod
    def _from_settler(cls, settler: Settler) -> Deferred[Any]:
        deferred = cls.__new__(cls)
        deferred._init(settler)
        return deferred

    @classmethod
    def settled(cls, outcome: Outcome[Any]) -> Deferred[Any]:
        """Create a Deferred that has already settled with outcome."""
        deferred = cls._from_settler(_constant(outcome))
        deferred._outcome = outcome
        return deferred

    @classmethod
    def resolved(cls, value: Any) -> Deferred[Any]:
        return cls.settled(Outcome.Value(value))

    @classmethod
    def absent(cls, reason: Any = None) -> Deferred[Any]:
        return cls.settled(Outcome.Absent(reason))

    @classmethod
    def failed(cls, error: BaseException) -> Deferred[Any]:
        return cls.settled(Outcome.Failure(error))

    @classmethod
    def from_awaitable(cls, awaitable: Awaitable[Any]) -> Deferred[Any]:
        """Wrap a single awaitable (coroutine, task or future)."""
        async def producer() -> Any:
            return await awaitable

        return cls(producer)

    @classmethod
    def unit(cls, value: Any) -> Deferred[Any]:
        return cls.resolved(value)

    @property
    def done(self) -> bool:
        return self._outcome is not None

    async def settle(self) -> Outcome[T]:
        """Wait for completion and return the Outcome.

        Never raises for failures raised inside the chain; they are
        captured in the returned Outcome.
        """
        if self._outcome is not None:
            return self._outcome
        # A cancelled settlement left no outcome; start a new one.
        if self._pending is None or self._pending.done():
            self._pending = asyncio.ensure_future(self._run())
        return await asyncio.shield(self._pending)

    async def _run(self) -> Outcome[Any]:
        try:
            outcome = await self._settler()
        except Exception as exc:
            logger.debug("Deferred settled with failure: %r", exc)
            outcome = Outcome.Failure(exc)
        self._outcome = outcome
        return outcome

    async def result(self, default: Any = _MISSING) -> T:
        """Wait for completion and return the value.

        Re-raises a failure unchanged. An absent outcome returns default,
        or raises AbsentValueError when no default is given.
        """
        outcome = await self.settle()
        return outcome.unwrap(default)

    def __await__(self) -> Generator[Any, None, T]:
        return self.result().__await__()

    def map(self, fn: Callable[[T], U]) -> Deferred[U]:
        async def settler() -> Outcome[U]:
            outcome = await self.settle()
            return outcome.map(fn)

        return Deferred._from_settler(settler)

    def flat_map(self, fn: Callable[[T], Deferred[U]]) -> Deferred[U]:
        async def settler() -> Outcome[U]:
            outcome = await self.settle()
            if not outcome.ok:
                return outcome  # type: ignore[return-value]
            inner = fn(outcome.value)  # type: ignore[arg-type]
            if not isinstance(inner, Deferred):
                raise CapabilityError(
                    f"Deferred.flat_map expected a Deferred, got {type(inner).__name__}",
                    inner,
                    "Deferred",
                )
            return await inner.settle()

        return Deferred._from_settler(settler)

    def __repr__(self) -> str:
        if self._outcome is None:
            return "Deferred(<pending>)"
        return f"Deferred({self._outcome!r})"


def _constant(outcome: Outcome[Any]) -> Settler:
    async def settler() -> Outcome[Any]:
        return outcome

    return settler
