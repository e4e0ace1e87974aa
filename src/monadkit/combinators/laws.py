"""Law verifier - certify a container kind against the functor and monad laws.

Checked laws, for a kind K with unit K.unit, a container c, a value x,
pure functions f and g and container-returning functions kf and kg:

    functor_identity:     c.map(identity) == c
    functor_composition:  c.map(f).map(g) == c.map(lambda x: g(f(x)))
    left_identity:        K.unit(x).flat_map(kf) == kf(x)
    right_identity:       c.flat_map(K.unit) == c
    associativity:        c.flat_map(kf).flat_map(kg) == c.flat_map(lambda x: kf(x).flat_map(kg))

Every law is reported independently; a failing law never stops the others
from being checked.
"""

from __future__ import annotations

import inspect
import logging
import operator
from collections.abc import Callable
from typing import Any

from monadkit.combinators.ops import identity, lift
from monadkit.combinators.types import FUNCTOR_LAWS, MONAD_LAWS, LawOutcome, LawReport, VerifierConfig
from monadkit.kernel.trace import Trace

logger = logging.getLogger(__name__)

Case = tuple[str, Callable[[], tuple[Any, Any]]]


class LawVerifier:
    """Check the functor and monad laws for a container kind.

    Attributes:
        config: Which law groups to check
        equals: Predicate comparing the observed contents of two containers
        observe: Extracts comparable contents from a container. Defaults to
            the container itself; use Deferred.settle (with averify) for
            asynchronous containers
        trace: Optional observer; records one "law.<name>" event per law
    """

    def __init__(
        self,
        config: VerifierConfig | None = None,
        equals: Callable[[Any, Any], bool] = operator.eq,
        observe: Callable[[Any], Any] = identity,
        trace: Trace | None = None,
    ) -> None:
        self.config = config or VerifierConfig()
        self.equals = equals
        self.observe = observe
        self.trace = trace

    def verify(
        self,
        kind: type,
        value: Any,
        f: Callable[[Any], Any],
        g: Callable[[Any], Any],
        *,
        container: Any = None,
        kf: Callable[[Any], Any] | None = None,
        kg: Callable[[Any], Any] | None = None,
    ) -> LawReport:
        """Check every configured law synchronously.

        Args:
            kind: Container class exposing unit
            value: Sample raw value
            f: Sample pure function
            g: Sample pure function applied after f
            container: Sample container; defaults to kind.unit(value)
            kf: Sample container-returning function; defaults to unit after f
            kg: Sample container-returning function; defaults to unit after g

        Returns:
            LawReport with one LawOutcome per checked law
        """
        outcomes = []
        for law, case in self._cases(kind, value, f, g, container, kf, kg):
            outcomes.append(self._check(law, lambda case=case: self._compare_sync(case)))
        return self._report(kind, outcomes)

    async def averify(
        self,
        kind: type,
        value: Any,
        f: Callable[[Any], Any],
        g: Callable[[Any], Any],
        *,
        container: Any = None,
        kf: Callable[[Any], Any] | None = None,
        kg: Callable[[Any], Any] | None = None,
    ) -> LawReport:
        """Check every configured law, awaiting asynchronous observations."""
        outcomes = []
        for law, case in self._cases(kind, value, f, g, container, kf, kg):
            try:
                mismatch = await self._compare_async(case)
            except Exception as exc:
                if not self.config.capture_errors:
                    raise
                mismatch = f"raised {exc!r}"
            outcomes.append(self._outcome(law, mismatch))
        return self._report(kind, outcomes)

    def _cases(
        self,
        kind: type,
        value: Any,
        f: Callable[[Any], Any],
        g: Callable[[Any], Any],
        container: Any,
        kf: Callable[[Any], Any] | None,
        kg: Callable[[Any], Any] | None,
    ) -> list[Case]:
        unit = lift(kind)
        kf = kf or (lambda x: unit(f(x)))
        kg = kg or (lambda x: unit(g(x)))

        def sample() -> Any:
            return container if container is not None else unit(value)

        cases: list[Case] = []
        if self.config.check_functor:
            cases += [
                ("functor_identity", lambda: (sample().map(identity), sample())),
                ("functor_composition", lambda: (sample().map(f).map(g), sample().map(lambda x: g(f(x))))),
            ]
        if self.config.check_monad:
            cases += [
                ("left_identity", lambda: (unit(value).flat_map(kf), kf(value))),
                ("right_identity", lambda: (sample().flat_map(unit), sample())),
                (
                    "associativity",
                    lambda: (
                        sample().flat_map(kf).flat_map(kg),
                        sample().flat_map(lambda x: kf(x).flat_map(kg)),
                    ),
                ),
            ]
        return cases

    def _check(self, law: str, compare: Callable[[], str | None]) -> LawOutcome:
        try:
            mismatch = compare()
        except Exception as exc:
            if not self.config.capture_errors:
                raise
            mismatch = f"raised {exc!r}"
        return self._outcome(law, mismatch)

    def _compare_sync(self, case: Callable[[], tuple[Any, Any]]) -> str | None:
        lhs, rhs = case()
        left, right = self.observe(lhs), self.observe(rhs)
        pending = [o for o in (left, right) if inspect.isawaitable(o)]
        if pending:
            for observed in pending:
                if inspect.iscoroutine(observed):
                    observed.close()
            raise TypeError("observe returned an awaitable; use averify")
        return self._mismatch(left, right)

    async def _compare_async(self, case: Callable[[], tuple[Any, Any]]) -> str | None:
        lhs, rhs = case()
        left, right = self.observe(lhs), self.observe(rhs)
        if inspect.isawaitable(left):
            left = await left
        if inspect.isawaitable(right):
            right = await right
        return self._mismatch(left, right)

    def _mismatch(self, left: Any, right: Any) -> str | None:
        if self.equals(left, right):
            return None
        return f"{left!r} != {right!r}"

    def _outcome(self, law: str, mismatch: str | None) -> LawOutcome:
        if self.trace is not None:
            self.trace.record(f"law.{law}", info={"passed": mismatch is None})
        if mismatch is None:
            return LawOutcome.success(law)
        logger.debug("Law %s failed: %s", law, mismatch)
        return LawOutcome.failure(law, mismatch)

    def _report(self, kind: type, outcomes: list[LawOutcome]) -> LawReport:
        return LawReport(container=getattr(kind, "__name__", repr(kind)), outcomes=outcomes)


def verify_laws(
    kind: type,
    value: Any,
    f: Callable[[Any], Any],
    g: Callable[[Any], Any],
    **kwargs: Any,
) -> LawReport:
    """Check all laws with a default LawVerifier."""
    return LawVerifier().verify(kind, value, f, g, **kwargs)
