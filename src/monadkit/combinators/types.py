"""Combinator types, configuration and law report models."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Sequence as AbcSequence
from dataclasses import dataclass
from typing import Any, Self

from pydantic import BaseModel

from monadkit.kernel.capability import FlatMappable
from monadkit.kernel.errors import LawViolationError

# A container-returning step: T_i -> Container[T_{i+1}]
Kleisli = Callable[[Any], FlatMappable[Any]]

# Ordered steps, built and consumed by compose_m / pipe_m
Pipeline = AbcSequence[Kleisli]

FUNCTOR_LAWS = ("functor_identity", "functor_composition")
MONAD_LAWS = ("left_identity", "right_identity", "associativity")


@dataclass(frozen=True)
class VerifierConfig:
    """Which law groups LawVerifier checks.

    Attributes:
        check_functor: Check functor identity and composition
        check_monad: Check left identity, right identity and associativity
        capture_errors: Record an exception raised while checking a law as that
            law's failure instead of propagating it
    """
    check_functor: bool = True
    check_monad: bool = True
    capture_errors: bool = True


class LawOutcome(BaseModel):
    """Result of checking a single law."""
    law: str
    passed: bool
    detail: str | None = None

    @classmethod
    def success(cls, law: str) -> Self:
        return cls(law=law, passed=True)

    @classmethod
    def failure(cls, law: str, detail: str) -> Self:
        return cls(law=law, passed=False, detail=detail)


class LawReport(BaseModel):
    """Per-law results for one container kind."""
    container: str
    outcomes: list[LawOutcome]

    @property
    def passed(self) -> bool:
        return all(o.passed for o in self.outcomes)

    @property
    def failures(self) -> list[LawOutcome]:
        return [o for o in self.outcomes if not o.passed]

    def __getitem__(self, law: str) -> LawOutcome:
        for outcome in self.outcomes:
            if outcome.law == law:
                return outcome
        raise KeyError(f"Law '{law}' was not checked")

    def raise_for_failures(self) -> None:
        """Raise LawViolationError if any law failed."""
        failures = self.failures
        if failures:
            details = "; ".join(f"{o.law}: {o.detail}" for o in failures)
            raise LawViolationError(
                f"{self.container} violates {len(failures)} law(s): {details}",
                [o.law for o in failures],
            )


def describe(fn: Callable[..., Any]) -> str:
    """Human-readable name of a callable for traces and reports."""
    return getattr(fn, "__qualname__", None) or getattr(fn, "__name__", None) or repr(fn)
