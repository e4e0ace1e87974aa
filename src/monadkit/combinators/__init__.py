"""Combinators - generic operations over any conforming container."""

from monadkit.combinators.compose import compose_m, pipe_m
from monadkit.combinators.laws import LawVerifier, verify_laws
from monadkit.combinators.ops import (
    Curried,
    arity_of,
    compose,
    curry,
    flat_map,
    fmap,
    identity,
    join,
    lift,
    pipe,
    tap,
)
from monadkit.combinators.types import (
    FUNCTOR_LAWS,
    MONAD_LAWS,
    Kleisli,
    LawOutcome,
    LawReport,
    Pipeline,
    VerifierConfig,
)

__all__ = [
    # Ops
    "identity",
    "curry",
    "Curried",
    "arity_of",
    "lift",
    "fmap",
    "flat_map",
    "join",
    "compose",
    "pipe",
    "tap",
    # Composition
    "compose_m",
    "pipe_m",
    "Kleisli",
    "Pipeline",
    # Laws
    "LawVerifier",
    "verify_laws",
    "VerifierConfig",
    "LawOutcome",
    "LawReport",
    "FUNCTOR_LAWS",
    "MONAD_LAWS",
]
