from .combinators import (
    LawReport,
    LawVerifier,
    VerifierConfig,
    compose,
    compose_m,
    curry,
    flat_map,
    fmap,
    identity,
    join,
    lift,
    pipe,
    pipe_m,
    tap,
    verify_laws,
)
from .containers import Deferred, Identity, Outcome, Sequence
from .kernel import (
    ArityError,
    CapabilityError,
    FlatMappable,
    Mappable,
    Monad,
    MonadkitError,
    Pointed,
    Trace,
)

__all__ = [
    # Capabilities
    "Mappable",
    "FlatMappable",
    "Pointed",
    "Monad",
    # Containers
    "Identity",
    "Sequence",
    "Deferred",
    "Outcome",
    # Combinators
    "identity",
    "curry",
    "lift",
    "fmap",
    "flat_map",
    "join",
    "compose",
    "pipe",
    "tap",
    "compose_m",
    "pipe_m",
    # Laws
    "LawVerifier",
    "LawReport",
    "VerifierConfig",
    "verify_laws",
    # Errors
    "MonadkitError",
    "CapabilityError",
    "ArityError",
    # Tracing
    "Trace",
]
