"""Kernel layer - capability protocols, errors and tracing."""

from monadkit.kernel.capability import FlatMappable, Mappable, Monad, Pointed, binding_operation
from monadkit.kernel.errors import (
    AbsentValueError,
    ArityError,
    CapabilityError,
    LawViolationError,
    MonadkitError,
)
from monadkit.kernel.trace import Evidence, Trace

__all__ = [
    # Capabilities
    "Mappable",
    "FlatMappable",
    "Pointed",
    "Monad",
    "binding_operation",
    # Errors
    "MonadkitError",
    "CapabilityError",
    "ArityError",
    "AbsentValueError",
    "LawViolationError",
    # Tracing
    "Evidence",
    "Trace",
]
