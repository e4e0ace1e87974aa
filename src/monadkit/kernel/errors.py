"""Error types for capability dispatch, currying and law checking."""

from __future__ import annotations


class MonadkitError(Exception):
    """Base class for errors raised by monadkit."""


class CapabilityError(MonadkitError, TypeError):
    """Error raised when a container lacks the operation a caller requires.

    The offending object is preserved for debugging.
    """

    def __init__(self, message: str, subject: object, capability: str) -> None:
        self.subject = subject
        self.capability = capability
        super().__init__(message)

    @classmethod
    def missing(cls, subject: object, capability: str) -> CapabilityError:
        kind = subject.__name__ if isinstance(subject, type) else type(subject).__name__
        return cls(f"{kind} does not implement {capability}", subject, capability)

    def __repr__(self) -> str:
        return f"CapabilityError({super().__repr__()}, subject={self.subject!r}, capability={self.capability!r})"


class ArityError(MonadkitError, TypeError):
    """Error raised when a curried function receives too many arguments."""

    def __init__(self, message: str, arity: int, received: int) -> None:
        self.arity = arity
        self.received = received
        super().__init__(message)

    def __repr__(self) -> str:
        return f"ArityError({super().__repr__()}, arity={self.arity}, received={self.received})"


class AbsentValueError(MonadkitError, LookupError):
    """Error raised when reading the value of an absent outcome."""

    def __init__(self, message: str, reason: object = None) -> None:
        self.reason = reason
        super().__init__(message)


class LawViolationError(MonadkitError, AssertionError):
    """Error raised by LawReport.raise_for_failures()."""

    def __init__(self, message: str, laws: list[str]) -> None:
        self.laws = laws
        super().__init__(message)
