"""Reference containers: Identity, Sequence and Deferred."""

from monadkit.containers.deferred import Deferred
from monadkit.containers.identity import Identity
from monadkit.containers.outcome import Outcome
from monadkit.containers.sequence import Sequence

__all__ = [
    "Identity",
    "Sequence",
    "Deferred",
    "Outcome",
]
