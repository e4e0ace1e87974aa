"""Kleisli composition of container-returning functions."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from monadkit.combinators.types import Kleisli, Pipeline, describe
from monadkit.kernel.capability import FlatMappable, binding_operation
from monadkit.kernel.errors import CapabilityError
from monadkit.kernel.trace import Trace

logger = logging.getLogger(__name__)


def compose_m(
    *fns: Kleisli,
    via: type = FlatMappable,
    trace: Trace | None = None,
) -> Callable[[Any], Any]:
    """Compose container-returning functions right to left.

    compose_m(f, g)(x) == g(x).flat_map(f): the rightmost function runs
    first on the input, and each result container binds the rest of the
    pipeline through its own operation, so the same engine composes
    Identity, Sequence, Deferred or any external container.

    Args:
        fns: Steps T_{i-1} -> Container[T_i], in right-to-left order
        via: Capability whose operation binds the steps. FlatMappable binds
            with flat_map; Mappable binds with map and yields nested containers
        trace: Optional observer; records "compose.begin" per invocation and
            "compose.step" per step

    Returns:
        Function T_0 -> Container[T_n]

    Raises:
        ValueError: If no functions are given
        CapabilityError: When the pipeline runs and a step returns something
            that does not implement via
    """
    if not fns:
        raise ValueError("compose_m requires at least one function")

    bind = binding_operation(via)
    logger.debug("Composed %d step(s) via %s", len(fns), via.__name__)

    if trace is None:
        return _fold(fns, via, bind, None, None)

    def traced(x: Any) -> Any:
        begin_id = trace.record("compose.begin", info={"input": x, "steps": len(fns)})
        # Deferred steps run after this call returns; they record under begin_id.
        return _fold(fns, via, bind, trace, begin_id)(x)

    return traced


def pipe_m(
    *fns: Kleisli,
    via: type = FlatMappable,
    trace: Trace | None = None,
) -> Callable[[Any], Any]:
    """Compose container-returning functions left to right.

    pipe_m(g, f) == compose_m(f, g).
    """
    return compose_m(*reversed(fns), via=via, trace=trace)


def _fold(
    fns: Pipeline,
    via: type,
    bind: Callable[..., Any],
    trace: Trace | None,
    parent_id: int | None,
) -> Callable[[Any], Any]:
    steps = [_checked(fn, position, via, trace, parent_id) for position, fn in enumerate(fns)]
    acc = steps[0]
    for step in steps[1:]:
        acc = _bound(step, acc, bind)
    return acc


def _bound(step: Callable[[Any], Any], continuation: Callable[[Any], Any], bind: Callable[..., Any]) -> Callable[[Any], Any]:
    def run(x: Any) -> Any:
        return bind(step(x), continuation)

    return run


def _checked(
    fn: Kleisli,
    position: int,
    via: type,
    trace: Trace | None,
    parent_id: int | None,
) -> Callable[[Any], Any]:
    name = describe(fn)

    def run(x: Any) -> Any:
        if trace is not None:
            trace.record(
                "compose.step",
                info={"position": position, "function": name},
                parent_id=parent_id,
            )
        container = fn(x)
        if not isinstance(container, via):
            raise CapabilityError(
                f"Step {name} returned {type(container).__name__}, which does not implement {via.__name__}",
                container,
                via.__name__,
            )
        return container

    return run
