import asyncio

import pytest

from monadkit import (
    ArityError,
    CapabilityError,
    Deferred,
    Identity,
    Sequence,
    Trace,
    compose,
    curry,
    fmap,
    flat_map,
    identity,
    join,
    lift,
    pipe,
    tap,
)
from monadkit.combinators.ops import Curried, arity_of
from fakes import double, inc


def add(a, b):
    return a + b


class TestCurry:
    def test_one_argument_at_a_time(self) -> None:
        assert curry(add)(3)(4) == 7

    def test_all_arguments_at_once(self) -> None:
        assert curry(add)(3, 4) == 7

    def test_partial_application_is_reusable(self) -> None:
        add3 = curry(add)(3)
        assert isinstance(add3, Curried)
        assert add3(1) == 4
        assert add3(2) == 5
        assert add3.args == (3,)

    def test_three_arguments_in_any_grouping(self) -> None:
        volume = curry(lambda a, b, c: a * b * c)
        assert volume(2)(3)(4) == 24
        assert volume(2, 3)(4) == 24
        assert volume(2)(3, 4) == 24

    def test_too_many_arguments_fail_fast(self) -> None:
        with pytest.raises(ArityError) as exc_info:
            curry(add)(1, 2, 3)
        assert exc_info.value.arity == 2
        assert exc_info.value.received == 3
        assert isinstance(exc_info.value, TypeError)

    def test_too_many_arguments_after_partial(self) -> None:
        with pytest.raises(ArityError):
            curry(add)(1)(2, 3)

    def test_zero_arity_invokes_on_first_call(self) -> None:
        calls = []
        ping = curry(lambda: calls.append("ping") or "pong")
        assert ping() == "pong"
        assert calls == ["ping"]

    def test_empty_call_does_not_advance(self) -> None:
        assert curry(add)()(1)()(2) == 3

    def test_arity_ignores_defaults_and_varargs(self) -> None:
        def scaled(x, factor=2, *rest, **options):
            return x * factor

        assert arity_of(scaled) == 1
        assert curry(scaled)(5) == 10

    def test_explicit_arity(self) -> None:
        total = curry(lambda *xs: sum(xs), arity=3)
        assert total(1)(2)(3) == 6

    def test_negative_arity_rejected(self) -> None:
        with pytest.raises(ValueError):
            curry(add, arity=-1)

    def test_recurrying_keeps_the_new_arity(self) -> None:
        total = curry(lambda *xs: sum(xs), arity=3)
        recurried = curry(total, arity=1)

        assert recurried.arity == 1
        assert recurried.args == ()
        assert recurried(1)(2)(3) == 6

    def test_wraps_metadata(self) -> None:
        assert curry(add).__name__ == "add"
        assert fmap.__name__ == "fmap"
        assert "Curried(add" in repr(curry(add)(1))


class TestLift:
    def test_lift_into_each_kind(self) -> None:
        assert lift(Identity, 1) == Identity(1)
        assert lift(Sequence, 1) == Sequence([1])
        deferred = lift(Deferred, 1)
        assert deferred.done
        assert asyncio.run(deferred.result()) == 1

    def test_lift_is_curried(self) -> None:
        to_sequence = lift(Sequence)
        assert Sequence([1, 2]).flat_map(to_sequence) == Sequence([1, 2])

    def test_kind_without_unit(self) -> None:
        with pytest.raises(CapabilityError) as exc_info:
            lift(int, 1)
        assert "int does not implement Pointed" in str(exc_info.value)


class TestFmap:
    def test_free_function(self) -> None:
        assert fmap(inc, Identity(1)) == Identity(2)

    def test_reusable_mapper_over_any_container(self) -> None:
        double_all = fmap(double)
        assert double_all(Identity(4)) == Identity(8)
        assert double_all(Sequence([1, 2])) == Sequence([2, 4])
        assert asyncio.run(double_all(Deferred.resolved(5)).result()) == 10

    def test_requires_mappable(self) -> None:
        with pytest.raises(CapabilityError):
            fmap(inc, [1, 2])

    def test_caller_errors_propagate(self) -> None:
        def explode(_):
            raise ZeroDivisionError

        with pytest.raises(ZeroDivisionError):
            fmap(explode, Sequence([1]))


class TestFlatMap:
    def test_free_function(self) -> None:
        repeat = flat_map(lambda n: Sequence([n] * n))
        assert repeat(Sequence([1, 2, 3])) == Sequence([1, 2, 2, 3, 3, 3])

    def test_requires_flat_mappable(self) -> None:
        with pytest.raises(CapabilityError):
            flat_map(lambda n: Sequence([n]), (1, 2))

    def test_join(self) -> None:
        assert join(Identity(Identity(1))) == Identity(1)
        assert join(Sequence([Sequence([1]), Sequence([2, 3])])) == Sequence([1, 2, 3])


def test_identity() -> None:
    marker = object()
    assert identity(marker) is marker


def test_compose_runs_right_to_left() -> None:
    assert compose(inc, double)(5) == 11
    assert compose()(5) == 5


def test_pipe_runs_left_to_right() -> None:
    assert pipe(inc, double)(5) == 12
    assert pipe()("x") == "x"


def test_tap_records_values() -> None:
    trace = Trace()
    observed = pipe(inc, tap("after inc", trace), double)

    assert observed(1) == 4
    events = trace.find("tap")
    assert len(events) == 1
    assert events[0].info == {"label": "after inc", "value": 2}


def test_tap_without_trace_is_pass_through() -> None:
    assert fmap(tap("seen"), Sequence([1, 2])) == Sequence([1, 2])
