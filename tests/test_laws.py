import pytest

from monadkit import Deferred, Identity, LawVerifier, Sequence, Trace, VerifierConfig, verify_laws
from monadkit.combinators.types import FUNCTOR_LAWS, MONAD_LAWS
from monadkit.kernel.errors import LawViolationError
from fakes import CountingBox, Maybe, RaisingBox, double, inc

ALL_LAWS = list(FUNCTOR_LAWS + MONAD_LAWS)


def test_identity_satisfies_all_laws() -> None:
    report = verify_laws(Identity, 3, inc, double)

    assert report.passed
    assert report.container == "Identity"
    assert [o.law for o in report.outcomes] == ALL_LAWS


def test_sequence_satisfies_all_laws() -> None:
    report = verify_laws(
        Sequence,
        2,
        inc,
        double,
        container=Sequence([1, 2, 3]),
        kf=lambda n: Sequence([n] * n),
        kg=lambda n: Sequence([n, -n]),
    )

    assert report.passed, report.failures


def test_external_container_satisfies_all_laws() -> None:
    report = verify_laws(Maybe, 4, inc, double, kf=lambda n: Maybe.nothing() if n > 3 else Maybe(n))

    assert report.passed, report.failures


@pytest.mark.asyncio
async def test_deferred_satisfies_all_laws() -> None:
    verifier = LawVerifier(observe=Deferred.settle)

    report = await verifier.averify(Deferred, 3, inc, double)

    assert report.passed, report.failures


@pytest.mark.asyncio
async def test_absent_deferred_satisfies_all_laws() -> None:
    verifier = LawVerifier(observe=Deferred.settle)

    report = await verifier.averify(Deferred, 3, inc, double, container=Deferred.absent("none"))

    assert report.passed, report.failures


def test_sync_verify_rejects_async_observations() -> None:
    verifier = LawVerifier(observe=Deferred.settle)

    report = verifier.verify(Deferred, 3, inc, double)

    assert not report.passed
    assert "use averify" in report["left_identity"].detail


def test_each_law_is_reported_independently() -> None:
    report = verify_laws(CountingBox, 1, inc, double)

    assert not report.passed
    assert [o.law for o in report.failures] == ["functor_identity", "functor_composition"]
    assert report["left_identity"].passed
    assert report["right_identity"].passed
    assert report["associativity"].passed
    assert "maps=1" in report["functor_identity"].detail


def test_verification_is_repeatable() -> None:
    verifier = LawVerifier()

    first = verifier.verify(CountingBox, 1, inc, double)
    second = verifier.verify(CountingBox, 1, inc, double)

    assert first.model_dump() == second.model_dump()


def test_raise_for_failures() -> None:
    report = verify_laws(CountingBox, 1, inc, double)

    with pytest.raises(LawViolationError) as exc_info:
        report.raise_for_failures()
    assert exc_info.value.laws == ["functor_identity", "functor_composition"]
    assert "CountingBox violates 2 law(s)" in str(exc_info.value)

    verify_laws(Identity, 1, inc, double).raise_for_failures()


def test_errors_are_captured_per_law() -> None:
    report = verify_laws(RaisingBox, 1, inc, double)

    assert report["functor_identity"].passed
    assert report["functor_composition"].passed
    for law in MONAD_LAWS:
        assert not report[law].passed
        assert "flat_map is broken" in report[law].detail


def test_errors_propagate_when_not_captured() -> None:
    verifier = LawVerifier(config=VerifierConfig(capture_errors=False))

    with pytest.raises(RuntimeError, match="flat_map is broken"):
        verifier.verify(RaisingBox, 1, inc, double)


def test_config_selects_law_groups() -> None:
    functor_only = LawVerifier(config=VerifierConfig(check_monad=False))
    monad_only = LawVerifier(config=VerifierConfig(check_functor=False))

    assert [o.law for o in functor_only.verify(Identity, 1, inc, double).outcomes] == list(FUNCTOR_LAWS)
    assert [o.law for o in monad_only.verify(Identity, 1, inc, double).outcomes] == list(MONAD_LAWS)


def test_custom_equality() -> None:
    verifier = LawVerifier(equals=lambda a, b: a.value == b.value)

    assert verifier.verify(CountingBox, 1, inc, double).passed


def test_trace_records_each_law() -> None:
    trace = Trace()
    verifier = LawVerifier(trace=trace)

    verifier.verify(CountingBox, 1, inc, double)

    actions = [e.action for e in trace.get_events()]
    assert actions == [f"law.{law}" for law in ALL_LAWS]
    assert trace.find("law.functor_identity")[0].info == {"passed": False}


def test_unknown_law_lookup() -> None:
    report = verify_laws(Identity, 1, inc, double)

    with pytest.raises(KeyError):
        report["commutativity"]
