"""
Permission check composed from asynchronous lookups.

This example shows:
1. compose_m over Deferred steps (rightmost step runs first)
2. An absent lookup short-circuiting the rest of the pipeline
3. Trace enabled on a pipeline
4. Certifying a container with the law verifier before composing it
"""

import asyncio
from dataclasses import dataclass

from monadkit import Deferred, LawVerifier, Sequence, Trace, compose_m, verify_laws


@dataclass(frozen=True)
class User:
    name: str
    role: str


USERS = {3: User(name="Ada", role="Author"), 4: User(name="Bob", role="Reader")}


def get_user_by_id(user_id: int) -> Deferred[User]:
    if user_id not in USERS:
        return Deferred.absent(f"No user with id {user_id}")

    async def fetch() -> User:
        await asyncio.sleep(0.01)
        return USERS[user_id]

    return Deferred(fetch)


def has_permission(user: User) -> Deferred[bool]:
    async def check() -> bool:
        await asyncio.sleep(0.01)
        return user.role == "Author"

    return Deferred(check)


# =============================================================================
# Example 1 and 2: composed lookups
# =============================================================================
async def example_permissions() -> None:
    is_author = compose_m(has_permission, get_user_by_id)

    print("\n--- Example 1/2: Permission pipeline ---")
    for user_id in (3, 4, 7):
        outcome = await is_author(user_id).settle()
        print(f"  user {user_id}: {outcome.kind} {outcome.value if outcome.ok else outcome.reason}")


# =============================================================================
# Example 3: trace
# =============================================================================
async def example_trace() -> None:
    trace = Trace()
    is_author = compose_m(has_permission, get_user_by_id, trace=trace)

    result = await is_author(3)

    print("\n--- Example 3: Trace enabled ---")
    print(f"  Result: {result}")
    print(f"  Events recorded: {len(trace)}")
    for event in trace.get_events():
        print(f"    - {event.action}: {event.info}")


# =============================================================================
# Example 4: law verification
# =============================================================================
async def example_laws() -> None:
    print("\n--- Example 4: Law verification ---")

    report = verify_laws(Sequence, 2, lambda x: x + 1, lambda x: x * 2, kf=lambda n: Sequence([n] * n))
    print(f"  {report.container}: {'passed' if report.passed else report.failures}")

    report = await LawVerifier(observe=Deferred.settle).averify(Deferred, 2, lambda x: x + 1, lambda x: x * 2)
    print(f"  {report.container}: {'passed' if report.passed else report.failures}")


async def main() -> None:
    await example_permissions()
    await example_trace()
    await example_laws()


if __name__ == "__main__":
    asyncio.run(main())
