"""
tests.test_guard

Unit tests for the resource access guard (no HTTP, no DB).
"""

from __future__ import annotations

import pytest
from helpers import FakeMediaValidator

from noroff_api.auth.models import VENUE_MANAGER, Principal
from noroff_api.guard import Action, Deny, DenyReason, Grant, Resource, ResourceAccessGuard
from noroff_api.guard.policy import BOOKING, VENUE

ALICE = Principal(identity="alice", email="alice@stud.noroff.no")
ALICE_MANAGER = Principal(
    identity="alice", email="alice@stud.noroff.no", role_flags=frozenset({VENUE_MANAGER})
)
BOB_MANAGER = Principal(
    identity="bob", email="bob@stud.noroff.no", role_flags=frozenset({VENUE_MANAGER})
)


def venue_guard(validator: FakeMediaValidator | None = None) -> ResourceAccessGuard:
    return ResourceAccessGuard(policy=VENUE, validator=validator or FakeMediaValidator())


@pytest.mark.asyncio
@pytest.mark.parametrize("action", [Action.update, Action.delete])
@pytest.mark.parametrize(
    ("identity", "owner"),
    [("bob", "alice"), ("alice", "alicia"), ("Alice2", "alice"), ("", "alice")],
)
async def test_non_owner_is_denied_for_mutations(action: Action, identity: str, owner: str) -> None:
    principal = Principal(identity=identity, email="x@stud.noroff.no", role_flags=frozenset({VENUE_MANAGER}))
    decision = await venue_guard().authorize(action, principal, Resource(owner=owner))
    assert isinstance(decision, Deny)
    assert decision.reason is DenyReason.not_owner


@pytest.mark.asyncio
@pytest.mark.parametrize("identity", ["alice", "ALICE", "Alice"])
async def test_ownership_compare_is_case_insensitive(identity: str) -> None:
    principal = Principal(identity=identity, email="a@stud.noroff.no", role_flags=frozenset({VENUE_MANAGER}))
    decision = await venue_guard().authorize(Action.update, principal, Resource(owner="aLiCe"))
    assert decision == Grant(frozenset())


@pytest.mark.asyncio
async def test_ownership_is_checked_before_role() -> None:
    # Neither owner nor manager: the ownership failure wins.
    bob = Principal(identity="bob", email="bob@stud.noroff.no")
    decision = await venue_guard().authorize(Action.update, bob, Resource(owner="alice"))
    assert isinstance(decision, Deny)
    assert decision.reason is DenyReason.not_owner


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("action", "resource"),
    [
        (Action.create, None),
        (Action.update, Resource(owner="alice")),
        (Action.delete, Resource(owner="alice")),
    ],
)
async def test_owner_without_role_flag_is_denied(action: Action, resource: Resource | None) -> None:
    decision = await venue_guard().authorize(action, ALICE, resource)
    assert isinstance(decision, Deny)
    assert decision.reason is DenyReason.missing_role
    assert decision.message == "You are not a venue manager"


@pytest.mark.asyncio
async def test_role_flag_not_required_for_unguarded_kinds() -> None:
    guard = ResourceAccessGuard(policy=BOOKING, validator=FakeMediaValidator())
    decision = await guard.authorize(Action.update, ALICE, Resource(owner="alice"))
    assert decision == Grant(frozenset())


@pytest.mark.asyncio
async def test_end_to_end_role_example() -> None:
    guard = venue_guard()
    venue = Resource(owner="alice")

    denied = await guard.authorize(Action.update, ALICE, venue)
    assert isinstance(denied, Deny)
    assert denied.reason is DenyReason.missing_role

    granted = await guard.authorize(Action.update, ALICE_MANAGER, venue)
    assert granted == Grant(frozenset())


@pytest.mark.asyncio
@pytest.mark.parametrize("bad_index", [0, 1, 3])
async def test_media_validation_short_circuits(bad_index: int) -> None:
    urls = [f"https://img.example/{i}.png" for i in range(5)]
    validator = FakeMediaValidator(bad={urls[bad_index]})

    decision = await venue_guard(validator).authorize(Action.create, ALICE_MANAGER, None, {}, urls)

    assert isinstance(decision, Deny)
    assert decision.reason is DenyReason.invalid_media
    assert decision.url == urls[bad_index]
    assert decision.cause == "Image is not accessible"
    assert validator.calls == urls[: bad_index + 1]


@pytest.mark.asyncio
async def test_media_only_validated_for_create_and_update() -> None:
    validator = FakeMediaValidator()
    guard = venue_guard(validator)

    await guard.authorize(Action.delete, ALICE_MANAGER, Resource(owner="alice"), {}, ["https://img.example/a.png"])
    await guard.authorize(Action.read, None, None, {}, ["https://img.example/b.png"])
    assert validator.calls == []

    await guard.authorize(Action.update, ALICE_MANAGER, Resource(owner="alice"), {}, ["https://img.example/c.png"])
    assert validator.calls == ["https://img.example/c.png"]


@pytest.mark.asyncio
async def test_media_not_validated_when_authorization_fails() -> None:
    validator = FakeMediaValidator()
    decision = await venue_guard(validator).authorize(
        Action.update, BOB_MANAGER, Resource(owner="alice"), {}, ["https://img.example/a.png"]
    )
    assert isinstance(decision, Deny)
    assert validator.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("include", "expected"),
    [
        ({}, set()),
        ({"owner": True}, {"owner"}),
        ({"owner": True, "bookings": False}, {"owner"}),
        ({"owner": True, "bookings": True}, {"owner", "bookings"}),
        ({"followers": True, "venue": True, "owner": False}, set()),
        ({"Owner": True, "bookings": True}, {"bookings"}),
    ],
)
async def test_inclusions_are_known_relations_set_true(
    include: dict[str, bool], expected: set[str]
) -> None:
    decision = await venue_guard().authorize(Action.read, None, include=include)
    assert decision == Grant(frozenset(expected))


@pytest.mark.asyncio
@pytest.mark.parametrize(("limit", "granted"), [(1, True), (100, True), (101, False), (150, False)])
async def test_limit_ceiling(limit: int, granted: bool) -> None:
    decision = await venue_guard().authorize(Action.read, None, limit=limit)
    if granted:
        assert isinstance(decision, Grant)
    else:
        assert isinstance(decision, Deny)
        assert decision.reason is DenyReason.limit_exceeded
        assert decision.message == "Limit cannot be greater than 100"


@pytest.mark.asyncio
async def test_anonymous_access() -> None:
    guard = venue_guard()
    assert isinstance(await guard.authorize(Action.read, None), Grant)

    for action in (Action.create, Action.update, Action.delete):
        decision = await guard.authorize(action, None, Resource(owner="alice"))
        assert isinstance(decision, Deny)
        assert decision.reason is DenyReason.unauthenticated

    bookings = ResourceAccessGuard(policy=BOOKING, validator=FakeMediaValidator())
    decision = await bookings.authorize(Action.read, None)
    assert isinstance(decision, Deny)
    assert decision.reason is DenyReason.unauthenticated


@pytest.mark.asyncio
async def test_read_never_requires_ownership() -> None:
    decision = await venue_guard().authorize(Action.read, BOB_MANAGER, Resource(owner="alice"))
    assert isinstance(decision, Grant)


@pytest.mark.asyncio
async def test_mutation_without_resource_is_a_caller_error() -> None:
    with pytest.raises(ValueError):
        await venue_guard().authorize(Action.delete, ALICE_MANAGER, None)


@pytest.mark.asyncio
async def test_identical_inputs_give_identical_decisions() -> None:
    validator = FakeMediaValidator(bad={"https://img.example/bad.png"})
    guard = venue_guard(validator)
    args = (
        Action.update,
        ALICE_MANAGER,
        Resource(owner="alice"),
        {"owner": True, "nope": True},
        ["https://img.example/ok.png", "https://img.example/bad.png"],
    )

    first = await guard.authorize(*args)
    second = await guard.authorize(*args)
    assert first == second
