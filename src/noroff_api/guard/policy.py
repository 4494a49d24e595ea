"""
noroff_api.guard.policy

Static per-kind authorization policy and the inputs the guard evaluates.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from noroff_api.auth.models import VENUE_MANAGER

# Ceiling for the `limit` query parameter on list endpoints.
MAX_LIMIT = 100


class Action(enum.StrEnum):
    read = "read"
    create = "create"
    update = "update"
    delete = "delete"


@dataclass(frozen=True, slots=True)
class Resource:
    """
    Snapshot of an existing resource as far as authorization is concerned.
    """

    owner: str
    media: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ResourcePolicy:
    kind: str
    relations: frozenset[str] = frozenset()
    required_role: str | None = None
    role_gated_actions: frozenset[Action] = frozenset()
    anonymous_read: bool = False

    def requires_role(self, action: Action) -> bool:
        return self.required_role is not None and action in self.role_gated_actions


VENUE = ResourcePolicy(
    kind="venue",
    relations=frozenset({"owner", "bookings"}),
    required_role=VENUE_MANAGER,
    role_gated_actions=frozenset({Action.create, Action.update, Action.delete}),
    anonymous_read=True,
)
BOOKING = ResourcePolicy(kind="booking", relations=frozenset({"customer", "venue"}))
PROFILE = ResourcePolicy(
    kind="profile",
    relations=frozenset({"venues", "bookings", "followers", "following"}),
)
PRODUCT = ResourcePolicy(kind="product", anonymous_read=True)
CAT_FACT = ResourcePolicy(kind="cat_fact", anonymous_read=True)
OLD_GAME = ResourcePolicy(kind="old_game", anonymous_read=True)
BOOK = ResourcePolicy(kind="book", anonymous_read=True)
