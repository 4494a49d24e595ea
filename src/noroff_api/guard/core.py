"""
noroff_api.guard.core

The resource access guard.

Responsibilities:
- Evaluate limit, authentication, ownership, role, and media checks in one
  canonical order and return a `Decision`.
- Resolve relation inclusion flags against the policy's known relations.

Check order:
1. `limit` ceiling (list endpoints).
2. Principal presence (anonymous reads only where the policy allows them).
3. Ownership for update/delete (case-insensitive name compare).
4. Role flag for the policy's role-gated actions.
5. Media URLs for create/update, stopping at the first invalid URL.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from noroff_api.auth.models import VENUE_MANAGER, Principal, identity_key
from noroff_api.guard.decision import Decision, Deny, DenyReason, Grant
from noroff_api.guard.media import MediaValidator
from noroff_api.guard.policy import MAX_LIMIT, Action, Resource, ResourcePolicy
from noroff_api.result import Failure

_OWNED_ACTIONS = frozenset({Action.update, Action.delete})
_MEDIA_ACTIONS = frozenset({Action.create, Action.update})


class ResourceAccessGuard:
    """
    Stateless apart from its two fixed collaborators; safe to share across requests.
    """

    def __init__(self, *, policy: ResourcePolicy, validator: MediaValidator) -> None:
        self._policy = policy
        self._validator = validator

    @property
    def policy(self) -> ResourcePolicy:
        return self._policy

    async def authorize(
        self,
        action: Action,
        principal: Principal | None,
        resource: Resource | None = None,
        include: Mapping[str, bool] | None = None,
        media: Sequence[str] = (),
        *,
        limit: int | None = None,
    ) -> Decision:
        if limit is not None and limit > MAX_LIMIT:
            return Deny(DenyReason.limit_exceeded, f"Limit cannot be greater than {MAX_LIMIT}")

        if principal is None:
            if action is not Action.read or not self._policy.anonymous_read:
                return Deny(DenyReason.unauthenticated, "Authentication is required")
        else:
            if action in _OWNED_ACTIONS:
                if resource is None:
                    # Callers look the resource up (and answer 404) before asking the guard.
                    raise ValueError(f"{action} requires an existing {self._policy.kind}")
                if identity_key(principal.identity) != identity_key(resource.owner):
                    return Deny(
                        DenyReason.not_owner,
                        f"You are not the owner of this {self._policy.kind}",
                    )
            if self._policy.requires_role(action) and (
                self._policy.required_role not in principal.role_flags
            ):
                return Deny(DenyReason.missing_role, _role_message(self._policy.required_role))

        if action in _MEDIA_ACTIONS and media:
            denied = await self.check_media(media)
            if denied is not None:
                return denied

        return Grant(self.resolve_inclusions(include or {}))

    async def check_media(self, urls: Iterable[str]) -> Deny | None:
        for url in urls:
            outcome = await self._validator.validate(url)
            if isinstance(outcome, Failure):
                return Deny(
                    DenyReason.invalid_media,
                    f"Invalid media URL: {url}",
                    url=url,
                    cause=outcome.error,
                )
        return None

    def resolve_inclusions(self, include: Mapping[str, bool]) -> frozenset[str]:
        return frozenset(
            name for name, wanted in include.items() if wanted and name in self._policy.relations
        )


def _role_message(role: str | None) -> str:
    if role == VENUE_MANAGER:
        return "You are not a venue manager"
    return f"The {role} role is required"


# --- Module Notes -----------------------------------------------------------
# Reads never check ownership. Ownership is checked before the role flag on every
# mutating action so a non-owner always sees NOT_OWNER regardless of their roles.
