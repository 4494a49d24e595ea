"""
noroff_api.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Principal`) injected into endpoints
  and evaluated by the resource access guard.
"""

from __future__ import annotations

from dataclasses import dataclass, field

VENUE_MANAGER = "venueManager"


def identity_key(name: str) -> str:
    """Case-insensitive profile name key shared by the profile store and the guard."""

    return name.casefold()


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity.

    `identity` is the profile name; role flags are resolved from the profile
    store when the request is authenticated, never from token claims.
    """

    identity: str
    email: str
    role_flags: frozenset[str] = frozenset()
    credential: str | None = field(default=None, repr=False, compare=False)

    @property
    def is_venue_manager(self) -> bool:
        return VENUE_MANAGER in self.role_flags


# --- Module Notes -----------------------------------------------------------
# `credential` carries the API key presented with the request (if any); it is
# opaque to the guard and excluded from equality so decisions stay comparable.
