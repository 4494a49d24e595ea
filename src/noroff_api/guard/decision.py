"""
noroff_api.guard.decision

Guard outcome types.

Responsibilities:
- `Grant` carries the resolved relation inclusions.
- `Deny` carries a stable machine-readable reason code plus context.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class DenyReason(enum.StrEnum):
    # Values are part of the public API (clients branch on them); treat as stable.
    unauthenticated = "UNAUTHENTICATED"
    not_owner = "NOT_OWNER"
    missing_role = "MISSING_ROLE"
    invalid_media = "INVALID_MEDIA"
    limit_exceeded = "LIMIT_EXCEEDED"


@dataclass(frozen=True, slots=True)
class Grant:
    inclusions: frozenset[str] = frozenset()


@dataclass(frozen=True, slots=True)
class Deny:
    reason: DenyReason
    message: str
    # Set for INVALID_MEDIA only.
    url: str | None = None
    cause: str | None = None


Decision = Grant | Deny
