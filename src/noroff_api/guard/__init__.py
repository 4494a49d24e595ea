"""
noroff_api.guard

Resource access guard.

Responsibilities:
- Decide whether a principal may perform an action on a resource kind.
- Validate user-supplied media URLs through an injected validator.
- Resolve requested relation inclusions against the kind's known relations.
"""

from noroff_api.guard.core import ResourceAccessGuard
from noroff_api.guard.decision import Decision, Deny, DenyReason, Grant
from noroff_api.guard.policy import Action, Resource, ResourcePolicy

__all__ = [
    "Action",
    "Decision",
    "Deny",
    "DenyReason",
    "Grant",
    "Resource",
    "ResourceAccessGuard",
    "ResourcePolicy",
]


# --- Module Notes -----------------------------------------------------------
# Nothing in this package imports FastAPI or SQLAlchemy; the host API maps
# decisions to HTTP responses in `api.errors.enforce`.
