"""
noroff_api.result

Minimal Result type for operations that fail without raising.

Responsibilities:
- `Success` / `Failure` value types returned by collaborators such as the
  media validator, so callers branch on values instead of catching exceptions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True, slots=True)
class Failure(Generic[E]):
    error: E


Result = Success[T] | Failure[E]
