"""Result Values — tagged success/failure returned by every service operation.

Invariants:
    - Ok carries a payload, Err carries exactly one CatalogError
    - Service operations never raise for domain outcomes; they return Err

Design Decisions:
    - Errors as values over exceptions: routes pattern-match and look up their
      status table, so every taxonomy kind has an explicit, tested mapping
    - Frozen dataclasses: usable in `match` with class patterns
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from catalog_api.core.errors import CatalogError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: CatalogError


Result = Ok[T] | Err
