"""Route Status Tables — per-route ErrorKind -> HTTP status mapping.

Invariants:
    - Every table maps EVERY ErrorKind (checked at import and by tests)
    - Documented failure codes per route: list 400, detail 400, create 400,
      delete 409, publish 404
    - Boundary validation (Pydantic) is handled globally and is always 400

Design Decisions:
    - Explicit tables over one global mapping: each route's contract with callers
      is fixed independently of the others
    - Read routes keep 400 for store failures too: their documented contract
      has a single failure code
"""

from types import MappingProxyType
from typing import Mapping

from fastapi import status

from catalog_api.core.errors import ErrorKind

StatusTable = Mapping[ErrorKind, int]


def _table(**codes: int) -> StatusTable:
    table = {ErrorKind[name.upper()]: code for name, code in codes.items()}
    missing = set(ErrorKind) - set(table)
    if missing:
        raise ValueError(f"Status table missing kinds: {sorted(k.value for k in missing)}")
    return MappingProxyType(table)


LIST_STATUS = _table(
    validation=status.HTTP_400_BAD_REQUEST,
    authentication=status.HTTP_400_BAD_REQUEST,
    authorization=status.HTTP_400_BAD_REQUEST,
    not_found=status.HTTP_400_BAD_REQUEST,
    conflict=status.HTTP_400_BAD_REQUEST,
    store=status.HTTP_400_BAD_REQUEST,
)

DETAIL_STATUS = _table(
    validation=status.HTTP_400_BAD_REQUEST,
    authentication=status.HTTP_400_BAD_REQUEST,
    authorization=status.HTTP_400_BAD_REQUEST,
    not_found=status.HTTP_400_BAD_REQUEST,
    conflict=status.HTTP_400_BAD_REQUEST,
    store=status.HTTP_400_BAD_REQUEST,
)

CREATE_STATUS = _table(
    validation=status.HTTP_400_BAD_REQUEST,
    authentication=status.HTTP_400_BAD_REQUEST,
    authorization=status.HTTP_400_BAD_REQUEST,
    not_found=status.HTTP_400_BAD_REQUEST,
    conflict=status.HTTP_400_BAD_REQUEST,
    store=status.HTTP_503_SERVICE_UNAVAILABLE,
)

DELETE_STATUS = _table(
    validation=status.HTTP_400_BAD_REQUEST,
    authentication=status.HTTP_401_UNAUTHORIZED,
    authorization=status.HTTP_403_FORBIDDEN,
    not_found=status.HTTP_409_CONFLICT,
    conflict=status.HTTP_409_CONFLICT,
    store=status.HTTP_503_SERVICE_UNAVAILABLE,
)

PUBLISH_STATUS = _table(
    validation=status.HTTP_400_BAD_REQUEST,
    authentication=status.HTTP_401_UNAUTHORIZED,
    authorization=status.HTTP_403_FORBIDDEN,
    not_found=status.HTTP_404_NOT_FOUND,
    conflict=status.HTTP_409_CONFLICT,
    store=status.HTTP_503_SERVICE_UNAVAILABLE,
)
