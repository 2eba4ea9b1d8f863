"""Registered claim names managed by the resolver itself."""

from collections.abc import Mapping
from typing import Any

ISSUER = "iss"
SUBJECT = "sub"
AUDIENCE = "aud"
EXPIRES_AT = "exp"
NOT_BEFORE = "nbf"
ISSUED_AT = "iat"
TOKEN_ID = "jti"

# Order matches the order claims are assembled in a new token.
RESERVED_CLAIMS: tuple[str, ...] = (
    ISSUER,
    SUBJECT,
    AUDIENCE,
    EXPIRES_AT,
    NOT_BEFORE,
    ISSUED_AT,
    TOKEN_ID,
)

_RESERVED_SET = frozenset(RESERVED_CLAIMS)


def is_reserved(name: str) -> bool:
    """Return True if ``name`` is one of the registered claim names."""
    return name in _RESERVED_SET


def strip_reserved(claims: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of ``claims`` without any registered claim.

    The input mapping is left untouched and the remaining order is preserved.
    """
    return {name: value for name, value in claims.items() if name not in _RESERVED_SET}
