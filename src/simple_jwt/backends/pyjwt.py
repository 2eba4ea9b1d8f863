"""PyJWT-backed signing backends for HMAC and asymmetric algorithms."""

import json
import logging
from collections.abc import Mapping
from datetime import timedelta
from typing import Any

import jwt
from pydantic_core import to_jsonable_python

from simple_jwt.backends.base import SigningBackend
from simple_jwt.config import TokenAlgorithm
from simple_jwt.core.claims import RESERVED_CLAIMS
from simple_jwt.core.secret import SigningKey
from simple_jwt.errors import (
    SignatureInvalidError,
    TokenExpiredError,
    TokenMalformedError,
)

logger = logging.getLogger("simple_jwt.backends")


class ClaimEncoder(json.JSONEncoder):
    """JSON encoder for claim values JSON has no native form for.

    UUIDs, datetimes, decimals, enums and nested dataclasses / pydantic models
    are encoded the way pydantic serializes them in JSON mode.
    """

    def default(self, o: Any) -> Any:
        try:
            return to_jsonable_python(o)
        except Exception:
            return super().default(o)


class PyJWTBackend(SigningBackend):
    """Shared PyJWT implementation; subclasses restrict the algorithm family."""

    def sign(
        self,
        claims: Mapping[str, Any],
        algorithm: TokenAlgorithm,
        key: SigningKey,
    ) -> str:
        self._check_algorithm(algorithm)
        return jwt.encode(
            dict(claims),
            key.signing,
            algorithm=algorithm.value,
            headers={"typ": "JWT"},
            json_encoder=ClaimEncoder,
        )

    def verify_and_parse(
        self,
        token: str,
        algorithm: TokenAlgorithm,
        key: SigningKey,
        *,
        issuer: str,
        leeway: timedelta = timedelta(0),
    ) -> dict[str, Any]:
        self._check_algorithm(algorithm)
        try:
            return jwt.decode(
                token,
                key.verifying,
                algorithms=[algorithm.value],
                issuer=issuer,
                leeway=leeway,
                options={"require": list(RESERVED_CLAIMS), "verify_aud": False},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except jwt.ImmatureSignatureError as e:
            raise TokenExpiredError("Token is not yet valid", "token_not_yet_valid") from e
        except jwt.InvalidSignatureError as e:
            raise SignatureInvalidError("Token signature does not match") from e
        except jwt.InvalidAlgorithmError as e:
            raise SignatureInvalidError(f"Token is not signed with {algorithm}") from e
        except jwt.InvalidIssuerError as e:
            raise SignatureInvalidError("Token was issued by another issuer") from e
        except jwt.DecodeError as e:
            raise TokenMalformedError(f"Malformed token: {e}") from e
        except jwt.InvalidTokenError as e:
            raise TokenMalformedError(f"Invalid token: {e}") from e

    def _check_algorithm(self, algorithm: TokenAlgorithm) -> None:
        if not self.supports(algorithm):
            raise ValueError(f"{type(self).__name__} does not support {algorithm}")


class HMACBackend(PyJWTBackend):
    """Shared-secret signing (HS256 / HS384 / HS512).

    Secrets only need MIN_SECRET_LENGTH characters, but PyJWT emits a
    warning on every sign and verify when the key is shorter than the hash
    output (48 bytes for HS384, 64 for HS512). TokenResolver logs this once
    at construction; use a longer secret to silence it.
    """

    ALGORITHMS = frozenset(a for a in TokenAlgorithm if a.is_hmac)


class AsymmetricBackend(PyJWTBackend):
    """Private-key signing with public-key verification (RS* / ES*)."""

    ALGORITHMS = frozenset(a for a in TokenAlgorithm if a.is_rsa or a.is_ec)


def backend_for(algorithm: TokenAlgorithm) -> SigningBackend:
    """Pick the default backend for an algorithm family."""
    if algorithm.is_hmac:
        return HMACBackend()
    return AsymmetricBackend()
