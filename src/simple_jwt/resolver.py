"""TokenResolver: create, resolve, extract and renew signed tokens."""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any, TypeVar

import jwt

from simple_jwt.backends import SigningBackend, backend_for
from simple_jwt.config import (
    DEFAULT_RENEW_EXPIRE,
    HMAC_RECOMMENDED_KEY_BYTES,
    ResolverIdentity,
    TokenAlgorithm,
)
from simple_jwt.core.claims import (
    AUDIENCE,
    EXPIRES_AT,
    ISSUED_AT,
    ISSUER,
    NOT_BEFORE,
    SUBJECT,
    TOKEN_ID,
    is_reserved,
    strip_reserved,
)
from simple_jwt.core.ids import IdSource, as_id_source
from simple_jwt.core.keys import load_key_pair
from simple_jwt.core.payload import marshal, unmarshal
from simple_jwt.core.secret import create_secret, validate_secret
from simple_jwt.errors import TokenMalformedError

logger = logging.getLogger("simple_jwt.resolver")

T = TypeVar("T")


class TokenResolver:
    """Issues and verifies signed tokens for a single issuer.

    The algorithm, issuer and signing key are bound at construction and never
    change afterwards. Every call is independent, so one instance can be
    shared freely between threads.

    Args:
        issuer: Value of the ``iss`` claim in every token this resolver creates.
        secret: HMAC secret, at least 32 characters. When omitted for an HMAC
            algorithm a random secret is generated, so tokens will not verify
            after the process restarts. HS384 / HS512 secrets shorter than
            48 / 64 bytes are accepted but logged once as a warning.
        algorithm: Signing algorithm (default HS256).
        id_source: Object with ``next_id()`` or a zero-argument callable
            producing ``jti`` values (default random UUID4).
        private_key: PEM private key for RS* / ES* algorithms.
        public_key: PEM public key for RS* / ES* algorithms (derived from the
            private key when omitted).
        backend: Signing backend (default chosen from the algorithm family).
        leeway: Clock skew tolerated when checking ``exp`` / ``nbf``
            (default 0).

    Raises:
        WeakSecretError: If the HMAC secret fails the strength policy.
        ValueError: If the issuer is blank, the algorithm unknown, asymmetric
            keys are missing or unsuitable, or the backend cannot handle the
            algorithm.
    """

    def __init__(
        self,
        issuer: str,
        *,
        secret: str | bytes | None = None,
        algorithm: TokenAlgorithm | str = TokenAlgorithm.HS256,
        id_source: IdSource | Callable[[], Any] | None = None,
        private_key: str | bytes | None = None,
        public_key: str | bytes | None = None,
        backend: SigningBackend | None = None,
        leeway: timedelta | float = 0,
    ) -> None:
        algorithm = TokenAlgorithm.parse(algorithm)

        if algorithm.is_hmac:
            if secret is None:
                logger.warning(
                    "No secret supplied for issuer %r; generated a random one. "
                    "Tokens will not verify after a restart.",
                    issuer,
                )
                secret = create_secret()
            key = validate_secret(secret)
            recommended = HMAC_RECOMMENDED_KEY_BYTES[algorithm]
            if len(key.signing) < recommended:
                logger.warning(
                    "%s secret for issuer %r is %d bytes, below the recommended %d; "
                    "PyJWT will warn on every sign and verify.",
                    algorithm.value, issuer, len(key.signing), recommended,
                )
        else:
            if private_key is None:
                raise ValueError(f"{algorithm} requires a private_key")
            key = load_key_pair(algorithm, private_key, public_key)

        backend = backend or backend_for(algorithm)
        if not backend.supports(algorithm):
            raise ValueError(f"{type(backend).__name__} does not support {algorithm}")

        self._identity = ResolverIdentity(
            algorithm=algorithm,
            issuer=issuer,
            key=key,
            leeway=_as_timedelta(leeway, "leeway"),
        )
        self._id_source = as_id_source(id_source)
        self._backend = backend

    def __repr__(self) -> str:
        return f"TokenResolver(issuer={self.issuer!r}, algorithm={self.algorithm.value!r})"

    @property
    def issuer(self) -> str:
        return self._identity.issuer

    @property
    def algorithm(self) -> TokenAlgorithm:
        return self._identity.algorithm

    # ------ Issuing ------

    def create_token(
        self,
        expire_after: timedelta | float,
        audience: str,
        subject: str,
        payload: Any = None,
    ) -> str:
        """Create a signed token.

        Args:
            expire_after: Lifetime of the token (timedelta or seconds),
                rounded up to whole seconds. Zero produces a token that is
                already expired.
            audience: Value of the ``aud`` claim.
            subject: Value of the ``sub`` claim.
            payload: Extra claims as a mapping, a TokenPayload, a dataclass or
                a pydantic model. Registered claim names in the payload are
                overridden by the values this resolver assigns.

        Returns:
            Compact signed token string.

        Raises:
            TypeError: If the payload type is not supported, or ``audience``
                or ``subject`` is not a string.
            ValueError: If ``expire_after`` is negative.
        """
        lifetime = _as_timedelta(expire_after, "expire_after")
        for name, value in (("audience", audience), ("subject", subject)):
            if not isinstance(value, str):
                raise TypeError(f"{name} must be a string, not {type(value).__name__}")
        extra = marshal(payload)

        # Timestamps are whole seconds. Issue time is rounded down and the
        # lifetime up, so any positive lifetime ends strictly after now.
        issued_at = math.floor(datetime.now(UTC).timestamp())
        claims: dict[str, Any] = {
            ISSUER: self._identity.issuer,
            SUBJECT: subject,
            AUDIENCE: audience,
            EXPIRES_AT: issued_at + math.ceil(lifetime.total_seconds()),
            NOT_BEFORE: issued_at,
            ISSUED_AT: issued_at,
            TOKEN_ID: str(self._id_source.next_id()),
        }

        overridden = [name for name in extra if is_reserved(name)]
        if overridden:
            logger.debug("Ignoring registered claims supplied in payload: %s", overridden)
        claims.update(strip_reserved(extra))

        token = self._backend.sign(claims, self._identity.algorithm, self._identity.key)
        logger.debug("Issued token jti=%s sub=%s aud=%s", claims[TOKEN_ID], subject, audience)
        return token

    # ------ Verification ------

    def resolve(self, token: str) -> dict[str, Any]:
        """Verify a token and return its claim set.

        Raises:
            SignatureInvalidError: Signature, algorithm or issuer mismatch.
            TokenExpiredError: The token is outside its validity window.
            TokenMalformedError: The token cannot be decoded.
        """
        if not isinstance(token, str) or not token:
            raise TokenMalformedError("Token must be a non-empty string")
        return self._backend.verify_and_parse(
            token,
            self._identity.algorithm,
            self._identity.key,
            issuer=self._identity.issuer,
            leeway=self._identity.leeway,
        )

    def extract(self, token: str, target_type: type[T]) -> T:
        """Verify a token and rebuild its payload as ``target_type``.

        Registered claims and fields excluded from the payload are never
        restored; excluded fields keep their default value.

        Raises:
            TokenVerificationError: If the token does not verify.
            ExtractionError: If ``target_type`` cannot be constructed.
        """
        return unmarshal(self.resolve(token), target_type)

    def renew(
        self,
        old_token: str,
        expire_after: timedelta | float | None = None,
        payload: Any = None,
    ) -> str:
        """Issue a fresh token for the subject and audience of ``old_token``.

        The old token must still verify, so an expired token cannot be renewed.
        The new token always gets a new ``jti`` and new timestamps.

        Args:
            old_token: Token being renewed.
            expire_after: Lifetime of the new token (default 30 minutes).
            payload: New payload. When omitted the old token's non-registered
                claims are carried over.

        Raises:
            TokenVerificationError: If ``old_token`` does not verify.
        """
        claims = self.resolve(old_token)
        audience = claims[AUDIENCE]
        subject = claims[SUBJECT]
        if payload is None:
            payload = strip_reserved(claims)

        logger.debug("Renewing token jti=%s", claims.get(TOKEN_ID))
        return self.create_token(
            DEFAULT_RENEW_EXPIRE if expire_after is None else expire_after,
            audience,
            subject,
            payload,
        )

    # ------ Diagnostics ------

    @staticmethod
    def get_unverified_header(token: str) -> dict[str, Any]:
        """Read the token header without verifying anything.

        Raises:
            TokenMalformedError: If the header cannot be decoded.
        """
        try:
            return jwt.get_unverified_header(token)
        except jwt.InvalidTokenError as e:
            raise TokenMalformedError(f"Malformed token: {e}") from e


def _as_timedelta(value: timedelta | float, name: str) -> timedelta:
    if isinstance(value, bool):
        raise TypeError(f"{name} must be a timedelta or a number of seconds")
    if isinstance(value, (int, float)):
        value = timedelta(seconds=value)
    if not isinstance(value, timedelta):
        raise TypeError(f"{name} must be a timedelta or a number of seconds")
    if value < timedelta(0):
        raise ValueError(f"{name} must not be negative")
    return value
