"""Signing backend base class: the narrow sign/verify contract the resolver consumes."""

from __future__ import annotations

import abc
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, ClassVar

from simple_jwt.config import TokenAlgorithm
from simple_jwt.core.secret import SigningKey


class SigningBackend(abc.ABC):
    """Abstract base for all signing backends.

    Subclasses must implement:
        sign()             - serialize and sign a claim set into a compact token
        verify_and_parse() - check signature, issuer and validity window, then
                             return the claim set

    Verification failures must be raised as SignatureInvalidError,
    TokenExpiredError or TokenMalformedError.
    """

    ALGORITHMS: ClassVar[frozenset[TokenAlgorithm]] = frozenset()

    def supports(self, algorithm: TokenAlgorithm) -> bool:
        return algorithm in self.ALGORITHMS

    @abc.abstractmethod
    def sign(
        self,
        claims: Mapping[str, Any],
        algorithm: TokenAlgorithm,
        key: SigningKey,
    ) -> str:
        """Sign ``claims`` and return the compact token string."""
        ...

    @abc.abstractmethod
    def verify_and_parse(
        self,
        token: str,
        algorithm: TokenAlgorithm,
        key: SigningKey,
        *,
        issuer: str,
        leeway: timedelta = timedelta(0),
    ) -> dict[str, Any]:
        """Verify ``token`` and return its claim set.

        Raises:
            SignatureInvalidError: Signature, algorithm or issuer mismatch.
            TokenExpiredError: Outside the nbf/exp window.
            TokenMalformedError: Undecodable or missing registered claims.
        """
        ...
