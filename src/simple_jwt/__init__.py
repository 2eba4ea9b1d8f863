"""Simple JWT: a small facade for issuing, verifying and renewing signed tokens."""

__version__ = "0.1.0"

from simple_jwt.backends import AsymmetricBackend, HMACBackend, SigningBackend
from simple_jwt.config import TokenAlgorithm
from simple_jwt.core.claims import RESERVED_CLAIMS
from simple_jwt.core.ids import IdSource, UUIDSource
from simple_jwt.core.keys import generate_key_pair
from simple_jwt.core.payload import TokenPayload, exclude_from_payload
from simple_jwt.core.secret import SigningKey, create_secret, validate_secret
from simple_jwt.errors import (
    ExtractionError,
    SignatureInvalidError,
    TokenError,
    TokenExpiredError,
    TokenMalformedError,
    TokenVerificationError,
    WeakSecretError,
)
from simple_jwt.resolver import TokenResolver

__all__ = [
    "AsymmetricBackend",
    "ExtractionError",
    "HMACBackend",
    "IdSource",
    "RESERVED_CLAIMS",
    "SignatureInvalidError",
    "SigningBackend",
    "SigningKey",
    "TokenAlgorithm",
    "TokenError",
    "TokenExpiredError",
    "TokenMalformedError",
    "TokenPayload",
    "TokenResolver",
    "TokenVerificationError",
    "UUIDSource",
    "WeakSecretError",
    "create_secret",
    "exclude_from_payload",
    "generate_key_pair",
    "validate_secret",
]
