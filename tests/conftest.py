"""Test fixtures for simple-jwt tests.

All tests are offline: secrets and key pairs are generated locally and tokens
for negative cases are crafted with PyJWT directly.
"""

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import jwt
import pytest
from pydantic import BaseModel, Field

from simple_jwt import TokenPayload, TokenResolver, exclude_from_payload, generate_key_pair

SECRET = "x" * 32
ISSUER = "svc-a"


@dataclass
class RolePayload(TokenPayload):
    role: str = ""


@dataclass
class SessionPayload(TokenPayload):
    role: str = ""
    level: int = 0
    tags: list[str] = field(default_factory=list)
    session_cache: str = exclude_from_payload(default="local")


class ProfileModel(BaseModel):
    email: str = ""
    tenant: uuid.UUID | None = None
    joined: datetime | None = None
    scratch: str = Field(default="", exclude=True)


@pytest.fixture
def resolver():
    """HS256 resolver for issuer svc-a."""
    return TokenResolver(ISSUER, secret=SECRET)


@pytest.fixture(scope="session")
def rsa_key_pair():
    """Generate a test RSA key pair."""
    return generate_key_pair("RS256")


@pytest.fixture(scope="session")
def ec_key_pair():
    """Generate a test P-256 key pair."""
    return generate_key_pair("ES256")


def create_test_token(
    secret: str = SECRET,
    *,
    algorithm: str = "HS256",
    issuer: str = ISSUER,
    expires_in: int = 900,
    not_before_in: int = 0,
    drop: tuple[str, ...] = (),
    **claims,
) -> str:
    """Create a test JWT with every registered claim, signed with ``secret``."""
    now = datetime.now(UTC)
    payload = {
        "iss": issuer,
        "sub": "user-42",
        "aud": "app",
        "exp": now + timedelta(seconds=expires_in),
        "nbf": now + timedelta(seconds=not_before_in),
        "iat": now,
        "jti": uuid.uuid4().hex,
    }
    payload.update(claims)
    for name in drop:
        payload.pop(name, None)
    return jwt.encode(payload, secret, algorithm=algorithm)
