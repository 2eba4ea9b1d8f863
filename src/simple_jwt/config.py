"""Resolver configuration: algorithms, defaults and the bound resolver identity."""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from simple_jwt.core.secret import SigningKey

MIN_SECRET_LENGTH = 32
DEFAULT_RENEW_EXPIRE = timedelta(minutes=30)


class TokenAlgorithm(StrEnum):
    """Signing algorithms a resolver can be bound to."""

    HS256 = "HS256"
    HS384 = "HS384"
    HS512 = "HS512"
    RS256 = "RS256"
    RS384 = "RS384"
    RS512 = "RS512"
    ES256 = "ES256"
    ES384 = "ES384"
    ES512 = "ES512"

    @property
    def is_hmac(self) -> bool:
        return self.value.startswith("HS")

    @property
    def is_rsa(self) -> bool:
        return self.value.startswith("RS")

    @property
    def is_ec(self) -> bool:
        return self.value.startswith("ES")

    @classmethod
    def parse(cls, value: "TokenAlgorithm | str") -> "TokenAlgorithm":
        """Coerce a name such as ``"hs256"`` to a member.

        Raises:
            ValueError: If the algorithm is not supported.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            supported = ", ".join(member.value for member in cls)
            raise ValueError(
                f"Unsupported algorithm {value!r}. Expected one of: {supported}"
            ) from None


@dataclass(frozen=True, slots=True)
class ResolverIdentity:
    """Internal identity bound by the TokenResolver constructor. Not user-facing."""

    algorithm: TokenAlgorithm
    issuer: str
    key: "SigningKey" = field(repr=False)
    leeway: timedelta = timedelta(0)

    def __post_init__(self) -> None:
        if not isinstance(self.issuer, str) or not self.issuer.strip():
            raise ValueError("An issuer is required to build a token resolver.")
        if self.leeway < timedelta(0):
            raise ValueError("leeway must not be negative")


# Key sizes RFC 7518 recommends per HMAC variant; shorter keys are accepted
# down to MIN_SECRET_LENGTH but PyJWT warns on every sign and verify.
HMAC_RECOMMENDED_KEY_BYTES: dict[TokenAlgorithm, int] = {
    TokenAlgorithm.HS256: 32,
    TokenAlgorithm.HS384: 48,
    TokenAlgorithm.HS512: 64,
}
