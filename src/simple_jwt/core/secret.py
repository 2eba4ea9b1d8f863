"""HMAC secret validation and generation."""

import logging
import secrets
import string
from dataclasses import dataclass, field
from typing import Any

from simple_jwt.config import MIN_SECRET_LENGTH
from simple_jwt.errors import WeakSecretError

logger = logging.getLogger("simple_jwt.secret")


@dataclass(frozen=True, slots=True)
class SigningKey:
    """Key material handed to a signing backend.

    For HMAC algorithms both members are the same secret bytes. For asymmetric
    algorithms ``signing`` is the private key and ``verifying`` the public key.
    """

    signing: Any = field(repr=False)
    verifying: Any = field(repr=False)


def validate_secret(secret: str | bytes | None) -> SigningKey:
    """Check a secret against the strength policy and derive an HMAC key.

    Args:
        secret: Raw secret text or bytes. Text length is counted in
            characters, bytes length in bytes.

    Returns:
        SigningKey whose members are the UTF-8 bytes of the secret.

    Raises:
        WeakSecretError: If the secret is missing, blank or shorter than
            MIN_SECRET_LENGTH.
    """
    if secret is None:
        raise WeakSecretError("A secret is required to sign tokens.")
    if isinstance(secret, str):
        blank = not secret.strip()
        key = secret.encode("utf-8")
    elif isinstance(secret, (bytes, bytearray)):
        blank = not bytes(secret).strip()
        key = bytes(secret)
    else:
        raise TypeError(f"secret must be str or bytes, not {type(secret).__name__}")

    if blank:
        raise WeakSecretError("A secret is required to sign tokens.")

    if len(secret) < MIN_SECRET_LENGTH:
        logger.error(
            "Rejected signing secret of %d characters (minimum %d)",
            len(secret), MIN_SECRET_LENGTH,
        )
        raise WeakSecretError(
            f"The provided secret has {len(secret)} characters which is too weak. "
            f"Use at least {MIN_SECRET_LENGTH}."
        )

    return SigningKey(signing=key, verifying=key)


def create_secret(
    length: int = MIN_SECRET_LENGTH,
    *,
    uppercase: bool = True,
    lowercase: bool = True,
    digits: bool = True,
) -> str:
    """Generate a random secret that passes validate_secret.

    At least one character of every enabled class is included.

    Raises:
        ValueError: If ``length`` is below the policy minimum or every
            character class is disabled.
    """
    if length < MIN_SECRET_LENGTH:
        raise ValueError(f"length must be at least {MIN_SECRET_LENGTH}")

    pools = [
        pool
        for enabled, pool in (
            (uppercase, string.ascii_uppercase),
            (lowercase, string.ascii_lowercase),
            (digits, string.digits),
        )
        if enabled
    ]
    if not pools:
        raise ValueError("At least one character class must be enabled")

    alphabet = "".join(pools)
    chars = [secrets.choice(pool) for pool in pools]
    chars.extend(secrets.choice(alphabet) for _ in range(length - len(chars)))
    # Shuffle so the guaranteed characters are not always at the front.
    secrets.SystemRandom().shuffle(chars)
    return "".join(chars)
