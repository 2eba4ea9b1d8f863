"""Vulture whitelist: false positives that are public API or used by frameworks."""

# ---------------------------------------------------------------------------
# Public API methods on TokenResolver (used by consumers, not internally)
# ---------------------------------------------------------------------------
from simple_jwt.resolver import TokenResolver

TokenResolver.extract
TokenResolver.renew
TokenResolver.get_unverified_header

from simple_jwt.core.payload import TokenPayload

TokenPayload.from_claims

# ---------------------------------------------------------------------------
# Enum helpers and dataclass fields (read by callers)
# ---------------------------------------------------------------------------
_.is_rsa
_.is_ec
_.verifying
_.default_code

# ---------------------------------------------------------------------------
# json.JSONEncoder hook (called by the json module)
# ---------------------------------------------------------------------------
from simple_jwt.backends.pyjwt import ClaimEncoder

ClaimEncoder.default
