"""Typed failures raised by the token resolver and its collaborators."""


class TokenError(Exception):
    """Base token error with a human message and a machine-readable code."""

    default_code = "token_error"

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)


class WeakSecretError(TokenError):
    """Raised when a signing secret fails the minimum-strength policy."""

    default_code = "weak_secret"


class TokenVerificationError(TokenError):
    """Base for failures detected while verifying a token."""

    default_code = "token_invalid"


class SignatureInvalidError(TokenVerificationError):
    """Signature, algorithm or issuer does not match this resolver."""

    default_code = "signature_invalid"


class TokenExpiredError(TokenVerificationError):
    """The token is outside its validity window."""

    default_code = "token_expired"


class TokenMalformedError(TokenVerificationError):
    """The token cannot be decoded or lacks required claims."""

    default_code = "token_malformed"


class ExtractionError(TokenError):
    """Raised when a typed payload cannot be constructed from claims."""

    default_code = "extraction_failed"
