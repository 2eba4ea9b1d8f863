"""RSA / EC key pair generation and loading for asymmetric algorithms."""

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from simple_jwt.config import TokenAlgorithm
from simple_jwt.core.secret import SigningKey

_EC_CURVES: dict[TokenAlgorithm, type[ec.EllipticCurve]] = {
    TokenAlgorithm.ES256: ec.SECP256R1,
    TokenAlgorithm.ES384: ec.SECP384R1,
    TokenAlgorithm.ES512: ec.SECP521R1,
}

RSA_KEY_SIZE = 2048


def generate_key_pair(algorithm: TokenAlgorithm | str = TokenAlgorithm.RS256) -> tuple[str, str]:
    """Generate a key pair suited to an asymmetric algorithm.

    RS* algorithms get an RSA 2048-bit key, ES* algorithms an EC key on the
    curve the algorithm mandates.

    Returns:
        Tuple of (private_key_pem, public_key_pem) as strings.

    Raises:
        ValueError: If ``algorithm`` is an HMAC algorithm.
    """
    algorithm = TokenAlgorithm.parse(algorithm)
    if algorithm.is_rsa:
        private_key = rsa.generate_private_key(
            public_exponent=65537,
            key_size=RSA_KEY_SIZE,
        )
    elif algorithm.is_ec:
        private_key = ec.generate_private_key(_EC_CURVES[algorithm]())
    else:
        raise ValueError(f"{algorithm} is not an asymmetric algorithm")

    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    ).decode("utf-8")

    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode("utf-8")

    return private_pem, public_pem


def load_key_pair(
    algorithm: TokenAlgorithm | str,
    private_key: str | bytes,
    public_key: str | bytes | None = None,
) -> SigningKey:
    """Load PEM-encoded keys into a SigningKey for an asymmetric algorithm.

    Args:
        algorithm: An RS* or ES* algorithm.
        private_key: PEM-encoded private key (unencrypted).
        public_key: PEM-encoded public key. Derived from the private key
            when omitted.

    Returns:
        SigningKey holding the loaded private and public key objects.

    Raises:
        ValueError: If the PEM cannot be parsed or the key type does not
            match the algorithm.
    """
    algorithm = TokenAlgorithm.parse(algorithm)
    if algorithm.is_hmac:
        raise ValueError(f"{algorithm} is an HMAC algorithm; use a secret instead")

    private = serialization.load_pem_private_key(_as_bytes(private_key), password=None)
    public = (
        serialization.load_pem_public_key(_as_bytes(public_key))
        if public_key is not None
        else private.public_key()
    )

    for key in (private, public):
        _check_key_type(algorithm, key)

    return SigningKey(signing=private, verifying=public)


def _check_key_type(algorithm: TokenAlgorithm, key) -> None:
    if algorithm.is_rsa:
        if not isinstance(key, (rsa.RSAPrivateKey, rsa.RSAPublicKey)):
            raise ValueError(f"{algorithm} requires an RSA key")
        return

    if not isinstance(key, (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey)):
        raise ValueError(f"{algorithm} requires an EC key")
    expected = _EC_CURVES[algorithm]
    if not isinstance(key.curve, expected):
        raise ValueError(f"{algorithm} requires the {expected.name} curve, got {key.curve.name}")


def _as_bytes(value: str | bytes) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value
