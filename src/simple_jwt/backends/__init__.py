from simple_jwt.backends.base import SigningBackend
from simple_jwt.backends.pyjwt import AsymmetricBackend, HMACBackend, PyJWTBackend, backend_for

__all__ = ["AsymmetricBackend", "HMACBackend", "PyJWTBackend", "SigningBackend", "backend_for"]
