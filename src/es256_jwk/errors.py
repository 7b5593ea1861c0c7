"""Error kinds raised by the ES256/JWK core.

Every error is a local, synchronous failure caused by malformed input.
Signature mismatch is never an error: ``verify`` returns ``False`` instead.
"""

from __future__ import annotations


class JwkError(ValueError):
    """Base class for all es256_jwk failures."""


class DecodeError(JwkError):
    """Raised when base64url text or a JSON segment cannot be decoded."""


class InvalidKeyLength(JwkError):
    """Raised when key material has the wrong number of bytes."""


class InvalidScalar(JwkError):
    """Raised when a private scalar is zero or not below the curve order."""


class InvalidPoint(JwkError):
    """Raised when public key bytes do not decode to a point on P-256."""


class MissingField(JwkError):
    """Raised when a JWK lacks a required member."""


class UnsupportedKey(JwkError):
    """Raised for a JWK whose ``kty``/``crv`` is not EC/P-256."""


class MalformedJwt(JwkError):
    """Raised when a token is not three non-empty dot-separated segments."""


class IntegrityError(JwkError):
    """Raised when an internal invariant is violated (e.g. oversized coordinate)."""
