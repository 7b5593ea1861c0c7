"""ES256 JWT signing and P-256 JWK conversion."""

from es256_jwk.compact import JwtSegments, assemble, decode_unverified, parse, verify_jwt
from es256_jwk.errors import (
    DecodeError,
    IntegrityError,
    InvalidKeyLength,
    InvalidPoint,
    InvalidScalar,
    JwkError,
    MalformedJwt,
    MissingField,
    UnsupportedKey,
)
from es256_jwk.jwk import (
    EcPrivateJwk,
    EcPublicJwk,
    jwk_thumbprint,
    jwk_to_point,
    jwk_to_scalar,
    key_id,
    point_to_jwk,
    public_jwk,
    scalar_to_jwk,
)
from es256_jwk.signing import Es256Signer, sign, verify, verify_jwt_with_jwk

__all__ = [
    "DecodeError",
    "EcPrivateJwk",
    "EcPublicJwk",
    "Es256Signer",
    "IntegrityError",
    "InvalidKeyLength",
    "InvalidPoint",
    "InvalidScalar",
    "JwkError",
    "JwtSegments",
    "MalformedJwt",
    "MissingField",
    "UnsupportedKey",
    "assemble",
    "decode_unverified",
    "jwk_thumbprint",
    "jwk_to_point",
    "jwk_to_scalar",
    "key_id",
    "parse",
    "point_to_jwk",
    "public_jwk",
    "scalar_to_jwk",
    "sign",
    "verify",
    "verify_jwt",
    "verify_jwt_with_jwk",
]
