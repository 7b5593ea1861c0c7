"""EC P-256 key bytes <-> JSON Web Key conversion (RFC 7518 section 6.2)."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from es256_jwk import base64url
from es256_jwk.curve import (
    COORD_BYTES,
    CurveBackend,
    Point,
    bytes_to_int,
    check_scalar,
    default_backend,
    int_to_bytes,
)
from es256_jwk.errors import InvalidKeyLength, InvalidPoint, MissingField, UnsupportedKey

KTY = "EC"
CRV = "P-256"


class EcPublicJwk(BaseModel):
    """Public EC key as a JWK. Unknown members (``use``, ``alg``...) are dropped."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    kty: Literal["EC"] = KTY
    crv: Literal["P-256"] = CRV
    x: str
    y: str
    kid: str | None = None

    def to_dict(self) -> dict[str, str]:
        return self.model_dump(exclude_none=True)


class EcPrivateJwk(EcPublicJwk):
    """Private EC key as a JWK: the public members plus ``d``."""

    d: str


JwkLike = EcPublicJwk | Mapping[str, Any]


def _member(jwk: JwkLike, name: str) -> Any:
    if isinstance(jwk, BaseModel):
        value = getattr(jwk, name, None)
    else:
        value = jwk.get(name)
    if value is None:
        raise MissingField(f'JWK is missing the "{name}" member.')
    return value


def _check_type(jwk: JwkLike) -> None:
    kty = _member(jwk, "kty")
    crv = _member(jwk, "crv")
    if kty != KTY or crv != CRV:
        raise UnsupportedKey(f"Expected kty={KTY} crv={CRV}, got kty={kty} crv={crv}.")


def key_id(jwk: JwkLike) -> str | None:
    """The JWK's ``kid``, or ``None``."""
    if isinstance(jwk, BaseModel):
        return getattr(jwk, "kid", None)
    return jwk.get("kid")


def _decode_fixed(jwk: JwkLike, name: str) -> bytes:
    raw = base64url.decode(_member(jwk, name))
    if len(raw) != COORD_BYTES:
        raise InvalidKeyLength(
            f'"{name}" must decode to {COORD_BYTES} bytes, got {len(raw)}.'
        )
    return raw


def _coordinates(point: Point) -> tuple[str, str]:
    return base64url.encode(int_to_bytes(point.x)), base64url.encode(int_to_bytes(point.y))


def scalar_to_jwk(
    scalar: bytes,
    kid: str | None = None,
    backend: CurveBackend = default_backend,
) -> EcPrivateJwk:
    """Build a private JWK from a raw 32-byte scalar, deriving ``x``/``y``."""
    point = backend.scalar_multiply(check_scalar(scalar))
    x, y = _coordinates(point)
    return EcPrivateJwk(x=x, y=y, d=base64url.encode(scalar), kid=kid)


def jwk_to_scalar(jwk: JwkLike, backend: CurveBackend = default_backend) -> bytes:
    """Extract the raw 32-byte private scalar from a private JWK.

    ``kty``/``crv`` must be EC/P-256 and the scalar must be in ``[1, n-1]``.
    When the JWK also carries ``x`` and ``y`` they must match the public key
    derived from ``d``.
    """
    _check_type(jwk)
    scalar = _decode_fixed(jwk, "d")
    value = check_scalar(scalar)

    if isinstance(jwk, BaseModel):
        embedded = (getattr(jwk, "x", None), getattr(jwk, "y", None))
    else:
        embedded = (jwk.get("x"), jwk.get("y"))
    if embedded != (None, None):
        point = Point(bytes_to_int(_decode_fixed(jwk, "x")), bytes_to_int(_decode_fixed(jwk, "y")))
        if point != backend.scalar_multiply(value):
            raise InvalidPoint("JWK x/y do not match the public key derived from d.")
    return scalar


def point_to_jwk(
    point_bytes: bytes,
    kid: str | None = None,
    backend: CurveBackend = default_backend,
) -> EcPublicJwk:
    """Build a public JWK from a 33-byte compressed or 65-byte uncompressed point."""
    point = backend.decompress(point_bytes)
    x, y = _coordinates(point)
    return EcPublicJwk(x=x, y=y, kid=kid)


def jwk_to_point(
    jwk: JwkLike,
    compressed: bool = False,
    backend: CurveBackend = default_backend,
) -> bytes:
    """SEC 1 point bytes for a public (or private) JWK."""
    _check_type(jwk)
    x = _decode_fixed(jwk, "x")
    y = _decode_fixed(jwk, "y")
    point = Point(bytes_to_int(x), bytes_to_int(y))
    if not backend.is_on_curve(point):
        raise InvalidPoint("JWK coordinates are not a point on P-256.")
    if compressed:
        return backend.compress(point)
    return point.to_bytes()


def public_jwk(jwk: JwkLike) -> EcPublicJwk:
    """Public half of *jwk*; ``d`` and unknown members are dropped."""
    _check_type(jwk)
    return EcPublicJwk(x=_member(jwk, "x"), y=_member(jwk, "y"), kid=key_id(jwk))


def jwk_thumbprint(jwk: JwkLike) -> str:
    """RFC 7638 SHA-256 thumbprint, base64url-encoded."""
    _check_type(jwk)
    canonical = json.dumps(
        {"crv": CRV, "kty": KTY, "x": _member(jwk, "x"), "y": _member(jwk, "y")},
        separators=(",", ":"),
        sort_keys=True,
    )
    return base64url.encode(hashlib.sha256(canonical.encode("utf-8")).digest())
