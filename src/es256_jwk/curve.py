"""P-256 curve backend.

The codec and signing layers only talk to the curve through the
``CurveBackend`` protocol so that a different implementation can be
injected. ``P256Backend`` delegates point decoding, validation and
base-point multiplication to ``cryptography``; only ``point_add`` is done
with plain affine arithmetic because ``cryptography`` does not expose it.
"""

from __future__ import annotations

from typing import NamedTuple, Protocol

from cryptography.hazmat.primitives.asymmetric import ec

from es256_jwk.errors import IntegrityError, InvalidKeyLength, InvalidPoint, InvalidScalar

# secp256r1 domain parameters (SEC 2, section 2.4.2)
P = 0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFF
N = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551
A = P - 3
B = 0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B
G_X = 0x6B17D1F2E12C4247F8BCE6E563A440F277037D812DEB33A0F4A13945D898C296
G_Y = 0x4FE342E2FE1A7F9B8EE7EB4A7C0F9E162BCE33576B315ECECBB6406837BF51F5

COORD_BYTES = 32
COMPRESSED_LEN = 1 + COORD_BYTES
UNCOMPRESSED_LEN = 1 + 2 * COORD_BYTES


class Point(NamedTuple):
    """Affine point on P-256."""

    x: int
    y: int

    def to_bytes(self, compressed: bool = False) -> bytes:
        """SEC 1 encoding: ``04||x||y`` or ``02/03||x``."""
        if compressed:
            return bytes([0x02 | (self.y & 1)]) + int_to_bytes(self.x)
        return b"\x04" + int_to_bytes(self.x) + int_to_bytes(self.y)


GENERATOR = Point(G_X, G_Y)


def int_to_bytes(value: int, length: int = COORD_BYTES) -> bytes:
    """Fixed-width big-endian encoding, left-padded with zeros."""
    try:
        return value.to_bytes(length, "big")
    except OverflowError as e:
        raise IntegrityError(f"Value does not fit in {length} bytes.") from e


def bytes_to_int(data: bytes) -> int:
    return int.from_bytes(data, "big")


def check_scalar(scalar: bytes) -> int:
    """Return *scalar* as an int, enforcing 32 bytes and ``1 <= d < n``."""
    if len(scalar) != COORD_BYTES:
        raise InvalidKeyLength(
            f"Private scalar must be {COORD_BYTES} bytes, got {len(scalar)}."
        )
    value = bytes_to_int(scalar)
    if not 1 <= value < N:
        raise InvalidScalar("Private scalar must be in [1, n-1].")
    return value


class CurveBackend(Protocol):
    """Capabilities the codec and signing layers need from a curve library."""

    def scalar_multiply(self, scalar: int) -> Point: ...

    def point_add(self, p: Point | None, q: Point | None) -> Point | None: ...

    def is_on_curve(self, point: Point) -> bool: ...

    def compress(self, point: Point) -> bytes: ...

    def decompress(self, data: bytes) -> Point: ...

    def public_key(self, point: Point) -> ec.EllipticCurvePublicKey: ...

    def private_key(self, scalar: bytes) -> ec.EllipticCurvePrivateKey: ...


class P256Backend:
    """``CurveBackend`` for secp256r1 built on ``cryptography``."""

    curve = ec.SECP256R1()

    def scalar_multiply(self, scalar: int) -> Point:
        """Multiply the base point by *scalar*."""
        if not 1 <= scalar < N:
            raise InvalidScalar("Private scalar must be in [1, n-1].")
        key = ec.derive_private_key(scalar, self.curve)
        numbers = key.public_key().public_numbers()
        return Point(numbers.x, numbers.y)

    def point_add(self, p: Point | None, q: Point | None) -> Point | None:
        """Add two affine points; ``None`` is the point at infinity."""
        if p is None:
            return q
        if q is None:
            return p
        if p.x == q.x:
            if (p.y + q.y) % P == 0:
                return None
            lam = (3 * p.x * p.x + A) * pow(2 * p.y, -1, P) % P
        else:
            lam = (q.y - p.y) * pow(q.x - p.x, -1, P) % P
        x = (lam * lam - p.x - q.x) % P
        y = (lam * (p.x - x) - p.y) % P
        return Point(x, y)

    def is_on_curve(self, point: Point) -> bool:
        try:
            ec.EllipticCurvePublicNumbers(point.x, point.y, self.curve).public_key()
        except ValueError:
            return False
        return True

    def compress(self, point: Point) -> bytes:
        if not self.is_on_curve(point):
            raise InvalidPoint("Point is not on P-256.")
        return point.to_bytes(compressed=True)

    def decompress(self, data: bytes) -> Point:
        """Decode a 33-byte compressed or 65-byte uncompressed SEC 1 point."""
        if len(data) not in (COMPRESSED_LEN, UNCOMPRESSED_LEN):
            raise InvalidKeyLength(
                f"Public key must be {COMPRESSED_LEN} or {UNCOMPRESSED_LEN} bytes, got {len(data)}."
            )
        expected_prefix = (0x02, 0x03) if len(data) == COMPRESSED_LEN else (0x04,)
        if data[0] not in expected_prefix:
            raise InvalidPoint(f"Unexpected point prefix 0x{data[0]:02x}.")
        try:
            key = ec.EllipticCurvePublicKey.from_encoded_point(self.curve, bytes(data))
        except ValueError as e:
            raise InvalidPoint(f"Bytes do not decode to a P-256 point: {e}") from e
        numbers = key.public_numbers()
        return Point(numbers.x, numbers.y)

    def public_key(self, point: Point) -> ec.EllipticCurvePublicKey:
        """``cryptography`` key object for an affine point."""
        try:
            return ec.EllipticCurvePublicNumbers(point.x, point.y, self.curve).public_key()
        except ValueError as e:
            raise InvalidPoint(f"Point is not on P-256: {e}") from e

    def private_key(self, scalar: bytes) -> ec.EllipticCurvePrivateKey:
        """``cryptography`` key object for a validated 32-byte scalar."""
        return ec.derive_private_key(check_scalar(scalar), self.curve)


default_backend = P256Backend()
