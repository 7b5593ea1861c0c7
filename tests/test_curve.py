"""Tests for the P-256 curve backend."""

from __future__ import annotations

import pytest

from es256_jwk.curve import GENERATOR, N, P256Backend, Point, check_scalar, int_to_bytes
from es256_jwk.errors import IntegrityError, InvalidKeyLength, InvalidPoint, InvalidScalar


@pytest.fixture
def backend() -> P256Backend:
    return P256Backend()


def test_scalar_one_is_generator(backend: P256Backend):
    assert backend.scalar_multiply(1) == GENERATOR


def test_point_add_matches_scalar_multiply(backend: P256Backend):
    doubled = backend.point_add(GENERATOR, GENERATOR)
    assert doubled == backend.scalar_multiply(2)
    tripled = backend.point_add(doubled, GENERATOR)
    assert tripled == backend.scalar_multiply(3)
    assert backend.is_on_curve(tripled)


def test_point_add_identity_and_inverse(backend: P256Backend):
    assert backend.point_add(None, GENERATOR) == GENERATOR
    assert backend.point_add(GENERATOR, None) == GENERATOR
    negated = backend.scalar_multiply(N - 1)
    assert negated.x == GENERATOR.x
    assert backend.point_add(GENERATOR, negated) is None


def test_is_on_curve(backend: P256Backend):
    assert backend.is_on_curve(GENERATOR)
    assert not backend.is_on_curve(Point(GENERATOR.x, GENERATOR.y + 1))


def test_compress_parity_prefix(backend: P256Backend, uncompressed: bytes, compressed: bytes):
    point = backend.decompress(uncompressed)
    assert backend.compress(point) == compressed
    assert compressed[0] == (0x03 if point.y & 1 else 0x02)
    assert backend.decompress(compressed) == point


def test_compress_rejects_off_curve_point(backend: P256Backend):
    with pytest.raises(InvalidPoint):
        backend.compress(Point(GENERATOR.x, GENERATOR.y + 1))


@pytest.mark.parametrize("length", [0, 32, 64, 66])
def test_decompress_rejects_bad_lengths(backend: P256Backend, length: int):
    with pytest.raises(InvalidKeyLength):
        backend.decompress(b"\x04" * length)


def test_decompress_rejects_mismatched_prefix(backend: P256Backend, uncompressed: bytes, compressed: bytes):
    with pytest.raises(InvalidPoint):
        backend.decompress(b"\x02" + uncompressed[1:])
    with pytest.raises(InvalidPoint):
        backend.decompress(b"\x04" + compressed[1:])


def test_int_to_bytes_left_pads():
    assert int_to_bytes(1) == b"\x00" * 31 + b"\x01"
    assert len(int_to_bytes(0)) == 32


def test_int_to_bytes_oversized_is_integrity_error():
    with pytest.raises(IntegrityError):
        int_to_bytes(1 << 256)


def test_check_scalar_bounds():
    assert check_scalar(int_to_bytes(1)) == 1
    assert check_scalar(int_to_bytes(N - 1)) == N - 1
    with pytest.raises(InvalidScalar):
        check_scalar(b"\x00" * 32)
    with pytest.raises(InvalidScalar):
        check_scalar(int_to_bytes(N))
    with pytest.raises(InvalidKeyLength):
        check_scalar(b"\x01" * 31)
