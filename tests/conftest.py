"""Shared fixtures: the sample P-256 key and a token produced for it by another library."""

from __future__ import annotations

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

SAMPLE_D = "hUQznqxINndxBHI8hMHvQmgSjYOCSqLUwMtzWCrh4ow"
SAMPLE_X = "ifSgGMkEIEDPsxFxdOjeJxhYsz0STsTT5bni_MXNEJs"
SAMPLE_Y = "viFDEvB61K6zuj2iq23j0FCmVYYQ8tGJ_3f35XXUDZ0"

SAMPLE_HEADER = {"alg": "ES256", "typ": "JWT"}
SAMPLE_PAYLOAD = {
    "iss": "https://gemini.google.com",
    "sub": "user-12345",
    "name": "Gemini AI",
}

# Issued externally for the sample key; carries iat/exp claims in the past.
REFERENCE_JWT = (
    "eyJhbGciOiJFUzI1NiIsInR5cCI6IkpXVCJ9."
    "eyJpc3MiOiJodHRwczovL2dlbWluaS5nb29nbGUuY29tIiwic3ViIjoidXNlci0xMjM0NSIsIm5hbWUiOiJHZW1p"
    "bmkgQUkiLCJpYXQiOjE3NDkxMDg4NzMsImV4cCI6MTc0OTExMjQ3M30."
    "iwkvrEVOagtJIuK43wfsZc-NsVOSxGStpaGXOG6OWSsQXExLXWauD2go2srRe9aXKF1flDPpfky9oftL-EEVHw"
)


@pytest.fixture
def sample_private_jwk() -> dict:
    return {
        "kty": "EC",
        "d": SAMPLE_D,
        "use": "sig",
        "crv": "P-256",
        "x": SAMPLE_X,
        "y": SAMPLE_Y,
        "alg": "ES256",
    }


@pytest.fixture
def sample_public_jwk() -> dict:
    return {"kty": "EC", "crv": "P-256", "x": SAMPLE_X, "y": SAMPLE_Y, "alg": "ES256"}


@pytest.fixture
def key() -> ec.EllipticCurvePrivateKey:
    """A fresh P-256 key from cryptography, independent of es256_jwk."""
    return ec.generate_private_key(ec.SECP256R1())


@pytest.fixture
def scalar(key: ec.EllipticCurvePrivateKey) -> bytes:
    return key.private_numbers().private_value.to_bytes(32, "big")


@pytest.fixture
def uncompressed(key: ec.EllipticCurvePrivateKey) -> bytes:
    return key.public_key().public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.UncompressedPoint,
    )


@pytest.fixture
def compressed(key: ec.EllipticCurvePrivateKey) -> bytes:
    return key.public_key().public_bytes(
        serialization.Encoding.X962,
        serialization.PublicFormat.CompressedPoint,
    )
