"""Compact JWS serialization for ES256 tokens (RFC 7515 section 3.1)."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, NamedTuple

from es256_jwk import base64url
from es256_jwk.errors import DecodeError, MalformedJwt
from es256_jwk.signing import sign, verify

logger = logging.getLogger(__name__)


class JwtSegments(NamedTuple):
    """The three still-encoded parts of a compact JWT."""

    encoded_header: str
    encoded_payload: str
    encoded_signature: str

    @property
    def signing_input(self) -> str:
        return f"{self.encoded_header}.{self.encoded_payload}"


def signing_input(header: Mapping[str, Any], payload: Mapping[str, Any]) -> str:
    return f"{base64url.encode_json(dict(header))}.{base64url.encode_json(dict(payload))}"


def assemble(
    header: Mapping[str, Any],
    payload: Mapping[str, Any],
    sign_scalar: bytes,
    *,
    deterministic: bool = False,
) -> str:
    """Encode, sign and join *header* and *payload* into a compact JWT."""
    data = signing_input(header, payload)
    signature = sign(data, sign_scalar, deterministic=deterministic)
    return f"{data}.{base64url.encode(signature)}"


def parse(token: str) -> JwtSegments:
    """Split *token*; raises ``MalformedJwt`` unless it has three non-empty segments."""
    parts = token.split(".")
    if len(parts) != 3:
        raise MalformedJwt(f"Expected 3 segments, got {len(parts)}.")
    if not all(parts):
        raise MalformedJwt("JWT segments must be non-empty.")
    return JwtSegments(*parts)


def verify_jwt(token: str, public_point: bytes) -> bool:
    """Verify the ES256 signature of *token*. Claims are not inspected."""
    segments = parse(token)
    try:
        signature = base64url.decode(segments.encoded_signature)
    except DecodeError:
        logger.debug("Signature segment is not valid base64url.")
        return False
    return verify(segments.signing_input, signature, public_point)


def decode_unverified(token: str) -> tuple[dict[str, Any], dict[str, Any]]:
    """Return the decoded header and payload without checking the signature.

    Intended for handing claims to a separate validator after ``verify_jwt``.
    """
    segments = parse(token)
    header = base64url.decode_json(segments.encoded_header)
    payload = base64url.decode_json(segments.encoded_payload)
    if not isinstance(header, dict) or not isinstance(payload, dict):
        raise DecodeError("JWT header and payload must be JSON objects.")
    return header, payload
