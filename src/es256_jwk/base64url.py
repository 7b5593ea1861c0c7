"""Unpadded base64url codec used for every JWT segment and JWK member."""

from __future__ import annotations

import base64
import binascii
import json
import re
from typing import Any

from es256_jwk.errors import DecodeError

_ALPHABET = re.compile(r"[A-Za-z0-9_-]*")


def encode(data: bytes) -> str:
    """Encode *data* with the URL-safe alphabet and no ``=`` padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def decode(text: str) -> bytes:
    """Decode unpadded base64url *text*.

    Raises ``DecodeError`` for characters outside the URL-safe alphabet
    (padding included), for the impossible length ``len % 4 == 1`` and for
    non-canonical text whose unused trailing bits are set.
    """
    if not isinstance(text, str):
        raise DecodeError(f"Expected str, got {type(text).__name__}.")
    if not _ALPHABET.fullmatch(text):
        raise DecodeError("Input contains characters outside the base64url alphabet.")
    if len(text) % 4 == 1:
        raise DecodeError(f"Invalid base64url length {len(text)}.")
    padded = text + "=" * (-len(text) % 4)
    try:
        raw = base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Invalid base64url: {e}") from e
    # unused trailing bits must be zero so each byte string has one encoding
    if encode(raw) != text:
        raise DecodeError("Non-canonical base64url: trailing bits are not zero.")
    return raw


def encode_json(obj: Any) -> str:
    """Serialize *obj* as compact UTF-8 JSON, then base64url-encode it."""
    text = json.dumps(obj, separators=(",", ":"), ensure_ascii=False)
    return encode(text.encode("utf-8"))


def decode_json(text: str) -> Any:
    """Reverse of ``encode_json``."""
    raw = decode(text)
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Segment is not UTF-8 JSON: {e}") from e
