"""Configuration via pydantic-settings. Loaded at runtime, never at import time."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class SignerSettings(BaseSettings):
    """Env vars for building an ``Es256Signer``."""

    # P-256 private key as JWK JSON text: {"kty":"EC","crv":"P-256","x":..,"y":..,"d":..}
    es256_signing_jwk: str = ""

    # Overrides the JWK's own kid; empty keeps it
    es256_signing_kid: str = ""

    # RFC 6979 nonces (needs OpenSSL >= 3.2 under cryptography)
    es256_deterministic: bool = False

    # Default "typ" header for issued tokens
    es256_token_type: str = "JWT"

    model_config = {"env_file": ".env", "extra": "ignore"}
