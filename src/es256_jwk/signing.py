"""ES256 signing and verification with compact ``r||s`` signatures."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from es256_jwk.curve import COORD_BYTES, N, CurveBackend, bytes_to_int, default_backend, int_to_bytes
from es256_jwk.jwk import (
    EcPublicJwk,
    JwkLike,
    jwk_to_point,
    jwk_to_scalar,
    key_id,
    public_jwk,
    scalar_to_jwk,
)

if TYPE_CHECKING:
    from es256_jwk.config import SignerSettings

logger = logging.getLogger(__name__)

ALGORITHM = "ES256"
SIGNATURE_BYTES = 2 * COORD_BYTES


def _ecdsa(deterministic: bool) -> ec.ECDSA:
    if deterministic:
        return ec.ECDSA(hashes.SHA256(), deterministic_signing=True)
    return ec.ECDSA(hashes.SHA256())


def sign(
    signing_input: str,
    private_scalar: bytes,
    *,
    deterministic: bool = False,
    backend: CurveBackend = default_backend,
) -> bytes:
    """Sign ``SHA256(UTF8(signing_input))`` and return the 64-byte ``r||s``.

    Raises ``InvalidKeyLength``/``InvalidScalar`` for a bad private scalar.
    With *deterministic* the nonce is derived per RFC 6979.
    """
    key = backend.private_key(private_scalar)
    der = key.sign(signing_input.encode("utf-8"), _ecdsa(deterministic))
    r, s = decode_dss_signature(der)
    return int_to_bytes(r) + int_to_bytes(s)


def verify(
    signing_input: str,
    signature: bytes,
    public_point: bytes,
    backend: CurveBackend = default_backend,
) -> bool:
    """Check a compact ES256 signature.

    Returns ``False`` for any signature that does not verify, including
    structurally invalid ones. Raises ``InvalidPoint``/``InvalidKeyLength``
    when *public_point* is not a usable P-256 key.
    """
    key = backend.public_key(backend.decompress(public_point))

    if len(signature) != SIGNATURE_BYTES:
        logger.debug("Rejecting signature of %d bytes.", len(signature))
        return False
    r = bytes_to_int(signature[:COORD_BYTES])
    s = bytes_to_int(signature[COORD_BYTES:])
    if not (1 <= r < N and 1 <= s < N):
        logger.debug("Rejecting signature with r or s out of range.")
        return False

    try:
        key.verify(encode_dss_signature(r, s), signing_input.encode("utf-8"), _ecdsa(False))
    except InvalidSignature:
        logger.debug("Signature does not match signing input.")
        return False
    return True


class Es256Signer:
    """Signs compact JWTs with a P-256 private key held as a JWK."""

    def __init__(
        self,
        private_jwk: JwkLike,
        deterministic: bool = False,
        token_type: str = "JWT",
    ) -> None:
        """Validate *private_jwk* and keep its raw scalar.

        The public half is derived from ``d``, so a JWK without ``x``/``y`` works.
        """
        self._scalar = jwk_to_scalar(private_jwk)
        self._public_jwk = public_jwk(scalar_to_jwk(self._scalar, kid=key_id(private_jwk)))
        self._deterministic = deterministic
        self._token_type = token_type

    @classmethod
    def from_settings(cls, settings: SignerSettings) -> Es256Signer:
        """Build a signer from ``SignerSettings``; raises ``ValueError`` if unset."""
        if not settings.es256_signing_jwk:
            raise ValueError("ES256_SIGNING_JWK is required.")
        jwk = json.loads(settings.es256_signing_jwk)
        if not isinstance(jwk, dict):
            raise ValueError("ES256_SIGNING_JWK must be a JSON object.")
        if settings.es256_signing_kid:
            jwk = {**jwk, "kid": settings.es256_signing_kid}
        signer = cls(
            jwk,
            deterministic=settings.es256_deterministic,
            token_type=settings.es256_token_type,
        )
        logger.debug("ES256 signer initialized (kid=%s).", signer.public_jwk.kid)
        return signer

    @property
    def public_jwk(self) -> EcPublicJwk:
        """Public JWK matching the signing key (for publishing to verifiers)."""
        return self._public_jwk

    @property
    def public_point(self) -> bytes:
        return jwk_to_point(self._public_jwk)

    def sign_jwt(
        self,
        payload: Mapping[str, Any],
        header: Mapping[str, Any] | None = None,
    ) -> str:
        """Sign *payload* as a compact JWT.

        The default header is ``{"alg": "ES256", "typ": <token_type>}`` plus
        ``kid`` when the key has one. An explicit *header* is used as given
        except that ``alg`` is always forced to ES256.
        """
        from es256_jwk.compact import assemble

        if header is None:
            header = {"alg": ALGORITHM, "typ": self._token_type}
            if self._public_jwk.kid:
                header["kid"] = self._public_jwk.kid
        else:
            header = {**header, "alg": ALGORITHM}
        return assemble(header, payload, self._scalar, deterministic=self._deterministic)


def verify_jwt_with_jwk(token: str, jwk: JwkLike) -> bool:
    """Verify a compact ES256 token against a public JWK."""
    from es256_jwk.compact import verify_jwt

    return verify_jwt(token, jwk_to_point(jwk))
