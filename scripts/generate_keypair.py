#!/usr/bin/env python3
"""Generate a P-256 keypair as JWKs for ES256 signing.

Outputs:
  1. Private JWK JSON (for the ES256_SIGNING_JWK env var)
  2. Public JWK JSON (for publishing to verifiers)
  3. PyJWT verification round-trip test
"""

import json
import time

from cryptography.hazmat.primitives.asymmetric import ec

from es256_jwk import Es256Signer, jwk_thumbprint, scalar_to_jwk
from es256_jwk.curve import int_to_bytes


def main() -> None:
    # Generate keypair
    private_key = ec.generate_private_key(ec.SECP256R1())
    scalar = int_to_bytes(private_key.private_numbers().private_value)

    private_jwk = scalar_to_jwk(scalar)
    private_jwk = private_jwk.model_copy(update={"kid": jwk_thumbprint(private_jwk)})
    signer = Es256Signer(private_jwk)

    print("=" * 60)
    print("ES256_SIGNING_JWK (private JWK):")
    print("=" * 60)
    print(json.dumps(private_jwk.to_dict()))
    print()
    print("=" * 60)
    print("Public JWK (for verifiers):")
    print("=" * 60)
    print(json.dumps(signer.public_jwk.to_dict()))

    # Verification round-trip against an independent implementation
    import jwt

    token = signer.sign_jwt({"sub": "test", "exp": int(time.time()) + 300})
    pub = jwt.algorithms.ECAlgorithm.from_jwk(json.dumps(signer.public_jwk.to_dict()))
    decoded = jwt.decode(token, pub, algorithms=["ES256"])
    assert decoded["sub"] == "test"
    print("Round-trip verification: PASSED")


if __name__ == "__main__":
    main()
