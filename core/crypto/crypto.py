"""PBKDF2 verification of client secrets stored by the service directory."""

import base64
import hashlib
import hmac
from typing import Tuple


def _b64url_decode_padded(data: str) -> bytes:
    return base64.urlsafe_b64decode(data + "===")


def _parse_pbkdf2(encoded: str) -> Tuple[str, int, bytes, bytes]:
    # Format: pbkdf2:<algo>:<iterations>$<salt_b64url>$<hash_b64url>
    try:
        prefix, rest = encoded.split(":", 1)
        if prefix != "pbkdf2":
            raise ValueError
        algo, rest2 = rest.split(":", 1)
        iter_s, salt_b64, hash_b64 = rest2.split("$")
        iterations = int(iter_s)
        salt = _b64url_decode_padded(salt_b64)
        dk = _b64url_decode_padded(hash_b64)
        return algo, iterations, salt, dk
    except Exception as ex:
        raise ValueError("invalid pbkdf2 format") from ex


def verify_secret_pbkdf2(secret: str, encoded: str) -> bool:
    """Verify a secret against a `pbkdf2:<algo>:<iter>$<salt>$<hash>` string.

    Malformed stored values never match. The digest comparison is constant-time.
    """
    try:
        algo, iterations, salt, expected = _parse_pbkdf2(encoded)
    except ValueError:
        return False
    try:
        actual = hashlib.pbkdf2_hmac(
            algo, secret.encode("utf-8"), salt, iterations, len(expected)
        )
    except ValueError:
        # unsupported digest name
        return False
    return hmac.compare_digest(actual, expected)


# Same parameters as the directory's hashes; never matches any secret.
DUMMY_SECRET_HASH = (
    "pbkdf2:sha256:100000$"
    "AAAAAAAAAAAAAAAAAAAAAA$"
    "AAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAAA"
)
