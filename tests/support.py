"""Shared test helpers."""

import base64
import hashlib
from types import SimpleNamespace
from typing import cast

from core.consts import ClientAuthMethod
from core.models import Client as AuthClient


def b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def make_pbkdf2_hash(
    secret: str, salt: bytes = b"0123456789abcdef", iterations: int = 1000
) -> str:
    dk = hashlib.pbkdf2_hmac("sha256", secret.encode("utf-8"), salt, iterations, 32)
    return f"pbkdf2:sha256:{iterations}${b64url(salt)}${b64url(dk)}"


def basic_header(username: str, password: str) -> str:
    raw = f"{username}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def fake_client(**attrs) -> AuthClient:
    """Build a lightweight client-compatible object for type checking."""
    values = {
        "client_id": "svc1",
        "client_secret": make_pbkdf2_hash("s3cr3t"),
        "client_auth_method": ClientAuthMethod.CLIENT_SECRET_BASIC,
        "service_id": "https://svc1.example.org/app",
        "enabled": True,
    }
    values.update(attrs)
    return cast(AuthClient, SimpleNamespace(**values))
