from unittest.mock import AsyncMock

import pytest
from support import fake_client

from core.crypto.crypto import DUMMY_SECRET_HASH, _parse_pbkdf2, verify_secret_pbkdf2
from core.security import client_auth
from core.security.client_auth import (
    ClientAuthenticator,
    ClientAuthError,
    ClientAuthFailure,
)


@pytest.fixture
def stub_client_repo(monkeypatch):
    def _apply(resolver):
        class StubRepository:
            def __init__(self, session):
                self.session = session
                self.calls = []

            async def get_by_client_id(self, client_id: str):
                self.calls.append(client_id)
                return resolver(client_id)

        monkeypatch.setattr(client_auth, "ClientRepository", StubRepository)

    return _apply


@pytest.mark.asyncio
async def test_authenticate_success(stub_client_repo, svc1_client):
    stub_client_repo(lambda cid: svc1_client if cid == "svc1" else None)

    result = await ClientAuthenticator(AsyncMock()).authenticate("svc1", "s3cr3t")

    assert result is svc1_client


@pytest.mark.asyncio
async def test_authenticate_looks_up_client_once(stub_client_repo, svc1_client):
    stub_client_repo(lambda cid: svc1_client)
    authenticator = ClientAuthenticator(AsyncMock())

    await authenticator.authenticate("svc1", "s3cr3t")

    assert authenticator.repo.calls == ["svc1"]


@pytest.mark.asyncio
async def test_authenticate_unknown_client(stub_client_repo):
    stub_client_repo(lambda cid: None)

    with pytest.raises(ClientAuthError) as exc_info:
        await ClientAuthenticator(AsyncMock()).authenticate("nobody", "s3cr3t")

    assert exc_info.value.reason is ClientAuthFailure.UNKNOWN_CLIENT
    assert exc_info.value.client_id == "nobody"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "attrs",
    [
        {"enabled": False},
        {"client_auth_method": "private_key_jwt"},
        {"client_auth_method": None},
        {"client_secret": None},
        {"client_secret": ""},
    ],
)
async def test_authenticate_invalid_client(stub_client_repo, attrs):
    client = fake_client(**attrs)
    stub_client_repo(lambda cid: client)

    with pytest.raises(ClientAuthError) as exc_info:
        await ClientAuthenticator(AsyncMock()).authenticate("svc1", "s3cr3t")

    assert exc_info.value.reason is ClientAuthFailure.INVALID_CLIENT


@pytest.mark.asyncio
async def test_authenticate_method_match_is_case_insensitive(stub_client_repo):
    client = fake_client(client_auth_method="CLIENT_SECRET_BASIC")
    stub_client_repo(lambda cid: client)

    result = await ClientAuthenticator(AsyncMock()).authenticate("svc1", "s3cr3t")

    assert result is client


@pytest.mark.asyncio
async def test_authenticate_bad_secret(stub_client_repo, svc1_client):
    stub_client_repo(lambda cid: svc1_client)

    with pytest.raises(ClientAuthError) as exc_info:
        await ClientAuthenticator(AsyncMock()).authenticate("svc1", "wrong")

    assert exc_info.value.reason is ClientAuthFailure.BAD_SECRET


@pytest.mark.asyncio
async def test_authenticate_uses_secret_verifier(monkeypatch, stub_client_repo):
    client = fake_client(client_secret="stored-hash")
    stub_client_repo(lambda cid: client)
    seen = []

    def verifier(secret, stored):
        seen.append((secret, stored))
        return True

    monkeypatch.setattr(client_auth, "verify_secret_pbkdf2", verifier)

    await ClientAuthenticator(AsyncMock()).authenticate("svc1", "provided")

    assert seen == [("provided", "stored-hash")]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "found, secret, expected_stored",
    [
        (None, "s3cr3t", DUMMY_SECRET_HASH),
        (fake_client(enabled=False), "s3cr3t", DUMMY_SECRET_HASH),
        (fake_client(client_secret=None), "s3cr3t", DUMMY_SECRET_HASH),
        (fake_client(client_secret="stored-hash"), "wrong", "stored-hash"),
        (fake_client(client_secret="stored-hash"), "s3cr3t", "stored-hash"),
    ],
)
async def test_authenticate_runs_one_verification_per_attempt(
    monkeypatch, stub_client_repo, found, secret, expected_stored
):
    stub_client_repo(lambda cid: found)
    seen = []

    def verifier(provided, stored):
        seen.append((provided, stored))
        return provided == "s3cr3t" and stored != DUMMY_SECRET_HASH

    monkeypatch.setattr(client_auth, "verify_secret_pbkdf2", verifier)

    try:
        await ClientAuthenticator(AsyncMock()).authenticate("svc1", secret)
    except ClientAuthError:
        pass

    assert seen == [(secret, expected_stored)]


def test_dummy_hash_uses_directory_parameters():
    algo, iterations, salt, digest = _parse_pbkdf2(DUMMY_SECRET_HASH)

    assert (algo, iterations, len(salt), len(digest)) == ("sha256", 100000, 16, 32)
    assert verify_secret_pbkdf2("s3cr3t", DUMMY_SECRET_HASH) is False
