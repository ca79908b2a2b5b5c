"""Client authentication against the registered-service directory."""

from enum import Enum

from sqlalchemy.ext.asyncio import AsyncSession

from core.consts import CLIENT_AUTH_METHODS
from core.crypto.crypto import DUMMY_SECRET_HASH, verify_secret_pbkdf2
from core.models import Client as AuthClient
from core.repositories.client_repository import ClientRepository


class ClientAuthFailure(str, Enum):
    """Why a client could not be authenticated. Never sent to callers."""

    UNKNOWN_CLIENT = "unknown_client"
    INVALID_CLIENT = "invalid_client"
    BAD_SECRET = "bad_secret"


class ClientAuthError(Exception):
    """Raised when client authentication fails."""

    def __init__(self, reason: ClientAuthFailure, client_id: str) -> None:
        """Constructor."""
        super().__init__(f"{reason.value}: {client_id}")
        self.reason = reason
        self.client_id = client_id


def _check_client_valid(client: AuthClient) -> bool:
    """Return True when the client is enabled and set up for secret auth."""
    allowed = (client.client_auth_method or "").lower()
    return bool(client.enabled and allowed in CLIENT_AUTH_METHODS and client.client_secret)


class ClientAuthenticator:
    """Resolve a client by id and verify its shared secret."""

    def __init__(self, db: AsyncSession) -> None:
        """Constructor."""
        self.repo = ClientRepository(db)

    async def authenticate(self, client_id: str, client_secret: str) -> AuthClient:
        """Return the registered client or raise `ClientAuthError`.

        Every path runs exactly one PBKDF2 verification so response time does
        not reveal whether `client_id` is registered.
        """
        client = await self.repo.get_by_client_id(client_id)
        if client is None:
            reason = ClientAuthFailure.UNKNOWN_CLIENT
        elif not _check_client_valid(client):
            reason = ClientAuthFailure.INVALID_CLIENT
        elif verify_secret_pbkdf2(client_secret, client.client_secret or ""):
            return client
        else:
            raise ClientAuthError(ClientAuthFailure.BAD_SECRET, client_id)

        verify_secret_pbkdf2(client_secret, DUMMY_SECRET_HASH)
        raise ClientAuthError(reason, client_id)
