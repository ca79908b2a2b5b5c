"""Token introspection service."""

from dataclasses import dataclass
from enum import Enum
from typing import Union

from fastapi import status
from fastapi.responses import ORJSONResponse, Response

from core.security.client_auth import ClientAuthenticator, ClientAuthError
from core.security.credentials import extract_basic_credentials
from core.utils.logging import get_logger
from introspection.config import IssuerConfig
from introspection.schemas.introspection import (
    INACTIVE_RESPONSE,
    IntrospectionResponse,
)
from introspection.services.response_builder import build_introspection_response
from introspection.services.token_resolver import TokenResolver

logger = get_logger(__name__)


class InactiveReason(str, Enum):
    """Why a token was reported inactive. Only ever logged."""

    MALFORMED_CREDENTIALS = "malformed_credentials"
    UNAUTHORIZED_CLIENT = "unauthorized_client"
    MISSING_TOKEN_PARAMETER = "missing_token_parameter"
    TOKEN_NOT_FOUND_OR_EXPIRED = "token_not_found_or_expired"


@dataclass(frozen=True)
class Active:
    """Token is valid; carries the full response body."""

    response: IntrospectionResponse


@dataclass(frozen=True)
class Inactive:
    """Token is reported as `{"active": false}`."""

    reason: InactiveReason


@dataclass(frozen=True)
class ClientError:
    """Caller did not present usable client credentials (strict mode only)."""

    reason: InactiveReason


@dataclass(frozen=True)
class Faulted:
    """Unexpected failure while talking to a collaborator."""

    error: Exception


IntrospectionResult = Union[Active, Inactive, ClientError, Faulted]


class IntrospectionService:
    """Authenticate the caller, resolve the token and shape the answer."""

    def __init__(
        self,
        authenticator: ClientAuthenticator,
        resolver: TokenResolver,
        issuer: IssuerConfig,
        strict_client_auth: bool = False,
    ) -> None:
        """Constructor."""
        self.authenticator = authenticator
        self.resolver = resolver
        self.issuer = issuer
        self.strict_client_auth = strict_client_auth

    async def introspect(
        self, authorization: str | None, token: str | None
    ) -> IntrospectionResult:
        """Introspect `token` on behalf of the client in `authorization`."""
        try:
            return await self._introspect(authorization, token)
        except Exception as ex:
            logger.exception("introspection.fault", error_type=type(ex).__name__)
            return Faulted(ex)

    async def _introspect(
        self, authorization: str | None, token: str | None
    ) -> IntrospectionResult:
        credentials = extract_basic_credentials(authorization)
        if credentials is None:
            reason = InactiveReason.MALFORMED_CREDENTIALS
            logger.info("introspection.inactive", reason=reason.value)
            if self.strict_client_auth:
                return ClientError(reason)
            return Inactive(reason)

        try:
            client = await self.authenticator.authenticate(
                credentials.username, credentials.password
            )
        except ClientAuthError as ex:
            logger.info(
                "introspection.inactive",
                reason=InactiveReason.UNAUTHORIZED_CLIENT.value,
                auth_failure=ex.reason.value,
                client_id=ex.client_id,
            )
            return Inactive(InactiveReason.UNAUTHORIZED_CLIENT)

        if token is None or not token.strip():
            logger.info(
                "introspection.inactive",
                reason=InactiveReason.MISSING_TOKEN_PARAMETER.value,
                client_id=client.client_id,
            )
            return Inactive(InactiveReason.MISSING_TOKEN_PARAMETER)

        resolved = await self.resolver.resolve(token)
        if resolved is None:
            logger.info(
                "introspection.inactive",
                reason=InactiveReason.TOKEN_NOT_FOUND_OR_EXPIRED.value,
                client_id=client.client_id,
            )
            return Inactive(InactiveReason.TOKEN_NOT_FOUND_OR_EXPIRED)

        response = build_introspection_response(resolved, client, self.issuer)
        logger.info(
            "introspection.active",
            client_id=client.client_id,
            sub=response.sub,
        )
        return Active(response)


def render_result(result: IntrospectionResult) -> Response:
    """Map an introspection result onto the HTTP response."""
    if isinstance(result, Active):
        return ORJSONResponse(
            result.response.to_payload(), status_code=status.HTTP_200_OK
        )
    if isinstance(result, Inactive):
        return ORJSONResponse(
            INACTIVE_RESPONSE.to_payload(), status_code=status.HTTP_200_OK
        )
    if isinstance(result, ClientError):
        return Response(
            status_code=status.HTTP_401_UNAUTHORIZED,
            headers={"WWW-Authenticate": "Basic"},
        )
    return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
