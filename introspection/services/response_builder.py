"""Introspection response mapping."""

from core.consts import REALM_NAME_SEPARATOR, OAuth2TokenType, OidcScope
from core.models import Client as AuthClient
from core.security.utils import epoch_millis
from introspection.config import IssuerConfig
from introspection.schemas.introspection import IntrospectionResponse, ResolvedToken


def build_introspection_response(
    token: ResolvedToken, client: AuthClient, issuer: IssuerConfig
) -> IntrospectionResponse:
    """Map an active token and the calling client onto the response body.

    `exp` carries the token's time-to-live as stored and `scope` is always
    `openid`; neither is derived from the token's grant.
    """
    subject = token.principal_subject
    return IntrospectionResponse(
        active=True,
        client_id=client.client_id,
        sub=subject,
        unique_security_name=subject,
        exp=token.time_to_live,
        iat=epoch_millis(token.issued_at),
        realm_name=REALM_NAME_SEPARATOR.join(token.authentication_methods),
        token_type=OAuth2TokenType.BEARER,
        grant_type=(token.grant_type or "").lower(),
        scope=OidcScope.OPENID,
        aud=client.service_id,
        iss=issuer.issuer,
    )
