"""Dependencies: DB session, issuer configuration and the introspection service."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.db.session import DatabaseSessionManager, make_session_dependency
from core.security.client_auth import ClientAuthenticator
from introspection.config import IssuerConfig, settings
from introspection.services.introspect_service import IntrospectionService
from introspection.services.token_resolver import TokenResolver

db_manager = DatabaseSessionManager(search_path=settings.DB_SCHEMA)
get_db_session = make_session_dependency(db_manager)


def get_issuer_config() -> IssuerConfig:
    """Issuer reported in introspection responses."""
    return settings.issuer_config


def get_introspection_service(
    db: AsyncSession = Depends(get_db_session),
    issuer: IssuerConfig = Depends(get_issuer_config),
) -> IntrospectionService:
    """Per-request introspection service bound to one session."""
    return IntrospectionService(
        authenticator=ClientAuthenticator(db),
        resolver=TokenResolver(db),
        issuer=issuer,
        strict_client_auth=settings.STRICT_CLIENT_AUTH,
    )
