"""Access token lookup for introspection."""

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from core.consts import AuthenticationAttribute
from core.security.utils import utcnow
from introspection.models import AccessToken
from introspection.repositories.access_token_repository import AccessTokenRepository
from introspection.schemas.introspection import ResolvedToken


def _coerce_methods(value: Any) -> tuple[str, ...]:
    """Return authentication methods as an ordered tuple of strings."""
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(str(item) for item in value if item is not None)
    return (str(value),)


def to_resolved_token(row: AccessToken) -> ResolvedToken:
    """Project a token store row onto the introspection view."""
    attrs = row.authentication_attributes or {}
    grant = attrs.get(AuthenticationAttribute.GRANT_TYPE)
    return ResolvedToken(
        token_value=row.token,
        principal_subject=row.subject,
        issued_at=row.issued_at,
        time_to_live=row.time_to_live,
        authentication_methods=_coerce_methods(
            attrs.get(AuthenticationAttribute.AUTHENTICATION_METHOD)
        ),
        grant_type=None if grant is None else str(grant),
        owning_client_id=row.client_id,
    )


class TokenResolver:
    """Resolve opaque token values to unexpired tokens."""

    def __init__(self, db: AsyncSession) -> None:
        """Constructor."""
        self.repo = AccessTokenRepository(db)

    async def resolve(self, token_value: str) -> ResolvedToken | None:
        """Return the token, or None when unknown, revoked or expired."""
        row = await self.repo.get_active_by_token(token_value, utcnow())
        if row is None:
            return None
        return to_resolved_token(row)
