"""AccessToken repository."""

from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from introspection.models import AccessToken


class AccessTokenRepository:
    """Read access to the token store."""

    def __init__(self, db: AsyncSession):
        """Constructor."""
        self.db = db

    async def get_by_token(self, token: str) -> AccessToken | None:
        """Get access token by its opaque value."""
        stmt = select(AccessToken).where(AccessToken.token == token)
        res = await self.db.execute(stmt)
        return res.scalar_one_or_none()

    async def get_active_by_token(self, token: str, now: datetime) -> AccessToken | None:
        """Get access token by value, hiding revoked and expired ones."""
        access_token = await self.get_by_token(token)
        if access_token is None or access_token.is_expired(now):
            return None
        return access_token
