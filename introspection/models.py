"""Models for the token store."""

from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import Boolean, Integer, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP
from sqlalchemy.orm import Mapped, mapped_column

from core.models import Base
from core.security.utils import as_utc


class AccessToken(Base):
    """AccessToken model."""

    __tablename__ = "access_token"
    __table_args__ = (UniqueConstraint("token", name="uq_access_token_token"),)
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    token: Mapped[str] = mapped_column(Text, nullable=False)
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    client_id: Mapped[str] = mapped_column(Text, nullable=False)
    issued_at: Mapped[datetime] = mapped_column(TIMESTAMP(timezone=True), nullable=False)
    # seconds, from the expiration policy in force at issuance
    time_to_live: Mapped[int] = mapped_column(Integer, nullable=False)
    revoked: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    authentication_attributes: Mapped[dict[str, Any] | None] = mapped_column(
        JSONB, nullable=True
    )

    @property
    def expires_at(self) -> datetime:
        """Instant at which the token stops being valid."""
        return as_utc(self.issued_at) + timedelta(seconds=self.time_to_live)

    def is_expired(self, now: datetime) -> bool:
        """Apply the expiration policy at `now`."""
        return self.revoked or self.time_to_live <= 0 or self.expires_at <= now
